"""Candidate source check helpers."""

from .checks import (
    SourceCheckResult,
    check_brands_api,
    check_photos_directory,
    check_photos_index,
    run_all_checks,
)

__all__ = [
    "SourceCheckResult",
    "check_brands_api",
    "check_photos_directory",
    "check_photos_index",
    "run_all_checks",
]
