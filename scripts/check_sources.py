"""Run connectivity checks against the candidate image sources."""

from __future__ import annotations

import asyncio
from typing import Iterable

from catalog_images.integrations import SourceCheckResult, run_all_checks
from catalog_images.monitoring.logging import configure_logging


def _format_result(result: SourceCheckResult) -> str:
    status = "✅" if result.success else "❌"
    return f"{status} {result.name}: {result.message}"


def print_results(results: Iterable[SourceCheckResult]) -> None:
    for result in results:
        print(_format_result(result))


def main() -> None:
    configure_logging()
    results = asyncio.run(run_all_checks())
    print_results(results)


if __name__ == "__main__":
    main()
