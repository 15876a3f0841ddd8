"""Sources of candidate image filenames."""

from .base import (
    CandidateProvider,
    CandidateSourceError,
    FallbackCandidateProvider,
    load_candidates,
)
from .directory import DirectoryCandidateProvider
from .http import build_http_client, url_exists
from .remote import (
    BrandsApiCandidateProvider,
    DirectoryIndexCandidateProvider,
    ProbingCandidateProvider,
    build_remote_provider,
    has_remote_sources,
)

__all__ = [
    "BrandsApiCandidateProvider",
    "CandidateProvider",
    "CandidateSourceError",
    "DirectoryCandidateProvider",
    "DirectoryIndexCandidateProvider",
    "FallbackCandidateProvider",
    "ProbingCandidateProvider",
    "build_http_client",
    "build_remote_provider",
    "has_remote_sources",
    "load_candidates",
    "url_exists",
]
