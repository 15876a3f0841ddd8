"""Image name resolution and URL normalisation."""

from .cache import ResolutionCache
from .candidates import CandidateSet
from .resolver import CatalogItem, ImageResolver, ResolvedImage, resolve_image
from .search import suggest_candidates
from .urls import normalize_url

__all__ = [
    "CandidateSet",
    "CatalogItem",
    "ImageResolver",
    "ResolutionCache",
    "ResolvedImage",
    "normalize_url",
    "resolve_image",
    "suggest_candidates",
]
