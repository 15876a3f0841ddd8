"""Catalog-level image services built on the resolver."""

from .logos import LogoDetector, logo_filename_variants
from .mapping import CatalogEntry, CatalogImageMapper, ImageAssignment

__all__ = [
    "CatalogEntry",
    "CatalogImageMapper",
    "ImageAssignment",
    "LogoDetector",
    "logo_filename_variants",
]
