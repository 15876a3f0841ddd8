"""Assign image paths to catalog entries in bulk."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping

from catalog_images.resolver.resolver import ImageResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """A perfume as stored in the catalog."""

    reference: str
    name: str
    brand: str | None = None


@dataclass(frozen=True, slots=True)
class ImageAssignment:
    """Image chosen for a catalog entry and where the choice came from."""

    reference: str
    name: str
    image_path: str
    found: bool
    source: str


class CatalogImageMapper:
    """Pick an image per entry: manual overrides by reference, then the resolver."""

    def __init__(self, resolver: ImageResolver, overrides: Mapping[str, str] | None = None) -> None:
        self._resolver = resolver
        self._overrides = dict(overrides or {})

    def assign(self, entry: CatalogEntry) -> ImageAssignment:
        override = self._overrides.get(entry.reference)
        if override:
            return ImageAssignment(entry.reference, entry.name, override, True, "override")

        resolved = self._resolver.resolve(entry.name, entry.brand)
        source = "resolver" if resolved.found else "placeholder"
        return ImageAssignment(entry.reference, entry.name, resolved.path, resolved.found, source)

    def assign_all(self, entries: Iterable[CatalogEntry]) -> list[ImageAssignment]:
        assignments = [self.assign(entry) for entry in entries]
        for assignment in assignments:
            if not assignment.found:
                logger.warning("No image found for %s - %s", assignment.reference, assignment.name)
        matched = sum(1 for assignment in assignments if assignment.found)
        logger.info("Image assignment complete: %d/%d entries matched", matched, len(assignments))
        return assignments
