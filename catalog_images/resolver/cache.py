"""Caller-owned memo of resolved images."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from catalog_images.resolver.resolver import ResolvedImage

CacheKey = tuple[str, "str | None"]


class ResolutionCache:
    """In-memory map of ``(display_name, brand_name)`` to a resolved image."""

    def __init__(self) -> None:
        self._items: dict[CacheKey, ResolvedImage] = {}

    @staticmethod
    def _key(display_name: str, brand_name: str | None) -> CacheKey:
        return (display_name, brand_name or None)

    def lookup(self, display_name: str, brand_name: str | None = None) -> ResolvedImage | None:
        """Return the cached result or ``None`` when the pair was never stored."""

        return self._items.get(self._key(display_name, brand_name))

    def insert(self, display_name: str, brand_name: str | None, image: ResolvedImage) -> None:
        self._items[self._key(display_name, brand_name)] = image

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items
