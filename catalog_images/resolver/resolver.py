"""Match catalog names against the available image files."""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass
from typing import Callable, Iterable

from catalog_images.resolver.cache import ResolutionCache
from catalog_images.resolver.candidates import CandidateEntry, CandidateSet
from catalog_images.resolver.normalize import (
    DEFAULT_PLACEHOLDER,
    first_token,
    normalize_name,
    strip_diacritics,
    strip_stopwords,
)

logger = logging.getLogger(__name__)

KeyFunc = Callable[[CandidateEntry], str]


@dataclass(frozen=True, slots=True)
class CatalogItem:
    """Minimal identity used to look up a product or brand image."""

    display_name: str
    brand_name: str | None = None


@dataclass(frozen=True, slots=True)
class ResolvedImage:
    """Result of a lookup; ``found`` is ``False`` for the placeholder."""

    path: str
    found: bool


def _by_name(entry: CandidateEntry) -> str:
    return entry.name


def _by_folded(entry: CandidateEntry) -> str:
    return entry.folded


class ImageResolver:
    """Resolve display names to image paths using ordered matching tiers.

    Each tier scans the candidates in their enumeration order. The first tier
    producing at least one match wins; within a tier the first candidate wins
    unless a brand was supplied and several candidates matched, in which case
    the first one carrying a brand token is preferred.
    """

    def __init__(
        self,
        candidates: CandidateSet | Iterable[str] | None,
        *,
        placeholder: str = DEFAULT_PLACEHOLDER,
        base_path: str = "",
        cache: ResolutionCache | None = None,
    ) -> None:
        if candidates is None:
            candidates = CandidateSet.empty()
        elif not isinstance(candidates, CandidateSet):
            candidates = CandidateSet(candidates)
        self._candidates = candidates
        self._placeholder = placeholder
        self._base_path = base_path.rstrip("/")
        self._cache = cache

    @property
    def candidates(self) -> CandidateSet:
        return self._candidates

    @property
    def placeholder(self) -> str:
        return self._placeholder

    def resolve(self, display_name: str, brand_name: str | None = None) -> ResolvedImage:
        """Return the best matching image for ``display_name`` or the placeholder."""

        if self._cache is not None:
            cached = self._cache.lookup(display_name, brand_name)
            if cached is not None:
                return cached

        entry = self._find(display_name, brand_name)
        if entry is None:
            logger.debug("No image for %r (brand=%r)", display_name, brand_name)
            result = ResolvedImage(path=self._placeholder, found=False)
        else:
            result = ResolvedImage(path=self._path_for(entry.filename), found=True)

        if self._cache is not None:
            self._cache.insert(display_name, brand_name, result)
        return result

    def resolve_item(self, item: CatalogItem) -> ResolvedImage:
        return self.resolve(item.display_name, item.brand_name)

    def _path_for(self, filename: str) -> str:
        if not self._base_path:
            return filename
        return posixpath.join(self._base_path, filename)

    def _find(self, display_name: str, brand_name: str | None) -> CandidateEntry | None:
        entry = self._match(
            normalize_name(display_name),
            _brand_tokens(normalize_name(brand_name)),
            _by_name,
        )
        if entry is not None:
            return entry

        # Accent-insensitive retry: "Lancôme" vs "Lancome.png".
        return self._match(
            normalize_name(strip_diacritics(display_name)),
            _brand_tokens(normalize_name(strip_diacritics(brand_name))),
            _by_folded,
        )

    def _match(self, name: str, brand_tokens: frozenset[str], key: KeyFunc) -> CandidateEntry | None:
        if not name:
            return None

        core = strip_stopwords(name)
        token = first_token(name)
        tiers: tuple[tuple[str, Callable[[str], bool]], ...] = (
            ("exact", lambda value: value == name),
            ("stopwords", lambda value: bool(core) and strip_stopwords(value) == core),
            ("containment", lambda value: bool(value) and (name in value or value in name)),
            ("first-token", lambda value: len(token) > 3 and token in value),
        )
        for tier, predicate in tiers:
            matches = [entry for entry in self._candidates.entries if predicate(key(entry))]
            if matches:
                logger.debug("Tier %s matched %d candidate(s) for %r", tier, len(matches), name)
                return _disambiguate(matches, brand_tokens, key)
        return None


def _brand_tokens(brand: str) -> frozenset[str]:
    return frozenset(strip_stopwords(brand).split())


def _disambiguate(
    matches: list[CandidateEntry],
    brand_tokens: frozenset[str],
    key: KeyFunc,
) -> CandidateEntry:
    if len(matches) > 1 and brand_tokens:
        for entry in matches:
            if any(token in key(entry) for token in brand_tokens):
                return entry
    return matches[0]


def resolve_image(
    display_name: str,
    candidates: CandidateSet | Iterable[str] | None,
    brand_name: str | None = None,
    *,
    placeholder: str = DEFAULT_PLACEHOLDER,
    base_path: str = "",
) -> ResolvedImage:
    """Functional shortcut for a one-off :class:`ImageResolver` lookup."""

    resolver = ImageResolver(candidates, placeholder=placeholder, base_path=base_path)
    return resolver.resolve(display_name, brand_name)
