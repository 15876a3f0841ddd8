"""Brand logo detection by probing the photos folder."""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Iterable, Mapping, Sequence
from urllib.parse import quote

import httpx

from catalog_images.providers.http import url_exists
from catalog_images.resolver.cache import ResolutionCache
from catalog_images.resolver.normalize import (
    DEFAULT_IMAGE_FOLDER,
    DEFAULT_PLACEHOLDER,
    strip_diacritics,
)
from catalog_images.resolver.resolver import ResolvedImage
from catalog_images.resolver.urls import normalize_url

logger = logging.getLogger(__name__)

LOGO_EXTENSIONS: tuple[str, ...] = (".png", ".jpg", ".jpeg", ".svg", ".webp", ".avif")

_WHITESPACE = re.compile(r"\s+")


def logo_filename_variants(brand_name: str, extensions: Sequence[str] = LOGO_EXTENSIONS) -> list[str]:
    """Return the logo filenames worth probing for ``brand_name``, most likely first."""

    name = (brand_name or "").strip()
    if not name:
        return []

    bases = [
        name,
        name.lower(),
        _WHITESPACE.sub("_", name),
        _WHITESPACE.sub("-", name),
        _WHITESPACE.sub("", name),
    ]
    variants = [f"{base}{ext}" for base in bases for ext in extensions]
    for ext in extensions:
        variants.extend((f"{name}_logo{ext}", f"{name}-logo{ext}", f"{name} logo{ext}"))

    folded = strip_diacritics(name)
    if folded != name:
        for ext in extensions:
            variants.extend((f"{folded}{ext}", f"{folded.lower()}{ext}"))
        variants.extend(f"{_WHITESPACE.sub('_', folded)}{ext}" for ext in extensions)

    return list(dict.fromkeys(variants))


class LogoDetector:
    """Locate a brand logo: the stored URL first, then common filename variants."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        *,
        folder: str = DEFAULT_IMAGE_FOLDER,
        placeholder: str = DEFAULT_PLACEHOLDER,
        extensions: Sequence[str] = LOGO_EXTENSIONS,
        cache: ResolutionCache | None = None,
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._folder = folder.strip("/")
        self._placeholder = placeholder
        self._extensions = tuple(extensions)
        self._cache = cache

    def _probe_url(self, reference: str) -> str:
        normalized = normalize_url(reference, placeholder=self._placeholder, image_folder=self._folder)
        if normalized.startswith(("https://", "data:")):
            return normalized
        path = normalized.lstrip("/")
        prefix = f"{self._folder}/"
        if self._folder and path.startswith(prefix):
            path = path[len(prefix):]
        return f"{self._base_url}/{path}"

    def _relative_path(self, filename: str) -> str:
        return f"{self._folder}/{filename}" if self._folder else filename

    async def detect(self, brand_name: str, database_logo_url: str | None = None) -> ResolvedImage:
        """Return the logo for ``brand_name`` or the placeholder."""

        if self._cache is not None:
            cached = self._cache.lookup(brand_name)
            if cached is not None:
                return cached

        result = await self._detect(brand_name, database_logo_url)
        if self._cache is not None:
            self._cache.insert(brand_name, None, result)
        return result

    async def _detect(self, brand_name: str, database_logo_url: str | None) -> ResolvedImage:
        if database_logo_url:
            probe = self._probe_url(database_logo_url)
            if probe.startswith("data:") or await url_exists(self._client, probe):
                return ResolvedImage(path=database_logo_url, found=True)

        for filename in logo_filename_variants(brand_name, self._extensions):
            if await url_exists(self._client, f"{self._base_url}/{quote(filename)}"):
                logger.info("Found logo for %r: %s", brand_name, filename)
                return ResolvedImage(path=self._relative_path(filename), found=True)

        logger.info("No logo found for %r", brand_name)
        return ResolvedImage(path=self._placeholder, found=False)

    async def detect_many(self, brands: Iterable[Mapping[str, object]]) -> dict[str, str]:
        """Detect logos for brand records (``name`` and optional ``logo_url``) concurrently."""

        records = [brand for brand in brands if isinstance(brand.get("name"), str) and brand["name"]]
        results = await asyncio.gather(
            *(self.detect(str(brand["name"]), _optional_str(brand.get("logo_url"))) for brand in records)
        )
        logos = {
            str(brand["name"]): result.path
            for brand, result in zip(records, results)
            if result.found
        }
        logger.info("Loaded %d brand logo(s) from %d brand(s)", len(logos), len(records))
        return logos


def _optional_str(value: object) -> str | None:
    return value if isinstance(value, str) and value else None
