"""Candidate providers that discover images over HTTP."""

from __future__ import annotations

import asyncio
import logging
import posixpath
from typing import Any, Sequence
from urllib.parse import quote, unquote

import httpx
from bs4 import BeautifulSoup

from catalog_images.config.settings import Settings
from catalog_images.providers.base import (
    CandidateProvider,
    CandidateSourceError,
    FallbackCandidateProvider,
)
from catalog_images.providers.http import url_exists
from catalog_images.resolver.candidates import CandidateSet
from catalog_images.resolver.normalize import DEFAULT_IMAGE_FOLDER, is_image_file

logger = logging.getLogger(__name__)

COMMON_BRANDS: tuple[str, ...] = (
    "Dior", "Chanel", "Gucci", "Prada", "Versace", "Armani", "YSL", "Tom Ford",
    "Burberry", "Givenchy", "Hermès", "Dolce", "Lancôme", "Estée Lauder",
    "Calvin Klein", "Hugo Boss", "Lacoste", "Bvlgari", "Cartier", "Montblanc",
    "Carolina Herrera", "Jean Paul Gaultier", "Thierry Mugler", "Kenzo",
    "Valentino", "Diesel", "Davidoff", "Polo", "Azzaro", "Paco Rabanne",
    "Issey Miyake", "Salvatore Ferragamo", "Nina Ricci", "Rochas", "Lolita Lempicka",
    "Narciso Rodriguez", "Marc Jacobs", "Michael Kors", "Coach", "Tiffany",
    "Kajal", "Sospiro", "Dove", "Lattafa", "Armaf", "Rasasi", "Swiss Arabian",
)

PROBE_EXTENSIONS: tuple[str, ...] = ("webp", "png", "jpg")


async def _get(client: httpx.AsyncClient, source: str, url: str) -> httpx.Response:
    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.TimeoutException as exc:
        raise CandidateSourceError(source, f"timed out fetching {url}") from exc
    except httpx.HTTPStatusError as exc:
        raise CandidateSourceError(
            source,
            f"{url} returned status {exc.response.status_code}",
            status_code=exc.response.status_code,
        ) from exc
    except httpx.HTTPError as exc:
        raise CandidateSourceError(source, f"request to {url} failed: {exc}") from exc
    return response


class BrandsApiCandidateProvider(CandidateProvider):
    """Collect logo filenames referenced by the brands API."""

    name = "brands-api"

    def __init__(
        self,
        client: httpx.AsyncClient,
        url: str,
        *,
        fields: Sequence[str] = ("logo_url", "image_url"),
        folder: str = DEFAULT_IMAGE_FOLDER,
    ) -> None:
        self._client = client
        self._url = url
        self._fields = tuple(fields)
        self._prefix = f"{folder.strip('/')}/" if folder.strip("/") else ""

    async def load(self) -> CandidateSet:
        if not self._url:
            raise CandidateSourceError(self.name, "no URL configured")
        response = await _get(self._client, self.name, self._url)
        try:
            payload = response.json()
        except ValueError as exc:
            raise CandidateSourceError(self.name, "response is not valid JSON") from exc

        items = self._extract_items(payload)
        filenames = [value for value in (self._reference(item) for item in items) if value]
        return CandidateSet(filenames, source=self.name)

    def _extract_items(self, payload: Any) -> list[Any]:
        if isinstance(payload, list):
            return payload
        if isinstance(payload, dict):
            if payload.get("success") is False:
                raise CandidateSourceError(self.name, "API reported failure")
            data = payload.get("data")
            if isinstance(data, list):
                return data
        raise CandidateSourceError(self.name, "payload lacked a data list")

    def _reference(self, item: Any) -> str | None:
        if not isinstance(item, dict):
            return None
        for field in self._fields:
            value = item.get(field)
            if isinstance(value, str) and value.strip():
                reference = value.strip()
                if self._prefix and reference.startswith(self._prefix):
                    reference = reference[len(self._prefix):]
                return reference
        return None


class DirectoryIndexCandidateProvider(CandidateProvider):
    """Parse an auto-generated HTML directory index for image links."""

    name = "directory-index"

    def __init__(self, client: httpx.AsyncClient, url: str) -> None:
        self._client = client
        self._url = url

    async def load(self) -> CandidateSet:
        if not self._url:
            raise CandidateSourceError(self.name, "no URL configured")
        response = await _get(self._client, self.name, self._url)
        content_type = response.headers.get("content-type", "")
        if "text/html" not in content_type:
            raise CandidateSourceError(
                self.name,
                f"expected HTML listing, got {content_type or 'no content type'}",
            )

        soup = BeautifulSoup(response.text, "html.parser")
        filenames: list[str] = []
        for link in soup.find_all("a", href=True):
            href = link["href"].split("?", 1)[0].split("#", 1)[0]
            if not href or href == "../" or href.endswith("/"):
                continue
            filename = posixpath.basename(unquote(href))
            if is_image_file(filename):
                filenames.append(filename)
        return CandidateSet(filenames, source=self.name)


class ProbingCandidateProvider(CandidateProvider):
    """Find images by issuing HEAD requests for ``name.ext`` combinations.

    Probes run concurrently in fixed-size batches. A failed probe is treated
    as a missing file and is not retried.
    """

    name = "probe"

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        *,
        names: Sequence[str] = COMMON_BRANDS,
        extensions: Sequence[str] = PROBE_EXTENSIONS,
        batch_size: int = 10,
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._names = tuple(names)
        self._extensions = tuple(ext.lstrip(".") for ext in extensions)
        self._batch_size = max(1, batch_size)

    def filenames_to_check(self) -> list[str]:
        return [f"{name}.{ext}" for name in self._names for ext in self._extensions]

    async def load(self) -> CandidateSet:
        to_check = self.filenames_to_check()
        found: list[str] = []
        for start in range(0, len(to_check), self._batch_size):
            batch = to_check[start:start + self._batch_size]
            results = await asyncio.gather(
                *(url_exists(self._client, f"{self._base_url}/{quote(filename)}") for filename in batch)
            )
            for filename, exists in zip(batch, results):
                if exists:
                    logger.debug("Probe found %s", filename)
                    found.append(filename)
        logger.info("Probed %d file name(s), found %d", len(to_check), len(found))
        return CandidateSet(found, source=self.name)


def has_remote_sources(settings: Settings) -> bool:
    return bool(settings.brands_api_url or settings.photos_index_url or settings.photos_base_url)


def build_remote_provider(client: httpx.AsyncClient, settings: Settings) -> FallbackCandidateProvider:
    """Chain the configured remote sources: brands API, directory index, probing.

    Sources whose URL setting is empty are left out.
    """

    providers: list[CandidateProvider] = []
    if settings.brands_api_url:
        providers.append(
            BrandsApiCandidateProvider(client, settings.brands_api_url, folder=settings.image_folder)
        )
    if settings.photos_index_url:
        providers.append(DirectoryIndexCandidateProvider(client, settings.photos_index_url))
    if settings.photos_base_url:
        providers.append(
            ProbingCandidateProvider(
                client,
                settings.photos_base_url,
                batch_size=settings.probe_batch_size,
            )
        )
    return FallbackCandidateProvider(providers)
