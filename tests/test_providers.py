"""Tests for candidate set providers."""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from catalog_images.config.settings import Settings
from catalog_images.providers import (
    BrandsApiCandidateProvider,
    CandidateProvider,
    CandidateSourceError,
    DirectoryCandidateProvider,
    DirectoryIndexCandidateProvider,
    FallbackCandidateProvider,
    ProbingCandidateProvider,
    build_remote_provider,
    has_remote_sources,
    load_candidates,
)
from catalog_images.resolver import CandidateSet

API_URL = "https://shop.test/api/v2/brands?limit=1000"
INDEX_URL = "https://shop.test/photos/"
PHOTOS_URL = "https://shop.test/photos"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class StaticProvider(CandidateProvider):
    def __init__(self, filenames: list[str], name: str = "static") -> None:
        self.name = name
        self._filenames = filenames
        self.calls = 0

    async def load(self) -> CandidateSet:
        self.calls += 1
        return CandidateSet(self._filenames, source=self.name)


class BrokenProvider(CandidateProvider):
    name = "broken"

    async def load(self) -> CandidateSet:
        raise CandidateSourceError(self.name, "unavailable")


def test_candidate_set_filters_and_deduplicates() -> None:
    candidates = CandidateSet(["b.png", "a.AVIF", "notes.txt", "b.png", "", "c.gif"], source="test")

    assert candidates.filenames == ("b.png", "a.AVIF", "c.gif")
    assert len(candidates) == 3
    assert "a.AVIF" in candidates
    assert list(candidates) == ["b.png", "a.AVIF", "c.gif"]
    assert candidates.source == "test"


@pytest.mark.asyncio
async def test_directory_provider_lists_images_in_name_order(tmp_path: Path) -> None:
    for name in ("gucci black.avif", "Black tom ford.avif", "notes.txt"):
        (tmp_path / name).write_bytes(b"")
    (tmp_path / "Fragrances").mkdir()

    candidates = await DirectoryCandidateProvider(tmp_path).load()

    assert candidates.filenames == ("Black tom ford.avif", "gucci black.avif")


@pytest.mark.asyncio
async def test_missing_directory_is_a_source_error(tmp_path: Path) -> None:
    provider = DirectoryCandidateProvider(tmp_path / "missing")

    with pytest.raises(CandidateSourceError):
        await provider.load()

    candidates = await load_candidates(provider)
    assert len(candidates) == 0


@pytest.mark.asyncio
async def test_brands_api_provider_reads_logo_urls() -> None:
    payload = {
        "success": True,
        "data": [
            {"name": "Dior", "logo_url": "photos/dior.png"},
            {"name": "Zara", "logo_url": None},
            {"name": "Kajal", "image_url": "Kajal.avif"},
            {"name": "Readme", "logo_url": "photos/readme.txt"},
            "not-a-brand",
        ],
    }

    def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == API_URL
        return httpx.Response(200, json=payload)

    async with _client(handler) as client:
        candidates = await BrandsApiCandidateProvider(client, API_URL).load()

    assert candidates.filenames == ("dior.png", "Kajal.avif")
    assert candidates.source == "brands-api"


@pytest.mark.asyncio
async def test_brands_api_provider_accepts_bare_list() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{"logo_url": "photos/LATTAFA.svg"}])

    async with _client(handler) as client:
        candidates = await BrandsApiCandidateProvider(client, API_URL).load()

    assert candidates.filenames == ("LATTAFA.svg",)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("response", "status_code"),
    [
        (httpx.Response(503, text="down"), 503),
        (httpx.Response(200, json={"success": False, "error": "db"}), None),
        (httpx.Response(200, text="<html></html>"), None),
    ],
)
async def test_brands_api_provider_failures(response: httpx.Response, status_code: int | None) -> None:
    async with _client(lambda request: response) as client:
        with pytest.raises(CandidateSourceError) as excinfo:
            await BrandsApiCandidateProvider(client, API_URL).load()

    assert excinfo.value.status_code == status_code
    assert excinfo.value.source == "brands-api"


@pytest.mark.asyncio
async def test_brands_api_network_error_is_wrapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        with pytest.raises(CandidateSourceError, match="failed"):
            await BrandsApiCandidateProvider(client, API_URL).load()


@pytest.mark.asyncio
async def test_directory_index_provider_parses_links() -> None:
    listing = """
    <html><body><h1>Index of /photos</h1>
      <a href="?C=N;O=D">Name</a>
      <a href="../">Parent Directory</a>
      <a href="Fragrances/">Fragrances/</a>
      <a href="Black%20tom%20ford.avif">Black tom ford.avif</a>
      <a href="/photos/dior.png?v=2">dior.png</a>
      <a href="notes.txt">notes.txt</a>
      <a>no href</a>
    </body></html>
    """

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, html=listing)

    async with _client(handler) as client:
        candidates = await DirectoryIndexCandidateProvider(client, INDEX_URL).load()

    assert candidates.filenames == ("Black tom ford.avif", "dior.png")


@pytest.mark.asyncio
async def test_directory_index_provider_rejects_non_html() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[])

    async with _client(handler) as client:
        with pytest.raises(CandidateSourceError, match="expected HTML"):
            await DirectoryIndexCandidateProvider(client, INDEX_URL).load()


@pytest.mark.asyncio
async def test_probing_provider_checks_every_combination_in_batches() -> None:
    existing = {"/photos/Dior.webp", "/photos/Tom Ford.png"}
    requested: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "HEAD"
        requested.append(request.url.path)
        if request.url.path == "/photos/Broken.webp":
            raise httpx.ConnectError("reset", request=request)
        return httpx.Response(200 if request.url.path in existing else 404)

    async with _client(handler) as client:
        provider = ProbingCandidateProvider(
            client,
            PHOTOS_URL,
            names=["Dior", "Tom Ford", "Broken"],
            extensions=["webp", ".png"],
            batch_size=4,
        )
        candidates = await provider.load()

    assert provider.filenames_to_check() == [
        "Dior.webp", "Dior.png", "Tom Ford.webp", "Tom Ford.png", "Broken.webp", "Broken.png",
    ]
    assert sorted(requested) == sorted(f"/photos/{name}" for name in provider.filenames_to_check())
    assert candidates.filenames == ("Dior.webp", "Tom Ford.png")


@pytest.mark.asyncio
async def test_fallback_provider_returns_first_non_empty_set() -> None:
    empty = StaticProvider([], name="empty")
    first = StaticProvider(["a.png"], name="first")
    second = StaticProvider(["b.png"], name="second")

    candidates = await FallbackCandidateProvider([BrokenProvider(), empty, first, second]).load()

    assert candidates.filenames == ("a.png",)
    assert empty.calls == 1
    assert second.calls == 0


@pytest.mark.asyncio
async def test_fallback_provider_yields_empty_set_when_everything_fails() -> None:
    candidates = await FallbackCandidateProvider([BrokenProvider(), StaticProvider([])]).load()

    assert len(candidates) == 0


@pytest.mark.asyncio
async def test_remote_provider_prefers_brands_api() -> None:
    settings = Settings(brands_api_url=API_URL, photos_base_url=PHOTOS_URL)

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET" and request.url.path == "/api/v2/brands":
            return httpx.Response(200, json={"success": True, "data": [{"logo_url": "photos/dior.png"}]})
        raise AssertionError(f"Unexpected request: {request.method} {request.url}")

    async with _client(handler) as client:
        candidates = await build_remote_provider(client, settings).load()

    assert candidates.filenames == ("dior.png",)
    assert candidates.source == "brands-api"


@pytest.mark.asyncio
async def test_remote_provider_falls_back_to_probing() -> None:
    settings = Settings(photos_base_url=PHOTOS_URL, probe_batch_size=5)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200 if request.url.path == "/photos/Kajal.webp" else 404)

    async with _client(handler) as client:
        candidates = await build_remote_provider(client, settings).load()

    assert candidates.filenames == ("Kajal.webp",)
    assert candidates.source == "probe"


@pytest.mark.asyncio
async def test_remote_provider_without_sources_makes_no_requests() -> None:
    settings = Settings()

    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError(f"Unexpected request: {request.method} {request.url}")

    async with _client(handler) as client:
        candidates = await build_remote_provider(client, settings).load()

    assert not has_remote_sources(settings)
    assert len(candidates) == 0
