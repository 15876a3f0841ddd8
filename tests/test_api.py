"""Tests for the image lookup HTTP endpoints."""

from __future__ import annotations

from pathlib import Path

import httpx

import pytest
from fastapi.testclient import TestClient

from catalog_images.api.main import create_app


@pytest.fixture
def photos_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    for name in ("Black tom ford.avif", "gucci black.avif", "Lancome.png", "readme.md"):
        (tmp_path / name).write_bytes(b"")
    monkeypatch.setenv("PHOTOS_ROOT", str(tmp_path))
    monkeypatch.setenv("IMAGE_FOLDER", "photos")
    monkeypatch.setenv("PLACEHOLDER_PATH", "photos/placeholder.svg")
    return tmp_path


def test_health_returns_ok() -> None:
    client = TestClient(create_app())
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_resolve_uses_brand(photos_dir: Path) -> None:
    client = TestClient(create_app())

    response = client.get("/images/resolve", params={"name": "Black", "brand": "Gucci"})

    assert response.status_code == 200
    assert response.json() == {
        "path": "photos/gucci black.avif",
        "found": True,
        "url": "photos/gucci%20black.avif",
    }


def test_resolve_unknown_name_returns_placeholder(photos_dir: Path) -> None:
    client = TestClient(create_app())

    response = client.get("/images/resolve", params={"name": "Sauvage"})

    assert response.json() == {
        "path": "photos/placeholder.svg",
        "found": False,
        "url": "photos/placeholder.svg",
    }


def test_resolve_with_missing_photos_folder(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PHOTOS_ROOT", str(tmp_path / "missing"))
    client = TestClient(create_app())

    response = client.get("/images/resolve", params={"name": "Lancôme"})

    assert response.status_code == 200
    assert response.json()["found"] is False


def test_resolve_requires_name(photos_dir: Path) -> None:
    client = TestClient(create_app())

    assert client.get("/images/resolve").status_code == 422


def test_candidates_are_loaded_once(photos_dir: Path) -> None:
    app = create_app()
    client = TestClient(app)

    client.get("/images/resolve", params={"name": "Lancôme"})
    resolver = app.state.resolver
    (photos_dir / "Sauvage.avif").write_bytes(b"")
    response = client.get("/images/resolve", params={"name": "Sauvage"})

    assert app.state.resolver is resolver
    assert response.json()["found"] is False


def test_normalize_endpoint() -> None:
    client = TestClient(create_app())

    response = client.get("/images/normalize", params={"url": "//cdn.example.com/a b.png"})

    assert response.json() == {"url": "https://cdn.example.com/a%20b.png"}


def test_suggest_endpoint(photos_dir: Path) -> None:
    client = TestClient(create_app())

    response = client.get("/images/suggest", params={"term": "black"})

    assert response.json() == {"candidates": ["Black tom ford.avif", "gucci black.avif"]}


def test_metrics_count_resolutions(photos_dir: Path) -> None:
    client = TestClient(create_app())
    client.get("/images/resolve", params={"name": "Lancôme"})

    response = client.get("/metrics")

    assert response.status_code == 200
    assert 'image_resolutions_total{outcome="found"}' in response.text
    assert "candidate_set_size 3.0" in response.text


def _mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_resolve_falls_back_to_brands_api_without_photos_folder(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("PHOTOS_ROOT", str(tmp_path / "missing"))
    monkeypatch.setenv("BRANDS_API_URL", "https://shop.test/api/v2/brands")

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/v2/brands"
        return httpx.Response(200, json={"success": True, "data": [{"logo_url": "photos/Gucci.png"}]})

    client = TestClient(create_app(http_client=_mock_client(handler)))

    response = client.get("/images/resolve", params={"name": "Gucci"})

    assert response.json() == {"path": "photos/Gucci.png", "found": True, "url": "photos/Gucci.png"}


def test_brand_logo_checks_filename_variants(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PHOTOS_BASE_URL", "https://shop.test/photos")
    requested: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(request.url.path)
        return httpx.Response(200 if request.url.path == "/photos/dior.png" else 404)

    client = TestClient(create_app(http_client=_mock_client(handler)))

    first = client.get("/brands/logo", params={"name": "Dior"})
    probes = len(requested)
    second = client.get("/brands/logo", params={"name": "Dior"})

    assert first.json() == {"path": "photos/dior.png", "found": True, "url": "photos/dior.png"}
    assert second.json() == first.json()
    assert len(requested) == probes


def test_brand_logo_requires_photos_base_url() -> None:
    client = TestClient(create_app())

    response = client.get("/brands/logo", params={"name": "Dior"})

    assert response.status_code == 503
