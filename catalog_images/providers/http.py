"""Shared HTTP helpers for remote candidate sources."""

from __future__ import annotations

import logging

import httpx

from catalog_images.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

USER_AGENT = "catalog-images/0.1"


def build_http_client(settings: Settings | None = None) -> httpx.AsyncClient:
    """Create the async client used by the remote providers."""

    settings = settings or get_settings()
    return httpx.AsyncClient(
        timeout=settings.request_timeout,
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT},
    )


async def url_exists(client: httpx.AsyncClient, url: str) -> bool:
    """Return ``True`` when a HEAD request for ``url`` succeeds."""

    if not url:
        return False
    try:
        response = await client.head(url)
    except httpx.HTTPError as exc:
        logger.debug("HEAD %s failed: %s", url, exc)
        return False
    return response.is_success
