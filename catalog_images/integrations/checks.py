"""Connectivity checks for the remote candidate sources."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from catalog_images.config.settings import get_settings
from catalog_images.providers import (
    BrandsApiCandidateProvider,
    CandidateProvider,
    CandidateSourceError,
    DirectoryCandidateProvider,
    DirectoryIndexCandidateProvider,
    build_http_client,
)


@dataclass(slots=True)
class SourceCheckResult:
    """Structured result describing the source check outcome."""

    name: str
    success: bool
    message: str


async def _run_check(name: str, provider: CandidateProvider) -> SourceCheckResult:
    try:
        candidates = await provider.load()
    except CandidateSourceError as exc:
        return SourceCheckResult(name=name, success=False, message=str(exc))

    if len(candidates):
        return SourceCheckResult(
            name=name,
            success=True,
            message=f"{len(candidates)} image(s) available.",
        )
    return SourceCheckResult(name=name, success=False, message="Source returned no images.")


async def check_photos_directory() -> SourceCheckResult:
    """Scan the local photos directory."""

    settings = get_settings()
    return await _run_check("Photos directory", DirectoryCandidateProvider(settings.photos_root))


async def check_brands_api() -> SourceCheckResult:
    """Load logo references from the brands API."""

    settings = get_settings()
    if not settings.brands_api_url:
        return SourceCheckResult(name="Brands API", success=False, message="BRANDS_API_URL is not set.")

    async with build_http_client(settings) as client:
        provider = BrandsApiCandidateProvider(client, settings.brands_api_url, folder=settings.image_folder)
        return await _run_check("Brands API", provider)


async def check_photos_index() -> SourceCheckResult:
    """Parse the HTML listing of the photos folder."""

    settings = get_settings()
    if not settings.photos_index_url:
        return SourceCheckResult(name="Photos index", success=False, message="PHOTOS_INDEX_URL is not set.")

    async with build_http_client(settings) as client:
        provider = DirectoryIndexCandidateProvider(client, settings.photos_index_url)
        return await _run_check("Photos index", provider)


async def run_all_checks() -> list[SourceCheckResult]:
    """Execute all source checks concurrently."""

    return list(await asyncio.gather(check_photos_directory(), check_brands_api(), check_photos_index()))
