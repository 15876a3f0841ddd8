"""FastAPI entrypoint and HTTP routes."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import Depends, FastAPI, HTTPException, Query, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import BaseModel

from catalog_images.config.settings import get_settings
from catalog_images.metrics.prometheus_exporter import candidate_set_size, record_resolution
from catalog_images.providers import (
    DirectoryCandidateProvider,
    build_http_client,
    build_remote_provider,
    has_remote_sources,
    load_candidates,
)
from catalog_images.resolver import (
    ImageResolver,
    ResolutionCache,
    normalize_url,
    suggest_candidates,
)
from catalog_images.services import LogoDetector


class ResolvedImageResponse(BaseModel):
    """Resolved image path plus the URL the frontend should request."""

    path: str
    found: bool
    url: str


class NormalizedUrlResponse(BaseModel):
    url: str


class SuggestionsResponse(BaseModel):
    candidates: list[str]


def create_app(http_client: httpx.AsyncClient | None = None) -> FastAPI:
    """Initialise the FastAPI application.

    ``http_client`` is used for the remote sources; when omitted one is
    created on first use and closed on shutdown.
    """

    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        if http_client is None and app.state.http_client is not None:
            await app.state.http_client.aclose()
            app.state.http_client = None

    app = FastAPI(
        title="Catalog Images API",
        version="0.1.0",
        docs_url="/docs" if settings.environment != "prod" else None,
        redoc_url="/redoc" if settings.environment != "prod" else None,
        lifespan=lifespan,
    )
    app.state.resolver = None
    app.state.http_client = http_client
    app.state.logo_cache = ResolutionCache()
    directory = DirectoryCandidateProvider(settings.photos_root)

    def get_http_client() -> httpx.AsyncClient:
        if app.state.http_client is None:
            app.state.http_client = build_http_client(settings)
        return app.state.http_client

    async def get_resolver() -> ImageResolver:
        """Load the candidate set once and keep the resolver for the process lifetime.

        The photos folder is read first; the remote sources are only tried
        when it yields nothing.
        """

        if app.state.resolver is None:
            candidates = await load_candidates(directory)
            if not len(candidates) and has_remote_sources(settings):
                candidates = await load_candidates(build_remote_provider(get_http_client(), settings))
            candidate_set_size.set(len(candidates))
            app.state.resolver = ImageResolver(
                candidates,
                placeholder=settings.placeholder_path,
                base_path=settings.image_folder,
                cache=ResolutionCache(),
            )
        return app.state.resolver

    def to_url(reference: str) -> str:
        return normalize_url(
            reference,
            placeholder=settings.placeholder_path,
            image_folder=settings.image_folder,
        )

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple health endpoint used for readiness probes."""

        return {"status": "ok"}

    @app.get("/metrics", tags=["system"])
    async def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.get("/images/resolve", response_model=ResolvedImageResponse, tags=["images"])
    async def resolve_image(
        name: str = Query(..., min_length=1),
        brand: str | None = None,
        resolver: ImageResolver = Depends(get_resolver),
    ) -> ResolvedImageResponse:
        resolved = resolver.resolve(name, brand)
        record_resolution(resolved.found)
        return ResolvedImageResponse(path=resolved.path, found=resolved.found, url=to_url(resolved.path))

    @app.get("/images/normalize", response_model=NormalizedUrlResponse, tags=["images"])
    async def normalize_image_url(url: str = "") -> NormalizedUrlResponse:
        return NormalizedUrlResponse(url=to_url(url))

    @app.get("/images/suggest", response_model=SuggestionsResponse, tags=["images"])
    async def suggest_images(
        term: str = "",
        limit: int = Query(15, ge=1, le=100),
        resolver: ImageResolver = Depends(get_resolver),
    ) -> SuggestionsResponse:
        return SuggestionsResponse(candidates=suggest_candidates(term, resolver.candidates, limit))

    @app.get("/brands/logo", response_model=ResolvedImageResponse, tags=["brands"])
    async def brand_logo(
        name: str = Query(..., min_length=1),
        logo_url: str | None = None,
    ) -> ResolvedImageResponse:
        if not settings.photos_base_url:
            raise HTTPException(status_code=503, detail="PHOTOS_BASE_URL is not set.")

        detector = LogoDetector(
            get_http_client(),
            settings.photos_base_url,
            folder=settings.image_folder,
            placeholder=settings.placeholder_path,
            cache=app.state.logo_cache,
        )
        resolved = await detector.detect(name, logo_url)
        record_resolution(resolved.found)
        return ResolvedImageResponse(path=resolved.path, found=resolved.found, url=to_url(resolved.path))

    return app


app = create_app()
