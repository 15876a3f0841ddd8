"""Provider interface for building candidate sets."""

from __future__ import annotations

import abc
import logging
from typing import Sequence

from catalog_images.resolver.candidates import CandidateSet

logger = logging.getLogger(__name__)


class CandidateSourceError(RuntimeError):
    """Raised when a candidate source cannot be enumerated."""

    def __init__(self, source: str, message: str, status_code: int | None = None) -> None:
        self.source = source
        self.status_code = status_code
        super().__init__(f"{source}: {message}")


class CandidateProvider(abc.ABC):
    """Discovers the image filenames available for matching."""

    name: str = "provider"

    @abc.abstractmethod
    async def load(self) -> CandidateSet:
        """Return the candidate set or raise :class:`CandidateSourceError`."""


class FallbackCandidateProvider(CandidateProvider):
    """Try providers in order and keep the first non-empty result."""

    name = "fallback"

    def __init__(self, providers: Sequence[CandidateProvider]) -> None:
        self._providers = list(providers)

    async def load(self) -> CandidateSet:
        for provider in self._providers:
            try:
                candidates = await provider.load()
            except CandidateSourceError as exc:
                logger.warning("Candidate source failed: %s", exc)
                continue
            logger.info("Source %s returned %d image(s)", provider.name, len(candidates))
            if len(candidates):
                return candidates

        logger.error("No images were loaded from %d source(s)", len(self._providers))
        return CandidateSet.empty()


async def load_candidates(provider: CandidateProvider) -> CandidateSet:
    """Load candidates, treating an unavailable source as an empty set."""

    try:
        return await provider.load()
    except CandidateSourceError as exc:
        logger.warning("Falling back to an empty candidate set: %s", exc)
        return CandidateSet.empty(source=provider.name)
