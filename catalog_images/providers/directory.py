"""Candidate provider backed by a local photos directory."""

from __future__ import annotations

import asyncio
from pathlib import Path

from catalog_images.providers.base import CandidateProvider, CandidateSourceError
from catalog_images.resolver.candidates import CandidateSet


class DirectoryCandidateProvider(CandidateProvider):
    """List image files in ``root``, sorted by name for a stable order."""

    name = "directory"

    def __init__(self, root: Path | str) -> None:
        self._root = Path(root)

    async def load(self) -> CandidateSet:
        if not self._root.is_dir():
            raise CandidateSourceError(self.name, f"{self._root} is not a directory")
        try:
            filenames = await asyncio.to_thread(self._scan)
        except OSError as exc:
            raise CandidateSourceError(self.name, f"cannot list {self._root}: {exc}") from exc
        return CandidateSet(filenames, source=self.name)

    def _scan(self) -> list[str]:
        return sorted(path.name for path in self._root.iterdir() if path.is_file())
