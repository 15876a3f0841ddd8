"""Read-only collection of image filenames available for matching."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from catalog_images.resolver.normalize import (
    image_stem,
    is_image_file,
    normalize_name,
    strip_diacritics,
)


@dataclass(frozen=True, slots=True)
class CandidateEntry:
    """A candidate filename with its precomputed comparison keys."""

    filename: str
    name: str
    folded: str

    @classmethod
    def from_filename(cls, filename: str) -> "CandidateEntry":
        stem = image_stem(filename)
        return cls(
            filename=filename,
            name=normalize_name(stem),
            folded=normalize_name(strip_diacritics(stem)),
        )


class CandidateSet:
    """Ordered, de-duplicated set of image filenames.

    Non-image entries are dropped on construction. Iteration order is the
    order in which filenames were supplied, which the resolver relies on for
    tie-breaking.
    """

    __slots__ = ("_entries", "_source")

    def __init__(self, filenames: Iterable[str] = (), *, source: str = "static") -> None:
        seen: set[str] = set()
        entries: list[CandidateEntry] = []
        for filename in filenames:
            if not isinstance(filename, str):
                continue
            cleaned = filename.strip()
            if not cleaned or cleaned in seen or not is_image_file(cleaned):
                continue
            seen.add(cleaned)
            entries.append(CandidateEntry.from_filename(cleaned))
        self._entries: tuple[CandidateEntry, ...] = tuple(entries)
        self._source = source

    @classmethod
    def empty(cls, source: str = "empty") -> "CandidateSet":
        """Return the set used when no source could be loaded."""

        return cls((), source=source)

    @property
    def source(self) -> str:
        return self._source

    @property
    def entries(self) -> tuple[CandidateEntry, ...]:
        return self._entries

    @property
    def filenames(self) -> tuple[str, ...]:
        return tuple(entry.filename for entry in self._entries)

    def __iter__(self) -> Iterator[str]:
        return (entry.filename for entry in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, filename: object) -> bool:
        return any(entry.filename == filename for entry in self._entries)

    def __repr__(self) -> str:
        return f"CandidateSet(source={self._source!r}, size={len(self._entries)})"
