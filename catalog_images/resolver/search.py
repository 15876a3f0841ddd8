"""Filename suggestions for the admin logo picker."""

from __future__ import annotations

from typing import Iterable


def suggest_candidates(term: str, candidates: Iterable[str], limit: int = 15) -> list[str]:
    """Return filenames containing ``term``; prefix matches come first."""

    needle = (term or "").strip().lower()
    if not needle or limit <= 0:
        return []

    matches = [candidate for candidate in candidates if needle in candidate.lower()]
    matches.sort(key=lambda candidate: (not candidate.lower().startswith(needle), candidate.casefold()))
    return matches[:limit]
