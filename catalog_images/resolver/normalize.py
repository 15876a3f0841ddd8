"""Text helpers shared by the image resolver and the logo tools."""

from __future__ import annotations

import posixpath
import re
import unicodedata

IMAGE_EXTENSIONS: tuple[str, ...] = (".png", ".jpg", ".jpeg", ".svg", ".webp", ".avif", ".gif")

DEFAULT_IMAGE_FOLDER = "photos"
DEFAULT_PLACEHOLDER = "photos/placeholder.svg"

STOPWORDS: frozenset[str] = frozenset(
    {"for", "women", "men", "the", "de", "le", "la", "du", "des", "and", "&"}
)

# Filename word separators ("Roberto-Cavalli-logo", "Jimmy_choo").
_SEPARATORS = re.compile(r"[_\-.]+")


def normalize_name(text: str | None) -> str:
    """Lowercase ``text``, drop punctuation and collapse whitespace.

    ``"Dolce&Gabbana The One"`` becomes ``"dolcegabbana the one"`` and
    ``"Roberto-Cavalli-logo"`` becomes ``"roberto cavalli logo"``.
    """

    if not text:
        return ""
    value = _SEPARATORS.sub(" ", str(text).lower())
    value = "".join(char for char in value if char.isalnum() or char.isspace())
    return " ".join(value.split())


def strip_stopwords(text: str) -> str:
    """Remove stopword tokens from an already normalised name."""

    return " ".join(token for token in text.split() if token not in STOPWORDS)


def strip_diacritics(text: str | None) -> str:
    """Return ``text`` without combining marks (``"Lancôme"`` -> ``"Lancome"``)."""

    if not text:
        return ""
    value = unicodedata.normalize("NFD", str(text))
    return "".join(char for char in value if not unicodedata.combining(char))


def is_image_file(filename: str) -> bool:
    """Return ``True`` when ``filename`` ends with a known image extension."""

    return str(filename).lower().endswith(IMAGE_EXTENSIONS)


def image_stem(filename: str) -> str:
    """Return the basename of ``filename`` without its image extension."""

    name = posixpath.basename(str(filename).replace("\\", "/"))
    lowered = name.lower()
    for extension in IMAGE_EXTENSIONS:
        if lowered.endswith(extension):
            return name[: -len(extension)]
    return name


def first_token(text: str) -> str:
    """Return the first whitespace separated token of ``text`` (or ``""``)."""

    tokens = text.split()
    return tokens[0] if tokens else ""
