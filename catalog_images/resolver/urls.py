"""Turn stored image references into safe, fetchable URLs."""

from __future__ import annotations

import re
from urllib.parse import quote, unquote, urlsplit

from catalog_images.resolver.normalize import DEFAULT_IMAGE_FOLDER, DEFAULT_PLACEHOLDER

_HTTP_SCHEME = re.compile(r"^http://", re.IGNORECASE)
_ABSOLUTE = re.compile(r"^https://", re.IGNORECASE)


def _encode_segment(segment: str) -> str:
    # Decoding first keeps already-encoded segments from being encoded twice.
    return quote(unquote(segment), safe="", errors="replace")


def _encode_path(path: str) -> str:
    return "/".join(_encode_segment(segment) for segment in path.split("/"))


def normalize_url(
    value: str | None,
    *,
    placeholder: str = DEFAULT_PLACEHOLDER,
    image_folder: str = DEFAULT_IMAGE_FOLDER,
) -> str:
    """Return a fetchable URL for a stored image reference.

    The result is a ``data:`` URI passed through unchanged, an ``https://`` URL
    whose path segments are percent-encoded once, or a relative path encoded
    the same way. Bare filenames are placed under ``image_folder``. Applying
    the function to its own output returns the output unchanged.
    """

    if value is None:
        return placeholder
    url = str(value).strip()
    if not url:
        return placeholder

    if url.startswith("data:"):
        return url

    if url.startswith("//"):
        url = "https:" + url
    url = _HTTP_SCHEME.sub("https://", url)
    url = url.replace("\\", "/")

    if _ABSOLUTE.match(url):
        try:
            parts = urlsplit(url)
        except ValueError:
            # e.g. an unterminated IPv6 host; encode it like a relative path.
            return _encode_path(url)
        result = f"{parts.scheme}://{parts.netloc}{_encode_path(parts.path)}"
        if parts.query:
            result += f"?{parts.query}"
        if parts.fragment:
            result += f"#{parts.fragment}"
        return result

    if "/" not in url:
        url = f"{image_folder.strip('/')}/{url}" if image_folder.strip("/") else url

    if url.startswith("/"):
        return "/" + _encode_path(url.lstrip("/"))
    return _encode_path(url)
