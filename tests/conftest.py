"""Shared pytest fixtures."""

from __future__ import annotations

from typing import Iterator

import pytest

from catalog_images.config.settings import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
