"""Prometheus exporter helpers."""

from __future__ import annotations

from prometheus_client import Counter, Gauge


image_resolutions_total = Counter(
    "image_resolutions_total",
    "Total number of display-name image resolutions.",
    ["outcome"],
)

candidate_set_size = Gauge(
    "candidate_set_size",
    "Number of image filenames in the loaded candidate set.",
)


def record_resolution(found: bool) -> None:
    image_resolutions_total.labels(outcome="found" if found else "placeholder").inc()
