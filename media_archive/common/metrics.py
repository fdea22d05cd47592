"""
Prometheus metrics for the media archive.

Tracks:
- Media intake outcomes and latency
- Bytes written per disk
- Media deletions and blob cleanup failures
"""

from prometheus_client import (
    Counter,
    Histogram,
    generate_latest,
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
)

# Private registry so embedding applications keep their own default one clean
REGISTRY = CollectorRegistry()

# ========== Counters ==========

media_stored_total = Counter(
    "archive_media_stored_total",
    "Total number of store() calls",
    ["collection", "status"],  # success/failure
    registry=REGISTRY,
)

media_replaced_total = Counter(
    "archive_media_replaced_total",
    "Media removed because a single-file collection received a new file",
    ["collection"],
    registry=REGISTRY,
)

media_bytes_stored_total = Counter(
    "archive_media_bytes_stored_total",
    "Total bytes written to disks",
    ["disk"],
    registry=REGISTRY,
)

media_deleted_total = Counter(
    "archive_media_deleted_total",
    "Blobs removed after their media rows were deleted",
    ["disk"],
    registry=REGISTRY,
)

blob_failures_total = Counter(
    "archive_blob_failures_total",
    "Failed blob operations",
    ["operation", "disk"],  # put/delete
    registry=REGISTRY,
)

# ========== Histograms ==========

store_duration_seconds = Histogram(
    "archive_store_duration_seconds",
    "Time to validate, persist and write one media file",
    ["collection"],
    buckets=(0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
    registry=REGISTRY,
)


def get_metrics() -> bytes:
    """Render all archive metrics in Prometheus text format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    return CONTENT_TYPE_LATEST
