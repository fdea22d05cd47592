"""
Unit tests for Prometheus metrics.
"""

from media_archive.common.metrics import (
    REGISTRY,
    blob_failures_total,
    get_metrics,
    get_metrics_content_type,
    media_bytes_stored_total,
    media_deleted_total,
    media_replaced_total,
    media_stored_total,
    store_duration_seconds,
)


class TestMetricsCounters:
    """Tests for Prometheus counter metrics."""

    def test_media_stored_total_increments(self):
        """Store counter should increment per collection and status."""
        initial = media_stored_total.labels(
            collection="avatar", status="success")._value.get()

        media_stored_total.labels(collection="avatar", status="success").inc()

        final = media_stored_total.labels(
            collection="avatar", status="success")._value.get()
        assert final == initial + 1

    def test_media_replaced_total_increments(self):
        initial = media_replaced_total.labels(collection="avatar")._value.get()

        media_replaced_total.labels(collection="avatar").inc(2)

        assert media_replaced_total.labels(collection="avatar")._value.get() == initial + 2

    def test_bytes_stored_total_increments(self):
        initial = media_bytes_stored_total.labels(disk="local")._value.get()

        media_bytes_stored_total.labels(disk="local").inc(1024)

        assert media_bytes_stored_total.labels(disk="local")._value.get() == initial + 1024

    def test_deleted_and_failures_increment(self):
        deleted = media_deleted_total.labels(disk="s3")._value.get()
        failures = blob_failures_total.labels(operation="put", disk="s3")._value.get()

        media_deleted_total.labels(disk="s3").inc()
        blob_failures_total.labels(operation="put", disk="s3").inc()

        assert media_deleted_total.labels(disk="s3")._value.get() == deleted + 1
        assert blob_failures_total.labels(
            operation="put", disk="s3")._value.get() == failures + 1


class TestMetricsHistograms:
    """Tests for Prometheus histogram metrics."""

    def test_store_duration_observes(self):
        """Store duration histogram should record observations."""
        store_duration_seconds.labels(collection="gallery").observe(0.2)

        value = REGISTRY.get_sample_value(
            "archive_store_duration_seconds_count", {"collection": "gallery"})
        assert value is not None and value >= 1


class TestMetricsExport:
    """Tests for metrics exposition."""

    def test_get_metrics_returns_text_format(self):
        media_stored_total.labels(collection="export", status="success").inc()

        output = get_metrics()

        assert isinstance(output, bytes)
        assert b"archive_media_stored_total" in output
        assert b'collection="export"' in output

    def test_get_metrics_content_type(self):
        assert get_metrics_content_type().startswith("text/plain")

    def test_private_registry(self):
        """Archive metrics stay out of the process-wide default registry."""
        from prometheus_client import REGISTRY as DEFAULT_REGISTRY

        assert DEFAULT_REGISTRY.get_sample_value(
            "archive_media_stored_total", {"collection": "export", "status": "success"}
        ) is None
