"""
Unit tests for structured logging.
"""

import json
import logging

import pytest

from media_archive.common.logging_config import (
    PerformanceTracker,
    StructuredFormatter,
    clear_request_id,
    get_request_id,
    set_request_id,
)


@pytest.fixture(autouse=True)
def _reset_request_id():
    yield
    clear_request_id()


def _record(message="hello", **attrs):
    record = logging.LogRecord("media_archive.test", logging.INFO, __file__, 10, message, None, None)
    for key, value in attrs.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:

    def test_json_fields(self):
        data = json.loads(StructuredFormatter().format(_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "media_archive.test"
        assert data["message"] == "hello"
        assert "request_id" not in data

    def test_request_id_and_extra_fields(self):
        set_request_id("req-1")

        data = json.loads(StructuredFormatter().format(
            _record(extra_fields={"collection": "avatar"})))

        assert data["request_id"] == "req-1"
        assert data["collection"] == "avatar"


class TestRequestId:

    def test_generated_when_missing(self):
        request_id = set_request_id()

        assert request_id and get_request_id() == request_id

    def test_clear(self):
        set_request_id("abc")
        clear_request_id()

        assert get_request_id() is None


class TestPerformanceTracker:

    def test_logs_completion(self, caplog):
        logger = logging.getLogger("media_archive.tracker")

        with caplog.at_level(logging.INFO, logger="media_archive.tracker"):
            with PerformanceTracker("media_store", logger, collection="avatar") as tracker:
                pass

        assert tracker.duration_ms is not None
        record = caplog.records[-1]
        assert record.getMessage() == "Operation completed: media_store"
        assert record.extra_fields["collection"] == "avatar"

    def test_logs_failure_and_reraises(self, caplog):
        logger = logging.getLogger("media_archive.tracker")

        with caplog.at_level(logging.INFO, logger="media_archive.tracker"):
            with pytest.raises(RuntimeError):
                with PerformanceTracker("media_store", logger):
                    raise RuntimeError("boom")

        record = caplog.records[-1]
        assert record.levelname == "ERROR"
        assert record.extra_fields["error_type"] == "RuntimeError"
