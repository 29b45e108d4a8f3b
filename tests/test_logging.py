"""
Structured logging tests
"""

import json
import logging

from baymaxx.core.exceptions import ExternalServiceError
from baymaxx.core.logging import StructuredFormatter, get_logger, log_business_event, log_degraded


def make_record(logger_name="baymaxx.test", exc_info=None, **extra):
    record = logging.LogRecord(logger_name, logging.WARNING, "file.py", 10, "hello %s", ("world",), exc_info)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    def test_json_line(self):
        entry = json.loads(StructuredFormatter().format(make_record(source="analyzer:Voice")))
        assert entry["message"] == "hello world"
        assert entry["level"] == "WARNING"
        assert entry["extra"] == {"source": "analyzer:Voice"}

    def test_project_exception_details(self):
        error = ExternalServiceError("down", service_name="openai", status_code=503)
        record = make_record(exc_info=(ExternalServiceError, error, None))
        entry = json.loads(StructuredFormatter().format(record))
        assert entry["exception"]["error_code"] == "ExternalServiceError"
        assert entry["exception"]["details"] == {"service_name": "openai", "status_code": 503}


class TestHelpers:
    def test_logger_namespace(self):
        assert get_logger("orchestrator").name == "baymaxx.orchestrator"
        assert get_logger("baymaxx.cli").name == "baymaxx.cli"

    def test_degraded_event(self, caplog):
        logger = get_logger("tests.degraded")
        with caplog.at_level(logging.WARNING, logger="baymaxx"):
            log_degraded(logger, "context", ConnectionError("store down"), user_id="u1")

        record = caplog.records[-1]
        assert record.event_type == "degraded_signal"
        assert record.source == "context"
        assert record.reason == "store down"
        assert record.user_id == "u1"

    def test_business_event(self, caplog):
        logger = get_logger("tests.business")
        with caplog.at_level(logging.INFO, logger="baymaxx"):
            log_business_event(logger, "turn_completed", user_id="u1", response_time_ms=12)

        record = caplog.records[-1]
        assert record.business_event == "turn_completed"
        assert record.response_time_ms == 12
