# ============================================================================
# STRUCTURED LOGGING TESTS
# ============================================================================
# EPOCH: 1 - SUBMISSION RELAY
# STATUS: Tests - Request context and phase logging
# PURPOSE: Verify trace/phase tagging and that secrets never reach logs
# CREATED: 19 OCT 2026
# ============================================================================
"""
Structured Logging Tests

Run with:
    pytest tests/test_logging.py -v
"""

import json
import logging
from unittest.mock import patch, MagicMock

from core.logging import (
    StructuredFormatter,
    configure_logging,
    get_current_context,
    log_context,
    log_phase,
)
from relay.config import RelayConfig
from relay.services.submission_service import SubmissionGateway


SECRET = "pat_SECRETSECRETSECRET1234"


def _record(msg="hello", extra=None):
    record = logging.LogRecord("relay.test", logging.INFO, __file__, 10, msg, None, None)
    if extra is not None:
        record.extra = extra
    return record


class TestLogContext:

    def test_nested_context_merges(self):
        with log_context(trace_id="t1", component="submission"):
            with log_context(phase="parse_body"):
                ctx = get_current_context()
                assert ctx.trace_id == "t1"
                assert ctx.phase == "parse_body"
                assert ctx.component == "submission"
            assert get_current_context().phase is None
        assert get_current_context().trace_id is None


class TestFormatters:

    def test_structured_formatter_includes_context(self):
        with log_context(trace_id="t1", phase="validate_env"):
            line = StructuredFormatter().format(_record(extra={"k": "v"}))
        data = json.loads(line)

        assert data["message"] == "hello"
        assert data["level"] == "INFO"
        assert data["logger"] == "relay.test"
        assert data["context"]["trace_id"] == "t1"
        assert data["context"]["phase"] == "validate_env"
        assert data["data"] == {"k": "v"}
        assert data["timestamp"].endswith("Z")
        assert data["source"].endswith(":10")

    def test_structured_formatter_without_context(self):
        data = json.loads(StructuredFormatter().format(_record()))
        assert "context" not in data
        assert "data" not in data

    def test_configure_logging_installs_json_handler(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_logging(level="DEBUG")

            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, StructuredFormatter)
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)


class TestPhaseLogging:

    def test_log_phase_tags_message(self, caplog):
        with caplog.at_level(logging.INFO, logger="relay.phase"):
            with log_context(trace_id="abc123"):
                log_phase("parse_body", {"chars": 3})

        record = caplog.records[-1]
        assert record.getMessage().startswith("[abc123] PHASE: parse_body")
        assert record.extra["phase"] == "parse_body"
        assert record.extra["trace_id"] == "abc123"
        assert record.extra["data"] == {"chars": 3}

    @patch("relay.services.airtable_client.httpx.Client")
    def test_every_phase_logged_with_trace_id(self, mock_client_cls, caplog):
        mock_client = MagicMock()
        mock_client.__enter__ = MagicMock(return_value=mock_client)
        mock_client.__exit__ = MagicMock(return_value=False)
        mock_client.post.return_value = MagicMock(status_code=200, text='{"records": [{"id": "rec1"}]}')
        mock_client_cls.return_value = mock_client

        gateway = SubmissionGateway(RelayConfig(airtable_api_key=SECRET, airtable_base_id="appA"))
        body = json.dumps({"name": "Ada", "email": "a@x.com", "company": "Acme"}).encode()

        with caplog.at_level(logging.DEBUG):
            gateway.handle("POST", body)

        phases = [r.extra["phase"] for r in caplog.records if r.name == "relay.phase"]
        assert phases == [
            "method_gate",
            "parse_body",
            "validate_payload",
            "validate_env",
            "airtable_fetch",
            "airtable_response",
        ]
        for record in caplog.records:
            if record.name == "relay.phase":
                assert record.extra["trace_id"] == gateway.trace_id

        assert SECRET not in caplog.text
        assert "pat_...1234" in caplog.text

    def test_failure_logged_at_warning(self, caplog):
        gateway = SubmissionGateway(RelayConfig())
        with caplog.at_level(logging.INFO, logger="relay.phase"):
            gateway.handle("POST", b"not json")

        last = [r for r in caplog.records if r.name == "relay.phase"][-1]
        assert last.levelno == logging.WARNING
        assert last.extra["data"]["error"] == "invalid_body"
