"""Tests for structured logging."""

import json

import pytest
import structlog

from maiar.observability.logging import (
    PIIRedactor,
    get_logger,
    setup_logging,
)


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """JSON format writes one parseable object per event to stderr."""
        setup_logging(level="INFO", format="json", redact_pii=False)

        get_logger("test").info("capability_added", capability_id="text-generation")

        parsed = json.loads(capsys.readouterr().err.strip())
        assert parsed["event"] == "capability_added"
        assert parsed["capability_id"] == "text-generation"
        assert parsed["level"] == "info"
        assert "timestamp" in parsed

    def test_level_filters_lower_events(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(level="WARNING", format="json", redact_pii=False)

        get_logger("test").info("dropped")

        assert capsys.readouterr().err == ""

    def test_console_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Console format renders the event name."""
        setup_logging(level="DEBUG", format="console", redact_pii=False)

        get_logger("test").debug("memory_service_initialized")

        assert "memory_service_initialized" in capsys.readouterr().err

    def test_redaction_applied(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(level="INFO", format="json", redact_pii=True)

        get_logger("test").info("user_message", text="mail me at alice@example.com")

        parsed = json.loads(capsys.readouterr().err.strip())
        assert parsed["text"] == "mail me at [EMAIL]"

    def test_context_vars_merged(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Values bound with contextvars appear on every event."""
        setup_logging(level="INFO", format="json", redact_pii=False)
        structlog.contextvars.bind_contextvars(conversation_id="web-alice")
        try:
            get_logger("test").info("turn_started")
        finally:
            structlog.contextvars.clear_contextvars()

        parsed = json.loads(capsys.readouterr().err.strip())
        assert parsed["conversation_id"] == "web-alice"


class TestPIIRedactor:
    """Tests for PII redaction."""

    @pytest.fixture
    def redactor(self) -> PIIRedactor:
        return PIIRedactor()

    def test_redacts_sensitive_keys(self, redactor: PIIRedactor) -> None:
        """Values under sensitive keys are replaced wholesale."""
        event_dict = {"api_key": "abc", "Authorization": "Bearer x", "user": "alice"}
        result = redactor(None, None, event_dict)  # type: ignore
        assert result["api_key"] == "[REDACTED]"
        assert result["Authorization"] == "[REDACTED]"
        assert result["user"] == "alice"

    def test_redacts_api_key_pattern(self, redactor: PIIRedactor) -> None:
        event_dict = {"error": "invalid key sk-abcdefghijklmnop1234"}
        result = redactor(None, None, event_dict)  # type: ignore
        assert result["error"] == "invalid key [API_KEY]"

    def test_redacts_phone_pattern(self, redactor: PIIRedactor) -> None:
        event_dict = {"input": "Call me at +1-555-123-4567 please"}
        result = redactor(None, None, event_dict)  # type: ignore
        assert "[PHONE]" in result["input"]
        assert "555" not in result["input"]

    def test_walks_event_metadata(self, redactor: PIIRedactor) -> None:
        """Nested metadata and lists are scanned."""
        event_dict = {
            "metadata": {
                "input": "from bob@example.com",
                "config": {"token": "t-1"},
                "chain": ["carol@example.com", 3],
            }
        }
        result = redactor(None, None, event_dict)  # type: ignore
        metadata = result["metadata"]
        assert metadata["input"] == "from [EMAIL]"
        assert metadata["config"]["token"] == "[REDACTED]"
        assert metadata["chain"] == ["[EMAIL]", 3]

    def test_preserves_plain_data(self, redactor: PIIRedactor) -> None:
        event_dict = {"event": "capability.response", "latency_ms": 150, "ok": True}
        result = redactor(None, None, event_dict)  # type: ignore
        assert result == event_dict
