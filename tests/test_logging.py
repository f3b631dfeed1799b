"""Tests for structured logging configuration."""

from __future__ import annotations

import logging

import pytest
import structlog

from core.logging import (
    REDACTED,
    bound_context,
    configure_logging,
    get_logger,
    redact_credentials,
)


@pytest.fixture(autouse=True)
def _clean_context():
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_configure_console_format(self) -> None:
        configure_logging()

        assert structlog.get_logger() is not None

    def test_configure_json_debug(self) -> None:
        """JSON output at debug level accepts payload dictionaries."""
        configure_logging(json_format=True, log_level="DEBUG")
        logger = get_logger("avatax.test")

        logger.debug("AvaTax request body", body={"DocCode": "R1", "Lines": []})

    def test_transport_loggers_quiet_at_info(self) -> None:
        configure_logging(log_level="INFO")

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

    def test_transport_loggers_follow_debug(self) -> None:
        configure_logging(log_level="DEBUG")

        assert logging.getLogger("httpx").level == logging.DEBUG


class TestRedactCredentials:
    """Tests for the credential-masking processor."""

    def test_masks_top_level_keys(self) -> None:
        event = {"event": "AvaTax call", "Authorization": "Basic abc", "license_key": "k"}

        result = redact_credentials(None, "info", event)

        assert result["Authorization"] == REDACTED
        assert result["license_key"] == REDACTED
        assert result["event"] == "AvaTax call"

    def test_masks_nested_body(self) -> None:
        event = {
            "event": "AvaTax request body",
            "body": {"DocCode": "R1", "Headers": [{"LicenseKey": "k"}]},
        }

        result = redact_credentials(None, "debug", event)

        assert result["body"]["DocCode"] == "R1"
        assert result["body"]["Headers"][0]["LicenseKey"] == REDACTED

    def test_leaves_plain_values(self) -> None:
        event = {"event": "Tax result", "total_tax": "12.34"}

        assert redact_credentials(None, "info", dict(event)) == event


class TestBoundContext:
    """Tests for scoped context binding."""

    def test_binds_inside_block(self) -> None:
        with bound_context(order_number="R1", doc_code="R1.2"):
            assert structlog.contextvars.get_contextvars() == {
                "order_number": "R1",
                "doc_code": "R1.2",
            }

        assert structlog.contextvars.get_contextvars() == {}

    def test_keeps_caller_context(self) -> None:
        structlog.contextvars.bind_contextvars(request_id="abc", order_number="outer")

        with bound_context(order_number="R1"):
            assert structlog.contextvars.get_contextvars()["order_number"] == "R1"

        assert structlog.contextvars.get_contextvars() == {
            "request_id": "abc",
            "order_number": "outer",
        }

    def test_restores_on_error(self) -> None:
        structlog.contextvars.bind_contextvars(request_id="abc")

        with pytest.raises(RuntimeError), bound_context(order_number="R1"):
            raise RuntimeError

        assert structlog.contextvars.get_contextvars() == {"request_id": "abc"}
