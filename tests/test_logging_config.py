"""Basic smoke tests for logging configuration."""

import structlog

from linkscribe.logging_config import setup_logging


def test_setup_logging_configures_structlog() -> None:
    """setup_logging should configure structlog and allow logging without error."""
    setup_logging(service_name="test-service", environment="test")
    logger = structlog.get_logger()

    result = logger.info("test_event", foo="bar")
    assert result is None


def test_setup_logging_binds_service_and_environment() -> None:
    """Every later event carries the service name and environment."""
    structlog.contextvars.clear_contextvars()
    try:
        setup_logging(service_name="test-service", environment="test")
        bound = structlog.contextvars.get_contextvars()
        assert bound["service"] == "test-service"
        assert bound["environment"] == "test"
    finally:
        structlog.contextvars.clear_contextvars()


def test_setup_logging_omits_missing_environment() -> None:
    structlog.contextvars.clear_contextvars()
    try:
        setup_logging(service_name="test-service")
        assert "environment" not in structlog.contextvars.get_contextvars()
    finally:
        structlog.contextvars.clear_contextvars()
