"""Smoke tests for tracing setup."""

from opentelemetry import trace

from linkscribe import tracing
from linkscribe.tracing import setup_tracing


def test_setup_tracing_is_idempotent() -> None:
    """The API module already configured tracing on import; a second call changes nothing."""
    setup_tracing(service_name="test-service", environment="test")
    provider = trace.get_tracer_provider()

    setup_tracing(service_name="other-service")

    assert tracing._TRACING_CONFIGURED is True
    assert trace.get_tracer_provider() is provider
