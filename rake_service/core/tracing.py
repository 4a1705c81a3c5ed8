"""
rake-service - OpenTelemetry Tracing Module

Patterns Applied:
- One-time configure_tracing() at startup
- Minimal manual instrumentation: one span per pipeline run

Spans:
- rake.process wraps RakeExtractor.process(). Attributes:
  rake.sentences, rake.candidates, rake.keyphrases (counts per run).

Without configure_tracing() the OpenTelemetry API hands out no-op tracers,
so library and CLI use pay nothing for the spans.
"""

from typing import Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor

from rake_service import __version__

# Module-level flag for one-time configuration
_configured: bool = False

SERVICE_NAME = "rake-service"


def configure_tracing(
    service_name: str = SERVICE_NAME,
    console_export: bool = True,
) -> None:
    """Configure OpenTelemetry tracing for the application.

    Args:
        service_name: Name of the service for trace attribution
        console_export: Whether to export spans to console (for development)
    """
    global _configured

    if _configured:
        return

    resource = Resource.create(
        {
            "service.name": service_name,
            "service.version": __version__,
        }
    )

    provider = TracerProvider(resource=resource)

    if console_export:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)

    _configured = True


def get_tracer(name: str) -> Any:
    """Get a tracer instance for creating spans.

    Args:
        name: Tracer name (typically module name)

    Returns:
        OpenTelemetry Tracer instance
    """
    return trace.get_tracer(name)


def reset_tracing() -> None:
    """Reset tracing configuration for testing."""
    global _configured
    _configured = False
