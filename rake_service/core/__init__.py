"""Core module for configuration, exceptions, logging and tracing.

Patterns applied:
- Pydantic Settings with SettingsConfigDict
- Custom namespaced exceptions (no builtin shadowing)
- One-time structlog / OpenTelemetry configuration
"""
