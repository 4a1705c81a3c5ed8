"""
rake-service - Custom Exceptions

Anti-Patterns Avoided:
- Exception shadowing: namespaced exceptions instead of builtins like
  FileNotFoundError, so callers can catch service errors as one family
"""


class RakeServiceError(Exception):
    """Base exception for rake-service.

    All custom exceptions inherit from this base class.
    """
    pass


class DocumentReadError(RakeServiceError):
    """Raised when the input document is missing or unreadable.

    Fatal to the invocation: no partial processing happens.
    """
    pass


class StopwordsFileError(RakeServiceError):
    """Raised when a stopword override file cannot be read."""
    pass


class ExtractorNotProcessedError(RakeServiceError):
    """Raised when results are requested before process() has run.

    Also raised after the stopword set changes, since the previous
    result no longer matches the active configuration.
    """
    pass


class ConfigurationError(RakeServiceError):
    """Raised when configuration is invalid or missing."""
    pass
