"""
rake-service - Application Configuration

Patterns Applied:
- Pydantic Settings with SettingsConfigDict
- Environment variable prefix RAKE_ for every setting

Anti-Patterns Avoided:
- Scattered os.environ lookups (all settings live on one model)
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rake_service.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables with RAKE_ prefix.
    Example: RAKE_DEFAULT_LANGUAGE=id, RAKE_STOPWORDS_PATH=./stopwords.txt

    stopwords_path replaces the language list in both the CLI and the HTTP
    API whenever the caller does not pick a language explicitly
    (--lang, or "language" in the request body).
    """

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8090

    # Application metadata
    service_name: str = "rake-service"
    version: str = "0.1.0"
    environment: str = "development"

    # Logging configuration
    log_level: str = "INFO"
    log_json: bool = True

    # Tracing configuration
    tracing_enabled: bool = False
    tracing_console_export: bool = True

    # Extraction defaults
    default_language: str = "en"
    stopwords_path: str | None = None
    default_top_k: int = 10

    model_config = SettingsConfigDict(
        env_prefix="RAKE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("default_top_k")
    @classmethod
    def _check_top_k(cls, value: int) -> int:
        if value < 0:
            raise ConfigurationError(f"default_top_k must be >= 0, got {value}")
        return value


def get_settings() -> Settings:
    """Get application settings instance.

    Returns:
        Settings instance with values from environment
    """
    return Settings()
