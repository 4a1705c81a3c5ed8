"""
rake-service - Main Application Entry Point

FastAPI app with lifespan handler; run with ``uvicorn rake_service.main:app``.

Patterns Applied:
- Lifespan context manager
- One-time configure_logging() at startup

Anti-Patterns Avoided:
- Deprecated @app.on_event - using modern lifespan pattern
- structlog.configure() per request - one-time at startup
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rake_service.api.health import get_health_service
from rake_service.api.health import router as health_router
from rake_service.api.keywords import keywords_router, load_override_stopwords
from rake_service.core.config import get_settings
from rake_service.core.logging import configure_logging, get_logger
from rake_service.core.tracing import configure_tracing
from rake_service.nlp.stopwords import get_stopwords, resolve_language

settings = get_settings()

configure_logging(
    log_level=settings.log_level,
    json_output=settings.log_json,
)

logger = get_logger(__name__)


# =============================================================================
# Lifespan Context Manager
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager for startup/shutdown events."""
    logger.info(
        "startup",
        service=settings.service_name,
        version=settings.version,
        environment=settings.environment,
    )

    if settings.tracing_enabled:
        configure_tracing(
            service_name=settings.service_name,
            console_export=settings.tracing_console_export,
        )
        logger.info("tracing_configured")

    # Warm the stopword cache for the default language
    language = resolve_language(settings.default_language)
    stopwords = get_stopwords(language)
    if settings.stopwords_path:
        override = load_override_stopwords(settings.stopwords_path)
        logger.info("stopwords_file_ready", path=settings.stopwords_path, count=len(override))
    get_health_service().set_stopwords_loaded(True)
    logger.info("stopwords_ready", language=language, count=len(stopwords))

    app.state.initialized = True
    app.state.environment = settings.environment

    yield

    logger.info("shutdown", service=settings.service_name)

    get_health_service().set_stopwords_loaded(False)
    app.state.initialized = False


# =============================================================================
# FastAPI Application
# =============================================================================


app = FastAPI(
    title="rake-service",
    description="Rapid Automatic Keyword Extraction for single documents",
    version=settings.version,
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url="/redoc" if settings.environment != "production" else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.environment == "development" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(keywords_router)


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    """Root endpoint pointing at the docs."""
    return {
        "service": settings.service_name,
        "version": settings.version,
        "docs": "/docs",
    }
