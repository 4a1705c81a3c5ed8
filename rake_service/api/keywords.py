"""
Keywords API Endpoint

POST /v1/keywords - Extract RAKE keyphrases with scores from one document

Patterns Applied:
- FastAPI router pattern
- Pydantic request/response models with validation
- Processing time tracking in the response

Anti-Patterns Avoided:
- S1192: Constants for duplicated strings
- Shared mutable extractor: one RakeExtractor per request, stopword sets
  are cached immutable frozensets
"""

from __future__ import annotations

import time
from functools import lru_cache

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from rake_service.core.config import get_settings
from rake_service.core.logging import get_logger
from rake_service.nlp.rake_extractor import RakeExtractor
from rake_service.nlp.stopwords import load_stopwords_file, resolve_language

# =============================================================================
# Module Constants (S1192 compliance)
# =============================================================================

API_TAG: str = "keywords"
MIN_TOP_K: int = 0
MAX_TOP_K: int = 100
SOURCE_FILE: str = "file"
SOURCE_LANGUAGE: str = "language"

logger = get_logger(__name__)


# =============================================================================
# Request/Response Models
# =============================================================================


class KeywordsRequest(BaseModel):
    """Request body for keyphrase extraction.

    Attributes:
        text: Document to extract keyphrases from.
        language: Stopword language code. None uses the configured
            stopwords file when RAKE_STOPWORDS_PATH is set, else the
            configured default language.
        top_k: Number of ranked keyphrases to return. None uses
            Settings.default_top_k.
        ascending: Lowest score first when True.
    """

    text: str = Field(..., description="Document text")
    language: str | None = Field(
        default=None,
        description="Stopword language code (id, my/ms, en); unknown codes use English",
    )
    top_k: int | None = Field(
        default=None,
        ge=MIN_TOP_K,
        le=MAX_TOP_K,
        description="Number of ranked keyphrases to return; None uses the configured default",
    )
    ascending: bool = Field(default=False, description="Lowest score first")


class KeyphraseWithScore(BaseModel):
    """A single keyphrase with its RAKE score."""

    keyphrase: str
    score: float = Field(ge=0.0)


class KeywordsResponse(BaseModel):
    """Response from the keyphrase extraction endpoint.

    Attributes:
        keyphrases: Ranked keyphrase-score pairs.
        language: Canonical stopword language resolved for the request.
        stopwords_source: "file" when the configured stopwords file was
            used, "language" for the language list.
        candidate_count: Candidate phrases found, duplicates included.
        processing_time_ms: Time taken to extract in milliseconds.
    """

    keyphrases: list[KeyphraseWithScore]
    language: str
    stopwords_source: str
    candidate_count: int = Field(..., ge=0)
    processing_time_ms: float = Field(..., ge=0)


# =============================================================================
# Router
# =============================================================================

keywords_router = APIRouter(prefix="/v1", tags=[API_TAG])


@lru_cache(maxsize=8)
def load_override_stopwords(path: str) -> frozenset[str]:
    """Load and cache the configured stopwords file.

    Raises:
        StopwordsFileError: If the file cannot be read.
    """
    return load_stopwords_file(path)


@keywords_router.post("/keywords", response_model=KeywordsResponse)
async def extract_keywords(request: KeywordsRequest) -> KeywordsResponse:
    """Extract ranked RAKE keyphrases from one document.

    Example:
        POST /v1/keywords
        {"text": "Keyword extraction with RAKE.", "language": "en", "top_k": 2}

        Response:
        {
            "keyphrases": [{"keyphrase": "keyword extraction", "score": 4.0}, ...],
            "language": "en",
            "stopwords_source": "language",
            "candidate_count": 2,
            "processing_time_ms": 0.4
        }
    """
    start_time = time.perf_counter()
    settings = get_settings()
    language = resolve_language(request.language or settings.default_language)
    top_k = request.top_k if request.top_k is not None else settings.default_top_k
    # An explicit request language beats the configured stopwords file
    stopwords_path = settings.stopwords_path if request.language is None else None
    source = SOURCE_FILE if stopwords_path else SOURCE_LANGUAGE

    try:
        if stopwords_path:
            extractor = RakeExtractor(
                request.text, stopwords=load_override_stopwords(stopwords_path)
            )
        else:
            extractor = RakeExtractor(request.text, language=language)
        result = extractor.process()
        if request.ascending:
            ranked = result.ascending(top_k=top_k)
        else:
            ranked = result.descending(top_k=top_k)
    except Exception as e:
        logger.error("keyword_extraction_failed", error=str(e))
        raise HTTPException(
            status_code=500,
            detail=f"Keyword extraction failed: {e!s}",
        ) from e

    processing_time_ms = (time.perf_counter() - start_time) * 1000
    logger.info(
        "keywords_extracted",
        language=language,
        stopwords_source=source,
        candidates=len(result.candidate_keyphrases),
        returned=len(ranked),
        processing_time_ms=round(processing_time_ms, 3),
    )

    return KeywordsResponse(
        keyphrases=[
            KeyphraseWithScore(keyphrase=phrase, score=score) for phrase, score in ranked
        ],
        language=language,
        stopwords_source=source,
        candidate_count=len(result.candidate_keyphrases),
        processing_time_ms=processing_time_ms,
    )
