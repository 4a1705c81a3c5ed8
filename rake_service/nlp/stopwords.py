"""Stopword lookup for RAKE phrase splitting.

Two sources feed the pipeline's stopword set:
- a language lookup backed by the stopwords-iso lists (``stopwordsiso``)
- a flat override file, one stopword per line

The language lookup is total: unrecognized codes resolve to English instead
of failing, so callers never handle an "absent" stopword list.

Anti-Patterns Avoided:
- S1192: Constants extracted to module level
- Reloading lists per request: lookups cached as immutable frozensets
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Final

import stopwordsiso

from rake_service.core.exceptions import StopwordsFileError
from rake_service.core.logging import get_logger

logger = get_logger(__name__)

# =============================================================================
# Module Constants (S1192 compliance)
# =============================================================================

DEFAULT_LANGUAGE: Final[str] = "en"
INDONESIAN: Final[str] = "id"
MALAY: Final[str] = "ms"

# Accepted spellings -> ISO 639-1 code understood by stopwordsiso.
# Anything not listed falls back to DEFAULT_LANGUAGE.
LANGUAGE_ALIASES: Final[dict[str, str]] = {
    "en": DEFAULT_LANGUAGE,
    "english": DEFAULT_LANGUAGE,
    "id": INDONESIAN,
    "indonesian": INDONESIAN,
    "indonesia": INDONESIAN,
    "my": MALAY,
    "ms": MALAY,
    "malay": MALAY,
    "malaysian": MALAY,
    "malaysia": MALAY,
}


# =============================================================================
# Language Lookup
# =============================================================================


def resolve_language(language: str) -> str:
    """Map a user-supplied language identifier to its canonical code.

    Matching is case-insensitive and ignores surrounding whitespace.

    Args:
        language: Language code or name, e.g. "id", "Malaysian", "EN".

    Returns:
        "id", "ms" or "en". Unknown identifiers return "en".
    """
    key = language.strip().lower()
    code = LANGUAGE_ALIASES.get(key)
    if code is None:
        logger.debug(
            "stopwords_language_fallback",
            requested=language,
            language=DEFAULT_LANGUAGE,
        )
        return DEFAULT_LANGUAGE
    return code


@lru_cache(maxsize=None)
def _stopwords_for_code(code: str) -> frozenset[str]:
    words = frozenset(word.lower() for word in stopwordsiso.stopwords(code))
    logger.debug("stopwords_loaded", language=code, count=len(words))
    return words


def get_stopwords(language: str = DEFAULT_LANGUAGE) -> frozenset[str]:
    """Return the lowercase stopword set for a language.

    Never fails: an unrecognized language yields the English set.

    Example:
        >>> "the" in get_stopwords("en")
        True
        >>> get_stopwords("zz") == get_stopwords("en")
        True
    """
    return _stopwords_for_code(resolve_language(language))


# =============================================================================
# File Override
# =============================================================================


def load_stopwords_file(path: str | Path) -> frozenset[str]:
    """Load a stopword override file.

    The file is read as UTF-8 and split on line breaks. Empty lines are
    dropped; every other line is kept verbatim, with no case folding and no
    stripping, so entries must already be lowercase to match tokens.

    Args:
        path: Path to a text file with one stopword per line.

    Returns:
        Frozenset of the file's non-empty lines.

    Raises:
        StopwordsFileError: If the file is missing, unreadable or not UTF-8.
    """
    stopwords_path = Path(path)
    try:
        raw = stopwords_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise StopwordsFileError(
            f"Cannot read stopwords file '{stopwords_path}': {e!s}"
        ) from e

    words = frozenset(line for line in raw.splitlines() if line)
    logger.debug("stopwords_file_loaded", path=str(stopwords_path), count=len(words))
    return words
