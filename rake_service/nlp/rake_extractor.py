"""RAKE Keyphrase Extractor.

Rapid Automatic Keyword Extraction ranks candidate keyphrases of a single
document from word co-occurrence statistics alone. The pipeline runs five
stages, each a pure function of the previous stage's output:

1. extract_sentences: lowercase, split on "." and ","
2. extract_candidate_keyphrases: split sentences at stopwords
3. calculate_word_scores: degree / frequency per word
4. calculate_keyphrase_scores: sum of word scores per phrase
5. rank_keyphrases: descending or ascending (phrase, score) views

RakeExtractor wraps the stages with a configurable stopword set and keeps
the last run as an immutable RakeResult.

Anti-Patterns Avoided:
- S1192: Constants extracted to module level
- S3776: One stage per function keeps cognitive complexity low
- Mutable shared state: every process() call rebuilds all stages
"""

from __future__ import annotations

import math
import re
import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Final

from rake_service.core.exceptions import ExtractorNotProcessedError
from rake_service.core.logging import get_logger
from rake_service.core.tracing import get_tracer
from rake_service.nlp.stopwords import (
    DEFAULT_LANGUAGE,
    get_stopwords,
    load_stopwords_file,
)

logger = get_logger(__name__)
tracer = get_tracer(__name__)

# =============================================================================
# Module Constants (S1192 compliance)
# =============================================================================

SENTENCE_DELIMITERS: Final[str] = ".,"
_SENTENCE_SPLIT_RE: Final[re.Pattern[str]] = re.compile(
    f"[{re.escape(SENTENCE_DELIMITERS)}]"
)
PHRASE_JOINER: Final[str] = " "


# =============================================================================
# Pipeline Stages
# =============================================================================


def extract_sentences(text: str) -> list[str]:
    """Lowercase text and split it on every "." and ",".

    Delimiters are consumed. Leading/trailing runs are kept and empty
    pieces between consecutive delimiters stay as "" so the result always
    has (delimiter count + 1) entries. No whitespace is stripped.
    """
    return _SENTENCE_SPLIT_RE.split(text.lower())


def extract_candidate_keyphrases(
    sentences: Iterable[str],
    stopwords: frozenset[str] | set[str],
) -> list[str]:
    """Split sentences into maximal runs of non-stopword words.

    Stopwords act only as separators and are never emitted. Identical
    phrases from different places are all kept, in order of appearance.
    """
    candidates: list[str] = []

    for sentence in sentences:
        buffer: list[str] = []
        for word in sentence.split():
            if word not in stopwords:
                buffer.append(word)
            elif buffer:
                candidates.append(PHRASE_JOINER.join(buffer))
                buffer = []
        if buffer:
            candidates.append(PHRASE_JOINER.join(buffer))

    return candidates


def calculate_word_scores(candidate_keyphrases: Iterable[str]) -> dict[str, float]:
    """Score each word as degree / frequency.

    Every occurrence of a word adds 1 to its frequency and the word count of
    the phrase it sits in to its degree. A word only ever seen in one-word
    phrases therefore scores exactly 1.0.
    """
    frequency: dict[str, int] = {}
    degree: dict[str, int] = {}

    for phrase in candidate_keyphrases:
        words = phrase.split()
        word_count = len(words)
        for word in words:
            frequency[word] = frequency.get(word, 0) + 1
            degree[word] = degree.get(word, 0) + word_count

    return {word: degree[word] / freq for word, freq in frequency.items()}


def calculate_keyphrase_scores(
    candidate_keyphrases: Iterable[str],
    word_scores: Mapping[str, float],
) -> dict[str, float]:
    """Sum word scores per candidate phrase.

    Keys are the literal phrase text, so repeated phrases share an entry;
    the later occurrence overwrites with the same value. Words missing from
    word_scores contribute 0.0.
    """
    keyphrase_scores: dict[str, float] = {}

    for phrase in candidate_keyphrases:
        keyphrase_scores[phrase] = sum(
            word_scores.get(word, 0.0) for word in phrase.split()
        )

    return keyphrase_scores


def _score_key(item: tuple[str, float]) -> float:
    score = item[1]
    # NaN has no order; rank it below every real score
    return -math.inf if math.isnan(score) else score


def rank_keyphrases(
    keyphrase_scores: Mapping[str, float],
    descending: bool = True,
    top_k: int | None = None,
) -> list[tuple[str, float]]:
    """Order (phrase, score) pairs by score.

    Ties keep the mapping's insertion order in the descending view; the
    ascending view is the exact reverse of the descending one. The input
    mapping is not modified.

    Args:
        keyphrase_scores: Phrase -> score mapping, in discovery order.
        descending: Highest score first when True.
        top_k: Keep only the first top_k pairs after ordering. None keeps all.

    Returns:
        List of (phrase, score) tuples.

    Raises:
        ValueError: If top_k is negative.
    """
    if top_k is not None and top_k < 0:
        raise ValueError(f"top_k must be >= 0, got {top_k}")

    ranked = sorted(keyphrase_scores.items(), key=_score_key, reverse=True)
    if not descending:
        ranked.reverse()

    if top_k is not None:
        ranked = ranked[:top_k]
    return ranked


# =============================================================================
# Result Snapshot
# =============================================================================


@dataclass(frozen=True)
class RakeResult:
    """Immutable output of one RAKE run.

    Attributes:
        sentences: Lowercased sentence pieces, delimiters removed.
        candidate_keyphrases: Every candidate phrase, duplicates included.
        word_scores: Word -> degree / frequency.
        keyphrase_scores: Phrase -> summed word score, in discovery order.
    """

    sentences: tuple[str, ...]
    candidate_keyphrases: tuple[str, ...]
    word_scores: Mapping[str, float] = field(default_factory=dict)
    keyphrase_scores: Mapping[str, float] = field(default_factory=dict)

    @property
    def keyphrases(self) -> list[str]:
        """Distinct phrases in discovery order."""
        return list(self.keyphrase_scores)

    def descending(self, top_k: int | None = None) -> list[tuple[str, float]]:
        """Ranked pairs, highest score first."""
        return rank_keyphrases(self.keyphrase_scores, descending=True, top_k=top_k)

    def ascending(self, top_k: int | None = None) -> list[tuple[str, float]]:
        """Ranked pairs, lowest score first."""
        return rank_keyphrases(self.keyphrase_scores, descending=False, top_k=top_k)


def run_pipeline(text: str, stopwords: frozenset[str] | set[str]) -> RakeResult:
    """Run all five stages over text and snapshot the intermediates."""
    sentences = extract_sentences(text)
    candidates = extract_candidate_keyphrases(sentences, stopwords)
    word_scores = calculate_word_scores(candidates)
    keyphrase_scores = calculate_keyphrase_scores(candidates, word_scores)

    return RakeResult(
        sentences=tuple(sentences),
        candidate_keyphrases=tuple(candidates),
        word_scores=MappingProxyType(word_scores),
        keyphrase_scores=MappingProxyType(keyphrase_scores),
    )


# =============================================================================
# RakeExtractor Class
# =============================================================================


class RakeExtractor:
    """RAKE pipeline bound to one document.

    English stopwords are loaded by default. The stopword set may be
    replaced before processing; replacing it discards any previous result,
    so results always match the active set.

    Example:
        >>> rake = RakeExtractor(
        ...     "Feature extraction is not that complex.",
        ...     stopwords=["is", "not", "that"],
        ... )
        >>> result = rake.process()
        >>> result.descending()[0]
        ('feature extraction', 4.0)
    """

    def __init__(
        self,
        text: str,
        stopwords: Iterable[str] | None = None,
        language: str = DEFAULT_LANGUAGE,
    ) -> None:
        """Initialize the extractor.

        Args:
            text: Document to extract keyphrases from.
            stopwords: Explicit stopword collection. Overrides language.
            language: Language code for the stopword lookup when stopwords
                is not given. Unknown codes fall back to English.
        """
        self._text = text
        if stopwords is None:
            self._stopwords = get_stopwords(language)
        else:
            self._stopwords = frozenset(stopwords)
        self._result: RakeResult | None = None

    @property
    def text(self) -> str:
        return self._text

    @property
    def stopwords(self) -> frozenset[str]:
        return self._stopwords

    def set_stopwords(self, language: str) -> None:
        """Replace the stopword set with the list for a language."""
        self._stopwords = get_stopwords(language)
        self._result = None

    def set_stopwords_from_file(self, path: str | Path) -> None:
        """Replace the stopword set with the entries of a file.

        Raises:
            StopwordsFileError: If the file cannot be read.
        """
        self._stopwords = load_stopwords_file(path)
        self._result = None

    def process(self) -> RakeResult:
        """Run the full pipeline and store the result.

        Each call rebuilds every stage from the document; nothing from an
        earlier run is reused.
        """
        with tracer.start_as_current_span("rake.process") as span:
            start_time = time.perf_counter()
            result = run_pipeline(self._text, self._stopwords)
            processing_time_ms = (time.perf_counter() - start_time) * 1000

            span.set_attribute("rake.sentences", len(result.sentences))
            span.set_attribute("rake.candidates", len(result.candidate_keyphrases))
            span.set_attribute("rake.keyphrases", len(result.keyphrase_scores))

        logger.debug(
            "rake_processed",
            sentences=len(result.sentences),
            candidates=len(result.candidate_keyphrases),
            keyphrases=len(result.keyphrase_scores),
            processing_time_ms=round(processing_time_ms, 3),
        )
        self._result = result
        return result

    @property
    def result(self) -> RakeResult:
        """The last RakeResult.

        Raises:
            ExtractorNotProcessedError: If process() has not run since
                construction or the last stopword change.
        """
        if self._result is None:
            raise ExtractorNotProcessedError(
                "process() must run before results are available"
            )
        return self._result

    @property
    def keyphrases(self) -> list[str]:
        return self.result.keyphrases

    def keyphrase_scores_descending(self) -> list[tuple[str, float]]:
        return self.result.descending()

    def keyphrase_scores_ascending(self) -> list[tuple[str, float]]:
        return self.result.ascending()


def extract_keyphrases(
    text: str,
    stopwords: Iterable[str] | None = None,
    language: str = DEFAULT_LANGUAGE,
    top_k: int | None = None,
) -> list[tuple[str, float]]:
    """One-shot extraction returning the descending view.

    Example:
        >>> extract_keyphrases("Keyword extraction is fast.", stopwords=["is"], top_k=1)
        [('keyword extraction', 4.0)]
    """
    extractor = RakeExtractor(text, stopwords=stopwords, language=language)
    return extractor.process().descending(top_k=top_k)
