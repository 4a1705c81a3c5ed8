"""
rake-extract - Command Line Entry Point

Reads one document, runs the RAKE pipeline and prints the ranked keyphrases.

Usage:
    rake-extract DOCUMENT [--lang CODE] [--stopwords FILE] [--top-k N]
                 [--ascending] [--json]

Exit codes:
    0  success
    1  document or stopwords file could not be read
    2  usage error (argparse)
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path

from rake_service import __version__
from rake_service.core.config import get_settings
from rake_service.core.exceptions import DocumentReadError, RakeServiceError
from rake_service.core.logging import configure_logging, get_logger
from rake_service.nlp.rake_extractor import RakeExtractor

logger = get_logger(__name__)

EXIT_OK: int = 0
EXIT_INPUT_ERROR: int = 1
SCORE_FORMAT: str = "{score:.4f}\t{keyphrase}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rake-extract",
        description="Extract ranked keyphrases from a document with RAKE",
    )
    parser.add_argument("document", type=Path, help="Path to the text document")
    parser.add_argument(
        "--lang",
        default=None,
        help="Stopword language code (id, my/ms, en). Unknown codes use English",
    )
    parser.add_argument(
        "--stopwords",
        type=Path,
        default=None,
        help="File with one stopword per line; replaces the language list",
    )
    parser.add_argument(
        "--top-k",
        type=int,
        default=None,
        help="Only print the first N keyphrases",
    )
    parser.add_argument(
        "--ascending",
        action="store_true",
        help="Lowest score first",
    )
    parser.add_argument("--json", action="store_true", help="Print a JSON array")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def read_document(path: Path) -> str:
    """Read the whole document as UTF-8.

    Raises:
        DocumentReadError: If the file is missing, unreadable or not UTF-8.
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentReadError(f"Cannot read document '{path}': {e!s}") from e


def format_ranked(ranked: list[tuple[str, float]], as_json: bool) -> str:
    if as_json:
        return json.dumps(
            [{"keyphrase": phrase, "score": score} for phrase, score in ranked],
            ensure_ascii=False,
            indent=2,
        )
    return "\n".join(
        SCORE_FORMAT.format(score=score, keyphrase=phrase) for phrase, score in ranked
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(log_level=settings.log_level, json_output=settings.log_json)

    if args.top_k is not None and args.top_k < 0:
        parser.error("--top-k must be >= 0")

    language = args.lang or settings.default_language
    # An explicit --lang beats the RAKE_STOPWORDS_PATH default
    stopwords_path = args.stopwords
    if stopwords_path is None and args.lang is None:
        stopwords_path = settings.stopwords_path

    try:
        text = read_document(args.document)
        extractor = RakeExtractor(text, language=language)
        if stopwords_path:
            extractor.set_stopwords_from_file(stopwords_path)
    except RakeServiceError as e:
        logger.error("rake_input_error", error=str(e))
        print(f"rake-extract: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    result = extractor.process()
    if args.ascending:
        ranked = result.ascending(top_k=args.top_k)
    else:
        ranked = result.descending(top_k=args.top_k)

    logger.info(
        "rake_extract_completed",
        document=str(args.document),
        language=language,
        keyphrases=len(ranked),
    )

    output = format_ranked(ranked, as_json=args.json)
    if output:
        print(output)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
