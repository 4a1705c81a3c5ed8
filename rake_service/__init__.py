"""rake-service: Rapid Automatic Keyword Extraction.

This package ranks candidate keyphrases in a single document using only
stopword-delimited word co-occurrence statistics:
- Sentence segmentation and stopword-bounded candidate phrases
- Word scores from degree / frequency
- Phrase scores and ranked views

Surfaces: the ``rake-extract`` command and a FastAPI service.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
