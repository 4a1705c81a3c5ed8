"""Keyword extraction: stopword lookup and the RAKE pipeline."""
