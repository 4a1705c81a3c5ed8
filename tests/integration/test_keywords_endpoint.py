"""
Integration Tests for the Keywords API Endpoint

Tests for:
- POST /v1/keywords endpoint
- Request/Response validation
- Language resolution and ranking options
- Processing time reporting
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

# Module constants per S1192 (no duplicated literals)
KEYWORDS_ENDPOINT: str = "/v1/keywords"
CONTENT_TYPE_JSON: str = "application/json"

SAMPLE_TEXT: str = (
    "Compatibility of systems of linear constraints over the set of natural "
    "numbers. Criteria of compatibility of a system of linear Diophantine "
    "equations, strict inequations, and nonstrict inequations are considered."
)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def client() -> TestClient:
    """Create test client for rake-service."""
    from rake_service.main import app

    return TestClient(app)


def _expected(text: str, language: str, top_k: int, ascending: bool = False) -> list[dict]:
    from rake_service.nlp.rake_extractor import RakeExtractor

    result = RakeExtractor(text, language=language).process()
    ranked = result.ascending(top_k=top_k) if ascending else result.descending(top_k=top_k)
    return [{"keyphrase": phrase, "score": score} for phrase, score in ranked]


# =============================================================================
# Request handling
# =============================================================================


class TestKeywordsEndpoint:
    """POST /v1/keywords returns ranked RAKE keyphrases."""

    def test_returns_200(self, client: TestClient) -> None:
        response = client.post(KEYWORDS_ENDPOINT, json={"text": SAMPLE_TEXT})

        assert response.status_code == 200
        assert response.headers["content-type"] == CONTENT_TYPE_JSON

    def test_response_shape(self, client: TestClient) -> None:
        response = client.post(KEYWORDS_ENDPOINT, json={"text": SAMPLE_TEXT})
        data = response.json()

        assert set(data) == {
            "keyphrases",
            "language",
            "stopwords_source",
            "candidate_count",
            "processing_time_ms",
        }
        assert data["processing_time_ms"] >= 0
        for item in data["keyphrases"]:
            assert isinstance(item["keyphrase"], str)
            assert isinstance(item["score"], float)

    def test_matches_library_ranking(self, client: TestClient) -> None:
        response = client.post(KEYWORDS_ENDPOINT, json={"text": SAMPLE_TEXT, "top_k": 5})
        data = response.json()

        assert data["keyphrases"] == _expected(SAMPLE_TEXT, "en", 5)
        assert data["language"] == "en"

    def test_ascending(self, client: TestClient) -> None:
        response = client.post(
            KEYWORDS_ENDPOINT,
            json={"text": SAMPLE_TEXT, "top_k": 3, "ascending": True},
        )
        data = response.json()

        assert data["keyphrases"] == _expected(SAMPLE_TEXT, "en", 3, ascending=True)
        scores = [item["score"] for item in data["keyphrases"]]
        assert scores == sorted(scores)

    def test_top_k_limits_results(self, client: TestClient) -> None:
        response = client.post(KEYWORDS_ENDPOINT, json={"text": SAMPLE_TEXT, "top_k": 2})

        assert len(response.json()["keyphrases"]) <= 2

    def test_default_top_k_from_settings(
        self, client: TestClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("RAKE_DEFAULT_TOP_K", "1")
        response = client.post(KEYWORDS_ENDPOINT, json={"text": SAMPLE_TEXT})

        assert response.json()["keyphrases"] == _expected(SAMPLE_TEXT, "en", 1)

    def test_top_k_zero_returns_empty_list(self, client: TestClient) -> None:
        response = client.post(KEYWORDS_ENDPOINT, json={"text": SAMPLE_TEXT, "top_k": 0})

        assert response.status_code == 200
        assert response.json()["keyphrases"] == []

    def test_language_alias_is_resolved(self, client: TestClient) -> None:
        text = "Algoritma ekstraksi kata kunci dan pemrosesan bahasa alami."
        response = client.post(
            KEYWORDS_ENDPOINT,
            json={"text": text, "language": "Indonesian"},
        )
        data = response.json()

        assert data["language"] == "id"
        assert data["keyphrases"] == _expected(text, "id", 10)

    def test_unknown_language_uses_english(self, client: TestClient) -> None:
        response = client.post(
            KEYWORDS_ENDPOINT,
            json={"text": SAMPLE_TEXT, "language": "zz"},
        )

        assert response.json()["language"] == "en"

    def test_empty_text_returns_empty_result(self, client: TestClient) -> None:
        response = client.post(KEYWORDS_ENDPOINT, json={"text": ""})
        data = response.json()

        assert response.status_code == 200
        assert data["keyphrases"] == []
        assert data["candidate_count"] == 0


class TestStopwordsFileSetting:
    """RAKE_STOPWORDS_PATH replaces the language list unless a language is given."""

    DOCUMENT: str = "Feature extraction is not that complex."

    @pytest.fixture
    def stopwords_file(self, tmp_path, monkeypatch: pytest.MonkeyPatch):
        from rake_service.api.keywords import load_override_stopwords

        path = tmp_path / "stopwords.txt"
        path.write_text("is\nnot\nthat\n", encoding="utf-8")
        monkeypatch.setenv("RAKE_STOPWORDS_PATH", str(path))
        load_override_stopwords.cache_clear()
        yield path
        load_override_stopwords.cache_clear()

    def test_file_replaces_language_list(self, client: TestClient, stopwords_file) -> None:
        response = client.post(KEYWORDS_ENDPOINT, json={"text": self.DOCUMENT})
        data = response.json()

        assert response.status_code == 200
        assert data["stopwords_source"] == "file"
        assert data["keyphrases"] == [
            {"keyphrase": "feature extraction", "score": 4.0},
            {"keyphrase": "complex", "score": 1.0},
        ]

    def test_explicit_language_ignores_file(
        self, client: TestClient, stopwords_file
    ) -> None:
        response = client.post(
            KEYWORDS_ENDPOINT,
            json={"text": SAMPLE_TEXT, "language": "en", "top_k": 5},
        )
        data = response.json()

        assert data["stopwords_source"] == "language"
        assert data["keyphrases"] == _expected(SAMPLE_TEXT, "en", 5)

    def test_without_setting_uses_language_list(
        self, client: TestClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("RAKE_STOPWORDS_PATH", raising=False)
        response = client.post(KEYWORDS_ENDPOINT, json={"text": SAMPLE_TEXT})

        assert response.json()["stopwords_source"] == "language"

    def test_missing_file_returns_500(
        self, client: TestClient, tmp_path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("RAKE_STOPWORDS_PATH", str(tmp_path / "missing.txt"))
        response = client.post(KEYWORDS_ENDPOINT, json={"text": SAMPLE_TEXT})

        assert response.status_code == 500
        assert "Cannot read stopwords file" in response.json()["detail"]

    def test_lifespan_warms_file_cache(
        self, stopwords_file, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        from rake_service import main
        from rake_service.api.keywords import load_override_stopwords
        from rake_service.core.config import Settings

        monkeypatch.setattr(main, "settings", Settings(stopwords_path=str(stopwords_file)))

        with TestClient(main.app):
            assert load_override_stopwords.cache_info().currsize == 1
            assert load_override_stopwords(str(stopwords_file)) == frozenset(
                {"is", "not", "that"}
            )


class TestKeywordsValidation:
    """Invalid bodies are rejected with 422."""

    def test_missing_text(self, client: TestClient) -> None:
        response = client.post(KEYWORDS_ENDPOINT, json={"top_k": 3})

        assert response.status_code == 422

    def test_negative_top_k(self, client: TestClient) -> None:
        response = client.post(KEYWORDS_ENDPOINT, json={"text": SAMPLE_TEXT, "top_k": -1})

        assert response.status_code == 422

    def test_top_k_above_maximum(self, client: TestClient) -> None:
        response = client.post(KEYWORDS_ENDPOINT, json={"text": SAMPLE_TEXT, "top_k": 101})

        assert response.status_code == 422

    def test_extraction_failure_returns_500(
        self, client: TestClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        from rake_service.api import keywords

        def _boom(self):
            raise RuntimeError("boom")

        monkeypatch.setattr(keywords.RakeExtractor, "process", _boom)
        response = client.post(KEYWORDS_ENDPOINT, json={"text": SAMPLE_TEXT})

        assert response.status_code == 500
        assert "boom" in response.json()["detail"]
