"""Tests for search endpoints."""

import time

from fastapi.testclient import TestClient


def wait_for_logs(client: TestClient, url: str, expected: int, attempts: int = 50) -> dict:
    """Analytics are written in the background; poll until they land."""
    data = client.get(url).json()
    for _ in range(attempts):
        if data["total"] >= expected:
            break
        time.sleep(0.02)
        data = client.get(url).json()
    return data


class TestSmartSearch:
    """POST /api/smart-search"""

    def test_single_collection(self, client: TestClient, api_prefix: str):
        response = client.post(
            f"{api_prefix}/smart-search",
            json={"query": "harcelement", "collection": "guides"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["keywords"] == ["harcelement"]
        assert data["collections_searched"] == ["guides"]
        assert data["count"] == 2
        assert {r["tag"] for r in data["results"]} == {"GUIDES.PARENTS", "GUIDES.YOUTH"}
        assert data["reranked"] is False
        assert all("<mark>harcelement</mark>" in r["highlighted_text"] for r in data["results"])

    def test_result_shape(self, client: TestClient, api_prefix: str):
        response = client.post(
            f"{api_prefix}/smart-search",
            json={"query": "Guide des parents", "tableName": "guides", "size": 1},
        )

        [result] = response.json()["results"]
        assert result["title"] == "Guide des parents"
        assert result["url"].endswith("/parents/home")
        assert result["collection"] == "guides"
        assert 0 < result["score"] <= 100

    def test_title_only_match_scores_100(self, client: TestClient, api_prefix: str):
        response = client.post(
            f"{api_prefix}/smart-search",
            json={"query": "solides", "collection": "articles", "fields": ["tuile_title_fr"]},
        )

        [result] = response.json()["results"]
        assert result["score"] == 100.0
        assert result["tag"] == "ARTICLES"
        assert result["url"].endswith("/articles/slug/mots-de-passe")

    def test_tag_upper_cased_in_response(self, client: TestClient, api_prefix: str):
        response = client.post(
            f"{api_prefix}/smart-search",
            json={"query": "campagne", "collection": "actualities"},
        )

        [result] = response.json()["results"]
        assert result["tag"] == "ACTUALITES"
        assert result["url"].endswith("/actualites/securite-en-ligne")

    def test_no_match(self, client: TestClient, api_prefix: str):
        response = client.post(
            f"{api_prefix}/smart-search",
            json={"query": "astronomie", "collection": "guides"},
        )

        assert response.status_code == 200
        assert response.json()["results"] == []

    def test_blank_query(self, client: TestClient, api_prefix: str):
        response = client.post(f"{api_prefix}/smart-search", json={"query": "   "})

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "INVALID_QUERY"
        assert data["hint"]

    def test_unsafe_collection(self, client: TestClient, api_prefix: str):
        response = client.post(
            f"{api_prefix}/smart-search",
            json={"query": "guide", "collection": "guides; DROP TABLE guides"},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "UNSAFE_IDENTIFIER"

    def test_unsupported_language(self, client: TestClient, api_prefix: str):
        response = client.post(
            f"{api_prefix}/smart-search",
            json={"query": "guide", "language": "klingon"},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_missing_query(self, client: TestClient, api_prefix: str):
        response = client.post(f"{api_prefix}/smart-search", json={})

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_unknown_collection_is_empty(self, client: TestClient, api_prefix: str):
        response = client.post(
            f"{api_prefix}/smart-search",
            json={"query": "guide", "collection": "podcasts"},
        )

        assert response.status_code == 200
        assert response.json()["results"] == []

    def test_request_id_header(self, client: TestClient, api_prefix: str):
        response = client.post(
            f"{api_prefix}/smart-search",
            json={"query": "guide", "collection": "guides"},
            headers={"X-Request-ID": "req-123"},
        )

        assert response.headers["X-Request-ID"] == "req-123"
        assert "X-Response-Time" in response.headers


class TestFanOut:
    """Searches across every collection."""

    def test_without_collection(self, client: TestClient, api_prefix: str):
        response = client.post(f"{api_prefix}/smart-search", json={"query": "harcelement"})

        data = response.json()
        assert "guides" in data["collections_searched"]
        assert len(data["collections_searched"]) > 1
        assert {r["collection"] for r in data["results"]} == {"guides"}

    def test_all_collections_ignores_collection(self, client: TestClient, api_prefix: str):
        response = client.post(
            f"{api_prefix}/smart-search/all-collections",
            json={"query": "campagne passe", "collection": "guides"},
        )

        data = response.json()
        assert {r["collection"] for r in data["results"]} == {"actualities", "articles"}
        scores = [r["score"] for r in data["results"]]
        assert scores == sorted(scores, reverse=True)

    def test_fan_out_logged(self, client: TestClient, api_prefix: str):
        client.post(f"{api_prefix}/smart-search", json={"query": "Les jeunes et le harcelement"})
        client.post(f"{api_prefix}/smart-search", json={"query": "guide", "collection": "guides"})

        data = wait_for_logs(client, f"{api_prefix}/smart-search/logs", expected=1)

        assert data["total"] == 1
        [log] = data["logs"]
        assert log["original_query"] == "Les jeunes et le harcelement"
        assert log["query_language"] == "french"
        assert "harcelement" in log["extracted_keywords"]
        assert log["results"][0]["position"] == 1

    def test_logs_limit_validated(self, client: TestClient, api_prefix: str):
        response = client.get(f"{api_prefix}/smart-search/logs", params={"limit": 0})
        assert response.status_code == 422


class TestChatbot:
    """POST /api/chatbot"""

    def test_untrained_model_keeps_keyword_ranking(self, client: TestClient, api_prefix: str):
        keyword = client.post(
            f"{api_prefix}/smart-search",
            json={"query": "harcelement", "collection": "guides"},
        ).json()
        chatbot = client.post(
            f"{api_prefix}/chatbot",
            json={"query": "harcelement", "collection": "guides"},
        ).json()

        assert chatbot["reranked"] is False
        assert [r["original_id"] for r in chatbot["results"]] == [
            r["original_id"] for r in keyword["results"]
        ]
        assert all(r["topic_distribution"] is None for r in chatbot["results"])
