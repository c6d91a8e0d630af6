"""Tests for /api/ai endpoints."""

import pytest


def _create(client, payload):
    r = client.post("/api/articles", json=payload)
    assert r.status_code == 201, r.text
    return r.json()["article"]


class TestStatelessHeuristics:
    def test_fake_news(self, client):
        r = client.post(
            "/api/ai/fake-news",
            json={"title": "titre", "content": "a" * 1200, "url": "https://www.lemonde.fr/a"},
        )
        assert r.status_code == 200
        detection = r.json()["detection"]
        assert detection["score"] == pytest.approx(0.9)
        assert detection["reliable"] is True

    def test_fake_news_requires_content(self, client):
        r = client.post("/api/ai/fake-news", json={"title": "titre"})
        assert r.status_code == 400
        assert r.json()["ok"] is False

    def test_classify(self, client):
        r = client.post("/api/ai/classify", json={"title": "Football", "content": "Le match de tennis"})
        classification = r.json()["classification"]
        assert classification["category"] == "sports"
        assert len(classification["alternatives"]) == 2

    def test_health(self, client):
        body = client.get("/api/ai/health").json()
        assert body["ok"] is True
        assert body["lexiconVersion"] == "2024.1"
        assert body["providers"] == {"gemini": False, "openai": False}


class TestAnalyzeStoredArticle:
    def test_analyze_writes_back(self, client, article_payload):
        article = _create(client, article_payload())
        client.get(f"/api/articles/{article['id']}")  # cached before analysis

        r = client.post(f"/api/ai/analyze/{article['id']}")
        assert r.status_code == 200
        body = r.json()
        assert body["analysis"]["success"] is True
        assert body["analysis"]["confidence"] == 0.85
        assert body["analysis"]["articleId"] == article["id"]
        assert body["categoryClassification"]["category"] in {"health", "politics"}

        updated = client.get(f"/api/articles/{article['id']}").json()["article"]
        assert updated["sentiment"] == body["analysis"]["sentiment"]
        assert updated["keywords"] == body["analysis"]["keywords"]
        assert updated["popularity"] == body["fakeNewsDetection"]["score"]

        latest = client.get(f"/api/ai/analysis/{article['id']}").json()["analysis"]
        assert latest["id"] == body["analysis"]["id"]

    def test_missing_article(self, client):
        assert client.post("/api/ai/analyze/nope").status_code == 404
        assert client.get("/api/ai/analysis/nope").status_code == 404


class TestBatchAnalyze:
    def test_batch_skips_missing(self, client, article_payload):
        ids = [_create(client, article_payload(url=f"https://a.fr/{i}"))["id"] for i in range(3)]

        r = client.post("/api/ai/batch-analyze", json={"articleIds": ids + ["missing"]})
        assert r.status_code == 200
        body = r.json()
        assert body["requested"] == 4
        assert body["processed"] == 3
        assert {a["articleId"] for a in body["analyses"]} == set(ids)

    def test_existing_analysis_is_reused(self, client, article_payload):
        article_id = _create(client, article_payload())["id"]
        first = client.post("/api/ai/batch-analyze", json={"articleIds": [article_id]}).json()
        second = client.post("/api/ai/batch-analyze", json={"articleIds": [article_id]}).json()
        forced = client.post(
            "/api/ai/batch-analyze", json={"articleIds": [article_id], "forceReanalyze": True}
        ).json()

        assert first["analyses"][0]["id"] == second["analyses"][0]["id"]
        assert forced["analyses"][0]["id"] != first["analyses"][0]["id"]

    def test_empty_ids_rejected(self, client):
        assert client.post("/api/ai/batch-analyze", json={"articleIds": []}).status_code == 400


class TestReporting:
    def test_stats_after_one_analysis(self, client, article_payload):
        article = _create(client, article_payload())
        client.post(f"/api/ai/analyze/{article['id']}")

        stats = client.get("/api/ai/stats").json()["stats"]
        assert stats["totalAnalyses"] == 1
        assert stats["successfulAnalyses"] == 1
        assert stats["failedAnalyses"] == 0
        assert stats["successRate"] == 100.0
        assert stats["todayAnalyses"] == 1
        assert sum(stats["sentimentDistribution"].values()) == 1

    def test_empty_stats(self, client):
        stats = client.get("/api/ai/stats").json()["stats"]
        assert stats["totalAnalyses"] == 0
        assert stats["successRate"] == 0
        assert stats["popularKeywords"] == []

    def test_trends_and_keywords(self, client, article_payload):
        article = _create(client, article_payload())
        client.post(f"/api/ai/analyze/{article['id']}")

        trends = client.get("/api/ai/sentiment-trends", params={"category": "sante"}).json()
        assert sum(trends["overall"].values()) == 1
        assert len(trends["trends"]) == 1
        assert trends["trends"][0]["total"] == 1

        keywords = client.get("/api/ai/keywords/popular").json()["keywords"]
        assert keywords
        assert all(k["count"] == 1 for k in keywords)
