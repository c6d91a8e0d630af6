"""Tests for newsdesk/ai/credibility.py and newsdesk/ai/classifier.py"""

import pytest

from newsdesk.ai.classifier import DEFAULT_CATEGORY, classify_category, score_categories
from newsdesk.ai.credibility import detect_fake_news, extract_domain


class TestExtractDomain:
    def test_hostname_lowercased(self):
        assert extract_domain("https://WWW.LeMonde.fr/a") == "www.lemonde.fr"

    def test_not_a_url(self):
        assert extract_domain("not a url") == ""
        assert extract_domain(None) == ""


class TestDetectFakeNews:
    def test_reliable_long_article(self):
        report = detect_fake_news("titre", "a" * 1200, url="https://www.lemonde.fr/x")
        assert report.score == pytest.approx(0.9)
        assert report.reliable is True
        assert "Recognized reliable source" in report.factors

    def test_sensational_short_shouting_article_clamps_to_zero(self):
        report = detect_fake_news("URGENT SCANDALE", "x")
        assert report.score == 0.0
        assert report.reliable is False
        assert "Excessive use of capital letters" in report.factors

    def test_suspicious_tld_on_hostname_only(self):
        flagged = detect_fake_news("titre", "a" * 300, url="http://news.tk/a")
        assert "Suspicious domain" in flagged.factors
        clean = detect_fake_news("titre", "a" * 300, url="https://example.com/page.tk")
        assert "Suspicious domain" not in clean.factors

    @pytest.mark.parametrize(
        "title,content,url",
        [
            ("", "", None),
            ("ALERTE 100% PROUVÉ", "RÉVÉLATION CHOC", "http://x.ml"),
            ("calme", "b" * 5000, "https://lefigaro.fr/a"),
        ],
    )
    def test_score_always_in_unit_interval(self, title, content, url):
        report = detect_fake_news(title, content, url=url)
        assert 0.0 <= report.score <= 1.0
        assert report.reliable == (report.score >= 0.6)


class TestClassifier:
    def test_primary_category_and_confidence(self):
        result = classify_category("Le match de football", "Le championnat reprend")
        assert result.category == "sports"
        assert result.confidence == pytest.approx(0.3)
        assert len(result.alternatives) == 2

    def test_no_match_is_general(self):
        result = classify_category("Bonjour", "Rien à signaler")
        assert result.category == DEFAULT_CATEGORY
        assert result.confidence == 0.5
        assert result.alternatives == []

    def test_whole_word_matching(self):
        assert classify_category("startups", "").category == DEFAULT_CATEGORY

    def test_confidence_capped_at_one(self):
        result = classify_category("", "football " * 15)
        assert result.confidence == 1.0

    def test_scores_sorted_descending(self):
        table = {"a": ["alpha"], "b": ["beta"], "c": ["gamma"]}
        ranked = score_categories("beta beta gamma", table)
        assert ranked == [("b", 2), ("c", 1), ("a", 0)]

    def test_alternatives_follow_primary(self):
        table = {"a": ["alpha"], "b": ["beta"], "c": ["gamma"]}
        result = classify_category("beta beta gamma", "alpha alpha alpha", table)
        assert result.category == "a"
        assert [alt.category for alt in result.alternatives] == ["b", "c"]
