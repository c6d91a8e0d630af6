"""Tests for newsdesk/ai/text.py and newsdesk/ai/keywords.py"""

from newsdesk.ai.keywords import extract_keywords
from newsdesk.ai.text import normalize, slugify, split_sentences, tokenize


class TestNormalize:
    def test_lowercases_and_strips_punctuation(self):
        assert normalize("Hello, World!") == "hello world"

    def test_keeps_accents(self):
        assert normalize("Économie!") == "économie"

    def test_none_is_empty(self):
        assert normalize(None) == ""
        assert tokenize(None) == []


class TestSplitSentences:
    def test_drops_whitespace_only_fragments(self):
        assert split_sentences("Un. Deux!  Trois?") == ["Un", " Deux", "  Trois"]

    def test_runs_of_terminators_count_once(self):
        assert split_sentences("Quoi?!... Non.") == ["Quoi", " Non"]


class TestSlugify:
    def test_folds_accents_and_joins_with_dashes(self):
        assert slugify("Économie & Finance") == "economie-finance"

    def test_empty(self):
        assert slugify(None) == ""
        assert slugify("  !! ") == ""


class TestExtractKeywords:
    def test_ranked_by_frequency(self):
        text = "python python python java java rust"
        assert extract_keywords(text) == ["python", "java", "rust"]

    def test_ties_keep_first_occurrence(self):
        assert extract_keywords("zeta alpha beta") == ["zeta", "alpha", "beta"]

    def test_excludes_stop_words_numbers_and_short_tokens(self):
        text = "toujours toujours 2024 2024 2024 sol python"
        assert extract_keywords(text) == ["python"]

    def test_respects_limit(self):
        text = " ".join(f"mot{i}xx" for i in range(30))
        assert len(extract_keywords(text, limit=5)) == 5
        assert extract_keywords(text, limit=0) == []

    def test_custom_stop_words(self):
        assert extract_keywords("python java", stop_words=["python"]) == ["java"]

    def test_no_keywords_in_empty_text(self):
        assert extract_keywords("") == []

    def test_short_and_stop_words_drop_out_before_ranking(self):
        text = "the a is of testing testing coding coding coding"
        assert extract_keywords(text, limit=2) == ["coding", "testing"]
