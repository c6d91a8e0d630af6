# newsdesk/ai/sentiment_model.py
from dataclasses import dataclass
from typing import Optional, Sequence

from .lexicons import load_lexicons
from .text import tokenize

POSITIVE_THRESHOLD = 0.6
NEGATIVE_THRESHOLD = 0.4


@dataclass(frozen=True)
class SentimentResult:
    label: str   # positive | negative | neutral
    score: float  # 0..1, <0.4 negative, >0.6 positive


NEUTRAL = SentimentResult("neutral", 0.5)


def count_polarity(
    text: Optional[str],
    positive_words: Sequence[str],
    negative_words: Sequence[str],
) -> tuple[int, int]:
    # substring match on purpose: "succès" also hits "insuccès"
    pos = neg = 0
    for tok in tokenize(text):
        if any(w in tok for w in positive_words):
            pos += 1
        if any(w in tok for w in negative_words):
            neg += 1
    return pos, neg


def score_from_counts(pos: int, neg: int) -> SentimentResult:
    total = pos + neg
    if total == 0:
        return NEUTRAL

    ratio = pos / total
    if ratio > POSITIVE_THRESHOLD:
        return SentimentResult("positive", POSITIVE_THRESHOLD + (ratio - POSITIVE_THRESHOLD) * 0.8)
    if ratio < NEGATIVE_THRESHOLD:
        return SentimentResult("negative", NEGATIVE_THRESHOLD - (NEGATIVE_THRESHOLD - ratio) * 0.8)
    return NEUTRAL


def analyze_sentiment(text: Optional[str]) -> SentimentResult:
    lex = load_lexicons()
    return score_from_counts(*count_polarity(text, lex.positive_words, lex.negative_words))
