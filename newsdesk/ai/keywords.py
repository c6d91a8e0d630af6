# newsdesk/ai/keywords.py
from collections import Counter
from typing import Iterable, List, Optional

from .lexicons import load_lexicons
from .text import tokenize

DEFAULT_LIMIT = 10
MIN_LENGTH = 3


def extract_keywords(
    text: Optional[str],
    limit: int = DEFAULT_LIMIT,
    stop_words: Optional[Iterable[str]] = None,
    min_length: int = MIN_LENGTH,
) -> List[str]:
    """
    Most frequent tokens longer than ``min_length`` that are neither stop-words
    nor numbers. Ties keep first-occurrence order.
    """
    if limit <= 0:
        return []
    stops = frozenset(stop_words) if stop_words is not None else load_lexicons().stop_words

    counts = Counter(
        tok for tok in tokenize(text)
        if len(tok) > min_length and tok not in stops and not tok.isnumeric()
    )
    # Counter keeps insertion order and sorted() is stable
    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    return [word for word, _ in ranked[:limit]]
