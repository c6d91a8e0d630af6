# newsdesk/ai/insights.py
"""Key points and related topics."""
from typing import Dict, Iterable, List, Optional, Sequence

from .lexicons import load_lexicons
from .text import split_sentences

MIN_SENTENCE_LENGTH = 30
MIN_KEY_POINTS = 3
MAX_KEY_POINTS = 5
MAX_RELATED_TOPICS = 8
NO_KEY_POINTS = "No key points identified."


def extract_key_points(
    text: Optional[str],
    indicators: Optional[Sequence[str]] = None,
) -> List[str]:
    indicators = indicators if indicators is not None else load_lexicons().importance_indicators
    sentences = [s.strip() for s in split_sentences(text) if len(s.strip()) > MIN_SENTENCE_LENGTH]
    if not sentences:
        return [NO_KEY_POINTS]

    matched = [s for s in sentences if any(ind in s.lower() for ind in indicators)]
    if len(matched) < MIN_KEY_POINTS:
        return sentences[:MIN_KEY_POINTS]
    return matched[:MAX_KEY_POINTS]


def find_related_topics(
    keywords: Iterable[str],
    mapping: Optional[Dict[str, Sequence[str]]] = None,
) -> List[str]:
    """Topic names plus their terms for every keyword that contains a term."""
    mapping = mapping if mapping is not None else load_lexicons().related_topics
    found: Dict[str, None] = {}  # ordered set
    for keyword in keywords:
        kw = keyword.lower()
        for topic, terms in mapping.items():
            if any(t in kw for t in terms):
                found[topic] = None
                for t in terms:
                    found[t] = None
    return list(found)[:MAX_RELATED_TOPICS]
