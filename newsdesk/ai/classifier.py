# newsdesk/ai/classifier.py
"""
Keyword-count category classifier.

A fixed linear scoring rule over the category phrase table, not a trained
model: every whole-word occurrence of a phrase adds its category's weight.
"""
import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, List, Optional, Pattern, Sequence, Tuple

from .lexicons import load_lexicons

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "general"
DEFAULT_CONFIDENCE = 0.5
CATEGORY_WEIGHT = 1
MAX_ALTERNATIVES = 2


@dataclass
class CategoryScore:
    category: str
    confidence: float


@dataclass
class Classification:
    category: str
    confidence: float
    alternatives: List[CategoryScore] = field(default_factory=list)


@lru_cache(maxsize=256)
def _phrase_pattern(phrase: str) -> Pattern:
    return re.compile(rf"\b{re.escape(phrase)}\b", re.IGNORECASE)


def _confidence(score: int) -> float:
    return round(min(score / 10, 1), 2)


def score_categories(
    text: str,
    table: Optional[Dict[str, Sequence[str]]] = None,
) -> List[Tuple[str, int]]:
    """(category, score) sorted by descending score; ties keep table order."""
    table = table if table is not None else load_lexicons().categories
    text = text.lower()
    scores = [
        (category, sum(len(_phrase_pattern(p).findall(text)) for p in phrases) * CATEGORY_WEIGHT)
        for category, phrases in table.items()
    ]
    return sorted(scores, key=lambda cs: cs[1], reverse=True)


def classify_category(
    title: Optional[str],
    content: Optional[str],
    table: Optional[Dict[str, Sequence[str]]] = None,
) -> Classification:
    ranked = score_categories(f"{title or ''} {content or ''}", table)
    if not ranked or ranked[0][1] == 0:
        return Classification(DEFAULT_CATEGORY, DEFAULT_CONFIDENCE)

    primary, top = ranked[0]
    alternatives = [
        CategoryScore(cat, _confidence(score))
        for cat, score in ranked[1:1 + MAX_ALTERNATIVES]
    ]
    result = Classification(primary, _confidence(top), alternatives)
    logger.debug("Classification: %s (%s)", result.category, result.confidence)
    return result
