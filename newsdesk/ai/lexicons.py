# newsdesk/ai/lexicons.py
"""
Word lists used by the heuristics, loaded from ``data/lexicons.json``.

The table is versioned so analyses can be traced back to the lists that
produced them. Pass ``path`` to load an alternative table (tests, other
languages).
"""
import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, FrozenSet, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_PATH = Path(__file__).resolve().parent / "data" / "lexicons.json"


@dataclass(frozen=True)
class Lexicons:
    version: str
    stop_words: FrozenSet[str]
    positive_words: Tuple[str, ...]
    negative_words: Tuple[str, ...]
    importance_indicators: Tuple[str, ...]
    related_topics: Dict[str, Tuple[str, ...]]
    categories: Dict[str, Tuple[str, ...]]
    reliable_domains: Tuple[str, ...]
    sensational_patterns: Tuple[str, ...]
    suspicious_tlds: Tuple[str, ...]


def _parse(raw: dict) -> Lexicons:
    sentiment = raw.get("sentiment", {})
    credibility = raw.get("credibility", {})
    return Lexicons(
        version=str(raw.get("version", "0")),
        stop_words=frozenset(raw.get("stop_words", [])),
        positive_words=tuple(sentiment.get("positive", [])),
        negative_words=tuple(sentiment.get("negative", [])),
        importance_indicators=tuple(raw.get("importance_indicators", [])),
        related_topics={k: tuple(v) for k, v in raw.get("related_topics", {}).items()},
        categories={k: tuple(v) for k, v in raw.get("categories", {}).items()},
        reliable_domains=tuple(credibility.get("reliable_domains", [])),
        sensational_patterns=tuple(credibility.get("sensational_patterns", [])),
        suspicious_tlds=tuple(credibility.get("suspicious_tlds", [])),
    )


@lru_cache(maxsize=8)
def load_lexicons(path: Optional[str] = None) -> Lexicons:
    target = Path(path) if path else DEFAULT_PATH
    with target.open(encoding="utf-8") as f:
        lex = _parse(json.load(f))
    logger.info("Loaded lexicons v%s from %s", lex.version, target.name)
    return lex
