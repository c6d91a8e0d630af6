# newsdesk/ai/text.py
"""Text normalization shared by every heuristic."""
import re
import unicodedata
from typing import List, Optional

_NON_WORD = re.compile(r"[^\w\s]")
_SENTENCE_END = re.compile(r"[.!?]+")
_NON_SLUG = re.compile(r"[^a-z0-9]+")


def normalize(text: Optional[str]) -> str:
    """Lowercase and strip punctuation. Accents are kept."""
    return _NON_WORD.sub("", (text or "").lower())


def tokenize(text: Optional[str]) -> List[str]:
    return normalize(text).split()


def split_sentences(text: Optional[str]) -> List[str]:
    """Split on runs of . ! ? and drop whitespace-only fragments (unstripped)."""
    return [s for s in _SENTENCE_END.split(text or "") if s.strip()]


def slugify(text: Optional[str]) -> str:
    """'Économie & Finance' -> 'economie-finance'"""
    folded = unicodedata.normalize("NFD", (text or "").lower())
    folded = "".join(ch for ch in folded if not unicodedata.combining(ch))
    return _NON_SLUG.sub("-", folded).strip("-")
