# newsdesk/ai/credibility.py
"""Rule-based fake-news scoring."""
import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import urlparse

from .lexicons import load_lexicons

logger = logging.getLogger(__name__)

BASE_SCORE = 0.5
RELIABLE_THRESHOLD = 0.6
SHORT_CONTENT = 200
LONG_CONTENT = 1000
MAX_UPPERCASE_RATIO = 0.15

_UPPER = re.compile(r"[A-Z]")


@dataclass
class CredibilityReport:
    score: float
    factors: List[str] = field(default_factory=list)
    reliable: bool = False


def extract_domain(url: Optional[str]) -> str:
    try:
        return (urlparse(url or "").hostname or "").lower()
    except ValueError:
        return ""


def detect_fake_news(
    title: Optional[str],
    content: Optional[str],
    source: Optional[str] = None,
    url: Optional[str] = None,
) -> CredibilityReport:
    lex = load_lexicons()
    title, content = title or "", content or ""
    factors: List[str] = []
    score = BASE_SCORE

    domain = extract_domain(url)
    if domain and any(d in domain for d in lex.reliable_domains):
        score += 0.3
        factors.append("Recognized reliable source")
    else:
        score -= 0.1
        factors.append("Unknown or unreliable source")

    full_text = f"{title} {content}"
    hits = sum(1 for p in lex.sensational_patterns if re.search(p, full_text, re.IGNORECASE))
    if hits:
        score -= hits * 0.1
        factors.append(f"{hits} sensationalism indicator(s)")

    if len(content) < SHORT_CONTENT:
        score -= 0.15
        factors.append("Content too short to be informative")
    if len(content) > LONG_CONTENT:
        score += 0.1
        factors.append("Detailed and complete content")

    if len(_UPPER.findall(full_text)) / len(full_text) > MAX_UPPERCASE_RATIO:
        score -= 0.2
        factors.append("Excessive use of capital letters")

    if domain and any(domain.endswith(tld) for tld in lex.suspicious_tlds):
        score -= 0.2
        factors.append("Suspicious domain")

    score = round(max(0.0, min(1.0, score)), 2)
    reliable = score >= RELIABLE_THRESHOLD
    logger.debug("Fake news analysis: score=%.2f reliable=%s source=%s", score, reliable, source)
    return CredibilityReport(score=score, factors=factors, reliable=reliable)
