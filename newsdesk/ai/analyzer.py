# newsdesk/ai/analyzer.py
from dataclasses import dataclass, field
from typing import List, Optional

from .insights import extract_key_points, find_related_topics
from .keywords import extract_keywords
from .sentiment_model import analyze_sentiment
from .summarizer import generate_summary

# heuristics do not produce a calibrated confidence
ANALYSIS_CONFIDENCE = 0.85


@dataclass
class ArticleAnalysis:
    summary: str
    keywords: List[str]
    sentiment: str
    sentiment_score: float
    key_points: List[str] = field(default_factory=list)
    related_topics: List[str] = field(default_factory=list)
    confidence: float = ANALYSIS_CONFIDENCE


def analyze_article(
    title: Optional[str],
    content: Optional[str],
    description: Optional[str] = None,
) -> ArticleAnalysis:
    title, content, description = title or "", content or "", description or ""
    text = f"{title} {content}"

    keywords = extract_keywords(text)
    sentiment = analyze_sentiment(text)
    return ArticleAnalysis(
        summary=generate_summary(content or f"{title} {description}".strip()),
        keywords=keywords,
        sentiment=sentiment.label,
        sentiment_score=sentiment.score,
        key_points=extract_key_points(content),
        related_topics=find_related_topics(keywords),
    )
