# newsdesk/ai/service.py
"""
Persistence around the article heuristics.

Every run appends an AIAnalysis row; the newest successful row for an article
is its current analysis. Batch runs use one DB session per article since an
AsyncSession must not be shared between concurrent tasks.
"""
import asyncio
import logging
import time
from collections import Counter, defaultdict
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import select, func, desc
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.api.news.models import Article
from newsdesk.core.cache import TTLCache, invalidate_article
from newsdesk.core.exceptions import NotFoundError
from newsdesk.db.models import utcnow
from newsdesk.db.session import AsyncSessionLocal
from .analyzer import analyze_article
from .classifier import classify_category
from .credibility import detect_fake_news
from .models import AIAnalysis

logger = logging.getLogger(__name__)

BATCH_SIZE = 5
KEYWORD_WINDOW_DAYS = 30
SENTIMENTS = ("positive", "negative", "neutral")


def _iso(dt: Optional[datetime]) -> Optional[str]:
    return dt.isoformat() if dt else None


def analysis_to_dict(a: AIAnalysis) -> Dict[str, Any]:
    return {
        "id": a.id,
        "articleId": a.article_id,
        "category": a.category,
        "summary": a.summary,
        "keyPoints": a.key_points or [],
        "keywords": a.keywords or [],
        "sentiment": a.sentiment,
        "sentimentScore": a.sentiment_score,
        "confidence": a.confidence,
        "relatedTopics": a.related_topics or [],
        "processedAt": _iso(a.processed_at),
        "processingTime": a.processing_time,
        "success": a.success,
    }


def _failed(article_id: str, category: Optional[str], started: float) -> AIAnalysis:
    return AIAnalysis(
        article_id=article_id,
        category=category,
        summary="Analysis unavailable",
        key_points=[],
        keywords=[],
        sentiment="neutral",
        sentiment_score=0.5,
        confidence=0.0,
        related_topics=[],
        processing_time=int((time.perf_counter() - started) * 1000),
        success=False,
    )


class AIService:
    def __init__(self, session: AsyncSession, cache: TTLCache):
        self.session = session
        self.cache = cache

    async def analyze(
        self,
        article_id: str,
        title: Optional[str],
        content: Optional[str],
        category: Optional[str] = None,
        description: Optional[str] = None,
    ) -> AIAnalysis:
        """Run the heuristics and store the result. Failures come back unsaved with success=False."""
        started = time.perf_counter()
        try:
            result = analyze_article(title, content, description)
            row = AIAnalysis(
                article_id=article_id,
                category=category,
                summary=result.summary,
                key_points=result.key_points,
                keywords=result.keywords,
                sentiment=result.sentiment,
                sentiment_score=result.sentiment_score,
                confidence=result.confidence,
                related_topics=result.related_topics,
                processing_time=int((time.perf_counter() - started) * 1000),
                success=True,
            )
            self.session.add(row)
            await self.session.commit()
            await self.session.refresh(row)
            logger.info("Analysis stored for article %s", article_id)
            return row
        except Exception:
            logger.exception("Analysis failed for article %s", article_id)
            await self.session.rollback()
            return _failed(article_id, category, started)

    async def analyze_stored_article(self, article_id: str) -> Dict[str, Any]:
        article = await self.session.get(Article, article_id)
        if not article:
            raise NotFoundError("Article not found")

        analysis = await self.analyze(
            article.id, article.title, article.content, article.category, article.description
        )
        detection = detect_fake_news(article.title, article.content, article.source_name, article.url)
        classification = classify_category(article.title, article.content)

        if analysis.success:
            article.sentiment = analysis.sentiment
            article.keywords = analysis.keywords
            article.popularity = detection.score
            article.updated_at = utcnow()
            self.session.add(article)
            await self.session.commit()
            invalidate_article(self.cache, article.id, article.category)

        return {
            "analysis": analysis_to_dict(analysis),
            "fakeNewsDetection": {
                "score": detection.score,
                "factors": detection.factors,
                "reliable": detection.reliable,
            },
            "categoryClassification": {
                "category": classification.category,
                "confidence": classification.confidence,
                "alternatives": [
                    {"category": alt.category, "confidence": alt.confidence}
                    for alt in classification.alternatives
                ],
            },
        }

    async def get_latest_analysis(self, article_id: str) -> Optional[AIAnalysis]:
        stmt = (
            select(AIAnalysis)
            .where(AIAnalysis.article_id == article_id, AIAnalysis.success.is_(True))
            .order_by(desc(AIAnalysis.processed_at))
            .limit(1)
        )
        return (await self.session.execute(stmt)).scalars().first()

    # -----------------------------
    # batch
    # -----------------------------
    @staticmethod
    async def _analyze_one(article_id: str, cache: TTLCache, force: bool) -> Optional[AIAnalysis]:
        async with AsyncSessionLocal() as session:
            svc = AIService(session, cache)
            if not force:
                existing = await svc.get_latest_analysis(article_id)
                if existing:
                    return existing
            article = await session.get(Article, article_id)
            if not article:
                logger.warning("Batch analysis: article %s not found", article_id)
                return None
            return await svc.analyze(
                article.id, article.title, article.content, article.category, article.description
            )

    async def batch_analyze(
        self, article_ids: Sequence[str], force_reanalyze: bool = False
    ) -> List[AIAnalysis]:
        results: List[AIAnalysis] = []
        for i in range(0, len(article_ids), BATCH_SIZE):
            chunk = article_ids[i:i + BATCH_SIZE]
            outcomes = await asyncio.gather(
                *(self._analyze_one(aid, self.cache, force_reanalyze) for aid in chunk),
                return_exceptions=True,
            )
            for aid, outcome in zip(chunk, outcomes):
                if isinstance(outcome, Exception):
                    logger.error("Batch analysis failed for %s: %s", aid, outcome)
                elif outcome is not None:
                    results.append(outcome)
        return results

    # -----------------------------
    # reporting
    # -----------------------------
    async def get_stats(self) -> Dict[str, Any]:
        total = (await self.session.execute(select(func.count(AIAnalysis.id)))).scalar() or 0
        successful = (await self.session.execute(
            select(func.count(AIAnalysis.id)).where(AIAnalysis.success.is_(True))
        )).scalar() or 0
        avg_time = (await self.session.execute(
            select(func.avg(AIAnalysis.processing_time)).where(AIAnalysis.success.is_(True))
        )).scalar()

        dist_rows = (await self.session.execute(
            select(AIAnalysis.sentiment, func.count(AIAnalysis.id))
            .where(AIAnalysis.success.is_(True))
            .group_by(AIAnalysis.sentiment)
        )).all()
        distribution = {s: 0 for s in SENTIMENTS}
        distribution.update({s: n for s, n in dist_rows})

        today_start = utcnow().replace(hour=0, minute=0, second=0, microsecond=0)
        today = (await self.session.execute(
            select(func.count(AIAnalysis.id)).where(AIAnalysis.processed_at >= today_start)
        )).scalar() or 0

        return {
            "totalAnalyses": total,
            "successfulAnalyses": successful,
            "failedAnalyses": total - successful,
            "averageProcessingTime": round(float(avg_time or 0)),
            "sentimentDistribution": distribution,
            "todayAnalyses": today,
            "successRate": round(successful / total * 100, 2) if total else 0,
            "popularKeywords": await self.get_popular_keywords(limit=10),
        }

    async def get_sentiment_trends(self, category: Optional[str] = None, days: int = 30) -> Dict[str, Any]:
        since = utcnow() - timedelta(days=days)
        stmt = select(AIAnalysis.sentiment, AIAnalysis.processed_at).where(
            AIAnalysis.success.is_(True), AIAnalysis.processed_at >= since
        )
        if category:
            stmt = stmt.where(AIAnalysis.category == category)
        rows = (await self.session.execute(stmt)).all()

        per_day: Dict[str, Dict[str, int]] = defaultdict(lambda: {s: 0 for s in SENTIMENTS})
        overall = {s: 0 for s in SENTIMENTS}
        for sentiment, processed_at in rows:
            if sentiment not in overall:
                continue
            per_day[processed_at.date().isoformat()][sentiment] += 1
            overall[sentiment] += 1

        trends = [
            {"date": day, **counts, "total": sum(counts.values())}
            for day, counts in sorted(per_day.items())
        ]
        return {"trends": trends, "overall": overall, "period": f"{days} days"}

    async def get_popular_keywords(self, category: Optional[str] = None, limit: int = 20) -> List[Dict[str, Any]]:
        since = utcnow() - timedelta(days=KEYWORD_WINDOW_DAYS)
        stmt = select(AIAnalysis.keywords).where(
            AIAnalysis.success.is_(True), AIAnalysis.processed_at >= since
        )
        if category:
            stmt = stmt.where(AIAnalysis.category == category)
        counts: Counter = Counter()
        for (keywords,) in (await self.session.execute(stmt)).all():
            counts.update(keywords or [])
        return [{"keyword": k, "count": n} for k, n in counts.most_common(limit)]
