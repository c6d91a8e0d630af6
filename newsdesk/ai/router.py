# newsdesk/ai/router.py
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from newsdesk.api.news.dependencies import CacheDep
from newsdesk.config import settings
from newsdesk.core.exceptions import NotFoundError
from newsdesk.db.session import SessionDep
from .classifier import classify_category
from .credibility import detect_fake_news
from .lexicons import load_lexicons
from .schemas import BatchAnalyzeRequest, ClassifyRequest, FakeNewsRequest
from .service import AIService, analysis_to_dict

router = APIRouter(prefix="/ai", tags=["ai"])


async def get_ai_service(session: SessionDep, cache: CacheDep) -> AIService:
    return AIService(session, cache)

AIServiceDep = Annotated[AIService, Depends(get_ai_service)]


# ------------------------------
# per-article analysis
# ------------------------------
@router.post("/analyze/{article_id}", summary="Analyze a stored article and write results back")
async def analyze_article_by_id(article_id: str, service: AIServiceDep):
    result = await service.analyze_stored_article(article_id)
    return {"ok": True, **result}


@router.get("/analysis/{article_id}", summary="Latest successful analysis of an article")
async def get_analysis(article_id: str, service: AIServiceDep):
    analysis = await service.get_latest_analysis(article_id)
    if not analysis:
        raise NotFoundError("No analysis found for this article")
    return {"ok": True, "analysis": analysis_to_dict(analysis)}


@router.post("/batch-analyze", summary="Analyze several articles, five at a time")
async def batch_analyze(body: BatchAnalyzeRequest, service: AIServiceDep):
    analyses = await service.batch_analyze(body.article_ids, body.force_reanalyze)
    return {
        "ok": True,
        "processed": len(analyses),
        "requested": len(body.article_ids),
        "analyses": [analysis_to_dict(a) for a in analyses],
    }


# ------------------------------
# stateless heuristics
# ------------------------------
@router.post("/fake-news", summary="Score a text for fake-news signals")
async def fake_news(body: FakeNewsRequest):
    report = detect_fake_news(body.title, body.content, body.source, body.url)
    return {
        "ok": True,
        "detection": {"score": report.score, "factors": report.factors, "reliable": report.reliable},
    }


@router.post("/classify", summary="Guess the category of a text")
async def classify(body: ClassifyRequest):
    result = classify_category(body.title, body.content)
    return {
        "ok": True,
        "classification": {
            "category": result.category,
            "confidence": result.confidence,
            "alternatives": [
                {"category": alt.category, "confidence": alt.confidence}
                for alt in result.alternatives
            ],
        },
    }


# ------------------------------
# reporting
# ------------------------------
@router.get("/stats", summary="Analysis counters")
async def stats(service: AIServiceDep):
    return {"ok": True, "stats": await service.get_stats()}


@router.get("/sentiment-trends", summary="Sentiment per day")
async def sentiment_trends(
    service: AIServiceDep,
    category: Optional[str] = None,
    days: int = Query(30, ge=1, le=365),
):
    return {"ok": True, **await service.get_sentiment_trends(category, days)}


@router.get("/keywords/popular", summary="Most frequent analysis keywords, last 30 days")
async def popular_keywords(
    service: AIServiceDep,
    category: Optional[str] = None,
    limit: int = Query(20, ge=1, le=100),
):
    return {"ok": True, "keywords": await service.get_popular_keywords(category, limit)}


@router.get("/health", summary="Heuristics and provider availability")
async def ai_health():
    return {
        "ok": True,
        "status": "healthy",
        "lexiconVersion": load_lexicons().version,
        "providers": {
            "gemini": bool(settings.GEMINI_API_KEY),
            "openai": bool(settings.OPENAI_API_KEY),
        },
    }
