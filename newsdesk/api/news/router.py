# newsdesk/api/news/router.py
import logging
from typing import Optional

from fastapi import APIRouter, Query, Response, status

from .dependencies import NewsServiceDep, CacheDep, SingleFlightDep
from .fetcher import fetch_real_news_with_ai
from .schemas import ArticleCreate, ArticleUpdate, CommentCreate, FetchNewsRequest
from .service import MAX_LIST_LIMIT

logger = logging.getLogger(__name__)

router = APIRouter(tags=["news"])


# ------------------------------
# list
# ------------------------------
@router.get("/news", summary="List articles", description="Newest first, optional category filter.")
async def list_news(
    service: NewsServiceDep,
    category: Optional[str] = None,
    limit: int = Query(20, ge=1),
    offset: int = Query(0, ge=0),
):
    # over-limit requests are clamped rather than rejected
    articles = await service.list_articles(
        category=category, limit=min(limit, MAX_LIST_LIMIT), offset=offset
    )
    return {"ok": True, "articles": articles}


@router.get("/categories", summary="Categories with article counts")
async def list_categories(service: NewsServiceDep):
    return {"ok": True, "categories": await service.list_categories()}


# ------------------------------
# detail / management
# ------------------------------
@router.get("/articles/{article_id}", summary="Get one article")
async def get_article(article_id: str, service: NewsServiceDep):
    return {"ok": True, "article": await service.get_article(article_id)}


@router.post("/articles", status_code=status.HTTP_201_CREATED, summary="Create an article")
async def create_article(body: ArticleCreate, service: NewsServiceDep):
    article = await service.create_article(body.model_dump())
    return {"ok": True, "article": article}


@router.put("/articles/{article_id}", summary="Update an article")
async def update_article(article_id: str, body: ArticleUpdate, service: NewsServiceDep):
    updates = body.model_dump(exclude_unset=True, exclude_none=True)
    article = await service.update_article(article_id, updates)
    return {"ok": True, "article": article}


@router.delete("/articles/{article_id}", summary="Delete an article and its comments")
async def delete_article(article_id: str, service: NewsServiceDep):
    await service.delete_article(article_id)
    return {"ok": True, "message": "Article deleted"}


@router.post(
    "/articles/{article_id}/views",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Increment view counter",
)
async def increment_views(article_id: str, service: NewsServiceDep):
    await service.increment_views(article_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ------------------------------
# comments
# ------------------------------
@router.get("/articles/{article_id}/comments", summary="Comments, oldest first")
async def list_comments(article_id: str, service: NewsServiceDep):
    return {"ok": True, "comments": await service.list_comments(article_id)}


@router.post("/articles/{article_id}/comments", summary="Add a comment")
async def add_comment(article_id: str, body: CommentCreate, service: NewsServiceDep):
    comment = await service.add_comment(article_id, body.text, body.author_name)
    return {"ok": True, "comment": comment}


# ------------------------------
# AI ingestion
# ------------------------------
@router.post(
    "/fetch-ai-news",
    summary="Fetch fresh articles from an LLM provider",
    description="Skipped when the category was fetched within the last hour unless forceRefresh is set.",
)
async def fetch_ai_news(
    service: NewsServiceDep,
    flights: SingleFlightDep,
    body: Optional[FetchNewsRequest] = None,
):
    body = body or FetchNewsRequest()
    result = await fetch_real_news_with_ai(
        service,
        flights,
        category=body.category,
        limit=body.limit,
        force_refresh=body.force_refresh,
    )
    if not result.success:
        return {"ok": False, "message": result.message}
    return {
        "ok": True,
        "message": result.message,
        "addedCount": len(result.articles),
        "articles": result.articles,
    }


# ------------------------------
# cache
# ------------------------------
@router.post("/cache/clear", summary="Drop every cached read")
async def clear_cache(cache: CacheDep):
    cache.clear()
    return {"ok": True, "message": "Cache cleared"}
