# newsdesk/api/search/router.py
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status

from newsdesk.api.news.dependencies import CacheDep
from newsdesk.db.session import SessionDep
from .schemas import SearchLogCreate
from .service import SearchService

router = APIRouter(prefix="/search", tags=["search"])


async def get_search_service(session: SessionDep, cache: CacheDep) -> SearchService:
    return SearchService(session, cache)

SearchServiceDep = Annotated[SearchService, Depends(get_search_service)]


@router.get("", summary="Full-text-ish article search")
async def search(
    service: SearchServiceDep,
    q: str = Query(""),
    category: Optional[str] = None,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    # q is validated by the service so errors share the envelope
    result = await service.search_articles(q, category, limit, offset)
    return {"ok": True, "articles": result["articles"], "query": q.strip(), "total": result["total"]}


@router.get("/suggestions", summary="Titles and keywords containing q")
async def suggestions(
    service: SearchServiceDep,
    q: str = Query(""),
    limit: int = Query(10, ge=1, le=50),
):
    return {"ok": True, "suggestions": await service.get_suggestions(q, limit)}


@router.get("/trending", summary="Most searched terms, last 7 days")
async def trending(service: SearchServiceDep, limit: int = Query(10, ge=1, le=50)):
    return {"ok": True, "trending": await service.get_trending_terms(limit)}


@router.post("/log", status_code=status.HTTP_204_NO_CONTENT, summary="Record a search")
async def log_search(body: SearchLogCreate, request: Request, service: SearchServiceDep):
    ip = request.client.host if request.client else None
    await service.log_search(body.query, body.category, body.result_count, body.user_id, ip)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
