# newsdesk/api/news/dependencies.py
from typing import Annotated
from fastapi import Depends, Request

from newsdesk.core.cache import TTLCache
from newsdesk.core.singleflight import SingleFlight
from newsdesk.db.session import SessionDep
from .service import NewsService

"""
Process-wide services live on app.state (set up in the lifespan) so tests can
swap them per app instance.
"""


def get_cache(request: Request) -> TTLCache:
    return request.app.state.cache


def get_flights(request: Request) -> SingleFlight:
    return request.app.state.flights


CacheDep = Annotated[TTLCache, Depends(get_cache)]
SingleFlightDep = Annotated[SingleFlight, Depends(get_flights)]


async def get_news_service(session: SessionDep, cache: CacheDep) -> NewsService:
    """NewsService dependency injection"""
    return NewsService(session, cache)

NewsServiceDep = Annotated[NewsService, Depends(get_news_service)]
