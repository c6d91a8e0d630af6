# newsdesk/api/search/service.py
import logging
import re
from datetime import timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy import String, cast, desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.api.news.category_models import normalize_category
from newsdesk.api.news.models import Article
from newsdesk.api.news.service import article_to_dict
from newsdesk.core.cache import SEARCH_TTL, TTLCache, search_key
from newsdesk.core.exceptions import ValidationError
from newsdesk.db.models import utcnow
from .models import SearchLog

logger = logging.getLogger(__name__)

MIN_QUERY = 2
MAX_QUERY = 200
TRENDING_DAYS = 7
# letters, digits, spaces, dashes and French accented letters
_QUERY_RE = re.compile(r"^[a-zA-Z0-9\s\-àâäéèêëïîôöùûüÿçœæÀÂÄÉÈÊËÏÎÔÖÙÛÜŸÇŒÆ]+$")


def validate_query(q: Optional[str]) -> str:
    q = (q or "").strip()
    if len(q) < MIN_QUERY:
        raise ValidationError(f"Search query must be at least {MIN_QUERY} characters")
    if len(q) > MAX_QUERY:
        raise ValidationError(f"Search query must be at most {MAX_QUERY} characters")
    if not _QUERY_RE.match(q):
        raise ValidationError("Search query contains invalid characters")
    return q


def _matches(q: str):
    pattern = f"%{q}%"
    return or_(
        Article.title.ilike(pattern),
        Article.description.ilike(pattern),
        Article.summary.ilike(pattern),
        Article.content.ilike(pattern),
        cast(Article.keywords, String).ilike(pattern),
    )


class SearchService:
    def __init__(self, session: AsyncSession, cache: TTLCache):
        self.session = session
        self.cache = cache

    async def search_articles(
        self,
        q: str,
        category: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Dict[str, Any]:
        q = validate_query(q)
        category = normalize_category(category)
        key = search_key(q.lower(), category, limit, offset)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        where = [Article.status == "published", _matches(q)]
        if category:
            where.append(Article.category == category)

        total = (await self.session.execute(
            select(func.count(Article.id)).where(*where)
        )).scalar() or 0
        rows = (await self.session.execute(
            select(Article)
            .where(*where)
            .order_by(desc(Article.published_at))
            .offset(offset)
            .limit(limit)
        )).scalars().all()

        result = {"articles": [article_to_dict(a) for a in rows], "total": total}
        self.cache.set(key, result, SEARCH_TTL)
        return result

    async def get_suggestions(self, q: Optional[str], limit: int = 10) -> List[str]:
        q = (q or "").strip()
        if len(q) < MIN_QUERY:
            return []
        pattern = f"%{q}%"
        needle = q.lower()

        titles = (await self.session.execute(
            select(Article.title)
            .where(Article.status == "published", Article.title.ilike(pattern))
            .order_by(desc(Article.published_at))
            .limit(limit)
        )).scalars().all()
        keyword_lists = (await self.session.execute(
            select(Article.keywords)
            .where(Article.status == "published", cast(Article.keywords, String).ilike(pattern))
            .limit(limit)
        )).scalars().all()

        suggestions: Dict[str, None] = {}
        for title in titles:
            suggestions.setdefault(title, None)
        for keywords in keyword_lists:
            for kw in keywords or []:
                if needle in kw.lower():
                    suggestions.setdefault(kw, None)
        return list(suggestions)[:limit]

    async def log_search(
        self,
        query: str,
        category: Optional[str] = None,
        result_count: int = 0,
        user_id: Optional[str] = None,
        ip: Optional[str] = None,
    ) -> None:
        self.session.add(SearchLog(
            query=query.strip(),
            category=normalize_category(category),
            result_count=result_count,
            user_id=user_id,
            ip=ip,
        ))
        await self.session.commit()
        logger.debug("Search logged: %s (%d results)", query, result_count)

    async def get_trending_terms(self, limit: int = 10) -> List[Dict[str, Any]]:
        since = utcnow() - timedelta(days=TRENDING_DAYS)
        term = func.lower(SearchLog.query)
        rows = (await self.session.execute(
            select(term, func.count(SearchLog.id))
            .where(SearchLog.timestamp >= since)
            .group_by(term)
            .order_by(desc(func.count(SearchLog.id)))
            .limit(limit)
        )).all()
        return [{"term": t, "count": n} for t, n in rows]
