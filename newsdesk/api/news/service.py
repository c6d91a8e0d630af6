# newsdesk/api/news/service.py
import logging
from typing import Optional, List, Dict, Any, Tuple
from datetime import datetime

from sqlalchemy import select, update, delete, func, desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.core.cache import (
    TTLCache,
    ARTICLE_TTL,
    ARTICLE_LIST_TTL,
    CATEGORIES_TTL,
    CATEGORIES_KEY,
    article_key,
    list_key,
    invalidate_article,
)
from newsdesk.core.exceptions import NotFoundError, ValidationError
from newsdesk.db.models import utcnow
from .category_models import normalize_category
from .dedup import compute_dedup_hash
from .models import Article, Comment

logger = logging.getLogger(__name__)

MAX_LIST_LIMIT = 100
DEFAULT_AUTHOR = "Anonymous"


# -----------------------------
# serialization
# -----------------------------
def _iso(dt: Optional[datetime]) -> Optional[str]:
    return dt.isoformat() if dt else None


def article_to_dict(a: Article) -> Dict[str, Any]:
    return {
        "id": a.id,
        "title": a.title,
        "description": a.description,
        "summary": a.summary,
        "content": a.content,
        "url": a.url,
        "source": {"name": a.source_name or "", "url": a.source_url or ""},
        "publishedAt": _iso(a.published_at),
        "category": a.category,
        "sentiment": a.sentiment,
        "keywords": a.keywords or [],
        "views": a.views,
        "popularity": a.popularity,
        "status": a.status,
        "dedupHash": a.dedup_hash,
        "createdAt": _iso(a.created_at),
        "updatedAt": _iso(a.updated_at),
        "fetchedAt": _iso(a.fetched_at),
    }


def comment_to_dict(c: Comment) -> Dict[str, Any]:
    return {
        "id": c.id,
        "articleId": c.article_id,
        "text": c.text,
        "authorName": c.author_name,
        "createdAt": _iso(c.created_at),
    }


def _apply_fields(article: Article, data: Dict[str, Any]) -> None:
    """Copy request fields (snake_case, `source` nested) onto the row."""
    source = data.pop("source", None)
    if source is not None:
        article.source_name = source.get("name") or None
        article.source_url = source.get("url") or None
    if "category" in data:
        data["category"] = normalize_category(data["category"])
    for field, value in data.items():
        setattr(article, field, value)


class NewsService:
    """Article and comment repository, read-through on the TTL cache."""

    def __init__(self, session: AsyncSession, cache: TTLCache):
        self.session = session
        self.cache = cache

    # -----------------------------
    # reads
    # -----------------------------
    async def list_articles(
        self,
        category: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        limit = max(1, min(limit, MAX_LIST_LIMIT))
        category = normalize_category(category)
        key = list_key(category, limit, offset)

        cached = self.cache.get(key)
        if cached is not None:
            return cached

        stmt = select(Article).where(Article.status == "published")
        if category:
            stmt = stmt.where(Article.category == category)
        stmt = stmt.order_by(desc(Article.published_at)).offset(offset).limit(limit)
        rows = (await self.session.execute(stmt)).scalars().all()

        items = [article_to_dict(a) for a in rows]
        self.cache.set(key, items, ARTICLE_LIST_TTL)
        return items

    async def get_model(self, article_id: str) -> Optional[Article]:
        return await self.session.get(Article, article_id)

    async def get_article(self, article_id: str) -> Dict[str, Any]:
        key = article_key(article_id)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        article = await self.get_model(article_id)
        if not article:
            raise NotFoundError("Article not found")
        item = article_to_dict(article)
        self.cache.set(key, item, ARTICLE_TTL)
        return item

    async def list_categories(self) -> List[Dict[str, Any]]:
        cached = self.cache.get(CATEGORIES_KEY)
        if cached is not None:
            return cached

        stmt = (
            select(Article.category, func.count(Article.id))
            .where(Article.status == "published", Article.category.is_not(None))
            .group_by(Article.category)
            .order_by(desc(func.count(Article.id)))
        )
        rows = (await self.session.execute(stmt)).all()
        cats = [{"category": c, "count": n} for c, n in rows]
        self.cache.set(CATEGORIES_KEY, cats, CATEGORIES_TTL)
        return cats

    # -----------------------------
    # writes
    # -----------------------------
    async def create_article(self, data: Dict[str, Any]) -> Dict[str, Any]:
        article = Article(title=data["title"])
        _apply_fields(article, dict(data))
        if article.published_at is None:
            article.published_at = utcnow()
        if article.url:
            article.dedup_hash = compute_dedup_hash(article.url, article.title)

        # manual creates never touch fetched_at, which drives the fetch gate
        stored, created = await self.insert_if_absent(article, touch=False)
        if not created:
            raise ValidationError("An article with the same url and title already exists")
        logger.info("Article created: %s", stored.id)
        return article_to_dict(stored)

    async def update_article(self, article_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        article = await self.get_model(article_id)
        if not article:
            raise NotFoundError("Article not found")
        old_category = article.category

        _apply_fields(article, dict(updates))
        article.updated_at = utcnow()
        self.session.add(article)
        await self.session.commit()
        await self.session.refresh(article)

        invalidate_article(self.cache, article_id, old_category)
        if article.category != old_category:
            invalidate_article(self.cache, article_id, article.category)
        return article_to_dict(article)

    async def delete_article(self, article_id: str) -> None:
        article = await self.get_model(article_id)
        if not article:
            raise NotFoundError("Article not found")
        category = article.category

        await self.session.execute(delete(Comment).where(Comment.article_id == article_id))
        await self.session.delete(article)
        await self.session.commit()

        invalidate_article(self.cache, article_id, category)
        logger.info("Article deleted: %s", article_id)

    async def increment_views(self, article_id: str) -> None:
        result = await self.session.execute(
            update(Article)
            .where(Article.id == article_id)
            .values(views=Article.views + 1)
        )
        if result.rowcount == 0:
            await self.session.rollback()
            raise NotFoundError("Article not found")
        await self.session.commit()
        # views appear in the cached detail
        self.cache.delete(article_key(article_id))

    # -----------------------------
    # comments
    # -----------------------------
    async def add_comment(
        self, article_id: str, text: Optional[str], author_name: Optional[str] = None
    ) -> Dict[str, Any]:
        text = (text or "").strip()
        if not text:
            raise ValidationError("Comment text is required")
        if not await self.get_model(article_id):
            raise NotFoundError("Article not found")

        comment = Comment(
            article_id=article_id,
            text=text,
            author_name=(author_name or "").strip() or DEFAULT_AUTHOR,
        )
        self.session.add(comment)
        await self.session.commit()
        await self.session.refresh(comment)
        return comment_to_dict(comment)

    async def list_comments(self, article_id: str) -> List[Dict[str, Any]]:
        stmt = (
            select(Comment)
            .where(Comment.article_id == article_id)
            .order_by(Comment.created_at, Comment.id)
        )
        rows = (await self.session.execute(stmt)).scalars().all()
        return [comment_to_dict(c) for c in rows]

    # -----------------------------
    # ingestion helpers
    # -----------------------------
    async def find_by_dedup_hash(self, dedup_hash: str) -> Optional[Article]:
        stmt = select(Article).where(Article.dedup_hash == dedup_hash)
        return (await self.session.execute(stmt)).scalars().first()

    async def touch_fetched(self, article: Article) -> Article:
        article.fetched_at = utcnow()
        self.session.add(article)
        await self.session.commit()
        self.cache.delete(article_key(article.id))
        return article

    async def insert_if_absent(self, article: Article, touch: bool = True) -> Tuple[Article, bool]:
        """
        Insert unless an article with the same dedup hash exists.
        Returns (stored_article, created). On a hit the existing row's
        fetched_at is refreshed instead, unless ``touch`` is False.
        """
        if article.dedup_hash:
            existing = await self.find_by_dedup_hash(article.dedup_hash)
            if existing:
                return (await self.touch_fetched(existing) if touch else existing), False

        self.session.add(article)
        try:
            await self.session.commit()
        except IntegrityError:
            # lost the race on the unique index
            await self.session.rollback()
            existing = await self.find_by_dedup_hash(article.dedup_hash) if article.dedup_hash else None
            if existing is None:
                raise
            logger.info("Duplicate insert resolved to existing article %s", existing.id)
            return (await self.touch_fetched(existing) if touch else existing), False

        await self.session.refresh(article)
        invalidate_article(self.cache, article.id, article.category)
        return article, True

    async def latest_fetch_time(self, category: str) -> Optional[datetime]:
        stmt = select(func.max(Article.fetched_at)).where(
            Article.category == normalize_category(category)
        )
        return (await self.session.execute(stmt)).scalar()

