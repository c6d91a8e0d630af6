# newsdesk/api/news/fetcher.py
"""
AI news ingestion: fetch gate -> provider -> dedup -> heuristic analysis -> insert.

The gate skips a category whose newest fetch is younger than
FETCH_CACHE_MINUTES. Concurrent fetches for one category share a single run.
"""
import logging
import secrets
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from newsdesk.ai import providers
from newsdesk.ai.analyzer import analyze_article
from newsdesk.config import settings
from newsdesk.core.singleflight import SingleFlight
from newsdesk.db.models import utcnow
from .category_models import normalize_category
from .dedup import compute_dedup_hash
from .models import Article
from .service import NewsService, article_to_dict

logger = logging.getLogger(__name__)

FALLBACK_URL = "https://news.example.com/{}"
RECENTLY_FETCHED = "News for this category was fetched less than an hour ago"


@dataclass
class FetchResult:
    success: bool
    articles: List[Dict[str, Any]] = field(default_factory=list)
    message: str = ""


async def should_fetch_news(
    service: NewsService,
    category: str,
    now: Optional[datetime] = None,
) -> bool:
    """True when the category has never been fetched or its newest fetch is stale."""
    try:
        last = await service.latest_fetch_time(category)
    except Exception:
        logger.exception("Fetch gate lookup failed for %s, fetching anyway", category)
        return True
    if last is None:
        return True
    now = now or utcnow()
    return now - last > timedelta(minutes=settings.FETCH_CACHE_MINUTES)


def _text(value: Any) -> str:
    # model output is untyped: anything but a string counts as missing
    return value.strip() if isinstance(value, str) else ""


def build_article(item: Dict[str, Any], category: str, provider_label: str) -> Article:
    """Provider item -> Article with defaults filled and heuristics applied."""
    title = _text(item.get("title")) or "Untitled"
    description = _text(item.get("description"))
    content = _text(item.get("content")) or description
    url = _text(item.get("url")) or FALLBACK_URL.format(secrets.token_hex(4))
    source = _text(item.get("source")) or provider_label

    analysis = analyze_article(title, content, description)
    now = utcnow()
    return Article(
        title=title,
        description=description,
        summary=analysis.summary,
        content=content,
        url=url,
        source_name=source,
        source_url=url,
        published_at=now,
        category=category,
        dedup_hash=compute_dedup_hash(url, title),
        sentiment=analysis.sentiment,
        keywords=analysis.keywords,
        status="published",
        fetched_at=now,
    )


async def _ingest(
    service: NewsService,
    category: str,
    limit: int,
    force_refresh: bool,
) -> FetchResult:
    if not force_refresh and not await should_fetch_news(service, category):
        logger.info("Skipping fetch for %s: %s", category, RECENTLY_FETCHED)
        return FetchResult(success=False, message=RECENTLY_FETCHED)

    items, label = await providers.fetch_news(category, limit)
    if not items:
        return FetchResult(success=True, message=f"No new articles ({label})")

    added: List[Dict[str, Any]] = []
    for item in items:
        article, created = await service.insert_if_absent(build_article(item, category, label))
        if created:
            added.append(article_to_dict(article))
        else:
            logger.info("Duplicate article skipped: %s", article.title)

    logger.info("Fetched %d items for %s via %s, %d new", len(items), category, label, len(added))
    return FetchResult(
        success=True,
        articles=added,
        message=f"{len(added)} new articles added ({label})",
    )


async def fetch_real_news_with_ai(
    service: NewsService,
    flights: SingleFlight,
    category: str = "informatique",
    limit: int = 5,
    force_refresh: bool = False,
) -> FetchResult:
    category = normalize_category(category) or "informatique"
    # a forced refresh must not join a gated run
    return await flights.do(
        ("fetch", category, force_refresh),
        lambda: _ingest(service, category, limit, force_refresh),
    )
