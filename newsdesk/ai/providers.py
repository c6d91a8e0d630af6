# newsdesk/ai/providers.py
"""
LLM news providers (Gemini, OpenAI) called over plain HTTP.

Each fetch_* raises UpstreamError on any failure. ``fetch_news`` chains them
and degrades to an empty "No Data" result; it never raises.
"""
import json
import logging
import re
from typing import Any, Dict, List, Tuple

import httpx

from newsdesk.config import settings
from newsdesk.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
OPENAI_URL = "https://api.openai.com/v1/chat/completions"
NO_DATA = "No Data"

_JSON_ARRAY = re.compile(r"\[[\s\S]*\]")

RawNewsItem = Dict[str, Any]


def build_prompt(category: str, limit: int) -> str:
    return (
        f'Donne-moi {limit} actualités récentes du domaine "{category}" en français.\n'
        "Format JSON exact:\n"
        "[\n"
        "  {\n"
        '    "title": "Titre de l\'actualité",\n'
        '    "description": "Description courte",\n'
        '    "content": "Contenu détaillé de l\'article",\n'
        '    "url": "https://example.com",\n'
        '    "source": "Nom de la source"\n'
        "  }\n"
        "]\n"
        "UNIQUEMENT du JSON valide, aucun autre texte."
    )


def parse_news_items(text: str) -> List[RawNewsItem]:
    """First [...] block of a model reply, as a list of dicts."""
    match = _JSON_ARRAY.search(text or "")
    if not match:
        raise UpstreamError("Invalid response format")
    try:
        items = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise UpstreamError(f"Invalid JSON in response: {e}") from e
    if not isinstance(items, list):
        raise UpstreamError("Invalid response format")
    return [it for it in items if isinstance(it, dict)]


async def fetch_news_with_gemini(category: str, limit: int = 5) -> List[RawNewsItem]:
    if not settings.GEMINI_API_KEY:
        raise UpstreamError("GEMINI_API_KEY not configured")

    url = GEMINI_URL.format(model=settings.GEMINI_MODEL)
    payload = {"contents": [{"parts": [{"text": build_prompt(category, limit)}]}]}
    logger.info("Calling Gemini for category %s", category)
    try:
        async with httpx.AsyncClient(timeout=settings.GEMINI_TIMEOUT) as client:
            r = await client.post(url, params={"key": settings.GEMINI_API_KEY}, json=payload)
            r.raise_for_status()
            data = r.json()
    except (httpx.HTTPError, ValueError) as e:
        raise UpstreamError(f"Gemini request failed: {e}") from e

    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        text = ""
    logger.debug("Gemini response text: %s", text[:200])
    return parse_news_items(text)


async def fetch_news_with_openai(category: str, limit: int = 5) -> List[RawNewsItem]:
    if not settings.OPENAI_API_KEY:
        raise UpstreamError("OPENAI_API_KEY not configured")

    payload = {
        "model": settings.OPENAI_MODEL,
        "messages": [{"role": "user", "content": build_prompt(category, limit)}],
        "temperature": 0.7,
        "max_tokens": 2000,
    }
    headers = {"Authorization": f"Bearer {settings.OPENAI_API_KEY}"}
    logger.info("Calling OpenAI for category %s", category)
    try:
        async with httpx.AsyncClient(timeout=settings.OPENAI_TIMEOUT) as client:
            r = await client.post(OPENAI_URL, json=payload, headers=headers)
            r.raise_for_status()
            data = r.json()
    except (httpx.HTTPError, ValueError) as e:
        raise UpstreamError(f"OpenAI request failed: {e}") from e

    try:
        text = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        text = ""
    return parse_news_items(text)


async def fetch_news(category: str, limit: int = 5) -> Tuple[List[RawNewsItem], str]:
    """Gemini first, then OpenAI, then nothing. Returns (items, provider label)."""
    providers = []
    if settings.GEMINI_API_KEY:
        providers.append(("Gemini", fetch_news_with_gemini))
    if settings.OPENAI_API_KEY:
        providers.append(("OpenAI", fetch_news_with_openai))
    if not providers:
        logger.warning("No AI API keys available, no data")

    for label, fetch in providers:
        try:
            return await fetch(category, limit), label
        except UpstreamError as e:
            logger.warning("%s failed: %s", label, e.message)

    return [], NO_DATA
