"""Shared fixtures: a throwaway SQLite database and an app client."""

import asyncio
import os
import tempfile

# must be set before newsdesk.config is imported
_DB_DIR = tempfile.mkdtemp(prefix="newsdesk-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR}/test.db"
os.environ["SKIP_DB_INIT"] = "1"
os.environ["GEMINI_API_KEY"] = ""
os.environ["OPENAI_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient

from newsdesk.core.cache import TTLCache
from newsdesk.db.session import AsyncSessionLocal, create_db_and_tables, drop_db_and_tables


LONG_CONTENT = (
    "Le gouvernement a annoncé une réforme importante du système de santé. "
    "Selon le ministre, cette réforme révèle une nouvelle approche du financement. "
    "Les hôpitaux recevront des moyens supplémentaires dès le mois prochain."
)


async def _reset():
    await drop_db_and_tables()
    await create_db_and_tables()


@pytest.fixture
def reset_db():
    asyncio.run(_reset())


@pytest.fixture
def client(reset_db):
    from newsdesk.main import app
    with TestClient(app) as c:
        yield c


@pytest.fixture
def run_with_service():
    """Run ``fn(service)`` against a fresh session; returns fn's result."""
    def _run(service_cls, fn, cache=None):
        async def go():
            async with AsyncSessionLocal() as session:
                return await fn(service_cls(session, cache if cache is not None else TTLCache()))
        return asyncio.run(go())
    return _run


@pytest.fixture
def article_payload():
    """Factory for a valid POST /api/articles body."""
    def _make(**overrides):
        payload = {
            "title": "Réforme de la santé",
            "content": LONG_CONTENT,
            "description": "Une réforme annoncée",
            "url": "https://www.lemonde.fr/sante/reforme",
            "source": {"name": "Le Monde", "url": "https://www.lemonde.fr"},
            "category": "Santé",
        }
        payload.update(overrides)
        return payload
    return _make
