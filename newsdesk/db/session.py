# newsdesk/db/session.py
from typing import AsyncGenerator, Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

from newsdesk.config import settings

# ---------------------------------------------------------------------
# ENV
# ---------------------------------------------------------------------
DATABASE_URL = settings.DATABASE_URL
IS_SQLITE = DATABASE_URL.startswith("sqlite")

# pgbouncer poolers manage connections themselves; sqlite files are cheap to reopen
USE_NULLPOOL = (
    IS_SQLITE
    or "pooler.supabase.com" in DATABASE_URL
    or settings.DB_USE_NULLPOOL
)

# ---------------------------------------------------------------------
# ENGINE
# ---------------------------------------------------------------------
engine_kwargs = dict(
    echo=settings.SQL_ECHO,
    future=True,
    pool_pre_ping=True,
)

if USE_NULLPOOL:
    engine_kwargs["poolclass"] = NullPool
else:
    engine_kwargs["pool_recycle"] = settings.DB_POOL_RECYCLE

engine = create_async_engine(DATABASE_URL, **engine_kwargs)

# ---------------------------------------------------------------------
# SESSION FACTORY
# ---------------------------------------------------------------------
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False,
)

# ---------------------------------------------------------------------
# DEPENDENCY
# ---------------------------------------------------------------------
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise

SessionDep = Annotated[AsyncSession, Depends(get_session)]

# ---------------------------------------------------------------------
# DDL
# ---------------------------------------------------------------------
def _register_tables() -> None:
    # table modules must be imported so they land on SQLModel.metadata
    import newsdesk.api.news.models  # noqa: F401
    import newsdesk.api.search.models  # noqa: F401
    import newsdesk.ai.models  # noqa: F401

async def create_db_and_tables() -> None:
    _register_tables()
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

async def drop_db_and_tables() -> None:
    _register_tables()
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)

async def dispose_engine() -> None:
    await engine.dispose()
