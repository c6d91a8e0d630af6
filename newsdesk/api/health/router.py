# newsdesk/api/health/router.py
import logging

from fastapi import APIRouter
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from newsdesk.db.session import SessionDep

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def health():
    return {"ok": True, "message": "News API is running"}


@router.get("/z")
async def healthz(db: SessionDep):
    try:
        await db.execute(select(1))
        return {"ok": True}
    except SQLAlchemyError as e:
        logger.error("Database ping failed: %s", e)
        return {"ok": False, "error": "database unavailable"}
