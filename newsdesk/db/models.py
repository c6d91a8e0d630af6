# newsdesk/db/models.py
"""Helpers shared by every table module."""
import secrets
from datetime import datetime, timezone


def utcnow() -> datetime:
    # columns are naive timestamps holding UTC wall time
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    """Store-assigned document id (20 hex chars)."""
    return secrets.token_hex(10)
