# newsdesk/api/search/models.py
from typing import Optional
from datetime import datetime
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field

from newsdesk.db.models import utcnow


class SearchLog(SQLModel, table=True):
    __tablename__ = "search_logs"
    id: Optional[int] = Field(default=None, primary_key=True)
    query: str = Field(index=True)
    category: Optional[str] = None
    result_count: int = 0
    user_id: Optional[str] = None
    ip: Optional[str] = None
    timestamp: datetime = Field(default_factory=utcnow, index=True, sa_type=DateTime(timezone=False))
