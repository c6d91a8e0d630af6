# newsdesk/ai/models.py
from typing import Optional, List
from datetime import datetime
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field, Column, JSON

from newsdesk.db.models import new_id, utcnow


class AIAnalysis(SQLModel, table=True):
    """One analysis run. Rows are never updated; the newest successful one wins."""
    __tablename__ = "ai_analyses"
    id: str = Field(default_factory=new_id, primary_key=True)
    # no FK: analyses may outlive their article
    article_id: str = Field(index=True)
    category: Optional[str] = Field(default=None, index=True)
    summary: str = ""
    key_points: Optional[List[str]] = Field(default=None, sa_column=Column(JSON))
    keywords: Optional[List[str]] = Field(default=None, sa_column=Column(JSON))
    sentiment: str = "neutral"
    sentiment_score: float = 0.5
    confidence: float = 0.0
    related_topics: Optional[List[str]] = Field(default=None, sa_column=Column(JSON))
    processed_at: datetime = Field(default_factory=utcnow, index=True, sa_type=DateTime(timezone=False))
    processing_time: int = 0  # ms
    success: bool = True
