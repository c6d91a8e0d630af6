# newsdesk/api/news/models.py
from typing import Optional, List
from datetime import datetime
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field, Column, JSON

from newsdesk.db.models import new_id, utcnow


class Article(SQLModel, table=True):
    __tablename__ = "articles"
    id: str = Field(default_factory=new_id, primary_key=True)
    title: str
    description: Optional[str] = None
    summary: Optional[str] = None
    content: Optional[str] = None
    url: Optional[str] = None
    source_name: Optional[str] = None
    source_url: Optional[str] = None
    published_at: Optional[datetime] = Field(default_factory=utcnow, index=True, sa_type=DateTime(timezone=False))
    category: Optional[str] = Field(default=None, index=True)
    # md5(url + title); unique so a racing duplicate insert fails instead of landing
    dedup_hash: Optional[str] = Field(default=None, unique=True, index=True)
    sentiment: Optional[str] = None
    keywords: Optional[List[str]] = Field(default=None, sa_column=Column(JSON))
    views: int = 0
    popularity: float = 0.0
    status: str = Field(default="published", index=True)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=False))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=False))
    fetched_at: Optional[datetime] = Field(default=None, index=True, sa_type=DateTime(timezone=False))


class Comment(SQLModel, table=True):
    __tablename__ = "comments"
    id: str = Field(default_factory=new_id, primary_key=True)
    article_id: str = Field(foreign_key="articles.id", index=True)
    text: str
    author_name: str = "Anonymous"
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=False))
