# newsdesk/api/news/schemas.py
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts both camelCase (frontend) and snake_case keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -----------------------------
# comments
# -----------------------------
class CommentCreate(CamelModel):
    text: Optional[str] = ""
    author_name: Optional[str] = None


# -----------------------------
# AI fetch
# -----------------------------
class FetchNewsRequest(CamelModel):
    category: str = "informatique"
    force_refresh: bool = False
    limit: int = Field(5, ge=1, le=20)


# -----------------------------
# article management
# -----------------------------
class SourceIn(BaseModel):
    name: str = ""
    url: str = ""


class ArticleCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=100, max_length=50000)
    description: Optional[str] = None
    summary: Optional[str] = Field(default=None, max_length=500)
    url: Optional[str] = Field(default=None, pattern=r"^https?://.+")
    source: Optional[SourceIn] = None
    category: Optional[str] = None
    published_at: Optional[datetime] = None
    status: str = Field("published", pattern=r"^(draft|published|archived)$")
    keywords: Optional[List[str]] = None


class ArticleUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    content: Optional[str] = Field(default=None, min_length=100, max_length=50000)
    description: Optional[str] = None
    summary: Optional[str] = Field(default=None, max_length=500)
    url: Optional[str] = Field(default=None, pattern=r"^https?://.+")
    source: Optional[SourceIn] = None
    category: Optional[str] = None
    published_at: Optional[datetime] = None
    status: Optional[str] = Field(default=None, pattern=r"^(draft|published|archived)$")
    keywords: Optional[List[str]] = None
    sentiment: Optional[str] = Field(default=None, pattern=r"^(positive|negative|neutral)$")
