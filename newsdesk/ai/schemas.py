# newsdesk/ai/schemas.py
from typing import List, Optional
from pydantic import Field

from newsdesk.api.news.schemas import CamelModel


class BatchAnalyzeRequest(CamelModel):
    article_ids: List[str] = Field(..., min_length=1, max_length=50)
    force_reanalyze: bool = False


class FakeNewsRequest(CamelModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    source: Optional[str] = None
    url: Optional[str] = None


class ClassifyRequest(CamelModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
