# newsdesk/api/search/schemas.py
from typing import Optional
from pydantic import Field

from newsdesk.api.news.schemas import CamelModel


class SearchLogCreate(CamelModel):
    query: str = Field(..., min_length=1, max_length=200)
    category: Optional[str] = None
    result_count: int = Field(0, ge=0)
    user_id: Optional[str] = None
