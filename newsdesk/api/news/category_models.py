# newsdesk/api/news/category_models.py
from typing import Optional

from newsdesk.ai.text import slugify

# legacy / English names the frontend or providers may send
_ALIASES = {
    "tech": "technologie",
    "technology": "technologie",
    "sports": "sport",
    "politics": "politique",
    "business": "economie",
    "economy": "economie",
    "health": "sante",
    "science": "environnement",
}


def normalize_category(category: Optional[str]) -> Optional[str]:
    """'Économie' -> 'economie'; empty -> None."""
    slug = slugify(category)
    if not slug:
        return None
    return _ALIASES.get(slug, slug)
