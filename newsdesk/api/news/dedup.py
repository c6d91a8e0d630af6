# newsdesk/api/news/dedup.py
import hashlib

MAX_HASH_INPUT = 1000


def compute_dedup_hash(url: str, title: str) -> str:
    """md5 of the first 1000 chars of url + title (hex)."""
    key = f"{url or ''}{title or ''}"[:MAX_HASH_INPUT]
    return hashlib.md5(key.encode("utf-8")).hexdigest()
