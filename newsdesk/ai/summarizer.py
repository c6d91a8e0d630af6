# newsdesk/ai/summarizer.py
from typing import Optional

from .text import split_sentences

DEFAULT_MAX_LENGTH = 200


def generate_summary(text: Optional[str], max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """
    Leading sentences joined with ". " for as long as the result fits in
    ``max_length``. The fit is checked before a sentence is appended, so the
    output never exceeds the budget. Falls back to a hard cut of the text when
    not even the first sentence fits.
    """
    text = text or ""
    summary = ""
    for sentence in split_sentences(text):
        candidate = f"{summary}{sentence.strip()}. "
        if len(candidate.rstrip()) > max_length:
            break
        summary = candidate

    return summary.strip() or text[:max_length]
