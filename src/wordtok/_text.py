"""Text validation and statistics helpers used by the request API."""

from datetime import datetime, timezone

import regex as re

_WHITESPACE = re.compile(r"\s+")
_WORD_RUN = re.compile(r"\w+")


def is_valid_text(text: object) -> bool:
    """Return True for a string with at least one non-whitespace character."""
    return isinstance(text, str) and len(text.strip()) > 0


def is_valid_token_ids(ids: object) -> bool:
    """Return True for a list or tuple of non-negative integers."""
    if not isinstance(ids, (list, tuple)):
        return False
    # bool is an int subclass but never a meaningful token id
    return all(
        isinstance(tok_id, int) and not isinstance(tok_id, bool) and tok_id >= 0
        for tok_id in ids
    )


def clean_text(text: object) -> str:
    """Collapse whitespace runs to a single space and strip both ends."""
    if not is_valid_text(text):
        return ""
    return _WHITESPACE.sub(" ", text).strip()


def text_stats(text: object) -> dict[str, int]:
    """Count word runs, characters and lines in ``text``."""
    if not is_valid_text(text):
        return {"words": 0, "characters": 0, "lines": 0}
    return {
        "words": len(_WORD_RUN.findall(text)),
        "characters": len(text),
        "lines": len(text.split("\n")),
    }


def timestamp() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()
