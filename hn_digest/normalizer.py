from __future__ import annotations

from typing import Any, Dict

from .models import StoryItem


def to_story_item(entry: Dict[str, Any], summary: str = "") -> StoryItem:
    """
    Convert a parsed item dict into a StoryItem.
    Requires:
    - url (non-empty)
    Optional:
    - title, score (defaults "" and 0)
    """
    url = entry.get("url") or ""
    if not url:
        raise ValueError("Item lacks a url; text-only posts are not notified")

    return StoryItem(
        id=entry.get("id") or 0,
        title=entry.get("title") or "",
        url=url,
        score=entry.get("score") or 0,
        summary=summary or "",
    )
