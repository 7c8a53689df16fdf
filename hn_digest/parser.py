from __future__ import annotations

from typing import Any, Dict, Optional


def _get_score(raw: Dict[str, Any]) -> int:
    val = raw.get("score")
    if isinstance(val, bool):
        return 0
    if isinstance(val, (int, float)):
        return int(val)
    if isinstance(val, str):
        try:
            return int(val.strip())
        except ValueError:
            return 0
    return 0


def _get_url(raw: Dict[str, Any]) -> Optional[str]:
    url = raw.get("url")
    if isinstance(url, str) and url.strip():
        return url.strip()
    return None


def parse_item(raw: Dict[str, Any], story_id: Optional[int] = None) -> Dict[str, Any]:
    """
    Map a raw item from the Hacker News API to a normalized dict.
    Fields: id, title, url (str|None), score
    """
    title = raw.get("title")
    if not isinstance(title, str):
        title = ""

    item_id = raw.get("id")
    if not isinstance(item_id, int) or isinstance(item_id, bool):
        item_id = story_id

    return {
        "id": item_id,
        "title": title.strip(),
        "url": _get_url(raw),
        "score": _get_score(raw),
    }
