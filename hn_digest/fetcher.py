from __future__ import annotations

import logging
from typing import Any, Dict, List

import httpx

from .exceptions import FetchFailure, ItemFailure

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://hacker-news.firebaseio.com/v0"


def fetch_top_story_ids(
    client: httpx.Client,
    limit: int,
    *,
    api_base: str = DEFAULT_API_BASE,
) -> List[int]:
    """
    Fetch the ranked list of top story ids and keep the first `limit`.

    Raises FetchFailure on network errors, non-2xx responses, invalid JSON or
    when the payload is not a list.
    """
    url = f"{api_base}/topstories.json"
    try:
        r = client.get(url)
        r.raise_for_status()
        ids = r.json()
    except (httpx.HTTPError, ValueError) as e:
        raise FetchFailure(f"Failed to fetch top stories: {url} ({e})") from e

    if not isinstance(ids, list):
        raise FetchFailure(f"Top stories payload is not a list: {url}")
    if limit <= 0:
        return []
    return ids[:limit]


def fetch_item(
    client: httpx.Client,
    story_id: int,
    *,
    api_base: str = DEFAULT_API_BASE,
) -> Dict[str, Any]:
    """
    Fetch the raw metadata of one item.

    Raises ItemFailure on network/HTTP errors or when the body is not an object
    (the API answers `null` for ids it does not know).
    """
    url = f"{api_base}/item/{story_id}.json"
    try:
        r = client.get(url)
        r.raise_for_status()
        item = r.json()
    except (httpx.HTTPError, ValueError) as e:
        raise ItemFailure(story_id, f"Failed to fetch item {story_id}: {e}") from e

    if not isinstance(item, dict):
        raise ItemFailure(story_id, f"Item {story_id} has no metadata")
    return item
