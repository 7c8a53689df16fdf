from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

PLACEHOLDER_SUMMARY = "(No summary available)"


@dataclass(frozen=True)
class StoryItem:
    """
    A top story that has a link and is ready to be notified.

    Items without a URL (Ask HN, deleted posts) never become a StoryItem.
    """
    id: int
    title: str
    url: str
    score: int = 0
    summary: str = ""

    @property
    def display_summary(self) -> str:
        return self.summary or PLACEHOLDER_SUMMARY


class SkipReason(str, Enum):
    FETCH_FAILED = "fetch_failed"
    NO_URL = "no_url"
    ERROR = "error"


@dataclass(frozen=True)
class StoryOutcome:
    story_id: int
    item: Optional[StoryItem] = None
    skip_reason: Optional[SkipReason] = None

    @property
    def ok(self) -> bool:
        return self.item is not None


@dataclass(frozen=True)
class NotificationPayload:
    title: str
    tags: str
    body: str
    click_url: Optional[str] = None


@dataclass
class RunResult:
    mode: str
    processed: int = 0
    outcomes: List[StoryOutcome] = field(default_factory=list)

    @property
    def skipped(self) -> List[StoryOutcome]:
        return [o for o in self.outcomes if not o.ok]

    def to_response(self) -> Dict[str, Any]:
        key = "count" if self.mode == "digest" else "sent"
        return {"success": True, key: self.processed}
