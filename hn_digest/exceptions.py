from __future__ import annotations

from typing import Optional


class HNDigestError(Exception):
    """Base class for errors raised by hn_digest."""


class FetchFailure(HNDigestError):
    """Raised when the top stories list cannot be fetched or is malformed."""


class ItemFailure(HNDigestError):
    """Raised when a single story's metadata cannot be fetched."""

    def __init__(self, story_id: int, message: str) -> None:
        super().__init__(message)
        self.story_id = story_id


class DeliveryFailure(HNDigestError):
    """Raised when the notification relay rejects a message."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
