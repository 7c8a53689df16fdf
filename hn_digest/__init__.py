"""
hn_digest

Fetches the current Hacker News top stories, derives a short summary for each
linked article and pushes them to an ntfy topic.

Core ideas:
- Input: the Hacker News top stories list (first N ids)
- Process: fetch item → require url → summarize page (meta description, else first prose paragraph)
- Output: one ntfy notification per story, or a single numbered digest

Example
-------
import httpx
from hn_digest import Settings, StoryPipeline

settings = Settings.from_env()
with httpx.Client(timeout=settings.request_timeout) as client:
    result = StoryPipeline.from_settings(settings, client).run()

print(result.to_response())  # {"success": True, "sent": 10}
"""
from .config import Settings
from .core import StoryPipeline
from .exceptions import DeliveryFailure, FetchFailure, ItemFailure
from .models import NotificationPayload, RunResult, StoryItem
from .summarizers import SummarizeOptions, extract_summary

__all__ = [
    "Settings",
    "StoryPipeline",
    "StoryItem",
    "NotificationPayload",
    "RunResult",
    "FetchFailure",
    "ItemFailure",
    "DeliveryFailure",
    "SummarizeOptions",
    "extract_summary",
]
