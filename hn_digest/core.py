from __future__ import annotations

import concurrent.futures as _fut
import dataclasses
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

import httpx

from .config import MODES, Settings
from .fetcher import DEFAULT_API_BASE, fetch_item, fetch_top_story_ids
from .exceptions import ItemFailure
from .models import RunResult, SkipReason, StoryItem, StoryOutcome
from .normalizer import to_story_item
from .notifier import Notifier, NtfyNotifier, digest_payload, story_payload
from .parser import parse_item
from .summarizers import SummarizeOptions, Summarizer, build_summarizer

logger = logging.getLogger(__name__)

CLIENT_USER_AGENT = "hn-digest/0.1"


def build_client(settings: Settings, *, transport: Optional[httpx.BaseTransport] = None) -> httpx.Client:
    return httpx.Client(
        headers={"User-Agent": CLIENT_USER_AGENT},
        timeout=settings.request_timeout,
        transport=transport,
    )


@dataclass
class PipelineOptions:
    limit: int = 10
    mode: str = "story"
    tags: str = "news"
    digest_title: str = "Hacker News Top 10"
    api_base: str = DEFAULT_API_BASE
    max_workers: int = 4
    summarize: bool = True
    summarize_options: Optional[SummarizeOptions] = None


class StoryPipeline:
    """
    High-level API: list top stories, enrich each with a summary, notify.

    Pipeline: list ids → fetch item → parse → normalize (url required) → summarize → notify
    """

    def __init__(
        self,
        client: httpx.Client,
        notifier: Notifier,
        *,
        limit: int = 10,
        mode: str = "story",
        tags: str = "news",
        digest_title: str = "Hacker News Top 10",
        api_base: str = DEFAULT_API_BASE,
        max_workers: int = 4,
        summarize: bool = True,
        summarize_options: Optional[SummarizeOptions] = None,
        summarizer: Optional[Summarizer] = None,
    ) -> None:
        if mode not in MODES:
            raise ValueError(f"mode must be one of {MODES}, got {mode!r}")
        self.options = PipelineOptions(
            limit=limit,
            mode=mode,
            tags=tags,
            digest_title=digest_title,
            api_base=api_base,
            max_workers=max_workers,
            summarize=summarize,
            summarize_options=summarize_options,
        )
        self.client = client
        self.notifier = notifier
        self.summarizer = summarizer or build_summarizer(
            client, self.options.summarize_options, enabled=self.options.summarize,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        client: httpx.Client,
        notifier: Optional[Notifier] = None,
    ) -> "StoryPipeline":
        if notifier is None:
            notifier = NtfyNotifier(client, topic=settings.topic, server=settings.ntfy_server)
        return cls(
            client,
            notifier,
            limit=settings.story_limit,
            mode=settings.mode,
            tags=settings.tags,
            digest_title=settings.digest_title,
            api_base=settings.api_base,
            max_workers=settings.max_workers,
            summarize=settings.summarize,
            summarize_options=SummarizeOptions(
                user_agent=settings.user_agent,
                timeout_sec=settings.request_timeout,
            ),
        )

    def list_top_stories(self) -> List[int]:
        return fetch_top_story_ids(self.client, self.options.limit, api_base=self.options.api_base)

    def enrich(self, story_id: int) -> StoryOutcome:
        try:
            raw = fetch_item(self.client, story_id, api_base=self.options.api_base)
        except ItemFailure as e:
            logger.warning("skipping story id=%s: %s", story_id, e)
            return StoryOutcome(story_id, skip_reason=SkipReason.FETCH_FAILED)

        try:
            item = to_story_item(parse_item(raw, story_id))
        except ValueError:
            logger.debug("skipping story id=%s: no url", story_id)
            return StoryOutcome(story_id, skip_reason=SkipReason.NO_URL)

        summary = self.summarizer.summarize(item.url)
        return StoryOutcome(story_id, item=dataclasses.replace(item, summary=summary))

    def enrich_many(self, story_ids: Iterable[int]) -> List[StoryOutcome]:
        """Enrich ids concurrently; outcomes keep the input order."""
        ids = list(story_ids)
        max_workers = max(1, int(self.options.max_workers or 1))
        if max_workers == 1 or len(ids) <= 1:
            return [self._enrich_isolated(i) for i in ids]

        with _fut.ThreadPoolExecutor(max_workers=max_workers) as ex:
            return list(ex.map(self._enrich_isolated, ids))

    def _enrich_isolated(self, story_id: int) -> StoryOutcome:
        try:
            return self.enrich(story_id)
        except Exception:
            logger.exception("unexpected error enriching story id=%s", story_id)
            return StoryOutcome(story_id, skip_reason=SkipReason.ERROR)

    def notify_each(self, items: Iterable[StoryItem]) -> int:
        """Send one notification per story.

        Returns the number of send attempts; relay failures still count.
        """
        sent = 0
        for item in items:
            try:
                self.notifier.send(story_payload(item, tags=self.options.tags))
            except Exception:
                logger.exception("notification failed for %s", item.title)
            sent += 1
        return sent

    def notify_digest(self, items: List[StoryItem]) -> int:
        if not items:
            logger.info("no stories to include in digest; nothing sent")
            return 0
        payload = digest_payload(items, title=self.options.digest_title, tags=self.options.tags)
        try:
            self.notifier.send(payload)
        except Exception:
            logger.exception("digest notification failed")
        return len(items)

    def run(self, mode: Optional[str] = None) -> RunResult:
        """Run the pipeline once. FetchFailure from the story list propagates."""
        mode = mode or self.options.mode
        if mode not in MODES:
            raise ValueError(f"mode must be one of {MODES}, got {mode!r}")

        ids = self.list_top_stories()
        logger.info("run start mode=%s ids=%s", mode, len(ids))

        outcomes = self.enrich_many(ids)
        items = [o.item for o in outcomes if o.item is not None]

        result = RunResult(mode=mode, outcomes=outcomes)
        if mode == "digest":
            result.processed = self.notify_digest(items)
        else:
            result.processed = self.notify_each(items)

        logger.info(
            "run done mode=%s processed=%s skipped=%s",
            mode, result.processed, len(result.skipped),
        )
        return result
