from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import httpx
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

# Checked in this order; the first non-empty content wins.
META_SELECTORS = (
    'meta[name="description"]',
    'meta[property="og:description"]',
    'meta[name="twitter:description"]',
)
MIN_PARAGRAPH_WORDS = 20
MAX_SENTENCES = 2


class Summarizer(Protocol):
    def summarize(self, url: str) -> str:  # pragma: no cover - interface
        ...


@dataclass
class SummarizeOptions:
    user_agent: str = "Mozilla/5.0"
    timeout_sec: float = 15.0


class NullSummarizer:
    def summarize(self, url: str) -> str:
        return ""


def _meta_description(soup: BeautifulSoup) -> Optional[str]:
    for selector in META_SELECTORS:
        tag = soup.select_one(selector)
        if tag is None:
            continue
        content = tag.get("content")
        if isinstance(content, str) and content:
            return content
    return None


def _first_prose_paragraph(soup: BeautifulSoup) -> Optional[str]:
    for p in soup.find_all("p"):
        text = p.get_text().strip()
        if len(text.split()) >= MIN_PARAGRAPH_WORDS:
            return text
    return None


def extract_summary(html: str) -> str:
    """Derive a short summary from an article's HTML.

    Prefers the page's own description meta tags (description, og:description,
    twitter:description). Otherwise takes the first paragraph of at least 20
    words and keeps its first two ". "-separated sentences. Returns "" when
    nothing qualifies.
    """
    soup = BeautifulSoup(html, "lxml")

    meta = _meta_description(soup)
    if meta:
        return meta

    paragraph = _first_prose_paragraph(soup)
    if paragraph:
        sentences = paragraph.split(". ")
        return ". ".join(sentences[:MAX_SENTENCES]) + "."
    return ""


class PageSummarizer:
    """Fetches an article page and summarizes it with `extract_summary`.

    Some sites reject clients that do not look like a browser, hence the
    User-Agent header. Failures of any kind yield an empty summary.
    """

    def __init__(self, client: httpx.Client, *, options: Optional[SummarizeOptions] = None) -> None:
        self._client = client
        self._options = options or SummarizeOptions()

    def summarize(self, url: str) -> str:
        try:
            r = self._client.get(
                url,
                headers={"User-Agent": self._options.user_agent},
                timeout=self._options.timeout_sec,
                follow_redirects=True,
            )
            r.raise_for_status()
            return extract_summary(r.text)
        except Exception as e:
            logger.debug("summary unavailable url=%s: %s", url, e)
            return ""


def build_summarizer(client: httpx.Client, options: Optional[SummarizeOptions], *, enabled: bool = True) -> Summarizer:
    if not enabled:
        return NullSummarizer()
    return PageSummarizer(client, options=options)
