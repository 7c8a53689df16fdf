import json
from typing import Callable, Dict, List, Optional

import httpx
import pytest

API = "https://hacker-news.firebaseio.com/v0"
NTFY = "https://ntfy.sh"


def _paragraph(n_words: int, sentences: int = 1) -> str:
    words = [f"word{i}" for i in range(n_words)]
    per = max(1, n_words // sentences)
    chunks = [" ".join(words[i:i + per]) for i in range(0, n_words, per)]
    return ". ".join(chunks) + "."


class FakeWeb:
    """Routes httpx requests to canned responses and records what was asked."""

    def __init__(self) -> None:
        self.top_ids: object = []
        self.items: Dict[int, object] = {}
        self.pages: Dict[str, str] = {}
        self.failing_items: set = set()
        self.relay_status: Callable[[int], int] = lambda n: 200
        self.requests: List[httpx.Request] = []
        self.published: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)
        if url == f"{API}/topstories.json":
            return httpx.Response(200, content=json.dumps(self.top_ids))
        if url.startswith(f"{API}/item/"):
            story_id = int(url.rsplit("/", 1)[1].split(".")[0])
            if story_id in self.failing_items:
                raise httpx.ConnectError("boom", request=request)
            return httpx.Response(200, content=json.dumps(self.items.get(story_id)))
        if url.startswith(NTFY):
            self.published.append(request)
            return httpx.Response(self.relay_status(len(self.published)))
        if url in self.pages:
            return httpx.Response(200, text=self.pages[url], headers={"Content-Type": "text/html"})
        return httpx.Response(404)

    def item_requests(self) -> List[str]:
        return [str(r.url) for r in self.requests if "/item/" in str(r.url)]

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def web() -> FakeWeb:
    return FakeWeb()


@pytest.fixture
def paragraph() -> Callable[..., str]:
    return _paragraph


def story(story_id: int, url: Optional[str] = "auto", score: int = 100, title: Optional[str] = None) -> dict:
    raw = {"id": story_id, "title": title or f"Story {story_id}", "score": score, "type": "story"}
    if url == "auto":
        raw["url"] = f"https://example.com/{story_id}"
    elif url is not None:
        raw["url"] = url
    return raw


@pytest.fixture
def make_story() -> Callable[..., dict]:
    return story
