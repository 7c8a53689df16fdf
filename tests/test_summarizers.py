import httpx

from hn_digest.summarizers import NullSummarizer, PageSummarizer, SummarizeOptions, build_summarizer, extract_summary


def _page(head: str = "", body: str = "") -> str:
    return f"<html><head>{head}</head><body>{body}</body></html>"


def test_meta_description_wins_over_paragraphs(paragraph):
    html = _page(
        '<meta name="description" content="Curated description">',
        f"<p>{paragraph(40, sentences=3)}</p>",
    )
    assert extract_summary(html) == "Curated description"


def test_meta_preference_order():
    html = _page(
        '<meta name="twitter:description" content="twitter">'
        '<meta property="og:description" content="og">'
    )
    assert extract_summary(html) == "og"

    html = _page('<meta name="twitter:description" content="twitter">')
    assert extract_summary(html) == "twitter"


def test_empty_meta_content_falls_through():
    html = _page(
        '<meta name="description" content="">'
        '<meta property="og:description" content="from og">'
    )
    assert extract_summary(html) == "from og"


def test_paragraph_truncated_to_two_sentences():
    a = "Alpha beta gamma delta epsilon zeta eta theta"
    b = "iota kappa lambda mu nu omicron pi rho"
    c = "sigma tau upsilon phi chi psi omega end now"
    html = _page(body=f"<p>short caption</p><p>{a}. {b}. {c}.</p>")
    assert extract_summary(html) == f"{a}. {b}."


def test_unclosed_paragraphs_are_split():
    prose = " ".join(f"w{i}" for i in range(25))
    html = _page(body=f"<p>Photo credit: someone. Caption<p>{prose}. Second bit. Third bit.")
    assert extract_summary(html) == f"{prose}. Second bit."


def test_short_paragraphs_are_ignored(paragraph):
    html = _page(body=f"<p>{paragraph(19)}</p><nav><p>Home About</p></nav>")
    assert extract_summary(html) == ""


def test_first_qualifying_paragraph_is_used(paragraph):
    first = "one " * 5
    second = ("lorem ipsum " * 10).strip()
    third = ("other words " * 15).strip()
    html = _page(body=f"<p>{first}</p><p>{second}</p><p>{third}</p>")
    assert extract_summary(html) == second + "."


def test_no_content_returns_empty_string():
    assert extract_summary("") == ""
    assert extract_summary(_page()) == ""


def _client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_page_summarizer_sends_browser_user_agent():
    seen = {}

    def handler(request):
        seen["ua"] = request.headers.get("User-Agent")
        return httpx.Response(200, text=_page('<meta name="description" content="hi">'))

    with _client(handler) as client:
        s = PageSummarizer(client, options=SummarizeOptions(user_agent="Mozilla/5.0"))
        assert s.summarize("https://example.com/a") == "hi"
    assert seen["ua"] == "Mozilla/5.0"


def test_page_summarizer_swallows_http_errors():
    with _client(lambda request: httpx.Response(403, text="forbidden")) as client:
        assert PageSummarizer(client).summarize("https://example.com/a") == ""


def test_page_summarizer_swallows_network_errors():
    def handler(request):
        raise httpx.ConnectTimeout("slow", request=request)

    with _client(handler) as client:
        assert PageSummarizer(client).summarize("https://example.com/a") == ""


def test_build_summarizer_disabled_returns_null():
    with _client(lambda request: httpx.Response(200)) as client:
        assert isinstance(build_summarizer(client, None, enabled=False), NullSummarizer)
        assert isinstance(build_summarizer(client, None), PageSummarizer)
