import asyncio

import httpx
import pytest

from blogref import config
from blogref.errors import FetchError, ParseError, ValidationError
from blogref.extractor import extract_metadata
from tests.conftest import html_response, make_page, mock_client

URL = "https://medium.com/@jane/hello-world-1a2b3c4d"


@pytest.mark.asyncio
async def test_extracts_from_fetched_page(full_page):
    async with mock_client(lambda request: html_response(full_page)) as client:
        metadata = await extract_metadata(URL, client=client)

    assert metadata.title == "OG Title"
    assert metadata.author == "Jane Doe"
    assert metadata.tags == ["python", "scraping"]


@pytest.mark.asyncio
async def test_sends_browser_user_agent():
    seen = {}

    def handler(request):
        seen["user-agent"] = request.headers["user-agent"]
        return html_response(make_page("<title>x</title>"))

    async with mock_client(handler) as client:
        await extract_metadata(URL, client=client)

    assert seen["user-agent"] == config.USER_AGENT
    assert "Mozilla/5.0" in seen["user-agent"]


@pytest.mark.asyncio
async def test_author_inferred_from_url_when_page_has_none():
    async with mock_client(lambda request: html_response(make_page("<title>x</title>"))) as client:
        metadata = await extract_metadata(URL, client=client)

    assert metadata.author == "jane"


@pytest.mark.asyncio
async def test_concurrent_extractions_are_independent():
    def handler(request):
        title = request.url.path.strip("/")
        return html_response(make_page(f"<title>{title}</title>"))

    async with mock_client(handler) as client:
        results = await asyncio.gather(*[
            extract_metadata(f"https://example.com/post-{i}", client=client) for i in range(5)
        ])

    assert [m.title for m in results] == [f"post-{i}" for i in range(5)]


# ── Validation ────────────────────────────────────────────────

@pytest.mark.asyncio
@pytest.mark.parametrize("url", ["", "   ", None])
async def test_missing_url(url):
    with pytest.raises(ValidationError, match="URL is required"):
        await extract_metadata(url)


@pytest.mark.asyncio
@pytest.mark.parametrize("url", ["medium.com/@jane/post", "ftp://example.com/file", "https://"])
async def test_invalid_url(url):
    with pytest.raises(ValidationError):
        await extract_metadata(url)


@pytest.mark.asyncio
@pytest.mark.parametrize("url", ["https://ex\x00ample.com/", "https://example.com/\x01post"])
async def test_control_characters_rejected_before_fetch(url):
    calls = []

    def handler(request):
        calls.append(request)
        return html_response(make_page())

    async with mock_client(handler) as client:
        with pytest.raises(ValidationError):
            await extract_metadata(url, client=client)

    assert calls == []


# ── Fetch failures ────────────────────────────────────────────

@pytest.mark.asyncio
async def test_error_status_raises_fetch_error():
    async with mock_client(lambda request: httpx.Response(404)) as client:
        with pytest.raises(FetchError) as exc_info:
            await extract_metadata(URL, client=client)

    assert exc_info.value.status_code == 404
    assert exc_info.value.url == URL


@pytest.mark.asyncio
async def test_transport_failure_raises_fetch_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with mock_client(handler) as client:
        with pytest.raises(FetchError) as exc_info:
            await extract_metadata(URL, client=client)

    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_timeout_raises_fetch_error():
    def handler(request):
        raise httpx.ReadTimeout("too slow", request=request)

    async with mock_client(handler) as client:
        with pytest.raises(FetchError) as exc_info:
            await extract_metadata(URL, client=client)

    assert exc_info.value.reason == "timed out"


@pytest.mark.asyncio
async def test_no_retry_after_failure():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(503)

    async with mock_client(handler) as client:
        with pytest.raises(FetchError):
            await extract_metadata(URL, client=client)

    assert len(calls) == 1


@pytest.mark.asyncio
async def test_already_cancelled():
    cancel = asyncio.Event()
    cancel.set()

    async with mock_client(lambda request: html_response(make_page())) as client:
        with pytest.raises(FetchError) as exc_info:
            await extract_metadata(URL, client=client, cancel=cancel)

    assert exc_info.value.reason == "cancelled"


@pytest.mark.asyncio
async def test_cancel_during_request():
    cancel = asyncio.Event()

    async def handler(request):
        await asyncio.sleep(10)
        return html_response(make_page())

    async def cancel_soon():
        await asyncio.sleep(0.05)
        cancel.set()

    async with mock_client(handler) as client:
        canceller = asyncio.create_task(cancel_soon())
        with pytest.raises(FetchError) as exc_info:
            await asyncio.wait_for(extract_metadata(URL, client=client, cancel=cancel), timeout=5)
        await canceller

    assert exc_info.value.reason == "cancelled"


@pytest.mark.asyncio
async def test_cancel_event_unused_when_request_finishes():
    cancel = asyncio.Event()
    async with mock_client(lambda request: html_response(make_page("<title>ok</title>"))) as client:
        metadata = await extract_metadata(URL, client=client, cancel=cancel)

    assert metadata.title == "ok"


# ── Parse failures ────────────────────────────────────────────

@pytest.mark.asyncio
async def test_binary_response_raises_parse_error():
    def handler(request):
        return httpx.Response(200, content=b"\x89PNG\r\n", headers={"content-type": "image/png"})

    async with mock_client(handler) as client:
        with pytest.raises(ParseError):
            await extract_metadata(URL, client=client)


def test_fetch_and_parse_errors_are_distinct():
    assert not issubclass(FetchError, ParseError)
    assert not issubclass(ParseError, FetchError)
