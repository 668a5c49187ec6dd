from __future__ import annotations

import httpx
import pytest

pytest.importorskip("pytest_httpx")

from marquee.connectors.base import PermanentFetchError, TransientFetchError
from marquee.connectors.feed import FeedFetcher

FEED_URL = "https://news.example.com/rss.xml"
RSS = "<rss><channel><item><title>Hello</title></item></channel></rss>"


@pytest.mark.asyncio
async def test_http_success_returns_text(httpx_mock, marquee_settings):
    httpx_mock.add_response(method="GET", url=FEED_URL, text=RSS, status_code=200)

    result = await FeedFetcher(settings=marquee_settings).fetch_raw(FEED_URL)

    assert result.ok
    assert result.text == RSS
    request = httpx_mock.get_request()
    assert request.headers["User-Agent"] == marquee_settings.user_agent


@pytest.mark.asyncio
async def test_http_redirect_is_followed(httpx_mock, marquee_settings):
    moved = "https://cdn.example.com/rss.xml"
    httpx_mock.add_response(method="GET", url=FEED_URL, status_code=301, headers={"Location": moved})
    httpx_mock.add_response(method="GET", url=moved, text=RSS, status_code=200)

    result = await FeedFetcher(settings=marquee_settings).fetch_raw(FEED_URL)

    assert result.ok
    assert result.text == RSS


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [429, 500, 503])
async def test_http_retryable_status_is_transient(httpx_mock, marquee_settings, status):
    httpx_mock.add_response(method="GET", url=FEED_URL, status_code=status)

    result = await FeedFetcher(settings=marquee_settings).fetch_raw(FEED_URL)

    assert isinstance(result.error, TransientFetchError)


@pytest.mark.asyncio
async def test_http_not_found_is_permanent(httpx_mock, marquee_settings):
    httpx_mock.add_response(method="GET", url=FEED_URL, status_code=404, text="<html>missing</html>")

    result = await FeedFetcher(settings=marquee_settings).fetch_raw(FEED_URL)

    assert isinstance(result.error, PermanentFetchError)


@pytest.mark.asyncio
async def test_http_transport_error_is_transient(httpx_mock, marquee_settings):
    httpx_mock.add_exception(httpx.ConnectError("connection refused"))

    result = await FeedFetcher(settings=marquee_settings).fetch_raw(FEED_URL)

    assert not result.ok
    assert isinstance(result.error, TransientFetchError)
    assert isinstance(result.error.__cause__, httpx.ConnectError)
