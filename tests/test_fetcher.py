from __future__ import annotations

import httpx
import pytest

from core.exceptions import FetchError
from workers.visitor_monitor.fetcher import PageFetcher

BASE = "https://counter.example/index.php?mode=get&token="


def _fetcher(handler) -> PageFetcher:
    return PageFetcher(BASE, timeout=5.0, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_fetch_appends_token_verbatim_and_returns_html() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="<div>ok</div>", headers={"content-type": "text/html"})

    async with _fetcher(handler) as fetcher:
        html = await fetcher.fetch("AbC123", location="Gym")

    assert html == "<div>ok</div>"
    assert str(seen[0].url) == BASE + "AbC123"
    assert seen[0].url.params["mode"] == "get"


@pytest.mark.asyncio
async def test_non_success_status_raises_fetch_error() -> None:
    async with _fetcher(lambda request: httpx.Response(503)) as fetcher:
        with pytest.raises(FetchError) as excinfo:
            await fetcher.fetch("tok", location="Gym")

    assert excinfo.value.status_code == 503
    assert excinfo.value.location == "Gym"


@pytest.mark.asyncio
async def test_network_failure_raises_fetch_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _fetcher(handler) as fetcher:
        with pytest.raises(FetchError) as excinfo:
            await fetcher.fetch("tok", location="Gym")

    assert excinfo.value.status_code is None
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_undecodable_body_raises_fetch_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            content=b"\xff\xfe\xfa\x00garbage",
            headers={"content-type": "text/html; charset=utf-8"},
        )

    async with _fetcher(handler) as fetcher:
        with pytest.raises(FetchError, match="Undecodable"):
            await fetcher.fetch("tok")


@pytest.mark.asyncio
async def test_declared_charset_is_honoured() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            content="Kletterhalle Süd".encode("latin-1"),
            headers={"content-type": "text/html; charset=iso-8859-1"},
        )

    async with _fetcher(handler) as fetcher:
        assert await fetcher.fetch("tok") == "Kletterhalle Süd"


def test_timeout_is_always_bounded() -> None:
    fetcher = PageFetcher(BASE, timeout=5.0)

    assert fetcher._client.timeout.read == 5.0
