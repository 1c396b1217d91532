import asyncio
import time

import httpx
import pytest

from autosub.models import RequestContext
from autosub.services.fetcher import build_source_url, fetch_all_sources


def _context(sources, video_hash=None):
    return RequestContext(
        target_language="eng",
        substitute_language="mri",
        source_urls=tuple(sources),
        media_type="movie",
        media_id="tt0499549",
        content_hash=video_hash,
    )


def test_build_source_url():
    ctx = _context(["https://a.example"])
    assert build_source_url("https://a.example", ctx) == "https://a.example/subtitles/movie/tt0499549.json"
    hashed = _context(["https://a.example"], video_hash="abc123")
    assert (
        build_source_url("https://a.example", hashed)
        == "https://a.example/subtitles/movie/tt0499549/videoHash=abc123.json"
    )


@pytest.mark.asyncio
async def test_fetch_all_sources_degrades_failures_to_empty():
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        host = request.url.host
        if host == "good.example":
            return httpx.Response(200, json={"subtitles": [{"id": "1", "url": "u1", "lang": "eng"}]})
        if host == "broken.example":
            return httpx.Response(500, text="boom")
        if host == "html.example":
            return httpx.Response(200, text="<html>not json</html>")
        if host == "shape.example":
            return httpx.Response(200, json={"subtitles": "nope"})
        raise httpx.ConnectError("unreachable", request=request)

    sources = [
        "https://good.example",
        "https://broken.example",
        "https://html.example",
        "https://shape.example",
        "https://down.example",
        "ftp://ignored.example",
    ]
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        results = await fetch_all_sources(_context(sources), client=client, timeout=2.0)

    assert [source for source, _ in results] == sources[:5]
    assert results[0][1] == [{"id": "1", "url": "u1", "lang": "eng"}]
    assert all(entries == [] for _, entries in results[1:])
    assert not any("ignored.example" in url for url in requested)


@pytest.mark.asyncio
async def test_fetch_all_sources_times_out_slow_source():
    async def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "slow.example":
            await asyncio.sleep(1.0)
        return httpx.Response(200, json={"subtitles": [{"id": request.url.host, "url": request.url.host}]})

    sources = ["https://slow.example", "https://fast.example"]
    start = time.perf_counter()
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        results = await fetch_all_sources(_context(sources), client=client, timeout=0.2)
    duration = time.perf_counter() - start

    assert results[0] == ("https://slow.example", [])
    assert results[1][1][0]["id"] == "fast.example"
    assert duration < 0.9


@pytest.mark.asyncio
async def test_fetch_all_sources_runs_concurrently():
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(0.3)
        return httpx.Response(200, json={"subtitles": []})

    sources = [f"https://s{i}.example" for i in range(4)]
    start = time.perf_counter()
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        results = await fetch_all_sources(_context(sources), client=client, timeout=2.0)
    duration = time.perf_counter() - start

    assert len(results) == 4
    assert duration < 1.0  # close to one call, not the sum


@pytest.mark.asyncio
async def test_fetch_all_sources_without_http_sources():
    assert await fetch_all_sources(_context(["nope", ""])) == []


@pytest.mark.asyncio
async def test_fetch_all_sources_invalid_source_keeps_other_results():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"subtitles": [{"id": "1", "url": "u1", "lang": "eng"}]})

    sources = ["https://good.example", "http://bad.example:abc"]
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        results = await fetch_all_sources(_context(sources), client=client, timeout=2.0)

    assert results == [
        ("https://good.example", [{"id": "1", "url": "u1", "lang": "eng"}]),
        ("http://bad.example:abc", []),
    ]
