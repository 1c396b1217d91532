import asyncio
import logging
from typing import List, Optional, Tuple

import httpx

from autosub.models import RequestContext
from autosub.settings import settings

log = logging.getLogger("autosub.fetcher")


def build_source_url(source: str, context: RequestContext) -> str:
    url = f"{source}/subtitles/{context.media_type}/{context.media_id}"
    if context.content_hash:
        url += f"/videoHash={context.content_hash}"
    return url + ".json"


async def _fetch_source(client: httpx.AsyncClient, source: str, context: RequestContext, timeout: float) -> List[object]:
    url = build_source_url(source, context)
    try:
        response = await asyncio.wait_for(client.get(url), timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except asyncio.TimeoutError:
        log.warning("Upstream %s timed out after %.1fs", source, timeout)
        return []
    except httpx.HTTPStatusError as exc:
        log.warning("Upstream %s returned %s", source, exc.response.status_code)
        return []
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
        log.warning("Upstream %s failed: %s", source, exc)
        return []
    except Exception:
        log.exception("Upstream %s failed unexpectedly", source)
        return []

    subtitles = payload.get("subtitles") if isinstance(payload, dict) else None
    if not isinstance(subtitles, list):
        log.warning("Upstream %s returned no subtitles list", source)
        return []
    return subtitles


async def fetch_all_sources(
    context: RequestContext,
    client: Optional[httpx.AsyncClient] = None,
    timeout: Optional[float] = None,
) -> List[Tuple[str, List[object]]]:
    """Query every http(s) source concurrently.

    Returns ``(source, entries)`` pairs in configured order. A failed source
    contributes an empty list; nothing is raised or retried.
    """
    timeout = settings.upstream_timeout if timeout is None else timeout
    sources = [s for s in context.source_urls if s.startswith("http")]
    skipped = len(context.source_urls) - len(sources)
    if skipped:
        log.debug("Skipping %d non-http source(s)", skipped)
    if not sources:
        return []

    if client is not None:
        lists = await asyncio.gather(*(_fetch_source(client, s, context, timeout) for s in sources))
    else:
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as own_client:
            lists = await asyncio.gather(*(_fetch_source(own_client, s, context, timeout) for s in sources))
    return list(zip(sources, lists))
