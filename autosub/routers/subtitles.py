from typing import Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from autosub.constants import cloudflare_cache_headers
from autosub.logger import logger
from autosub.models import RequestContext
from autosub.services.fetcher import fetch_all_sources
from autosub.services.ranking import build_subtitles
from autosub.services.scoring import build_policy
from autosub.settings import settings
from autosub.utils import extract_metadata, parse_config

router = APIRouter()


def build_request_context(config: str, media_type: str, media_id: str, extra: Optional[str] = None) -> RequestContext:
    language, spoof, sources = parse_config(config)
    video_hash, filename = extract_metadata(extra)
    return RequestContext(
        target_language=language,
        substitute_language=spoof,
        source_urls=tuple(sources),
        media_type=media_type,
        media_id=media_id,
        content_hash=video_hash,
        normalized_filename=filename,
    )


async def _subtitles_response(config: str, media_type: str, media_id: str, extra: Optional[str]) -> JSONResponse:
    """Run the fetch/rank pipeline; any failure degrades to an empty list."""
    try:
        context = build_request_context(config, media_type, media_id, extra)
        logger.info(f"[{media_id}] Fetching best match... (Hash: {bool(context.content_hash)})")
        results = await fetch_all_sources(context)
        policy = build_policy(settings.scoring_preset, settings.score_overrides())
        subtitles = build_subtitles(
            results,
            context,
            policy,
            mode=settings.output_mode,
            min_score=settings.min_score,
        )
    except Exception:
        logger.exception(f"[{media_id}] Subtitle pipeline failed")
        subtitles = []
    return JSONResponse(content={"subtitles": subtitles}, headers=cloudflare_cache_headers)


@router.get("/{config:path}/subtitles/{media_type}/{media_id}/{extra:path}.json")
async def get_subtitles_with_extra(config: str, media_type: str, media_id: str, extra: str):
    return await _subtitles_response(config, media_type, media_id, extra)


@router.get("/{config:path}/subtitles/{media_type}/{media_id}.json")
async def get_subtitles(config: str, media_type: str, media_id: str):
    return await _subtitles_response(config, media_type, media_id, None)
