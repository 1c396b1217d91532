from fastapi import APIRouter
from fastapi.responses import JSONResponse

from autosub.constants import OUTPUT_MODE_TOP3, cloudflare_cache_headers
from autosub.settings import settings
from autosub.utils import parse_config

router = APIRouter()


def build_manifest(language: str, mode: str, configured: bool = True) -> dict:
    if mode == OUTPUT_MODE_TOP3:
        manifest = {
            "id": f"org.community.top3.{language}",
            "name": "Auto-Sub (Top 3)",
            "description": "Returns the 3 best matching subtitles, ranked for sync.",
        }
    else:
        manifest = {
            "id": f"org.community.singlebest.{language}",
            "name": "Auto-Sub (Best Only)",
            "description": "Returns ONLY the single best matching subtitle. No backup options.",
        }
    manifest.update({
        "version": settings.addon_version,
        "resources": ["subtitles"],
        "types": ["movie", "series"],
        "catalogs": [],
        "idPrefixes": ["tt"],
        "behaviorHints": {"configurable": True, "configurationRequired": not configured},
    })
    return manifest


@router.get("/manifest.json")
async def get_default_manifest():
    manifest = build_manifest(settings.default_language, settings.output_mode, configured=False)
    return JSONResponse(content=manifest, headers=cloudflare_cache_headers)


@router.get("/{config:path}/manifest.json")
async def get_manifest(config: str):
    language, _spoof, _sources = parse_config(config)
    manifest = build_manifest(language, settings.output_mode)
    return JSONResponse(content=manifest, headers=cloudflare_cache_headers)
