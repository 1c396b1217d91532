from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from autosub.constants import cloudflare_cache_headers
from autosub.settings import settings
from autosub.templates import templates

router = APIRouter()


@router.get('/', response_class=HTMLResponse)
@router.get('/configure', response_class=HTMLResponse)
async def home(request: Request):
    context = {
        "request": request,
        "default_language": settings.default_language,
        "default_spoof_language": settings.default_spoof_language,
        "default_source_url": settings.default_source_url,
        "output_mode": settings.output_mode,
        "version": settings.addon_version,
    }
    return templates.TemplateResponse(request, "configure.html", context, headers=cloudflare_cache_headers)
