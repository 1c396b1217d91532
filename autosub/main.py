from contextlib import asynccontextmanager
import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from autosub.settings import settings
from autosub.logger import REQUEST_ID, setup_logging
from autosub.constants import cloudflare_cache_headers
from autosub.routers import configure, manifest, subtitles

setup_logging()
logger = logging.getLogger("autosub")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        'Started (mode=%s, preset=%s, default source=%s)',
        settings.output_mode, settings.scoring_preset, settings.default_source_url,
    )
    yield
    logger.info('Shutdown')

app = FastAPI(title="Auto-Sub", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    rid = request.headers.get("x-request-id") or uuid.uuid4().hex[:16]
    token = REQUEST_ID.set(rid)
    try:
        response = await call_next(request)
    finally:
        REQUEST_ID.reset(token)
    response.headers["X-Request-ID"] = rid
    return response


# Health check
@app.get('/healthz')
async def healthz():
    return JSONResponse(content={"status": "ok", "version": settings.addon_version}, headers=cloudflare_cache_headers)

# Include Routers
app.include_router(configure.router)
app.include_router(manifest.router)
app.include_router(subtitles.router)
