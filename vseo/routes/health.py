"""
Health check, API description and web page endpoints
"""
import resource
import time
from datetime import datetime, timezone
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, JSONResponse

from ..config import Config
from ..errors import error_response
from ..utils.decorators import current_rate_limit, limiter

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

router = APIRouter()


def memory_usage() -> dict:
    """Resource usage of the current process"""
    usage = resource.getrusage(resource.RUSAGE_SELF)
    return {
        "maxRss": usage.ru_maxrss,
        "userTime": usage.ru_utime,
        "systemTime": usage.ru_stime,
    }


@router.get("/api/health")
@limiter.limit(current_rate_limit)
async def health_check(request: Request):
    """Simple health check"""
    return JSONResponse(content={
        "status": "healthy",
        "uptime": round(time.monotonic() - request.app.state.started_at, 3),
        "memory": memory_usage(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": Config.APP_ENV,
    })


@router.get("/")
@limiter.limit(current_rate_limit)
async def index(request: Request):
    return JSONResponse(content={
        "message": Config.APP_NAME,
        "status": "running",
        "endpoints": {
            "health": "/api/health",
            "app": "/app",
            "processVideo": "/api/process-video (Tier 1)",
            "transcribeYoutube": "/api/transcribe-youtube (Tier 2)",
            "transcribeAudio": "/api/transcribe-audio (Tier 2)",
            "optimizeContent": "/api/optimize-content (Tier 2)",
        },
        "version": Config.APP_VERSION,
    })


@router.get("/app")
@limiter.limit(current_rate_limit)
async def web_app(request: Request):
    page = STATIC_DIR / "index.html"
    if not page.is_file():
        return error_response("Web interface not available", 404)
    return FileResponse(page, media_type="text/html")
