from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from ..config import Config
from ..services.pipeline import VideoPipeline

# Shared limiter; every route is decorated with limiter.limit(current_rate_limit)
limiter = Limiter(key_func=get_remote_address)


def current_rate_limit() -> str:
    """Per-client limit string, read on every request so it follows Config.RATE_LIMIT"""
    return Config.RATE_LIMIT


def get_pipeline(request: Request) -> VideoPipeline:
    """
    FastAPI dependency returning the orchestrator configured on the app.
    Tests swap app.state.pipeline for one built from fakes.
    """
    return request.app.state.pipeline
