"""
API package initialization
"""
import logging
import time
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vseo.config import Config
from vseo.errors import register_exception_handlers
from vseo.routes import register_all_routes
from vseo.services.pipeline import VideoPipeline
from vseo.utils.decorators import limiter


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or Config.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(pipeline: Optional[VideoPipeline] = None) -> FastAPI:
    """
    Create and configure the FastAPI application

    Args:
        pipeline: Request orchestrator; built from Config when omitted

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(title=Config.APP_NAME, version=Config.APP_VERSION)
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

    # Set up SlowAPI Limiter (routes carry the limit decorators)
    app.state.limiter = limiter

    app.state.pipeline = pipeline or VideoPipeline(scratch_root=Config.SCRATCH_DIR)
    app.state.started_at = time.monotonic()

    register_exception_handlers(app)
    register_all_routes(app)

    logging.info(f"App created: {Config.summary()}")
    return app
