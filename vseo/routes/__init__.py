"""
Routes package for the API
"""
from fastapi import FastAPI
import logging

from vseo.routes.health import router as health_router
from vseo.routes.video import router as video_router
from vseo.routes.optimize import router as optimize_router


def register_all_routes(app: FastAPI) -> None:
    """
    Register all routes with the FastAPI app

    Args:
        app: FastAPI application instance
    """
    app.include_router(health_router)
    app.include_router(video_router)
    app.include_router(optimize_router)

    logging.info("Registered routers: health, video, optimize")
