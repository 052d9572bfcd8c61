import logging
from fastapi import APIRouter, Depends, Request
from ..errors import error_response
from ..models import OptimizeContentRequest
from ..services.pipeline import VideoPipeline
from ..utils.exceptions import ValidationError
from ..utils.decorators import current_rate_limit, get_pipeline, limiter

router = APIRouter(prefix="/api")


@router.post("/optimize-content")
@limiter.limit(current_rate_limit)
async def optimize_content(request: Request, body: OptimizeContentRequest, pipeline: VideoPipeline = Depends(get_pipeline)):
    """
    Generate optimized title, description, tags and chapters from a transcript.
    Responds with the optimization object as returned by the model.
    """
    try:
        return await pipeline.optimize_content(body.transcription, body.chatgpt_api_key, body.youtube_url)
    except ValidationError as e:
        logging.warning(f"TIER 2 validation error: {e}")
        return error_response(str(e), e.status_code)
    except Exception as e:
        logging.exception(f"TIER 2 Optimization Error: {e}")
        return error_response(str(e), 500)
