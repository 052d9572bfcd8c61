"""
Tier 1 (full automation) and Tier 2 (transcription preview) endpoints
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from ..errors import error_response
from ..models import ProcessVideoRequest, TranscribeYoutubeRequest
from ..services.pipeline import VideoPipeline
from ..services.youtube import extract_video_id
from ..utils.exceptions import ValidationError
from ..utils.decorators import current_rate_limit, get_pipeline, limiter

router = APIRouter(prefix="/api")


@router.post("/process-video")
@limiter.limit(current_rate_limit)
async def process_video(request: Request, body: ProcessVideoRequest, pipeline: VideoPipeline = Depends(get_pipeline)):
    """Download, transcribe and hand the video over to the n8n workflow"""
    try:
        return await pipeline.process_video(body.youtube_url, body.whisper_api_key, body.webhook_url)
    except ValidationError as e:
        logging.warning(f"TIER 1 validation error: {e}")
        return error_response(str(e), e.status_code)
    except Exception as e:
        logging.exception(f"TIER 1 Error: {e}")
        return error_response(str(e), 500, {"videoId": extract_video_id(body.youtube_url)})


@router.post("/transcribe-youtube")
@limiter.limit(current_rate_limit)
async def transcribe_youtube(request: Request, body: TranscribeYoutubeRequest, pipeline: VideoPipeline = Depends(get_pipeline)):
    try:
        return await pipeline.transcribe_youtube(body.youtube_url, body.whisper_api_key)
    except ValidationError as e:
        logging.warning(f"TIER 2 validation error: {e}")
        return error_response(str(e), e.status_code)
    except Exception as e:
        logging.exception(f"TIER 2 Transcription Error: {e}")
        return error_response(str(e), 500)


@router.post("/transcribe-audio")
@limiter.limit(current_rate_limit)
async def transcribe_audio(
    request: Request,
    audio: Optional[UploadFile] = File(None),
    whisperApiKey: Optional[str] = Form(None),
    pipeline: VideoPipeline = Depends(get_pipeline),
):
    try:
        return await pipeline.transcribe_upload(audio, whisperApiKey)
    except ValidationError as e:
        logging.warning(f"TIER 2 validation error: {e}")
        return error_response(str(e), e.status_code)
    except Exception as e:
        logging.exception(f"TIER 2 File Transcription Error: {e}")
        return error_response(str(e), 500)
