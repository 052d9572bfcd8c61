"""
Request orchestration: one linear pipeline per endpoint.

Every pipeline works inside its own scratch directory, created on entry and
removed, together with every file it holds, before the pipeline returns.
"""
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Iterator, List, Optional

from fastapi import UploadFile

from ..config import Config
from ..models import AudioArtifact, VideoMetadata
from ..utils.exceptions import ValidationError
from ..utils.files import cleanup_files, create_request_dir, format_file_size, remove_dir, save_upload
from . import openai_service, transcription_service, webhook_service, youtube

MetricsCallback = Callable[..., None]

AUTOMATION_MESSAGE = "Video sent for automation! Check your n8n workflow for progress."


class RequestWorkspace:
    """Temporary files owned by a single request"""

    def __init__(self, directory: Path) -> None:
        self.directory = directory
        self.files: List[Path] = []

    def track(self, path: Path) -> Path:
        self.files.append(Path(path))
        return path

    def cleanup(self) -> None:
        cleanup_files(self.files)
        remove_dir(self.directory)


class VideoPipeline:
    def __init__(
        self,
        scratch_root: Optional[str] = None,
        on_metrics: Optional[MetricsCallback] = None,
        download_audio: Callable[..., Awaitable[AudioArtifact]] = youtube.download_audio,
        fetch_metadata: Callable[..., Awaitable[VideoMetadata]] = youtube.fetch_video_metadata,
        transcribe: Callable[..., Awaitable[str]] = transcription_service.transcribe_audio,
        optimize: Callable[..., Awaitable[Dict[str, Any]]] = openai_service.generate_optimization,
        send_webhook: Callable[..., Awaitable[Any]] = webhook_service.send_to_webhook,
    ) -> None:
        self.scratch_root = scratch_root or Config.SCRATCH_DIR
        self.on_metrics = on_metrics
        self.download_audio = download_audio
        self.fetch_metadata = fetch_metadata
        self.transcribe = transcribe
        self.optimize = optimize
        self.send_webhook = send_webhook

    def _emit(self, step: str, **fields) -> None:
        if not self.on_metrics:
            return
        try:
            self.on_metrics(step=step, **fields)
        except Exception as e:
            logging.warning(f"Metrics callback failed at {step}: {e}")

    @contextmanager
    def _workspace(self) -> Iterator[RequestWorkspace]:
        workspace = RequestWorkspace(create_request_dir(self.scratch_root))
        try:
            yield workspace
        finally:
            workspace.cleanup()
            self._emit("cleanup", files=len(workspace.files))

    @staticmethod
    def _require_video_id(youtube_url: str) -> str:
        video_id = youtube.extract_video_id(youtube_url)
        if not video_id:
            raise ValidationError("Invalid YouTube URL")
        return video_id

    async def _download(self, video_id: str, workspace: RequestWorkspace) -> AudioArtifact:
        logging.info(f"Downloading audio for {video_id}")
        self._emit("download", video_id=video_id)
        audio = await self.download_audio(video_id, workspace.directory)
        workspace.track(audio.path)
        logging.info(f"Audio downloaded: {format_file_size(audio.path)}")
        return audio

    async def _transcribe(self, audio_path: Path, api_key: str) -> str:
        self._emit("transcribe", path=str(audio_path))
        transcription = await self.transcribe(audio_path, api_key)
        logging.info(f"Transcription completed, length: {len(transcription)}")
        return transcription

    async def process_video(self, youtube_url: Optional[str], whisper_api_key: Optional[str],
                            webhook_url: Optional[str]) -> Dict[str, Any]:
        """Download, transcribe, enrich with metadata and forward to the webhook"""
        if not youtube_url or not whisper_api_key or not webhook_url:
            raise ValidationError("Missing required fields: youtubeUrl, whisperApiKey, or n8nWebhookUrl")
        video_id = self._require_video_id(youtube_url)
        logging.info(f"Starting full automation for: {youtube_url}")

        with self._workspace() as workspace:
            audio = await self._download(video_id, workspace)
            transcription = await self._transcribe(audio.path, whisper_api_key)

            self._emit("metadata", video_id=video_id)
            metadata = await self.fetch_metadata(video_id)

            payload = {
                "videoId": video_id,
                "youtubeUrl": youtube_url,
                "transcription": transcription,
                "currentTitle": metadata.title,
                "currentDescription": metadata.description,
                "duration": metadata.duration,
                "publishedAt": metadata.published_at,
                "uploader": metadata.uploader,
                "processingTimestamp": datetime.now(timezone.utc).isoformat(),
            }

            self._emit("webhook", video_id=video_id)
            webhook_response = await self.send_webhook(webhook_url, payload)
            logging.info(f"Automation initiated successfully for {video_id}")

            preview = transcription[:Config.TRANSCRIPT_PREVIEW_CHARS] + "..."
            return {
                "success": True,
                "videoId": video_id,
                "transcription": preview,
                "metadata": metadata.to_dict(),
                "n8nResponse": webhook_response,
                "message": AUTOMATION_MESSAGE,
            }

    async def transcribe_youtube(self, youtube_url: Optional[str], whisper_api_key: Optional[str]) -> Dict[str, Any]:
        """Download and transcribe a video, returning the full transcript"""
        if not youtube_url or not whisper_api_key:
            raise ValidationError("Missing required fields: youtubeUrl or whisperApiKey")
        video_id = self._require_video_id(youtube_url)
        logging.info(f"Transcribing YouTube video: {youtube_url}")

        with self._workspace() as workspace:
            audio = await self._download(video_id, workspace)
            transcription = await self._transcribe(audio.path, whisper_api_key)
            return {
                "success": True,
                "transcription": transcription,
                "videoId": video_id,
                "audioSize": format_file_size(audio.path),
            }

    async def transcribe_upload(self, upload: Optional[UploadFile], whisper_api_key: Optional[str]) -> Dict[str, Any]:
        """Transcribe an uploaded audio file"""
        if upload is None or not upload.filename:
            raise ValidationError("No audio file provided")

        with self._workspace() as workspace:
            # the upload is removed with the workspace even when validation fails below
            audio = await save_upload(upload, workspace.directory, Config.MAX_UPLOAD_BYTES, Config.UPLOAD_CHUNK_SIZE)
            workspace.track(audio.path)
            logging.info(f"Transcribing uploaded file: {upload.filename}")

            if not whisper_api_key:
                raise ValidationError("Missing whisperApiKey")

            transcription = await self._transcribe(audio.path, whisper_api_key)
            return {
                "success": True,
                "transcription": transcription,
                "fileInfo": {
                    "originalName": upload.filename,
                    "size": audio.size_bytes,
                    "type": upload.content_type,
                },
            }

    async def optimize_content(self, transcription: Optional[str], chatgpt_api_key: Optional[str],
                               youtube_url: Optional[str] = None) -> Dict[str, Any]:
        """Generate optimized metadata from a transcript"""
        if not transcription or not chatgpt_api_key:
            raise ValidationError("Missing required fields: transcription or chatGptApiKey")
        logging.info("Generating optimization suggestions")

        current_metadata = None
        if youtube_url:
            video_id = youtube.extract_video_id(youtube_url)
            if video_id:
                self._emit("metadata", video_id=video_id)
                try:
                    current_metadata = await self.fetch_metadata(video_id)
                except Exception as e:
                    logging.warning(f"Could not fetch video metadata: {e}")

        self._emit("optimize")
        optimization = await self.optimize(transcription, current_metadata, chatgpt_api_key)
        logging.info("Optimization completed")
        return optimization
