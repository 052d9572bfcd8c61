import os
import tempfile
from typing import Dict, Any


class Config:
    """Centralized configuration management"""
    # Server
    PORT = int(os.environ.get("PORT", "10000"))
    APP_ENV = os.environ.get("APP_ENV") or os.environ.get("NODE_ENV") or "development"
    APP_NAME = "3DS VSEO - Video SEO Optimizer API"
    APP_VERSION = "2.0.0"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Scratch space for downloaded and uploaded audio (one sub-directory per request)
    SCRATCH_DIR = os.environ.get("SCRATCH_DIR", tempfile.gettempdir())

    # yt-dlp
    YTDLP_BINARY = os.environ.get("YTDLP_BINARY", "yt-dlp")
    AUDIO_FORMAT = "wav"
    DOWNLOAD_TIMEOUT = 300  # seconds
    DOWNLOAD_MAX_BUFFER = 50 * 1024 * 1024  # bytes of captured output
    METADATA_TIMEOUT = 30  # seconds

    # OpenAI
    WHISPER_MODEL = "whisper-1"
    WHISPER_LANGUAGE = "en"
    WHISPER_MAX_BYTES = 25 * 1024 * 1024
    OPENAI_CHAT_MODEL = os.environ.get("OPENAI_CHAT_MODEL", "gpt-4")
    OPENAI_TEMPERATURE = 0.7
    OPENAI_MAX_TOKENS = 3000

    # Webhook
    WEBHOOK_TIMEOUT = 30  # seconds
    WEBHOOK_USER_AGENT = "3DS-VSEO/2.0"

    # Uploads
    MAX_UPLOAD_BYTES = 100 * 1024 * 1024
    UPLOAD_CHUNK_SIZE = 1024 * 1024

    # Responses
    TRANSCRIPT_PREVIEW_CHARS = 300
    DESCRIPTION_MAX_CHARS = 1000

    # Rate limiting
    RATE_LIMIT = os.environ.get("RATE_LIMIT", "100/minute")

    @classmethod
    def summary(cls) -> Dict[str, Any]:
        """Non-secret settings, for startup logs"""
        return {
            "environment": cls.APP_ENV,
            "port": cls.PORT,
            "scratch_dir": cls.SCRATCH_DIR,
            "ytdlp_binary": cls.YTDLP_BINARY,
            "chat_model": cls.OPENAI_CHAT_MODEL,
            "rate_limit": cls.RATE_LIMIT,
        }
