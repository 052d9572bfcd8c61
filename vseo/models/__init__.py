"""
Data models and schemas for the API
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Optional

from pydantic import BaseModel, ConfigDict, Field


@dataclass
class AudioArtifact:
    """A temporary audio file owned by the request that created it"""
    path: Path
    size_bytes: int


class VideoMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field("Unknown Title", description="Current video title")
    description: str = Field("No description available", description="Current description, at most 1000 characters")
    duration: int = Field(0, description="Duration in seconds")
    published_at: Optional[str] = Field(None, alias="publishedAt", description="Upload date as YYYYMMDD")
    uploader: str = Field("Unknown", description="Channel or uploader name")
    view_count: int = Field(0, alias="viewCount", description="View count at fetch time")

    @classmethod
    def placeholder(cls) -> "VideoMetadata":
        """Record used whenever metadata cannot be fetched"""
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return self.model_dump(by_alias=True)


class ProcessVideoRequest(BaseModel):
    """Request model for the full automation endpoint"""
    youtube_url: Optional[str] = Field(None, alias="youtubeUrl")
    whisper_api_key: Optional[str] = Field(None, alias="whisperApiKey")
    webhook_url: Optional[str] = Field(None, alias="n8nWebhookUrl")


class TranscribeYoutubeRequest(BaseModel):
    youtube_url: Optional[str] = Field(None, alias="youtubeUrl")
    whisper_api_key: Optional[str] = Field(None, alias="whisperApiKey")


class OptimizeContentRequest(BaseModel):
    transcription: Optional[str] = None
    chatgpt_api_key: Optional[str] = Field(None, alias="chatGptApiKey")
    youtube_url: Optional[str] = Field(None, alias="youtubeUrl")
