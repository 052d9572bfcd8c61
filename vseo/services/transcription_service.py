"""
Speech-to-text via the OpenAI Whisper API
"""
import asyncio
import logging
import os
from pathlib import Path
from typing import Callable, Optional, Union

from openai import AsyncOpenAI

from ..config import Config
from ..utils.exceptions import AudioTooLargeError, TranscriptionError


async def transcribe_audio(audio_path: Union[str, Path], api_key: str,
                           client_factory: Optional[Callable[..., AsyncOpenAI]] = None) -> str:
    """
    Transcribe a local audio file.

    Args:
        audio_path: Path of the audio file
        api_key: OpenAI API key supplied by the caller
        client_factory: Builds the OpenAI client (tests pass a fake)

    Returns:
        Plain-text transcription

    Raises:
        AudioTooLargeError: If the file exceeds Config.WHISPER_MAX_BYTES (no API call is made)
        TranscriptionError: If the API call fails
    """
    size = os.path.getsize(audio_path)
    if size > Config.WHISPER_MAX_BYTES:
        raise AudioTooLargeError(size, Config.WHISPER_MAX_BYTES)

    client_factory = client_factory or AsyncOpenAI
    try:
        client = client_factory(api_key=api_key)
        audio_bytes = await asyncio.to_thread(Path(audio_path).read_bytes)

        logging.info(f"Starting Whisper transcription ({size} bytes)")
        transcription = await client.audio.transcriptions.create(
            file=("audio.wav", audio_bytes, "audio/wav"),
            model=Config.WHISPER_MODEL,
            response_format="text",
            language=Config.WHISPER_LANGUAGE,
        )
    except Exception as e:
        raise TranscriptionError(f"Whisper transcription failed: {e}", original_error=e) from e

    # response_format="text" yields a str; older SDKs return an object with .text
    text = transcription if isinstance(transcription, str) else getattr(transcription, "text", "")
    logging.info(f"Transcription completed, length: {len(text)}")
    return text
