"""
YouTube services: video id parsing, audio download and metadata via yt-dlp
"""
import logging
import os
import re
from pathlib import Path
from typing import Optional

from ..config import Config
from ..models import AudioArtifact, VideoMetadata
from ..utils.exceptions import CommandError, DownloadError
from ..utils.process import ensure_binary, run_command

VIDEO_ID_PATTERN = re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([^&\n?#]+)")

METADATA_TEMPLATE = "%(title)s|%(description)s|%(duration)s|%(upload_date)s|%(uploader)s|%(view_count)s"


def extract_video_id(url: str) -> Optional[str]:
    """
    Extract the video id from a watch, youtu.be or embed URL.

    Args:
        url: Any string

    Returns:
        The video id, or None if the URL shape is not recognized
    """
    if not isinstance(url, str):
        return None
    match = VIDEO_ID_PATTERN.search(url)
    return match.group(1) if match else None


def watch_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


async def download_audio(video_id: str, output_dir: Path, binary: Optional[str] = None,
                         timeout: Optional[float] = None, max_buffer: Optional[int] = None) -> AudioArtifact:
    """
    Download the audio track of a video as mono 16kHz WAV.

    Args:
        video_id: YouTube video ID
        output_dir: Directory that receives the audio file
        binary: yt-dlp executable (defaults to Config.YTDLP_BINARY)
        timeout: Seconds before the download is killed
        max_buffer: Upper bound on captured yt-dlp output

    Returns:
        AudioArtifact for the downloaded file

    Raises:
        DownloadError: On any failure, including a missing output file
    """
    binary = binary or Config.YTDLP_BINARY
    timeout = timeout or Config.DOWNLOAD_TIMEOUT
    max_buffer = max_buffer or Config.DOWNLOAD_MAX_BUFFER
    extension = f".{Config.AUDIO_FORMAT}"
    output_template = str(Path(output_dir) / f"{video_id}.%(ext)s")

    try:
        ensure_binary(binary)
        logging.info(f"Downloading audio for {video_id} into {output_dir}")
        await run_command(
            [
                binary,
                "-x",
                "--audio-format", Config.AUDIO_FORMAT,
                "--audio-quality", "5",
                "--postprocessor-args", "ffmpeg:-ac 1 -ar 16000",
                "-o", output_template,
                watch_url(video_id),
            ],
            timeout=timeout,
            max_output_bytes=max_buffer,
        )
    except CommandError as e:
        raise DownloadError(str(e)) from e

    audio_file = next(
        (name for name in sorted(os.listdir(output_dir)) if name.startswith(video_id) and name.endswith(extension)),
        None,
    )
    if not audio_file:
        raise DownloadError("Audio file not found after download")

    path = Path(output_dir) / audio_file
    return AudioArtifact(path=path, size_bytes=path.stat().st_size)


def _to_int(value: str) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


def parse_metadata_output(stdout: str) -> VideoMetadata:
    """
    Parse the pipe-delimited line printed by METADATA_TEMPLATE.

    Fields are read positionally; yt-dlp prints 'NA' for unknown values.
    The description may itself span lines or contain pipes, so the title is
    split off the front and the four trailing fields off the back.
    """
    title, _, rest = stdout.strip().partition("|")
    parts = rest.rsplit("|", 4)
    parts += [""] * (5 - len(parts))
    description, duration, upload_date, uploader, view_count = parts

    def _clean(value: str) -> str:
        return "" if value == "NA" else value

    return VideoMetadata(
        title=_clean(title) or "Unknown Title",
        description=_clean(description)[:Config.DESCRIPTION_MAX_CHARS],
        duration=_to_int(duration),
        published_at=_clean(upload_date) or None,
        uploader=_clean(uploader) or "Unknown",
        view_count=_to_int(view_count),
    )


async def fetch_video_metadata(video_id: str, binary: Optional[str] = None, timeout: Optional[float] = None) -> VideoMetadata:
    """
    Best-effort metadata lookup. Never raises; returns the placeholder record on failure.
    """
    binary = binary or Config.YTDLP_BINARY
    timeout = timeout or Config.METADATA_TIMEOUT
    try:
        result = await run_command(
            [binary, "--no-download", "--print", METADATA_TEMPLATE, watch_url(video_id)],
            timeout=timeout,
        )
        return parse_metadata_output(result.stdout)
    except Exception as e:
        logging.warning(f"Metadata extraction failed for {video_id}: {e}")
        return VideoMetadata.placeholder()
