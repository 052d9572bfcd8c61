"""
Temporary file bookkeeping
"""
import asyncio
import logging
import os
import shutil
import uuid
from pathlib import Path
from typing import Iterable, Union

from fastapi import UploadFile

from ..models import AudioArtifact
from .exceptions import ValidationError

PathLike = Union[str, Path]

REQUEST_DIR_PREFIX = "vseo-"


def create_request_dir(scratch_root: PathLike) -> Path:
    """
    Create a fresh scratch directory for one request.

    Args:
        scratch_root: Parent directory for all request directories

    Returns:
        Path of the new, empty directory
    """
    request_dir = Path(scratch_root) / f"{REQUEST_DIR_PREFIX}{uuid.uuid4().hex}"
    request_dir.mkdir(parents=True, exist_ok=False)
    return request_dir


def cleanup_files(file_paths: Iterable[PathLike]) -> None:
    """Delete files, logging (never raising) on failure"""
    for file_path in file_paths:
        try:
            os.remove(file_path)
            logging.info(f"Cleaned up: {file_path}")
        except FileNotFoundError:
            continue
        except OSError as e:
            logging.warning(f"Cleanup failed: {file_path} {e}")


def remove_dir(directory: PathLike) -> None:
    try:
        shutil.rmtree(directory)
    except FileNotFoundError:
        pass
    except OSError as e:
        logging.warning(f"Cleanup failed: {directory} {e}")


def format_file_size(file_path: PathLike) -> str:
    """Human readable size in megabytes, e.g. '1.25MB'"""
    try:
        size = os.path.getsize(file_path)
    except OSError:
        return "Unknown size"
    return f"{round(size / 1024 / 1024, 2):g}MB"


async def save_upload(upload: UploadFile, dest_dir: Path, max_bytes: int, chunk_size: int = 1024 * 1024) -> AudioArtifact:
    """
    Stream an uploaded file into dest_dir.

    Raises:
        ValidationError: (413) if the upload is larger than max_bytes
    """
    original = Path(upload.filename or "audio").name
    dest = dest_dir / f"upload-{uuid.uuid4().hex[:8]}{Path(original).suffix}"
    written = 0
    f = await asyncio.to_thread(open, dest, "wb")
    try:
        while True:
            chunk = await upload.read(chunk_size)
            if not chunk:
                break
            written += len(chunk)
            if written > max_bytes:
                raise ValidationError(f"File too large (max {max_bytes // (1024 * 1024)}MB)", status_code=413)
            await asyncio.to_thread(f.write, chunk)
    finally:
        await asyncio.to_thread(f.close)
    return AudioArtifact(path=dest, size_bytes=written)
