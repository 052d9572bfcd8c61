"""
Custom exceptions for the API.
"""

class VseoError(Exception):
    """Base class for every error raised by the service."""


class ValidationError(VseoError):
    """Exception raised when request input is missing or malformed."""
    def __init__(self, message="Validation failed", status_code=400):
        self.status_code = status_code
        super().__init__(message)


class PipelineError(VseoError):
    """Exception raised when an external step of a request pipeline fails."""
    status_code = 500


class DownloadError(PipelineError):
    """Exception raised when yt-dlp cannot produce the audio file."""
    def __init__(self, reason):
        self.reason = reason
        super().__init__(f"Download failed: {reason}")


class CommandError(PipelineError):
    """Exception raised when an external command is missing, times out or exits non-zero."""
    def __init__(self, command, message, returncode=None, stderr=""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


class TranscriptionError(PipelineError):
    """Exception raised when the speech-to-text call fails."""
    def __init__(self, message, original_error=None):
        self.original_error = original_error
        super().__init__(message)


class AudioTooLargeError(TranscriptionError):
    """Exception raised before upload when the audio exceeds the API limit."""
    def __init__(self, size_bytes, limit_bytes):
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes
        limit_mb = limit_bytes // (1024 * 1024)
        super().__init__(f"Audio file too large for Whisper API (>{limit_mb}MB)")


class OptimizationError(PipelineError):
    """Exception raised when content optimization fails."""
    def __init__(self, message, original_error=None):
        self.original_error = original_error
        super().__init__(message)


class OptimizationParseError(OptimizationError):
    """Exception raised when the model reply is not the expected JSON object."""
    def __init__(self, message="Failed to parse ChatGPT response as JSON", content=None):
        self.content = content
        super().__init__(message)


class WebhookError(PipelineError):
    """Exception raised when the webhook target rejects or cannot receive a payload."""
    def __init__(self, message, status_code=None, reason=None):
        super().__init__(message)
        self.webhook_status = status_code
        self.reason = reason
