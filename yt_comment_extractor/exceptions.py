# yt_comment_extractor/exceptions.py

from . import constants as const


class CommentExtractorError(Exception):
    """
    Base exception for all errors raised while extracting and exporting comments.

    Any keyword arguments (e.g. `url`, `video_id`, `sheet_name`) are kept as
    context and appended to the message so a failure can be diagnosed without
    re-running with verbose logging.
    """

    exit_code = const.EX_SOFTWARE

    def __init__(self, message: str, **context):
        self.message = message
        self.context = context
        for key, value in context.items():
            setattr(self, key, value)
        super().__init__(message)

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value!r}" for key, value in self.context.items())
        return f"{self.message} ({details})"


class UrlParseError(CommentExtractorError):
    """Raised when injecting query parameters produces an invalid URL."""

    exit_code = const.EX_DATAERR


class TransportError(CommentExtractorError):
    """Raised when a request to the comment API cannot complete."""


class DecodeError(CommentExtractorError):
    """Raised when a response body is not a JSON object."""


class WriteError(CommentExtractorError):
    """Raised when a worksheet or cell cannot be written."""

    exit_code = const.EX_IOERR


class DuplicateSheetError(CommentExtractorError):
    """Raised when a worksheet named after a video id already exists."""

    exit_code = const.EX_IOERR


class FinalizeError(CommentExtractorError):
    """Raised when the workbook cannot be saved to disk."""

    exit_code = const.EX_IOERR
