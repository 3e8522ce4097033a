# yt_comment_extractor/__init__.py

__version__ = "0.1.0"

from .client import CommentExtractor
from .comment_fetcher import CommentThreadPaginator
from .config import ExtractorConfig
from .exceptions import (
    CommentExtractorError,
    DecodeError,
    DuplicateSheetError,
    FinalizeError,
    TransportError,
    UrlParseError,
    WriteError,
)
from .exporter import CommentSheetExporter

__all__ = [
    "CommentExtractor",
    "CommentThreadPaginator",
    "CommentSheetExporter",
    "ExtractorConfig",
    "CommentExtractorError",
    "UrlParseError",
    "TransportError",
    "DecodeError",
    "WriteError",
    "DuplicateSheetError",
    "FinalizeError",
]
