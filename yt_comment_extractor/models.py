"""
Data structures for comment-thread pages returned by the YouTube Data API.

Parsing is best-effort: any missing or non-string leaf becomes an empty
string, and malformed containers are treated as empty. Nothing in this
module raises on an unexpected payload shape.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from . import constants as const
from .utils import _as_str, _deep_get

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Comment:
    etag: str = ""
    author_display_name: str = ""
    author_channel_url: str = ""
    text_display: str = ""
    published_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_snippet(cls, snippet, etag: str = "") -> "Comment":
        return cls(
            etag=etag,
            author_display_name=_as_str(_deep_get(snippet, "authorDisplayName")),
            author_channel_url=_as_str(_deep_get(snippet, "authorChannelUrl")),
            text_display=_as_str(_deep_get(snippet, "textDisplay")),
            published_at=_as_str(_deep_get(snippet, "publishedAt")),
            updated_at=_as_str(_deep_get(snippet, "updatedAt")),
        )

    def as_row(self) -> list[str]:
        """The six cell values of this comment, in column order."""
        return [
            self.etag,
            self.author_display_name,
            self.author_channel_url,
            self.text_display,
            self.published_at,
            self.updated_at,
        ]


@dataclass(frozen=True)
class CommentThread:
    top_level_comment: Comment
    replies: list[Comment] = field(default_factory=list)

    @classmethod
    def from_item(cls, item) -> "CommentThread":
        """Builds a thread from one element of a response's `items` array."""
        top_level = _deep_get(item, "snippet.topLevelComment")
        top_level_comment = Comment.from_snippet(
            _deep_get(top_level, "snippet"),
            etag=_as_str(_deep_get(top_level, "etag")),
        )

        replies = []
        reply_items = _deep_get(item, "replies.comments", [])
        if isinstance(reply_items, list):
            for reply in reply_items:
                snippet = _deep_get(reply, "snippet")
                # Older payloads nest the etag in the snippet, the API resource carries it on the reply itself.
                etag = _as_str(_deep_get(snippet, "etag")) or _as_str(_deep_get(reply, "etag"))
                replies.append(Comment.from_snippet(snippet, etag=etag))

        return cls(top_level_comment=top_level_comment, replies=replies)


@dataclass(frozen=True)
class Page:
    threads: list[CommentThread] = field(default_factory=list)
    next_page_token: Optional[str] = None

    @classmethod
    def from_response(cls, body: dict) -> "Page":
        """
        Builds a page from a decoded `commentThreads.list` response body.

        An absent, null, empty or non-string `nextPageToken` yields
        `next_page_token=None`, which marks the last page for the video.
        """
        items = _deep_get(body, const.KEY_ITEMS, [])
        if not isinstance(items, list):
            logger.debug("Ignoring non-list `items` field of type %s", type(items).__name__)
            items = []

        threads = [CommentThread.from_item(item) for item in items]
        next_page_token = _as_str(_deep_get(body, const.KEY_NEXT_PAGE_TOKEN)) or None
        return cls(threads=threads, next_page_token=next_page_token)

    @property
    def has_next(self) -> bool:
        return self.next_page_token is not None
