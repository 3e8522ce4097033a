# yt_comment_extractor/comment_fetcher.py

import logging
from collections.abc import Iterator

import httpx

from . import constants as const
from .exceptions import DecodeError, TransportError, UrlParseError
from .models import Page
from .utils import _as_str, _deep_get

logger = logging.getLogger(__name__)


def _redact(url: httpx.URL) -> str:
    """Returns `url` as a string with the API key masked, for logs and error messages."""
    if const.PARAM_KEY in url.params:
        url = url.copy_set_param(const.PARAM_KEY, "***")
    return str(url)


class CommentThreadPaginator:
    """
    Walks every page of comment threads for a single video.

    The first request attaches `key` and `videoId` to the comment-threads
    endpoint. Each follow-up request reuses that exact URL with `pageToken`
    set to the cursor returned by the previous page, until a page comes
    back without a cursor.

    A paginator is single-use: iterate it once. Errors are never retried;
    they propagate as soon as they occur.

    An HTTP error status (e.g. 403 `commentsDisabled`) is logged and its
    JSON body read as an empty last page, unless `fail_on_http_error` is set,
    in which case it raises `TransportError`.
    """

    def __init__(
        self,
        client: httpx.Client,
        api_key: str,
        video_id: str,
        api_url: str = const.YOUTUBE_COMMENT_THREADS_API,
        fail_on_http_error: bool = False,
    ):
        if not video_id:
            raise ValueError("`video_id` must be a non-empty string")
        self._client = client
        self.api_key = api_key
        self.video_id = video_id
        self.api_url = api_url
        self.fail_on_http_error = fail_on_http_error
        self.fetch_count = 0
        self._started = False
        self._first_page_url = None

    def first_page_url(self) -> httpx.URL:
        if self._first_page_url is None:
            try:
                base = httpx.URL(self.api_url)
                if base.scheme not in ("http", "https") or not base.host:
                    raise httpx.InvalidURL("endpoint must be an absolute http(s) url")
                self._first_page_url = base.copy_merge_params(
                    {const.PARAM_KEY: self.api_key, const.PARAM_VIDEO_ID: self.video_id}
                )
            except httpx.InvalidURL as e:
                raise UrlParseError(f"Could not build request url: {self._mask(str(e))}", url=self.api_url) from e
        return self._first_page_url

    def next_page_url(self, cursor: str) -> httpx.URL:
        base = self.first_page_url()
        try:
            return base.copy_set_param(const.PARAM_PAGE_TOKEN, cursor)
        except httpx.InvalidURL as e:
            raise UrlParseError(f"Could not build request url: {self._mask(str(e))}", url=_redact(base)) from e

    def __iter__(self) -> Iterator[Page]:
        if self._started:
            raise RuntimeError(f"Paginator for video {self.video_id} has already been consumed")
        self._started = True
        return self._pages()

    def _pages(self) -> Iterator[Page]:
        page = self._fetch_page(self.first_page_url())
        yield page

        while page.has_next:
            logger.debug("Following page token for video %s", self.video_id)
            page = self._fetch_page(self.next_page_url(page.next_page_token))
            yield page

        logger.info(f"Fetched {self.fetch_count} page(s) for video {self.video_id}")

    def _fetch_page(self, url: httpx.URL) -> Page:
        self.fetch_count += 1
        logger.debug(f"GET {_redact(url)} (request #{self.fetch_count})")
        try:
            response = self._client.get(url)
        except httpx.RequestError as e:
            raise TransportError(
                f"Request to comment API failed: {type(e).__name__}: {self._mask(str(e))}",
                url=_redact(url),
                video_id=self.video_id,
            ) from e

        status_code = response.status_code
        if status_code >= 400 and self.fail_on_http_error:
            raise TransportError(
                f"Comment API responded with HTTP {status_code}",
                url=_redact(url),
                video_id=self.video_id,
                status_code=status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise DecodeError(
                f"Could not decode response body: {e}", url=_redact(url), video_id=self.video_id
            ) from e

        if not isinstance(body, dict):
            raise DecodeError(
                f"Expected a JSON object but got {type(body).__name__}",
                url=_redact(url),
                video_id=self.video_id,
            )

        if status_code >= 400:
            # An error body has no items and no page token, so it reads as an empty last page.
            reason = _as_str(_deep_get(body, "error.errors.0.reason")) or "unknown"
            logger.warning(
                f"Comment API responded with HTTP {status_code} ({reason}) for video {self.video_id}, "
                "treating it as the last page"
            )

        return Page.from_response(body)

    def _mask(self, text: str) -> str:
        return text.replace(self.api_key, "***") if self.api_key else text
