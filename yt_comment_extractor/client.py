# yt_comment_extractor/client.py

import logging
from collections.abc import Iterable
from typing import Optional

import httpx

from . import constants as const
from .comment_fetcher import CommentThreadPaginator
from .config import ExtractorConfig
from .exceptions import CommentExtractorError
from .exporter import CommentSheetExporter

logger = logging.getLogger(__name__)


class CommentExtractor:
    """
    Extracts the comment threads of YouTube videos into an xlsx workbook.

    For every video id, the first page of comment threads is fetched, a
    worksheet named after the video is created, and pages are appended to it
    until the API stops returning a page token. Videos are processed one after
    another; the workbook is saved once all of them are done.

    By default the first error aborts the whole run and the workbook is not
    saved. With `config.isolate_failures` set, a failing video is logged and
    recorded in `failures`, and the run carries on with the next video.
    """

    def __init__(
        self,
        config: ExtractorConfig,
        client: Optional[httpx.Client] = None,
        exporter: Optional[CommentSheetExporter] = None,
    ):
        self.config = config
        self._owns_client = client is None
        self._client = client or httpx.Client(
            headers={"User-Agent": const.USER_AGENT},
            timeout=config.timeout,
            verify=config.verify_ssl,
        )
        self.exporter = exporter or CommentSheetExporter(config.output_path)
        self.failures: dict[str, CommentExtractorError] = {}
        self.logger = logger

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        """Closes the HTTP client if this instance created it."""
        if self._owns_client:
            self._client.close()

    def paginator(self, video_id: str) -> CommentThreadPaginator:
        return CommentThreadPaginator(
            self._client,
            self.config.api_key,
            video_id,
            api_url=self.config.api_url,
            fail_on_http_error=self.config.fail_on_http_error,
        )

    def extract_video(self, video_id: str) -> int:
        """
        Fetches every page of comment threads for one video and writes them to its worksheet.

        The worksheet is only created once the first page has been fetched, so a
        video whose first request fails leaves no sheet behind.

        Returns:
            The number of data rows written (the header is not counted).
        """
        pages = iter(self.paginator(video_id))
        first_page = next(pages)

        sheet = self.exporter.open_sheet(video_id)
        row = self.exporter.append_page(sheet, 1, first_page)

        for page in pages:
            row = self.exporter.append_page(sheet, row, page)

        self.logger.info(f"Wrote {row - 1} row(s) for video {video_id}")
        return row - 1

    def extract(self, video_ids: Iterable[str]) -> dict[str, int]:
        """
        Runs the extraction for every video id and saves the workbook.

        Returns:
            A mapping of video id to the number of data rows written. Videos
            that failed under `isolate_failures` are left out and can be found
            in `failures`.
        """
        results = {}
        for video_id in video_ids:
            print(f"Start to extract comments from {video_id}")
            try:
                results[video_id] = self.extract_video(video_id)
            except CommentExtractorError as e:
                if not self.config.isolate_failures:
                    raise
                self.logger.error(f"Skipping video {video_id}: {e}")
                self.failures[video_id] = e

        self.exporter.close()
        print(f"Success to save result to `{self.exporter.output_path}` !")
        return results
