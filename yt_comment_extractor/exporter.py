"""
Flattens comment threads into worksheet rows and writes them to an xlsx workbook.

Each video gets its own worksheet named after the video id, with the header in
row 0. Rows are addressed with 0-based indices throughout this module and
translated to openpyxl's 1-based coordinates only when a cell is written.

Row layout for a thread:
    - zero replies: one row, top-level comment in columns 0-5, columns 6-11 blank.
    - one or more replies: the first reply shares the top-level comment's row
      (columns 6-11), every further reply gets its own row with only
      columns 6-11 filled in.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.worksheet.worksheet import Worksheet

from . import constants as const
from .exceptions import DuplicateSheetError, FinalizeError, WriteError
from .models import CommentThread, Page

logger = logging.getLogger(__name__)

BLANK_COMMENT = [""] * const.REPLY_COLUMN_OFFSET


def flatten_thread(thread: CommentThread) -> list[list[str]]:
    """
    Maps one thread to its rows of 12 cell values ("" marks a blank cell).

    A thread with N replies yields N rows; a thread without replies yields one.
    """
    top_level = thread.top_level_comment.as_row()
    if not thread.replies:
        return [top_level + BLANK_COMMENT]

    first, *rest = thread.replies
    rows = [top_level + first.as_row()]
    rows.extend(BLANK_COMMENT + reply.as_row() for reply in rest)
    return rows


def _clean(value: str) -> str:
    # xlsx cannot store most ASCII control characters
    return ILLEGAL_CHARACTERS_RE.sub("", value)


class CommentSheetExporter:
    """
    Owns the output workbook and writes comment pages into per-video worksheets.

    The workbook is only written to disk by `close()`. If a run aborts before
    that, the rows written so far stay in memory and nothing is saved.
    """

    def __init__(self, output_path: Union[str, Path] = const.DEFAULT_OUTPUT_PATH):
        self.output_path = Path(output_path)
        self.workbook = Workbook()
        # Drop openpyxl's default sheet so the file holds exactly one sheet per video.
        self.workbook.remove(self.workbook.active)
        self._closed = False

    def open_sheet(self, video_id: str) -> Worksheet:
        """
        Creates the worksheet for `video_id` and writes the header into row 0.

        Raises:
            DuplicateSheetError: A sheet with this name already exists. Sheet
                names are compared case-insensitively, as Excel does.
            WriteError: The name is not a valid sheet title or the header
                could not be written.
        """
        existing = {name.lower() for name in self.workbook.sheetnames}
        if video_id.lower() in existing:
            raise DuplicateSheetError("Worksheet already exists", sheet_name=video_id)

        try:
            sheet = self.workbook.create_sheet(title=video_id)
        except ValueError as e:
            raise WriteError(f"Could not add worksheet: {e}", sheet_name=video_id) from e

        logger.debug(f"Created worksheet {video_id}")
        self._write_row(sheet, 0, const.HEADERS)
        return sheet

    def append_page(self, sheet: Worksheet, start_row: int, page: Page) -> int:
        """
        Writes every thread of `page` starting at `start_row`.

        Returns:
            The index one past the last row written, to be passed as
            `start_row` for the next page of the same video.
        """
        if start_row < 1:
            raise ValueError(f"`start_row` must be at least 1, row 0 holds the header (got {start_row})")

        row = start_row
        for thread in page.threads:
            for cells in flatten_thread(thread):
                self._write_row(sheet, row, cells)
                row += 1

        logger.debug(f"Wrote rows {start_row}-{row - 1} to worksheet {sheet.title}")
        return row

    def _write_row(self, sheet: Worksheet, row: int, cells: list[str]) -> None:
        for column, value in enumerate(cells):
            if not value:
                continue
            try:
                cell = sheet.cell(row=row + 1, column=column + 1, value=_clean(value))
                # Keep comment text starting with "=" as text rather than a formula.
                if cell.data_type == "f":
                    cell.data_type = "s"
            except (ValueError, TypeError) as e:
                raise WriteError(
                    f"Could not write cell: {e}", sheet_name=sheet.title, row=row, column=column
                ) from e

    @property
    def sheet_names(self) -> list[str]:
        return list(self.workbook.sheetnames)

    def close(self) -> Optional[Path]:
        """
        Saves the workbook to `output_path`. Calling it again does nothing.

        Raises:
            FinalizeError: The workbook has no sheets or could not be saved.
        """
        if self._closed:
            return None
        if not self.workbook.sheetnames:
            raise FinalizeError("Workbook has no worksheets to save", path=str(self.output_path))

        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            self.workbook.save(self.output_path)
        except Exception as e:
            raise FinalizeError(f"Could not save workbook: {e}", path=str(self.output_path)) from e

        self._closed = True
        logger.info(f"Saved workbook to {self.output_path}")
        return self.output_path
