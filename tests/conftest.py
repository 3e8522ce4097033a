import json
import os
from pathlib import Path

import pytest
from openpyxl import load_workbook

from yt_comment_extractor import CommentSheetExporter, ExtractorConfig
from yt_comment_extractor.models import Page

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def get_fixture(filename):
    """Reads and returns the decoded content of a JSON fixture file."""
    with open(FIXTURES_DIR / filename, "r", encoding="utf-8") as f:
        return json.load(f)


def read_sheet(path, sheet_name):
    """Returns every row of a saved worksheet as a list of 12 strings ('' for blank cells)."""
    workbook = load_workbook(path)
    sheet = workbook[sheet_name]
    return [
        [value if value is not None else "" for value in row]
        for row in sheet.iter_rows(min_col=1, max_col=12, values_only=True)
    ]


def json_response(mocker, body):
    """A stand-in for an httpx.Response returning `body` from `.json()`."""
    return mocker.Mock(status_code=200, json=lambda: body)


@pytest.fixture
def first_page_body():
    return get_fixture("comment_threads_page.json")


@pytest.fixture
def last_page_body():
    return get_fixture("comment_threads_last_page.json")


@pytest.fixture
def empty_page_body():
    return get_fixture("comment_threads_empty.json")


@pytest.fixture
def first_page(first_page_body):
    return Page.from_response(first_page_body)


@pytest.fixture
def last_page(last_page_body):
    return Page.from_response(last_page_body)


@pytest.fixture
def output_path(tmp_path):
    return tmp_path / "output.xlsx"


@pytest.fixture
def exporter(output_path):
    return CommentSheetExporter(output_path)


@pytest.fixture
def config(output_path):
    return ExtractorConfig(api_key="test_key", output_path=output_path)


@pytest.fixture
def live_api_key():
    api_key = os.getenv("YOUTUBE_API_KEY")
    if not api_key:
        pytest.skip("YOUTUBE_API_KEY is not set")
    return api_key
