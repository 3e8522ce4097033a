import httpx
import pytest

from yt_comment_extractor.comment_fetcher import CommentThreadPaginator
from yt_comment_extractor.exceptions import DecodeError, TransportError, UrlParseError
from tests.conftest import json_response


@pytest.fixture
def http_client():
    client = httpx.Client()
    yield client
    client.close()


@pytest.fixture
def paginator(http_client):
    return CommentThreadPaginator(http_client, "test_key", "dQw4w9WgXcQ")


def test_first_page_url_attaches_key_and_video_id(paginator):
    url = paginator.first_page_url()

    assert url.host == "www.googleapis.com"
    assert url.path == "/youtube/v3/commentThreads"
    assert url.params["part"] == "snippet,replies"
    assert url.params["maxResults"] == "100"
    assert url.params["order"] == "time"
    assert url.params["key"] == "test_key"
    assert url.params["videoId"] == "dQw4w9WgXcQ"
    assert "pageToken" not in url.params


def test_urls_are_deterministic(http_client):
    first = CommentThreadPaginator(http_client, "test_key", "abc")
    second = CommentThreadPaginator(http_client, "test_key", "abc")

    assert first.first_page_url() == second.first_page_url()
    assert first.next_page_url("cursor") == second.next_page_url("cursor")


def test_next_page_url_reuses_first_url(paginator):
    first_url = paginator.first_page_url()
    next_url = paginator.next_page_url("token_1")

    assert next_url.params["pageToken"] == "token_1"
    assert next_url.copy_remove_param("pageToken") == first_url
    # A later cursor overrides rather than appends.
    assert paginator.next_page_url("token_2").params.get_list("pageToken") == ["token_2"]


def test_single_page(paginator, last_page_body, mocker):
    mock_get = mocker.patch.object(paginator._client, "get", return_value=json_response(mocker, last_page_body))

    pages = list(paginator)

    assert len(pages) == 1
    assert pages[0].next_page_token is None
    assert paginator.fetch_count == 1
    mock_get.assert_called_once_with(paginator.first_page_url())


def test_follows_page_tokens_until_exhausted(paginator, first_page_body, last_page_body, mocker):
    """ Page k without a cursor ends the loop after exactly k fetches. """
    mock_get = mocker.patch.object(paginator._client, "get", side_effect=[
        json_response(mocker, first_page_body),
        json_response(mocker, last_page_body),
    ])

    pages = list(paginator)

    assert [len(page.threads) for page in pages] == [2, 1]
    assert paginator.fetch_count == 2
    assert mock_get.call_count == 2
    second_url = mock_get.call_args_list[1].args[0]
    assert second_url.params["pageToken"] == "QURTSl9pMkR0b2lPVXh3"
    assert second_url.params["videoId"] == "dQw4w9WgXcQ"


def test_pages_are_fetched_lazily(paginator, first_page_body, last_page_body, mocker):
    mock_get = mocker.patch.object(paginator._client, "get", side_effect=[
        json_response(mocker, first_page_body),
        json_response(mocker, last_page_body),
    ])

    pages = iter(paginator)
    assert mock_get.call_count == 0
    next(pages)
    assert mock_get.call_count == 1


def test_paginator_is_single_use(paginator, empty_page_body, mocker):
    mocker.patch.object(paginator._client, "get", return_value=json_response(mocker, empty_page_body))
    list(paginator)

    with pytest.raises(RuntimeError, match="already been consumed"):
        iter(paginator)


def test_empty_video_id_is_rejected(http_client):
    with pytest.raises(ValueError):
        CommentThreadPaginator(http_client, "test_key", "")


def test_invalid_endpoint_raises_url_parse_error(http_client):
    paginator = CommentThreadPaginator(http_client, "test_key", "abc", api_url="not a url")
    with pytest.raises(UrlParseError) as exc_info:
        list(paginator)
    assert exc_info.value.url == "not a url"


def test_connection_failure_raises_transport_error(paginator, mocker):
    mocker.patch.object(paginator._client, "get", side_effect=httpx.ConnectError("connection refused"))

    with pytest.raises(TransportError) as exc_info:
        list(paginator)

    assert exc_info.value.video_id == "dQw4w9WgXcQ"
    assert "test_key" not in str(exc_info.value)
    assert "key=%2A%2A%2A" in exc_info.value.url or "key=***" in exc_info.value.url


def test_http_error_status_reads_as_empty_last_page(paginator, mocker, caplog):
    """ A 403 for a video with comments turned off ends pagination without raising. """
    body = {"error": {"code": 403, "errors": [{"reason": "commentsDisabled"}]}}
    mocker.patch.object(paginator._client, "get", return_value=mocker.Mock(status_code=403, json=lambda: body))

    pages = list(paginator)

    assert len(pages) == 1
    assert pages[0].threads == []
    assert pages[0].next_page_token is None
    assert paginator.fetch_count == 1
    assert "HTTP 403 (commentsDisabled)" in caplog.text
    assert "test_key" not in caplog.text


def test_http_error_status_raises_when_opted_in(http_client, mocker):
    paginator = CommentThreadPaginator(http_client, "test_key", "dQw4w9WgXcQ", fail_on_http_error=True)
    body = {"error": {"code": 403, "errors": [{"reason": "commentsDisabled"}]}}
    mocker.patch.object(paginator._client, "get", return_value=mocker.Mock(status_code=403, json=lambda: body))

    with pytest.raises(TransportError) as exc_info:
        list(paginator)

    assert exc_info.value.status_code == 403
    assert "test_key" not in str(exc_info.value)


def test_transport_error_message_masks_api_key(paginator, mocker):
    mocker.patch.object(paginator._client, "get", side_effect=httpx.ConnectError(
        "Failed to connect to https://www.googleapis.com/youtube/v3/commentThreads?key=test_key"
    ))

    with pytest.raises(TransportError) as exc_info:
        list(paginator)

    assert "test_key" not in str(exc_info.value)
    assert "ConnectError" in str(exc_info.value)


def test_http_error_through_mock_transport_masks_api_key(caplog):
    def handler(request):
        return httpx.Response(403, json={"error": {"errors": [{"reason": "forbidden"}]}})

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        strict = CommentThreadPaginator(client, "test_key", "abc", fail_on_http_error=True)
        with pytest.raises(TransportError) as exc_info:
            list(strict)
        lenient = list(CommentThreadPaginator(client, "test_key", "abc"))

    assert "test_key" not in str(exc_info.value)
    assert lenient[0].threads == []
    assert "test_key" not in caplog.text


def test_timeout_raises_transport_error(paginator, mocker):
    mocker.patch.object(paginator._client, "get", side_effect=httpx.ReadTimeout("timed out"))

    with pytest.raises(TransportError):
        list(paginator)


def test_invalid_json_raises_decode_error(paginator, mocker):
    response = mocker.Mock(status_code=200)
    response.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    mocker.patch.object(paginator._client, "get", return_value=response)

    with pytest.raises(DecodeError) as exc_info:
        list(paginator)
    assert exc_info.value.video_id == "dQw4w9WgXcQ"


def test_non_object_json_raises_decode_error(paginator, mocker):
    mocker.patch.object(paginator._client, "get", return_value=json_response(mocker, ["not", "an", "object"]))

    with pytest.raises(DecodeError, match="Expected a JSON object"):
        list(paginator)


def test_error_on_later_page_propagates_after_earlier_pages(paginator, first_page_body, mocker):
    mocker.patch.object(paginator._client, "get", side_effect=[
        json_response(mocker, first_page_body),
        httpx.ConnectError("connection reset"),
    ])

    pages = iter(paginator)
    assert len(next(pages).threads) == 2
    with pytest.raises(TransportError):
        next(pages)
    assert paginator.fetch_count == 2


def test_requests_go_through_mock_transport(first_page_body, last_page_body):
    """ The real httpx request path, with the network replaced by a transport. """
    seen = []

    def handler(request):
        seen.append(request.url)
        if "pageToken" in request.url.params:
            return httpx.Response(200, json=last_page_body)
        return httpx.Response(200, json=first_page_body)

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        pages = list(CommentThreadPaginator(client, "test_key", "dQw4w9WgXcQ"))

    assert len(pages) == 2
    assert len(seen) == 2
    assert seen[1].params["pageToken"] == "QURTSl9pMkR0b2lPVXh3"


@pytest.mark.integration
def test_live_comment_threads(live_api_key):
    with httpx.Client(timeout=30) as client:
        pages = iter(CommentThreadPaginator(client, live_api_key, "jNQXAC9IVRw"))
        page = next(pages)
    assert len(page.threads) > 0
    assert page.threads[0].top_level_comment.published_at
