"""Tests for BeatmapClient (HTTP is faked via a mocked requests.Session)."""

import logging
from unittest.mock import MagicMock

import pytest
import requests

from config import BOT_IDENTITY
from services.beatmap_client import BeatmapClient, DownloadUrls
from services.error_codes import ErrorKind


def _response(status=200, payload=None, text=""):
    """Build a fake requests.Response."""
    response = MagicMock()
    response.status_code = status
    response.text = text
    response.json.return_value = payload
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status} Error", response=response
        )
    else:
        response.raise_for_status.return_value = None
    return response


class TestFetchById:
    def test_success_returns_beatmapset(self, beatmap_client, beatmapset_payload):
        beatmap_client.session.get.return_value = _response(payload=beatmapset_payload)

        result = beatmap_client.fetch_by_id("1234567")

        assert result.success is True
        assert result.value.id == 1234567
        assert result.value.title == "Test Song"
        beatmap_client.session.get.assert_called_once_with(
            "https://catboy.best/api/v2/s/1234567", params=None, timeout=None
        )

    def test_404_is_not_found(self, beatmap_client):
        beatmap_client.session.get.return_value = _response(status=404, text='{"error":"Not found"}')

        result = beatmap_client.fetch_by_id("999")

        assert result.success is False
        assert result.error_code is ErrorKind.NOT_FOUND
        assert result.error == "Beatmap not found"

    def test_server_error_is_fetch_failed(self, beatmap_client):
        beatmap_client.session.get.return_value = _response(status=502)

        result = beatmap_client.fetch_by_id("123")

        assert result.success is False
        assert result.error_code is ErrorKind.FETCH_FAILED
        assert result.error.startswith("Failed to get beatmap info - ")
        assert "502" in result.error

    def test_network_error_is_fetch_failed(self, beatmap_client):
        beatmap_client.session.get.side_effect = requests.ConnectionError("connection refused")

        result = beatmap_client.fetch_by_id("123")

        assert result.error_code is ErrorKind.FETCH_FAILED
        assert result.error == "Failed to get beatmap info - connection refused"

    def test_timeout_is_fetch_failed(self, beatmap_client):
        beatmap_client.session.get.side_effect = requests.Timeout("read timed out")

        result = beatmap_client.fetch_by_id("123")

        assert result.error_code is ErrorKind.FETCH_FAILED

    def test_undecodable_body_is_fetch_failed(self, beatmap_client):
        response = _response()
        response.json.side_effect = ValueError("Expecting value")
        beatmap_client.session.get.return_value = response

        result = beatmap_client.fetch_by_id("123")

        assert result.error_code is ErrorKind.FETCH_FAILED
        assert "Expecting value" in result.error

    def test_payload_without_id_is_fetch_failed(self, beatmap_client):
        beatmap_client.session.get.return_value = _response(payload={"title": "orphan"})

        result = beatmap_client.fetch_by_id("123")

        assert result.error_code is ErrorKind.FETCH_FAILED

    def test_logs_before_and_after(self, beatmap_client, beatmapset_payload, caplog):
        beatmap_client.session.get.return_value = _response(payload=beatmapset_payload)

        with caplog.at_level(logging.INFO, logger="beatmap_bot.services.beatmap_client"):
            beatmap_client.fetch_by_id("1234567")

        messages = [r.getMessage() for r in caplog.records]
        assert "Fetching info for beatmap set 1234567" in messages
        assert "Retrieved info for beatmap set 1234567" in messages

    def test_failure_is_logged_with_context(self, beatmap_client, caplog):
        beatmap_client.session.get.return_value = _response(status=404, text="missing")

        with caplog.at_level(logging.ERROR, logger="beatmap_bot.services.beatmap_client"):
            beatmap_client.fetch_by_id("42")

        assert any(
            r.levelno == logging.ERROR and "beatmap set 42" in r.getMessage()
            for r in caplog.records
        )


class TestSearch:
    def test_sends_fixed_query_parameters(self, beatmap_client):
        beatmap_client.session.get.return_value = _response(payload=[])

        beatmap_client.search("test song")

        beatmap_client.session.get.assert_called_once_with(
            "https://catboy.best/api/v2/search",
            params={
                "query": "test song",
                "limit": 10,
                "status": "1,2,4",
                "mode": -1,
                "sort": "ranked_desc",
            },
            timeout=None,
        )

    def test_results_keep_api_order(self, beatmap_client, beatmapset_payload):
        second = dict(beatmapset_payload, id=7654321, title="Other Song")
        beatmap_client.session.get.return_value = _response(payload=[beatmapset_payload, second])

        result = beatmap_client.search("song")

        assert result.success is True
        assert [b.id for b in result.value] == [1234567, 7654321]

    def test_zero_matches_is_success(self, beatmap_client, caplog):
        beatmap_client.session.get.return_value = _response(payload=[])

        with caplog.at_level(logging.WARNING, logger="beatmap_bot.services.beatmap_client"):
            result = beatmap_client.search("nothing")

        assert result.success is True
        assert result.value == []
        assert 'No beatmaps found matching "nothing"' in caplog.text

    @pytest.mark.parametrize("payload", [None, {"error": "weird"}])
    def test_null_or_non_list_body_is_empty(self, beatmap_client, payload):
        beatmap_client.session.get.return_value = _response(payload=payload)

        result = beatmap_client.search("x")

        assert result.success is True
        assert result.value == []

    def test_malformed_items_are_skipped(self, beatmap_client, beatmapset_payload, caplog):
        body = [beatmapset_payload, {"title": "no id here"}, "not a dict"]
        beatmap_client.session.get.return_value = _response(payload=body)

        with caplog.at_level(logging.WARNING, logger="beatmap_bot.services.beatmap_client"):
            result = beatmap_client.search("test")

        assert result.success is True
        assert [b.id for b in result.value] == [1234567]
        assert "Skipping search result 1" in caplog.text
        assert "Skipping search result 2" in caplog.text

    def test_only_malformed_items_is_zero_matches(self, beatmap_client):
        beatmap_client.session.get.return_value = _response(payload=[{"title": "no id here"}])

        result = beatmap_client.search("test")

        assert result.success is True
        assert result.value == []

    def test_undecodable_body_is_search_failed(self, beatmap_client):
        response = _response(payload=None)
        response.json.side_effect = ValueError("Expecting value")
        beatmap_client.session.get.return_value = response

        result = beatmap_client.search("x")

        assert result.error_code is ErrorKind.SEARCH_FAILED

    def test_transport_error_is_search_failed(self, beatmap_client):
        beatmap_client.session.get.side_effect = requests.ConnectionError("dns failure")

        result = beatmap_client.search("x")

        assert result.success is False
        assert result.error_code is ErrorKind.SEARCH_FAILED
        assert result.error == "Failed to search beatmaps - dns failure"

    def test_server_error_is_search_failed(self, beatmap_client):
        beatmap_client.session.get.return_value = _response(status=500, text="oops")

        result = beatmap_client.search("x")

        assert result.error_code is ErrorKind.SEARCH_FAILED


class TestUrlHelpers:
    def test_background_preview_url(self, beatmap_client):
        assert (
            beatmap_client.background_preview_url(1234567)
            == "https://catboy.best/preview/background/1234567"
        )

    def test_download_urls(self, beatmap_client):
        assert beatmap_client.download_urls("1234567") == DownloadUrls(
            with_video="https://catboy.best/d/1234567",
            without_video="https://catboy.best/d/1234567n",
        )

    def test_helpers_make_no_network_call(self, beatmap_client):
        beatmap_client.background_preview_url(1)
        beatmap_client.download_urls(1)
        beatmap_client.session.get.assert_not_called()

    def test_custom_base_url_trailing_slash(self):
        session = MagicMock()
        session.headers = {}
        client = BeatmapClient(base_url="https://mirror.example/", session=session)
        assert client.download_urls(5).without_video == "https://mirror.example/d/5n"


class TestSession:
    def test_user_agent_header(self, beatmap_client):
        assert beatmap_client.session.headers["User-Agent"] == BOT_IDENTITY

    def test_timeout_is_passed_through(self, beatmapset_payload):
        session = MagicMock()
        session.headers = {}
        session.get.return_value = _response(payload=beatmapset_payload)
        client = BeatmapClient(timeout=7.5, session=session)

        client.fetch_by_id(1)

        assert session.get.call_args.kwargs["timeout"] == 7.5

    def test_close_closes_session(self, beatmap_client):
        beatmap_client.close()
        beatmap_client.session.close.assert_called_once()

    def test_default_session_is_requests_session(self):
        client = BeatmapClient()
        try:
            assert isinstance(client.session, requests.Session)
        finally:
            client.close()
