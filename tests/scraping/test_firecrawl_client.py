"""Tests for sakescan/scraping/firecrawl_client.py"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from sakescan.common.errors import ConfigurationError, UpstreamFetchError
from sakescan.scraping import FirecrawlClient


@pytest.fixture
def client():
    return FirecrawlClient(api_key="fc-test")


def _response(status_code=200, json_data=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.json.return_value = json_data or {}
    response.text = text
    return response


class TestInit:
    def test_requires_key(self):
        with pytest.raises(ConfigurationError, match="Firecrawl API key not configured"):
            FirecrawlClient(api_key="")

    def test_session_headers(self, client):
        assert client.session.headers["Authorization"] == "Bearer fc-test"
        assert client.session.headers["Content-Type"] == "application/json"


class TestScrape:
    def test_payload(self, client):
        response = _response(json_data={"success": True, "data": {"markdown": "# Sake", "html": "<h1>"}})

        with patch.object(client.session, "post", return_value=response) as post:
            page = client.scrape("https://shop.example/sake", wait_for=3000)

        args, kwargs = post.call_args
        assert args[0] == FirecrawlClient.API_URL
        assert kwargs["json"] == {
            "url": "https://shop.example/sake",
            "formats": ["markdown", "html"],
            "onlyMainContent": True,
            "waitFor": 3000,
        }
        assert page.markdown == "# Sake"
        assert page.html == "<h1>"

    def test_no_wait_for(self, client):
        with patch.object(client.session, "post", return_value=_response()) as post:
            client.scrape("https://shop.example/sake", formats=("html",))

        payload = post.call_args.kwargs["json"]
        assert "waitFor" not in payload
        assert payload["formats"] == ["html"]

    def test_missing_data_gives_empty_page(self, client):
        with patch.object(client.session, "post", return_value=_response(json_data={"success": True})):
            page = client.scrape("https://shop.example/sake")

        assert page.markdown == ""
        assert page.html == ""

    def test_http_error(self, client):
        response = _response(status_code=402, text='{"error":"Payment required"}')

        with patch.object(client.session, "post", return_value=response):
            with pytest.raises(UpstreamFetchError) as exc_info:
                client.scrape("https://shop.example/sake")

        assert exc_info.value.status_code == 402
        assert "Payment required" in exc_info.value.details

    def test_non_json_body(self, client):
        response = _response(text="<html>Bad Gateway</html>")
        response.json.side_effect = ValueError("Expecting value")

        with patch.object(client.session, "post", return_value=response):
            with pytest.raises(UpstreamFetchError) as exc_info:
                client.scrape("https://shop.example/sake")

        assert exc_info.value.status_code == 200
        assert exc_info.value.details == "<html>Bad Gateway</html>"

    def test_non_object_body(self, client):
        with patch.object(client.session, "post", return_value=_response(json_data=["data"])):
            with pytest.raises(UpstreamFetchError, match="invalid response"):
                client.scrape("https://shop.example/sake")

    def test_network_error(self, client):
        with patch.object(client.session, "post", side_effect=requests.exceptions.Timeout("timed out")):
            with pytest.raises(UpstreamFetchError) as exc_info:
                client.scrape("https://shop.example/sake")

        assert exc_info.value.status_code is None
        assert "timed out" in exc_info.value.details


def test_context_manager_closes_session():
    client = FirecrawlClient(api_key="fc-test")
    with patch.object(client.session, "close") as close:
        with client:
            pass
    close.assert_called_once()
