# ABOUTME: Contract tests for the HTTP fetch adapter.
# ABOUTME: Validates GET vs form POST selection, cookie attachment, and JSON decoding.

from unittest.mock import AsyncMock

import httpx
import pytest

from weathercloud.session import Session
from weathercloud.transport import build_headers, fetch_data, has_field


def _mock_client(json_data, status_code: int = 200) -> httpx.AsyncClient:
    """Create a mock httpx.AsyncClient that returns the given JSON response."""
    mock = AsyncMock(spec=httpx.AsyncClient)
    response = httpx.Response(status_code=status_code, json=json_data, request=httpx.Request("GET", "https://test"))
    mock.get.return_value = response
    mock.post.return_value = response
    return mock


class TestBuildHeaders:
    def test_no_cookie_header_without_session(self):
        assert build_headers(Session()) == {}

    def test_adds_cookie_to_extra_headers(self):
        session = Session()
        session.set_cookies(["PHPSESSID=abc", "lang=en"])
        headers = build_headers(session, {"X-Requested-With": "XMLHttpRequest"})

        assert headers == {"X-Requested-With": "XMLHttpRequest", "Cookie": "PHPSESSID=abc; lang=en"}


class TestFetchData:
    @pytest.mark.asyncio
    async def test_get_without_form(self):
        """fetch_data issues a GET when no form data is given.

        Implementation: Calls fetch_data with query params only.
        Passing implies: Listing endpoints are fetched with GET and their JSON is returned.
        """
        client = _mock_client({"devices": []})
        result = await fetch_data(client, Session(), "https://test/page/own", params={"code": "x"})

        assert result == {"devices": []}
        client.get.assert_awaited_once()
        client.post.assert_not_called()
        assert client.get.call_args.kwargs["params"] == {"code": "x"}

    @pytest.mark.asyncio
    async def test_post_with_form(self):
        """fetch_data issues an AJAX-style form POST when form data is given.

        Implementation: Calls fetch_data with data and inspects the request headers.
        Passing implies: Device endpoints get the form encoding and XHR marker they expect.
        """
        client = _mock_client({"update": 10})
        await fetch_data(client, Session(), "https://test/device/ajaxupdatedate", data={"d": "x"})

        client.get.assert_not_called()
        kwargs = client.post.call_args.kwargs
        assert kwargs["data"] == {"d": "x"}
        assert kwargs["headers"]["X-Requested-With"] == "XMLHttpRequest"
        assert kwargs["headers"]["Content-Type"].startswith("application/x-www-form-urlencoded")

    @pytest.mark.asyncio
    async def test_error_status_still_decodes(self):
        """fetch_data does not raise on HTTP errors; the payload decides what is usable.

        Implementation: Returns a 500 with a JSON body.
        Passing implies: Callers validate marker fields regardless of status.
        """
        client = _mock_client({"error": "internal"}, status_code=500)
        assert await fetch_data(client, Session(), "https://test/device/stats", data={"code": "x"}) == {
            "error": "internal"
        }


class TestHasField:
    def test_only_objects_have_fields(self):
        assert has_field({"temp": 1}, "temp")
        assert not has_field({"dew": 1}, "temp")
        assert not has_field(["temp"], "temp")
        assert not has_field(None, "temp")
