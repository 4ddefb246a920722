from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests
from urllib3.exceptions import LocationParseError

from page_mirror.http_client import FetchError, HttpClient


def _response(status_code: int = 200, content: bytes = b"ok") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.content = content
    resp.url = "https://site.test/final"
    resp.headers = {"Content-Type": "text/html"}
    return resp


def test_get_returns_body():
    session = MagicMock()
    session.get.return_value = _response(content=b"<html></html>")

    res = HttpClient(session, timeout_s=5).get("https://site.test/")

    session.get.assert_called_once_with("https://site.test/", timeout=5)
    assert res.body == b"<html></html>"
    assert res.status_code == 200
    assert res.final_url == "https://site.test/final"
    assert res.headers == {"Content-Type": "text/html"}


def test_non_2xx_is_an_error():
    session = MagicMock()
    session.get.return_value = _response(status_code=404)

    with pytest.raises(FetchError, match="HTTP 404"):
        HttpClient(session).get("https://site.test/missing.js")


def test_transport_error_is_wrapped_without_retry():
    session = MagicMock()
    session.get.side_effect = requests.ConnectionError("boom")

    with pytest.raises(FetchError) as excinfo:
        HttpClient(session).get("https://site.test/a.js")

    assert excinfo.value.url == "https://site.test/a.js"
    assert "boom" in str(excinfo.value)
    assert session.get.call_count == 1


@pytest.mark.parametrize(
    "error",
    [
        LocationParseError("a" * 70 + ".test"),
        UnicodeError("label too long"),
        ValueError("bad url"),
    ],
)
def test_errors_raised_past_requests_are_wrapped(error):
    session = MagicMock()
    session.get.side_effect = error

    with pytest.raises(FetchError) as excinfo:
        HttpClient(session).get("https://site.test/x.png")

    assert type(error).__name__ in excinfo.value.reason
