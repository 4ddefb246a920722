from __future__ import annotations

import threading
import time

import pytest

from page_mirror.http_client import FetchError, FetchResult


class FakeHttp:
    """In-memory stand-in for HttpClient.

    ``pages`` maps URL -> body; a value that is an Exception is raised as a
    FetchError for that URL. Unknown URLs answer like a 404.
    """

    def __init__(
        self,
        pages: dict[str, bytes | Exception],
        *,
        delay_s: float = 0.0,
        delays: dict[str, float] | None = None,
    ):
        self.pages = pages
        self.delay_s = delay_s
        self.delays = delays or {}
        self.requested: list[str] = []
        self._lock = threading.Lock()

    def get(self, url: str) -> FetchResult:
        with self._lock:
            self.requested.append(url)
        delay = self.delays.get(url, self.delay_s)
        if delay:
            time.sleep(delay)
        if url not in self.pages:
            raise FetchError(url, "HTTP 404")
        body = self.pages[url]
        if isinstance(body, Exception):
            raise FetchError(url, str(body))
        return FetchResult(
            url=url,
            final_url=url,
            status_code=200,
            headers={},
            fetched_at=time.time(),
            body=body,
        )


@pytest.fixture
def fake_http():
    return FakeHttp
