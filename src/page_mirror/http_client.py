from __future__ import annotations

import time
from dataclasses import dataclass

import requests
from requests import exceptions as req_exc
from urllib3 import exceptions as urllib3_exc


class FetchError(RuntimeError):
    """A URL could not be retrieved (transport failure or non-2xx status)."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


@dataclass(frozen=True)
class FetchResult:
    url: str
    final_url: str
    status_code: int
    headers: dict[str, str]
    fetched_at: float
    body: bytes


class HttpClient:
    """Plain GET over a shared ``requests`` session.

    One attempt per URL; no custom headers, cookies or redirect policy beyond
    what ``requests`` does by default.
    """

    def __init__(
        self,
        session: requests.Session,
        *,
        timeout_s: float | None = 45,
    ) -> None:
        self._session = session
        self._timeout_s = timeout_s

    def get(self, url: str) -> FetchResult:
        try:
            resp = self._session.get(url, timeout=self._timeout_s)
        except req_exc.RequestException as e:
            raise FetchError(url, str(e)) from e
        except (urllib3_exc.HTTPError, ValueError, UnicodeError) as e:
            # urllib3 can raise these past requests, e.g. LocationParseError
            # for an over-long host label.
            raise FetchError(url, f"{type(e).__name__}: {e}") from e

        status = int(resp.status_code)
        if not 200 <= status < 300:
            raise FetchError(url, f"HTTP {status}")

        return FetchResult(
            url=url,
            final_url=str(resp.url),
            status_code=status,
            headers={k: str(v) for k, v in resp.headers.items()},
            fetched_at=time.time(),
            body=resp.content,
        )

    def close(self) -> None:
        self._session.close()
