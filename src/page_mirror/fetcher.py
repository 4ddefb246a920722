from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Protocol

from tqdm import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm

from .http_client import FetchError, FetchResult
from .links import ResourceLink
from .urls import local_filename

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    def get(self, url: str) -> FetchResult: ...


@dataclass(frozen=True)
class FetchOutcome:
    link: ResourceLink
    path: Path | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ResourceFetcher:
    """Download resources in parallel into one directory.

    At most ``max_workers`` downloads run at once. ``fetch_all`` returns only
    after every download has finished, successfully or not.
    """

    def __init__(
        self,
        http: Fetcher,
        *,
        max_workers: int = 8,
        progress: bool = False,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self._http = http
        self._max_workers = max_workers
        self._progress = progress

    def fetch_one(self, link: ResourceLink, resource_dir: Path) -> FetchOutcome:
        try:
            res = self._http.get(link.resolved)
        except FetchError as e:
            logger.warning("failed %s: %s", link.resolved, e.reason)
            return FetchOutcome(link=link, error=str(e))
        except Exception as e:
            logger.warning("failed %s: %r", link.resolved, e)
            return FetchOutcome(
                link=link, error=f"Failed to fetch {link.resolved}: {e!r}"
            )

        dest = resource_dir / local_filename(link.clean)
        try:
            dest.write_bytes(res.body)
        except OSError as e:
            logger.warning("failed to write %s: %s", dest, e)
            return FetchOutcome(
                link=link, error=f"Failed to write {dest}: {e}"
            )

        logger.info("downloaded %s -> %s", link.resolved, dest)
        return FetchOutcome(link=link, path=dest)

    def fetch_all(
        self, links: Iterable[ResourceLink], resource_dir: Path
    ) -> list[FetchOutcome]:
        links = list(links)
        if not links:
            return []

        outcomes: list[FetchOutcome] = []
        with logging_redirect_tqdm(), ThreadPoolExecutor(
            max_workers=self._max_workers
        ) as pool:
            futures = [pool.submit(self.fetch_one, link, resource_dir) for link in links]
            for fut in tqdm(
                as_completed(futures),
                total=len(futures),
                desc="Fetching resources",
                unit="file",
                disable=not self._progress,
            ):
                outcomes.append(fut.result())
        return outcomes
