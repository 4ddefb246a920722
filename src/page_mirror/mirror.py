from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import requests

from .bundle import BundlePaths, BundleWriter, bundle_paths
from .fetcher import Fetcher, FetchOutcome, ResourceFetcher
from .http_client import HttpClient
from .links import ResourceLink, find_resource_links
from .rewrite import rewrite_document
from .urls import host_of, parse_url

logger = logging.getLogger(__name__)


def validate_page_url(url: str) -> str:
    """Return the stripped page URL or raise ``ValueError``.

    A page URL needs both a scheme and a host.
    """

    url = url.strip()
    if not url:
        raise ValueError("URL flag has not been set")
    parsed = parse_url(url)
    if parsed is None or not parsed.scheme or not parsed.netloc:
        raise ValueError(f"Invalid URL: {url!r}")
    return url


@dataclass
class MirrorConfig:
    out_dir: Path = field(default_factory=Path.cwd)
    workers: int = 8
    timeout_s: float | None = 45
    # Leave references to resources that failed to download untouched.
    keep_failed_remote: bool = False
    progress: bool = False


@dataclass(frozen=True)
class MirrorReport:
    url: str
    paths: BundlePaths
    links: list[ResourceLink]
    outcomes: list[FetchOutcome]

    @property
    def failures(self) -> list[FetchOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def saved(self) -> list[FetchOutcome]:
        return [o for o in self.outcomes if o.ok]

    def summary(self) -> dict:
        return {
            "url": self.url,
            "page_file": str(self.paths.page_file),
            "resource_dir": str(self.paths.resource_dir),
            "resources": len(self.links),
            "saved": len(self.saved),
            "failed": [
                {"url": o.link.resolved, "error": o.error} for o in self.failures
            ],
        }


class PageMirror:
    def __init__(self, *, http: Fetcher, config: MirrorConfig) -> None:
        self.http = http
        self.cfg = config

    def save_page(self, url: str, body: bytes) -> MirrorReport:
        """Bundle an already fetched page *body* that was served from *url*."""

        paths = bundle_paths(url, self.cfg.out_dir)
        writer = BundleWriter(paths)
        resource_dir = writer.prepare()

        links = find_resource_links(body, base_host=host_of(url))
        logger.info("found %d resource link(s) on %s", len(links), url)

        fetcher = ResourceFetcher(
            self.http,
            max_workers=self.cfg.workers,
            progress=self.cfg.progress,
        )
        outcomes = fetcher.fetch_all(links, resource_dir)

        skip_raw: set[str] = set()
        if self.cfg.keep_failed_remote:
            skip_raw = {o.link.raw for o in outcomes if not o.ok}
        rewritten = rewrite_document(
            body, links, paths.resource_dir_name, skip_raw=skip_raw
        )
        writer.write_page(rewritten)

        return MirrorReport(url=url, paths=paths, links=links, outcomes=outcomes)

    def mirror(self, url: str) -> MirrorReport:
        url = validate_page_url(url)
        logger.info("GET %s", url)
        res = self.http.get(url)
        return self.save_page(url, res.body)


def mirror_page(
    url: str,
    config: MirrorConfig | None = None,
    *,
    http: Fetcher | None = None,
) -> MirrorReport:
    """Fetch *url* and write its bundle into ``config.out_dir``.

    Raises ``ValueError`` for an unusable URL, ``FetchError`` when the page
    itself cannot be fetched and ``BundleError`` when the bundle cannot be
    written. Resource failures are reported in the returned report.
    """

    cfg = config or MirrorConfig()
    if http is not None:
        return PageMirror(http=http, config=cfg).mirror(url)

    client = HttpClient(requests.Session(), timeout_s=cfg.timeout_s)
    try:
        return PageMirror(http=client, config=cfg).mirror(url)
    finally:
        client.close()
