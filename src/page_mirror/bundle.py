from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .urls import escaped_path, host_of

logger = logging.getLogger(__name__)


class BundleError(OSError):
    """The resource directory or page file could not be written."""


def bundle_stem(page_url: str) -> str:
    """``<host>_<escaped path with / replaced by _>`` for *page_url*."""

    return f"{host_of(page_url)}_{escaped_path(page_url).replace('/', '_')}"


@dataclass(frozen=True)
class BundlePaths:
    page_file: Path
    resource_dir: Path

    @property
    def resource_dir_name(self) -> str:
        return self.resource_dir.name


def bundle_paths(page_url: str, out_dir: Path) -> BundlePaths:
    stem = bundle_stem(page_url)
    return BundlePaths(
        page_file=out_dir / f"{stem}.html",
        resource_dir=out_dir / f"{stem}_files",
    )


@dataclass
class BundleWriter:
    paths: BundlePaths

    def prepare(self) -> Path:
        """Create the resource directory (and parents)."""

        try:
            self.paths.resource_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise BundleError(
                f"failed to create directory to store file contents in: {e}"
            ) from e
        return self.paths.resource_dir

    def write_page(self, body: bytes) -> Path:
        try:
            self.paths.page_file.write_bytes(body)
        except OSError as e:
            raise BundleError(f"failed to write page file: {e}") from e
        logger.info("saved page to %s", self.paths.page_file)
        return self.paths.page_file
