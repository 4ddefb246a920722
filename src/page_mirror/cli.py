from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .bundle import BundleError
from .http_client import FetchError
from .mirror import MirrorConfig, mirror_page, validate_page_url

USAGE = """\
page-mirror - save a web page together with its resources
Usage: mirror (optional)[FLAGs]... (mandatory)-url [webpage URL]

Flags:
-help -> Print this message and exit
-version -> Print version information and exit
-url (string) -> Specify URL to the webpage to be saved
-out (path) -> Directory to write the bundle to (default: current directory)
-workers (int) -> Maximum number of simultaneous resource downloads (default: 8)
-timeout (float) -> HTTP timeout in seconds (default: 45)
-keep-failed-remote -> Keep original URLs for resources that failed to download
-no-progress -> Do not show a progress bar
-verbose -> Debug logging
"""

EXIT_USAGE = 2
EXIT_FETCH = 3
EXIT_BUNDLE = 4


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="mirror", add_help=False, usage=USAGE)
    p.add_argument("-help", "--help", action="store_true")
    p.add_argument("-version", "--version", action="store_true")
    p.add_argument("-url", "--url", default="")
    p.add_argument("-out", "--out", type=Path, default=None)
    p.add_argument("-workers", "--workers", type=int, default=8)
    p.add_argument("-timeout", "--timeout", type=float, default=45)
    p.add_argument("-keep-failed-remote", "--keep-failed-remote", action="store_true")
    p.add_argument("-no-progress", "--no-progress", action="store_true")
    p.add_argument("-verbose", "--verbose", action="store_true")
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.help:
        print(USAGE, end="")
        return 0

    if args.version:
        print(f"page-mirror {__version__}")
        return 0

    try:
        url = validate_page_url(args.url)
    except ValueError as e:
        print(f"{e}\n")
        print(USAGE, end="")
        return EXIT_USAGE

    if args.workers < 1:
        print("-workers must be at least 1\n")
        print(USAGE, end="")
        return EXIT_USAGE

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = MirrorConfig(
        out_dir=args.out if args.out is not None else Path.cwd(),
        workers=int(args.workers),
        timeout_s=float(args.timeout),
        keep_failed_remote=bool(args.keep_failed_remote),
        progress=not bool(args.no_progress),
    )

    try:
        report = mirror_page(url, cfg)
    except FetchError as e:
        print(str(e), file=sys.stderr)
        return EXIT_FETCH
    except BundleError as e:
        print(f"Failed to save page at {url}: {e}", file=sys.stderr)
        return EXIT_BUNDLE

    summary = report.summary()
    print(
        "mirror: "
        f"resources={summary['resources']} saved={summary['saved']} "
        f"failed={len(summary['failed'])} page={summary['page_file']}"
    )
    if report.failures:
        print("mirror: failed resources:", file=sys.stderr)
        for failed in summary["failed"]:
            print(f"- {failed['url']}: {failed['error']}", file=sys.stderr)
    return 0
