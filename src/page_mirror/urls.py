from __future__ import annotations

import re
from urllib.parse import SplitResult, quote, urlsplit, urlunsplit

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

# Characters left untouched when escaping a URL path for use in a filename.
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"

DEFAULT_SCHEME = "https"


def parse_url(text: str) -> SplitResult | None:
    """Parse a URL, returning ``None`` for text that is not a usable URL.

    Rejected:
    - ASCII control characters anywhere in the text.
    - ``%`` not followed by two hex digits.
    - A leading ``:`` (scheme separator with no scheme).
    - Anything ``urlsplit`` refuses (e.g. unbalanced IPv6 brackets).
    """

    if _CONTROL_CHARS.search(text):
        return None
    if _BAD_PERCENT_ESCAPE.search(text):
        return None
    if text.startswith(":"):
        return None
    try:
        parsed = urlsplit(text)
        # Accessing .port validates it.
        parsed.port
    except ValueError:
        return None
    return parsed


def resolve_link(url: str, from_host: str) -> str:
    """Make *url* absolute.

    A URL with a scheme is returned unchanged. Otherwise a missing scheme
    becomes ``https`` and a missing host becomes *from_host*.
    """

    parsed = urlsplit(url)
    if parsed.scheme:
        return url

    netloc = parsed.netloc or from_host
    return urlunsplit(
        (DEFAULT_SCHEME, netloc, parsed.path, parsed.query, parsed.fragment)
    )


def clean_link(url: str, from_host: str) -> str:
    """Resolve *url*, then drop its query string and fragment."""

    parsed = urlsplit(resolve_link(url, from_host))
    return f"{parsed.scheme}://{parsed.netloc}{_rooted(parsed.netloc, parsed.path)}"


def _rooted(netloc: str, path: str) -> str:
    if netloc and path and not path.startswith("/"):
        return "/" + path
    return path


def local_filename(clean_url: str) -> str:
    """Return the last path segment of *clean_url*.

    Trailing slashes are ignored, so ``https://a.test/x/`` gives ``x``.
    Segments that cannot name a file inside a directory (empty, ``.``, ``..``)
    become ``index``.
    """

    name = clean_url.rstrip("/").rsplit("/", 1)[-1]
    if name in {"", ".", ".."}:
        return "index"
    return name


def escaped_path(url: str) -> str:
    return quote(urlsplit(url).path, safe=_PATH_SAFE)


def host_of(url: str) -> str:
    """Host (with port, without user info) of an absolute URL."""

    netloc = urlsplit(url).netloc
    return netloc.rpartition("@")[2]
