from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

from .urls import clean_link, parse_url, resolve_link

# Matches href="link" as well as things like hReF =  'link'.
_HREF_RE: Final[re.Pattern[str]] = re.compile(r"(?i)(href)\s*=\s*(\"|')(.*?)(\"|')")
# Matches src="link" as well as things like SrC    =  'link'.
_SRC_RE: Final[re.Pattern[str]] = re.compile(r"(?i)(src)\s*=\s*(\"|')(.*?)(\"|')")

# href targets are only mirrored when their path mentions one of these.
RESOURCE_HREF_SUFFIXES: Final[tuple[str, ...]] = (".css", ".scss", ".js", ".mjs")


@dataclass(frozen=True)
class ResourceLink:
    """A resource reference found in a page.

    ``raw`` is the attribute value exactly as written in the page and is the
    text searched for when rewriting. ``resolved`` is the absolute URL that
    gets fetched; ``clean`` drops query and fragment and names the local file.
    """

    raw: str
    resolved: str
    clean: str


def _decode(body: bytes | str) -> str:
    if isinstance(body, str):
        return body
    # surrogateescape keeps undecodable bytes round-trippable.
    return body.decode("utf-8", errors="surrogateescape")


def _links_for(pattern: re.Pattern[str], body: bytes | str) -> list[str]:
    out: list[str] = []
    for match in pattern.finditer(_decode(body)):
        text = match.group(0)

        start = text.find('"')
        if start == -1:
            start = text.find("'")
            if start == -1:
                continue
            end = text.rfind("'")
        else:
            end = text.rfind('"')

        if end <= start + 1:
            continue

        link = text[start + 1 : end]
        if parse_url(link) is None:
            continue
        out.append(link)
    return out


def extract_href_links(body: bytes | str) -> list[str]:
    """Raw values of every ``href=`` attribute, in document order."""
    return _links_for(_HREF_RE, body)


def extract_src_links(body: bytes | str) -> list[str]:
    """Raw values of every ``src=`` attribute, in document order."""
    return _links_for(_SRC_RE, body)


def _is_resource_href(link: str) -> bool:
    parsed = parse_url(link)
    if parsed is None:
        return False
    return any(suffix in parsed.path for suffix in RESOURCE_HREF_SUFFIXES)


def find_resource_links(body: bytes | str, *, base_host: str) -> list[ResourceLink]:
    """Resource references of a page.

    Stylesheet/script-looking ``href`` links come first, then every ``src``
    link, each group in document order. Duplicates are kept.
    """

    raws = [link for link in extract_href_links(body) if _is_resource_href(link)]
    raws.extend(extract_src_links(body))

    links: list[ResourceLink] = []
    for raw in raws:
        resolved = resolve_link(raw, base_host)
        links.append(
            ResourceLink(
                raw=raw,
                resolved=resolved,
                clean=clean_link(resolved, base_host),
            )
        )
    return links
