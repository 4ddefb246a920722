from __future__ import annotations

from typing import Iterable

from .links import ResourceLink
from .urls import local_filename


def local_reference(link: ResourceLink, resource_dir_name: str) -> str:
    return f"./{resource_dir_name}/{local_filename(link.clean)}"


def _encode(text: str) -> bytes:
    return text.encode("utf-8", errors="surrogateescape")


def rewrite_document(
    body: bytes,
    links: Iterable[ResourceLink],
    resource_dir_name: str,
    *,
    skip_raw: Iterable[str] = (),
) -> bytes:
    """Point every resource reference in *body* at its local copy.

    Links are applied one after another in the given order, each replacing
    every exact occurrence of its raw text. A raw text that is a substring of
    another link's raw text can clobber part of it; there is no markup
    parsing here. Raw texts listed in *skip_raw* are left alone.
    """

    skipped = set(skip_raw)
    for link in links:
        if link.raw in skipped:
            continue
        body = body.replace(
            _encode(link.raw), _encode(local_reference(link, resource_dir_name))
        )
    return body
