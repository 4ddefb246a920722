from __future__ import annotations

import pytest

from page_mirror.urls import (
    clean_link,
    escaped_path,
    host_of,
    local_filename,
    parse_url,
    resolve_link,
)


def test_resolve_keeps_absolute_url_unchanged():
    url = "http://cdn.test/lib/app.js?v=1#top"
    assert resolve_link(url, "site.test") == url


def test_resolve_protocol_relative_fills_scheme_only():
    assert resolve_link("//cdn.test/a.js", "site.test") == "https://cdn.test/a.js"


def test_resolve_root_relative_fills_scheme_and_host():
    assert resolve_link("/static/a.js", "site.test") == "https://site.test/static/a.js"


def test_resolve_path_relative_is_rooted_at_host():
    assert resolve_link("img/a.png", "site.test") == "https://site.test/img/a.png"


def test_resolve_keeps_query_and_fragment():
    assert (
        resolve_link("/a.js?v=2#x", "site.test") == "https://site.test/a.js?v=2#x"
    )


def test_clean_drops_query_and_fragment():
    assert clean_link("https://a.com/x/y.js?v=2#frag", "other.test") == (
        "https://a.com/x/y.js"
    )


def test_clean_resolves_first():
    assert clean_link("/x/y.css?v=3", "a.com") == "https://a.com/x/y.css"


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://a.com/x/y.js", "y.js"),
        ("https://a.com/x/dir/", "dir"),
        ("https://a.com", "a.com"),
        ("https://a.com/", "a.com"),
        ("https://a.com/x/..", "index"),
    ],
)
def test_local_filename(url, expected):
    assert local_filename(url) == expected


@pytest.mark.parametrize(
    "text",
    [
        "/a\x00.js",
        "/bad%zzescape.png",
        ":no-scheme",
        "http://[::1/x.js",
    ],
)
def test_parse_url_rejects_malformed(text):
    assert parse_url(text) is None


def test_parse_url_accepts_relative():
    parsed = parse_url("../img/a.png?x=1")
    assert parsed is not None
    assert parsed.path == "../img/a.png"


def test_escaped_path_keeps_existing_escapes():
    assert escaped_path("https://a.test/some%20dir/p q") == "/some%20dir/p%20q"


def test_host_of_drops_userinfo_keeps_port():
    assert host_of("https://user:pw@a.test:8080/x") == "a.test:8080"
