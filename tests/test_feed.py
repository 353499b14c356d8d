"""Tests for the RSS feeds written next to index pages."""

from __future__ import annotations

import datetime as dt
import typing as typ
import xml.etree.ElementTree as ET

from markupsafe import Markup

from sorg.config import TodoKeywords
from sorg.document import parse_document
from sorg.render.feed import format_pub_date, generate_feed
from sorg.tree import build_tree

if typ.TYPE_CHECKING:
    from sorg.config import SiteConfig

CONTENT_NS = "{http://purl.org/rss/1.0/modules/content/}encoded"
ATOM_LINK = "{http://www.w3.org/2005/Atom}link"


def _children():
    document = parse_document(
        "* index\n"
        "** Blog :posts:\n"
        "*** Dated\nCLOSED: [2024-03-01 Fri 09:30]\n"
        ":PROPERTIES:\n:description: About dates\n:END:\n"
        "*** Undated\n"
    )
    root = build_tree(document.site_root(), TodoKeywords(), release=True)
    return root.children[0]


def test_feed_lists_direct_children(site_config: SiteConfig) -> None:
    blog = _children()
    contexts = [
        (blog.children[0], {"content": Markup("<p>dated &amp; done</p>")}),
        (blog.children[1], {"content": Markup("<p>undated</p>")}),
    ]

    channel = ET.fromstring(generate_feed(contexts, site_config, blog.path)).find("channel")

    assert channel.findtext("title") == "Fixture Blog"
    assert channel.findtext("link") == "https://blog.example"
    assert channel.find(ATOM_LINK).get("href") == "https://blog.example/blog/rss.xml"
    dated, undated = channel.findall("item")
    assert dated.findtext("link") == "https://blog.example/blog/dated"
    assert dated.findtext("guid") == "https://blog.example/blog/dated"
    assert dated.find("guid").get("isPermaLink") == "true"
    assert dated.findtext("pubDate") == "Fri, 01 Mar 2024 00:00:00 GMT"
    assert dated.findtext("description") == "About dates"
    assert dated.findtext(CONTENT_NS) == "<p>dated &amp; done</p>"
    assert undated.find("pubDate") is None
    assert undated.findtext("description") == "Notes from the fixture"


def test_root_feed_self_link(site_config: SiteConfig) -> None:
    feed = ET.fromstring(generate_feed([], site_config, "/"))

    link = feed.find("channel").find(ATOM_LINK)
    assert link.get("href") == "https://blog.example/rss.xml"
    assert feed.find("channel").findall("item") == []


def test_format_pub_date() -> None:
    assert format_pub_date(dt.date(2023, 12, 25)) == "Mon, 25 Dec 2023 00:00:00 GMT"
    assert format_pub_date(None) is None
