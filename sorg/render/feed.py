"""RSS 2.0 feeds listing the direct children of an index page."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import functools
import typing as typ
from email.utils import format_datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from sorg.config.models import SiteConfig
    from sorg.tree.models import Page

FEED_TEMPLATE = "rss.xml"
PACKAGE_TEMPLATES = Path(__file__).resolve().parents[1] / "templates"


@dc.dataclass(frozen=True, slots=True)
class FeedItem:
    """One ``<item>`` of a feed."""

    title: str
    link: str
    description: str
    pub_date: str | None = None
    content: str | None = None


@functools.cache
def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(PACKAGE_TEMPLATES)),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def format_pub_date(value: dt.date | None) -> str | None:
    """Format a closing date as an RFC 822 timestamp at midnight UTC.

    >>> format_pub_date(dt.date(2024, 3, 1))
    'Fri, 01 Mar 2024 00:00:00 GMT'
    """
    if value is None:
        return None
    moment = dt.datetime.combine(value, dt.time(), tzinfo=dt.UTC)
    return format_datetime(moment, usegmt=True)


def _absolute(base_url: str, path: str) -> str:
    return f"{base_url.rstrip('/')}{path}"


def feed_items(
    children: cabc.Iterable[tuple[Page, cabc.Mapping[str, typ.Any]]],
    config: SiteConfig,
) -> list[FeedItem]:
    """Build feed items from rendered child pages and their contexts."""
    items: list[FeedItem] = []
    for page, context in children:
        content = context.get("content")
        items.append(
            FeedItem(
                title=page.info.title,
                link=_absolute(config.url, page.path),
                description=page.info.description or config.description,
                pub_date=format_pub_date(page.info.closed_at),
                # plain str so the HTML is escaped into the XML text node
                content=str(content) if content is not None else None,
            )
        )
    return items


def generate_feed(
    children: cabc.Iterable[tuple[Page, cabc.Mapping[str, typ.Any]]],
    config: SiteConfig,
    containing_path: str,
) -> str:
    """Render the RSS document for an index page.

    Parameters
    ----------
    children : iterable of (Page, mapping)
        Direct child pages with the contexts they were rendered with.
    config : SiteConfig
        Supplies the channel title, link and description.
    containing_path : str
        Path of the index page; the feed's self link points at
        ``{url}{containing_path}/rss.xml``.

    Returns
    -------
    str
        The feed as XML text.
    """
    channel = {
        "title": config.title,
        "link": config.url,
        "description": config.description,
        "self_link": _absolute(config.url, f"{containing_path.rstrip('/')}/rss.xml"),
    }
    template = _environment().get_template(FEED_TEMPLATE)
    return template.render(channel=channel, items=feed_items(children, config))


__all__ = ["FeedItem", "feed_items", "format_pub_date", "generate_feed"]
