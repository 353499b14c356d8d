"""Render the page tree into HTML files and RSS feeds."""

from .context import ContextBuilder, site_context
from .feed import FeedItem, feed_items, format_pub_date, generate_feed
from .renderer import PageRenderer
from .templates import (
    make_environment,
    make_get_pages,
    page_summary,
    resolve_template,
    template_candidates,
)

__all__ = [
    "ContextBuilder",
    "FeedItem",
    "PageRenderer",
    "feed_items",
    "format_pub_date",
    "generate_feed",
    "make_environment",
    "make_get_pages",
    "page_summary",
    "resolve_template",
    "site_context",
    "template_candidates",
]
