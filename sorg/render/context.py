"""Assemble the variables a page template is rendered with.

Keys are merged in three layers, later layers winning: the heading's
properties verbatim, then the site fields (``base_title``, ``base_url``,
``base_description``), then the values computed for the page (``content``,
``title``, ``date``, ``word_count``, ``reading_time``, ``asset_v``,
``highlight_css`` and, per page kind, ``pages`` or ``sections`` and
``footnotes``).
"""

from __future__ import annotations

import dataclasses as dc
import secrets
import typing as typ

from markupsafe import Markup

from sorg._constants import NOEXPORT_TAG
from sorg.document import load_document
from sorg.errors import ExternalFileError
from sorg.export.elements import Document, Headline, Title
from sorg.export.events import document_tree, headline_tree
from sorg.export.footnotes import extract_footnotes
from sorg.export.words import count_words, reading_time
from sorg.tree.models import ExternalFilePage, IndexPage

from .templates import page_summary

if typ.TYPE_CHECKING:
    from sorg.config.models import SiteConfig
    from sorg.export.highlight import CodeHighlighter
    from sorg.export.html import HtmlExporter
    from sorg.tree.models import Page


def site_context(config: SiteConfig) -> dict[str, str]:
    """Return the site-wide fields shared by every page."""
    return {
        "base_title": config.title,
        "base_url": config.url,
        "base_description": config.description,
    }


def _section_titles(tree: Headline | Document) -> list[str]:
    """Return the raw titles of the exported headlines directly below ``tree``."""
    return [
        title.raw
        for child in tree.children
        if isinstance(child, Headline) and NOEXPORT_TAG not in child.tags
        for title in child.children[:1]
        if isinstance(title, Title)
    ]


def _load_external_tree(page: Page, config: SiteConfig) -> Headline | Document:
    """Parse the document an external-file page points at.

    The first heading of that document is the page; a document without
    headings is exported whole.
    """
    variant = typ.cast("ExternalFilePage", page.variant)
    path = variant.path
    if not path.is_absolute():
        path = config.root_folder / path
    try:
        document = load_document(path, keywords=config.keywords)
    except (OSError, UnicodeDecodeError) as exc:
        raise ExternalFileError(page.info.title, variant.path) from exc
    first = document.first_heading()
    if first is None:
        return document_tree(document.root)
    return headline_tree(first)


class ContextBuilder:
    """Compute template contexts for pages of one build."""

    def __init__(
        self,
        config: SiteConfig,
        exporter: HtmlExporter,
        highlighter: CodeHighlighter,
    ) -> None:
        self.config = config
        self.exporter = exporter
        self.highlighter = highlighter

    def build(self, page: Page) -> dict[str, typ.Any]:
        """Return the full context for ``page``."""
        context: dict[str, typ.Any] = dict(page.info.properties)
        context.update(site_context(self.config))
        context.update(self._computed(page))
        return context

    def _computed(self, page: Page) -> dict[str, typ.Any]:
        variant = page.variant
        if isinstance(variant, IndexPage):
            tree: Headline | Document = headline_tree(page.heading)
            extra: dict[str, typ.Any] = {
                "pages": [
                    page_summary(child)
                    for child in sorted(page.children, key=lambda child: child.order)
                ]
            }
        else:
            if isinstance(variant, ExternalFilePage):
                tree = _load_external_tree(page, self.config)
            else:
                tree = headline_tree(page.heading)
            extra = {
                "sections": _section_titles(tree),
                "footnotes": [dc.asdict(note) for note in extract_footnotes(tree)],
            }

        as_index = page.is_index
        content = self.exporter.export(tree, as_index=as_index)
        word_count = count_words(tree, as_index=as_index)
        return {
            "content": Markup(content),
            "title": page.info.title,
            "date": page.info.closed_at,
            "word_count": word_count,
            "reading_time": reading_time(word_count),
            "asset_v": secrets.token_hex(8),
            "highlight_css": Markup(self.highlighter.stylesheet),
            **extra,
        }


__all__ = ["ContextBuilder", "site_context"]
