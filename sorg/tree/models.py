"""Page tree dataclasses produced by the tree builder."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import typing as typ

from .slugs import slugify

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from orgparse.node import OrgNode


def _closed_date(heading: OrgNode) -> dt.date | None:
    """Return the calendar date of the heading's CLOSED timestamp, if any."""
    closed = getattr(heading, "closed", None)
    start = getattr(closed, "start", None) if closed else None
    if isinstance(start, dt.datetime):
        return start.date()
    if isinstance(start, dt.date):
        return start
    return None


@dc.dataclass(frozen=True, slots=True)
class PageInfo:
    """Metadata computed once per heading.

    Attributes
    ----------
    title : str
        ``title`` property or the raw heading text.
    slug : str
        ``slug`` (or ``out``) property or the title, slugified either way.
    description : str | None
        ``description`` property.
    closed_at : date | None
        Date of the CLOSED timestamp.
    properties : dict[str, str]
        Every heading property, keys as authored.
    """

    title: str
    slug: str
    description: str | None
    closed_at: dt.date | None
    properties: dict[str, str]

    @classmethod
    def from_heading(cls, heading: OrgNode) -> PageInfo:
        """Derive page metadata from an ``orgparse`` heading."""
        properties = {str(key): str(value) for key, value in heading.properties.items()}
        title = properties.get("title") or heading.heading
        slug_source = properties.get("slug") or properties.get("out") or title
        return cls(
            title=title,
            slug=slugify(slug_source),
            description=properties.get("description") or None,
            closed_at=_closed_date(heading),
            properties=properties,
        )

    @property
    def closed_label(self) -> str | None:
        """Return ``closed_at`` as ``YYYY-MM-DD`` for templates."""
        return self.closed_at.isoformat() if self.closed_at else None


@dc.dataclass(frozen=True, slots=True)
class IndexPage:
    """A section page; children are keyed by slug and the last insert wins."""

    children: dict[str, Page] = dc.field(default_factory=dict)


@dc.dataclass(frozen=True, slots=True)
class PostPage:
    """A leaf page rendered from the heading's own content."""


@dc.dataclass(frozen=True, slots=True)
class ExternalFilePage:
    """A leaf page rendered from the Org document at ``path``."""

    path: Path


PageVariant = IndexPage | PostPage | ExternalFilePage


@dc.dataclass(frozen=True, slots=True, eq=False)
class Page:
    """Node of the page tree.

    Attributes
    ----------
    heading : OrgNode
        Source heading; read-only.
    path : str
        Absolute URL path, ``"/"`` for the root.
    info : PageInfo
        Derived metadata.
    order : int
        Zero-based position among the surviving siblings.
    variant : PageVariant
        What kind of page this is.
    """

    heading: OrgNode
    path: str
    info: PageInfo
    order: int
    variant: PageVariant

    @property
    def is_index(self) -> bool:
        """Return whether this page lists child pages."""
        return isinstance(self.variant, IndexPage)

    @property
    def children(self) -> list[Page]:
        """Return child pages in insertion order; empty for leaves."""
        if isinstance(self.variant, IndexPage):
            return list(self.variant.children.values())
        return []

    def walk(self) -> cabc.Iterator[Page]:
        """Yield this page and every descendant, depth-first pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()


__all__ = [
    "ExternalFilePage",
    "IndexPage",
    "Page",
    "PageInfo",
    "PageVariant",
    "PostPage",
]
