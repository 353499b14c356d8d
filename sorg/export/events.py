"""Turn ``orgparse`` headings into element trees and walk them as events.

The exporter, word counter and footnote collector all consume the same
depth-first stream of ``(Edge.START, element)`` / ``(Edge.END, element)``
pairs, so each of them only has to decide what to do per event.
"""

from __future__ import annotations

import enum
import typing as typ

from .elements import Document, Element, Headline, Keyword, Section, Title
from .parser import parse_blocks, parse_inline

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from orgparse.node import OrgNode


class Edge(enum.Enum):
    """Whether an event opens or closes an element."""

    START = "start"
    END = "end"


Event = tuple[Edge, Element]


def iter_events(element: Element) -> cabc.Iterator[Event]:
    """Yield start/end events for ``element`` and its descendants."""
    yield Edge.START, element
    for child in element.children:
        yield from iter_events(child)
    yield Edge.END, element


def headline_tree(node: OrgNode) -> Headline:
    """Convert an ``orgparse`` heading and its subtree into a :class:`Headline`."""
    children: list[Element] = [
        Title(level=node.level, raw=node.heading, children=parse_inline(node.heading))
    ]
    body = node.body
    if body.strip():
        children.append(Section(parse_blocks(body)))
    children.extend(headline_tree(child) for child in node.children)
    return Headline(
        level=node.level, tags=frozenset(node.shallow_tags), children=children
    )


def document_tree(root: OrgNode) -> Document:
    """Convert an ``orgparse`` root node into a :class:`Document`.

    The preamble keywords are dropped; any other text before the first heading
    becomes the document's leading section.
    """
    children: list[Element] = []
    blocks = [
        block
        for block in parse_blocks(root.body)
        if not isinstance(block, Keyword)
    ]
    if blocks:
        children.append(Section(blocks))
    children.extend(headline_tree(child) for child in root.children)
    return Document(children)


__all__ = ["Edge", "Event", "document_tree", "headline_tree", "iter_events"]
