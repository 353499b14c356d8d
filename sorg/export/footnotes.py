"""Collect footnote definitions for the ``footnotes`` template variable."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from sorg._constants import NOEXPORT_TAG

from .elements import FnDef, FnRef, Headline, Title, plain_text
from .events import Edge, iter_events

if typ.TYPE_CHECKING:
    from .elements import Element


@dc.dataclass(frozen=True, slots=True)
class Footnote:
    """A footnote label and the plain text of its definition."""

    label: str
    definition: str


def _skipped(tree: Element, element: Element) -> bool:
    """Return whether ``element`` opens a subtree the exporter leaves out."""
    match element:
        case Headline(tags=tags) if element is not tree:
            return NOEXPORT_TAG in tags
        case Title(level=level) if isinstance(tree, Headline):
            return level == tree.level
        case FnDef():
            return True
    return False


def extract_footnotes(tree: Element) -> list[Footnote]:
    """Return footnotes defined in ``tree`` in document order.

    Both ``[fn:label] text`` definitions and inline ``[fn::text]`` /
    ``[fn:label:text]`` references are collected. References with an empty
    label are numbered from 1 in the order they appear, exactly as the HTML
    exporter numbers them: references in the page's own title, inside
    definitions or in subtrees tagged ``noexport`` are ignored.
    """
    footnotes: list[Footnote] = []
    anonymous = 0
    hidden = 0
    for edge, element in iter_events(tree):
        if _skipped(tree, element):
            if edge is Edge.END:
                hidden -= 1
                continue
            if not hidden and isinstance(element, FnDef):
                footnotes.append(
                    Footnote(element.label, plain_text(element.children).strip())
                )
            hidden += 1
            continue
        if hidden or edge is Edge.END:
            continue
        match element:
            case FnRef(label=label, definition=definition):
                if not label:
                    anonymous += 1
                    label = str(anonymous)
                if definition is not None:
                    footnotes.append(Footnote(label, definition.strip()))
    return footnotes


__all__ = ["Footnote", "extract_footnotes"]
