"""Closed set of element variants the exporter walks.

Structural variants (:class:`Document`, :class:`Headline`, :class:`Title`,
:class:`Section`) come from the ``orgparse`` outline; everything else is
produced by :mod:`sorg.export.parser` from heading bodies. Container variants
carry a ``children`` list; leaf variants carry their payload directly.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ


class Element:
    """Base class of every element variant."""

    __slots__ = ()

    @property
    def children(self) -> list[Element]:
        return []


# structure


@dc.dataclass(slots=True)
class Document(Element):
    children: list[Element] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class Headline(Element):
    level: int
    tags: frozenset[str] = frozenset()
    children: list[Element] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class Title(Element):
    level: int
    raw: str
    children: list[Element] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class Section(Element):
    children: list[Element] = dc.field(default_factory=list)


# blocks


@dc.dataclass(slots=True)
class Paragraph(Element):
    children: list[Element] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class QuoteBlock(Element):
    children: list[Element] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class CenterBlock(Element):
    children: list[Element] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class VerseBlock(Element):
    children: list[Element] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class SpecialBlock(Element):
    """``#+BEGIN_NAME params`` block with an unrecognised name."""

    name: str
    parameters: str | None = None
    raw: str = ""
    children: list[Element] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class SourceBlock(Element):
    language: str | None
    code: str


@dc.dataclass(slots=True)
class ExampleBlock(Element):
    text: str


@dc.dataclass(slots=True)
class ExportBlock(Element):
    backend: str
    text: str


@dc.dataclass(slots=True)
class FixedWidth(Element):
    text: str


@dc.dataclass(slots=True)
class Keyword(Element):
    key: str
    value: str


@dc.dataclass(slots=True)
class List(Element):
    ordered: bool
    children: list[Element] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class ListItem(Element):
    bullet: str
    children: list[Element] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class Table(Element):
    children: list[Element] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class TableRow(Element):
    header: bool = False
    children: list[Element] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class TableCell(Element):
    header: bool = False
    children: list[Element] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class Rule(Element):
    pass


@dc.dataclass(slots=True)
class FnDef(Element):
    label: str
    children: list[Element] = dc.field(default_factory=list)


# inline


@dc.dataclass(slots=True)
class Text(Element):
    value: str


@dc.dataclass(slots=True)
class Bold(Element):
    children: list[Element] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class Italic(Element):
    children: list[Element] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class Underline(Element):
    children: list[Element] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class Strike(Element):
    children: list[Element] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class Code(Element):
    value: str


@dc.dataclass(slots=True)
class Verbatim(Element):
    value: str


@dc.dataclass(slots=True)
class Link(Element):
    path: str
    desc: str | None = None


@dc.dataclass(slots=True)
class FnRef(Element):
    """Footnote reference; ``definition`` is set for inline footnotes."""

    label: str
    definition: str | None = None


@dc.dataclass(slots=True)
class Macro(Element):
    name: str
    arguments: str | None = None


@dc.dataclass(slots=True)
class Snippet(Element):
    backend: str
    value: str


@dc.dataclass(slots=True)
class LineBreak(Element):
    pass


def plain_text(elements: typ.Iterable[Element]) -> str:
    """Concatenate the visible text of ``elements`` without markup."""
    parts: list[str] = []
    for element in elements:
        match element:
            case Text(value=value) | Code(value=value) | Verbatim(value=value):
                parts.append(value)
            case Link(path=path, desc=desc):
                parts.append(desc or path)
            case LineBreak():
                parts.append("\n")
            case _:
                parts.append(plain_text(element.children))
    return "".join(parts)


__all__ = [
    "Bold",
    "CenterBlock",
    "Code",
    "Document",
    "Element",
    "ExampleBlock",
    "ExportBlock",
    "FixedWidth",
    "FnDef",
    "FnRef",
    "Headline",
    "Italic",
    "Keyword",
    "LineBreak",
    "Link",
    "List",
    "ListItem",
    "Macro",
    "Paragraph",
    "QuoteBlock",
    "Rule",
    "Section",
    "Snippet",
    "SourceBlock",
    "SpecialBlock",
    "Strike",
    "Table",
    "TableCell",
    "TableRow",
    "Text",
    "Title",
    "Underline",
    "Verbatim",
    "VerseBlock",
    "plain_text",
]
