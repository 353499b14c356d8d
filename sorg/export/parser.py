r"""Lex heading bodies into :mod:`sorg.export.elements` variants.

``orgparse`` hands over each heading's body as plain text. This module splits
that text into blocks (paragraphs, lists, tables, ``#+BEGIN_…`` blocks,
keywords, footnote definitions) and the inline markup inside them (emphasis,
links, footnote references, macro calls, export snippets).

Example
-------
>>> from sorg.export.parser import parse_inline
>>> [type(e).__name__ for e in parse_inline("a *bold* [[https://x.org][link]]")]
['Text', 'Bold', 'Text', 'Link']
"""

from __future__ import annotations

import re
import textwrap

from .elements import (
    Bold,
    CenterBlock,
    Code,
    Element,
    ExampleBlock,
    ExportBlock,
    FixedWidth,
    FnDef,
    FnRef,
    Italic,
    Keyword,
    LineBreak,
    Link,
    List,
    ListItem,
    Macro,
    Paragraph,
    QuoteBlock,
    Rule,
    Snippet,
    SourceBlock,
    SpecialBlock,
    Strike,
    Table,
    TableCell,
    TableRow,
    Text,
    Underline,
    Verbatim,
    VerseBlock,
)

BLOCK_BEGIN_PATTERN = re.compile(r"^\s*#\+begin_(\w+)(?:[ \t]+(.*?))?\s*$", re.IGNORECASE)
KEYWORD_PATTERN = re.compile(r"^\s*#\+(\w+):[ \t]*(.*?)\s*$")
COMMENT_PATTERN = re.compile(r"^\s*#(?:\s|$)")
RULE_PATTERN = re.compile(r"^\s*-{5,}\s*$")
FIXED_WIDTH_PATTERN = re.compile(r"^\s*:(?: (.*)|$)")
DRAWER_BEGIN_PATTERN = re.compile(r"^\s*:([\w-]+):\s*$")
DRAWER_END_PATTERN = re.compile(r"^\s*:END:\s*$", re.IGNORECASE)
TABLE_PATTERN = re.compile(r"^\s*\|")
TABLE_RULE_PATTERN = re.compile(r"^\s*\|-")
LIST_ITEM_PATTERN = re.compile(r"^(\s*)([-+*]|\d+[.)])(?:[ \t]+(.*))?$")
FN_DEF_PATTERN = re.compile(r"^\[fn:([\w-]+)\][ \t]*(.*)$")
ESCAPED_LINE_PATTERN = re.compile(r"^(\s*),(\*|#\+)", re.MULTILINE)

LINK_PATTERN = re.compile(r"\[\[([^\[\]]+)\](?:\[([^\[\]]*)\])?\]")
FN_REF_PATTERN = re.compile(r"\[fn:([\w-]*)(?::((?:[^\[\]]|\[[^\[\]]*\])*))?\]")
MACRO_PATTERN = re.compile(r"\{\{\{([A-Za-z][\w-]*)(?:\((.*?)\))?\}\}\}", re.DOTALL)
SNIPPET_PATTERN = re.compile(r"@@([\w-]+):(.*?)@@", re.DOTALL)
LINE_BREAK_PATTERN = re.compile(r"\\\\[ \t]*$", re.MULTILINE)
PLAIN_URL_PATTERN = re.compile(r"(?<![\w\[/=])https?://[^\s<>\[\]\"']*[^\s<>\[\]\"'.,;:!?)]")
EMPHASIS_PATTERN = re.compile(
    r"(?:^|(?<=[\s\-({'\"]))([*/_+=~])(?=\S)(.+?)(?<=\S)\1(?=[\s\-.,:;!?'\")}\[]|$)",
    re.DOTALL,
)

INLINE_PATTERNS = (
    LINK_PATTERN,
    FN_REF_PATTERN,
    MACRO_PATTERN,
    SNIPPET_PATTERN,
    LINE_BREAK_PATTERN,
    PLAIN_URL_PATTERN,
    EMPHASIS_PATTERN,
)
EMPHASIS_TYPES: dict[str, type[Element]] = {
    "*": Bold,
    "/": Italic,
    "_": Underline,
    "+": Strike,
}


def _indent(line: str) -> int:
    return len(line) - len(line.lstrip())


def _inline_element(match: re.Match[str]) -> Element:
    """Build the inline element for a match of one of ``INLINE_PATTERNS``."""
    pattern = match.re
    if pattern is LINK_PATTERN:
        return Link(path=match.group(1).strip(), desc=match.group(2))
    if pattern is FN_REF_PATTERN:
        return FnRef(label=match.group(1), definition=match.group(2))
    if pattern is MACRO_PATTERN:
        return Macro(name=match.group(1), arguments=match.group(2))
    if pattern is SNIPPET_PATTERN:
        return Snippet(backend=match.group(1).lower(), value=match.group(2))
    if pattern is LINE_BREAK_PATTERN:
        return LineBreak()
    if pattern is PLAIN_URL_PATTERN:
        return Link(path=match.group(0))
    marker, content = match.group(1), match.group(2)
    if marker == "=":
        return Verbatim(content)
    if marker == "~":
        return Code(content)
    return EMPHASIS_TYPES[marker](parse_inline(content))


def parse_inline(text: str) -> list[Element]:
    """Split ``text`` into inline elements.

    At every position the earliest match among the inline patterns wins; ties
    go to the pattern listed first in ``INLINE_PATTERNS``. Text between
    matches becomes :class:`Text`.
    """
    elements: list[Element] = []
    position = 0
    while position < len(text):
        best: re.Match[str] | None = None
        for pattern in INLINE_PATTERNS:
            match = pattern.search(text, position)
            if match and (best is None or match.start() < best.start()):
                best = match
        if best is None:
            break
        if best.start() > position:
            elements.append(Text(text[position : best.start()]))
        elements.append(_inline_element(best))
        position = best.end()
    if position < len(text):
        elements.append(Text(text[position:]))
    return elements


def _find_block_end(lines: list[str], start: int, name: str) -> int | None:
    end_pattern = re.compile(rf"^\s*#\+end_{re.escape(name)}\s*$", re.IGNORECASE)
    for index in range(start + 1, len(lines)):
        if end_pattern.match(lines[index]):
            return index
    return None


def _unescape(text: str) -> str:
    """Drop the comma Org uses to protect ``*`` and ``#+`` at line starts."""
    return ESCAPED_LINE_PATTERN.sub(r"\1\2", text)


def _block_element(name: str, parameters: str | None, content: list[str]) -> Element | None:
    """Build the element for a ``#+BEGIN_name`` block; ``None`` drops it."""
    raw = textwrap.dedent("\n".join(content))
    key = name.lower()
    if key == "src":
        language = parameters.split()[0] if parameters else None
        return SourceBlock(language=language, code=_unescape(raw))
    if key == "example":
        return ExampleBlock(_unescape(raw))
    if key == "export":
        backend = parameters.split()[0].lower() if parameters else ""
        return ExportBlock(backend=backend, text=raw)
    if key == "comment":
        return None
    if key == "quote":
        return QuoteBlock(parse_lines(raw.splitlines()))
    if key == "center":
        return CenterBlock(parse_lines(raw.splitlines()))
    if key == "verse":
        children: list[Element] = []
        for index, line in enumerate(content):
            if index:
                children.append(LineBreak())
            children.extend(parse_inline(line.strip()))
        return VerseBlock(children)
    return SpecialBlock(
        name=name,
        parameters=parameters,
        raw=raw.strip("\n"),
        children=parse_lines(raw.splitlines()),
    )


def _starts_block(line: str) -> bool:
    """Return whether ``line`` interrupts a running paragraph."""
    return bool(
        BLOCK_BEGIN_PATTERN.match(line)
        or KEYWORD_PATTERN.match(line)
        or RULE_PATTERN.match(line)
        or TABLE_PATTERN.match(line)
        or FIXED_WIDTH_PATTERN.match(line)
        or FN_DEF_PATTERN.match(line)
        or DRAWER_BEGIN_PATTERN.match(line)
        or COMMENT_PATTERN.match(line)
        or _list_match(line)
    )


def _list_match(line: str) -> re.Match[str] | None:
    match = LIST_ITEM_PATTERN.match(line)
    if match and match.group(2) == "*" and not match.group(1):
        return None
    return match


def _parse_table(rows: list[str]) -> Table:
    data_rows = [row for row in rows if not TABLE_RULE_PATTERN.match(row)]
    header_count = 0
    if data_rows and any(TABLE_RULE_PATTERN.match(row) for row in rows[1:]):
        first_rule = next(i for i, row in enumerate(rows) if TABLE_RULE_PATTERN.match(row))
        header_count = first_rule
    table = Table()
    for index, row in enumerate(data_rows):
        header = index < header_count and header_count < len(data_rows)
        cells = row.strip().strip("|").split("|")
        table.children.append(
            TableRow(
                header=header,
                children=[
                    TableCell(header=header, children=parse_inline(cell.strip()))
                    for cell in cells
                ],
            )
        )
    return table


def _parse_list(lines: list[str], start: int) -> tuple[List, int]:
    first = _list_match(lines[start])
    if first is None:
        msg = f"expected a list item at line {start + 1}"
        raise ValueError(msg)
    indent = len(first.group(1))
    ordered = first.group(2)[0].isdigit()
    result = List(ordered=ordered)
    index = start
    while index < len(lines):
        match = _list_match(lines[index])
        if not match or len(match.group(1)) != indent:
            break
        if match.group(2)[0].isdigit() != ordered:
            break
        body = [match.group(3) or ""]
        index += 1
        while index < len(lines):
            line = lines[index]
            if not line.strip():
                upcoming = _next_content(lines, index)
                if upcoming is not None and _indent(lines[upcoming]) > indent:
                    body.append("")
                    index += 1
                    continue
                break
            if _indent(line) > indent:
                body.append(line)
                index += 1
                continue
            break
        result.children.append(ListItem(bullet=match.group(2), children=_parse_item(body)))
        upcoming = _next_content(lines, index)
        if upcoming is not None and upcoming != index:
            sibling = _list_match(lines[upcoming])
            if sibling and len(sibling.group(1)) == indent:
                index = upcoming
    return result, index


def _next_content(lines: list[str], index: int) -> int | None:
    for position in range(index, len(lines)):
        if lines[position].strip():
            return position
    return None


def _parse_item(body: list[str]) -> list[Element]:
    """Parse a list item; a leading paragraph is unwrapped into the item."""
    rest = textwrap.dedent("\n".join(body[1:])).splitlines()
    blocks = parse_lines([body[0], *rest]) if body[0] else parse_lines(rest)
    if blocks and isinstance(blocks[0], Paragraph) and body[0]:
        return [*blocks[0].children, *blocks[1:]]
    return blocks


def parse_lines(lines: list[str]) -> list[Element]:
    """Parse body ``lines`` into block elements."""
    elements: list[Element] = []
    index = 0
    while index < len(lines):
        line = lines[index]
        if not line.strip():
            index += 1
            continue

        begin = BLOCK_BEGIN_PATTERN.match(line)
        if begin:
            end = _find_block_end(lines, index, begin.group(1))
            if end is not None:
                element = _block_element(
                    begin.group(1), begin.group(2), lines[index + 1 : end]
                )
                if element is not None:
                    elements.append(element)
                index = end + 1
                continue

        drawer = DRAWER_BEGIN_PATTERN.match(line)
        if drawer and not begin:
            closing = next(
                (
                    position
                    for position in range(index + 1, len(lines))
                    if DRAWER_END_PATTERN.match(lines[position])
                ),
                None,
            )
            if closing is not None:
                index = closing + 1
                continue

        keyword = KEYWORD_PATTERN.match(line)
        if keyword:
            elements.append(Keyword(key=keyword.group(1), value=keyword.group(2)))
            index += 1
            continue
        if COMMENT_PATTERN.match(line):
            index += 1
            continue
        if RULE_PATTERN.match(line):
            elements.append(Rule())
            index += 1
            continue
        if TABLE_PATTERN.match(line):
            rows = []
            while index < len(lines) and TABLE_PATTERN.match(lines[index]):
                rows.append(lines[index])
                index += 1
            elements.append(_parse_table(rows))
            continue
        if FIXED_WIDTH_PATTERN.match(line):
            fixed = []
            while index < len(lines):
                match = FIXED_WIDTH_PATTERN.match(lines[index])
                if not match:
                    break
                fixed.append(match.group(1) or "")
                index += 1
            elements.append(FixedWidth("\n".join(fixed)))
            continue
        definition = FN_DEF_PATTERN.match(line)
        if definition:
            text = [definition.group(2)]
            index += 1
            while (
                index < len(lines)
                and lines[index].strip()
                and not FN_DEF_PATTERN.match(lines[index])
            ):
                text.append(lines[index].strip())
                index += 1
            elements.append(
                FnDef(label=definition.group(1), children=parse_inline("\n".join(text)))
            )
            continue
        if _list_match(line):
            parsed, index = _parse_list(lines, index)
            elements.append(parsed)
            continue

        paragraph = [line.strip()]
        index += 1
        while (
            index < len(lines)
            and lines[index].strip()
            and not _starts_block(lines[index])
        ):
            paragraph.append(lines[index].strip())
            index += 1
        elements.append(Paragraph(parse_inline("\n".join(paragraph))))
    return elements


def parse_blocks(text: str) -> list[Element]:
    """Parse a heading body into block elements."""
    return parse_lines(text.splitlines())


__all__ = ["parse_blocks", "parse_inline", "parse_lines"]
