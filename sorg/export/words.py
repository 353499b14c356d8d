"""Word counts and reading time for rendered pages."""

from __future__ import annotations

import re
import typing as typ

from sorg._constants import NOEXPORT_TAG, WORDS_PER_MINUTE

from .elements import Document, Headline, Link, Text
from .events import Edge, iter_events

if typ.TYPE_CHECKING:
    from .elements import Element

CJK_RANGES = r"぀-ヿ㐀-䶿一-鿿가-힯"
WORD_PATTERN = re.compile(rf"[{CJK_RANGES}]|[^\W_{CJK_RANGES}]+(?:['’-][^\W_{CJK_RANGES}]+)*")


def count_text(text: str) -> int:
    """Count words in ``text``; each CJK character counts as one word.

    >>> count_text("it's a well-known fact")
    4
    >>> count_text("你好 world")
    3
    """
    return len(WORD_PATTERN.findall(text))


def count_words(tree: Headline | Document, *, as_index: bool) -> int:
    """Count the words a reader sees on the page built from ``tree``.

    Index pages count their own title and section only, since descendant
    headlines become pages of their own. Posts count the whole subtree.
    Link descriptions count; link targets and code do not.
    """
    total = 0
    depth = 0
    for edge, element in iter_events(tree):
        if isinstance(element, Headline) and element is not tree:
            hidden = as_index or NOEXPORT_TAG in element.tags
            if hidden or depth:
                depth += 1 if edge is Edge.START else -1
            continue
        if depth or edge is Edge.END:
            continue
        match element:
            case Text(value=value):
                total += count_text(value)
            case Link(desc=desc) if desc:
                total += count_text(desc)
    return total


def reading_time(word_count: int) -> int:
    """Return whole minutes of reading time, never less than one."""
    return max(1, word_count // WORDS_PER_MINUTE)


__all__ = ["count_text", "count_words", "reading_time"]
