"""Turn Org headings into HTML fragments, word counts and footnote lists."""

from __future__ import annotations

from .elements import plain_text
from .events import Edge, document_tree, headline_tree, iter_events
from .footnotes import Footnote, extract_footnotes
from .highlight import CodeHighlighter
from .html import HtmlExporter, RenderState
from .links import LinkResolver, ResolvedLink
from .macros import Macro, MacroExpander, MacroSet, split_arguments
from .parser import parse_blocks, parse_inline
from .words import count_text, count_words, reading_time

__all__ = [
    "CodeHighlighter",
    "Edge",
    "Footnote",
    "HtmlExporter",
    "LinkResolver",
    "Macro",
    "MacroExpander",
    "MacroSet",
    "RenderState",
    "ResolvedLink",
    "count_text",
    "count_words",
    "document_tree",
    "extract_footnotes",
    "headline_tree",
    "iter_events",
    "parse_blocks",
    "parse_inline",
    "plain_text",
    "reading_time",
    "split_arguments",
]
