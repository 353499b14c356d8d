"""Render element trees into the HTML fragment a page template receives.

:class:`HtmlExporter` walks the start/end event stream of one page's tree and
writes tags per element. Index pages drop every descendant headline, since
each becomes a page of its own; posts keep descendant headlines as anchored
sub-headings and drop subtrees tagged ``noexport``. Both drop the page's own
title, which templates render from ``title``.

Examples
--------
>>> from sorg.document import parse_document
>>> from sorg.export.events import headline_tree
>>> from sorg.export.highlight import CodeHighlighter
>>> from sorg.export.links import LinkResolver
>>> doc = parse_document("* Post :post:\\nSome *bold* text.\\n")
>>> exporter = HtmlExporter(LinkResolver("https://e.org"), CodeHighlighter())
>>> exporter.export(headline_tree(doc.site_root()), as_index=False)
'<section><p>Some <b>bold</b> text.</p></section>'
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
from html import escape

from sorg._constants import NOEXPORT_TAG
from sorg.errors import MacroError
from sorg.tree.slugs import slugify

from .elements import (
    Bold,
    CenterBlock,
    Code,
    Document,
    Element,
    ExampleBlock,
    ExportBlock,
    FixedWidth,
    FnDef,
    FnRef,
    Headline,
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
    Section,
    Snippet,
    SourceBlock,
    SpecialBlock,
    Strike,
    Table,
    TableCell,
    TableRow,
    Text,
    Title,
    Underline,
    Verbatim,
    VerseBlock,
)
from .events import Edge, iter_events

if typ.TYPE_CHECKING:
    from .highlight import CodeHighlighter
    from .links import LinkResolver
    from .macros import MacroExpander

HTML_BACKEND = "html"
MACRO_BLOCK = "macro"
ATTR_HTML_PATTERN = re.compile(r":([\w-]+)[ \t]+((?:(?![ \t]+:[\w-]+[ \t]).)+)")

# start tag name and extra css class for plain wrapping elements
SIMPLE_TAGS: dict[type[Element], tuple[str, str]] = {
    Document: ("main", ""),
    Section: ("section", ""),
    Paragraph: ("p", ""),
    QuoteBlock: ("blockquote", ""),
    CenterBlock: ("div", "center"),
    VerseBlock: ("p", "verse"),
    Bold: ("b", ""),
    Italic: ("i", ""),
    Strike: ("s", ""),
    Underline: ("u", ""),
    ListItem: ("li", ""),
    Table: ("table", ""),
    TableRow: ("tr", ""),
}


@dc.dataclass(slots=True)
class RenderState:
    """Mutable state of one export pass.

    Attributes
    ----------
    page_level : int
        Outline level of the page's own heading; ``1`` for whole documents.
    as_index : bool
        Whether descendant headlines are child pages to leave out.
    skip_depth : int
        Nesting depth inside a subtree that produces no output.
    in_page_title : bool
        Whether the events belong to the page's own title.
    attributes : dict[str, str]
        Attributes set by ``#+CAPTION`` / ``#+ATTR_HTML`` for the next tags.
    footnote_id : int
        Last number handed to an anonymous footnote reference.
    """

    page_level: int
    as_index: bool
    skip_depth: int = 0
    in_page_title: bool = False
    attributes: dict[str, str] = dc.field(default_factory=dict)
    footnote_id: int = 0

    def render_attributes(self, css_class: str = "") -> str:
        """Format pending attributes, adding ``css_class`` to ``class``."""
        attributes = dict(self.attributes)
        if css_class:
            existing = attributes.get("class")
            attributes["class"] = f"{existing} {css_class}" if existing else css_class
        return "".join(
            f' {key}="{escape(value, quote=True)}"' for key, value in attributes.items()
        )

    def heading_level(self, level: int) -> int:
        """Map an outline level to an ``<hN>`` level relative to the page."""
        return max(1, min(6, level - self.page_level + 1))

    def next_footnote(self, label: str) -> str:
        if label:
            return label
        self.footnote_id += 1
        return str(self.footnote_id)


class HtmlExporter:
    """Export headline or document trees to HTML fragments.

    Parameters
    ----------
    links : LinkResolver
        Rewrites link targets against the site URL.
    highlighter : CodeHighlighter
        Highlights source blocks.
    macros : MacroExpander, optional
        Expands ``{{{name(args)}}}`` calls; without one every call fails.
    """

    def __init__(
        self,
        links: LinkResolver,
        highlighter: CodeHighlighter,
        macros: MacroExpander | None = None,
    ) -> None:
        self.links = links
        self.highlighter = highlighter
        self.macros = macros

    def export(self, tree: Headline | Document, *, as_index: bool) -> str:
        """Return the HTML for ``tree``.

        Parameters
        ----------
        tree : Headline | Document
            The page's own headline, or a whole document for heading-less
            external files.
        as_index : bool
            Render as an index page, leaving out every descendant headline.

        Raises
        ------
        MacroError
            If a macro call cannot be expanded.
        """
        page_level = tree.level if isinstance(tree, Headline) else 1
        state = RenderState(page_level=page_level, as_index=as_index)
        out: list[str] = []
        for edge, element in iter_events(tree):
            if edge is Edge.START:
                self._start(out, state, tree, element)
            else:
                self._end(out, state, tree, element)
        return "".join(out)

    def _hidden(self, state: RenderState, tree: Element, element: Element) -> bool:
        """Return whether ``element`` opens a subtree that renders nothing."""
        match element:
            case Headline(tags=tags) if element is not tree:
                return state.as_index or NOEXPORT_TAG in tags
            case FnDef():
                return True
            case SpecialBlock(name=name):
                return name.lower() == MACRO_BLOCK
        return False

    def _is_page_title(self, tree: Element, element: Element) -> bool:
        return isinstance(tree, Headline) and isinstance(element, Title) and (
            element.level == tree.level
        )

    def _start(
        self, out: list[str], state: RenderState, tree: Element, element: Element
    ) -> None:
        if state.skip_depth or self._hidden(state, tree, element):
            state.skip_depth += 1
            return
        if self._is_page_title(tree, element):
            state.in_page_title = True
            return
        if state.in_page_title:
            return

        simple = SIMPLE_TAGS.get(type(element))
        if simple is not None:
            tag, css_class = simple
            out.append(f"<{tag}{state.render_attributes(css_class)}>")
            return

        match element:
            case Headline():
                pass
            case Title(level=level, raw=raw):
                slug = slugify(raw)
                out.append(
                    f"<h{state.heading_level(level)}{state.render_attributes()}>"
                    f'<a id="{slug}" href="#{slug}">'
                )
            case Keyword(key=key, value=value):
                self._keyword(state, key, value)
            case List(ordered=ordered):
                tag = "ol" if ordered else "ul"
                out.append(f"<{tag}{state.render_attributes()}>")
            case TableCell(header=header):
                out.append("<th>" if header else "<td>")
            case Text(value=value):
                out.append(escape(value, quote=False))
            case Code(value=value) | Verbatim(value=value):
                out.append(f"<code>{escape(value, quote=False)}</code>")
            case Link(path=path, desc=desc):
                out.append(self._link(state, path, desc))
            case FnRef(label=label):
                number = state.next_footnote(label)
                out.append(
                    f'<sup id="fnref-{number}"><a href="#fn-{number}" '
                    f'class="footnote-ref">{number}</a></sup>'
                )
            case Macro(name=name, arguments=arguments):
                out.append(self._macro(name, arguments))
            case Snippet(backend=backend, value=value) if backend == HTML_BACKEND:
                out.append(value)
            case LineBreak():
                out.append("<br/>")
            case Rule():
                out.append(f"<hr{state.render_attributes()}/>")
            case SourceBlock(language=language, code=code):
                out.append(self.highlighter.code_block(code, language))
            case ExampleBlock(text=text) | FixedWidth(text=text):
                out.append(
                    f'<pre class="example"{state.render_attributes()}>'
                    f"{escape(text, quote=False)}</pre>"
                )
            case ExportBlock(backend=backend, text=text) if backend == HTML_BACKEND:
                out.append(text)
            case SpecialBlock(name=name):
                out.append(f"<div{state.render_attributes(name.lower())}>")
            case _:
                pass

    def _end(
        self, out: list[str], state: RenderState, tree: Element, element: Element
    ) -> None:
        if state.skip_depth:
            state.skip_depth -= 1
            return
        if self._is_page_title(tree, element):
            state.in_page_title = False
            return
        if state.in_page_title:
            return
        if isinstance(element, Keyword):
            return

        simple = SIMPLE_TAGS.get(type(element))
        if simple is not None:
            out.append(f"</{simple[0]}>")
        else:
            match element:
                case Title(level=level):
                    out.append(f"</a></h{state.heading_level(level)}>")
                case List(ordered=ordered):
                    out.append("</ol>" if ordered else "</ul>")
                case TableCell(header=header):
                    out.append("</th>" if header else "</td>")
                case SpecialBlock():
                    out.append("</div>")
                case _:
                    pass
        state.attributes.clear()

    @staticmethod
    def _keyword(state: RenderState, key: str, value: str) -> None:
        match key.lower():
            case "caption":
                state.attributes["alt"] = value
                state.attributes["title"] = value
            case "attr_html":
                for match in ATTR_HTML_PATTERN.finditer(value):
                    state.attributes[match.group(1)] = match.group(2).strip()
            case _:
                pass

    def _link(self, state: RenderState, path: str, desc: str | None) -> str:
        resolved = self.links.resolve(path)
        url = escape(resolved.url, quote=True)
        attributes = state.render_attributes()
        if resolved.is_image:
            caption = state.attributes.get("alt")
            figcaption = (
                f"<figcaption>{escape(caption, quote=False)}</figcaption>"
                if caption
                else ""
            )
            return (
                f'<figure class="image"><img src="{url}"{attributes} loading="lazy"/>'
                f"{figcaption}</figure>"
            )
        target = ' target="_blank" rel="noopener"' if resolved.is_external else ""
        label = escape(desc or path, quote=False)
        return f'<a href="{url}"{attributes}{target}>{label}</a>'

    def _macro(self, name: str, arguments: str | None) -> str:
        if self.macros is None:
            msg = f"unknown macro '{name}'"
            raise MacroError(msg)
        return self.macros.expand(name, arguments)


__all__ = ["HtmlExporter", "RenderState"]
