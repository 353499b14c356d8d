"""Tests for document-defined macros."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup
from jinja2 import DictLoader, Environment

from sorg.document import parse_document
from sorg.errors import MacroError
from sorg.export.events import headline_tree
from sorg.export.highlight import CodeHighlighter
from sorg.export.html import HtmlExporter
from sorg.export.links import LinkResolver
from sorg.export.macros import MacroExpander, MacroSet, split_arguments

DOCUMENT = """\
#+TITLE: Macros
* index
#+BEGIN_MACRO greet name surname
hello {{name}} {{surname}}
#+END_MACRO
** Post :post:
Say {{{greet(Ann, Lee)}}}!
#+BEGIN_MACRO shout word
<b>{{ word }}</b>
#+END_MACRO
"""


@pytest.fixture
def macros() -> MacroSet:
    return MacroSet.parse(parse_document(DOCUMENT))


@pytest.fixture
def expander(macros: MacroSet) -> MacroExpander:
    environment = Environment(loader=DictLoader(macros.templates()), autoescape=True)
    return MacroExpander(macros, environment)


def test_macro_blocks_are_collected_from_every_heading(macros: MacroSet) -> None:
    assert "greet" in macros
    assert "shout" in macros
    greet = macros.get("greet")
    assert greet is not None
    assert greet.parameters == ("name", "surname")
    assert greet.template_name == "macros/greet.html"
    assert macros.templates()["macros/greet.html"] == "hello {{name}} {{surname}}"


def test_expand_fills_parameters(expander: MacroExpander) -> None:
    assert expander.expand("greet", "Ann, Lee") == "hello Ann Lee"


def test_arguments_are_escaped(expander: MacroExpander) -> None:
    assert expander.expand("shout", "<i>") == "<b>&lt;i&gt;</b>"


def test_argument_count_mismatch_is_an_error(expander: MacroExpander) -> None:
    with pytest.raises(MacroError, match="expects 2 argument"):
        expander.expand("greet", "Ann, Lee, Smith")


def test_unknown_macro_is_an_error(expander: MacroExpander) -> None:
    with pytest.raises(MacroError, match="unknown macro 'nope'"):
        expander.expand("nope", None)


def test_template_errors_become_macro_errors() -> None:
    document = parse_document(
        "* index\n#+BEGIN_MACRO broken\n{{ unclosed\n#+END_MACRO\n"
    )
    macros = MacroSet.parse(document)
    expander = MacroExpander(macros, Environment(loader=DictLoader(macros.templates())))

    with pytest.raises(MacroError, match="failed to render"):
        expander.expand("broken")


def test_split_arguments_handles_escaped_commas() -> None:
    assert split_arguments("a\\, b, c") == ["a, b", "c"]
    assert split_arguments("  ") == []


def test_exported_post_expands_calls(macros: MacroSet, expander: MacroExpander) -> None:
    document = parse_document(DOCUMENT)
    post = document.site_root().children[0]
    exporter = HtmlExporter(LinkResolver("https://e.org"), CodeHighlighter(), expander)

    html = exporter.export(headline_tree(post), as_index=False)
    soup = BeautifulSoup(html, "html.parser")

    assert soup.find("p").get_text() == "Say hello Ann Lee!"
    assert "{{" not in html, "macro definitions are not part of the page"
