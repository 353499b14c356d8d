"""Behaviour tests for document macros."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, scenarios, then, when

from sorg.build import build_site
from sorg.errors import MacroError, PageRenderError

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "macros.feature"
scenarios(FEATURE_FILE)

MACRO_BLOCK = """\
#+BEGIN_MACRO figure src caption
<figure class="wide"><img src="{{ src }}"/><figcaption>{{ caption }}</figcaption></figure>
#+END_MACRO
"""


@pytest.fixture
def scenario_state() -> dict[str, typ.Any]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given("a blog document defining a figure macro")
def given_macro(
    make_site: typ.Callable[..., Path], scenario_state: dict[str, typ.Any]
) -> None:
    body = (
        "* index\n" + MACRO_BLOCK + "** Gallery :post:\n"
        "{{{figure(/cat.png, A cat\\, asleep)}}}\n"
    )
    scenario_state["document"] = make_site(body)


@given("a blog document calling a macro with too few arguments")
def given_bad_call(
    make_site: typ.Callable[..., Path], scenario_state: dict[str, typ.Any]
) -> None:
    body = "* index\n" + MACRO_BLOCK + "** Gallery :post:\n{{{figure(/cat.png)}}}\n"
    scenario_state["document"] = make_site(body)


@when("I build the site in release mode")
def when_build(scenario_state: dict[str, typ.Any]) -> None:
    build_site(scenario_state["document"])


@when("I try to build the site")
def when_try_build(scenario_state: dict[str, typ.Any]) -> None:
    with pytest.raises(PageRenderError) as excinfo:
        build_site(scenario_state["document"])
    scenario_state["error"] = excinfo.value


@then("the post contains the expanded macro markup")
def then_expanded(scenario_state: dict[str, typ.Any]) -> None:
    page = scenario_state["document"].parent / "build" / "gallery" / "index.html"
    soup = BeautifulSoup(page.read_text(encoding="utf-8"), "html.parser")
    figure = soup.select_one("article figure.wide")
    assert figure is not None, "expected the macro to render a figure"
    assert figure.find("img")["src"] == "/cat.png"
    assert figure.find("figcaption").get_text() == "A cat, asleep"


@then("the macro definition is not rendered")
def then_hidden(scenario_state: dict[str, typ.Any]) -> None:
    index = scenario_state["document"].parent / "build" / "index.html"
    assert "figcaption" not in index.read_text(encoding="utf-8")


@then("the build fails naming the post and the macro")
def then_failed(scenario_state: dict[str, typ.Any]) -> None:
    error: PageRenderError = scenario_state["error"]
    assert error.title == "Gallery"
    assert isinstance(error.__cause__, MacroError)
    assert "macro 'figure' expects 2 argument(s)" in str(error)
