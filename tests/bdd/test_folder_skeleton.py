"""Behaviour tests for ``sorg folders``."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, scenarios, then, when

from sorg import cli

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "folder_skeleton.feature"
)
scenarios(FEATURE_FILE)

NESTED = """\
* index
** first child
*** grandchild
** second page
"""


@pytest.fixture
def scenario_state() -> dict[str, typ.Any]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given("a blog document with nested pages")
def given_nested(
    make_site: typ.Callable[..., Path], scenario_state: dict[str, typ.Any]
) -> None:
    document = make_site(NESTED)
    scenario_state["document"] = document
    scenario_state["static"] = document.parent / "static"


@given("the static folder already holds a gitignore for one page")
def given_existing_gitignore(scenario_state: dict[str, typ.Any]) -> None:
    folder = scenario_state["static"] / "second-page"
    folder.mkdir(parents=True)
    (folder / ".gitignore").write_text("*.psd\n", encoding="utf-8")


@when("I create the folder skeleton with gitignore files")
def when_folders(scenario_state: dict[str, typ.Any]) -> None:
    cli.folders(scenario_state["document"], gitignore=True)


@then("every page has a folder below the static folder")
def then_folders(scenario_state: dict[str, typ.Any]) -> None:
    static: Path = scenario_state["static"]
    for folder in ("first-child", "first-child/grandchild", "second-page"):
        assert (static / folder).is_dir(), f"missing folder {folder}"
        assert (static / folder / ".gitignore").is_file()


@then("the existing gitignore is preserved")
def then_preserved(scenario_state: dict[str, typ.Any]) -> None:
    marker = scenario_state["static"] / "second-page" / ".gitignore"
    assert marker.read_text(encoding="utf-8") == "*.psd\n"
