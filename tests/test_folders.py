"""Tests for the per-page folder skeleton."""

from __future__ import annotations

import typing as typ

from sorg.document import parse_document
from sorg.folders import generate_folder_skeleton

if typ.TYPE_CHECKING:
    from pathlib import Path


def test_creates_a_folder_per_page(tmp_path: Path) -> None:
    document = parse_document("* index\n** first child\n*** grandchild\n** second page\n")

    created = generate_folder_skeleton(document, tmp_path)

    assert (tmp_path / "first-child").is_dir()
    assert (tmp_path / "first-child" / "grandchild").is_dir()
    assert (tmp_path / "second-page").is_dir()
    assert not (tmp_path / "index").exists(), "the root page maps onto the output root"
    assert created[0] == tmp_path


def test_drafts_in_review_get_folders(tmp_path: Path) -> None:
    document = parse_document(
        "* index\n** PROGRESS Draft :post:\n** TODO Idea :post:\n** Gone :noexport:\n"
    )

    generate_folder_skeleton(document, tmp_path)

    assert (tmp_path / "draft").is_dir()
    assert not (tmp_path / "idea").exists()
    assert not (tmp_path / "gone").exists()


def test_gitignore_files_are_created_empty(tmp_path: Path) -> None:
    document = parse_document("* index\n** one\n*** two\n")

    generate_folder_skeleton(document, tmp_path, gitignore=True)

    gitignore = tmp_path / "one" / "two" / ".gitignore"
    assert gitignore.is_file()
    assert gitignore.read_text(encoding="utf-8") == ""


def test_existing_gitignore_is_not_overwritten(tmp_path: Path) -> None:
    document = parse_document("* index\n** one\n*** two\n")
    folder = tmp_path / "one" / "two"
    folder.mkdir(parents=True)
    (folder / ".gitignore").write_text("hiii :3", encoding="utf-8")

    generate_folder_skeleton(document, tmp_path, gitignore=True)

    assert (folder / ".gitignore").read_text(encoding="utf-8") == "hiii :3"
