"""Mirror the page tree as empty folders, typically inside ``static``.

Each page gets a folder at its URL path so images and other assets can sit
next to the page that links them. Drafts still in review are included, since
the skeleton is prepared while writing.
"""

from __future__ import annotations

import typing as typ

from sorg._constants import INDEX_SLUG
from sorg.tree.builder import build_tree

if typ.TYPE_CHECKING:
    from pathlib import Path

    from sorg.document import OrgDocument
    from sorg.tree.models import Page

GITIGNORE = ".gitignore"


def _create(page: Page, parent: Path, *, gitignore: bool, created: list[Path]) -> None:
    folder = parent if page.info.slug == INDEX_SLUG else parent / page.info.slug
    folder.mkdir(parents=True, exist_ok=True)
    created.append(folder)
    if gitignore:
        marker = folder / GITIGNORE
        if not marker.exists():
            marker.touch()
    for child in page.children:
        _create(child, folder, gitignore=gitignore, created=created)


def generate_folder_skeleton(
    document: OrgDocument, output_root: Path, *, gitignore: bool = False
) -> list[Path]:
    """Create one folder per page of ``document`` below ``output_root``.

    Parameters
    ----------
    document : OrgDocument
        Parsed site document.
    output_root : Path
        Folder receiving the skeleton; the root page maps onto it directly.
    gitignore : bool, optional
        Place an empty ``.gitignore`` in every folder so empty folders can be
        committed. Existing ``.gitignore`` files are left untouched.

    Returns
    -------
    list[Path]
        Every folder of the skeleton, parents before children.

    Examples
    --------
    >>> from pathlib import Path
    >>> from sorg.document import parse_document
    >>> doc = parse_document("* index\\n** first child\\n")
    >>> generate_folder_skeleton(doc, Path("static"))  # doctest: +SKIP
    [PosixPath('static'), PosixPath('static/first-child')]
    """
    root = build_tree(document.site_root(), document.keywords, release=False)
    created: list[Path] = []
    _create(root, output_root, gitignore=gitignore, created=created)
    return created


__all__ = ["generate_folder_skeleton"]
