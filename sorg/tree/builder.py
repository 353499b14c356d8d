"""Build the page tree from the outline of a parsed document.

The builder walks headings depth-first in document order. Every heading that
survives :func:`~sorg.tree.classifier.classify` becomes a :class:`Page`; index
headings recurse, posts and external files become leaves. The tree is rebuilt
from scratch on every build and never mutated afterwards.

Two siblings whose slugs coincide share one key in their parent's children
map: the later sibling replaces the earlier one. This mirrors how the output
folders would overwrite each other and is deliberately not reported.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from sorg._constants import INDEX_SLUG

from .classifier import Disposition, classify
from .models import ExternalFilePage, IndexPage, Page, PageInfo, PostPage

if typ.TYPE_CHECKING:
    from orgparse.node import OrgNode

    from sorg.config.models import TodoKeywords


def _join_path(parent: str, slug: str) -> str:
    """Append ``slug`` to ``parent`` unless it names an index page itself."""
    if slug == INDEX_SLUG:
        return parent
    return f"{parent}/{slug}"


def _leaf(
    heading: OrgNode, info: PageInfo, parent_path: str, order: int, variant: typ.Any
) -> Page:
    return Page(
        heading=heading,
        path=_join_path(parent_path, info.slug) or "/",
        info=info,
        order=order,
        variant=variant,
    )


def _build_index(
    heading: OrgNode,
    *,
    parent_path: str,
    order: int,
    keywords: TodoKeywords,
    release: bool,
) -> Page:
    info = PageInfo.from_heading(heading)
    path = _join_path(parent_path, info.slug)
    parent_tags = heading.shallow_tags
    children: dict[str, Page] = {}
    position = 0
    for child in heading.children:
        result = classify(
            child, parent_tags=parent_tags, keywords=keywords, release=release
        )
        match result.disposition:
            case Disposition.EXCLUDED:
                continue
            case Disposition.INDEX:
                page = _build_index(
                    child,
                    parent_path=path,
                    order=position,
                    keywords=keywords,
                    release=release,
                )
            case Disposition.EXTERNAL_FILE:
                page = _leaf(
                    child,
                    PageInfo.from_heading(child),
                    path,
                    position,
                    ExternalFilePage(Path(typ.cast("str", result.file_path))),
                )
            case _:
                page = _leaf(
                    child, PageInfo.from_heading(child), path, position, PostPage()
                )
        children[page.info.slug] = page
        position += 1

    return Page(
        heading=heading,
        path=path or "/",
        info=info,
        order=order,
        variant=IndexPage(children),
    )


def build_tree(root: OrgNode, keywords: TodoKeywords, *, release: bool) -> Page:
    """Build the page tree rooted at ``root``.

    Parameters
    ----------
    root : OrgNode
        Heading that becomes the site root; it is always an index.
    keywords : TodoKeywords
        Workflow keyword sets used to filter headings.
    release : bool
        Whether drafts in review are hidden.

    Returns
    -------
    Page
        Root page whose path is ``"/"`` when its slug is ``index``.

    Examples
    --------
    >>> from sorg.config import TodoKeywords
    >>> from sorg.document import parse_document
    >>> doc = parse_document("* index\\n** About me\\n")
    >>> tree = build_tree(doc.site_root(), TodoKeywords(), release=True)
    >>> tree.path, [child.path for child in tree.children]
    ('/', ['/about-me'])
    """
    return _build_index(
        root, parent_path="", order=0, keywords=keywords, release=release
    )


__all__ = ["build_tree"]
