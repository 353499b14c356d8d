"""Typed dataclasses describing sorg site configuration structures."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from sorg._constants import (
    DEFAULT_DONE_KEYWORDS,
    DEFAULT_HIGHLIGHT_STYLE,
    DEFAULT_TODO_KEYWORDS,
    IN_REVIEW_KEYWORD,
)
from sorg.errors import SiteConfigError


@dc.dataclass(frozen=True, slots=True)
class TodoKeywords:
    """Workflow keywords partitioned into not-done and done sets.

    Attributes
    ----------
    todo : tuple[str, ...]
        Keywords marking unfinished headings; these are excluded from builds.
    done : tuple[str, ...]
        Keywords marking finished headings; these are always exported.
    in_review : str
        The single not-done keyword that stays visible outside release mode.
    """

    todo: tuple[str, ...] = DEFAULT_TODO_KEYWORDS
    done: tuple[str, ...] = DEFAULT_DONE_KEYWORDS
    in_review: str = IN_REVIEW_KEYWORD

    def is_hidden(self, keyword: str | None, *, release: bool) -> bool:
        """Return whether a heading carrying ``keyword`` must be left out."""
        if not keyword or keyword not in self.todo:
            return False
        return release or keyword != self.in_review


@dc.dataclass(slots=True)
class SiteConfig:
    """A fully resolved site definition sourced from document keywords.

    Attributes
    ----------
    root_folder : Path
        Folder containing the source document; relative folders resolve here.
    build_path : Path
        Output folder, cleared before every build.
    static_path : Path
        Static assets folder copied verbatim into ``build_path``.
    templates_path : Path
        Folder holding the user's Jinja templates.
    title, description, url : str
        Site-wide metadata exposed to templates and the feeds.
    release : bool
        ``True`` for one-shot builds; drafts in review are hidden.
    hotreloading : bool
        Append the reload script to every rendered page.
    verbose : bool
        Report every written file.
    highlight_style : str
        Pygments style name used for code blocks.
    keywords : TodoKeywords
        Workflow keyword sets used to filter headings.
    """

    root_folder: Path
    build_path: Path
    static_path: Path
    templates_path: Path
    title: str
    description: str
    url: str
    release: bool = True
    hotreloading: bool = False
    verbose: bool = False
    highlight_style: str = DEFAULT_HIGHLIGHT_STYLE
    keywords: TodoKeywords = dc.field(default_factory=TodoKeywords)


__all__ = ["SiteConfig", "SiteConfigError", "TodoKeywords"]
