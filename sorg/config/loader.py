"""Build a :class:`SiteConfig` from the keywords of a parsed Org document."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from sorg._constants import (
    DEFAULT_BUILD_FOLDER,
    DEFAULT_HIGHLIGHT_STYLE,
    DEFAULT_STATIC_FOLDER,
    DEFAULT_TEMPLATES_FOLDER,
)

from .helpers import _missing_keywords, _optional_str, _resolve_folder
from .models import SiteConfig, SiteConfigError

if typ.TYPE_CHECKING:
    from sorg.document import OrgDocument


def load_site_config(
    document: OrgDocument,
    *,
    release: bool = True,
    hotreloading: bool = False,
    verbose: bool = False,
) -> SiteConfig:
    """Resolve site configuration from the document preamble.

    Parameters
    ----------
    document : OrgDocument
        Parsed document whose ``#+KEY: value`` lines configure the site.
    release : bool, optional
        ``True`` for release builds, which hide drafts still in review.
    hotreloading : bool, optional
        Whether rendered pages should carry the reload script.
    verbose : bool, optional
        Whether every written file is reported.

    Returns
    -------
    SiteConfig
        Site metadata and resolved folders.

    Raises
    ------
    SiteConfigError
        If ``title``, ``description`` or ``url`` is missing from the document.

    Examples
    --------
    >>> from sorg.document import parse_document
    >>> doc = parse_document(
    ...     "#+TITLE: t\\n#+DESCRIPTION: d\\n#+URL: https://e.org\\n* index\\n"
    ... )
    >>> load_site_config(doc).url
    'https://e.org'
    """
    preamble = document.preamble
    missing = _missing_keywords(preamble)
    if missing:
        source = document.path or "<string>"
        keys = ", ".join(f"#+{key.upper()}" for key in missing)
        msg = f"Document '{source}' is missing required keywords: {keys}"
        raise SiteConfigError(msg)

    root = document.path.parent if document.path is not None else Path.cwd()
    build_value = preamble.get("build") or preamble.get("out")

    return SiteConfig(
        root_folder=root,
        build_path=_resolve_folder(root, build_value, DEFAULT_BUILD_FOLDER),
        static_path=_resolve_folder(
            root, preamble.get("static"), DEFAULT_STATIC_FOLDER
        ),
        templates_path=_resolve_folder(
            root, preamble.get("templates"), DEFAULT_TEMPLATES_FOLDER
        ),
        title=preamble["title"].strip(),
        description=preamble["description"].strip(),
        url=preamble["url"].strip(),
        release=release,
        hotreloading=hotreloading,
        verbose=verbose,
        highlight_style=_optional_str(preamble.get("highlight_style"))
        or DEFAULT_HIGHLIGHT_STYLE,
        keywords=document.keywords,
    )


__all__ = ["load_site_config"]
