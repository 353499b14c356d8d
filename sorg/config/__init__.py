"""Load and validate sorg site configuration.

Site metadata lives in the source document itself: ``#+TITLE:``,
``#+DESCRIPTION:`` and ``#+URL:`` are required, while ``#+STATIC:``,
``#+BUILD:`` (or ``#+OUT:``), ``#+TEMPLATES:`` and ``#+HIGHLIGHT_STYLE:``
override the defaults. :func:`load_site_config` turns a parsed
:class:`~sorg.document.OrgDocument` into a :class:`SiteConfig`.

Examples
--------
>>> from pathlib import Path
>>> from sorg.config import load_site_config
>>> from sorg.document import load_document
>>> site = load_site_config(load_document(Path("blog.org")))  # doctest: +SKIP
>>> site.build_path  # doctest: +SKIP
PosixPath('build')
"""

from .loader import load_site_config
from .models import SiteConfig, SiteConfigError, TodoKeywords

__all__ = ["SiteConfig", "SiteConfigError", "TodoKeywords", "load_site_config"]
