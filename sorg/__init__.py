"""Static site generator driven by a single Org document.

The first heading of the document is the site root; nested headings become
index pages, headings tagged ``post`` (or children of a ``posts`` heading)
become articles. Pages are rendered through Jinja templates into a build
folder together with one RSS feed per index page.

Exports
-------
- ``app``: Cyclopts application behind the ``sorg`` console script.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``build``: Render a parsed document with a resolved configuration.
- ``build_site``: Load a document from disk and render it.

Examples
--------
>>> from sorg import main
>>> callable(main)
True
"""

from __future__ import annotations

from .build import build, build_site
from .cli import app, main

__all__ = ["app", "build", "build_site", "main"]
