"""Cyclopts CLI entrypoint for building sorg sites from a single Org document.

The ``sorg`` console script renders the document (``./blog.org`` by default)
into static HTML. ``sorg run`` builds in release mode, ``sorg serve`` builds
drafts too and serves the result, ``sorg watch`` also rebuilds on every change
and reloads open pages, and ``sorg folders`` prepares one folder per page
inside the static folder. Options can also be set through ``SORG_``
environment variables.

Examples
--------
Build the site described by ``blog.org`` in the current folder:

>>> from sorg.cli import main
>>> main()  # doctest: +SKIP

Serve a document elsewhere and list every written file:

>>> from sorg.cli import app
>>> app(["serve", "notes/site.org", "--verbose"])  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import DEFAULT_DOCUMENT
from .build import build
from .config import load_site_config
from .document import load_document
from .errors import SiteConfigError
from .folders import generate_folder_skeleton
from .serve import make_http_server, serve_forever, watch as watch_site

if typ.TYPE_CHECKING:
    from .config.models import SiteConfig
    from .document import OrgDocument

DEFAULT_PATH = Path(DEFAULT_DOCUMENT)

app = App(name="sorg", config=cyclopts.config.Env("SORG_", command=False))  # type: ignore[unknown-argument]

DocumentPath = typ.Annotated[Path, Parameter(help="Path to the site document")]
Verbose = typ.Annotated[
    bool, Parameter(name=["--verbose", "-v"], help="Report every written file")
]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _report(written: list[Path], config: SiteConfig) -> None:
    if config.verbose:
        for path in written:
            print(f"wrote {_format_path(path)}")
    print(f"built {len(written)} files")


def _load(
    path: Path, *, release: bool, hotreloading: bool, verbose: bool
) -> tuple[OrgDocument, SiteConfig]:
    if not path.is_file():
        msg = f"Provided path '{path}' is not a file."
        raise SiteConfigError(msg)
    document = load_document(path)
    return document, load_site_config(
        document,
        release=release,
        hotreloading=hotreloading,
        verbose=verbose,
    )


@app.default
def run(path: DocumentPath = DEFAULT_PATH, *, verbose: Verbose = False) -> None:
    """Build the site in release mode, leaving out every unfinished heading.

    Parameters
    ----------
    path : Path, optional
        Org document describing the site; defaults to ``./blog.org``.
    verbose : bool, optional
        Print one ``wrote`` line per generated file.
    """
    document, config = _load(path, release=True, hotreloading=False, verbose=verbose)
    _report(build(document, config), config)


@app.command(help="Build the site including drafts in review and serve it.")
def serve(path: DocumentPath = DEFAULT_PATH, *, verbose: Verbose = False) -> None:
    """Build in draft mode and serve the build folder over HTTP."""
    document, config = _load(path, release=False, hotreloading=False, verbose=verbose)
    _report(build(document, config), config)
    serve_forever(make_http_server(config.build_path))


@app.command(help="Serve the site and rebuild it whenever a source changes.")
def watch(path: DocumentPath = DEFAULT_PATH, *, verbose: Verbose = False) -> None:
    """Build in draft mode with hot reloading, then rebuild on every change.

    The document's folder, the templates folder and the static folder are
    observed; a failed rebuild is reported and watching continues.
    """
    _document, config = _load(path, release=False, hotreloading=True, verbose=verbose)

    def rebuild() -> None:
        document, fresh = _load(
            path, release=False, hotreloading=True, verbose=verbose
        )
        _report(build(document, fresh), fresh)

    rebuild()
    root = config.root_folder.resolve()
    extra = [
        folder
        for folder in (config.templates_path, config.static_path)
        if not folder.resolve().is_relative_to(root)
    ]
    watch_site(rebuild, [root, *extra], config.build_path)


@app.command(help="Create one folder per page inside the static folder.")
def folders(
    path: DocumentPath = DEFAULT_PATH,
    *,
    gitignore: typ.Annotated[
        bool, Parameter(help="Add an empty .gitignore to every created folder")
    ] = False,
    verbose: Verbose = False,
) -> None:
    """Mirror the page tree as folders below the static folder."""
    document, config = _load(path, release=False, hotreloading=False, verbose=verbose)
    created = generate_folder_skeleton(document, config.static_path, gitignore=gitignore)
    if config.verbose:
        for folder in created:
            print(f"created {_format_path(folder)}")
    print(f"created {len(created)} folders")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``sorg`` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
