"""Run the whole pipeline: page tree, output folder, rendered pages.

Example
-------
>>> from pathlib import Path
>>> from sorg.build import build_site
>>> build_site(Path("blog.org"))  # doctest: +SKIP
[PosixPath('build/index.html'), ...]
"""

from __future__ import annotations

import shutil
import typing as typ

from sorg.config import load_site_config
from sorg.document import load_document
from sorg.errors import SiteConfigError
from sorg.export.highlight import CodeHighlighter
from sorg.export.html import HtmlExporter
from sorg.export.links import LinkResolver
from sorg.export.macros import MacroExpander, MacroSet
from sorg.render.context import ContextBuilder
from sorg.render.renderer import PageRenderer
from sorg.render.templates import make_environment, make_get_pages
from sorg.tree.builder import build_tree

if typ.TYPE_CHECKING:
    from pathlib import Path

    from sorg.config.models import SiteConfig
    from sorg.document import OrgDocument


def prepare_output(config: SiteConfig) -> None:
    """Clear the build folder and copy the static folder into it.

    A missing static folder leaves an empty build folder.

    Raises
    ------
    SiteConfigError
        If the build folder would contain the document's own folder.
    """
    build_path = config.build_path.resolve()
    root = config.root_folder.resolve()
    if build_path == root or build_path in root.parents:
        msg = f"Refusing to clear build folder '{config.build_path}': it contains the site sources."
        raise SiteConfigError(msg)
    if build_path.exists():
        shutil.rmtree(build_path)
    if config.static_path.is_dir():
        shutil.copytree(config.static_path, build_path)
    else:
        build_path.mkdir(parents=True)


def build(document: OrgDocument, config: SiteConfig) -> list[Path]:
    """Render ``document`` into ``config.build_path``.

    Parameters
    ----------
    document : OrgDocument
        Parsed site document; its first heading is the site root.
    config : SiteConfig
        Resolved folders, site metadata and build mode.

    Returns
    -------
    list[Path]
        Every page and feed written, in render order.

    Raises
    ------
    SiteConfigError
        If the document has no headings or the build folder is unsafe.
    PageRenderError
        If any page fails to render.
    """
    root = build_tree(document.site_root(), config.keywords, release=config.release)
    macros = MacroSet.parse(document)
    environment = make_environment(config, macros)
    environment.globals["get_pages"] = make_get_pages(root)

    highlighter = CodeHighlighter(config.highlight_style)
    exporter = HtmlExporter(
        LinkResolver.from_config(config),
        highlighter,
        MacroExpander(macros, environment),
    )
    renderer = PageRenderer(
        config, environment, ContextBuilder(config, exporter, highlighter)
    )

    prepare_output(config)
    renderer.render(root, config.build_path)
    return renderer.written


def build_site(
    path: Path,
    *,
    release: bool = True,
    hotreloading: bool = False,
    verbose: bool = False,
) -> list[Path]:
    """Load the document at ``path`` and build the site it describes.

    Raises
    ------
    SiteConfigError
        If ``path`` is not a readable file or lacks required keywords.
    """
    if not path.is_file():
        msg = f"Provided path '{path}' is not a file."
        raise SiteConfigError(msg)
    document = load_document(path)
    config = load_site_config(
        document, release=release, hotreloading=hotreloading, verbose=verbose
    )
    return build(document, config)


__all__ = ["build", "build_site", "prepare_output"]
