"""Write every page of the tree to disk, plus one RSS feed per index page."""

from __future__ import annotations

import typing as typ

import jinja2

from sorg._constants import (
    FEED_FILENAME,
    HOT_RELOAD_SNIPPET,
    INDEX_SLUG,
    PAGE_FILENAME,
)
from sorg.errors import PageRenderError, SorgError, TemplateRenderError

from .feed import generate_feed
from .templates import resolve_template

if typ.TYPE_CHECKING:
    from pathlib import Path

    from sorg.config.models import SiteConfig
    from sorg.tree.models import Page

    from .context import ContextBuilder


class PageRenderer:
    """Render pages depth-first into an output folder.

    Parameters
    ----------
    config : SiteConfig
        Site configuration; ``hotreloading`` appends the reload script to
        every page.
    environment : jinja2.Environment
        Environment holding the page templates.
    contexts : ContextBuilder
        Computes the template context of each page.
    """

    def __init__(
        self,
        config: SiteConfig,
        environment: jinja2.Environment,
        contexts: ContextBuilder,
    ) -> None:
        self.config = config
        self.environment = environment
        self.contexts = contexts
        self.written: list[Path] = []

    def output_dir(self, page: Page, output_root: Path) -> Path:
        """Return the folder ``page`` is written to below ``output_root``."""
        if page.info.slug == INDEX_SLUG:
            return output_root
        return output_root / page.info.slug

    def render(self, page: Page, output_root: Path) -> dict[str, typ.Any]:
        """Render ``page`` and its descendants.

        Returns
        -------
        dict[str, Any]
            The context ``page`` was rendered with; feeds read ``content``
            from the contexts of their children.

        Raises
        ------
        PageRenderError
            If anything fails while rendering a page; the first failure aborts
            the whole render.
        """
        out_dir = self.output_dir(page, output_root)
        try:
            context = self.contexts.build(page)
            html = self._render_template(page, context)
            self._write(out_dir / PAGE_FILENAME, html)
        except (SorgError, OSError) as exc:
            raise PageRenderError(page.info.title, exc) from exc

        if page.is_index:
            rendered = [(child, self.render(child, out_dir)) for child in page.children]
            try:
                feed = generate_feed(rendered, self.config, page.path)
                self._write(out_dir / FEED_FILENAME, feed)
            except (jinja2.TemplateError, OSError) as exc:
                raise PageRenderError(page.info.title, exc) from exc
        return context

    def _render_template(self, page: Page, context: dict[str, typ.Any]) -> str:
        try:
            template = resolve_template(
                self.environment,
                page.info.properties.get("template"),
                page.path,
                is_index=page.is_index,
            )
            html = template.render(context)
        except jinja2.TemplateError as exc:
            msg = f"template error: {exc}"
            raise TemplateRenderError(msg) from exc
        if self.config.hotreloading:
            html += HOT_RELOAD_SNIPPET
        return html

    def _write(self, path: Path, text: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        self.written.append(path)


__all__ = ["PageRenderer"]
