"""Jinja environment, template lookup and the ``get_pages`` template helper."""

from __future__ import annotations

import typing as typ

from jinja2 import (
    ChoiceLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    Template,
    TemplateNotFound,
    select_autoescape,
)

from sorg._constants import DEFAULT_INDEX_TEMPLATE, DEFAULT_TEMPLATE
from sorg.tree.slugs import slugify

if typ.TYPE_CHECKING:
    from sorg.config.models import SiteConfig
    from sorg.export.macros import MacroSet
    from sorg.tree.models import Page

INDEX_TEMPLATE_NAME = "index"


def make_environment(config: SiteConfig, macros: MacroSet | None = None) -> Environment:
    """Return the environment used for page templates and macro bodies.

    Document macros are looked up first, so a ``macros/<name>.html`` file in
    the templates folder cannot shadow a macro defined in the document. The
    ``slugify`` filter turns ``sections`` entries into heading anchors.
    """
    loaders: list[typ.Any] = []
    if macros is not None:
        loaders.append(DictLoader(macros.templates()))
    loaders.append(FileSystemLoader(str(config.templates_path)))
    env = Environment(
        loader=ChoiceLoader(loaders),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["slugify"] = slugify
    return env


def template_candidates(template: str | None, path: str, *, is_index: bool) -> list[str]:
    """Return template names to try for a page, most specific first.

    >>> template_candidates(None, "/", is_index=True)
    ['index.html', 'default_index.html']
    >>> template_candidates("custom.html", "/blog/post", is_index=False)
    ['custom.html']
    >>> template_candidates(None, "/blog/post", is_index=False)
    ['blog/post.html', 'default.html']
    """
    if template:
        return [template]
    name = INDEX_TEMPLATE_NAME if path == "/" else path.lstrip("/")
    default = DEFAULT_INDEX_TEMPLATE if is_index else DEFAULT_TEMPLATE
    return [f"{name}.html", default]


def resolve_template(
    env: Environment, template: str | None, path: str, *, is_index: bool
) -> Template:
    """Load the template for a page.

    An explicit ``template`` property must exist; otherwise a template named
    after the page path is preferred over the default for its kind.

    Raises
    ------
    jinja2.TemplateNotFound
        If neither the explicit nor the default template exists.
    """
    candidates = template_candidates(template, path, is_index=is_index)
    for name in candidates[:-1]:
        try:
            return env.get_template(name)
        except TemplateNotFound:
            continue
    return env.get_template(candidates[-1])


def page_summary(page: Page) -> dict[str, typ.Any]:
    """Describe a page for listings in templates and ``get_pages``."""
    return {
        "title": page.info.title,
        "slug": page.info.slug,
        "path": page.path,
        "link": page.path,
        "description": page.info.description,
        "order": page.order,
        "closed_at": page.info.closed_label,
    }


def make_get_pages(root: Page) -> typ.Callable[[str], list[dict[str, typ.Any]]]:
    """Return the ``get_pages(path)`` template function for the tree at ``root``.

    The function lists every page whose path starts with ``path``, sorted by
    path.
    """
    summaries = {page.path: page_summary(page) for page in root.walk()}

    def get_pages(path: str = "/") -> list[dict[str, typ.Any]]:
        return [summaries[key] for key in sorted(summaries) if key.startswith(path)]

    return get_pages


__all__ = [
    "make_environment",
    "make_get_pages",
    "page_summary",
    "resolve_template",
    "template_candidates",
]
