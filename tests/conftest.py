"""Shared fixtures for building small sorg sites inside ``tmp_path``."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest

from sorg.config import load_site_config
from sorg.document import parse_document
from sorg.export.highlight import CodeHighlighter
from sorg.export.html import HtmlExporter
from sorg.export.links import LinkResolver

if typ.TYPE_CHECKING:
    from sorg.config import SiteConfig
    from sorg.document import OrgDocument

SITE_PREAMBLE = (
    "#+TITLE: Fixture Blog\n"
    "#+DESCRIPTION: Notes from the fixture\n"
    "#+URL: https://blog.example\n"
)

DEFAULT_TEMPLATE = """<!doctype html>
<html>
<head><title>{{ title }} | {{ base_title }}</title></head>
<body>
<h1 class="page-title">{{ title }}</h1>
<article>{{ content }}</article>
<p class="word-count">{{ word_count }}</p>
<p class="reading-time">{{ reading_time }}</p>
{% if date %}<time>{{ date }}</time>{% endif %}
<ul class="sections">
{% for section in sections %}<li>{{ section }}</li>{% endfor %}
</ul>
<ol class="footnotes">
{% for note in footnotes %}<li id="fn-{{ note.label }}">{{ note.definition }}</li>{% endfor %}
</ol>
</body>
</html>
"""

INDEX_TEMPLATE = """<!doctype html>
<html>
<head><title>{{ title }} | {{ base_title }}</title></head>
<body>
<h1 class="page-title">{{ title }}</h1>
<div class="intro">{{ content }}</div>
<p class="word-count">{{ word_count }}</p>
<ul class="pages">
{% for page in pages %}<li><a href="{{ page.path }}" data-order="{{ page.order }}">{{ page.title }}</a></li>{% endfor %}
</ul>
</body>
</html>
"""


def write_site(
    root: Path,
    body: str,
    *,
    templates: dict[str, str] | None = None,
    preamble: str = SITE_PREAMBLE,
    static: dict[str, str] | None = None,
) -> Path:
    """Write ``blog.org``, templates and static files below ``root``."""
    root.mkdir(parents=True, exist_ok=True)
    document = root / "blog.org"
    document.write_text(preamble + body, encoding="utf-8")
    folder = root / "templates"
    folder.mkdir(exist_ok=True)
    merged = {"default.html": DEFAULT_TEMPLATE, "default_index.html": INDEX_TEMPLATE}
    merged.update(templates or {})
    for name, text in merged.items():
        target = folder / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    for name, text in (static or {}).items():
        target = root / "static" / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    return document


def parse_site(body: str, *, preamble: str = SITE_PREAMBLE) -> OrgDocument:
    """Parse an in-memory site document."""
    return parse_document(preamble + body)


@pytest.fixture
def site_config() -> SiteConfig:
    """Return the configuration of an in-memory fixture site."""
    return load_site_config(parse_site("* index\n"))


@pytest.fixture
def exporter() -> HtmlExporter:
    """Return an exporter without macros for the fixture site URL."""
    return HtmlExporter(LinkResolver("https://blog.example"), CodeHighlighter())


@pytest.fixture
def make_site(tmp_path: Path) -> typ.Callable[..., Path]:
    """Return a writer for site documents rooted in ``tmp_path / "site"``."""

    def _make(body: str, **kwargs: typ.Any) -> Path:
        return write_site(tmp_path / "site", body, **kwargs)

    return _make


@pytest.fixture
def org() -> typ.Callable[..., OrgDocument]:
    """Return a parser for in-memory site documents."""
    return parse_site
