"""End-to-end tests for building a site from an Org document.

Each test writes a small ``blog.org`` with templates into ``tmp_path``, runs
:func:`sorg.build.build_site` and inspects the written files with
BeautifulSoup.
"""

from __future__ import annotations

import typing as typ
import xml.etree.ElementTree as ET

import pytest
from bs4 import BeautifulSoup

from sorg._constants import HOT_RELOAD_SNIPPET
from sorg.build import build_site
from sorg.errors import ExternalFileError, PageRenderError, SiteConfigError

if typ.TYPE_CHECKING:
    from pathlib import Path

SITE = """\
* index
Welcome to the *fixture* site.
** Blog :posts:
:PROPERTIES:
:description: All the posts
:END:
*** DONE Hello World
CLOSED: [2024-03-01 Fri 10:00]
:PROPERTIES:
:description: The first post
:tagline: hi there
:END:
Hello from the first post[fn::a note].
**** Details
More words.
*** PROGRESS Work in progress
Still writing.
*** TODO Not yet
Nope.
** About :post:
:PROPERTIES:
:template: about.html
:END:
About me.
** Private :noexport:
Secret.
"""

ABOUT_TEMPLATE = "<html><body><p class=\"about\">{{ content }}</p><p>{{ base_url }}</p></body></html>"


def _soup(path: Path) -> BeautifulSoup:
    return BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")


@pytest.fixture
def site(make_site: typ.Callable[..., Path]) -> Path:
    return make_site(
        SITE,
        templates={"about.html": ABOUT_TEMPLATE},
        static={"style.css": "body {}", "img/cat.png": "png"},
    )


def test_release_build_writes_pages_and_feeds(site: Path) -> None:
    written = build_site(site)
    build = site.parent / "build"

    assert build / "index.html" in written
    assert (build / "blog" / "hello-world" / "index.html").is_file()
    assert (build / "about" / "index.html").is_file()
    assert (build / "rss.xml").is_file()
    assert (build / "blog" / "rss.xml").is_file()
    assert not (build / "blog" / "work-in-progress").exists()
    assert not (build / "blog" / "not-yet").exists()
    assert not (build / "private").exists()


def test_static_folder_is_copied(site: Path) -> None:
    build_site(site)
    build = site.parent / "build"

    assert (build / "style.css").read_text(encoding="utf-8") == "body {}"
    assert (build / "img" / "cat.png").is_file()


def test_build_folder_is_cleared(site: Path) -> None:
    stale = site.parent / "build" / "stale.html"
    stale.parent.mkdir(parents=True)
    stale.write_text("old", encoding="utf-8")

    build_site(site)

    assert not stale.exists()


def test_draft_build_includes_progress(site: Path) -> None:
    build_site(site, release=False)

    assert (site.parent / "build" / "blog" / "work-in-progress" / "index.html").is_file()
    assert not (site.parent / "build" / "blog" / "not-yet").exists()


def test_post_context(site: Path) -> None:
    build_site(site)
    soup = _soup(site.parent / "build" / "blog" / "hello-world" / "index.html")

    assert soup.find("h1", class_="page-title").get_text() == "Hello World"
    assert soup.title.get_text() == "Hello World | Fixture Blog"
    assert soup.find("time").get_text() == "2024-03-01"
    assert [li.get_text() for li in soup.select("ul.sections li")] == ["Details"]
    assert soup.select_one("ol.footnotes li#fn-1").get_text() == "a note"
    assert soup.find("sup", id="fnref-1") is not None
    assert soup.find("p", class_="reading-time").get_text() == "1"
    details = soup.find("h2")
    assert details.find("a")["id"] == "details"


def test_index_context_lists_children_in_order(site: Path) -> None:
    build_site(site)
    soup = _soup(site.parent / "build" / "index.html")

    links = soup.select("ul.pages a")
    assert [(a.get_text(), a["href"]) for a in links] == [
        ("Blog", "/blog"),
        ("About", "/about"),
    ]
    assert soup.select_one("div.intro b").get_text() == "fixture"
    # "index" + "Welcome to the fixture site."
    assert soup.find("p", class_="word-count").get_text() == "6"


def test_template_property_selects_template(site: Path) -> None:
    build_site(site)
    soup = _soup(site.parent / "build" / "about" / "index.html")

    assert soup.find("p", class_="about").get_text() == "About me."
    assert "https://blog.example" in soup.get_text()


def test_properties_are_exposed_but_computed_keys_win(
    make_site: typ.Callable[..., Path],
) -> None:
    path = make_site(
        "* index\n** Post :post:\n:PROPERTIES:\n:tagline: hi there\n"
        ":word_count: 999\n:END:\none two three\n",
        templates={"default.html": "{{ tagline }}|{{ word_count }}|{{ asset_v }}"},
    )

    build_site(path)

    tagline, count, asset = (
        (path.parent / "build" / "post" / "index.html")
        .read_text(encoding="utf-8")
        .split("|")
    )
    assert tagline == "hi there"
    assert count == "4"
    assert asset


def test_feed_items_carry_rendered_content(site: Path) -> None:
    build_site(site)
    feed = ET.parse(site.parent / "build" / "blog" / "rss.xml").getroot()

    items = feed.find("channel").findall("item")
    assert [item.findtext("title") for item in items] == ["Hello World"]
    content = items[0].findtext("{http://purl.org/rss/1.0/modules/content/}encoded")
    assert "Hello from the first post" in content


def test_hot_reload_script_is_appended(site: Path) -> None:
    build_site(site, release=False, hotreloading=True)

    html = (site.parent / "build" / "index.html").read_text(encoding="utf-8")
    assert html.endswith(HOT_RELOAD_SNIPPET)
    assert "ws://localhost:2794" in html


def test_path_named_template_wins_over_default(make_site: typ.Callable[..., Path]) -> None:
    path = make_site(
        "* index\n** Blog :posts:\n*** First\n",
        templates={"blog/first.html": "custom {{ title }}"},
    )

    build_site(path)

    assert (path.parent / "build" / "blog" / "first" / "index.html").read_text(
        encoding="utf-8"
    ) == "custom First"


def test_external_file_post(make_site: typ.Callable[..., Path]) -> None:
    path = make_site(
        "* index\n** Long read :post:\n"
        ":PROPERTIES:\n:file: [[file:long.org][Long read]]\n:END:\n"
    )
    (path.parent / "long.org").write_text(
        "* Long read\nExternal *body*.\n** Chapter\nText[fn::external note].\n",
        encoding="utf-8",
    )

    build_site(path)
    soup = _soup(path.parent / "build" / "long-read" / "index.html")

    assert soup.select_one("article b").get_text() == "body"
    assert [li.get_text() for li in soup.select("ul.sections li")] == ["Chapter"]
    assert soup.select_one("ol.footnotes li").get_text() == "external note"


def test_missing_external_file_names_the_heading(make_site: typ.Callable[..., Path]) -> None:
    path = make_site(
        "* index\n** Long read :post:\n:PROPERTIES:\n:file: [[file:missing.org]]\n:END:\n"
    )

    with pytest.raises(PageRenderError) as excinfo:
        build_site(path)

    cause = excinfo.value.__cause__
    assert isinstance(cause, ExternalFileError)
    assert "heading 'Long read'" in str(cause)
    assert "missing.org" in str(cause)


def test_template_errors_abort_with_page_title(make_site: typ.Callable[..., Path]) -> None:
    path = make_site(
        "* index\n** Broken :post:\n",
        templates={"default.html": "{% for %}"},
    )

    with pytest.raises(PageRenderError, match="rendering Broken"):
        build_site(path)


def test_macros_render_inside_pages(make_site: typ.Callable[..., Path]) -> None:
    path = make_site(
        "* index\n#+BEGIN_MACRO greet name surname\nhello {{name}} {{surname}}\n"
        "#+END_MACRO\n** Post :post:\n{{{greet(Ann, Lee)}}}\n"
    )

    build_site(path)
    soup = _soup(path.parent / "build" / "post" / "index.html")

    assert soup.select_one("article p").get_text() == "hello Ann Lee"


def test_missing_document_is_a_config_error(tmp_path: Path) -> None:
    with pytest.raises(SiteConfigError, match="is not a file"):
        build_site(tmp_path / "absent.org")


def test_missing_static_folder_leaves_empty_build(
    make_site: typ.Callable[..., Path],
) -> None:
    path = make_site("* index\n")

    written = build_site(path)

    assert sorted(p.name for p in written) == ["index.html", "rss.xml"]


def test_sections_skip_noexport_and_link_to_anchors(
    make_site: typ.Callable[..., Path],
) -> None:
    path = make_site(
        "* index\n** Post :post:\nIntro.\n*** Public Notes\nShown.\n"
        "*** Secret :noexport:\nHidden.\n",
        templates={
            "default.html": (
                "<nav>{% for section in sections %}"
                '<a href="#{{ section|slugify }}">{{ section }}</a>'
                "{% endfor %}</nav><article>{{ content }}</article>"
            )
        },
    )

    build_site(path)
    soup = _soup(path.parent / "build" / "post" / "index.html")

    links = soup.select("nav a")
    assert [(a.get_text(), a["href"]) for a in links] == [
        ("Public Notes", "#public-notes")
    ], "noexport headings are left out of sections"
    anchor = soup.select_one("article h2 a")
    assert anchor is not None and anchor["id"] == "public-notes"
    assert "Secret" not in soup.get_text()
