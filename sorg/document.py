r"""Load Org documents through ``orgparse`` and read their file-level keywords.

The outline itself (headings, tags, TODO keywords, property drawers, CLOSED
timestamps) is parsed by ``orgparse``. This module wraps the parsed root node
together with the document preamble (``#+KEY: value`` lines that precede the
first heading) and the workflow keywords the document was parsed with.

Example
-------
>>> from sorg.document import parse_document
>>> doc = parse_document("#+TITLE: Blog\n* index\n** hello :post:\n")
>>> doc.preamble["title"]
'Blog'
>>> doc.site_root().heading
'index'
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
from pathlib import Path

import orgparse
from orgparse.node import OrgEnv

from sorg.config.models import TodoKeywords
from sorg.errors import SiteConfigError

if typ.TYPE_CHECKING:
    from orgparse.node import OrgNode, OrgRootNode

KEYWORD_PATTERN = re.compile(r"^\s*#\+([A-Za-z][\w-]*):[ \t]*(.*?)\s*$")
HEADING_PATTERN = re.compile(r"^\*+\s")
FILE_LINK_PATTERN = re.compile(r"^\s*\[\[file:([^\]]+)\](?:\[[^\]]*\])?\]\s*$")
FAST_ACCESS_PATTERN = re.compile(r"\(.*\)$")
TODO_KEYS = ("todo", "seq_todo", "typ_todo")


@dc.dataclass(slots=True)
class OrgDocument:
    """A parsed Org document plus the metadata read from its preamble.

    Attributes
    ----------
    root : OrgRootNode
        ``orgparse`` root node; its children are the top-level headings.
    path : Path | None
        Where the document was read from, when it came from disk.
    preamble : dict[str, str]
        File-level keywords with lowercased names; the last occurrence wins.
    keywords : TodoKeywords
        Workflow keywords recognised while parsing headings.
    """

    root: OrgRootNode
    path: Path | None
    preamble: dict[str, str]
    keywords: TodoKeywords

    def site_root(self) -> OrgNode:
        """Return the first top-level heading, which becomes the site root."""
        for child in self.root.children:
            return child
        source = self.path or "<string>"
        msg = f"Document '{source}' contains no headings."
        raise SiteConfigError(msg)

    def first_heading(self) -> OrgNode | None:
        """Return the first top-level heading or ``None`` for a heading-less file."""
        return next(iter(self.root.children), None)


def _preamble_lines(text: str) -> list[str]:
    """Return the lines preceding the first heading."""
    lines: list[str] = []
    for line in text.splitlines():
        if HEADING_PATTERN.match(line):
            break
        lines.append(line)
    return lines


def read_preamble(text: str) -> dict[str, str]:
    """Collect ``#+KEY: value`` keywords from the document preamble."""
    preamble: dict[str, str] = {}
    for line in _preamble_lines(text):
        match = KEYWORD_PATTERN.match(line)
        if match:
            preamble[match.group(1).lower()] = match.group(2)
    return preamble


def parse_todo_line(value: str) -> tuple[list[str], list[str]]:
    """Split a ``#+TODO:`` value into not-done and done keywords.

    Without a ``|`` separator the last keyword is the done state, matching
    Org's own reading of the line. Fast-access keys such as ``TODO(t)`` are
    dropped.
    """
    words = [FAST_ACCESS_PATTERN.sub("", word) for word in value.split()]
    if "|" in words:
        split = words.index("|")
        todo, done = words[:split], words[split + 1 :]
    elif len(words) > 1:
        todo, done = words[:-1], words[-1:]
    else:
        todo, done = words, []
    return [w for w in todo if w], [w for w in done if w]


def read_todo_keywords(text: str) -> TodoKeywords:
    """Return the workflow keywords declared in ``text`` or the defaults."""
    todo: list[str] = []
    done: list[str] = []
    for line in _preamble_lines(text):
        match = KEYWORD_PATTERN.match(line)
        if match and match.group(1).lower() in TODO_KEYS:
            line_todo, line_done = parse_todo_line(match.group(2))
            todo.extend(line_todo)
            done.extend(line_done)
    if not todo and not done:
        return TodoKeywords()
    return TodoKeywords(todo=tuple(todo), done=tuple(done))


def parse_document(
    text: str,
    *,
    path: Path | None = None,
    keywords: TodoKeywords | None = None,
) -> OrgDocument:
    """Parse Org ``text`` into an :class:`OrgDocument`.

    Parameters
    ----------
    text : str
        Org source.
    path : Path, optional
        Origin of ``text``; used for diagnostics and relative lookups.
    keywords : TodoKeywords, optional
        Workflow keywords to parse with; read from ``#+TODO:`` lines (or the
        defaults) when omitted.

    Returns
    -------
    OrgDocument
        The parsed document.
    """
    resolved = keywords or read_todo_keywords(text)
    filename = str(path) if path is not None else "<string>"
    env = OrgEnv(
        todos=list(resolved.todo), dones=list(resolved.done), filename=filename
    )
    root = orgparse.loads(text, filename=filename, env=env)
    return OrgDocument(
        root=root, path=path, preamble=read_preamble(text), keywords=resolved
    )


def load_document(path: Path, *, keywords: TodoKeywords | None = None) -> OrgDocument:
    """Read and parse the Org document stored at ``path``."""
    text = path.read_text(encoding="utf-8")
    return parse_document(text, path=path, keywords=keywords)


def parse_file_link(value: str) -> str | None:
    """Extract the target of a lone ``file:`` link.

    >>> parse_file_link("[[file:notes.org][See notes]]")
    'notes.org'
    >>> parse_file_link("See notes") is None
    True
    """
    match = FILE_LINK_PATTERN.match(value or "")
    if not match:
        return None
    target = match.group(1).strip()
    return target or None


__all__ = [
    "OrgDocument",
    "load_document",
    "parse_document",
    "parse_file_link",
    "parse_todo_line",
    "read_preamble",
    "read_todo_keywords",
]
