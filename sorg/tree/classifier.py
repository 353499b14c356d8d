"""Decide what each heading of the outline turns into."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from sorg._constants import NOEXPORT_TAG, POST_TAG, POSTS_TAG
from sorg.document import parse_file_link

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from orgparse.node import OrgNode

    from sorg.config.models import TodoKeywords


class Disposition(enum.Enum):
    """Outcome of classifying a heading."""

    EXCLUDED = enum.auto()
    INDEX = enum.auto()
    POST = enum.auto()
    EXTERNAL_FILE = enum.auto()


@dc.dataclass(frozen=True, slots=True)
class Classification:
    """Disposition of a heading plus the linked path for external files."""

    disposition: Disposition
    file_path: str | None = None


EXCLUDED = Classification(Disposition.EXCLUDED)
INDEX = Classification(Disposition.INDEX)
POST = Classification(Disposition.POST)


def classify(
    heading: OrgNode,
    *,
    parent_tags: cabc.Collection[str] = (),
    keywords: TodoKeywords,
    release: bool,
) -> Classification:
    """Classify ``heading`` as excluded, an index, a post, or an external file.

    Parameters
    ----------
    heading : OrgNode
        Heading to classify.
    parent_tags : Collection[str], optional
        Tags set directly on the parent heading. Only ``posts`` matters and it
        is not inherited any further down.
    keywords : TodoKeywords
        Workflow keyword sets.
    release : bool
        Whether this is a release build; drafts in review are hidden then.

    Returns
    -------
    Classification
        The disposition. A ``file`` property that is not a lone ``file:`` link
        leaves the heading a plain post.
    """
    tags = heading.shallow_tags
    if NOEXPORT_TAG in tags:
        return EXCLUDED
    if keywords.is_hidden(heading.todo, release=release):
        return EXCLUDED
    if POST_TAG not in tags and POSTS_TAG not in parent_tags:
        return INDEX

    file_value = heading.properties.get("file")
    if file_value is not None:
        linked = parse_file_link(str(file_value))
        if linked:
            return Classification(Disposition.EXTERNAL_FILE, linked)
    return POST


__all__ = ["Classification", "Disposition", "classify"]
