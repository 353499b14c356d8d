"""Turn page titles into URL-safe path segments."""

from __future__ import annotations

import re
import unicodedata

NON_ALNUM_PATTERN = re.compile(r"[^a-z0-9]+")
FALLBACK_SLUG = "page"


def slugify(value: str) -> str:
    """Convert a string into a lowercase hyphen-separated slug.

    Accented letters are folded to their ASCII base letter and every other run
    of non-alphanumeric characters collapses into a single hyphen. Applying
    the function to its own output returns the same value.

    >>> slugify("First Child")
    'first-child'
    >>> slugify(slugify("Café au lait!"))
    'cafe-au-lait'
    """
    folded = unicodedata.normalize("NFKD", value)
    ascii_only = folded.encode("ascii", "ignore").decode("ascii")
    slug = NON_ALNUM_PATTERN.sub("-", ascii_only.lower()).strip("-")
    return slug or FALLBACK_SLUG


__all__ = ["slugify"]
