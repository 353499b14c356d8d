"""Utility helpers shared by the sorg configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

REQUIRED_KEYWORDS = ("title", "description", "url")


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _missing_keywords(preamble: typ.Mapping[str, str]) -> list[str]:
    """Return the required keywords that are absent or blank, in order."""
    return [key for key in REQUIRED_KEYWORDS if not _optional_str(preamble.get(key))]


def _resolve_folder(root: Path, value: str | None, default: str) -> Path:
    """Resolve a folder keyword relative to the document folder."""
    folder = Path(_optional_str(value) or default)
    if folder.is_absolute():
        return folder
    return root / folder


__all__ = [
    "REQUIRED_KEYWORDS",
    "_missing_keywords",
    "_optional_str",
    "_resolve_folder",
]
