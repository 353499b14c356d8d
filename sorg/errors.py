"""Exceptions raised while loading, building, and rendering a sorg site.

Every failure aborts the build: there is no partial-success mode. Errors raised
while rendering a page are wrapped in :class:`PageRenderError` so the message
names the page whose rendering failed, while the original exception stays
available as ``__cause__``.
"""

from __future__ import annotations


class SorgError(Exception):
    """Base class for all sorg failures."""


class SiteConfigError(SorgError, ValueError):
    """Raised when the document lacks required site metadata or structure."""


class ExternalFileError(SorgError):
    """Raised when a ``file``-linked post points at an unreadable document."""

    def __init__(self, title: str, path: object) -> None:
        self.title = title
        self.path = path
        super().__init__(
            f"heading '{title}' tried to read file '{path}', which could not be read"
        )


class TemplateRenderError(SorgError):
    """Raised when a Jinja template cannot be found, compiled, or rendered."""


class MacroError(SorgError):
    """Raised when an inline macro call cannot be expanded."""


class PageRenderError(SorgError):
    """Wrap any failure that happened while rendering a single page."""

    def __init__(self, title: str, reason: BaseException) -> None:
        self.title = title
        super().__init__(f"rendering {title}: {reason}")


__all__ = [
    "ExternalFileError",
    "MacroError",
    "PageRenderError",
    "SiteConfigError",
    "SorgError",
    "TemplateRenderError",
]
