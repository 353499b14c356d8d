"""Resolve Org link targets into URLs for the rendered site."""

from __future__ import annotations

import dataclasses as dc
import posixpath
import typing as typ
from urllib.parse import urlsplit

if typ.TYPE_CHECKING:
    from sorg.config.models import SiteConfig

IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp"})
EXTERNAL_SCHEMES = ("http://", "https://")


@dc.dataclass(frozen=True, slots=True)
class ResolvedLink:
    """A link target after rewriting."""

    url: str
    is_image: bool
    is_external: bool


@dc.dataclass(frozen=True, slots=True)
class LinkResolver:
    """Rewrite ``file:`` and static-folder links against the site base URL.

    Attributes
    ----------
    base_url : str
        Public URL of the site; relative targets are joined onto it.
    static_folder : str
        Name of the static folder; a ``./{static_folder}`` prefix is dropped
        because the folder's contents are copied to the build root.
    """

    base_url: str
    static_folder: str = "static"

    @classmethod
    def from_config(cls, config: SiteConfig) -> LinkResolver:
        """Build a resolver for the site described by ``config``."""
        try:
            static = config.static_path.relative_to(config.root_folder).as_posix()
        except ValueError:
            static = config.static_path.name
        return cls(config.url, static)

    def _strip(self, target: str) -> str:
        path = target.removeprefix("file:")
        static_prefix = f"./{self.static_folder}/"
        if path.startswith(static_prefix):
            return path[len(static_prefix) - 1 :]
        return path

    def _join(self, path: str) -> str:
        if urlsplit(path).scheme or path.startswith("#") or not self.base_url:
            return path
        return f"{self.base_url.rstrip('/')}/{path.removeprefix('./').lstrip('/')}"

    def resolve(self, target: str) -> ResolvedLink:
        """Return the rewritten URL for ``target`` and what it points at.

        Examples
        --------
        >>> resolver = LinkResolver("https://example.org", "static")
        >>> resolver.resolve("file:./static/cat.PNG").url
        'https://example.org/cat.PNG'
        >>> resolver.resolve("https://python.org").is_external
        True
        """
        path = self._strip(target.strip())
        suffix = posixpath.splitext(urlsplit(path).path)[1].lower()
        return ResolvedLink(
            url=self._join(path),
            is_image=suffix in IMAGE_EXTENSIONS,
            is_external=path.lower().startswith(EXTERNAL_SCHEMES),
        )


__all__ = ["IMAGE_EXTENSIONS", "LinkResolver", "ResolvedLink"]
