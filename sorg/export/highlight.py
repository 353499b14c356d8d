"""Syntax highlighting for ``#+BEGIN_SRC`` blocks through Pygments."""

from __future__ import annotations

import functools
import re
from html import escape

from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

CSS_CLASS = "codehilite"
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')
PHP_OPEN_TAG = "<?php"


@functools.cache
def _formatter(style: str) -> HtmlFormatter:
    """Return the shared formatter for ``style``; built once per process."""
    return HtmlFormatter(style=style, cssclass=CSS_CLASS)


class CodeHighlighter:
    """Render source blocks into highlighted HTML using one Pygments style."""

    def __init__(self, style: str = "monokai") -> None:
        self.style = style
        self._formatter = _formatter(style)

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(f".{CSS_CLASS}")

    def code_block(self, code: str, language: str | None = None) -> str:
        """Render ``code`` into highlighted HTML with an optional language tag.

        Parameters
        ----------
        code : str
            Source snippet to highlight.
        language : str, optional
            Pygments lexer name; defaults to ``"text"`` when not provided or
            when the lexer lookup fails.

        Returns
        -------
        str
            HTML containing the highlighted block with ``data-language``
            metadata applied.
        """
        lang = language or "text"
        try:
            lexer = get_lexer_by_name(lang)
        except ClassNotFound:
            lang = "text"
            lexer = get_lexer_by_name(lang)
        if lexer.name == "PHP" and PHP_OPEN_TAG not in code:
            # the PHP lexer only highlights after an opening tag
            code = f"{PHP_OPEN_TAG}\n{code}"
        html = highlight(code, lexer, self._formatter)
        return self._attach_language_attribute(html, lang)

    @staticmethod
    def _attach_language_attribute(html: str, language: str) -> str:
        """Add a single language attribute to an already highlighted block."""
        safe_lang = escape(language, quote=True)
        return CODEHILITE_OPEN_TAG.sub(
            f'<div class="{CSS_CLASS}" data-language="{safe_lang}">', html, 1
        )


__all__ = ["CodeHighlighter"]
