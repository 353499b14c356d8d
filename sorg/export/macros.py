r"""Document-defined macros expanded through Jinja.

A macro is declared anywhere in the document with a block whose first
parameter is the macro name and whose remaining parameters name its
arguments::

    #+BEGIN_MACRO greet name surname
    hello {{ name }} {{ surname }}
    #+END_MACRO

The body is registered as the Jinja template ``macros/greet.html`` and a call
such as ``{{{greet(Ann, Lee)}}}`` renders it with ``name="Ann"`` and
``surname="Lee"``.
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

import jinja2
from markupsafe import Markup

from sorg._constants import MACRO_TEMPLATE
from sorg.errors import MacroError

from .elements import SpecialBlock
from .parser import parse_blocks

if typ.TYPE_CHECKING:
    from sorg.document import OrgDocument

MACRO_BLOCK = "macro"
ARGUMENT_SEPARATOR = re.compile(r"(?<!\\),")


@dc.dataclass(frozen=True, slots=True)
class Macro:
    """A named template with positional parameters."""

    label: str
    parameters: tuple[str, ...]
    definition: str

    @property
    def template_name(self) -> str:
        return MACRO_TEMPLATE.format(name=self.label)


def split_arguments(arguments: str | None) -> list[str]:
    r"""Split a macro call's argument string on unescaped commas.

    >>> split_arguments(" Ann ,  Lee ")
    ['Ann', 'Lee']
    >>> split_arguments(r"a\, b")
    ['a, b']
    >>> split_arguments(None)
    []
    """
    if arguments is None or not arguments.strip():
        return []
    return [
        part.strip().replace("\\,", ",") for part in ARGUMENT_SEPARATOR.split(arguments)
    ]


@dc.dataclass(slots=True)
class MacroSet:
    """Every macro declared in one document, keyed by label."""

    macros: dict[str, Macro] = dc.field(default_factory=dict)

    @classmethod
    def parse(cls, document: OrgDocument) -> MacroSet:
        """Collect the ``MACRO`` blocks found anywhere in ``document``."""
        found: dict[str, Macro] = {}
        for node in document.root:
            for block in parse_blocks(node.body):
                if not isinstance(block, SpecialBlock):
                    continue
                if block.name.lower() != MACRO_BLOCK or not block.parameters:
                    continue
                label, *parameters = block.parameters.split()
                found[label] = Macro(label, tuple(parameters), block.raw)
        return cls(found)

    def __contains__(self, label: object) -> bool:
        return label in self.macros

    def get(self, label: str) -> Macro | None:
        return self.macros.get(label)

    def templates(self) -> dict[str, str]:
        """Return macro bodies keyed by template name for a ``DictLoader``."""
        return {macro.template_name: macro.definition for macro in self.macros.values()}


class MacroExpander:
    """Render macro calls against a Jinja environment holding their templates."""

    def __init__(self, macros: MacroSet, environment: jinja2.Environment) -> None:
        self.macros = macros
        self.environment = environment

    def expand(self, name: str, arguments: str | None = None) -> Markup:
        """Render the call ``{{{name(arguments)}}}``.

        Raises
        ------
        MacroError
            If the macro is unknown, the argument count differs from the
            declared parameters, or its template fails to render.
        """
        macro = self.macros.get(name)
        if macro is None:
            msg = f"unknown macro '{name}'"
            raise MacroError(msg)
        values = split_arguments(arguments)
        if len(values) != len(macro.parameters):
            msg = (
                f"macro '{name}' expects {len(macro.parameters)} argument(s) "
                f"({', '.join(macro.parameters)}) but got {len(values)}"
            )
            raise MacroError(msg)
        try:
            template = self.environment.get_template(macro.template_name)
            rendered = template.render(dict(zip(macro.parameters, values, strict=True)))
        except jinja2.TemplateError as exc:
            msg = f"macro '{name}' failed to render: {exc}"
            raise MacroError(msg) from exc
        return Markup(rendered)


__all__ = ["Macro", "MacroExpander", "MacroSet", "split_arguments"]
