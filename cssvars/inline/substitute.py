"""Substitute resolved variables into declarations."""

from __future__ import annotations

from typing import NamedTuple

from ..config import VAR_REFERENCE_PATTERN
from ..parse.tree import Container, Declaration
from .resolve import find_references


class Removal(NamedTuple):
    """A declaration dropped because it referenced undefined variables."""

    declaration: Declaration
    missing: list[str]


def substitute_vars(sheet: Container, variables: dict[str, str]) -> list[Removal]:
    """Rewrite or drop every declaration that references a variable.

    A declaration referencing any name absent from `variables` is removed from
    its rule. Otherwise every reference is replaced by the mapped value in a
    single textual pass. Declarations without references are not touched.

    Args:
        sheet: Tree to walk, including rules nested in at-rules
        variables: Resolved mapping of name to value

    Returns:
        Removed declarations in document order
    """
    removed: list[Removal] = []
    for decl in sheet.walk_decls():
        names = find_references(decl.value)
        if not names:
            continue

        missing = [name for name in dict.fromkeys(names) if name not in variables]
        if missing:
            decl.remove()
            removed.append(Removal(decl, missing))
            continue

        decl.value = VAR_REFERENCE_PATTERN.sub(lambda m: variables[m.group(1)], decl.value)
    return removed
