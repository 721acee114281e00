"""Resolve var() references between collected custom properties."""

from __future__ import annotations

import re
from typing import NamedTuple

from ..config import VAR_REFERENCE_PATTERN


class Resolution(NamedTuple):
    """Outcome of resolving a variable mapping."""

    passes: int
    converged: bool


def find_references(value: str) -> list[str]:
    """Return referenced variable names in order of appearance (repeats kept)."""
    return VAR_REFERENCE_PATTERN.findall(value)


def has_reference(value: str) -> bool:
    return VAR_REFERENCE_PATTERN.search(value) is not None


def is_self_referencing(name: str, variables: dict[str, str]) -> bool:
    """Return True when the current value of `name` refers to `name` itself."""
    value = variables.get(name)
    return value is not None and name in find_references(value)


def resolve_vars(variables: dict[str, str]) -> Resolution:
    """Expand references between mapping entries in place until nothing changes.

    Each pass rewrites every value that contains a reference, replacing each
    occurrence with the referenced entry's current value. References to names
    missing from the mapping are left as written. References to an entry whose
    value refers to itself are also left as written; such an entry is part of
    a cycle and can never become reference-free.

    A chain of N references resolves in at most N passes, so the loop is
    capped at len(variables) + 1 passes.

    Args:
        variables: Mapping of name to value, modified in place

    Returns:
        Resolution with the number of passes run and whether a fixed point
        was reached
    """

    def lookup(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in variables or is_self_referencing(name, variables):
            return match.group(0)
        return variables[name]

    max_passes = len(variables) + 1
    passes = 0
    changed = True
    while changed and passes < max_passes:
        changed = False
        passes += 1
        for name, value in variables.items():
            if not has_reference(value):
                continue
            new_value = VAR_REFERENCE_PATTERN.sub(lookup, value)
            if new_value != value:
                variables[name] = new_value
                changed = True

    return Resolution(passes=passes, converged=not changed)


def find_unresolved(variables: dict[str, str]) -> list[str]:
    """Names whose value still contains a reference after resolution."""
    return [name for name, value in variables.items() if has_reference(value)]
