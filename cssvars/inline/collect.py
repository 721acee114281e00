"""Collect :root custom properties and detach the rules that declare them."""

from __future__ import annotations

from ..config import ROOT_SELECTOR
from ..parse.tree import Container, Rule


def is_complex_root_selector(selector: str) -> bool:
    """Return True when `selector` mentions :root but is not exactly :root.

    Such rules (`:root.dark`, `:root[data-theme="x"]`, `html, :root`) usually
    override variables conditionally, so no single value can be inlined.
    """
    return ROOT_SELECTOR in selector and selector != ROOT_SELECTOR


def find_complex_root_rule(sheet: Container) -> Rule | None:
    """Return the first rule with a complex :root selector, or None."""
    for rule in sheet.walk_rules():
        if is_complex_root_selector(rule.selector):
            return rule
    return None


def collect_root_vars(sheet: Container) -> dict[str, str] | None:
    """Extract declarations from every exact :root rule, then remove those rules.

    Rules are processed in document order; a later declaration of the same
    name replaces an earlier one.

    Args:
        sheet: Stylesheet (or any container) to scan

    Returns:
        Mapping of declared name to value as written, or None when the sheet
        has no :root rule (in which case nothing is removed)
    """
    root_rules = list(sheet.walk_rules(ROOT_SELECTOR))
    if not root_rules:
        return None

    variables: dict[str, str] = {}
    for rule in root_rules:
        for decl in rule.walk_decls():
            variables[decl.prop] = decl.value
        rule.remove()
    return variables
