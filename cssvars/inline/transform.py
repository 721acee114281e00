"""Run the inlining pipeline on a stylesheet and report what happened."""

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from ..parse.reader import parse_css
from ..parse.tree import Stylesheet
from .collect import collect_root_vars, find_complex_root_rule
from .resolve import find_unresolved, resolve_vars
from .substitute import substitute_vars

InlineStatus = Literal["inlined", "skipped_complex_root", "skipped_no_root"]


class InlineResult(BaseModel):
    """Result of inlining the variables of one stylesheet."""

    status: InlineStatus
    variables: dict[str, str] = Field(default_factory=dict)
    removed: list[str] = Field(default_factory=list)
    unresolved: list[str] = Field(default_factory=list)
    passes: int = 0
    warnings: list[str] = Field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.status == "inlined"


def inline_css_vars(sheet: Stylesheet) -> InlineResult:
    """Inline :root custom properties into the declarations of `sheet`.

    The tree is modified in place: :root rules are removed, declarations that
    reference undefined variables are dropped, and all other references are
    replaced by their resolved values. When any rule combines :root with other
    selector parts, or there is no :root rule at all, the tree is left as is.

    Args:
        sheet: Parsed stylesheet

    Returns:
        InlineResult describing the outcome
    """
    complex_rule = find_complex_root_rule(sheet)
    if complex_rule is not None:
        return InlineResult(
            status="skipped_complex_root",
            warnings=[f"Complex :root selector '{complex_rule.selector}' found, variables not inlined"],
        )

    variables = collect_root_vars(sheet)
    if variables is None:
        return InlineResult(status="skipped_no_root")

    warnings: list[str] = []
    resolution = resolve_vars(variables)
    if not resolution.converged:
        warnings.append(f"Variable resolution stopped after {resolution.passes} passes")

    unresolved = find_unresolved(variables)
    for name in unresolved:
        warnings.append(f"Variable {name} could not be fully resolved: {variables[name]}")

    removed: list[str] = []
    for removal in substitute_vars(sheet, variables):
        decl = removal.declaration
        removed.append(f"{decl.prop}: {decl.value}")
        warnings.append(
            f"Removed '{decl.prop}: {decl.value}' (undefined {', '.join(removal.missing)})"
        )

    return InlineResult(
        status="inlined",
        variables=variables,
        removed=removed,
        unresolved=unresolved,
        passes=resolution.passes,
        warnings=warnings,
    )


def inline_css(css: str) -> str:
    """Inline :root custom properties in CSS text.

    Input is returned unchanged when nothing could be inlined.
    """
    sheet = parse_css(css)
    result = inline_css_vars(sheet)
    if not result.changed:
        return css
    return sheet.to_css()


def write_report(result: InlineResult, path: Path) -> Path:
    """Write an InlineResult as JSON.

    Args:
        result: Result to serialize
        path: Destination file

    Returns:
        Path to written report
    """
    payload = result.model_dump(mode="json")
    path.write_text(
        json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
    return path
