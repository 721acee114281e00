"""Variable collection, resolution and substitution."""

from .collect import collect_root_vars, find_complex_root_rule
from .resolve import Resolution, resolve_vars
from .substitute import Removal, substitute_vars
from .transform import InlineResult, inline_css, inline_css_vars, write_report

__all__ = [
    "collect_root_vars",
    "find_complex_root_rule",
    "resolve_vars",
    "Resolution",
    "substitute_vars",
    "Removal",
    "inline_css_vars",
    "inline_css",
    "InlineResult",
    "write_report",
]
