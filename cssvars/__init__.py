"""Inline :root CSS custom properties into the declarations that use them."""

__version__ = "0.1.0"

from .inline import InlineResult, inline_css, inline_css_vars
from .parse import Stylesheet, StylesheetParseError, parse_css

__all__ = [
    "__version__",
    "InlineResult",
    "inline_css",
    "inline_css_vars",
    "Stylesheet",
    "StylesheetParseError",
    "parse_css",
]
