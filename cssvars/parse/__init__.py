"""Stylesheet tree model and CSS parsing."""

from .reader import StylesheetParseError, parse_css
from .tree import AtRule, Comment, Container, Declaration, Node, Raw, Rule, Stylesheet

__all__ = [
    "parse_css",
    "StylesheetParseError",
    "Node",
    "Container",
    "Stylesheet",
    "Rule",
    "AtRule",
    "Declaration",
    "Comment",
    "Raw",
]
