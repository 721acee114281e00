"""Build a stylesheet tree from CSS text using tinycss2.

tinycss2 does the tokenizing and block matching. Node text (selectors,
at-rule preludes, declaration values and the whitespace between them) is then
sliced from the source using token positions, so nothing is re-serialized and
an unmodified tree prints back exactly as it was read.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

import tinycss2

from .tree import AtRule, Comment, Container, Declaration, Raw, Rule, Stylesheet

WHITESPACE = " \t\n"


@dataclass(eq=False)
class StylesheetParseError(ValueError):
    """Raised when tinycss2 reports a rule-level syntax error."""

    message: str
    line: int | None = None
    column: int | None = None

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message} (line {self.line}, column {self.column})"


class _Source:
    """Source text with a line table for turning tinycss2 positions into offsets."""

    def __init__(self, text: str):
        self.text = text
        self._line_starts = [0] + [m.end() for m in re.finditer("\n", text)]

    def offset(self, node: Any) -> int:
        # tinycss2 columns are 1-based
        return self._line_starts[node.source_line - 1] + node.source_column - 1

    def spans(self, nodes: list[Any], end: int) -> list[tuple[int, int]]:
        """Start/end offsets of consecutive sibling nodes ending at `end`."""
        starts = [self.offset(node) for node in nodes]
        return list(zip(starts, starts[1:] + [end]))

    def block_bounds(self, content: list[Any], start: int, stop: int) -> tuple[int, int]:
        """Offsets of the `{` and `}` of a block whose owner spans start..stop."""
        if content:
            open_ = self.offset(content[0]) - 1
        else:
            open_ = self.text.rfind("{", start, stop)
        close = stop - 1 if self.text[stop - 1] == "}" else stop
        return open_, close


def normalize_newlines(css: str) -> str:
    """Apply the input preprocessing tinycss2 performs before tokenizing."""
    return (
        css.replace("\0", "�")
        .replace("\r\n", "\n")
        .replace("\r", "\n")
        .replace("\f", "\n")
    )


def parse_css(css: str) -> Stylesheet:
    """Parse CSS text into a Stylesheet.

    Args:
        css: Stylesheet source

    Returns:
        Stylesheet whose serialization reproduces the source (with newlines
        normalized to `\\n`)

    Raises:
        StylesheetParseError: If a rule cannot be parsed
    """
    source = _Source(normalize_newlines(css))
    nodes = tinycss2.parse_stylesheet(source.text, skip_comments=False, skip_whitespace=False)
    sheet = Stylesheet()
    _fill_rule_list(sheet, source, nodes)
    return sheet


def _fill_rule_list(container: Container, source: _Source, nodes: list[Any]) -> None:
    text = source.text
    cursor = 0
    for node, (start, stop) in zip(nodes, source.spans(nodes, len(text))):
        if node.type == "whitespace":
            continue
        if node.type == "error":
            raise StylesheetParseError(node.message, node.source_line, node.source_column)

        if node.type == "comment":
            child = Comment(node.value)
        elif node.type == "qualified-rule":
            open_, close = source.block_bounds(node.content, start, stop)
            child = _build_rule(source, start, open_, close, node.content)
        elif node.type == "at-rule":
            name_end = source.offset(node.prelude[0]) if node.prelude else None
            child = _build_top_level_at_rule(source, node, start, stop, name_end)
        else:
            child = Raw(text[start:stop])

        child.before = text[cursor:start]
        cursor = stop
        container.append(child)
    container.after = text[cursor:]


def _build_top_level_at_rule(
    source: _Source, node: Any, start: int, stop: int, name_end: int | None
) -> AtRule | Raw:
    text = source.text
    if node.content is None:
        if text[stop - 1] != ";":
            # Statement cut off by the end of input
            return Raw(text[start:stop])
        return _build_at_rule(source, start, name_end or stop - 1, stop - 1)

    open_, close = source.block_bounds(node.content, start, stop)
    rule = _build_at_rule(source, start, name_end or open_, open_)
    rule.nodes = []
    _fill_block(rule, source, node.content, open_ + 1, close)
    return rule


def _build_rule(source: _Source, start: int, open_: int, close: int, content: list[Any]) -> Rule:
    prelude = source.text[start:open_]
    selector = prelude.rstrip(WHITESPACE)
    rule = Rule(selector, between=prelude[len(selector):])
    _fill_block(rule, source, content, open_ + 1, close)
    return rule


def _build_at_rule(source: _Source, start: int, name_end: int, head_end: int) -> AtRule:
    """Build a block-less AtRule from `@name` at `start` up to `head_end`."""
    text = source.text
    head = text[name_end:head_end]
    params = head.strip(WHITESPACE)
    after_name = head[: len(head) - len(head.lstrip(WHITESPACE))]
    return AtRule(
        name=text[start + 1:name_end],
        params=params,
        after_name=after_name,
        between=head[len(after_name) + len(params):],
    )


def _fill_block(container: Container, source: _Source, tokens: list[Any], start: int, end: int) -> None:
    """Fill `container` from the tokens of a `{}` block spanning start..end.

    A block holds declarations, nested style rules and at-rules in any order.
    An item that reaches a top-level `{}` block before any `;` is a nested rule
    (unless it is a custom property, whose value may contain braces);
    otherwise the item runs to the next `;`.
    """
    text = source.text
    spans = source.spans(tokens, end)
    count = len(tokens)
    cursor = start
    index = 0
    while True:
        while index < count and tokens[index].type in ("whitespace", "comment"):
            token = tokens[index]
            if token.type == "comment":
                container.append(Comment(token.value, before=text[cursor:spans[index][0]]))
                cursor = spans[index][1]
            index += 1
        if index >= count:
            break

        first = tokens[index]
        item_start = spans[index][0]
        before = text[cursor:item_start]

        if first.type == "literal" and first.value == ";":
            container.append(Raw(";", before=before))
            cursor = spans[index][1]
            index += 1
            continue

        custom = first.type == "ident" and first.value.startswith("--")
        stop = index
        while stop < count:
            token = tokens[stop]
            if token.type == "literal" and token.value == ";":
                break
            if token.type == "{} block" and not custom:
                break
            stop += 1

        if stop < count and tokens[stop].type == "{} block":
            block = tokens[stop]
            open_, close = source.block_bounds(block.content, spans[stop][0], spans[stop][1])
            if first.type == "at-keyword":
                name_end = spans[index][1]
                child = _build_at_rule(source, item_start, name_end, open_)
                child.nodes = []
                _fill_block(child, source, block.content, open_ + 1, close)
            else:
                child = _build_rule(source, item_start, open_, close, block.content)
            child.before = before
            container.append(child)
            cursor = spans[stop][1]
            index = stop + 1
            continue

        terminated = stop < count
        if terminated:
            item_end = spans[stop][0]
            cursor = spans[stop][1]
        else:
            item_end = item_start + len(text[item_start:spans[stop - 1][1]].rstrip(WHITESPACE))
            cursor = item_end

        if first.type == "at-keyword" and terminated:
            child = _build_at_rule(source, item_start, spans[index][1], item_end)
        else:
            child = _build_declaration(source, tokens, spans, index, stop, item_end, terminated)
            if child is None:
                item = text[item_start:item_end]
                child = Raw(item + ";" if terminated else item)
        child.before = before
        container.append(child)
        index = stop + 1

    container.after = text[cursor:end]


def _build_declaration(
    source: _Source,
    tokens: list[Any],
    spans: list[tuple[int, int]],
    index: int,
    stop: int,
    item_end: int,
    terminated: bool,
) -> Declaration | None:
    text = source.text
    if tokens[index].type != "ident":
        return None

    colon = index + 1
    while colon < stop and tokens[colon].type == "whitespace":
        colon += 1
    if colon >= stop or tokens[colon].type != "literal" or tokens[colon].value != ":":
        return None

    value_at = colon + 1
    while value_at < stop and tokens[value_at].type == "whitespace":
        value_at += 1
    value_start = spans[value_at][0] if value_at < stop else item_end
    value_start = min(value_start, item_end)

    name_start, name_end = spans[index]
    raw_value = text[value_start:item_end]
    value = raw_value.rstrip(WHITESPACE)
    return Declaration(
        text[name_start:name_end],
        value,
        between=text[name_end:value_start],
        after=raw_value[len(value):],
        semicolon=terminated,
    )
