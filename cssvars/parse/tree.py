"""Mutable stylesheet tree.

Every node keeps the raw whitespace that preceded it in the source, and
containers keep the whitespace before their closing brace. An unmodified tree
therefore serializes back to the text it was parsed from. Removing a node drops
its leading whitespace together with it, except that the first node of a
stylesheet hands its leading text on to the node that takes its place.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass(eq=False)
class Node:
    """Base class for everything that can live inside a container."""

    before: str = field(default="", kw_only=True)
    parent: Container | None = field(default=None, kw_only=True, repr=False)

    def remove(self) -> None:
        """Detach this node from its parent (no-op when already detached)."""
        if self.parent is not None:
            self.parent.remove_child(self)

    def to_css(self) -> str:
        raise NotImplementedError


@dataclass(eq=False)
class Declaration(Node):
    """A `prop: value` pair.

    `between` holds everything from the end of the property name up to the
    first value token (usually ": "), `after` the whitespace between the value
    and the terminating semicolon.
    """

    prop: str
    value: str
    between: str = ":"
    after: str = ""
    semicolon: bool = True

    def to_css(self) -> str:
        text = f"{self.prop}{self.between}{self.value}{self.after}"
        return text + ";" if self.semicolon else text


@dataclass(eq=False)
class Comment(Node):
    text: str

    def to_css(self) -> str:
        return f"/*{self.text}*/"


@dataclass(eq=False)
class Raw(Node):
    """Source text the tree does not model, kept verbatim."""

    text: str

    def to_css(self) -> str:
        return self.text


@dataclass(eq=False)
class Container(Node):
    """A node owning an ordered list of child nodes."""

    nodes: list[Node] | None = field(default_factory=list, kw_only=True)
    after: str = field(default="", kw_only=True)

    def __post_init__(self) -> None:
        for node in self.nodes or ():
            node.parent = self

    @property
    def declarations(self) -> list[Declaration]:
        """Direct children that are declarations."""
        return [n for n in self.nodes or () if isinstance(n, Declaration)]

    def append(self, node: Node) -> Node:
        if self.nodes is None:
            self.nodes = []
        node.parent = self
        self.nodes.append(node)
        return node

    def remove_child(self, node: Node) -> None:
        if self.nodes is None:
            raise ValueError("container has no children")
        self.nodes.remove(node)
        node.parent = None

    def walk(self) -> Iterator[Node]:
        """Yield all descendants depth first, in document order.

        Children are iterated from a snapshot, so the caller may remove the
        yielded node or any of its siblings. Removed nodes are neither yielded
        later nor descended into.
        """
        for node in list(self.nodes or ()):
            if node.parent is not self:
                continue
            yield node
            if isinstance(node, Container) and node.parent is self:
                yield from node.walk()

    def walk_rules(self, selector: str | None = None) -> Iterator[Rule]:
        """Yield style rules, optionally only those whose selector equals `selector`."""
        for node in self.walk():
            if isinstance(node, Rule) and (selector is None or node.selector == selector):
                yield node

    def walk_decls(self) -> Iterator[Declaration]:
        for node in self.walk():
            if isinstance(node, Declaration):
                yield node

    def _inner_css(self) -> str:
        parts = [node.before + node.to_css() for node in self.nodes or ()]
        return "".join(parts) + self.after


@dataclass(eq=False)
class Rule(Container):
    """A style rule: `selector { ... }`, holding declarations and nested rules."""

    selector: str = ""
    between: str = ""

    def to_css(self) -> str:
        return f"{self.selector}{self.between}{{{self._inner_css()}}}"


@dataclass(eq=False)
class AtRule(Container):
    """An at-rule such as `@media`, `@font-face` or `@import`.

    `nodes` is None for statement at-rules that end with a semicolon.
    """

    name: str = ""
    params: str = ""
    after_name: str = ""
    between: str = ""
    nodes: list[Node] | None = field(default=None, kw_only=True)

    def to_css(self) -> str:
        head = f"@{self.name}{self.after_name}{self.params}{self.between}"
        if self.nodes is None:
            return head + ";"
        return f"{head}{{{self._inner_css()}}}"


@dataclass(eq=False)
class Stylesheet(Container):
    """Root of a parsed stylesheet."""

    def remove_child(self, node: Node) -> None:
        # The first node's leading text is the document's leading text
        if self.nodes and len(self.nodes) > 1 and self.nodes[0] is node:
            self.nodes[1].before = node.before
        super().remove_child(node)

    def to_css(self) -> str:
        return self._inner_css()

    def __str__(self) -> str:
        return self.to_css()
