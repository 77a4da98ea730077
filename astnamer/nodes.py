"""Typed ESTree node model.

Each ESTree node kind the resolver reasons about gets its own class with the
fields of that syntax. Every other kind is carried as a GenericNode so the
tree stays complete and parent links reach the root.

Node classes register themselves under their ESTree ``type`` tag when they
are defined; the loader looks tags up in NODE_TYPES.

Equality is identity. Two syntactically identical nodes at different
positions are different nodes, which is what operand checks rely on.

Ownership flows root to leaf through the dataclass fields. ``parent`` is a
plain back-reference set by the loader; it is not a field, so it never
shows up in repr, child iteration or comparisons.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, dataclass_transform

from astnamer.errors import MalformedNodeError


@dataclass_transform(eq_default=False)
class Node:
    """Base for ESTree nodes. Subclasses pass ``tag`` to register."""

    type: ClassVar[str]
    _registry: ClassVar[dict[str, type[Node]]] = {}

    parent: Node | None = None
    line: int = 0
    column: int = 0

    def __init_subclass__(cls, tag: str | None = None, **kwargs):
        super().__init_subclass__(**kwargs)
        if tag is None:
            return
        dataclass(eq=False)(cls)
        cls.type = tag
        Node._registry[tag] = cls


NODE_TYPES = Node._registry


# =============================================================================
# Names
# =============================================================================


class Identifier(Node, tag="Identifier"):
    name: str

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise MalformedNodeError("Identifier", "name", "must be a non-empty string")


class ThisExpression(Node, tag="ThisExpression"):
    pass


class Literal(Node, tag="Literal"):
    value: Any = None
    raw: str | None = None


# =============================================================================
# Expressions
# =============================================================================


class MemberExpression(Node, tag="MemberExpression"):
    """``a.b`` when computed is False, ``a[b]`` when True."""

    object: Node
    property: Node
    computed: bool = False


class CallExpression(Node, tag="CallExpression"):
    callee: Node
    arguments: list[Node] = field(default_factory=list)


class AssignmentExpression(Node, tag="AssignmentExpression"):
    left: Node
    right: Node
    operator: str = "="


class ConditionalExpression(Node, tag="ConditionalExpression"):
    test: Node
    consequent: Node
    alternate: Node


class ArrayExpression(Node, tag="ArrayExpression"):
    # Holes (``[a, , b]``) are None.
    elements: list[Node | None] = field(default_factory=list)


class Property(Node, tag="Property"):
    key: Node
    value: Node
    kind: str = "init"
    computed: bool = False
    method: bool = False
    shorthand: bool = False


# =============================================================================
# Functions and declarations
# =============================================================================


@dataclass(eq=False)
class FunctionNode(Node):
    """Shared shape of the three function-like kinds."""

    id: Identifier | None = None
    params: list[Node] = field(default_factory=list)
    body: Node | None = None
    generator: bool = False
    is_async: bool = False


class FunctionDeclaration(FunctionNode, tag="FunctionDeclaration"):
    pass


class FunctionExpression(FunctionNode, tag="FunctionExpression"):
    pass


class ArrowFunctionExpression(FunctionNode, tag="ArrowFunctionExpression"):
    """Arrow functions never have an ``id``; ``body`` may be an expression."""

    pass


FUNCTION_TYPES: tuple[type[FunctionNode], ...] = (
    FunctionExpression,
    FunctionDeclaration,
    ArrowFunctionExpression,
)


class VariableDeclarator(Node, tag="VariableDeclarator"):
    id: Node
    init: Node | None = None


@dataclass(eq=False)
class GenericNode(Node):
    """Any ESTree kind without a dedicated class.

    ``fields`` holds the raw properties with nested nodes already converted,
    so ``Program``, ``BlockStatement``, ``ReturnStatement`` and friends still
    link their children.
    """

    type: str
    fields: dict[str, Any] = field(default_factory=dict)


# =============================================================================
# Traversal
# =============================================================================


def _nodes_in(value: Any) -> Iterator[Node]:
    if isinstance(value, Node):
        yield value
    elif isinstance(value, list):
        for item in value:
            if isinstance(item, Node):
                yield item


def iter_children(node: Node) -> Iterator[Node]:
    """Yield direct children in field order, skipping holes and plain data."""
    if isinstance(node, GenericNode):
        for value in node.fields.values():
            yield from _nodes_in(value)
        return

    for f in fields(node):
        yield from _nodes_in(getattr(node, f.name))


def walk(node: Node) -> Iterator[Node]:
    """Pre-order traversal of the subtree rooted at ``node``."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(iter_children(current))))


def iter_ancestors(node: Node) -> Iterator[Node]:
    """Yield parents of ``node``, nearest first, up to the root."""
    current = node.parent
    while current is not None:
        yield current
        current = current.parent
