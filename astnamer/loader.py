"""Build typed, parent-linked trees from ESTree JSON.

The JavaScript parser (espree/ESLint, acorn, esprima) runs elsewhere and
hands us its ESTree output as JSON. This module converts that JSON into the
node classes from astnamer.nodes and wires up ``parent`` links.

Contract violations (a typed node missing a field its kind requires) raise
MalformedNodeError. We do NOT build partial trees: a tree with holes would
make every downstream name lookup quietly wrong.
"""

import json
from collections.abc import Iterator
from dataclasses import MISSING, Field, fields
from pathlib import Path
from typing import Any

from astnamer.config_runtime import load_runtime_config
from astnamer.errors import AstLoadError, MalformedNodeError, TreeDepthError
from astnamer.nodes import NODE_TYPES, GenericNode, Node, iter_children
from astnamer.utils.logging import logger

# Python field name -> ESTree property name, where they differ.
FIELD_ALIASES = {"is_async": "async"}

# Fields that must be lists in ESTree.
LIST_FIELDS = frozenset({"arguments", "elements", "params"})

# Wrapper emitted by the ESLint integration: {"type": "eslint_ast", "tree": {...}}.
# "estree" is accepted as the wrapper type and "ast" as the payload key.
WRAPPER_TYPES = frozenset({"eslint_ast", "estree"})


def _is_node_dict(value: Any) -> bool:
    return isinstance(value, dict) and isinstance(value.get("type"), str)


def _is_required(f: Field) -> bool:
    return f.default is MISSING and f.default_factory is MISSING


def _child_dicts(value: Any) -> list[dict[str, Any]]:
    """Node dicts held by one ESTree property, in order."""
    if _is_node_dict(value):
        return [value]
    if isinstance(value, list):
        return [v for v in value if _is_node_dict(v)]
    return []


def _substitute(value: Any, built: Iterator[Node]) -> Any:
    """Swap the node dicts in ``value`` for the next nodes from ``built``."""
    if _is_node_dict(value):
        return next(built)
    if isinstance(value, list):
        return [next(built) if _is_node_dict(v) else v for v in value]
    return value


class TreeBuilder:
    """Converts one ESTree document. Not reusable across documents.

    Iterative post-order: a node is entered (validated, its child dicts
    queued), then exited once every child has been built. Built children
    wait on ``self._built`` in document order. Python's call stack does not
    grow with nesting, so ``max_depth`` is the only depth limit.
    """

    def __init__(self, max_depth: int, path: str | None = None):
        self.max_depth = max_depth
        self.path = path
        self.node_count = 0
        self._built: list[Node] = []

    def build(self, raw: dict[str, Any]) -> Node:
        # (raw, depth, slots); slots is None until the node has been entered
        stack: list[tuple[dict[str, Any], int, list[tuple[str, str]] | None]] = [(raw, 0, None)]
        while stack:
            raw, depth, slots = stack.pop()
            if slots is None:
                slots = self._enter(raw, depth)
                stack.append((raw, depth, slots))
                children = [child for _, key in slots for child in _child_dicts(raw[key])]
                stack.extend((child, depth + 1, None) for child in reversed(children))
            else:
                self._built.append(self._exit(raw, slots))

        root = self._built.pop()
        root.parent = None
        return root

    def _enter(self, raw: dict[str, Any], depth: int) -> list[tuple[str, str]]:
        """Check ``raw`` before its children are built.

        Returns (attribute name, ESTree key) pairs for the keys to copy.
        """
        if depth > self.max_depth:
            raise TreeDepthError(self.max_depth, self.path)

        node_type = raw.get("type")
        if not isinstance(node_type, str) or not node_type:
            raise MalformedNodeError("<unknown>", "type", "must be a non-empty string", self.path)

        cls = NODE_TYPES.get(node_type)
        if cls is None:
            return [(key, key) for key in raw if key != "type"]

        slots = []
        for f in fields(cls):
            key = FIELD_ALIASES.get(f.name, f.name)
            if key not in raw:
                if _is_required(f):
                    raise MalformedNodeError(node_type, key, "is missing", self.path)
                continue
            if key in LIST_FIELDS and not isinstance(raw[key], list):
                raise MalformedNodeError(node_type, key, "must be a list", self.path)
            slots.append((f.name, key))
        return slots

    def _exit(self, raw: dict[str, Any], slots: list[tuple[str, str]]) -> Node:
        count = sum(len(_child_dicts(raw[key])) for _, key in slots)
        start = len(self._built) - count
        children = iter(self._built[start:])
        del self._built[start:]

        values = {name: _substitute(raw[key], children) for name, key in slots}

        node_type = raw["type"]
        cls = NODE_TYPES.get(node_type)
        if cls is None:
            node = GenericNode(type=node_type, fields=values)
        else:
            node = self._build_typed(cls, node_type, values)

        loc = raw.get("loc")
        if isinstance(loc, dict) and isinstance(loc.get("start"), dict):
            node.line = loc["start"].get("line", 0) or 0
            node.column = loc["start"].get("column", 0) or 0

        for child in iter_children(node):
            child.parent = node

        self.node_count += 1
        return node

    def _build_typed(self, cls: type[Node], node_type: str, values: dict[str, Any]) -> Node:
        for f in fields(cls):
            # Identifier.name is the only required plain-data field; the
            # node validates it itself.
            if _is_required(f) and f.name != "name" and not isinstance(values.get(f.name), Node):
                raise MalformedNodeError(node_type, FIELD_ALIASES.get(f.name, f.name), "must be a node", self.path)

        try:
            return cls(**values)
        except MalformedNodeError as e:
            e.path = self.path
            raise


def unwrap_document(raw: Any) -> dict[str, Any]:
    """Return the ESTree root, unwrapping the eslint_ast wrapper if present.

    The wrapper holds the root under ``tree``; ``ast`` is accepted when
    ``tree`` is absent.
    """
    if isinstance(raw, dict) and raw.get("type") in WRAPPER_TYPES:
        raw = raw.get("tree") or raw.get("ast")
    if not _is_node_dict(raw):
        raise MalformedNodeError("<root>", "type", "document is not an ESTree node")
    return raw


def build_tree(raw: dict[str, Any], max_depth: int | None = None, path: str | None = None) -> Node:
    """Convert an ESTree dict into a parent-linked tree of typed nodes.

    Args:
        raw: ESTree root (usually a ``Program``) or the eslint_ast wrapper
        max_depth: Nesting limit; defaults to ``limits.max_depth`` from config
        path: Source path, only used in error messages

    Returns:
        The root node. Its ``parent`` is None.

    Raises:
        MalformedNodeError: A node is missing fields its type requires
        TreeDepthError: Nesting exceeds max_depth
    """
    if max_depth is None:
        max_depth = load_runtime_config()["limits"]["max_depth"]

    try:
        root_raw = unwrap_document(raw)
    except MalformedNodeError as e:
        e.path = path
        raise

    builder = TreeBuilder(max_depth, path)
    root = builder.build(root_raw)
    logger.debug(
        "Built {kind} tree with {count} nodes",
        kind=root.type,
        count=builder.node_count,
    )
    return root


def load_tree(
    path: str | Path,
    max_depth: int | None = None,
    max_file_size: int | None = None,
) -> Node:
    """Read an ESTree JSON file and build its tree.

    Raises:
        AstLoadError: File missing, too large, or not valid JSON
        MalformedNodeError: See build_tree
        TreeDepthError: See build_tree
    """
    path = Path(path)
    if max_depth is None or max_file_size is None:
        limits = load_runtime_config()["limits"]
        if max_depth is None:
            max_depth = limits["max_depth"]
        if max_file_size is None:
            max_file_size = limits["max_file_size"]

    try:
        size = path.stat().st_size
    except FileNotFoundError as e:
        raise AstLoadError(f"AST file not found: {path}", str(path)) from e

    if size > max_file_size:
        raise AstLoadError(
            f"AST file {path} is {size} bytes, limit is {max_file_size}", str(path)
        )

    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise AstLoadError(f"Invalid JSON in AST file {path}: {e}", str(path)) from e

    logger.debug("Loaded AST file {path} ({size} bytes)", path=str(path), size=size)
    return build_tree(raw, max_depth=max_depth, path=str(path))
