"""Collect name records from a loaded tree.

Plain-dict records built on the resolver, shared by the CLI commands and
usable directly by other tooling. Records are sorted by position for
deterministic output.
"""

from typing import Any

from astnamer.config_runtime import load_runtime_config
from astnamer.nodes import FUNCTION_TYPES, CallExpression, Node, walk
from astnamer.resolver import (
    is_operand,
    resolve_enclosing_function_name,
    resolve_full_name,
    resolve_identifier,
    resolve_node_name,
    resolve_partial_name,
)


def _position_key(record: dict[str, Any]) -> tuple[int, int]:
    return (record["line"], record["column"])


def enclosing_function_label(node: Node, global_name: str = "global") -> str:
    """Name of the function around ``node`` as shown in reports.

    Uses resolve_node_name on the naming node, so ``exports.foo = function``
    reports ``foo``. Top-level code and unassigned anonymous functions
    report ``global_name``.
    """
    name_node = resolve_enclosing_function_name(node)
    if name_node is None:
        return global_name
    return resolve_node_name(name_node) or global_name


def collect_calls(root: Node, config: dict[str, Any] | None = None) -> list[dict[str, Any]]:
    """One record per CallExpression under ``root``.

    Each record holds the call position, its full and partial names, the
    enclosing function label and the arguments with their resolved names.
    """
    cfg = config or load_runtime_config()
    global_name = cfg["report"]["global_name"]

    calls = []
    for node in walk(root):
        if not isinstance(node, CallExpression):
            continue

        arguments = []
        for index, arg in enumerate(node.arguments):
            arguments.append(
                {
                    "index": index,
                    "type": arg.type,
                    "name": resolve_node_name(arg),
                    "operand": is_operand(arg, node),
                }
            )

        calls.append(
            {
                "line": node.line,
                "column": node.column,
                "full_name": resolve_full_name(node),
                "partial_name": resolve_partial_name(node),
                "in_function": enclosing_function_label(node, global_name),
                "arguments": arguments,
            }
        )

    return sorted(calls, key=_position_key)


def collect_functions(root: Node, config: dict[str, Any] | None = None) -> list[dict[str, Any]]:
    """One record per function-like node under ``root``.

    ``name`` keeps member targets qualified (``exports.handler``) via
    resolve_full_name; anonymous, unassigned functions get the configured
    anonymous label.
    """
    cfg = config or load_runtime_config()
    anonymous_name = cfg["report"]["anonymous_name"]
    global_name = cfg["report"]["global_name"]

    functions = []
    for node in walk(root):
        if not isinstance(node, FUNCTION_TYPES):
            continue

        name_node = resolve_enclosing_function_name(node)
        name = resolve_full_name(name_node) if name_node is not None else ""

        outer = enclosing_function_label(node.parent, global_name) if node.parent else global_name
        functions.append(
            {
                "line": node.line,
                "column": node.column,
                "kind": node.type,
                "name": name or anonymous_name,
                "named": node.id is not None,
                "params": len(node.params),
                "in_function": outer,
            }
        )

    return sorted(functions, key=_position_key)


def describe_node(node: Node, global_name: str = "global") -> dict[str, Any]:
    """All resolver answers for a single node."""
    identifier = resolve_identifier(node)
    return {
        "line": node.line,
        "column": node.column,
        "type": node.type,
        "identifier": identifier.name if identifier else None,
        "node_name": resolve_node_name(node),
        "full_name": resolve_full_name(node),
        "partial_name": resolve_partial_name(node),
        "in_function": enclosing_function_label(node, global_name),
        "operand_of_parent": is_operand(node, node.parent) if node.parent else None,
    }


def find_nodes_at(root: Node, line: int, column: int | None = None) -> list[Node]:
    """Nodes starting at ``line`` (and ``column`` when given), outermost first."""
    return [
        node
        for node in walk(root)
        if node.line == line and (column is None or node.column == column)
    ]
