"""Node name resolution for ESTree trees.

Recovers human-meaningful names from syntax nodes: the identifier a node
refers to, dotted names of member-call chains, the name of the enclosing
function, and whether a node flows into a containing expression.

All functions are pure and stateless. They never mutate the tree and never
raise for unresolvable input; absence is signalled with sentinels:

- resolve_identifier / resolve_enclosing_function_name: None
- resolve_node_name: "" (named-but-unknown)
- resolve_partial_name: None, which callers must keep apart from ""
- is_operand: True for containing kinds we do not know (fail-open)

This is NOT scope analysis. Nothing here looks at bindings, hoisting or
shadowing; only the local shape of the tree and its parent links.
"""

from astnamer.nodes import (
    FUNCTION_TYPES,
    ArrayExpression,
    ArrowFunctionExpression,
    AssignmentExpression,
    CallExpression,
    ConditionalExpression,
    FunctionExpression,
    Identifier,
    MemberExpression,
    Node,
    Property,
    ThisExpression,
    VariableDeclarator,
)
from astnamer.utils.logging import logger


def resolve_identifier(node: Node) -> Identifier | None:
    """Get the identifier a node most directly names.

    Calls resolve to their callee. A member access resolves to its property
    (``a.b`` -> ``b``), or to its object when computed (``a[b]`` -> ``a``),
    since the index of a bracket access is not a name. Only one member level
    is unwrapped; use resolve_full_name for whole chains.
    """
    if isinstance(node, CallExpression):
        node = node.callee

    if isinstance(node, MemberExpression):
        node = node.object if node.computed else node.property

    if not isinstance(node, Identifier):
        return None

    return node


def resolve_node_name(node: Node) -> str:
    """Get the name of the node, ``"this"`` for this, ``""`` if unnamed."""
    if isinstance(node, ThisExpression):
        return "this"

    identifier = resolve_identifier(node)
    return identifier.name if identifier else ""


def resolve_full_name(func: Node) -> str:
    """Get the dotted name of a call or member chain.

    ``a.b.c()`` and ``a.b.c`` both give ``"a.b.c"``.

    Computed access is not special-cased. ``a[i]`` gives ``"a.i"`` and a
    property that is not an identifier contributes an empty segment
    (``a[0].b`` gives ``"a..b"``). A base that is not an identifier (call
    result, ``this``) contributes nothing, so the name may start mid-chain.
    """
    if isinstance(func, CallExpression):
        func = func.callee

    # Collected innermost first, reversed below.
    names = []
    while isinstance(func, MemberExpression):
        prop = func.property
        names.append(prop.name if isinstance(prop, Identifier) else "")
        func = func.object

    if isinstance(func, Identifier):
        names.append(func.name)

    names.reverse()
    return ".".join(names)


def resolve_partial_name(func: Node) -> str | None:
    """Get the last segment of a call or member name.

    Member access is prefixed with ``.``: ``a.b.c()`` gives ``".c"`` while
    ``f()`` gives ``"f"``. Returns None, not ``""``, when nothing resolves.
    """
    if isinstance(func, CallExpression):
        func = func.callee

    is_member = isinstance(func, MemberExpression)
    identifier = resolve_identifier(func)
    if identifier is None:
        return None

    return ("." if is_member else "") + identifier.name


def resolve_enclosing_function_name(node: Node) -> Node | None:
    """Get the node naming the closest function around ``node``.

    The walk starts at ``node`` itself, so a function node yields its own
    name. Named functions return their ``id``. Anonymous functions fall back
    to what they are assigned to: the declarator id for
    ``var bar = function () {}``, the assignment target for
    ``exports.bar = function () {}`` (which can be a MemberExpression).

    Returns None at module top level or when the anonymous function is not
    directly assigned.
    """
    func = node
    while func is not None and not isinstance(func, FUNCTION_TYPES):
        func = func.parent

    if func is None:
        logger.trace("No enclosing function for {type} node", type=node.type)
        return None

    if func.id is not None:
        return func.id

    parent = func.parent
    if isinstance(parent, VariableDeclarator):
        return parent.id
    if isinstance(parent, AssignmentExpression):
        return parent.left

    return None


def _contains(items: list, node: Node) -> bool:
    return any(item is node for item in items)


def is_operand(node: Node, containing_expr: Node) -> bool:
    """Check whether ``node`` carries data into or through ``containing_expr``.

    Used by flow-style analyses to decide whether a value reaches the
    expression. Comparison is by identity: a structurally identical node at
    another position does not count.

    Call arguments, assignment right-hand sides, declarator initialisers,
    property values, array elements, conditional branches (not the test) and
    arrow bodies are operands. A function expression has none. Unknown
    containing kinds pass everything through.
    """
    if isinstance(containing_expr, CallExpression):
        return _contains(containing_expr.arguments, node)

    if isinstance(containing_expr, AssignmentExpression):
        return containing_expr.right is node

    if isinstance(containing_expr, VariableDeclarator):
        return containing_expr.init is node

    if isinstance(containing_expr, Property):
        return containing_expr.value is node

    if isinstance(containing_expr, ArrayExpression):
        return _contains(containing_expr.elements, node)

    if isinstance(containing_expr, FunctionExpression):
        # Nothing in a function expression flows anywhere at its definition site.
        return False

    if isinstance(containing_expr, ConditionalExpression):
        return node is containing_expr.consequent or node is containing_expr.alternate

    if isinstance(containing_expr, ArrowFunctionExpression):
        return containing_expr.body is node

    return True
