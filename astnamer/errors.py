"""Custom exceptions for astnamer.

Contains exception classes for failure modes that require explicit
handling rather than generic error propagation. The resolver itself never
raises for unresolvable names; these cover loading and tree contracts.
"""


class AstNamerError(Exception):
    """Base class for all astnamer errors."""

    pass


class AstLoadError(AstNamerError):
    """Raised when an ESTree document cannot be read or decoded.

    Attributes:
        path: Source file the tree was loaded from, if any
    """

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class MalformedNodeError(AstLoadError):
    """Raised when a node is missing fields its declared type requires.

    This is a programming-contract violation on the parser side. We crash
    loudly instead of building a partial tree.

    Attributes:
        node_type: ESTree type tag of the offending node
        field: Name of the missing or invalid field
    """

    def __init__(self, node_type: str, field: str, detail: str = "", path: str | None = None):
        message = f"Malformed {node_type} node: field '{field}'"
        if detail:
            message = f"{message} {detail}"
        super().__init__(message, path)
        self.node_type = node_type
        self.field = field


class TreeDepthError(AstLoadError):
    """Raised when the tree nests deeper than the configured limit."""

    def __init__(self, max_depth: int, path: str | None = None):
        super().__init__(f"AST nesting exceeds max_depth={max_depth}", path)
        self.max_depth = max_depth
