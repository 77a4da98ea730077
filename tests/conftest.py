"""Pytest configuration and fixtures.

ESTree documents are written the way espree emits them. The ``es`` fixture
builds small inline documents; ``server_ast_path`` points at a full
document for tests/fixtures/estree/server.js.
"""
import json
import os
from pathlib import Path

import pytest

from astnamer.loader import build_tree

FIXTURES = Path(__file__).parent / "fixtures" / "estree"


class ES:
    """Builders for raw ESTree dicts."""

    @staticmethod
    def ident(name):
        return {"type": "Identifier", "name": name}

    @staticmethod
    def this():
        return {"type": "ThisExpression"}

    @staticmethod
    def literal(value):
        return {"type": "Literal", "value": value, "raw": json.dumps(value)}

    @staticmethod
    def member(obj, prop, computed=False):
        return {"type": "MemberExpression", "object": obj, "property": prop, "computed": computed, "optional": False}

    @classmethod
    def chain(cls, *names):
        """``chain("a", "b", "c")`` is ``a.b.c``."""
        node = cls.ident(names[0])
        for name in names[1:]:
            node = cls.member(node, cls.ident(name))
        return node

    @staticmethod
    def call(callee, *args):
        return {"type": "CallExpression", "callee": callee, "arguments": list(args), "optional": False}

    @staticmethod
    def function(body_statements, name=None, params=(), kind="FunctionExpression"):
        return {
            "type": kind,
            "id": {"type": "Identifier", "name": name} if name else None,
            "params": list(params),
            "body": {"type": "BlockStatement", "body": list(body_statements)},
            "generator": False,
            "async": False,
        }

    @staticmethod
    def arrow(body, params=()):
        return {
            "type": "ArrowFunctionExpression",
            "id": None,
            "params": list(params),
            "body": body,
            "generator": False,
            "async": False,
            "expression": body.get("type") != "BlockStatement",
        }

    @staticmethod
    def stmt(expression):
        return {"type": "ExpressionStatement", "expression": expression}

    @staticmethod
    def var(name, init, kind="var"):
        return {
            "type": "VariableDeclaration",
            "kind": kind,
            "declarations": [
                {"type": "VariableDeclarator", "id": {"type": "Identifier", "name": name}, "init": init}
            ],
        }

    @staticmethod
    def assign(left, right, operator="="):
        return {"type": "AssignmentExpression", "operator": operator, "left": left, "right": right}

    @staticmethod
    def conditional(test, consequent, alternate):
        return {"type": "ConditionalExpression", "test": test, "consequent": consequent, "alternate": alternate}

    @staticmethod
    def array(*elements):
        return {"type": "ArrayExpression", "elements": list(elements)}

    @staticmethod
    def prop(key, value):
        return {
            "type": "Property",
            "key": key,
            "value": value,
            "kind": "init",
            "computed": False,
            "method": False,
            "shorthand": False,
        }

    @staticmethod
    def obj(*properties):
        return {"type": "ObjectExpression", "properties": list(properties)}

    @staticmethod
    def program(*body):
        return {"type": "Program", "sourceType": "script", "body": list(body)}


@pytest.fixture
def es():
    """Raw ESTree builders."""
    return ES


@pytest.fixture
def build():
    """Build a typed tree from a raw ESTree dict."""
    return build_tree


@pytest.fixture
def server_ast_path():
    return FIXTURES / "server.ast.json"


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Run in an empty directory with no ASTNAMER_* overrides."""
    for key in list(os.environ):
        if key.startswith("ASTNAMER_") and not key.startswith("ASTNAMER_LOG"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    return tmp_path
