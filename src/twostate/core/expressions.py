"""
Normalization of default-clause expressions.

A default clause carries an arbitrary Python expression that is evaluated
each time the generated `default()` is called. Before emission the
expression is rewritten so the declaration language's spellings work:

    true / false   ->  True / False
    Self           ->  the generated type's name
    Name::Member   ->  Name.Member   (handled by the parser, see extensions.py)
"""

from __future__ import annotations

import ast

SELF_NAME = "Self"

_LITERALS = {"true": True, "false": False}


class _DeclarationNames(ast.NodeTransformer):
    def __init__(self, type_name: str):
        self.type_name = type_name

    def visit_Name(self, node: ast.Name) -> ast.AST:
        if node.id in _LITERALS:
            return ast.copy_location(ast.Constant(value=_LITERALS[node.id]), node)
        if node.id == SELF_NAME:
            return ast.copy_location(ast.Name(id=self.type_name, ctx=node.ctx), node)
        return node


def normalize_expression(source: str, type_name: str) -> str:
    """
    Rewrite a default expression into plain Python source.

    Args:
        source: Expression text as written in the declaration
        type_name: Name of the type the expression belongs to

    Returns:
        Single-line Python expression source

    Raises:
        SyntaxError: If source is not a Python expression
    """
    tree = ast.parse(f"(\n{source}\n)", mode="eval")
    tree = _DeclarationNames(type_name).visit(tree)
    ast.fix_missing_locations(tree)
    return ast.unparse(tree.body)


def is_member_reference(expression: str, type_name: str) -> bool:
    """Whether a normalized expression is literally `TypeName.Member`."""
    try:
        node = ast.parse(expression, mode="eval").body
    except SyntaxError:
        return False
    return (
        isinstance(node, ast.Attribute)
        and isinstance(node.value, ast.Name)
        and node.value.id == type_name
    )


def is_bool_literal(expression: str) -> bool:
    """Whether a normalized expression is the literal True or False."""
    return expression in ("True", "False")
