"""
Abstract syntax tree of an SPDX license expression and its string rendering.

A parsed expression is built from three node types:
- License: a single identifier, optionally "or later" (+) and with a WITH exception.
- Conjunction: two sub-expressions joined by "and" or "or".
- NoAssertion: the sentinel produced for input that could not be understood.

Nodes are frozen; every operation in the algebra builds new values instead of
editing a tree in place.
"""

from dataclasses import dataclass
from typing import Optional, Union

NOASSERTION = "NOASSERTION"

AND = "and"
OR = "or"


@dataclass(frozen=True)
class License:
    """
    Leaf node holding one license identifier.
    """
    license: str
    plus: bool = False
    exception: Optional[str] = None


@dataclass(frozen=True)
class Conjunction:
    """
    Binary node joining two expressions with AND or OR (stored lowercase).
    """
    conjunction: str
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class NoAssertion:
    """
    Sentinel for an expression that is unknown or could not be parsed.
    """


Node = Union[License, Conjunction, NoAssertion]


def is_noassertion(expression) -> bool:
    """
    True for the NOASSERTION string, the NoAssertion node and a bare NOASSERTION leaf.
    """
    if isinstance(expression, str):
        return expression.strip() == NOASSERTION
    if isinstance(expression, NoAssertion):
        return True
    return isinstance(expression, License) and expression.license == NOASSERTION and not expression.exception


def stringify(node: Node) -> str:
    """
    Renders an AST back into an SPDX expression.

    Any side whose own conjunction is OR is wrapped in parentheses so the
    string parses back into the same tree.
    """
    if isinstance(node, NoAssertion):
        return NOASSERTION
    if isinstance(node, License):
        if node.exception == NOASSERTION:
            return NOASSERTION
        text = f"{node.license}{'+' if node.plus else ''}"
        if node.exception:
            text += f" WITH {node.exception}"
        return text
    left = _stringify_side(node.left)
    right = _stringify_side(node.right)
    return f"{left} {node.conjunction.upper()} {right}"


def _stringify_side(node: Node) -> str:
    if isinstance(node, Conjunction) and node.conjunction == OR:
        return f"({stringify(node)})"
    return stringify(node)
