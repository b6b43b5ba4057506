"""
This module implements a relaxed parser for SPDX license expressions.
It constructs an Abstract Syntax Tree (AST) composed of License, Conjunction
and NoAssertion nodes (see `nodes.py`).

Supported syntax:
- Logical operators: AND, OR (AND has higher precedence), case-insensitive.
- Grouping: Parentheses `()`.
- Modifiers: trailing `+` (or later version) and `WITH <exception>`.

Parsing never raises to the caller: malformed input yields NoAssertion().
Every license identifier goes through a visitor while its leaf is built; the
default visitor corrects the identifier against the SPDX table and unknown
identifiers become NOASSERTION leaves.
"""

import logging
from typing import Callable, List, Optional

from .identifiers import normalize_exception, normalize_single
from .nodes import AND, NOASSERTION, OR, Conjunction, License, NoAssertion, Node

logger = logging.getLogger(__name__)

LicenseVisitor = Callable[[str], Optional[str]]

_KEYWORDS = {"AND", "OR", "WITH"}


class SpdxSyntaxError(ValueError):
    """
    Raised internally when an expression does not follow the grammar.
    """


def _tokenize(expr: str) -> List[str]:
    """
    Splits the expression into words and parentheses.
    A standalone '+' is kept as its own token.
    """
    tokens: List[str] = []
    buf: List[str] = []
    for ch in expr:
        if ch in "()":
            if buf:
                tokens.append("".join(buf))
                buf = []
            tokens.append(ch)
        elif ch.isspace():
            if buf:
                tokens.append("".join(buf))
                buf = []
        else:
            buf.append(ch)
    if buf:
        tokens.append("".join(buf))
    return tokens


def _is_keyword(token: Optional[str], keyword: str) -> bool:
    return token is not None and token.upper() == keyword


def _is_identifier(token: Optional[str]) -> bool:
    return token is not None and token not in "()" and token.upper() not in _KEYWORDS


def _make_leaf(identifier: str, plus: bool, exception: Optional[str], license_visitor: LicenseVisitor) -> License:
    corrected = license_visitor(identifier)
    if not corrected:
        return License(NOASSERTION)
    return License(corrected, plus, normalize_exception(exception))


def _parse_tokens(tokens: List[str], license_visitor: LicenseVisitor) -> Node:
    """
    Recursive descent with AND > OR precedence. Chains of the same operator
    nest to the right: 'A OR B OR C' is 'A OR (B OR C)'.
    """
    idx = 0

    def peek() -> Optional[str]:
        return tokens[idx] if idx < len(tokens) else None

    def consume() -> Optional[str]:
        nonlocal idx
        t = peek()
        idx += 1
        return t

    def parse_clause() -> Node:
        t = consume()
        if t is None:
            raise SpdxSyntaxError("unexpected end of expression")
        if t == "(":
            node = parse_or()
            if consume() != ")":
                raise SpdxSyntaxError("missing closing parenthesis")
            return node
        if not _is_identifier(t) or t == "+":
            raise SpdxSyntaxError(f"unexpected token {t!r}")
        plus = t.endswith("+")
        identifier = t[:-1] if plus else t
        if not identifier or "+" in identifier:
            raise SpdxSyntaxError(f"invalid license identifier {t!r}")
        if not plus and peek() == "+":
            consume()
            plus = True
        exception = None
        if _is_keyword(peek(), "WITH"):
            consume()
            exception = consume()
            if not _is_identifier(exception):
                raise SpdxSyntaxError("WITH must be followed by an exception identifier")
        return _make_leaf(identifier, plus, exception, license_visitor)

    def parse_and() -> Node:
        left = parse_clause()
        if _is_keyword(peek(), "AND"):
            consume()
            return Conjunction(AND, left, parse_and())
        return left

    def parse_or() -> Node:
        left = parse_and()
        if _is_keyword(peek(), "OR"):
            consume()
            return Conjunction(OR, left, parse_or())
        return left

    node = parse_or()
    if peek() is not None:
        raise SpdxSyntaxError(f"unexpected token {peek()!r}")
    return node


def parse(expression, license_visitor: Optional[LicenseVisitor] = None) -> Node:
    """
    Turns an expression into an AST and corrects each leaf.

    Args:
        expression: SPDX expression string, or an already parsed node (returned as is).
        license_visitor: Optional. Maps each raw identifier to its corrected form,
            or None when unknown. Defaults to `normalize_single`.

    Returns:
        Node: the AST, or NoAssertion() when the expression cannot be parsed.
    """
    if not isinstance(expression, str):
        return expression
    license_visitor = license_visitor or normalize_single
    try:
        tokens = _tokenize(expression)
        if not tokens:
            raise SpdxSyntaxError("empty expression")
        return _parse_tokens(tokens, license_visitor)
    except SpdxSyntaxError as e:
        logger.debug("Unparsable license expression %r: %s", expression, e)
        return NoAssertion()
