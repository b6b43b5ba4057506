"""
Module `algebra` — canonical forms and combination of license expressions.

Every expression can be expanded into disjunctive normal form (DNF): a list of
AND-clauses that are OR'd together. Each clause is the sorted list of its leaf
strings (e.g. 'GPL-2.0+ WITH Classpath-exception-2.0'), and the outer list is
de-duplicated and sorted, so logically identical expressions expand to the
same value whatever their parenthesization or operand order.

Public functions:
- expand(expression) -> List[List[str]]
- flatten(expression) -> List[str]
- merge(proposed, base, mode="OR") -> str
- satisfies(first, second) -> bool

NOASSERTION is the weakest fact: merge always lets a concrete expression
replace it, and a clause mentioning it never satisfies anything.
"""

from typing import List, Set

from .nodes import AND, NOASSERTION, OR, License, NoAssertion, Node, is_noassertion, stringify
from .parser_spdx import parse

MERGE_MODES = ("OR", "AND")


def _expand_inner(node: Node) -> List[Set[str]]:
    if isinstance(node, NoAssertion):
        return [{NOASSERTION}]
    if isinstance(node, License):
        return [{stringify(node)}]
    left = _expand_inner(node.left)
    right = _expand_inner(node.right)
    if node.conjunction == OR:
        return left + right
    if node.conjunction == AND:
        return [l | r for l in left for r in right]
    raise ValueError(f"Unknown conjunction: {node.conjunction}")


def _dedupe(clauses) -> List[List[str]]:
    unique: List[List[str]] = []
    for clause in clauses:
        members = sorted(set(clause))
        if members and members not in unique:
            unique.append(members)
    return unique


def expand(expression) -> List[List[str]]:
    """
    Expands an expression into the AND-clauses that, OR'd together, are
    equivalent to the input expression.

    Example:
        '(MIT OR ISC) AND GPL-3.0' -> [['GPL-3.0', 'ISC'], ['GPL-3.0', 'MIT']]
    """
    if not expression:
        return []
    return sorted(_dedupe(_expand_inner(parse(expression))))


def flatten(expression) -> List[str]:
    """
    Returns every license mentioned in the expression, sorted, regardless of AND/OR.
    """
    return sorted({member for clause in expand(expression) for member in clause})


def _clause_sort_key(clause: str):
    # single-license clauses before parenthesized ones
    return clause.startswith("("), clause


def _stringify_or_ands(clauses) -> str:
    unique = _dedupe(clauses)
    if len(unique) == 1:
        return " AND ".join(unique[0])
    rendered = [f"({' AND '.join(members)})" if len(members) > 1 else members[0] for members in unique]
    return " OR ".join(sorted(rendered, key=_clause_sort_key))


def merge(proposed, base, mode: str = "OR"):
    """
    Merges the proposed expression into the base expression.

    Args:
        proposed: the new license fact (string or parsed node).
        base: the existing, aggregated expression (string or parsed node).
        mode: "OR" adds the proposed alternatives missing from base (facts
            observed independently, e.g. by different tools); "AND" requires
            both to hold and crosses every base clause with every proposed one.

    Returns:
        The merged expression. A missing or NOASSERTION side returns the other
        side unchanged.

    Raises:
        ValueError: if `mode` is neither "OR" nor "AND".
    """
    if not base:
        return proposed
    if not proposed:
        return base
    if is_noassertion(parse(base)):
        return proposed
    if is_noassertion(parse(proposed)):
        return base

    mode = (mode or "OR").upper()
    if mode not in MERGE_MODES:
        raise ValueError(f"Unknown merge mode: {mode}")

    base_expanded = expand(base)
    proposed_expanded = expand(proposed)
    if mode == "AND":
        elements = [b + p for b in base_expanded for p in proposed_expanded]
    else:
        elements = base_expanded + [p for p in proposed_expanded if p not in base_expanded]
    return _stringify_or_ands(elements)


def satisfies(first, second) -> bool:
    """
    Checks whether the first expression satisfies the second: some way of
    complying with `first` (one of its AND-clauses) is fully allowed by one of
    the clauses of `second`.

    Examples:
        satisfies('MIT', 'MIT OR Apache-2.0') -> True
        satisfies('MIT AND Apache-2.0', 'MIT') -> False
    """
    second_clauses = [set(clause) for clause in expand(second)]
    for clause in expand(first):
        if NOASSERTION in clause:
            continue
        if any(set(clause) <= allowed for allowed in second_clauses):
            return True
    return False
