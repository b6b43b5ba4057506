"""
Package `license_curator.services.spdx`

License-expression algebra: parsing, rendering and normalization of SPDX
expressions, plus their canonical DNF form and the merge/satisfies operations
used when aggregating and curating declared licenses.

Public API:
- parse(expression, license_visitor=None) -> Node
- stringify(node) -> str
- normalize(expression) -> Optional[str]
- normalize_single(license) -> Optional[str]
- lookup_by_name(name) -> Optional[str]
- expand(expression) -> List[List[str]]
- flatten(expression) -> List[str]
- merge(proposed, base, mode="OR") -> str
- satisfies(first, second) -> bool

None of these perform I/O.
"""

from .algebra import expand, flatten, merge, satisfies
from .nodes import NOASSERTION, Conjunction, License, NoAssertion, stringify
from .normalizer import lookup_by_name, normalize, normalize_single
from .parser_spdx import parse

__all__ = [
    "NOASSERTION",
    "Conjunction",
    "License",
    "NoAssertion",
    "expand",
    "flatten",
    "lookup_by_name",
    "merge",
    "normalize",
    "normalize_single",
    "parse",
    "satisfies",
    "stringify",
]
