"""
Module `normalizer` — case and alias correction of license expressions.

Main functions:
- normalize(expression) -> Optional[str]
    Parses the expression correcting every identifier, then renders it back,
    e.g. 'mit OR apache-2.0' -> 'MIT OR Apache-2.0'. Unknown identifiers
    become NOASSERTION.
- normalize_single(license) -> Optional[str]
- lookup_by_name(name) -> Optional[str]
"""

from typing import Optional

from .identifiers import lookup_by_name, normalize_single
from .nodes import stringify
from .parser_spdx import parse

__all__ = ["normalize", "normalize_single", "lookup_by_name"]


def normalize(expression: Optional[str]) -> Optional[str]:
    """
    Normalizes and returns back a given SPDX expression.
    Empty or blank input returns None.
    """
    if not expression or not expression.strip():
        return None
    return stringify(parse(expression, normalize_single))
