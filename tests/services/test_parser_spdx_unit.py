"""
test: services/spdx/parser_spdx.py and nodes.py

Unit tests for the relaxed SPDX parser and the AST renderer.

The suite covers:
1. Parsing: precedence (AND > OR), right nesting, grouping, '+' and WITH.
2. Relaxed behaviour: malformed input becomes NoAssertion instead of raising.
3. Visitors: the default identifier correction and custom visitors.
4. Rendering: parenthesization of OR sides and the NOASSERTION sentinel.
"""

import pytest
from license_curator.services.spdx.nodes import Conjunction, License, NoAssertion, stringify
from license_curator.services.spdx.parser_spdx import _tokenize, parse

# ==================================================================================
#                                   TEST: PARSING
# ==================================================================================

@pytest.mark.parametrize("expr,expected", [
    ("MIT", License("MIT")),
    ("mit", License("MIT")),
    ("MIT ", License("MIT")),
    (" MIT", License("MIT")),
    ("MIT OR Apache-2.0", Conjunction("or", License("MIT"), License("Apache-2.0"))),
    ("MIT AND Apache-2.0", Conjunction("and", License("MIT"), License("Apache-2.0"))),
    ("mit or apache-2.0", Conjunction("or", License("MIT"), License("Apache-2.0"))),
    (
        "MIT OR (BSD-2-Clause AND GPL-2.0)",
        Conjunction("or", License("MIT"), Conjunction("and", License("BSD-2-Clause"), License("GPL-2.0"))),
    ),
    (
        "MIT OR BSD-2-Clause OR (BSD-3-Clause AND Unlicense)",
        Conjunction(
            "or",
            License("MIT"),
            Conjunction("or", License("BSD-2-Clause"),
                        Conjunction("and", License("BSD-3-Clause"), License("Unlicense"))),
        ),
    ),
    (
        "MIT AND BSD-3-Clause WITH GCC-exception-3.1 OR (CC-BY-4.0 AND Apache-2.0)",
        Conjunction(
            "or",
            Conjunction("and", License("MIT"), License("BSD-3-Clause", exception="GCC-exception-3.1")),
            Conjunction("and", License("CC-BY-4.0"), License("Apache-2.0")),
        ),
    ),
])
def test_parse_expressions(expr, expected):
    """
    Validates the tree built for plain, compound and nested expressions.
    """
    assert parse(expr) == expected


def test_parse_plus_and_exception_modifiers():
    """
    Verifies '+' (attached or standalone) and case-insensitive WITH.
    """
    assert parse("GPL-2.0+") == License("GPL-2.0", plus=True)
    assert parse("GPL-2.0 +") == License("GPL-2.0", plus=True)
    assert parse("gpl-2.0+ with classpath-exception-2.0") == License(
        "GPL-2.0", plus=True, exception="Classpath-exception-2.0"
    )


def test_parse_keeps_unknown_exception_verbatim():
    """
    Unknown exception identifiers are kept as written.
    """
    assert parse("MIT WITH Some-Custom-exception") == License("MIT", exception="Some-Custom-exception")


def test_parse_returns_node_unchanged():
    """
    An already parsed expression is passed through.
    """
    node = Conjunction("and", License("MIT"), License("ISC"))
    assert parse(node) is node


def test_parse_unknown_license_becomes_noassertion_leaf():
    """
    Unknown identifiers are replaced by NOASSERTION, dropping their modifiers.
    """
    assert parse("Junk") == License("NOASSERTION")
    assert parse("Junk+ WITH Classpath-exception-2.0") == License("NOASSERTION")
    assert parse("MIT OR Junk") == Conjunction("or", License("MIT"), License("NOASSERTION"))

# ==================================================================================
#                              TEST: RELAXED PARSING
# ==================================================================================

@pytest.mark.parametrize("expr", [
    "",
    "   ",
    "See license",
    "Junk1 OR Junk 2",
    "(MIT",
    "MIT)",
    "MIT AND",
    "OR MIT",
    "MIT WITH",
    "MIT WITH (ISC)",
    "()",
    "+",
    "MIT++",
])
def test_parse_malformed_returns_noassertion(expr):
    """
    Malformed expressions never raise; they yield the NoAssertion sentinel.
    """
    assert parse(expr) == NoAssertion()

# ==================================================================================
#                                  TEST: VISITORS
# ==================================================================================

def test_parse_with_custom_visitor():
    """
    A custom visitor receives each raw identifier and decides its spelling.
    """
    seen = []

    def visitor(identifier):
        seen.append(identifier)
        return identifier.upper()

    node = parse("foo AND (bar OR baz)", visitor)
    assert node == Conjunction("and", License("FOO"), Conjunction("or", License("BAR"), License("BAZ")))
    assert seen == ["foo", "bar", "baz"]


def test_parse_visitor_returning_none_marks_noassertion():
    """
    A visitor that rejects an identifier produces a NOASSERTION leaf.
    """
    node = parse("MIT AND ISC", lambda identifier: None if identifier == "ISC" else identifier)
    assert node == Conjunction("and", License("MIT"), License("NOASSERTION"))

# ==================================================================================
#                                 TEST: RENDERING
# ==================================================================================

@pytest.mark.parametrize("node,expected", [
    (License("MIT"), "MIT"),
    (License("GPL-2.0", plus=True), "GPL-2.0+"),
    (License("GPL-2.0", plus=True, exception="Classpath-exception-2.0"), "GPL-2.0+ WITH Classpath-exception-2.0"),
    (Conjunction("and", License("MIT"), License("Apache-2.0")), "MIT AND Apache-2.0"),
    (Conjunction("or", License("MIT"), License("Apache-2.0")), "MIT OR Apache-2.0"),
    (
        Conjunction("or", License("MIT"), Conjunction("and", License("BSD-2-Clause"), License("GPL-2.0"))),
        "MIT OR BSD-2-Clause AND GPL-2.0",
    ),
    (
        Conjunction(
            "or",
            License("MIT"),
            Conjunction("or", License("BSD-2-Clause"),
                        Conjunction("and", License("BSD-3-Clause"), License("Unlicense"))),
        ),
        "MIT OR (BSD-2-Clause OR BSD-3-Clause AND Unlicense)",
    ),
    (
        Conjunction("and", Conjunction("or", License("MIT"), License("ISC")), License("GPL-3.0")),
        "(MIT OR ISC) AND GPL-3.0",
    ),
    (NoAssertion(), "NOASSERTION"),
    (License("MIT", exception="NOASSERTION"), "NOASSERTION"),
])
def test_stringify(node, expected):
    """
    Validates the canonical rendering of each node shape.
    """
    assert stringify(node) == expected


def test_parse_then_stringify_corrects_case():
    """
    Parsing and rendering back corrects the case of every identifier.
    """
    assert stringify(parse("mit OR apache-2.0")) == "MIT OR Apache-2.0"


@pytest.mark.parametrize("expr", [
    "MIT OR (BSD-2-Clause OR BSD-3-Clause AND Unlicense)",
    "(MIT OR ISC) AND (GPL-3.0 OR Apache-2.0)",
    "GPL-2.0+ WITH Classpath-exception-2.0 AND MIT",
])
def test_stringify_reparses_to_same_tree(expr):
    """
    The rendered string parses back into the tree it came from.
    """
    node = parse(expr)
    assert parse(stringify(node)) == node


def test_tokenize_splits_parentheses():
    assert _tokenize("(MIT OR ISC)AND GPL-2.0+") == ["(", "MIT", "OR", "ISC", ")", "AND", "GPL-2.0+"]
