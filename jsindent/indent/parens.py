"""Indentation of parenthesized expressions, applied after the AST walk."""

from __future__ import annotations

from typing import List, Tuple

from jsindent.errors import InternalError
from jsindent.source import Token
from .check import IndentCheck


def paren_pairs(tokens: List[Token]) -> List[Tuple[Token, Token]]:
    """Pair ``(`` and ``)`` tokens, ordered by closing paren."""
    stack: List[Token] = []
    pairs: List[Tuple[Token, Token]] = []
    for token in tokens:
        if token.is_punctuator("("):
            stack.append(token)
        elif token.is_punctuator(")"):
            if not stack:
                raise InternalError("Unbalanced closing parenthesis", token=token)
            pairs.append((stack.pop(), token))
    return pairs


def add_parens_indent(check: IndentCheck) -> None:
    """
    Offset the contents of grouping parentheses from the opening paren.

    Parameter lists and call arguments are left alone. Inside a pair, only
    tokens still anchored outside the parens are moved, so relationships
    between the parenthesized tokens survive. Outer pairs are handled before
    the pairs they enclose.
    """
    graph = check.graph
    tokens = check.source.tokens_and_comments
    for left, right in reversed(paren_pairs(tokens)):
        if not graph.is_parameter_paren(left) and not graph.is_parameter_paren(right):
            for token in tokens[left.index + 1:right.index]:
                anchor = graph.edge(token).anchor
                if anchor is None or not left.index < anchor.index < right.index:
                    graph.set_offset(token, left, 1)
        graph.match_offset(left, right)
