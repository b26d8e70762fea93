"""
Indentation engine.

Construct rules write an offset graph while the AST is walked; after the
walk, parenthesized expressions are adjusted, every token's expected level
is resolved through the graph, and line-leading tokens and comments are
compared against the source.
"""

from __future__ import annotations

from .check import IndentCheck
from .measure import TokenIndent, create_error_message, measure_indent
from .offsets import OffsetEdge, OffsetGraph, Resolver
from .rule import IndentRule

__all__ = [
    "IndentCheck",
    "IndentRule",
    "OffsetEdge",
    "OffsetGraph",
    "Resolver",
    "TokenIndent",
    "create_error_message",
    "measure_indent",
]
