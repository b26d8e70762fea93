"""Per-file state shared by the construct rules, resolver and validator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from jsindent.config import IndentConfig
from jsindent.linter.core import LintFinding
from jsindent.source import SourceCode, Token
from .measure import TokenIndent, measure_indent
from .offsets import Level, OffsetGraph, Resolver


@dataclass
class IndentCheck:
    """Everything one indentation check of one file reads and writes."""

    source: SourceCode
    config: IndentConfig
    graph: OffsetGraph = field(init=False)
    resolver: Resolver = field(init=False)
    findings: List[LintFinding] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.graph = OffsetGraph(self.source)
        self.resolver = Resolver(self.graph, self.config)

    def measure(self, token: Token) -> TokenIndent:
        return measure_indent(self.source, token, self.config)

    def resolve(self, token: Token) -> Level:
        return self.resolver.resolve(token)

    def is_valid(self, token: Token, level: Level) -> bool:
        """Whether ``token``'s indentation matches ``level``; mixed indentation always passes."""
        actual = self.measure(token)
        if actual.mixed:
            return True
        return actual.good_chars == level * self.config.indent_size and actual.bad_chars == 0
