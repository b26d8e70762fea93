"""Offset graph and the resolver that turns offset chains into levels.

Every token and comment owns exactly one :class:`OffsetEdge` saying how many
indent levels it sits from its anchor token (or from column 0 when the
anchor is ``None``). Construct rules overwrite edges while the AST is walked;
the :class:`Resolver` evaluates them once the walk is over.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from fractions import Fraction
from typing import Dict, Iterable, List, Optional, Set, Union

from jsindent.config import IndentConfig
from jsindent.errors import InternalError
from jsindent.source import SourceCode, Token
from .measure import measure_indent


logger = logging.getLogger(__name__)

Level = Union[int, Fraction]


@dataclass(frozen=True)
class OffsetEdge:
    multiplier: Level
    anchor: Optional[Token] = None


ROOT_EDGE = OffsetEdge(0, None)


class OffsetGraph:
    """Mutable per-file table of offset edges, ignored tokens and parameter parens."""

    def __init__(self, source: SourceCode):
        self.source = source
        self._tokens = source.tokens_and_comments
        self._edges: List[OffsetEdge] = [ROOT_EDGE] * len(self._tokens)
        self._ignored: Set[int] = set()
        self._parameter_parens: Set[int] = set()

    def __len__(self) -> int:
        return len(self._edges)

    def _slot(self, token: Token) -> int:
        index = token.index
        if not 0 <= index < len(self._tokens) or self._tokens[index] is not token:
            raise InternalError("Token has no offset entry", token=token)
        return index

    def edge(self, token: Token) -> OffsetEdge:
        return self._edges[self._slot(token)]

    def set_offset(self, token: Token, anchor: Optional[Token], multiplier: Level) -> None:
        """Offset ``token`` by ``multiplier`` levels from ``anchor``.

        Tokens that share a line with their anchor are aligned to it instead.
        """
        if anchor is not None and token.line == anchor.line:
            self.match_offset(anchor, token)
        else:
            self._edges[self._slot(token)] = OffsetEdge(multiplier, anchor)

    def set_offsets(self, tokens: Iterable[Token], anchor: Optional[Token], multiplier: Level) -> None:
        for token in tokens:
            self.set_offset(token, anchor, multiplier)

    def match_offset(self, anchor: Token, token: Token) -> None:
        """Give ``token`` the same indentation as ``anchor``."""
        if anchor is not token:
            self._edges[self._slot(token)] = OffsetEdge(0, anchor)

    def shift_offset(self, token: Token, delta: Level) -> None:
        edge = self.edge(token)
        self._edges[token.index] = OffsetEdge(edge.multiplier + delta, edge.anchor)

    def ignore(self, token: Token) -> None:
        """Exempt ``token`` from validation if it begins its line."""
        if self.source.first_token_of_line(token) is token:
            self._ignored.add(self._slot(token))

    def is_ignored(self, token: Token) -> bool:
        return token.index in self._ignored

    def mark_parameter_parens(self, *tokens: Token) -> None:
        for token in tokens:
            self._parameter_parens.add(self._slot(token))

    def is_parameter_paren(self, token: Token) -> bool:
        return token.index in self._parameter_parens

    def edge_count(self) -> int:
        """Number of tokens whose edge differs from the initial one."""
        return sum(1 for edge in self._edges if edge is not ROOT_EDGE)


class Resolver:
    """
    Lazily computes and memoizes the expected level of each token.

    An ignored token resolves to its own measured indentation; any other
    token resolves to its multiplier plus its anchor's level.
    """

    def __init__(self, graph: OffsetGraph, config: IndentConfig):
        self.graph = graph
        self.config = config
        self._memo: Dict[int, Level] = {}

    def _own_level(self, token: Token) -> Level:
        if not self.config.indent_size:
            return 0
        actual = measure_indent(self.graph.source, token, self.config)
        return Fraction(actual.good_chars, self.config.indent_size)

    def resolve(self, token: Token) -> Level:
        cached = self._memo.get(token.index)
        if cached is not None:
            return cached

        chain: List[Token] = []
        current: Optional[Token] = token
        level: Level = 0
        while current is not None:
            known = self._memo.get(current.index)
            if known is not None:
                level = known
                break
            if self.graph.is_ignored(current):
                level = self._own_level(current)
                self._memo[current.index] = level
                break
            chain.append(current)
            if len(chain) > len(self.graph):
                raise InternalError("Offset chain does not terminate", token=token)
            current = self.graph.edge(current).anchor

        for link in reversed(chain):
            level = self.graph.edge(link).multiplier + level
            self._memo[link.index] = level
        return self._memo[token.index]
