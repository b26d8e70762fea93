"""Token store over a parsed JavaScript file.

Every token and comment of a file is held once, in source order, in
``SourceCode.tokens_and_comments``; a token's ``index`` is its position in
that list and doubles as its identity for per-file tables.
"""

from __future__ import annotations

import re
from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .nodes import Node


COMMENT_TYPES = frozenset({"Line", "Block"})

LINE_BREAK = re.compile(r"\r\n|[\r\n\u2028\u2029]")


@dataclass(frozen=True, eq=False)
class Token:
    """An immutable lexical token or comment with its source position."""

    index: int
    type: str
    value: str
    start: int
    end: int
    line: int
    column: int
    end_line: int
    end_column: int

    @property
    def range(self) -> Tuple[int, int]:
        return (self.start, self.end)

    @property
    def is_comment(self) -> bool:
        return self.type in COMMENT_TYPES

    def is_punctuator(self, value: str) -> bool:
        return self.type == "Punctuator" and self.value == value

    def __repr__(self) -> str:
        return f"Token({self.type} {self.value!r} @{self.line}:{self.column})"


Locatable = Union[Node, Token]


def compute_line_starts(text: str) -> List[int]:
    """Offsets at which each line of ``text`` starts (line 1 first)."""
    return [0] + [match.end() for match in LINE_BREAK.finditer(text)]


def offset_to_position(line_starts: Sequence[int], offset: int) -> Tuple[int, int]:
    """Convert a character offset into a 1-based line and 0-based column."""
    line_index = bisect_right(line_starts, offset) - 1
    return line_index + 1, offset - line_starts[line_index]


class SourceCode:
    """
    Source text, AST and token/comment stream of a single file.

    Lookup methods mirror the token-store helpers lint rules expect:
    first/last token of a node, the token before/after a node or token,
    tokens between two nodes, and the first token of a line. Unless
    stated otherwise, lookups return code tokens and skip comments.
    """

    def __init__(self, text: str, tokens_and_comments: List[Token], ast: Node, line_starts: List[int]):
        self.text = text
        self.ast = ast
        self.tokens_and_comments = tokens_and_comments
        self.tokens = [token for token in tokens_and_comments if not token.is_comment]
        self.comments = [token for token in tokens_and_comments if token.is_comment]
        self.line_starts = line_starts
        self._token_starts = [token.start for token in self.tokens]
        self._first_by_line = self._index_first_tokens()

    def _index_first_tokens(self) -> Dict[int, Token]:
        # A token that ends on a later line is also the first token of that line.
        first_by_line: Dict[int, Token] = {}
        for token in self.tokens_and_comments:
            first_by_line.setdefault(token.line, token)
            first_by_line.setdefault(token.end_line, token)
        return first_by_line

    def line_start(self, line: int) -> int:
        return self.line_starts[line - 1]

    def position(self, offset: int) -> Tuple[int, int]:
        return offset_to_position(self.line_starts, offset)

    def first_token(self, node: Locatable, skip: int = 0) -> Optional[Token]:
        index = bisect_left(self._token_starts, node.range[0]) + skip
        if index < len(self.tokens) and self.tokens[index].start < node.range[1]:
            return self.tokens[index]
        return None

    def last_token(self, node: Locatable, skip: int = 0) -> Optional[Token]:
        index = bisect_left(self._token_starts, node.range[1]) - 1 - skip
        if index >= 0 and self.tokens[index].start >= node.range[0]:
            return self.tokens[index]
        return None

    def token_before(self, node: Locatable, skip: int = 0) -> Optional[Token]:
        index = bisect_left(self._token_starts, node.range[0]) - 1 - skip
        return self.tokens[index] if index >= 0 else None

    def token_after(self, node: Locatable, skip: int = 0) -> Optional[Token]:
        index = bisect_left(self._token_starts, node.range[1]) + skip
        return self.tokens[index] if index < len(self.tokens) else None

    def tokens_between(self, left: Locatable, right: Locatable) -> List[Token]:
        start = bisect_left(self._token_starts, left.range[1])
        stop = bisect_left(self._token_starts, right.range[0])
        return self.tokens[start:stop]

    def tokens_and_comments_of(self, node: Optional[Node]) -> List[Token]:
        """All tokens and comments from a node's first to last token."""
        if node is None:
            return self.tokens_and_comments
        first = self.first_token(node)
        last = self.last_token(node)
        if first is None or last is None:
            return []
        return self.tokens_and_comments[first.index:last.index + 1]

    def first_token_of_line(self, token: Token) -> Token:
        return self._first_by_line[token.line]

    def text_before(self, token: Token) -> str:
        """Text between the start of the token's line and the token."""
        return self.text[token.start - token.column:token.start]


def sorted_index(tokens: Sequence[Token], token: Token) -> int:
    """
    Insertion index of ``token`` in a contiguous, source-ordered slice.

    Every token list handled by the rules is a contiguous slice of
    ``SourceCode.tokens_and_comments``, so the position follows from the
    dense indexes directly; tokens outside the slice clamp to its ends.
    """
    if not tokens:
        return 0
    return max(0, min(len(tokens), token.index - tokens[0].index))
