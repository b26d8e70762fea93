"""Adapter from the esprima parser to jsindent's Node and Token model."""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

import esprima
from esprima.error_handler import Error as EsprimaError

from .errors import ParseError
from .nodes import Node
from .source import SourceCode, Token, compute_line_starts, offset_to_position


logger = logging.getLogger(__name__)

SOURCE_TYPES = ("script", "module")

_PARSE_OPTIONS = {"range": True, "tokens": True, "comment": True}

# Position data is recomputed from ranges so every line terminator counts.
_DROPPED_FIELDS = frozenset({"type", "range", "loc"})


def _members(value: Any) -> Optional[Dict[str, Any]]:
    if isinstance(value, dict):
        return value
    if hasattr(value, "__dict__"):
        return vars(value)
    return None


def _convert(value: Any) -> Any:
    if isinstance(value, list):
        return [_convert(item) for item in value]
    members = _members(value)
    if members is None:
        return value
    node_type = members.get("type")
    node_range = members.get("range")
    if isinstance(node_type, str) and node_range is not None:
        fields = {
            key: _convert(item)
            for key, item in members.items()
            if key not in _DROPPED_FIELDS
        }
        return Node(node_type, (node_range[0], node_range[1]), fields)
    return {key: _convert(item) for key, item in members.items()}


def _build_tokens(text: str, raw_tokens: List[Any], raw_comments: List[Any], line_starts: List[int]) -> List[Token]:
    entries = []
    for raw in list(raw_tokens) + list(raw_comments):
        members = _members(raw) or {}
        start, end = members["range"]
        entries.append((start, end, members["type"], members.get("value", "")))
    entries.sort(key=lambda entry: entry[0])

    tokens = []
    for index, (start, end, token_type, value) in enumerate(entries):
        line, column = offset_to_position(line_starts, start)
        end_line, end_column = offset_to_position(line_starts, end)
        tokens.append(
            Token(
                index=index,
                type=token_type,
                value=value if isinstance(value, str) else text[start:end],
                start=start,
                end=end,
                line=line,
                column=column,
                end_line=end_line,
                end_column=end_column,
            )
        )
    return tokens


def parse(source_text: str, source_type: str = "script", path: Optional[str] = None) -> SourceCode:
    """
    Parse JavaScript source into a SourceCode token store.

    Args:
        source_text: Program text
        source_type: ``"script"`` or ``"module"``
        path: File path used in error messages

    Returns:
        SourceCode holding the AST and the merged token/comment stream

    Raises:
        ParseError: If esprima rejects the program
    """
    if source_type not in SOURCE_TYPES:
        raise ValueError(f"Unknown source type {source_type!r}")

    started = time.perf_counter()
    try:
        if source_type == "module":
            program = esprima.parseModule(source_text, _PARSE_OPTIONS)
        else:
            program = esprima.parseScript(source_text, _PARSE_OPTIONS)
    except EsprimaError as exc:
        description = getattr(exc, "description", None) or getattr(exc, "message", None) or str(exc)
        # esprima columns are 1-based.
        column = getattr(exc, "column", None)
        raise ParseError(
            f"Cannot parse JavaScript: {description}",
            path=path,
            line=getattr(exc, "lineNumber", None),
            column=column - 1 if column else column,
        ) from exc

    members = dict(_members(program) or {})
    raw_tokens = members.pop("tokens", None) or []
    raw_comments = members.pop("comments", None) or []
    members.pop("errors", None)

    line_starts = compute_line_starts(source_text)
    ast = _convert(members)
    tokens = _build_tokens(source_text, raw_tokens, raw_comments, line_starts)

    logger.debug(
        "Parsed %s as %s: %d tokens and comments in %.2f ms",
        path or "<text>",
        source_type,
        len(tokens),
        (time.perf_counter() - started) * 1000,
    )
    return SourceCode(source_text, tokens, ast, line_starts)


__all__ = ["parse", "SOURCE_TYPES"]
