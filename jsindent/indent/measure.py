"""Measurement of the indentation actually present before a token."""

from __future__ import annotations

from dataclasses import dataclass

from jsindent.config import IndentConfig, IndentStyle
from jsindent.source import SourceCode, Token


@dataclass(frozen=True)
class TokenIndent:
    """Leading whitespace of a token's line, split by character."""
    spaces: int
    tabs: int
    good_chars: int
    bad_chars: int

    @property
    def mixed(self) -> bool:
        return bool(self.spaces and self.tabs)


def measure_indent(source: SourceCode, token: Token, config: IndentConfig) -> TokenIndent:
    """Count the spaces and tabs that open the line ``token`` starts on."""
    prefix = source.text_before(token)
    indent = prefix[:len(prefix) - len(prefix.lstrip(" \t"))]
    spaces = indent.count(" ")
    tabs = indent.count("\t")
    if config.indent_style == IndentStyle.TABS:
        return TokenIndent(spaces=spaces, tabs=tabs, good_chars=tabs, bad_chars=spaces)
    return TokenIndent(spaces=spaces, tabs=tabs, good_chars=spaces, bad_chars=tabs)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def create_error_message(expected_chars: int, actual: TokenIndent, config: IndentConfig) -> str:
    """
    Build the diagnostic text for a mismatched token.

    The found amount is abbreviated to a bare number when it uses the
    configured character, e.g. ``Expected indentation of 4 spaces but
    found 2.``
    """
    expected = _plural(expected_chars, config.unit_name)
    spaces_expected = config.indent_style == IndentStyle.SPACES
    if actual.spaces > 0:
        found = str(actual.spaces) if spaces_expected else _plural(actual.spaces, "space")
    elif actual.tabs > 0:
        found = _plural(actual.tabs, "tab") if spaces_expected else str(actual.tabs)
    else:
        found = "0"
    return f"Expected indentation of {expected} but found {found}."
