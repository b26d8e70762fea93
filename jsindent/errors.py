"""Errors raised by jsindent.

Three things can go wrong while checking a file: the text is not valid
JavaScript (:class:`ParseError`), the indentation options are malformed
(:class:`ConfigError`), or the engine breaks one of its own invariants
(:class:`InternalError`). Only the first two are user errors; the linter
collects parse errors per file, the CLI turns config errors into exit code 2,
and internal errors always propagate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class ErrorLocation:
    """A position in a JavaScript file: 1-based line, 0-based column."""
    path: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None

    def describe(self) -> Optional[str]:
        """``path:line:column`` with missing trailing parts left out."""
        parts = [self.path] if self.path else []
        if self.line is not None:
            parts.append(str(self.line))
            if self.column is not None:
                parts.append(str(self.column))
        return ":".join(parts) or None


class JsIndentError(Exception):
    """Base class for all errors raised by jsindent."""

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.location = ErrorLocation(path=path, line=line, column=column)
        if hint is not None:
            self.hint = hint

    @property
    def path(self) -> Optional[str]:
        return self.location.path

    @path.setter
    def path(self, value: Optional[str]) -> None:
        self.location.path = value

    @property
    def line(self) -> Optional[int]:
        return self.location.line

    @property
    def column(self) -> Optional[int]:
        return self.location.column

    def format(self) -> str:
        """
        Render the error the way findings are rendered.

        ``broken.js:3:7: Cannot parse JavaScript: Unexpected token ) [PARSE_ERROR]``
        """
        text = f"{self.message} [{self.code}]" if self.code else self.message
        where = self.location.describe()
        if where:
            text = f"{where}: {text}"
        if self.hint:
            text = f"{text} (hint: {self.hint})"
        return text


class ParseError(JsIndentError):
    """Raised when esprima rejects the source text."""

    code = "PARSE_ERROR"


class ConfigError(JsIndentError):
    """Raised when indentation options fail validation."""

    code = "CONFIG_ERROR"


class InternalError(JsIndentError):
    """Raised when the offset graph or resolver reaches an impossible state.

    Pass the token being processed as ``token`` to locate the error at its
    position. This is a defect in jsindent, never a style finding.
    """

    code = "INTERNAL_ERROR"

    def __init__(self, message: str, *, token: Any = None, **kwargs: Any) -> None:
        if token is not None:
            message = f"{message} at {token.value!r}"
            kwargs.setdefault("line", token.line)
            kwargs.setdefault("column", token.column)
        super().__init__(message, **kwargs)


__all__ = [
    "JsIndentError",
    "ParseError",
    "ConfigError",
    "InternalError",
    "ErrorLocation",
]
