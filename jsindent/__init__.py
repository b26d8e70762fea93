"""
jsindent: indentation checking and fixing for JavaScript.

The public entry points are :class:`IndentLinter` for linting and fixing
documents and :class:`IndentConfig` for building options.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import IndentConfig, IndentStyle, discover_config, load_config
from .errors import ConfigError, InternalError, JsIndentError, ParseError
from .linter import IndentLinter, LintFinding, LintResult

__all__ = [
    "__version__",
    "IndentConfig",
    "IndentStyle",
    "IndentLinter",
    "LintFinding",
    "LintResult",
    "JsIndentError",
    "ParseError",
    "ConfigError",
    "InternalError",
    "load_config",
    "discover_config",
]
