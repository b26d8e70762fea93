"""
Linter framework for jsindent.

Rules receive a parsed document through :class:`LintContext` and return
:class:`LintFinding` objects, optionally carrying a :class:`Fix`.
"""

from __future__ import annotations

__all__ = [
    "IndentLinter",
    "LintContext",
    "LintFinding",
    "LintResult",
    "LintRule",
    "LintSeverity",
    "Fix",
    "apply_fixes",
]

from .core import Fix, IndentLinter, LintContext, LintFinding, LintResult, LintSeverity, apply_fixes
from .rules import LintRule
