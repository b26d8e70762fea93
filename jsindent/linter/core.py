"""Core linter infrastructure: findings, fixes, results and the driver."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from typing import List, Optional, Tuple
import logging

from jsindent.config import IndentConfig
from jsindent.errors import ParseError
from jsindent.nodes import Node
from jsindent.parser import parse
from jsindent.source import SourceCode
from .rules import LintRule


MODULE_SUFFIXES = (".mjs",)
MAX_FIX_PASSES = 10


class LintSeverity(Enum):
    """Severity levels for lint findings."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    HINT = "hint"


@dataclass(frozen=True)
class Fix:
    """Replace the source text in ``range`` (start inclusive, end exclusive) with ``text``."""
    range: Tuple[int, int]
    text: str


@dataclass
class LintFinding:
    """A single lint finding."""
    rule_id: str
    message: str
    severity: LintSeverity
    line: Optional[int] = None
    column: Optional[int] = None
    fix: Optional[Fix] = None

    def format(self, file_path: Optional[str] = None) -> str:
        location = f"{self.line}:{self.column}"
        if file_path:
            location = f"{file_path}:{location}"
        return f"{location}: {self.message} [{self.rule_id}]"


@dataclass
class LintResult:
    """Result of linting a single document."""
    findings: List[LintFinding]
    errors: List[str]
    fixed_text: Optional[str] = None

    def success(self) -> bool:
        """Check if linting completed without errors."""
        return len(self.errors) == 0

    def has_issues(self) -> bool:
        """Check if any issues were found."""
        return len(self.findings) > 0

    def error_count(self) -> int:
        """Count of error-level findings."""
        return sum(1 for f in self.findings if f.severity == LintSeverity.ERROR)

    def warning_count(self) -> int:
        """Count of warning-level findings."""
        return sum(1 for f in self.findings if f.severity == LintSeverity.WARNING)


@dataclass
class LintContext:
    """Context provided to lint rules for analysis."""
    source_text: str
    file_path: str
    source: SourceCode
    ast: Node = field(init=False)

    def __post_init__(self) -> None:
        self.ast = self.source.ast


def apply_fixes(source_text: str, findings: List[LintFinding]) -> str:
    """
    Apply the fixes attached to ``findings`` in a single pass.

    Fixes are applied in source order; a fix overlapping one already
    applied is skipped and left for a later pass.
    """
    fixes = sorted((f.fix for f in findings if f.fix is not None), key=lambda fix: fix.range)
    parts = []
    cursor = 0
    for fix in fixes:
        start, end = fix.range
        if start < cursor:
            continue
        parts.append(source_text[cursor:start])
        parts.append(fix.text)
        cursor = end
    parts.append(source_text[cursor:])
    return "".join(parts)


class IndentLinter:
    """
    Lints JavaScript documents for indentation.

    Runs every configured rule over a parsed document. Parse failures are
    collected into ``LintResult.errors``; internal errors raised by a rule
    propagate to the caller.
    """

    def __init__(self, options: Optional[IndentConfig] = None, rules: Optional[List[LintRule]] = None):
        self.options = options or IndentConfig()
        if rules is None:
            from jsindent.indent.rule import IndentRule
            rules = [IndentRule(self.options)]
        self.rules = rules
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def source_type_for(file_path: str) -> str:
        return "module" if PurePath(file_path).suffix in MODULE_SUFFIXES else "script"

    def lint_document(
        self,
        source_text: str,
        file_path: str = "untitled.js",
        source_type: Optional[str] = None,
    ) -> LintResult:
        """
        Lint a JavaScript document.

        Args:
            source_text: Source code to analyze
            file_path: File path for context
            source_type: ``"script"`` or ``"module"``; inferred from the
                file extension when omitted

        Returns:
            LintResult with findings sorted by position
        """
        findings: List[LintFinding] = []
        errors: List[str] = []

        try:
            source = parse(source_text, source_type or self.source_type_for(file_path), path=file_path)
        except ParseError as e:
            errors.append(e.format())
            return LintResult(findings=findings, errors=errors)

        context = LintContext(source_text=source_text, file_path=file_path, source=source)
        for rule in self.rules:
            findings.extend(rule.check(context))

        findings.sort(key=lambda f: (f.line or 0, f.column or 0))
        self.logger.debug("%s: %d findings", file_path, len(findings))
        return LintResult(findings=findings, errors=errors)

    def fix_document(
        self,
        source_text: str,
        file_path: str = "untitled.js",
        source_type: Optional[str] = None,
    ) -> LintResult:
        """
        Lint a document and fix it until no fix changes the text.

        Each pass applies every non-overlapping fix and lints the result
        again, since moving one line can change where a later line is
        expected. At most ``MAX_FIX_PASSES`` passes are made.

        Returns:
            LintResult for the fixed text, with ``fixed_text`` set unless
            the document does not parse
        """
        text = source_text
        result = self.lint_document(text, file_path, source_type)
        passes = 0
        while result.success() and result.has_issues() and passes < MAX_FIX_PASSES:
            fixed = apply_fixes(text, result.findings)
            passes += 1
            if fixed == text:
                break
            text = fixed
            result = self.lint_document(text, file_path, source_type)

        self.logger.debug("%s: fixed in %d passes", file_path, passes)
        if result.success():
            result.fixed_text = text
        return result

    def apply_fixes(self, source_text: str, findings: List[LintFinding]) -> str:
        return apply_fixes(source_text, findings)
