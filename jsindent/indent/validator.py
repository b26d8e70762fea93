"""Comparison of resolved levels against the source, with fixes."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from jsindent.linter.core import Fix, LintFinding, LintSeverity
from jsindent.source import Token
from .check import IndentCheck
from .measure import create_error_message
from .offsets import Level


logger = logging.getLogger(__name__)

RULE_ID = "indent"


def report(check: IndentCheck, token: Token, level: Level) -> LintFinding:
    """Build the finding, and its whitespace fix, for a misindented token."""
    config = check.config
    expected_chars = int(level * config.indent_size)
    return LintFinding(
        rule_id=RULE_ID,
        message=create_error_message(expected_chars, check.measure(token), config),
        severity=LintSeverity.ERROR,
        line=token.line,
        column=token.column,
        fix=Fix(range=(token.start - token.column, token.start), text=config.indent_char * expected_chars),
    )


def validate_tokens(check: IndentCheck) -> List[LintFinding]:
    """Report every line-leading code token whose indentation is off."""
    source, graph = check.source, check.graph
    findings = []
    for token in source.tokens:
        if source.first_token_of_line(token) is not token or graph.is_ignored(token):
            continue
        level = check.resolve(token)
        if not check.is_valid(token, level):
            findings.append(report(check, token, level))
    return findings


def _preceding_tokens(check: IndentCheck) -> Dict[int, Optional[Token]]:
    preceding: Dict[int, Optional[Token]] = {}
    latest: Optional[Token] = None
    for token in check.source.tokens_and_comments:
        if token.is_comment:
            preceding[token.index] = latest
        else:
            latest = token
    return preceding


def reconcile_comments(check: IndentCheck) -> List[LintFinding]:
    """
    Report line-leading comments that fit none of their neighbours.

    A comment may be indented like the line of the code before it, the line
    of the code after it, or at its own resolved level.
    """
    source = check.source
    preceding = _preceding_tokens(check)
    findings = []
    for comment in source.comments:
        if source.text_before(comment).strip() or check.graph.is_ignored(comment):
            continue

        before = preceding[comment.index]
        line_before = source.first_token_of_line(before) if before is not None else None
        if line_before is not None:
            next_token = source.token_after(before)
        else:
            next_token = source.tokens[0] if source.tokens else None
        line_after = source.first_token_of_line(next_token) if next_token is not None else None

        matches_before = line_before is not None and check.is_valid(comment, check.resolve(line_before))
        matches_after = line_after is not None and check.is_valid(comment, check.resolve(line_after))
        own_level = check.resolve(comment)
        matches_own = check.is_valid(comment, own_level)

        if not matches_before and not matches_after and not matches_own:
            findings.append(report(check, comment, own_level))
    return findings
