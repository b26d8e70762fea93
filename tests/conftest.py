"""Shared fixtures for jsindent tests."""

from typing import Any, Dict, List, Optional, Union

import pytest

from jsindent.config import IndentConfig
from jsindent.linter import IndentLinter, LintFinding
from jsindent.parser import parse


def _linter(unit: Optional[Union[int, str]], options: Optional[Dict[str, Any]]) -> IndentLinter:
    return IndentLinter(IndentConfig.from_options(unit, options))


@pytest.fixture
def lint():
    """Lint source text and return ``(line, message)`` pairs."""
    def _lint(source: str, unit=None, options=None, source_type: str = "script") -> List[tuple]:
        result = _linter(unit, options).lint_document(source, "test.js", source_type)
        assert result.success(), result.errors
        return [(finding.line, finding.message) for finding in result.findings]
    return _lint


@pytest.fixture
def lint_findings():
    """Lint source text and return the full findings."""
    def _lint(source: str, unit=None, options=None, source_type: str = "script") -> List[LintFinding]:
        result = _linter(unit, options).lint_document(source, "test.js", source_type)
        assert result.success(), result.errors
        return result.findings
    return _lint


@pytest.fixture
def fix():
    """Apply one round of fixes and return the fixed text."""
    def _fix(source: str, unit=None, options=None, source_type: str = "script") -> str:
        result = _linter(unit, options).fix_document(source, "test.js", source_type)
        assert result.success(), result.errors
        return result.fixed_text
    return _fix


@pytest.fixture
def parse_js():
    """Parse JavaScript text into a SourceCode."""
    def _parse(text: str, source_type: str = "script"):
        return parse(text, source_type)
    return _parse


@pytest.fixture
def token_named():
    """Find the n-th code token with a given value."""
    def _find(source, value: str, occurrence: int = 0):
        matches = [token for token in source.tokens if token.value == value]
        return matches[occurrence]
    return _find


@pytest.fixture
def write_js(tmp_path):
    """Create a JavaScript file under a temporary directory."""
    def _write(content: str, name: str = "sample.js"):
        file_path = tmp_path / name
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
        return file_path
    return _write
