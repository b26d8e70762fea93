"""Tests for the linter driver and fix application."""

import pytest

from jsindent.config import IndentConfig
from jsindent.errors import InternalError
from jsindent.linter import (
    Fix,
    IndentLinter,
    LintFinding,
    LintRule,
    LintSeverity,
    apply_fixes,
)
from jsindent.linter.core import MAX_FIX_PASSES


def _finding(start, end, text, line=1):
    return LintFinding(
        rule_id="indent",
        message="Expected indentation",
        severity=LintSeverity.ERROR,
        line=line,
        column=0,
        fix=Fix(range=(start, end), text=text),
    )


class _BrokenRule(LintRule):
    def __init__(self):
        super().__init__(rule_id="broken", description="Always fails")

    def check(self, context):
        raise InternalError("Offset chain does not terminate")


class _GrowingRule(LintRule):
    """Reports every document and always asks for one more leading space."""

    def __init__(self):
        super().__init__(rule_id="growing", description="Never satisfied")

    def check(self, context):
        return [_finding(0, 0, " ")]


class TestIndentLinter:

    def test_parse_error_is_collected(self):
        result = IndentLinter().lint_document("if (a {\n}", "broken.js")

        assert not result.success()
        assert result.findings == []
        assert len(result.errors) == 1
        assert "broken.js" in result.errors[0]
        assert "PARSE_ERROR" in result.errors[0]

    def test_internal_error_propagates(self):
        linter = IndentLinter(rules=[_BrokenRule()])

        with pytest.raises(InternalError):
            linter.lint_document("a;")

    def test_findings_are_sorted(self):
        result = IndentLinter(IndentConfig.from_options(2)).lint_document("if (a) {\nb();\nc();\n}")

        assert [finding.line for finding in result.findings] == [2, 3]
        assert result.has_issues()
        assert result.error_count() == 2
        assert result.warning_count() == 0

    def test_clean_document(self):
        result = IndentLinter().lint_document("if (a) {\n    b();\n}")

        assert result.success()
        assert not result.has_issues()
        assert result.fixed_text is None

    def test_module_inferred_from_extension(self):
        linter = IndentLinter()

        assert linter.source_type_for("lib/index.mjs") == "module"
        assert linter.source_type_for("lib/index.js") == "script"
        assert linter.lint_document("import a from 'a';\n", "lib/index.mjs").success()
        assert not linter.lint_document("import a from 'a';\n", "lib/index.js").success()

    def test_fix_document(self):
        result = IndentLinter(IndentConfig.from_options(2)).fix_document("if (a) {\nb();\n}")

        assert result.fixed_text == "if (a) {\n  b();\n}"
        assert result.findings == []

    def test_fix_document_repeats_until_stable(self):
        config = IndentConfig.from_options(
            2, {"ArrayExpression": "first", "CallExpression": {"arguments": "first"}}
        )
        linter = IndentLinter(config)
        source = "echo = spawn('cmd.exe',\n            ['foo', 'bar',\n             'baz']);"

        # Moving the array moves the column 'baz' aligns to.
        once = apply_fixes(source, linter.lint_document(source).findings)
        assert [(f.line, f.message) for f in linter.lint_document(once).findings] == [
            (3, "Expected indentation of 14 spaces but found 13."),
        ]

        result = linter.fix_document(source)

        assert result.fixed_text == "echo = spawn('cmd.exe',\n             ['foo', 'bar',\n              'baz']);"
        assert result.findings == []
        assert linter.lint_document(result.fixed_text).findings == []

    def test_fix_document_stops_after_pass_limit(self):
        linter = IndentLinter(rules=[_GrowingRule()])

        result = linter.fix_document("a;")

        assert result.fixed_text == " " * MAX_FIX_PASSES + "a;"
        assert len(result.findings) == 1

    def test_fix_document_leaves_unparsable_text(self):
        result = IndentLinter().fix_document("if (a {")

        assert not result.success()
        assert result.fixed_text is None

    def test_finding_format(self):
        finding = _finding(0, 2, "    ", line=3)

        assert finding.format("src/a.js") == "src/a.js:3:0: Expected indentation [indent]"
        assert finding.format() == "3:0: Expected indentation [indent]"


class TestApplyFixes:

    def test_fixes_apply_in_source_order(self):
        text = "a\n  b\nc"
        findings = [_finding(6, 6, "  "), _finding(2, 4, "    ")]

        assert apply_fixes(text, findings) == "a\n    b\n  c"

    def test_overlapping_fix_is_skipped(self):
        text = "  x"
        findings = [_finding(0, 2, "\t"), _finding(1, 2, "    ")]

        assert apply_fixes(text, findings) == "\tx"

    def test_findings_without_fix_are_ignored(self):
        finding = _finding(0, 1, "")
        finding.fix = None

        assert apply_fixes("abc", [finding]) == "abc"
