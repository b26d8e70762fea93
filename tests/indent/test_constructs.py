"""Valid and invalid programs for each construct rule."""

import pytest


FIRST_ARGUMENTS = {"CallExpression": {"arguments": "first"}}


VALID = [
    pytest.param("var x = [\n    'a',\n    'b'\n];", 4, None, id="array-literal"),
    pytest.param("var x = 0 &&\n    {\n        a: 1\n    };", 4, None, id="object-after-operator"),
    pytest.param("var a = {\n    b: 1,\n    c: 2\n};", 4, None, id="object-literal"),
    pytest.param("a = [\n    ,3\n]", 4, None, id="array-hole"),
    pytest.param("switch (a) {\ncase 1:\n    foo();\n    break;\n}", 4, None, id="switch-default-level"),
    pytest.param(
        "switch (a) {\n    case 1:\n        foo();\n        break;\n    default:\n        bar();\n}",
        4,
        {"SwitchCase": 1},
        id="switch-case-level",
    ),
    pytest.param("var a = 1,\n    b = 2;", 4, None, id="declarators"),
    pytest.param("var foo = {\n        ok: true,\n    },\n    bar = 1;", 4, None, id="first-declarator-shift"),
    pytest.param("class A {\n    foo() {\n        return 1;\n    }\n}", 4, None, id="class-body"),
    pytest.param("var f = (a) => {\n    return a;\n};", 4, None, id="arrow-body"),
    pytest.param("var f = a =>\n    a;", 4, None, id="arrow-without-parens"),
    pytest.param("var f = async (a) => {\n    await a;\n};", 4, None, id="async-arrow"),
    pytest.param("var f = (\n    a,\n    b\n) => {\n    return a;\n};", 4, None, id="arrow-multiline-params"),
    pytest.param("(function() {\nfoo();\n}());", 4, {"outerIIFEBody": 0}, id="outer-iife"),
    pytest.param("foo\n    .bar()\n    .baz();", 4, None, id="member-chain-unset"),
    pytest.param("foo\n        .bar();", 4, None, id="member-chain-any-indent"),
    pytest.param("foo\n    .bar();", 4, {"MemberExpression": 1}, id="member-chain-level"),
    pytest.param(
        "if (a) {\n    b();\n} else if (c) {\n    d();\n} else {\n    e();\n}", 4, None, id="else-if-chain"
    ),
    pytest.param("if (a) {\n    if (b) {\n        c();\n    }\n}", 4, None, id="nested-blocks"),
    pytest.param("foo(bar,\n    baz,\n    qux\n);", 2, FIRST_ARGUMENTS, id="call-arguments-first"),
    pytest.param("foo(\n    bar,\n    baz\n);", 4, None, id="call-arguments-unset"),
    pytest.param("foo(function() {\n    bar();\n});", 4, None, id="callback-argument"),
    pytest.param("var a = {\n    b:\n            c\n};", 4, None, id="property-value-ignored"),
    pytest.param("for (var i = 0;\n    i < 10;\n    i++) {\n    foo();\n}", 4, None, id="for-header"),
    pytest.param("if (a) {\n \tb();\n}", 4, None, id="mixed-indentation"),
    pytest.param("var a = b\n    ? c\n    : d;", 4, None, id="conditional"),
    pytest.param(
        "function foo(a,\n             b) {\n}", 4, {"FunctionDeclaration": {"parameters": "first"}}, id="params-first"
    ),
    pytest.param("var foo = bar &&\n                   baz;", 4, None, id="logical-right-operand"),
    pytest.param("if (a) {\n\tb();\n}", "tab", None, id="tabs"),
]

MODULE_VALID = [
    pytest.param("import {\n    a,\n    b\n} from 'c';", id="import-specifiers"),
    pytest.param("export {\n    a,\n    b\n};", id="export-specifiers"),
]


def _expected(line, chars, found, unit="space"):
    plural = "" if chars == 1 else "s"
    return (line, f"Expected indentation of {chars} {unit}{plural} but found {found}.")


INVALID = [
    pytest.param("if (a) {\nb();\n}", 2, None, [_expected(2, 2, 0)], id="block"),
    pytest.param("if (a) {\nb();\n}", 1, None, [_expected(2, 1, 0)], id="single-space-unit"),
    pytest.param(
        "switch(x){\ncase 1:\nfoo();\n}", 4, {"SwitchCase": 1}, [_expected(2, 4, 0), _expected(3, 8, 0)],
        id="switch-case-level",
    ),
    pytest.param("switch (a) {\ncase 1:\nfoo();\n}", 4, None, [_expected(3, 4, 0)], id="switch-consequent"),
    pytest.param("Buffer\n.toString()", 4, {"MemberExpression": 1}, [_expected(2, 4, 0)], id="member-level"),
    pytest.param("var a = [\n  1,\n  2\n];", 4, None, [_expected(2, 4, 2), _expected(3, 4, 2)], id="array"),
    pytest.param("var x = {\n    a: 1,\n        b: 2\n};", 4, None, [_expected(3, 4, 8)], id="object-alignment"),
    pytest.param("if (a)\nfoo();", 4, None, [_expected(2, 4, 0)], id="blockless-if"),
    pytest.param("while (a)\n        foo();", 4, None, [_expected(2, 4, 8)], id="blockless-while"),
    pytest.param(
        "var foo = bar;\n\t\t\tvar baz = qux;", 2, None, [_expected(2, 0, "3 tabs")], id="tabs-under-spaces"
    ),
    pytest.param(
        "if (a){\n\tb=c;\n\t\tc=d;\ne=f;\n}",
        "tab",
        None,
        [_expected(3, 1, 2, "tab"), _expected(4, 1, 0, "tab")],
        id="tab-unit",
    ),
    pytest.param("if (a) {\n    b();\n}", "tab", None, [_expected(2, 1, "4 spaces", "tab")], id="spaces-under-tabs"),
    pytest.param(
        "function foo(a,\n        b) {\n}",
        4,
        {"FunctionDeclaration": {"parameters": 1}},
        [_expected(2, 4, 8)],
        id="params-level",
    ),
    pytest.param(
        "function foo(a,\n        b) {\n}",
        4,
        {"FunctionDeclaration": {"parameters": "first"}},
        [_expected(2, 13, 8)],
        id="params-first",
    ),
    pytest.param("(function() {\nfoo();\n}());", 4, None, [_expected(2, 4, 0)], id="outer-iife-default"),
    pytest.param("foo(bar,\n      baz,\n    qux\n);", 2, FIRST_ARGUMENTS, [_expected(2, 4, 6)], id="call-first"),
    pytest.param(
        "var a = 1,\n  b = 2;", 2, {"VariableDeclarator": 2}, [_expected(2, 4, 2)], id="declarator-level"
    ),
    pytest.param(
        "var f = function() {\n    a();\n};",
        4,
        {"FunctionExpression": {"body": 2}},
        [_expected(2, 8, 4)],
        id="function-expression-body",
    ),
]


class TestValidPrograms:
    """Programs that are already correctly indented."""

    @pytest.mark.parametrize("source, unit, options", VALID)
    def test_no_findings(self, lint, source, unit, options):
        assert lint(source, unit, options) == []

    @pytest.mark.parametrize("source", MODULE_VALID)
    def test_module_no_findings(self, lint, source):
        assert lint(source, 4, None, "module") == []


class TestInvalidPrograms:
    """Programs with misindented lines."""

    @pytest.mark.parametrize("source, unit, options, expected", INVALID)
    def test_findings(self, lint, source, unit, options, expected):
        assert lint(source, unit, options) == expected

    def test_import_specifier(self, lint):
        assert lint("import {\na\n} from 'c';", 4, None, "module") == [_expected(2, 4, 0)]


NUMERIC_ARGUMENTS = {"CallExpression": {"arguments": 1}}


class TestGroupingParentheses:
    """Contents of grouping parens are indented from the opening paren."""

    @pytest.mark.parametrize(
        "source, options",
        [
            pytest.param("if (\n    a\n) {}", None, id="condition"),
            pytest.param("foo(\n    (\n        a\n    )\n)", NUMERIC_ARGUMENTS, id="nested-in-arguments"),
            pytest.param("x = (\n    a +\n    b\n);", None, id="assignment-value"),
            pytest.param("foo(a,\n    b);", NUMERIC_ARGUMENTS, id="argument-parens-untouched"),
        ],
    )
    def test_valid(self, lint, source, options):
        assert lint(source, 4, options) == []

    @pytest.mark.parametrize(
        "source, options, expected",
        [
            pytest.param("if (\na\n) {}", None, [_expected(2, 4, 0)], id="condition"),
            pytest.param("if (\n    a\n    ) {}", None, [_expected(3, 0, 4)], id="closing-paren"),
            pytest.param(
                "foo(\n    (\n    a\n    )\n)", NUMERIC_ARGUMENTS, [_expected(3, 8, 4)], id="nested-in-arguments"
            ),
        ],
    )
    def test_invalid(self, lint, source, options, expected):
        assert lint(source, 4, options) == expected


class TestTemplateLiterals:
    """Substitutions are indented from the quasi that opens them."""

    @pytest.mark.parametrize(
        "source",
        [
            pytest.param("`a${\n    b\n}c`;", id="single-line-quasi"),
            pytest.param("if (x) {\n    `a${\n        b\n    }c`;\n}", id="single-line-quasi-in-block"),
            pytest.param("if (x) {\n    `a\nb${\n    c\n}`;\n}", id="multi-line-quasi"),
            pytest.param("`${a}\n  text ${b}`;", id="same-line-substitutions"),
        ],
    )
    def test_valid(self, lint, source):
        assert lint(source, 4) == []

    @pytest.mark.parametrize(
        "source, expected",
        [
            pytest.param("`a${\nb\n}c`;", [_expected(2, 4, 0)], id="single-line-quasi"),
            pytest.param(
                "if (x) {\n    `a${\n    b\n    }c`;\n}", [_expected(3, 8, 4)], id="single-line-quasi-in-block"
            ),
            pytest.param(
                "if (x) {\n    `a\nb${\n        c\n    }`;\n}",
                [_expected(4, 4, 8), _expected(5, 0, 4)],
                id="multi-line-quasi",
            ),
        ],
    )
    def test_invalid(self, lint, source, expected):
        assert lint(source, 4) == expected


class TestFirstElementAlignment:
    """``"first"`` aligns later elements with the first element's column."""

    @pytest.mark.parametrize(
        "source, options",
        [
            pytest.param("var a = [1,\n         2];", {"ArrayExpression": "first"}, id="array"),
            pytest.param("var a = {a: 1,\n         b: 2};", {"ObjectExpression": "first"}, id="object"),
            pytest.param(
                "var a = [\n        1,\n        2\n];", {"ArrayExpression": "first"}, id="first-element-own-line"
            ),
        ],
    )
    def test_valid(self, lint, source, options):
        assert lint(source, 4, options) == []

    @pytest.mark.parametrize(
        "source, options, expected",
        [
            pytest.param("var a = [1,\n    2];", {"ArrayExpression": "first"}, [_expected(2, 9, 4)], id="array"),
            pytest.param(
                "var a = {a: 1,\n    b: 2};", {"ObjectExpression": "first"}, [_expected(2, 9, 4)], id="object"
            ),
            pytest.param(
                "var a = [1,\n         2];", {"ArrayExpression": 1}, [_expected(2, 4, 9)], id="numeric-level"
            ),
        ],
    )
    def test_invalid(self, lint, source, options, expected):
        assert lint(source, 4, options) == expected


class TestNewExpression:

    @pytest.mark.parametrize(
        "source",
        [
            pytest.param("x = [\n    new Foo\n];", id="without-parens"),
            pytest.param("x = [\n    new Foo()\n];", id="empty-parens"),
            pytest.param("var a = new Foo(\n    b,\n    c\n);", id="arguments"),
        ],
    )
    def test_valid(self, lint, source):
        assert lint(source, 4, NUMERIC_ARGUMENTS) == []

    def test_misaligned_argument(self, lint):
        assert lint("var a = new Foo(\n    b,\n  c\n);", 4, NUMERIC_ARGUMENTS) == [_expected(3, 4, 2)]
