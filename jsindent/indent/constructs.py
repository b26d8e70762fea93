"""Per-construct offset rules.

Each rule receives the running :class:`IndentCheck` and the node being
entered (or left) and only writes edges into the offset graph; levels are
never resolved during the walk. ``ENTER_RULES`` and ``EXIT_RULES`` map ESTree
node types to their rule.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Callable, Dict, List, Optional, Sequence, Union

from jsindent.nodes import Node
from jsindent.source import Token, sorted_index
from .check import IndentCheck


ConstructRule = Callable[[IndentCheck, Node], None]

IIFE_UNARY_OPERATORS = frozenset({"!", "~", "+", "-"})
IIFE_PASSTHROUGH = frozenset({"AssignmentExpression", "LogicalExpression", "SequenceExpression", "VariableDeclarator"})
FUNCTION_EXPRESSIONS = frozenset({"FunctionExpression", "ArrowFunctionExpression"})


def _find(tokens: Sequence[Token], value: str) -> Token:
    return next(token for token in tokens if token.value == value)


def _line_of(check: IndentCheck, offset: int) -> int:
    return check.source.position(offset)[0]


def is_outer_iife(node: Node) -> bool:
    """Whether ``node`` is a function invoked where it is defined at the top level of the program."""
    parent = node.parent
    if parent is None or parent.type != "CallExpression" or parent.callee is not node:
        return False

    statement = parent.parent
    while (
        statement.type == "UnaryExpression" and statement.get("operator") in IIFE_UNARY_OPERATORS
        or statement.type in IIFE_PASSTHROUGH
    ):
        statement = statement.parent

    return (
        statement.type in ("ExpressionStatement", "VariableDeclaration")
        and statement.parent.type == "Program"
    )


def add_element_list_indent(
    check: IndentCheck,
    tokens: List[Token],
    elements: Sequence[Optional[Node]],
    offset: Union[int, str, None],
) -> None:
    """
    Offset the elements of a delimited list from its opening token.

    ``offset`` is a level, ``"first"`` to align every element with the
    first one, or ``None`` which keeps the interior at the opener's level.
    ``tokens`` runs from the opening delimiter to the closing one.
    """
    source, graph = check.source, check.graph
    opening, closing = tokens[0], tokens[-1]

    def first_token_of(element: Node) -> Token:
        # Include any parentheses wrapping the element.
        token = source.token_before(source.first_token(element))
        while token.is_punctuator("(") and token is not opening:
            token = source.token_before(token)
        return source.token_after(token)

    present = [element for element in elements if element is not None]
    if offset == "first" and present:
        graph.ignore(first_token_of(present[0]))

    if offset == "first":
        interior = 1
    else:
        interior = offset or 0
    graph.set_offsets(tokens[1:-1], opening, interior)

    if offset == "first":
        if present:
            size = check.config.indent_size
            column = first_token_of(present[0]).column
            level = Fraction(column, size) if size else 0
            for element in present[1:]:
                graph.set_offset(first_token_of(element), None, level)
    else:
        for previous, element in zip(elements, elements[1:]):
            if previous is None or element is None:
                continue
            if _line_of(check, previous.range[1]) > opening.end_line:
                graph.match_offset(first_token_of(previous), first_token_of(element))

    graph.match_offset(opening, closing)


def add_block_indent(check: IndentCheck, node: Node) -> None:
    source, graph, config = check.source, check.graph, check.config
    tokens = source.tokens_and_comments_of(node)
    parent = node.parent

    if parent is not None and is_outer_iife(parent):
        level = config.outer_iife_body
    elif parent is not None and parent.type in FUNCTION_EXPRESSIONS:
        level = config.function_expression.body
    elif parent is not None and parent.type == "FunctionDeclaration":
        level = config.function_declaration.body
    else:
        level = 1

    # A block opening mid-line is indented from its parent construct.
    opening = tokens[0]
    if source.first_token_of_line(opening) is opening or parent is None:
        anchor = opening
    else:
        anchor = source.first_token(parent)

    if anchor is not opening:
        graph.match_offset(anchor, opening)
    graph.set_offsets(tokens[1:-1], opening, level)
    graph.match_offset(anchor, tokens[-1])


def add_array_or_object_indent(check: IndentCheck, node: Node) -> None:
    tokens = check.source.tokens_and_comments_of(node)
    elements = node.elements if node.type in ("ArrayExpression", "ArrayPattern") else node.properties
    add_element_list_indent(check, tokens, elements, check.config.list_offset(node.type))


def add_blockless_node_indent(check: IndentCheck, body: Node, parent: Node) -> None:
    if body.type != "BlockStatement":
        source = check.source
        check.graph.set_offsets(source.tokens_and_comments_of(body), source.first_token(parent), 1)


def add_parameter_list_indent(
    check: IndentCheck,
    node: Node,
    opening: Token,
    closing: Token,
    params_indent: Union[int, str, None],
) -> None:
    source, graph = check.source, check.graph
    node_tokens = source.tokens_and_comments_of(node)
    param_tokens = node_tokens[sorted_index(node_tokens, opening):sorted_index(node_tokens, closing) + 1]

    graph.mark_parameter_parens(opening, closing)
    add_element_list_indent(check, param_tokens, node.params, params_indent)

    if params_indent is None:
        for param in node.params:
            graph.ignore(source.first_token(param))


def add_function_params_indent(check: IndentCheck, node: Node, params_indent: Union[int, str, None]) -> None:
    source = check.source
    closing = source.token_before(node.body)
    if node.params:
        opening = source.token_before(node.params[0])
    else:
        opening = source.token_before(closing)
    add_parameter_list_indent(check, node, opening, closing, params_indent)


def add_binary_or_logical_indent(check: IndentCheck, node: Node) -> None:
    source, graph = check.source, check.graph
    tokens = source.tokens_and_comments_of(node)
    operator = _find(source.tokens_between(node.left, node.right), node.operator)
    after_operator = tokens[sorted_index(tokens, source.token_after(operator)):]

    # The right operand's placement is left to the author.
    graph.ignore(operator)
    graph.ignore(after_operator[0])
    graph.set_offset(after_operator[0], source.first_token(node), 1)
    graph.set_offsets(after_operator[1:], after_operator[0], 1)


def add_assignment_indent(check: IndentCheck, node: Node) -> None:
    source, graph = check.source, check.graph
    operator = _find(source.tokens_between(node.left, node.right), node.operator)
    node_tokens = source.tokens_and_comments_of(node)
    from_operator = node_tokens[sorted_index(node_tokens, operator):]

    graph.set_offsets(from_operator, source.first_token(node.left), 1)
    for token in from_operator[:2]:
        graph.ignore(token)


def add_if_statement_indent(check: IndentCheck, node: Node) -> None:
    add_blockless_node_indent(check, node.consequent, node)
    alternate = node.alternate
    if alternate is not None:
        if alternate.type == "IfStatement":
            add_if_statement_indent(check, alternate)
        else:
            add_blockless_node_indent(check, alternate, node)


def add_function_call_indent(check: IndentCheck, node: Node) -> None:
    source, graph = check.source, check.graph
    if node.arguments:
        opening = _find(source.tokens_between(node.callee, node.arguments[0]), "(")
    else:
        opening = source.last_token(node, 1)

    call_tokens = source.tokens_and_comments_of(node)
    tokens = call_tokens[sorted_index(call_tokens, opening):]

    graph.mark_parameter_parens(tokens[0], tokens[-1])
    graph.match_offset(source.last_token(node.callee), opening)

    arguments = check.config.call_arguments
    if arguments is not None:
        add_element_list_indent(check, tokens, node.arguments, arguments)
    else:
        add_element_list_indent(check, tokens, node.arguments, 1)
        for argument in node.arguments:
            graph.ignore(source.first_token(argument))


def add_new_expression_indent(check: IndentCheck, node: Node) -> None:
    # `new Foo` without an argument list has no parens to indent.
    source = check.source
    if node.arguments or (
        source.last_token(node).is_punctuator(")") and source.last_token(node, 1).is_punctuator("(")
    ):
        add_function_call_indent(check, node)


def add_class_indent(check: IndentCheck, node: Node) -> None:
    tokens = check.source.tokens_and_comments_of(node)
    check.graph.set_offsets(tokens[1:-1], tokens[0], 1)
    check.graph.match_offset(tokens[0], tokens[-1])


def add_arrow_function_indent(check: IndentCheck, node: Node) -> None:
    source = check.source
    opening = source.first_token(node, 1 if node.get("async") else 0)

    # `a => a` has no parameter parens.
    if opening.is_punctuator("("):
        arrow = source.token_before(node.body)
        while not arrow.is_punctuator("=>"):
            arrow = source.token_before(arrow)
        closing = source.token_before(arrow)
        add_parameter_list_indent(check, node, opening, closing, check.config.function_expression.parameters)

    if node.body.type != "BlockStatement":
        check.graph.set_offsets(source.tokens_and_comments_of(node.body), source.first_token(node), 1)


def add_function_declaration_indent(check: IndentCheck, node: Node) -> None:
    add_function_params_indent(check, node, check.config.function_declaration.parameters)


def add_function_expression_indent(check: IndentCheck, node: Node) -> None:
    add_function_params_indent(check, node, check.config.function_expression.parameters)


def add_conditional_indent(check: IndentCheck, node: Node) -> None:
    tokens = check.source.tokens_and_comments_of(node)
    check.graph.set_offsets(tokens[1:], tokens[0], 1)


def add_loop_body_indent(check: IndentCheck, node: Node) -> None:
    add_blockless_node_indent(check, node.body, node)


def add_for_statement_indent(check: IndentCheck, node: Node) -> None:
    source = check.source
    opening_paren = source.first_token(node, 1)
    for part in (node.init, node.test, node.update):
        if part is not None:
            check.graph.set_offsets(source.tokens_and_comments_of(part), opening_paren, 1)
    add_blockless_node_indent(check, node.body, node)


def _braced(tokens: List[Token]) -> List[Token]:
    """The slice of ``tokens`` from the first ``{`` to the last ``}``."""
    opening = next(index for index, token in enumerate(tokens) if token.is_punctuator("{"))
    closing = max(index for index, token in enumerate(tokens) if token.is_punctuator("}"))
    return tokens[opening:closing + 1]


def add_export_named_indent(check: IndentCheck, node: Node) -> None:
    if node.declaration is None:
        tokens = _braced(check.source.tokens_and_comments_of(node))
        add_element_list_indent(check, tokens, node.specifiers, 1)


def add_import_indent(check: IndentCheck, node: Node) -> None:
    specifiers = [spec for spec in node.specifiers if spec.type == "ImportSpecifier"]
    if specifiers:
        tokens = _braced(check.source.tokens_and_comments_of(node))
        add_element_list_indent(check, tokens, specifiers, 1)


def add_member_expression_indent(check: IndentCheck, node: Node) -> None:
    source, graph = check.source, check.graph
    tokens = source.tokens_and_comments_of(node)
    first_non_object = next(
        token for token in source.tokens_between(node.object, node.property) if token.value != ")"
    )
    to_indent = tokens[sorted_index(tokens, first_non_object):]

    graph.set_offsets(to_indent[1:], to_indent[0], 0)

    level = check.config.member_expression
    if level is not None:
        object_start = source.first_token(node.object)
        graph.set_offset(to_indent[0], object_start, level)
        graph.set_offset(to_indent[1], object_start, level)
    else:
        for token in to_indent[:2]:
            graph.match_offset(source.first_token_of_line(token), token)
            graph.ignore(token)


def add_property_indent(check: IndentCheck, node: Node) -> None:
    if node.get("computed") or node.get("shorthand") or node.get("method") or node.get("kind") != "init":
        return
    source = check.source
    colon = _find(source.tokens_between(node.key, node.value), ":")
    check.graph.ignore(source.token_after(colon))


def add_switch_indent(check: IndentCheck, node: Node) -> None:
    source, graph = check.source, check.graph
    tokens = source.tokens_and_comments_of(node)
    discriminant_end = node.discriminant.range[1]
    opening_index = next(
        index for index, token in enumerate(tokens)
        if token.start >= discriminant_end and token.is_punctuator("{")
    )
    opening = tokens[opening_index]
    interior = tokens[opening_index + 1:-1]

    graph.set_offsets(interior, opening, check.config.switch_case)

    cases = node.cases
    case_keywords = {source.first_token(case).index for case in cases}
    last_case_keyword = source.first_token(cases[-1]) if cases else None
    cases_with_blocks = {
        source.first_token(case).index
        for case in cases
        if len(case.consequent) == 1 and case.consequent[0].type == "BlockStatement"
    }

    last_anchor = opening
    for token in interior:
        if token.index in case_keywords:
            last_anchor = token
        elif last_anchor is last_case_keyword and token.is_comment:
            graph.ignore(token)
        elif last_anchor.index not in cases_with_blocks:
            graph.set_offset(token, last_anchor, 1)


def add_template_literal_indent(check: IndentCheck, node: Node) -> None:
    source, graph = check.source, check.graph
    tokens = source.tokens_and_comments_of(node)
    quasis = node.quasis

    graph.set_offsets(source.tokens_and_comments_of(quasis[0]), tokens[0], 0)
    for index in range(len(node.expressions)):
        previous, following = quasis[index], quasis[index + 1]
        single_line = _line_of(check, previous.range[0]) == _line_of(check, previous.range[1])
        align_from = source.first_token(previous) if single_line else None

        graph.set_offsets(source.tokens_between(previous, following), align_from, 1)
        graph.set_offset(source.first_token(following), align_from, 0)


def add_variable_declaration_indent(check: IndentCheck, node: Node) -> None:
    source, graph = check.source, check.graph
    level = check.config.variable_declarator.for_kind(node.kind)
    graph.set_offsets(source.tokens_and_comments_of(node)[1:], source.first_token(node), level)

    last_token = source.last_token(node)
    if last_token.is_punctuator(";"):
        graph.ignore(last_token)


def add_variable_declarator_indent(check: IndentCheck, node: Node) -> None:
    if node.init is not None:
        check.graph.ignore(check.source.first_token(node.init))


def shift_first_declarator(check: IndentCheck, node: Node) -> None:
    """
    Indent the value of the first of several declarators one extra level.

    Runs on exit, after the value's own rules have set its edges::

        var foo = {
                ok: true,
            },
            bar = 1;
    """
    declaration = node.parent
    if len(declaration.declarations) < 2 or declaration.declarations[0] is not node or node.init is None:
        return

    graph = check.graph
    level = check.config.variable_declarator.for_kind(declaration.kind)
    value_tokens = check.source.tokens_and_comments_of(node.init)
    if not value_tokens:
        return
    first, last = value_tokens[0].index, value_tokens[-1].index
    for token in value_tokens:
        anchor = graph.edge(token).anchor
        if anchor is None or not first <= anchor.index <= last:
            graph.shift_offset(token, level)


ENTER_RULES: Dict[str, ConstructRule] = {
    "ArrayExpression": add_array_or_object_indent,
    "ArrayPattern": add_array_or_object_indent,
    "ArrowFunctionExpression": add_arrow_function_indent,
    "AssignmentExpression": add_assignment_indent,
    "BinaryExpression": add_binary_or_logical_indent,
    "BlockStatement": add_block_indent,
    "CallExpression": add_function_call_indent,
    "ClassDeclaration": add_class_indent,
    "ClassExpression": add_class_indent,
    "ConditionalExpression": add_conditional_indent,
    "DoWhileStatement": add_loop_body_indent,
    "ExportNamedDeclaration": add_export_named_indent,
    "ForInStatement": add_loop_body_indent,
    "ForOfStatement": add_loop_body_indent,
    "ForStatement": add_for_statement_indent,
    "FunctionDeclaration": add_function_declaration_indent,
    "FunctionExpression": add_function_expression_indent,
    "IfStatement": add_if_statement_indent,
    "ImportDeclaration": add_import_indent,
    "LogicalExpression": add_binary_or_logical_indent,
    "MemberExpression": add_member_expression_indent,
    "NewExpression": add_new_expression_indent,
    "ObjectExpression": add_array_or_object_indent,
    "ObjectPattern": add_array_or_object_indent,
    "Property": add_property_indent,
    "SwitchStatement": add_switch_indent,
    "TemplateLiteral": add_template_literal_indent,
    "VariableDeclaration": add_variable_declaration_indent,
    "VariableDeclarator": add_variable_declarator_indent,
    "WhileStatement": add_loop_body_indent,
}

EXIT_RULES: Dict[str, ConstructRule] = {
    "VariableDeclarator": shift_first_declarator,
}
