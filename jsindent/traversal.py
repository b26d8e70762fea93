"""Depth-first ESTree traversal with enter/exit handler dispatch."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterator, List, Mapping, Tuple

from .nodes import Node


logger = logging.getLogger(__name__)

Handler = Callable[[Node], None]

EXIT_SUFFIX = ":exit"

VISITOR_KEYS: Dict[str, Tuple[str, ...]] = {
    "AssignmentExpression": ("left", "right"),
    "AssignmentPattern": ("left", "right"),
    "ArrayExpression": ("elements",),
    "ArrayPattern": ("elements",),
    "ArrowFunctionExpression": ("params", "body"),
    "AwaitExpression": ("argument",),
    "BlockStatement": ("body",),
    "BinaryExpression": ("left", "right"),
    "BreakStatement": ("label",),
    "CallExpression": ("callee", "arguments"),
    "CatchClause": ("param", "body"),
    "ClassBody": ("body",),
    "ClassDeclaration": ("id", "superClass", "body"),
    "ClassExpression": ("id", "superClass", "body"),
    "ConditionalExpression": ("test", "consequent", "alternate"),
    "ContinueStatement": ("label",),
    "DebuggerStatement": (),
    "Directive": ("expression",),
    "DoWhileStatement": ("body", "test"),
    "EmptyStatement": (),
    "ExportAllDeclaration": ("source",),
    "ExportDefaultDeclaration": ("declaration",),
    "ExportNamedDeclaration": ("declaration", "specifiers", "source"),
    "ExportSpecifier": ("exported", "local"),
    "ExpressionStatement": ("expression",),
    "ForStatement": ("init", "test", "update", "body"),
    "ForInStatement": ("left", "right", "body"),
    "ForOfStatement": ("left", "right", "body"),
    "FunctionDeclaration": ("id", "params", "body"),
    "FunctionExpression": ("id", "params", "body"),
    "Identifier": (),
    "IfStatement": ("test", "consequent", "alternate"),
    "Import": (),
    "ImportDeclaration": ("specifiers", "source"),
    "ImportDefaultSpecifier": ("local",),
    "ImportNamespaceSpecifier": ("local",),
    "ImportSpecifier": ("imported", "local"),
    "LabeledStatement": ("label", "body"),
    "Literal": (),
    "LogicalExpression": ("left", "right"),
    "MemberExpression": ("object", "property"),
    "MetaProperty": ("meta", "property"),
    "MethodDefinition": ("key", "value"),
    "NewExpression": ("callee", "arguments"),
    "ObjectExpression": ("properties",),
    "ObjectPattern": ("properties",),
    "Program": ("body",),
    "Property": ("key", "value"),
    "RestElement": ("argument",),
    "ReturnStatement": ("argument",),
    "SequenceExpression": ("expressions",),
    "SpreadElement": ("argument",),
    "Super": (),
    "SwitchStatement": ("discriminant", "cases"),
    "SwitchCase": ("test", "consequent"),
    "TaggedTemplateExpression": ("tag", "quasi"),
    "TemplateElement": (),
    "TemplateLiteral": ("quasis", "expressions"),
    "ThisExpression": (),
    "ThrowStatement": ("argument",),
    "TryStatement": ("block", "handler", "finalizer"),
    "UnaryExpression": ("argument",),
    "UpdateExpression": ("argument",),
    "VariableDeclaration": ("declarations",),
    "VariableDeclarator": ("id", "init"),
    "WhileStatement": ("test", "body"),
    "WithStatement": ("object", "body"),
    "YieldExpression": ("argument",),
}


def child_nodes(node: Node) -> Iterator[Node]:
    """Yield a node's children in visitor-key order."""
    keys = VISITOR_KEYS.get(node.type)
    if keys is None:
        # Unknown node kinds are walked through their fields in source order.
        children: List[Node] = []
        for key in node._fields:
            children.extend(node.children(key))
        yield from sorted(children, key=lambda child: child.range[0])
        return
    for key in keys:
        yield from node.children(key)


class Traverser:
    """
    Walks an AST once, calling handlers on entering and leaving nodes.

    Handlers are looked up by node type for entry and by ``"<Type>:exit"``
    for exit. ``parent`` is assigned to each node before its handlers run.
    The walk is iterative so deeply nested programs do not hit the
    interpreter's recursion limit.
    """

    def __init__(self, handlers: Mapping[str, Handler]):
        self.handlers = handlers

    def traverse(self, root: Node) -> int:
        """Traverse ``root`` and return the number of nodes visited."""
        visited = 0
        root.parent = None
        stack: List[Tuple[Node, bool]] = [(root, False)]
        while stack:
            node, leaving = stack.pop()
            if leaving:
                self._dispatch(node.type + EXIT_SUFFIX, node)
                continue

            visited += 1
            self._dispatch(node.type, node)
            stack.append((node, True))
            for child in reversed(list(child_nodes(node))):
                child.parent = node
                stack.append((child, False))

        logger.debug("Traversed %d nodes", visited)
        return visited

    def _dispatch(self, key: str, node: Node) -> None:
        handler = self.handlers.get(key)
        if handler is not None:
            handler(node)
