"""The ``indent`` lint rule."""

from __future__ import annotations

import logging
from functools import partial
from typing import Dict, List, Optional

from jsindent.config import IndentConfig
from jsindent.linter.core import LintContext, LintFinding
from jsindent.linter.rules import LintRule
from jsindent.nodes import Node
from jsindent.source import SourceCode
from jsindent.traversal import EXIT_SUFFIX, Handler, Traverser
from .check import IndentCheck
from .constructs import ENTER_RULES, EXIT_RULES
from .parens import add_parens_indent
from .validator import RULE_ID, reconcile_comments, validate_tokens


logger = logging.getLogger(__name__)


class IndentRule(LintRule):
    """Enforce consistent indentation."""

    def __init__(self, config: Optional[IndentConfig] = None):
        super().__init__(
            rule_id=RULE_ID,
            description="Enforce consistent indentation",
        )
        self.config = config or IndentConfig()

    def check(self, context: LintContext) -> List[LintFinding]:
        findings = self.run(context.source).findings
        findings.sort(key=lambda f: (f.line, f.column))
        return findings

    def run(self, source: SourceCode) -> IndentCheck:
        """Walk ``source`` and run the post-walk passes, returning the finished check."""
        check = IndentCheck(source=source, config=self.config)
        Traverser(self._handlers(check)).traverse(source.ast)
        return check

    def _handlers(self, check: IndentCheck) -> Dict[str, Handler]:
        handlers: Dict[str, Handler] = {
            node_type: partial(rule, check) for node_type, rule in ENTER_RULES.items()
        }
        for node_type, rule in EXIT_RULES.items():
            handlers[node_type + EXIT_SUFFIX] = partial(rule, check)
        handlers["Program" + EXIT_SUFFIX] = partial(self._finish, check)
        return handlers

    def _finish(self, check: IndentCheck, node: Node) -> None:
        add_parens_indent(check)
        logger.debug("Offset graph holds %d edges", check.graph.edge_count())
        check.findings.extend(validate_tokens(check))
        check.findings.extend(reconcile_comments(check))
