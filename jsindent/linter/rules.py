"""Base class for lint rules."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .core import LintContext, LintFinding


class LintRule(ABC):
    """A check run over one parsed JavaScript document."""

    def __init__(self, rule_id: str, description: str):
        self.rule_id = rule_id
        self.description = description

    @abstractmethod
    def check(self, context: "LintContext") -> List["LintFinding"]:
        """
        Check one document.

        ``context.source`` is the token store: the merged token and comment
        stream with its lookups (first/last token of a node, token before or
        after, first token of a line). ``context.ast`` is its ESTree root; parent
        links are set as a :class:`~jsindent.traversal.Traverser` walks it.

        Returns:
            Findings for this document, each carrying a ``Fix`` when the
            rule can repair it
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.rule_id!r})"
