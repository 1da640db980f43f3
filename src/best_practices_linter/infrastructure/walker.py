"""Depth-first driver feeding enter/leave events to checks."""

import logging
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from best_practices_linter.domain.check import Check
    from best_practices_linter.domain.protocols import WalkableNode

logger = logging.getLogger(__name__)


class TreeWalker:
    """
    Walks one tree, calling ``on_enter`` before a node's children and
    ``on_leave`` after them, for every check interested in the node kind.

    Checks whose ``interesting_files()`` does not match the root's file are
    not run at all.
    """

    def __init__(self, checks: Sequence["Check"]) -> None:
        self.checks = list(checks)
        self._interest_cache: dict[tuple[int, str], bool] = {}

    def walk(self, root: "WalkableNode") -> None:
        applicable = [
            check for check in self.checks
            if check.interesting_files().search(root.file)
        ]
        skipped = len(self.checks) - len(applicable)
        if skipped:
            logger.debug("%d check(s) not applicable to %s", skipped, root.file)
        if applicable:
            self._walk(root, applicable)

    def _walk(self, node: "WalkableNode", checks: list["Check"]) -> None:
        interested = [check for check in checks if self._is_interested(check, node.kind)]
        for check in interested:
            check.on_enter(node)
        for child in node.children():
            self._walk(child, checks)
        for check in interested:
            check.on_leave(node)

    def _is_interested(self, check: "Check", kind: str) -> bool:
        key = (id(check), kind)
        if key not in self._interest_cache:
            self._interest_cache[key] = check.is_interested_in(kind)
        return self._interest_cache[key]
