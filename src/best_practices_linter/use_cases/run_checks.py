from typing import TYPE_CHECKING, Optional, Sequence

from best_practices_linter.domain.entities import Violation
from best_practices_linter.infrastructure.gateways.astroid_gateway import AstroidGateway
from best_practices_linter.infrastructure.walker import TreeWalker

if TYPE_CHECKING:
    from best_practices_linter.domain.check import Check
    from best_practices_linter.domain.protocols import WalkableNode


class RunChecksUseCase:
    """Run a set of check classes over one tree and merge their violations."""

    def __init__(
        self,
        check_classes: Sequence[type["Check"]],
        debug: bool = False,
        gateway: Optional[AstroidGateway] = None,
    ) -> None:
        self.check_classes = list(check_classes)
        self.debug = debug
        self._gateway = gateway or AstroidGateway()

    def execute(self, root: "WalkableNode") -> list[Violation]:
        """Return every violation found in ``root``, sorted by file then line."""
        # Fresh instances per tree: scope and visibility state must not leak across files.
        checks = [check_class(debug=self.debug) for check_class in self.check_classes]
        TreeWalker(checks).walk(root)
        violations = [violation for check in checks for violation in check.errors]
        return sorted(violations, key=lambda v: (v.file, v.line))

    def execute_file(self, file_path: str) -> list[Violation]:
        """Parse ``file_path`` and run the checks on it; unparseable files yield nothing."""
        root = self._gateway.parse_file(file_path)
        if root is None:
            return []
        return self.execute(root)
