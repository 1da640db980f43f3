"""
Pylint plugin entry point: runs the configured best-practice checks on every
module pylint visits and reports their violations as pylint messages.

Enable with ``pylint --load-plugins=best_practices_linter.infrastructure.checker``.
"""

from typing import TYPE_CHECKING, Optional

import astroid  # type: ignore[import-untyped]
from pylint.checkers import BaseChecker

from best_practices_linter.domain.config import ConfigurationLoader
from best_practices_linter.infrastructure.check_loader import CheckLoader
from best_practices_linter.infrastructure.gateways.astroid_gateway import AstroidGateway
from best_practices_linter.use_cases.run_checks import RunChecksUseCase

if TYPE_CHECKING:
    from pylint.lint import PyLinter

    from best_practices_linter.domain.entities import Violation


class BestPracticesChecker(BaseChecker):
    """W9901: one message per violation raised by a configured check."""

    name: str = "best-practices"
    msgs = {
        "W9901": (
            "%s",
            "best-practice-violation",
            "Reported by a best-practice check listed in [tool.best-practices] checks.",
        ),
    }

    def __init__(
        self,
        linter: "PyLinter",
        config_loader: Optional[ConfigurationLoader] = None,
        check_loader: Optional[CheckLoader] = None,
        gateway: Optional[AstroidGateway] = None,
    ) -> None:
        super().__init__(linter)
        self.config_loader = config_loader or ConfigurationLoader()
        self._check_loader = check_loader or CheckLoader()
        self._gateway = gateway or AstroidGateway()
        self._use_case: Optional[RunChecksUseCase] = None

    def open(self) -> None:
        """Resolve the configured check classes once per pylint run."""
        check_classes = self._check_loader.load_all(self.config_loader.check_refs)
        self._use_case = RunChecksUseCase(check_classes, debug=self.config_loader.debug)

    def visit_module(self, node: astroid.nodes.Module) -> None:
        if self._use_case is None:
            self.open()
        for violation in self._use_case.execute(self._gateway.wrap(node)):
            self.add_message(
                "best-practice-violation",
                line=violation.line,
                node=node,
                args=(self._format(violation),),
            )

    @staticmethod
    def _format(violation: "Violation") -> str:
        if violation.reference_url:
            return f"{violation.message} ({violation.reference_url})"
        return violation.message


def register(linter: "PyLinter") -> None:
    """Register checkers."""
    linter.register_checker(BestPracticesChecker(linter))
