"""Resolve configured ``module:Class`` references into Check classes."""

import importlib
import logging
from typing import Iterable

from best_practices_linter.domain.check import Check
from best_practices_linter.domain.errors import CheckLoadError

logger = logging.getLogger(__name__)


class CheckLoader:
    """Imports check classes named in configuration."""

    def load(self, ref: str) -> type[Check]:
        module_name, sep, class_name = ref.partition(":")
        if not sep or not module_name or not class_name:
            raise CheckLoadError(f"Invalid check reference {ref!r}: expected 'package.module:ClassName'.")
        try:
            module = importlib.import_module(module_name)
        except ImportError as exc:
            raise CheckLoadError(f"Cannot import module {module_name!r} for check {ref!r}: {exc}") from exc

        check_class = getattr(module, class_name, None)
        if not isinstance(check_class, type) or not issubclass(check_class, Check):
            raise CheckLoadError(f"{ref!r} does not name a Check subclass.")
        logger.debug("Loaded check %s", ref)
        return check_class

    def load_all(self, refs: Iterable[str]) -> list[type[Check]]:
        return [self.load(ref) for ref in refs]
