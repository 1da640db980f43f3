"""Exceptions raised by the check framework."""


class BestPracticesError(Exception):
    """Base class for every error raised by best_practices_linter."""


class InvalidDispatchStateError(BestPracticesError, RuntimeError):
    """A check reported a violation while no node was under dispatch."""

    def __init__(self, check_name: str) -> None:
        super().__init__(
            f"{check_name}.add_error() called outside on_enter/on_leave: "
            "no node is under dispatch to take file and line from."
        )
        self.check_name = check_name


class CheckLoadError(BestPracticesError):
    """A configured check reference could not be resolved to a Check class."""
