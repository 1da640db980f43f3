"""Dispatch engine every best-practice rule extends."""

import logging
import re
from typing import TYPE_CHECKING, ClassVar, Optional

from best_practices_linter.domain.entities import EventKey, Phase, Violation
from best_practices_linter.domain.errors import InvalidDispatchStateError
from best_practices_linter.domain.registry import Callback, CallbackRegistry

if TYPE_CHECKING:
    from best_practices_linter.domain.protocols import SyntaxNode

logger = logging.getLogger(__name__)

HANDLER_PREFIXES: dict[Phase, str] = {
    Phase.ENTER: "visit_",
    Phase.LEAVE: "leave_",
}

MATCH_ALL_FILES: re.Pattern[str] = re.compile(".*")


class CheckMixin:
    """
    Bookkeeping behaviour composed into a Check subclass.

    A mixin listed in a Check subclass's bases gets ``contribute_to_class``
    called once, when that subclass is created, and registers its callbacks
    there. Mixins are contributed in the order they appear in the bases.

    Subclasses of an already composed check do not get ``contribute_to_class``
    again; ``refresh_class`` runs for them instead, so a subclass overriding
    the mixin's settings has its inherited callbacks brought in line.
    """

    @classmethod
    def contribute_to_class(cls, check_class: type["Check"]) -> None:
        raise NotImplementedError

    @classmethod
    def refresh_class(cls, check_class: type["Check"]) -> None:
        """Re-sync callbacks inherited by ``check_class`` with its current settings."""


def _collect_handlers(check_class: type["Check"]) -> dict[EventKey, str]:
    """Map (phase, kind) to the name of the visit_<kind> / leave_<kind> method of a class."""
    handlers: dict[EventKey, str] = {}
    for attr_name in dir(check_class):
        for phase, prefix in HANDLER_PREFIXES.items():
            kind = attr_name[len(prefix):]
            if not attr_name.startswith(prefix) or not kind:
                continue
            if callable(getattr(check_class, attr_name)):
                handlers[EventKey(phase, kind)] = attr_name
    return handlers


class Check:
    """
    Base class for one pluggable rule.

    The traversal driver calls ``on_enter`` and ``on_leave`` for every node
    of a tree, depth first. For each call the check runs, in order:

    1. every callback its class registered for ``(phase, node.kind)``,
       inherited ones first, then those of its mixins in bases order;
    2. its own ``visit_<kind>`` (enter) or ``leave_<kind>`` (leave) method.

    When no handler exists, enter logs the node if the check runs in debug
    mode and leave does nothing. Handlers report issues with ``add_error``.

    One instance serves exactly one traversal of one tree.
    """

    registry: ClassVar[CallbackRegistry] = CallbackRegistry()
    handlers: ClassVar[dict[EventKey, str]] = {}

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        cls.registry = CallbackRegistry()
        for base in cls.__bases__:
            if issubclass(base, Check):
                cls.registry.extend(base.registry)
        for base in cls.__bases__:
            if issubclass(base, CheckMixin) and not issubclass(base, Check):
                base.contribute_to_class(cls)
        for klass in cls.__mro__:
            if "refresh_class" in vars(klass) and not issubclass(klass, Check):
                klass.refresh_class(cls)
        cls.handlers = _collect_handlers(cls)

    def __init__(self, debug: bool = False) -> None:
        super().__init__()
        self.debug = debug
        self.current_node: Optional["SyntaxNode"] = None
        self._errors: list[Violation] = []

    @classmethod
    def add_callback(cls, phase: Phase, kind: str, callback: Callback) -> None:
        """Register a callback on this class's own registry."""
        cls.registry.register(EventKey(phase, kind), callback)

    def interesting_node_kinds(self) -> frozenset[str]:
        """Node kinds this rule wants to examine."""
        return frozenset()

    def interesting_files(self) -> re.Pattern[str]:
        """Path pattern a file must match for this rule to run on it."""
        return MATCH_ALL_FILES

    def reference_url(self) -> str:
        """Documentation link attached to every violation."""
        return ""

    def is_interested_in(self, kind: str) -> bool:
        """Whether the driver should dispatch nodes of ``kind`` to this check."""
        cls = type(self)
        return (
            kind in self.interesting_node_kinds()
            or kind in cls.registry.kinds()
            or any(key.kind == kind for key in cls.handlers)
        )

    def on_enter(self, node: "SyntaxNode") -> None:
        self._dispatch(Phase.ENTER, node)

    def on_leave(self, node: "SyntaxNode") -> None:
        self._dispatch(Phase.LEAVE, node)

    def _dispatch(self, phase: Phase, node: "SyntaxNode") -> None:
        cls = type(self)
        event_key = EventKey(phase, node.kind)
        previous_node = self.current_node
        self.current_node = node
        try:
            for callback in cls.registry.callbacks_for(event_key):
                callback(self, node)
            handler_name = cls.handlers.get(event_key)
            if handler_name is not None:
                # Bound through the instance so static and class methods work too
                getattr(self, handler_name)(node)
            elif phase is Phase.ENTER and self.debug:
                logger.info(
                    "%s: no handler for %s node at %s:%s",
                    cls.__name__, node.kind, node.file, node.line,
                )
        except Exception as exc:
            exc.add_note(
                f"while dispatching {phase.value} of {node.kind!r} "
                f"({node.file}:{node.line}) to {cls.__name__}"
            )
            raise
        finally:
            self.current_node = previous_node

    def add_error(
        self,
        message: str,
        file: Optional[str] = None,
        line: Optional[int] = None,
    ) -> None:
        """Record a violation, defaulting file and line to the node under dispatch."""
        node = self.current_node
        if node is None:
            raise InvalidDispatchStateError(type(self).__name__)
        self._errors.append(
            Violation(
                file=node.file if file is None else file,
                line=node.line if line is None else line,
                message=message,
                reference_url=self.reference_url(),
            )
        )

    @property
    def errors(self) -> tuple[Violation, ...]:
        """Violations in the order they were added."""
        return tuple(self._errors)
