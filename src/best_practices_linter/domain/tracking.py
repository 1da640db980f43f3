"""Mixins that keep traversal context for a Check."""

from typing import TYPE_CHECKING, ClassVar, Optional

from best_practices_linter.domain.check import CheckMixin
from best_practices_linter.domain.entities import EventKey, Phase, Visibility

if TYPE_CHECKING:
    from best_practices_linter.domain.check import Check
    from best_practices_linter.domain.protocols import NamespaceNode, ReferenceNode
    from best_practices_linter.domain.registry import Callback

VISIBILITY_KEYWORDS: dict[str, Visibility] = {v.value: v for v in Visibility}


def _enter_namespace(check: "ScopeTracker", node: "NamespaceNode") -> None:
    check._namespaces.append(node.name)


def _leave_namespace(check: "ScopeTracker", node: "NamespaceNode") -> None:
    # Unpaired leave events are a driver bug; the IndexError is left to surface.
    check._namespaces.pop()


def _track_visibility(check: "VisibilityTracker", node: "ReferenceNode") -> None:
    visibility = VISIBILITY_KEYWORDS.get(str(node.value))
    if visibility is not None:
        check._visibility = visibility


def _sync_kinds(
    check_class: type["Check"],
    kinds_attr: str,
    registered_attr: str,
    callbacks: tuple[tuple[Phase, "Callback"], ...],
) -> None:
    """
    Register ``callbacks`` for the kinds named by ``check_class.<kinds_attr>``.

    ``<registered_attr>`` records the kinds the class's registry currently
    holds callbacks for. When it is unset the mixin's callbacks are added for
    every kind; otherwise only the difference is applied, so a subclass that
    overrides the kinds replaces what it inherited.
    """
    wanted = tuple(getattr(check_class, kinds_attr))
    registered: Optional[tuple[str, ...]] = getattr(check_class, registered_attr, None)
    if registered is None:
        registered = ()
    elif wanted == registered:
        return
    for kind in registered:
        if kind not in wanted:
            for phase, callback in callbacks:
                check_class.registry.unregister(EventKey(phase, kind), callback)
    for kind in wanted:
        if kind not in registered:
            for phase, callback in callbacks:
                check_class.add_callback(phase, kind, callback)
    setattr(check_class, registered_attr, wanted)


class ScopeTracker(CheckMixin):
    """
    Remembers the namespaces enclosing the node under visit.

    Entering a node whose kind is in ``namespace_kinds`` pushes its name,
    leaving it pops. ``qualified_name`` prefixes a node's own name with
    those namespaces, outermost first; unnamed namespaces add no prefix.
    """

    namespace_kinds: ClassVar[tuple[str, ...]] = ("module",)
    namespace_separator: ClassVar[str] = "."

    _NAMESPACE_CALLBACKS = ((Phase.ENTER, _enter_namespace), (Phase.LEAVE, _leave_namespace))

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._namespaces: list[str] = []

    @classmethod
    def contribute_to_class(cls, check_class: type["Check"]) -> None:
        # Listing the mixin directly always registers, even if a parent already did.
        check_class._scope_kinds = None
        _sync_kinds(check_class, "namespace_kinds", "_scope_kinds", cls._NAMESPACE_CALLBACKS)

    @classmethod
    def refresh_class(cls, check_class: type["Check"]) -> None:
        if getattr(check_class, "_scope_kinds", None) is not None:
            _sync_kinds(check_class, "namespace_kinds", "_scope_kinds", cls._NAMESPACE_CALLBACKS)

    @property
    def namespaces(self) -> tuple[str, ...]:
        return tuple(self._namespaces)

    def qualified_name(self, node: "NamespaceNode") -> str:
        """``node.name`` prefixed by every enclosing namespace."""
        prefix = "".join(
            f"{namespace}{self.namespace_separator}" for namespace in self._namespaces if namespace
        )
        return prefix + node.name


class VisibilityTracker(CheckMixin):
    """
    Follows ``public`` / ``protected`` / ``private`` references.

    The visibility holds for every following member until another keyword
    is seen; it is not reset when a class or module ends.
    """

    reference_kinds: ClassVar[tuple[str, ...]] = ("name",)

    _VISIBILITY_CALLBACKS = ((Phase.ENTER, _track_visibility),)

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._visibility: Visibility = Visibility.PUBLIC

    @classmethod
    def contribute_to_class(cls, check_class: type["Check"]) -> None:
        check_class._visibility_kinds = None
        _sync_kinds(check_class, "reference_kinds", "_visibility_kinds", cls._VISIBILITY_CALLBACKS)

    @classmethod
    def refresh_class(cls, check_class: type["Check"]) -> None:
        if getattr(check_class, "_visibility_kinds", None) is not None:
            _sync_kinds(check_class, "reference_kinds", "_visibility_kinds", cls._VISIBILITY_CALLBACKS)

    def current_visibility(self) -> Visibility:
        return self._visibility
