"""Per-check-class table of traversal callbacks."""

from typing import TYPE_CHECKING, Callable, Iterator

from best_practices_linter.domain.entities import EventKey

if TYPE_CHECKING:
    from best_practices_linter.domain.check import Check
    from best_practices_linter.domain.protocols import SyntaxNode

Callback = Callable[["Check", "SyntaxNode"], None]


class CallbackRegistry:
    """
    Ordered callbacks keyed by (phase, node kind).

    Each Check subclass owns one registry, filled once when the class is
    created. Registration order is invocation order. Registering the same
    callback twice runs it twice; nothing here deduplicates.
    """

    def __init__(self) -> None:
        self._callbacks: dict[EventKey, list[Callback]] = {}

    def register(self, event_key: EventKey, callback: Callback) -> None:
        """Append a callback for an event key."""
        self._callbacks.setdefault(event_key, []).append(callback)

    def unregister(self, event_key: EventKey, callback: Callback) -> None:
        """Drop every registration of a callback for an event key."""
        remaining = [c for c in self._callbacks.get(event_key, ()) if c is not callback]
        if remaining:
            self._callbacks[event_key] = remaining
        else:
            self._callbacks.pop(event_key, None)

    def callbacks_for(self, event_key: EventKey) -> tuple[Callback, ...]:
        """Callbacks for an event key in registration order; empty if none."""
        return tuple(self._callbacks.get(event_key, ()))

    def extend(self, other: "CallbackRegistry") -> None:
        """Append every entry of another registry, keeping its order."""
        for event_key, callbacks in other.items():
            for callback in callbacks:
                self.register(event_key, callback)

    def items(self) -> Iterator[tuple[EventKey, tuple[Callback, ...]]]:
        for event_key, callbacks in self._callbacks.items():
            yield event_key, tuple(callbacks)

    def kinds(self) -> frozenset[str]:
        """Node kinds with at least one callback in either phase."""
        return frozenset(key.kind for key in self._callbacks)

    def __len__(self) -> int:
        return sum(len(callbacks) for callbacks in self._callbacks.values())
