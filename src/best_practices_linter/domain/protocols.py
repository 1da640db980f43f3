from typing import Iterator, Protocol


class SyntaxNode(Protocol):
    """Minimum a tree node must expose to be dispatched to a Check."""

    kind: str
    file: str
    line: int


class NamespaceNode(SyntaxNode, Protocol):
    """A node that opens a namespace (module, class...)."""

    name: str


class ReferenceNode(SyntaxNode, Protocol):
    """A bare identifier reference."""

    value: str


class WalkableNode(SyntaxNode, Protocol):
    """Node shape the TreeWalker needs to descend into children."""

    def children(self) -> Iterator["WalkableNode"]:
        ...
