import logging
from pathlib import Path
from typing import Iterator, Optional

import astroid  # type: ignore[import-untyped]

UNKNOWN_FILE = "<unknown>"


class AstroidNode:
    """
    Presents an astroid node through the SyntaxNode contract.

    ``kind`` is the lower-cased astroid class name, the same suffix pylint
    uses for its ``visit_<kind>`` methods (``module``, ``classdef``,
    ``functiondef``, ``call``, ``name``...).
    """

    __slots__ = ("node",)

    def __init__(self, node: astroid.nodes.NodeNG) -> None:
        self.node = node

    @property
    def kind(self) -> str:
        return type(self.node).__name__.lower()

    @property
    def file(self) -> str:
        return getattr(self.node.root(), "file", None) or UNKNOWN_FILE

    @property
    def line(self) -> int:
        return self.node.fromlineno or 0

    @property
    def name(self) -> str:
        return getattr(self.node, "name", "") or ""

    @property
    def value(self) -> str:
        """Identifier for references, literal for constants, source text otherwise."""
        if isinstance(self.node, (astroid.nodes.Name, astroid.nodes.AssignName)):
            return self.node.name
        if isinstance(self.node, astroid.nodes.Const):
            return str(self.node.value)
        return self.node.as_string()

    def children(self) -> Iterator["AstroidNode"]:
        for child in self.node.get_children():
            yield AstroidNode(child)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, AstroidNode) and other.node is self.node

    def __hash__(self) -> int:
        return id(self.node)

    def __repr__(self) -> str:
        return f"<AstroidNode {self.kind} {self.file}:{self.line}>"


def module_name_from_path(path: str) -> str:
    """Dotted module name for a relative or absolute source path (``app/models/user.py`` -> ``app.models.user``)."""
    source_path = Path(path)
    parts = [part for part in source_path.with_suffix("").parts if part != source_path.anchor]
    if parts and parts[-1] == "__init__":
        parts.pop()
    return ".".join(parts)


class AstroidGateway:
    """Turns Python source into walkable AstroidNode trees."""

    def parse_source(
        self, source: str, path: Optional[str] = None, module_name: str = ""
    ) -> AstroidNode:
        """
        Parse source text; syntax errors propagate as astroid.AstroidSyntaxError.

        Without an explicit ``module_name`` the dotted name is derived from ``path``.
        """
        if not module_name and path:
            module_name = module_name_from_path(path)
        module = astroid.parse(source, module_name=module_name, path=path)
        # astroid stores an absolute path (or "<?>"); keep the path as given
        module.file = path
        return AstroidNode(module)

    def parse_file(self, file_path: str) -> Optional[AstroidNode]:
        """Parse a file and return its wrapped Module node, or None if it cannot be parsed."""
        path = Path(file_path)
        if not path.exists():
            return None
        try:
            module = astroid.MANAGER.ast_from_file(str(path), source=True)
        except astroid.AstroidBuildingError:
            logging.warning("Could not parse %s", file_path)
            return None
        return AstroidNode(module)

    def wrap(self, node: astroid.nodes.NodeNG) -> AstroidNode:
        return AstroidNode(node)
