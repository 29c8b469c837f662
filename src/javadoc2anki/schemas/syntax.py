"""Syntax tree models."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from pydantic import BaseModel, Field


class NodeKind(str, Enum):
    """Structural role of a syntax node."""

    TYPE = "type"
    FIELD = "field"
    METHOD = "method"
    COMMENT = "comment"
    OTHER = "other"


class CommentStyle(str, Enum):
    """Delimiter style of a comment."""

    LINE = "line"
    BLOCK = "block"
    JAVADOC = "javadoc"


class Position(NamedTuple):
    """1-based source position. Tuples order by line, then column."""

    line: int
    column: int


class SyntaxNode(BaseModel):
    """A node stored in a :class:`SyntaxTree` arena.

    Links to other nodes are arena indices. ``parent`` is a traversal
    convenience and never implies ownership. An attached comment keeps
    ``parent`` pointing at the node it documents but is not listed among that
    node's ``children``.
    """

    index: int
    kind: NodeKind
    grammar_type: str = ""
    name: str | None = None
    begin: Position
    end: Position
    parent: int | None = None
    children: list[int] = Field(default_factory=list)
    comment: int | None = None
    content: str | None = None
    style: CommentStyle | None = None


class SyntaxTree(BaseModel):
    """Arena of syntax nodes; the root is the node at index 0."""

    nodes: list[SyntaxNode] = Field(default_factory=list)

    @property
    def root(self) -> SyntaxNode:
        return self.nodes[0]

    def get(self, index: int) -> SyntaxNode:
        return self.nodes[index]

    def add(
        self,
        kind: NodeKind,
        *,
        begin: Position | tuple[int, int],
        end: Position | tuple[int, int],
        parent: int | None = None,
        name: str | None = None,
        grammar_type: str = "",
        content: str | None = None,
        style: CommentStyle | None = None,
    ) -> SyntaxNode:
        """Append a node to the arena, linking it under ``parent`` if given."""
        node = SyntaxNode(
            index=len(self.nodes),
            kind=kind,
            grammar_type=grammar_type,
            name=name,
            begin=Position(*begin),
            end=Position(*end),
            content=content,
            style=style,
        )
        self.nodes.append(node)
        if parent is not None:
            self.adopt(parent, node.index)
        return node

    def adopt(self, parent: int, child: int) -> None:
        """Make ``child`` the last child of ``parent``."""
        self.nodes[child].parent = parent
        self.nodes[parent].children.append(child)

    def attach_comment(self, node: int, comment: int) -> None:
        """Attach ``comment`` to ``node`` as its documentation comment."""
        self.nodes[comment].parent = node
        self.nodes[node].comment = comment

    def parent_of(self, node: SyntaxNode) -> SyntaxNode | None:
        if node.parent is None:
            return None
        return self.nodes[node.parent]

    def children_of(self, node: SyntaxNode) -> list[SyntaxNode]:
        return [self.nodes[index] for index in node.children]

    def comment_of(self, node: SyntaxNode) -> SyntaxNode | None:
        if node.comment is None:
            return None
        return self.nodes[node.comment]
