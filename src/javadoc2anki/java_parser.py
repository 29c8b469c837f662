"""Parse Java source into a syntax tree with attributed comments."""

from __future__ import annotations

import logging
from typing import Iterator

import tree_sitter
import tree_sitter_java

from javadoc2anki.exceptions import SourceSyntaxError
from javadoc2anki.schemas import CommentStyle, NodeKind, Position, SyntaxNode, SyntaxTree

logger = logging.getLogger(__name__)

JAVA_LANGUAGE = tree_sitter.Language(tree_sitter_java.language())

_TYPE_DECLARATIONS = frozenset(
    {
        "class_declaration",
        "interface_declaration",
        "enum_declaration",
        "record_declaration",
        "annotation_type_declaration",
    }
)
_FIELD_DECLARATIONS = frozenset({"field_declaration", "constant_declaration"})
_METHOD_DECLARATIONS = frozenset({"method_declaration"})
# Older grammar releases use a single "comment" node type.
_COMMENT_TYPES = frozenset({"comment", "line_comment", "block_comment"})
# Member containers folded into their type declaration.
_TYPE_BODIES = frozenset(
    {
        "class_body",
        "interface_body",
        "enum_body",
        "enum_body_declarations",
        "annotation_type_body",
    }
)


def parse_java_source(source: str | bytes) -> SyntaxTree:
    """Parse a Java compilation unit.

    Only named grammar nodes are kept. Members of a type declaration become
    its direct children. Comments are then distributed the way JavaParser
    does it:

    1. A comment belongs to the innermost node whose range contains it.
    2. A one-line ``//`` comment starting on the line where a child ends is
       attached to that child.
    3. A comment directly before a child, with no blank line in between, is
       attached to that child. When several comments precede a child only the
       last one is attached.
    4. Everything else stays an orphan child of the containing node.

    A child that already carries a comment is never given a second one.

    Args:
        source: Java source text or UTF-8 bytes.

    Returns:
        The syntax tree. Its root (index 0) is the compilation unit.

    Raises:
        SourceSyntaxError: If the source contains a syntax error.
    """
    if isinstance(source, str):
        source = source.encode("utf-8")

    parser = tree_sitter.Parser(JAVA_LANGUAGE)
    root = parser.parse(source).root_node
    if root.has_error:
        raise SourceSyntaxError(_describe_error(root))

    tree = SyntaxTree()
    comments: list[SyntaxNode] = []
    _build_tree(tree, root, comments)
    comments.sort(key=lambda comment: comment.begin)
    _insert_comments(tree, tree.root, comments)
    logger.debug("Parsed %d nodes, %d comments", len(tree.nodes), len(comments))
    return tree


def _build_tree(tree: SyntaxTree, root: tree_sitter.Node, comments: list[SyntaxNode]) -> None:
    stack: list[tuple[tree_sitter.Node, int | None]] = [(root, None)]
    while stack:
        ts_node, parent = stack.pop()
        if ts_node.type in _COMMENT_TYPES:
            style, content = _split_comment(_text(ts_node))
            comments.append(
                tree.add(
                    NodeKind.COMMENT,
                    begin=_position(ts_node.start_point),
                    end=_position(ts_node.end_point),
                    grammar_type=ts_node.type,
                    content=content,
                    style=style,
                )
            )
            continue

        node = tree.add(
            _kind_of(ts_node.type),
            begin=_position(ts_node.start_point),
            end=_position(ts_node.end_point),
            parent=parent,
            name=_declaration_name(ts_node),
            grammar_type=ts_node.type,
        )
        children = list(_structural_children(ts_node))
        stack.extend((child, node.index) for child in reversed(children))


def _structural_children(ts_node: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
    for child in ts_node.named_children:
        if ts_node.type in _TYPE_DECLARATIONS and child.type in _TYPE_BODIES:
            yield from _members(child)
        else:
            yield child


def _members(body: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
    for child in body.named_children:
        if child.type in _TYPE_BODIES:
            yield from _members(child)
        else:
            yield child


def _insert_comments(tree: SyntaxTree, root: SyntaxNode, comments: list[SyntaxNode]) -> None:
    # Each node only attributes comments to its own children, so the order in
    # which (node, comments) pairs are handled does not matter.
    stack: list[tuple[SyntaxNode, list[SyntaxNode]]] = [(root, comments)]
    while stack:
        node, node_comments = stack.pop()
        if not node_comments:
            continue

        children = tree.children_of(node)
        nested: dict[int, list[SyntaxNode]] = {}
        remaining: list[SyntaxNode] = []
        for comment in node_comments:
            container = next((child for child in children if _contains(child, comment)), None)
            if container is None:
                remaining.append(comment)
            else:
                nested.setdefault(container.index, []).append(comment)

        stack.extend((child, nested[child.index]) for child in children if child.index in nested)

        remaining = _attribute_same_line_comments(tree, remaining, children)
        remaining = _attribute_preceding_comments(tree, remaining, children)
        if remaining:
            for comment in remaining:
                tree.adopt(node.index, comment.index)
            node.children.sort(key=lambda index: tree.get(index).begin)


def _attribute_same_line_comments(
    tree: SyntaxTree, comments: list[SyntaxNode], children: list[SyntaxNode]
) -> list[SyntaxNode]:
    remaining: list[SyntaxNode] = []
    for comment in comments:
        target = None
        if comment.style is CommentStyle.LINE:
            target = next(
                (
                    child
                    for child in children
                    if child.comment is None
                    and child.end.line == comment.begin.line
                    and child.end <= comment.begin
                ),
                None,
            )
        if target is None:
            remaining.append(comment)
        else:
            tree.attach_comment(target.index, comment.index)
    return remaining


def _attribute_preceding_comments(
    tree: SyntaxTree, comments: list[SyntaxNode], children: list[SyntaxNode]
) -> list[SyntaxNode]:
    attached: set[int] = set()
    previous: SyntaxNode | None = None
    for thing in sorted([*children, *comments], key=lambda n: n.begin):
        if thing.kind is NodeKind.COMMENT:
            previous = thing
            continue
        if previous is not None and thing.comment is None and not _blank_line_between(previous, thing):
            tree.attach_comment(thing.index, previous.index)
            attached.add(previous.index)
        previous = None
    return [comment for comment in comments if comment.index not in attached]


def _blank_line_between(comment: SyntaxNode, node: SyntaxNode) -> bool:
    return node.begin.line > comment.end.line + 1


def _contains(outer: SyntaxNode, inner: SyntaxNode) -> bool:
    return outer.begin <= inner.begin and inner.end <= outer.end


def _split_comment(text: str) -> tuple[CommentStyle, str]:
    """Return the comment style and its text without delimiters."""
    if text.startswith("//"):
        return CommentStyle.LINE, text[2:]
    if text.startswith("/**") and text != "/**/":
        return CommentStyle.JAVADOC, text[3:-2]
    return CommentStyle.BLOCK, text[2:-2]


def _kind_of(grammar_type: str) -> NodeKind:
    if grammar_type in _TYPE_DECLARATIONS:
        return NodeKind.TYPE
    if grammar_type in _FIELD_DECLARATIONS:
        return NodeKind.FIELD
    if grammar_type in _METHOD_DECLARATIONS:
        return NodeKind.METHOD
    return NodeKind.OTHER


def _declaration_name(ts_node: tree_sitter.Node) -> str | None:
    if ts_node.type in _FIELD_DECLARATIONS:
        # Only the first variable of "int a, b, c;" names the field.
        declarator = ts_node.child_by_field_name("declarator")
        name = declarator.child_by_field_name("name") if declarator is not None else None
    elif ts_node.type in _TYPE_DECLARATIONS or ts_node.type in _METHOD_DECLARATIONS:
        name = ts_node.child_by_field_name("name")
    else:
        return None
    return _text(name) if name is not None else None


def _describe_error(root: tree_sitter.Node) -> str:
    stack = [root]
    while stack:
        ts_node = stack.pop()
        if ts_node.type == "ERROR" or ts_node.is_missing:
            line, column = ts_node.start_point
            problem = f"missing '{ts_node.type}'" if ts_node.is_missing else "unexpected input"
            return f"Malformed Java source: {problem} at line {line + 1}, column {column + 1}"
        stack.extend(child for child in reversed(ts_node.children) if child.has_error or child.is_missing)
    return "Malformed Java source"


def _position(point: tuple[int, int]) -> Position:
    row, column = point
    return Position(row + 1, column + 1)


def _text(ts_node: tree_sitter.Node) -> str:
    return (ts_node.text or b"").decode("utf-8", errors="replace")
