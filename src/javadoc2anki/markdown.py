"""Convert the documentation comments of a Java syntax tree to Markdown."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from javadoc2anki.config import MAX_HEADING_LEVEL
from javadoc2anki.exceptions import HeadingDepthExceededError, NotAChildError
from javadoc2anki.java_parser import parse_java_source
from javadoc2anki.schemas import NodeKind, SyntaxNode, SyntaxTree

logger = logging.getLogger(__name__)

_DOCUMENTABLE_KINDS = frozenset({NodeKind.TYPE, NodeKind.FIELD, NodeKind.METHOD})


@dataclass
class _RenderContext:
    """State threaded through a single walk."""

    depth: int = 1
    fragments: list[str] = field(default_factory=list)


def convert_source_to_markdown(
    source: str | bytes,
    *,
    parse: Callable[[str | bytes], SyntaxTree] = parse_java_source,
    newline: str = "\n",
) -> str:
    """Parse Java source and convert its documentation comments to Markdown.

    Args:
        source: Java source text or raw bytes.
        parse: Parse capability turning source into a syntax tree. Defaults to
            :func:`javadoc2anki.java_parser.parse_java_source`.
        newline: Line separator written after every output line.

    Returns:
        The Markdown document.

    Raises:
        SourceSyntaxError: If the source is not well-formed.
        HeadingDepthExceededError: If documented declarations nest deeper
            than six levels.
        NotAChildError: If the tree is inconsistent.
    """
    return extract_markdown(parse(source), newline=newline)


def extract_markdown(tree: SyntaxTree, *, newline: str = "\n") -> str:
    """Walk ``tree`` in source order and render one section per documented declaration.

    Types, fields and methods each open a heading level: a declaration's
    heading uses the current depth, and its children are visited one level
    deeper. Declarations without an attached comment are traversed but emit
    nothing.

    Raises:
        HeadingDepthExceededError: If a heading would need level 7 or more.
            Nothing is returned in that case.
        NotAChildError: If a declaration is missing from its parent's children.
    """
    context = _RenderContext()
    # (node, entering) pairs; a documentable node is pushed again with
    # entering=False so the depth is restored once its subtree is done.
    stack: list[tuple[SyntaxNode, bool]] = [(tree.root, True)]
    while stack:
        node, entering = stack.pop()
        if not entering:
            context.depth -= 1
            continue

        if node.kind in _DOCUMENTABLE_KINDS:
            _render_declaration(tree, node, context, newline)
            context.depth += 1
            stack.append((node, False))
        stack.extend((child, True) for child in reversed(tree.children_of(node)))

    return "".join(context.fragments)


def collect_orphan_comments(tree: SyntaxTree, node: SyntaxNode) -> list[SyntaxNode]:
    """Return the unattached comments sitting right before ``node``.

    These are the comments among ``node``'s siblings that follow the nearest
    preceding non-comment sibling, in source order. The scan never leaves the
    immediate parent.

    Raises:
        NotAChildError: If ``node`` has no parent or does not occur exactly
            once among its parent's children.
    """
    parent = tree.parent_of(node)
    if parent is None:
        raise NotAChildError(f"Node {node.index} ({node.grammar_type or node.kind.value}) has no parent")

    # sorted() is stable: equal positions keep their child order.
    siblings = sorted(tree.children_of(parent), key=lambda sibling: sibling.begin)
    matches = [i for i, sibling in enumerate(siblings) if sibling.index == node.index]
    if len(matches) != 1:
        raise NotAChildError(
            f"Node {node.index} found {len(matches)} times among the children of node {parent.index}"
        )
    position = matches[0]

    previous = -1
    for i in range(position - 1, -1, -1):
        if siblings[i].kind is not NodeKind.COMMENT:
            previous = i
            break

    return [sibling for sibling in siblings[previous + 1 : position] if sibling.kind is NodeKind.COMMENT]


def collect_documentation_comments(tree: SyntaxTree, node: SyntaxNode) -> list[SyntaxNode]:
    """Orphan comments before ``node`` followed by its attached comment."""
    comments = collect_orphan_comments(tree, node)
    attached = tree.comment_of(node)
    if attached is not None:
        comments.append(attached)
    return comments


def render_comment(content: str) -> str:
    """Drop one leading ``/`` and surrounding whitespace from comment text."""
    if content.startswith("/"):
        content = content[1:]
    return content.strip()


def _render_declaration(
    tree: SyntaxTree, node: SyntaxNode, context: _RenderContext, newline: str
) -> None:
    if tree.comment_of(node) is None:
        return

    # Only headings that are written are depth-checked; undocumented
    # declarations may nest past the last heading level.
    if context.depth > MAX_HEADING_LEVEL:
        raise HeadingDepthExceededError(
            f"'{node.name}' at line {node.begin.line} needs heading level {context.depth}; "
            f"Markdown headings stop at {MAX_HEADING_LEVEL}"
        )

    comments = collect_documentation_comments(tree, node)
    logger.debug("Rendering %s '%s' with %d comment(s)", node.kind.value, node.name, len(comments))

    context.fragments.append(f"{'#' * context.depth} {node.name}{newline}")
    for comment in comments:
        text = render_comment(comment.content or "")
        if text:
            context.fragments.append(f"{text}{newline}")
