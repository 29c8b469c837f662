"""Inspect the syntax tree built for a Java file to check comment attribution."""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path

import httpx

from javadoc2anki.java_parser import parse_java_source
from javadoc2anki.schemas import NodeKind, SyntaxTree


def main() -> None:
    parser = argparse.ArgumentParser(description="Inspect node kinds and comment placement of a Java file.")
    parser.add_argument("--url", help="URL of a raw Java source file")
    parser.add_argument("--file", help="Local Java file path")
    parser.add_argument("--orphans", action="store_true", help="List orphan comments with their positions")
    args = parser.parse_args()

    if not args.url and not args.file:
        parser.error("Provide --url or --file")

    source = load_source(url=args.url, file_path=args.file)
    tree = parse_java_source(source)
    kinds, grammar_types, styles = collect_stats(tree)

    print("Kinds:")
    for name, count in kinds.most_common():
        print(f"{name}: {count}")

    print("\nGrammar types:")
    for name, count in grammar_types.most_common():
        print(f"{name}: {count}")

    print("\nComment styles:")
    for name, count in styles.most_common():
        print(f"{name}: {count}")

    if args.orphans:
        print("\nOrphan comments:")
        for node in tree.nodes:
            parent = tree.parent_of(node)
            if node.kind is NodeKind.COMMENT and parent is not None and node.index in parent.children:
                print(f"{node.begin.line}:{node.begin.column} {node.content!r}")


def load_source(*, url: str | None, file_path: str | None) -> str:
    if url:
        response = httpx.get(url, follow_redirects=True, timeout=15.0)
        response.raise_for_status()
        return response.text

    path = Path(file_path or "")
    if not path.is_file():
        raise FileNotFoundError(f"Java file not found: {path}")
    return path.read_text(encoding="utf-8")


def collect_stats(tree: SyntaxTree) -> tuple[Counter, Counter, Counter]:
    kinds = Counter()
    grammar_types = Counter()
    styles = Counter()

    for node in tree.nodes:
        kinds[node.kind.value] += 1
        if node.grammar_type:
            grammar_types[node.grammar_type] += 1
        if node.style is not None:
            styles[node.style.value] += 1
    return kinds, grammar_types, styles


if __name__ == "__main__":
    main()
