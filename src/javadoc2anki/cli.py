"""Command line interface: extract Markdown, sync files to Anki, show status."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from javadoc2anki.anki_connect import AnkiConnectClient
from javadoc2anki.config import JAVADOC2ANKI_ANKI_CONNECT_URL, JAVADOC2ANKI_STATUS_DB_PATH
from javadoc2anki.events import status_label
from javadoc2anki.exceptions import AnkiConnectUnavailableError, Javadoc2AnkiError
from javadoc2anki.markdown import convert_source_to_markdown
from javadoc2anki.status_store import FileStatusStore
from javadoc2anki.sync import SyncOptions, sync_files
from javadoc2anki.utils.logging_config import configure_logging


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging("DEBUG" if args.verbose else "WARNING")
    return args.handler(args)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="javadoc2anki", description="Turn Javadoc comments into Anki flashcards."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract = subparsers.add_parser("extract", help="Print the Markdown extracted from a Java file")
    extract.add_argument("file", type=Path)
    extract.add_argument("-o", "--output", type=Path, help="Write Markdown here instead of stdout")
    extract.set_defaults(handler=_run_extract)

    sync = subparsers.add_parser("sync", help="Create or update Anki notes for Java files")
    sync.add_argument("paths", nargs="+", type=Path)
    _add_project_arguments(sync)
    sync.add_argument("--anki-url", default=JAVADOC2ANKI_ANKI_CONNECT_URL, help="AnkiConnect URL")
    sync.set_defaults(handler=_run_sync)

    status = subparsers.add_parser("status", help="Show the sync status of files")
    status.add_argument("paths", nargs="*", type=Path, help="Files to show (default: every tracked file)")
    _add_project_arguments(status)
    status.set_defaults(handler=_run_status)

    return parser


def _add_project_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--project-root", type=Path, default=Path.cwd(), help="Project root directory")
    parser.add_argument(
        "--db",
        type=Path,
        help=f"Status database (default: <project-root>/{JAVADOC2ANKI_STATUS_DB_PATH})",
    )


def _run_extract(args: argparse.Namespace) -> int:
    try:
        markdown = convert_source_to_markdown(args.file.read_bytes())
    except (Javadoc2AnkiError, OSError) as exc:
        print(f"error: {args.file}: {exc}", file=sys.stderr)
        return 1

    if args.output:
        args.output.write_text(markdown, encoding="utf-8")
    else:
        sys.stdout.write(markdown)
    return 0


def _run_sync(args: argparse.Namespace) -> int:
    project_root = args.project_root.resolve()
    paths = [path.resolve() for path in _expand(args.paths)]

    async def run() -> int:
        with _open_store(args, project_root) as store:
            async with AnkiConnectClient(args.anki_url) as anki:
                try:
                    report = await sync_files(
                        paths, options=SyncOptions(project_root=project_root), anki=anki, store=store
                    )
                except AnkiConnectUnavailableError as exc:
                    print(f"error: {exc}", file=sys.stderr)
                    return 1

        for result in report.results:
            line = f"{result.status.value:<20} {result.path}"
            if result.error:
                line += f"  ({result.error})"
            print(line)
        print(f"Sync completed. Successfully synced: {report.synced_count}. Errors: {report.error_count}")
        return 0 if report.error_count == 0 else 1

    return asyncio.run(run())


def _run_status(args: argparse.Namespace) -> int:
    project_root = args.project_root.resolve()
    with _open_store(args, project_root) as store:
        paths = [str(path.resolve()) for path in _expand(args.paths)] if args.paths else store.paths()
        for path in paths:
            status = store.get_status(path)
            label = status_label(status) or ""
            print(f"{status.value:<20} {path} {label}".rstrip())
    return 0


def _open_store(args: argparse.Namespace, project_root: Path) -> FileStatusStore:
    db_path = args.db or JAVADOC2ANKI_STATUS_DB_PATH
    if not db_path.is_absolute():
        db_path = project_root / db_path
    return FileStatusStore(db_path)


def _expand(paths: list[Path]) -> list[Path]:
    """Replace directories by the files below them."""
    expanded: list[Path] = []
    for path in paths:
        if path.is_dir():
            expanded.extend(sorted(child for child in path.rglob("*") if child.is_file()))
        else:
            expanded.append(path)
    return expanded


if __name__ == "__main__":
    sys.exit(main())
