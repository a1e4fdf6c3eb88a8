"""CLI entry point for processing work items on a kanban board.

Usage:
  python -m taskmanager.execution process [ITEM_ID ...] [--kanban-dir kanban] [--keep-going] [--log-level INFO]
  python -m taskmanager.execution show [--kanban-dir kanban] [--log-level INFO]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from taskmanager.execution.config import RunConfig
from taskmanager.execution.log_setup import setup_logging


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Work item processing CLI")
    subparsers = parser.add_subparsers(dest="command")

    process_parser = subparsers.add_parser("process", help="Process work items")
    process_parser.add_argument("item_ids", nargs="*", type=int, help="Item IDs (default: all)")
    process_parser.add_argument("--kanban-dir", default="kanban", help="Kanban directory")
    process_parser.add_argument(
        "--keep-going", action="store_true", help="Skip unsupported items instead of stopping"
    )
    _add_log_level(process_parser)

    show_parser = subparsers.add_parser("show", help="Show the board by column")
    show_parser.add_argument("--kanban-dir", default="kanban", help="Kanban directory")
    _add_log_level(show_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    setup_logging(args.log_level)

    if args.command == "process":
        config = RunConfig(
            kanban_dir=Path(args.kanban_dir),
            keep_going=args.keep_going,
            log_level=args.log_level,
        )
        _process_command(config, args.item_ids or None)
    elif args.command == "show":
        _show_command(Path(args.kanban_dir))


def _add_log_level(subparser: argparse.ArgumentParser) -> None:
    default = RunConfig().log_level
    subparser.add_argument("--log-level", default=default, help=f"Log level (default: {default})")


def _load_board(kanban_dir: Path):
    from taskmanager.board import BoardFormatError, scan_board

    if not kanban_dir.is_dir():
        print(f"Error: Kanban directory not found: {kanban_dir}", file=sys.stderr)
        sys.exit(1)
    try:
        return scan_board(kanban_dir)
    except BoardFormatError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _process_command(config: RunConfig, item_ids: list[int] | None) -> None:
    from taskmanager.execution.convenience import process_board
    from taskmanager.processor import UnsupportedToDoItemType

    board = _load_board(config.kanban_dir)
    try:
        result = process_board(board, item_ids=item_ids, config=config)
    except (KeyError, ValueError, UnsupportedToDoItemType) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Processed: {len(result.processed)} item(s)")
    if result.events:
        print("Events:")
        for event in result.events:
            print(f"  - {event}")
    if result.notifications:
        print("Notifications:")
        for n in result.notifications:
            print(f"  - {n.recipient} <- {n.item.kind.value} {n.item.id} ({n.kind})")
    if result.unsupported:
        print("Unsupported: " + ", ".join(str(i) for i in result.unsupported), file=sys.stderr)
        sys.exit(1)


def _show_command(kanban_dir: Path) -> None:
    from taskmanager.model import ToDoItemStatus

    board = _load_board(kanban_dir)
    for status in ToDoItemStatus:
        items = board.items_in(status)
        print(f"{status.value.upper()} ({len(items)})")
        for item in items:
            print(f"  [{item.kind.value}] {item.id}: {item.title}")


if __name__ == "__main__":
    main()
