"""chronodoc CLI entry points.
This module exposes commands for saving and navigating document history.
It maps argparse commands onto the blocking history facade.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
import json
from pathlib import Path
import sys
from typing import Any, Sequence

from core.config import ChronodocConfig
from core.errors import ChronodocError
from core.layout_file import load_layout_file
from core.types import VersionState
from history.document_history import DocumentHistory
from history.factory import open_history

_NAVIGATION_COMMANDS = {
    "undo": "apply_previous_version",
    "redo": "apply_next_version",
    "rewind": "apply_initial_version",
    "fast-forward": "apply_latest_version",
}


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="chronodoc", description="JSON document history CLI")
    parser.add_argument("--data-root", help="Override CHRONODOC_DATA_ROOT for this command")
    parser.add_argument("--layout", help="YAML file naming snapshot, head, and history paths")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on store read faults instead of degrading them",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("init", help="Create missing history files")
    subparsers.add_parser("recover", help="Finish or discard an interrupted save/apply")
    _add_save_command(subparsers)
    subparsers.add_parser("versions", help="List recorded versions")
    subparsers.add_parser("current", help="Print the head version")
    _add_version_argument_command(subparsers, "show", "Print the document as of a version")
    _add_version_argument_command(subparsers, "checkout", "Apply a version to the document")
    subparsers.add_parser("previous", help="Print the version before the head")
    subparsers.add_parser("next", help="Print the version after the head")
    subparsers.add_parser("initial", help="Print the document as of the first version")
    subparsers.add_parser("latest", help="Print the document as of the newest version")
    subparsers.add_parser("undo", help="Apply the version before the head")
    subparsers.add_parser("redo", help="Apply the version after the head")
    subparsers.add_parser("rewind", help="Apply the first version")
    subparsers.add_parser("fast-forward", help="Apply the newest version")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the chronodoc CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code: 0 on success, 1 when the requested version does
        not exist or a store fails, 2 for invalid input.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        history = _build_history(args)
        return _dispatch(history, args)
    except ChronodocError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1


def _build_history(args: argparse.Namespace) -> DocumentHistory:
    """Build history facade with CLI overrides applied.

    Args:
        args: Parsed CLI args.

    Returns:
        Configured history facade.
    """
    config = ChronodocConfig.from_env()
    if args.data_root:
        config = replace(config, data_root=Path(args.data_root).expanduser().resolve())
    if args.strict:
        config = replace(config, strict_errors=True)
    layout = load_layout_file(args.layout) if args.layout else None
    return open_history(config, layout)


def _dispatch(history: DocumentHistory, args: argparse.Namespace) -> int:
    command = args.command
    if command in ("init", "recover"):
        result = history.init() if command == "init" else history.recover()
        print(f"{result.action}\t{result.version_id or '-'}")
        return 0
    if command == "save":
        return _run_save_command(history, args)
    if command == "versions":
        return _run_versions_command(history)
    if command == "current":
        print(history.current_version() or "-")
        return 0
    if command == "show":
        return _print_state(history.reconstruct(args.version_id), f"version {args.version_id}")
    if command == "checkout":
        return _print_applied(history.apply_version(args.version_id), f"version {args.version_id}")
    if command in ("previous", "next"):
        lookup = history.previous_version if command == "previous" else history.next_version
        return _print_version_id(lookup(), f"{command} version")
    if command == "initial":
        return _print_state(history.initial_version(), "initial version")
    if command == "latest":
        return _print_state(history.latest_version(), "latest version")
    if command in _NAVIGATION_COMMANDS:
        state = getattr(history, _NAVIGATION_COMMANDS[command])()
        return _print_applied(state, f"target version for {command}")
    print(f"error: unsupported command {command}", file=sys.stderr)
    return 2


def _run_save_command(history: DocumentHistory, args: argparse.Namespace) -> int:
    """Handle save command.

    Args:
        history: History facade.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    try:
        target = _read_target_document(args.document)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as error:
        print(f"error: cannot read target document {args.document}: {error}", file=sys.stderr)
        return 2
    result = history.save_new_version(target)
    if not result:
        print("unchanged")
        return 0
    print(result.version_id)
    return 0


def _run_versions_command(history: DocumentHistory) -> int:
    """Handle versions command.

    Args:
        history: History facade.

    Returns:
        Exit code.
    """
    head = history.current_version()
    for version_id in history.list_versions():
        print(f"{version_id}\t{'head' if version_id == head else '-'}")
    return 0


def _read_target_document(source: str) -> Any:
    if source == "-":
        return json.loads(sys.stdin.read())
    return json.loads(Path(source).expanduser().read_text(encoding="utf-8"))


def _print_state(state: VersionState | None, label: str) -> int:
    if state is None:
        print(f"{label} not found", file=sys.stderr)
        return 1
    print(json.dumps(state.document, indent=2, sort_keys=True))
    return 0


def _print_applied(state: VersionState | None, label: str) -> int:
    if state is None:
        print(f"{label} not found", file=sys.stderr)
        return 1
    print(state.version_id)
    return 0


def _print_version_id(version_id: str | None, label: str) -> int:
    if version_id is None:
        print(f"{label} not found", file=sys.stderr)
        return 1
    print(version_id)
    return 0


def _add_save_command(subparsers: Any) -> None:
    """Register save subcommand."""
    parser = subparsers.add_parser("save", help="Record a new document state")
    parser.add_argument("document", help="JSON file holding the new state, or - for stdin")


def _add_version_argument_command(subparsers: Any, name: str, help_text: str) -> None:
    """Register a subcommand that takes one version id."""
    parser = subparsers.add_parser(name, help=help_text)
    parser.add_argument("version_id", help="Version identifier")
