#!/usr/bin/env python3
"""Command-line entry point: wires the collaborators together and runs the TUI."""

import argparse
import asyncio
import logging
import sys
from importlib.metadata import PackageNotFoundError, version as pkg_version
from pathlib import Path
from typing import List, Optional

from config import get_editor, get_key_overrides, get_status_ttl_ticks, get_tick_interval, set_editor
from infrastructure.file_repository import JsonProjectRepository
from interface.data_dir_resolver import DataPaths, resolve_data_paths
from interface.errors import FatalError, TerminalStateError
from interface.tui_app import PlanerTUI
from interface.tui_editing import EditSession
from interface.tui_input import KeyMap, TerminalKeySource
from interface.tui_terminal import Terminal

logger = logging.getLogger("weeklyplaner")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="planer",
        description="Weekly planer: projects and their tasks in the terminal.",
    )
    parser.add_argument("--data-dir", type=Path, default=None, help="data directory (default: ~/.weeklyplaner)")
    parser.add_argument("--editor", default="", help="editor command for task content (default: $VISUAL, $EDITOR, vim)")
    parser.add_argument(
        "--save-editor",
        action="store_true",
        help="store --editor in config.yaml (an empty value clears it) and exit",
    )
    parser.add_argument("--debug", action="store_true", help="write debug records to the log file")
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    return parser


def configure_logging(paths: DataPaths, debug: bool = False) -> None:
    """Log to a file in the data directory; the terminal belongs to the TUI."""
    level = logging.DEBUG if debug else logging.INFO
    try:
        paths.data_dir.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(paths.log_file, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level)


def build_tui(paths: DataPaths, terminal: Terminal, editor: str = "") -> PlanerTUI:
    tui = PlanerTUI(
        repository=JsonProjectRepository(paths),
        key_source=TerminalKeySource(terminal.input),
        terminal=terminal,
        key_map=KeyMap.with_overrides(get_key_overrides(paths.data_dir)),
        tick_interval=get_tick_interval(paths.data_dir),
        status_ttl=get_status_ttl_ticks(paths.data_dir),
    )
    tui.edit_session = EditSession(
        terminal,
        paths,
        start_events=tui.start_events,
        editor=editor or get_editor(paths.data_dir),
    )
    return tui


def _restore_after_failure(terminal: Terminal) -> None:
    try:
        terminal.restore()
    except TerminalStateError as exc:
        logger.error("Terminal could not be restored: %s", exc)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.version:
        try:
            print(pkg_version("weeklyplaner"))
        except PackageNotFoundError:
            print("0.0.0")
        return 0

    paths = resolve_data_paths(args.data_dir)
    configure_logging(paths, args.debug)

    if args.save_editor:
        try:
            set_editor(args.editor, paths.data_dir)
        except OSError as exc:
            logger.error("Could not save editor: %s", exc)
            print(f"planer: could not save editor: {exc}", file=sys.stderr)
            return 1
        saved = get_editor(paths.data_dir)
        print(f"Editor set to {saved!r}" if saved else "Editor setting cleared")
        return 0

    terminal = Terminal()
    tui = build_tui(paths, terminal, editor=args.editor)
    tui.import_projects()

    try:
        terminal.prepare()
        asyncio.run(tui.run())
        terminal.restore()
    except FatalError as exc:
        logger.critical("Fatal: %s", exc, exc_info=True)
        _restore_after_failure(terminal)
        print(f"planer: {exc}", file=sys.stderr)
        return 1
    except BaseException:
        _restore_after_failure(terminal)
        raise
    return 0


__all__ = ["build_parser", "configure_logging", "build_tui", "main"]
