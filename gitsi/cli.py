"""Command-line front door for gitsi.

Parses CLI options, opens the repository, and either prints the categorized
status list or dispatches into the interactive browser runtime.
"""

from __future__ import annotations

import argparse
import logging
import logging.handlers
import os
import sys
from collections.abc import Iterable
from pathlib import Path

from platformdirs import user_config_dir

from .config import APP_NAME, load_pager, load_search_term, load_style, load_theme_name
from .diff import normalize_style
from .entries import Entry, build_entries
from .git_backend import GitBackend, GitError, NoEntriesError
from .runtime import run_browser
from .ui_theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)


def _configure_logging(debug: bool) -> None:
    """Configure logging. When debug=True, logs to file at DEBUG level."""
    if not debug:
        # The TUI owns the terminal, so nothing may reach stderr.
        logging.disable(logging.CRITICAL)
        return

    log_dir = Path(user_config_dir(APP_NAME, appauthor=False))
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        log_dir / "debug.log",
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.DEBUG)


def _stdin_is_tty() -> bool:
    try:
        return os.isatty(sys.stdin.fileno())
    except (OSError, ValueError):
        return False


def format_listing(entries: Iterable[Entry]) -> str:
    """Render entries as plain text: header titles and ``note<TAB>label`` rows."""
    lines: list[str] = []
    for entry in entries:
        if entry.is_header:
            lines.append(entry.label)
        else:
            lines.append(f"{entry.note}\t{entry.label}")
    return "".join(line + "\n" for line in lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitsi",
        description="Browse and stage git status entries in an interactive terminal list.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Path inside the repository. Defaults to current directory.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default=None, help="Pygments style name for diffs.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--debug", action="store_true", help="Write a debug log to the config directory.")
    parser.add_argument("--print", action="store_true", help="Print the status list and exit without the interactive view.")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments and browse the repository at ``path``.

    Returns the process exit status: 0 on a normal quit or when there is
    nothing to show, 1 when git fails.
    """
    args = build_parser().parse_args(argv)
    _configure_logging(args.debug)

    path = Path(args.path) if args.path else Path.cwd()
    try:
        backend = GitBackend.open(path)
        if args.print or not _stdin_is_tty():
            records = backend.get_status()
            if not records:
                raise NoEntriesError("No entries found")
            sys.stdout.write(format_listing(build_entries(records)))
            return 0
        run_browser(
            backend,
            theme=resolve_theme(args.theme or load_theme_name(), no_color=args.no_color),
            style=normalize_style(args.style or load_style()),
            no_color=args.no_color,
            pager=load_pager(),
            stored_term=load_search_term(),
        )
    except NoEntriesError:
        print("No entries found")
        return 0
    except GitError as exc:
        logger.error("%s: %s", exc.source, exc.message)
        print(f"Source: {exc.source}", file=sys.stderr)
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
