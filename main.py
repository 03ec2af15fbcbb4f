#!/usr/bin/env python3
"""Thin entrypoint for mailcal."""

from __future__ import annotations

import os
import sys
from typing import Sequence

from config import load_config
from log import setup_logging
from models import FILTER_CATEGORIES, FilterCategory, ValidationError
from orchestrator import Orchestrator

try:
    from _version import __version__
except Exception:  # pragma: no cover - fallback for source runs
    __version__ = "0.0.0"


def _print_help() -> None:
    print(
        "mailcal - terminal dashboard for interviews and exams found in your email\n\n"
        "Usage:\n"
        "  mailcal                      Launch curses UI\n"
        "  mailcal -h                   Show this help\n"
        "  mailcal -v                   Show installed version\n"
        "  mailcal --login              Open the Google sign-in page in your browser\n"
        "  mailcal --list [-f CATEGORY] [--sync]\n"
        "                               Print events once (CATEGORY: All, Interview, Exam, Other)\n"
    )


def _parse_category(value: str) -> FilterCategory:
    for category in FILTER_CATEGORIES:
        if category.lower() == value.strip().lower():
            return category
    valid = ", ".join(FILTER_CATEGORIES)
    raise ValidationError(f"Invalid filter '{value}'. Expected one of: {valid}")


def parse_args(argv: Sequence[str]) -> dict[str, object]:
    opts: dict[str, object] = {
        "help": False,
        "version": False,
        "login": False,
        "list": False,
        "sync": False,
        "filter": "All",
    }

    idx = 0
    while idx < len(argv):
        arg = argv[idx]
        if arg in ("-h", "--help"):
            opts["help"] = True
        elif arg in ("-v", "--version"):
            opts["version"] = True
        elif arg == "--login":
            opts["login"] = True
        elif arg == "--list":
            opts["list"] = True
        elif arg == "--sync":
            opts["sync"] = True
        elif arg in ("-f", "--filter"):
            idx += 1
            if idx >= len(argv):
                raise ValidationError(f"{arg} requires a category argument")
            opts["filter"] = _parse_category(argv[idx])
        else:
            raise ValidationError(f"Unknown flag '{arg}'")
        idx += 1

    if (opts["sync"] or opts["filter"] != "All") and not opts["list"]:
        raise ValidationError("--sync and --filter are only valid with --list")
    return opts


def main(argv: list[str] | None = None) -> int:
    try:
        return _run(argv)
    except KeyboardInterrupt:
        return 130


def _run(argv: list[str] | None) -> int:
    # Make ESC detection snappy inside curses.
    os.environ.setdefault("ESCDELAY", "25")

    if argv is None:
        argv = sys.argv[1:]

    try:
        opts = parse_args(argv)
    except ValidationError as exc:
        print(str(exc))
        return 1

    if opts["version"]:
        print(__version__)
        return 0

    if opts["help"]:
        _print_help()
        return 0

    config = load_config()
    interactive = not (opts["list"] or opts["login"])
    setup_logging(config.log_path, debug=config.debug, console=not interactive)

    orchestrator = Orchestrator(__version__, config=config)

    if opts["login"]:
        return orchestrator.run_login()
    if opts["list"]:
        return orchestrator.run_list(opts["filter"], sync=bool(opts["sync"]))  # type: ignore[arg-type]
    return orchestrator.run()


if __name__ == "__main__":
    sys.exit(main())
