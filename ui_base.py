#!/usr/bin/env python3
"""Basic UI helpers for curses rendering."""

from __future__ import annotations

import curses
from typing import Dict, Iterable

_PAIR_BOX = 1
_PAIR_URGENT = 2
_PAIR_NORMAL = 3
_PAIR_ACTIVE = 4

_ATTRS: Dict[str, int] = {}


def init_colors() -> None:
    """Register color pairs; falls back to plain attributes on mono terminals."""
    _ATTRS.clear()
    if not curses.has_colors():
        _ATTRS.update(urgent=curses.A_BOLD, normal=0, active=curses.A_REVERSE, box=0)
        return
    try:
        curses.start_color()
        curses.use_default_colors()
        curses.init_pair(_PAIR_BOX, curses.COLOR_WHITE, curses.COLOR_BLACK)
        curses.init_pair(_PAIR_URGENT, curses.COLOR_RED, -1)
        curses.init_pair(_PAIR_NORMAL, curses.COLOR_GREEN, -1)
        curses.init_pair(_PAIR_ACTIVE, curses.COLOR_BLACK, curses.COLOR_CYAN)
    except curses.error:
        _ATTRS.update(urgent=curses.A_BOLD, normal=0, active=curses.A_REVERSE, box=0)
        return
    _ATTRS.update(
        box=curses.color_pair(_PAIR_BOX),
        urgent=curses.color_pair(_PAIR_URGENT) | curses.A_BOLD,
        normal=curses.color_pair(_PAIR_NORMAL),
        active=curses.color_pair(_PAIR_ACTIVE),
    )


def attr_for(name: str) -> int:
    return _ATTRS.get(name, 0)


def safe_addnstr(stdscr: "curses.window", y: int, x: int, text: str, attr: int = 0) -> None:  # type: ignore[name-defined]
    h, w = stdscr.getmaxyx()
    if y < 0 or y >= h or x >= w - 1:
        return
    width = max(0, w - 1 - x)
    try:
        stdscr.addnstr(y, x, text, width, attr)
    except curses.error:
        pass


def draw_header(stdscr: "curses.window", text: str) -> None:  # type: ignore[name-defined]
    h, w = stdscr.getmaxyx()
    if w <= 0 or h <= 0:
        return
    safe_addnstr(stdscr, 0, 0, text.ljust(max(1, w - 1)), curses.A_BOLD)


def draw_footer(stdscr: "curses.window", text: str) -> None:  # type: ignore[name-defined]
    h, w = stdscr.getmaxyx()
    if w <= 0 or h <= 0:
        return
    safe_addnstr(stdscr, h - 1, 0, text.ljust(max(1, w - 1)))


def draw_centered_box(stdscr: "curses.window", lines: Iterable[str]) -> None:  # type: ignore[name-defined]
    h, w = stdscr.getmaxyx()
    lines_list = list(lines) or [""]
    win_h = min(len(lines_list) + 2, h - 2)
    win_w = min(max(len(line) for line in lines_list) + 4, w - 2)
    if win_h < 3 or win_w < 5:
        return
    win = stdscr.derwin(win_h, win_w, (h - win_h) // 2, (w - win_w) // 2)
    attr = attr_for("box")
    if attr:
        win.bkgd(" ", attr)
        win.attrset(attr)
    win.erase()
    win.border()
    for idx, line in enumerate(lines_list[: win_h - 2], start=1):
        win.addnstr(idx, 2, line[: win_w - 4], win_w - 4, attr)
    win.noutrefresh()


def clamp(value: int, min_value: int, max_value: int) -> int:
    return max(min_value, min(value, max_value))


__all__ = [
    "init_colors",
    "attr_for",
    "safe_addnstr",
    "draw_header",
    "draw_footer",
    "draw_centered_box",
    "clamp",
]
