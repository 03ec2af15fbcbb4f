"""Help and cheatsheet content for the mailcal TUI."""

from __future__ import annotations

HELP_LINES: tuple[str, ...] = (
    "mailcal help",
    "",
    "Interviews and exams are marked urgent (red);",
    "everything else is listed under Other (green).",
    "",
    "Shortcuts",
    "",
    "q            quit",
    "?            toggle this help",
    "j/k          move selection",
    "1-4          filter: All / Interview / Exam / Other",
    "Tab          cycle filters",
    "s            sync emails and reload",
    "o / Enter    open the selected event's link",
    "L            log out / switch account",
    "Esc          dismiss overlays",
)

LOGIN_LINES: tuple[str, ...] = (
    "Personal Assistant",
    "",
    "Automate your email tracking for interviews and exams.",
    "",
    "g       sign in with Google (opens browser)",
    "Enter   continue to dashboard",
    "q       quit",
)

__all__ = ["HELP_LINES", "LOGIN_LINES"]
