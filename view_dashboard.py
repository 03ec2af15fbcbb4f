#!/usr/bin/env python3
"""Dashboard card list rendering."""

from __future__ import annotations

import curses
import textwrap
from typing import List, Sequence

from projection import DashboardViewModel, EventCard
from ui_base import attr_for, clamp, safe_addnstr

_MARKER = "|"
_CARD_GAP = 1
_TOP_ROWS = 2  # filter bar + spacer
_MAX_TITLE_LINES = 2


def _wrap_text(value: str, width: int) -> List[str]:
    if width <= 0:
        return [""]
    wrapped = textwrap.wrap(value or "", width=width, break_long_words=True)
    return wrapped or [""]


def card_lines(card: EventCard, width: int) -> List[str]:
    """Lay out one card as plain text lines (marker excluded)."""
    inner = max(1, width - 2)
    badge = card.category_label.upper()
    gap = max(1, inner - len(badge) - len(card.date_label))
    lines = [f"{badge}{' ' * gap}{card.date_label}"[:inner]]
    lines.extend(_wrap_text(card.title, inner)[:_MAX_TITLE_LINES])
    if card.sender:
        lines.append(f"from: {card.sender}"[:inner])
    if card.link:
        lines.append(f"link: {card.link}"[:inner])
    return lines


def format_filter_bar(model: DashboardViewModel) -> str:
    parts = []
    for idx, tab in enumerate(model.filters, start=1):
        label = f"{idx}:{tab.category} ({tab.count})"
        parts.append(f"[{label}]" if tab.active else f" {label} ")
    return " ".join(parts)


class DashboardView:
    def __init__(self, model: DashboardViewModel):
        self.model = model

    @property
    def cards(self) -> Sequence[EventCard]:
        return self.model.cards

    def render(self, stdscr: "curses.window", selected_idx: int, scroll: int) -> int:  # type: ignore[name-defined]
        """Draw the filter bar and cards below the header; returns the new scroll."""
        h, w = stdscr.getmaxyx()
        top = 1
        usable_h = h - 2  # header + footer
        if usable_h <= _TOP_ROWS or w <= 4:
            return scroll

        bar_attr = curses.A_BOLD if not self.model.syncing else curses.A_DIM
        right = f"{self.model.sync_label}  {self.model.user_label}"
        safe_addnstr(stdscr, top, 0, format_filter_bar(self.model), bar_attr)
        safe_addnstr(stdscr, top, max(0, w - 1 - len(right)), right)

        data_top = top + _TOP_ROWS
        data_height = usable_h - _TOP_ROWS
        if not self.cards:
            safe_addnstr(stdscr, data_top, 2, self.model.empty_message or "")
            return 0

        blocks = [card_lines(card, w - 1) for card in self.cards]
        selected_idx = clamp(selected_idx, 0, len(blocks) - 1)
        scroll = self._adjust_scroll(blocks, selected_idx, scroll, data_height)

        y = data_top
        for idx in range(scroll, len(blocks)):
            card = self.cards[idx]
            style_attr = attr_for(card.style)
            for offset, line in enumerate(blocks[idx]):
                if y >= data_top + data_height:
                    return scroll
                safe_addnstr(stdscr, y, 0, _MARKER, style_attr)
                attr = curses.A_REVERSE if idx == selected_idx and offset == 0 else 0
                if offset == 0:
                    attr |= style_attr
                safe_addnstr(stdscr, y, 2, line, attr)
                y += 1
            y += _CARD_GAP
        return scroll

    @staticmethod
    def _adjust_scroll(
        blocks: List[List[str]], selected_idx: int, scroll: int, height: int
    ) -> int:
        scroll = clamp(scroll, 0, selected_idx)
        while scroll < selected_idx:
            used = sum(len(b) + _CARD_GAP for b in blocks[scroll : selected_idx + 1])
            if used - _CARD_GAP <= height:
                break
            scroll += 1
        return scroll

    def move_selection(self, selected_idx: int, delta: int) -> int:
        if not self.cards:
            return 0
        return clamp(selected_idx + delta, 0, len(self.cards) - 1)

    def selected_card(self, selected_idx: int) -> EventCard | None:
        if not self.cards:
            return None
        return self.cards[clamp(selected_idx, 0, len(self.cards) - 1)]


__all__ = ["DashboardView", "card_lines", "format_filter_bar"]
