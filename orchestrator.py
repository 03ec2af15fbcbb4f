#!/usr/bin/env python3
"""Orchestrator for mailcal."""
from __future__ import annotations

import asyncio
import curses
import webbrowser
from typing import Coroutine, List, Optional, Set

from api_client import LOGIN_PATH, ApiClient
from config import Config, load_config
from controller import DashboardController
from help_content import HELP_LINES, LOGIN_LINES
from keys import (
    FILTER_KEYS,
    KEY_CAP_L,
    KEY_CAP_Q,
    KEY_ENTER,
    KEY_ESC,
    KEY_G,
    KEY_HELP,
    KEY_J,
    KEY_K,
    KEY_O,
    KEY_Q,
    KEY_RETURN,
    KEY_S,
    KEY_TAB,
)
from log import get_logger
from models import FILTER_CATEGORIES, FilterCategory
from projection import DashboardViewModel, EventCard
from state import AppState, ViewName
from ui_base import draw_centered_box, draw_footer, draw_header, init_colors
from view_dashboard import DashboardView

log = get_logger("orchestrator")

TICK_SECONDS = 0.05

_DASHBOARD_FOOTER = "q: quit  ?: help  j/k: move  1-4/Tab: filter  s: sync  o: open link  L: logout"
_LOGIN_FOOTER = "g: sign in with Google  Enter: dashboard  q: quit"


class Orchestrator:
    """Owns the curses lifecycle, route navigation and the dashboard controller."""

    def __init__(
        self,
        version: str = "0.0.0",
        *,
        config: Optional[Config] = None,
        api: Optional[ApiClient] = None,
    ) -> None:
        self.version = version
        self.config = config or load_config()
        self.api = api or ApiClient(
            self.config.api_base_url,
            session_cookie=self.config.session_cookie,
            timeout=self.config.request_timeout,
        )
        self.state = AppState()
        self.controller: Optional[DashboardController] = None
        self._tasks: Set[asyncio.Task] = set()
        self._running = False
        self._dirty = True

    # Non-interactive entry points
    def run_list(self, category: FilterCategory = "All", *, sync: bool = False) -> int:
        controller = DashboardController(self.api, navigate=lambda route: None)

        async def _load() -> None:
            await controller.initial_load()
            if sync:
                await controller.trigger_sync_workflow()

        asyncio.run(_load())
        controller.set_filter(category)
        print(format_listing(controller.view_model()))
        controller.close()
        return 0

    def run_login(self) -> int:
        self.api.initiate_google_login()
        print(f"Continue signing in at {self.api.url_for(LOGIN_PATH)}")
        return 0

    # Interactive UI
    def run(self) -> int:
        try:
            curses.wrapper(self._curses_main)
        except curses.error as exc:
            log.error("Terminal error: %s", exc)
            return 1
        return 0

    def _curses_main(self, stdscr: "curses.window") -> None:  # type: ignore[name-defined]
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        stdscr.nodelay(True)
        stdscr.keypad(True)
        init_colors()
        asyncio.run(self._event_loop(stdscr))

    async def _event_loop(self, stdscr: "curses.window") -> None:  # type: ignore[name-defined]
        self._running = True
        self._mount_dashboard()
        try:
            while self._running:
                if self._dirty:
                    self._dirty = False
                    self._draw(stdscr)
                ch = stdscr.getch()
                if ch in (-1, curses.ERR):
                    await asyncio.sleep(TICK_SECONDS)
                    continue
                if ch == curses.KEY_RESIZE or self._handle_key(ch):
                    self._dirty = True
        finally:
            if self.controller is not None:
                self.controller.close()

    def _spawn(self, coro: Coroutine) -> None:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            log.error("Background workflow failed", exc_info=task.exception())
        self._dirty = True

    def _mark_dirty(self) -> None:
        self._dirty = True

    # Navigation
    def _mount_dashboard(self) -> None:
        if self.controller is not None:
            self.controller.close()
        self.state = AppState(view="dashboard")
        self.controller = DashboardController(
            self.api, navigate=self.navigate, on_change=self._mark_dirty
        )
        self._spawn(self.controller.initial_load())

    def navigate(self, route: ViewName) -> None:
        log.info("Navigating to %s", route)
        if route == "dashboard":
            self._mount_dashboard()
            return
        if self.controller is not None:
            self.controller.close()
            self.controller = None
        self.state = AppState(view=route)
        self._dirty = True

    # Rendering
    def _draw(self, stdscr: "curses.window") -> None:  # type: ignore[name-defined]
        stdscr.erase()
        draw_header(stdscr, f"mailcal | {self.state.view}")

        if self.state.view == "login" or self.controller is None:
            draw_footer(stdscr, _LOGIN_FOOTER)
            stdscr.noutrefresh()
            draw_centered_box(stdscr, LOGIN_LINES)
        else:
            draw_footer(stdscr, _DASHBOARD_FOOTER)
            model = self.controller.view_model()
            if model.loading:
                stdscr.noutrefresh()
                draw_centered_box(stdscr, ["Loading..."])
            else:
                view = DashboardView(model)
                self.state.card_scroll = view.render(
                    stdscr, self.state.card_index, self.state.card_scroll
                )
                stdscr.noutrefresh()

        if self.state.overlay == "help":
            draw_centered_box(stdscr, HELP_LINES)
        elif self.state.overlay in ("error", "message"):
            draw_centered_box(stdscr, [self.state.overlay_message, "", "Press any key to dismiss"])
        curses.doupdate()

    def _show_overlay(self, message: str, kind: str = "message") -> None:
        self.state.overlay = "error" if kind == "error" else "message"
        self.state.overlay_message = message

    # Key handling
    def _handle_key(self, ch: int) -> bool:
        if self.state.overlay == "help":
            if ch in (KEY_ESC, KEY_HELP):
                self.state.overlay = "none"
                return True
        elif self.state.overlay in ("error", "message"):
            self.state.overlay = "none"
            return True

        if ch in (KEY_Q, KEY_CAP_Q):
            self._running = False
            return False
        if ch == KEY_HELP:
            self.state.overlay = "help"
            return True
        if ch == KEY_ESC:
            self.state.overlay = "none"
            return True

        if self.state.view == "login" or self.controller is None:
            return self._handle_login_keys(ch)
        return self._handle_dashboard_keys(self.controller, ch)

    def _handle_login_keys(self, ch: int) -> bool:
        if ch == KEY_G:
            self.api.initiate_google_login()
            self._show_overlay("Finish signing in in your browser, then press Enter.")
            return True
        if ch in (KEY_ENTER, KEY_RETURN, curses.KEY_ENTER):
            self.navigate("dashboard")
            return True
        return False

    def _handle_dashboard_keys(self, controller: DashboardController, ch: int) -> bool:
        if controller.state.loading:
            return False
        view = DashboardView(controller.view_model())

        if ch in (KEY_J, curses.KEY_DOWN):
            self.state.card_index = view.move_selection(self.state.card_index, +1)
            return True
        if ch in (KEY_K, curses.KEY_UP):
            self.state.card_index = view.move_selection(self.state.card_index, -1)
            return True
        if ch in FILTER_KEYS:
            self._select_filter(controller, FILTER_KEYS[ch])
            return True
        if ch == KEY_TAB:
            current = FILTER_CATEGORIES.index(controller.state.filter)
            self._select_filter(
                controller, FILTER_CATEGORIES[(current + 1) % len(FILTER_CATEGORIES)]
            )
            return True
        if ch == KEY_S:
            self._spawn(controller.trigger_sync_workflow())
            return True
        if ch in (KEY_O, KEY_ENTER, KEY_RETURN, curses.KEY_ENTER):
            return self._open_link(view.selected_card(self.state.card_index))
        if ch == KEY_CAP_L:
            self._spawn(controller.logout_workflow())
            return True
        return False

    def _select_filter(self, controller: DashboardController, category: FilterCategory) -> None:
        controller.set_filter(category)
        self.state.card_index = 0
        self.state.card_scroll = 0

    def _open_link(self, card: Optional[EventCard]) -> bool:
        if card is None or not card.link:
            self._show_overlay("Selected event has no link.")
            return True
        log.info("Opening action link for event %s", card.event_id)
        if not webbrowser.open(card.link, new=2):
            self._show_overlay(f"Could not open browser for {card.link}", kind="error")
        return True


def format_listing(model: DashboardViewModel) -> str:
    """Plain-text rendering of the dashboard for the non-interactive mode."""
    lines: List[str] = [f"{model.user_label}  [{model.filter}]", ""]
    if not model.cards:
        lines.append(model.empty_message or "")
        return "\n".join(lines)
    for card in model.cards:
        flag = "!" if card.urgent else " "
        lines.append(f"{flag} {card.date_label:>13}  {card.category_label:<10} {card.title}")
        if card.sender:
            lines.append(f"{'':>17}from: {card.sender}")
        if card.link:
            lines.append(f"{'':>17}link: {card.link}")
    return "\n".join(lines)


__all__ = ["Orchestrator", "format_listing"]
