#!/usr/bin/env python3
"""Dashboard view-state controller.

Owns the dashboard state and the workflows that change it. Each network
result replaces exactly one slice of state when it resolves, so the
synchronous helpers (filtering, formatting, projection) always see a
consistent snapshot.
"""

from __future__ import annotations

import asyncio
from typing import Callable, List, Optional, Tuple

from api_client import ApiClient
from filters import filter_events
from log import get_logger
from models import Event, coerce_filter
from projection import DashboardViewModel, build_view_model
from state import DashboardState, Ready, ViewName

log = get_logger("controller")

LOGIN_ROUTE: ViewName = "login"


class DashboardController:
    def __init__(
        self,
        api: ApiClient,
        *,
        navigate: Callable[[ViewName], None],
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        self.api = api
        self._navigate = navigate
        self._on_change = on_change
        self._state = DashboardState()
        self._closed = False

    @property
    def state(self) -> DashboardState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Tear down; results of calls still in flight will be dropped."""
        self._closed = True

    def _apply(self, **changes: object) -> None:
        if self._closed:
            log.debug("Dropping late update to %s", ", ".join(sorted(changes)))
            return
        self._state = self._state.with_updated(**changes)
        if self._on_change is not None:
            self._on_change()

    # Workflows
    async def initial_load(self) -> None:
        """Fetch events and identity concurrently; events alone gate readiness."""
        await asyncio.gather(self._load_events(), self._load_user())

    async def _load_events(self) -> None:
        events: Tuple[Event, ...] = ()
        try:
            result = await self.api.list_events()
            if result.ok:
                events = result.value
            else:
                log.info("Showing empty dashboard, events unavailable: %s", result.error)
        finally:
            self._apply(events=events, phase=Ready())

    async def _load_user(self) -> None:
        result = await self.api.get_user_info()
        if result.ok:
            self._apply(user=result.value)
        else:
            log.info("Keeping default identity: %s", result.error)

    async def trigger_sync_workflow(self) -> bool:
        """Run sync then reload. Returns False when the call was ignored."""
        phase = self._state.phase
        if self._closed or not isinstance(phase, Ready) or phase.syncing:
            log.debug("Sync request ignored in phase %s", phase)
            return False

        self._apply(phase=Ready(syncing=True))
        log.info("Sync started")

        events = self._state.events
        try:
            sync = await self.api.trigger_sync()
            if not sync.ok:
                log.info("Sync failed, reloading anyway: %s", sync.error)

            reload = await self.api.list_events()
            events = reload.value if reload.ok else ()
        finally:
            self._apply(events=events, phase=Ready(syncing=False))
        log.info("Sync finished with %d events", len(events))
        return True

    async def logout_workflow(self) -> None:
        try:
            result = await self.api.logout()
            if not result.ok:
                log.info("Server logout failed, leaving anyway: %s", result.error)
        finally:
            self._navigate(LOGIN_ROUTE)

    # Synchronous accessors
    def set_filter(self, category: object) -> None:
        self._apply(filter=coerce_filter(category))

    def visible_events(self) -> List[Event]:
        return filter_events(self._state.events, self._state.filter)

    def view_model(self) -> DashboardViewModel:
        return build_view_model(self._state)


__all__ = ["DashboardController", "LOGIN_ROUTE"]
