#!/usr/bin/env python3
"""State containers for mailcal."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Literal, Tuple, Union

from models import DEFAULT_FILTER, DEFAULT_USER, Event, FilterCategory, UserInfo

ViewName = Literal["login", "dashboard"]
OverlayKind = Literal["none", "help", "error", "message"]


@dataclass(frozen=True)
class Initializing:
    """First event fetch has not resolved yet."""


@dataclass(frozen=True)
class Ready:
    syncing: bool = False


Phase = Union[Initializing, Ready]


@dataclass(frozen=True)
class DashboardState:
    events: Tuple[Event, ...] = ()
    user: UserInfo = DEFAULT_USER
    filter: FilterCategory = DEFAULT_FILTER
    phase: Phase = field(default_factory=Initializing)

    @property
    def loading(self) -> bool:
        return isinstance(self.phase, Initializing)

    @property
    def syncing(self) -> bool:
        return isinstance(self.phase, Ready) and self.phase.syncing

    def with_updated(self, **changes: object) -> "DashboardState":
        return replace(self, **changes)  # type: ignore[arg-type]


@dataclass
class AppState:
    view: ViewName = "dashboard"
    overlay: OverlayKind = "none"
    overlay_message: str = ""

    # Dashboard selection
    card_index: int = 0
    card_scroll: int = 0


__all__ = [
    "AppState",
    "DashboardState",
    "Initializing",
    "Ready",
    "Phase",
    "ViewName",
    "OverlayKind",
]
