#!/usr/bin/env python3
"""Read-only view model derived from dashboard state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Optional, Tuple

from date_format import format_date
from filters import count_by_category, filter_events, is_urgent
from models import FILTER_CATEGORIES, OTHER, Event, FilterCategory
from state import DashboardState

CardStyle = Literal["urgent", "normal"]

EMPTY_MESSAGE = "No events found for this filter."
SYNC_LABEL = "Sync Emails"
SYNCING_LABEL = "Syncing..."


@dataclass(frozen=True)
class EventCard:
    event_id: Any
    title: str
    category_label: str
    style: CardStyle
    date_label: str
    sender: Optional[str] = None
    link: Optional[str] = None

    @property
    def urgent(self) -> bool:
        return self.style == "urgent"


@dataclass(frozen=True)
class FilterTab:
    category: FilterCategory
    count: int
    active: bool


@dataclass(frozen=True)
class DashboardViewModel:
    loading: bool
    syncing: bool
    user_label: str
    filter: FilterCategory
    filters: Tuple[FilterTab, ...]
    cards: Tuple[EventCard, ...]
    empty_message: Optional[str]
    sync_label: str


def build_card(event: Event) -> EventCard:
    return EventCard(
        event_id=event.id,
        title=event.company_name,
        category_label=event.event_type or OTHER,
        style="urgent" if is_urgent(event) else "normal",
        date_label=format_date(event.event_date),
        sender=event.sender_email,
        link=event.action_link,
    )


def build_view_model(state: DashboardState) -> DashboardViewModel:
    counts = count_by_category(state.events)
    tabs = tuple(
        FilterTab(category=name, count=counts[name], active=name == state.filter)
        for name in FILTER_CATEGORIES
    )
    cards = tuple(build_card(ev) for ev in filter_events(state.events, state.filter))
    return DashboardViewModel(
        loading=state.loading,
        syncing=state.syncing,
        user_label=f"Logged in as {state.user.name}",
        filter=state.filter,
        filters=tabs,
        cards=cards,
        empty_message=None if cards else EMPTY_MESSAGE,
        sync_label=SYNCING_LABEL if state.syncing else SYNC_LABEL,
    )


__all__ = [
    "EventCard",
    "FilterTab",
    "DashboardViewModel",
    "build_card",
    "build_view_model",
    "EMPTY_MESSAGE",
    "SYNC_LABEL",
    "SYNCING_LABEL",
]
