#!/usr/bin/env python3
"""Category filtering and urgency helpers for dashboard events."""

from __future__ import annotations

from typing import Dict, Iterable, List

from models import (
    EXAM,
    FILTER_CATEGORIES,
    INTERVIEW,
    OTHER,
    URGENT_TYPES,
    Event,
    FilterCategory,
)


def category_of(event: Event) -> FilterCategory:
    """Bucket an event; anything that is not an interview or exam is Other."""
    if event.event_type == INTERVIEW:
        return INTERVIEW
    if event.event_type == EXAM:
        return EXAM
    return OTHER


def filter_events(events: Iterable[Event], category: object) -> List[Event]:
    if category not in FILTER_CATEGORIES or category == "All":
        return list(events)
    return [ev for ev in events if category_of(ev) == category]


def is_urgent(event: Event) -> bool:
    return event.event_type in URGENT_TYPES


def count_by_category(events: Iterable[Event]) -> Dict[FilterCategory, int]:
    counts: Dict[FilterCategory, int] = {name: 0 for name in FILTER_CATEGORIES}
    for ev in events:
        counts["All"] += 1
        counts[category_of(ev)] += 1
    return counts


__all__ = ["category_of", "filter_events", "is_urgent", "count_by_category"]
