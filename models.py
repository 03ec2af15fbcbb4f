#!/usr/bin/env python3
"""Core models and payload normalization for mailcal."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping, Optional, Sequence, Tuple

from log import get_logger

log = get_logger("models")

FilterCategory = Literal["All", "Interview", "Exam", "Other"]
FILTER_CATEGORIES: Sequence[FilterCategory] = ("All", "Interview", "Exam", "Other")
DEFAULT_FILTER: FilterCategory = "All"

INTERVIEW = "Interview"
EXAM = "Exam"
OTHER = "Other"
URGENT_TYPES = frozenset({INTERVIEW, EXAM})


@dataclass(frozen=True)
class Event:
    id: Any
    company_name: str
    event_type: str
    event_date: Any = None
    sender_email: Optional[str] = None
    action_link: Optional[str] = None
    reminded: bool = False
    created_at: Any = None
    message_id: Optional[str] = None


@dataclass(frozen=True)
class UserInfo:
    name: str
    email: str


DEFAULT_USER = UserInfo(name="User", email="")


class ValidationError(Exception):
    pass


def _optional_text(value: object) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def normalize_event_payload(data: object) -> Event:
    if not isinstance(data, Mapping):
        raise ValidationError(f"Event record must be an object, got {type(data).__name__}")
    if data.get("id") is None:
        raise ValidationError("Event record is missing 'id'")

    raw_type = data.get("eventType")
    event_type = raw_type if isinstance(raw_type, str) else ""

    company = data.get("companyName")
    reminded = data.get("isReminded", data.get("reminded", False))

    return Event(
        id=data["id"],
        company_name="" if company is None else str(company),
        event_type=event_type,
        event_date=data.get("eventDate"),
        sender_email=_optional_text(data.get("senderEmail")),
        action_link=_optional_text(data.get("actionLink")),
        reminded=reminded is True,
        created_at=data.get("createdAt"),
        message_id=_optional_text(data.get("messageId")),
    )


def normalize_event_list(payload: object) -> Tuple[Event, ...]:
    """Normalize a list response, keeping server order.

    Individual malformed records are dropped; a payload that is not a list
    at all is rejected.
    """
    if not isinstance(payload, list):
        raise ValidationError(f"Expected a list of events, got {type(payload).__name__}")

    events = []
    for index, item in enumerate(payload):
        try:
            events.append(normalize_event_payload(item))
        except ValidationError as exc:
            log.warning("Dropping event record %d: %s", index, exc)
    return tuple(events)


def normalize_user_payload(data: object) -> UserInfo:
    if not isinstance(data, Mapping):
        raise ValidationError("User info must be an object")
    name = data.get("name")
    email = data.get("email")
    return UserInfo(
        name=str(name) if name else DEFAULT_USER.name,
        email=str(email) if email else DEFAULT_USER.email,
    )


def coerce_filter(value: object) -> FilterCategory:
    if value in FILTER_CATEGORIES:
        return value  # type: ignore[return-value]
    return DEFAULT_FILTER


__all__ = [
    "Event",
    "UserInfo",
    "DEFAULT_USER",
    "ValidationError",
    "FilterCategory",
    "FILTER_CATEGORIES",
    "DEFAULT_FILTER",
    "INTERVIEW",
    "EXAM",
    "OTHER",
    "URGENT_TYPES",
    "normalize_event_payload",
    "normalize_event_list",
    "normalize_user_payload",
    "coerce_filter",
]
