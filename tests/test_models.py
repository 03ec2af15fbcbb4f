import pytest

from filters import filter_events
from models import (
    DEFAULT_USER,
    ValidationError,
    coerce_filter,
    normalize_event_list,
    normalize_event_payload,
    normalize_user_payload,
)


def _sample_payload() -> dict:
    return {
        "id": 7,
        "companyName": "Acme Corp",
        "eventType": "Interview",
        "eventDate": "2024-03-01T10:00:00",
        "senderEmail": "recruiting@acme.example",
        "actionLink": "https://meet.example/abc",
        "isReminded": True,
        "messageId": "<msg-7@mail>",
    }


def test_normalize_event_payload_maps_wire_fields() -> None:
    event = normalize_event_payload(_sample_payload())

    assert event.id == 7
    assert event.company_name == "Acme Corp"
    assert event.event_type == "Interview"
    assert event.event_date == "2024-03-01T10:00:00"
    assert event.sender_email == "recruiting@acme.example"
    assert event.action_link == "https://meet.example/abc"
    assert event.reminded is True
    assert event.message_id == "<msg-7@mail>"


def test_normalize_event_payload_tolerates_missing_optional_fields() -> None:
    event = normalize_event_payload({"id": "x1", "eventType": None, "actionLink": "  "})

    assert event.company_name == ""
    assert event.event_type == ""
    assert event.event_date is None
    assert event.action_link is None
    assert event.sender_email is None
    assert event.reminded is False


def test_normalize_event_payload_keeps_event_type_verbatim() -> None:
    event = normalize_event_payload({"id": 1, "eventType": " Interview"})

    assert event.event_type == " Interview"
    assert filter_events([event], "Interview") == []
    assert filter_events([event], "Other") == [event]


def test_normalize_event_payload_requires_id() -> None:
    payload = _sample_payload()
    del payload["id"]

    with pytest.raises(ValidationError):
        normalize_event_payload(payload)


def test_events_are_immutable() -> None:
    event = normalize_event_payload(_sample_payload())

    with pytest.raises(AttributeError):
        event.company_name = "Other"  # type: ignore[misc]


def test_normalize_event_list_keeps_order_and_drops_bad_records() -> None:
    payload = [
        {"id": 2, "companyName": "B", "eventType": "Exam"},
        "garbage",
        {"companyName": "no id"},
        {"id": 1, "companyName": "A", "eventType": "Workshop"},
    ]

    events = normalize_event_list(payload)

    assert [ev.id for ev in events] == [2, 1]


def test_normalize_event_list_rejects_non_list() -> None:
    with pytest.raises(ValidationError):
        normalize_event_list({"events": []})


def test_normalize_user_payload_falls_back_per_field() -> None:
    assert normalize_user_payload({"name": "Ada", "email": "ada@example.com"}).name == "Ada"
    partial = normalize_user_payload({"email": "ada@example.com"})
    assert partial.name == DEFAULT_USER.name
    assert partial.email == "ada@example.com"

    with pytest.raises(ValidationError):
        normalize_user_payload(["Ada"])


def test_coerce_filter_defaults_unknown_values_to_all() -> None:
    assert coerce_filter("Exam") == "Exam"
    assert coerce_filter("exam") == "All"
    assert coerce_filter(None) == "All"
