"""Tests for ticket validation and the stored collection format."""

import json

import pytest

from novaticket.model.ticket import Ticket, TicketDraft, decode_tickets, encode_tickets, validate_draft
from novaticket.storage import StorageCorrupt


def _raw(**overrides):
    raw = {
        "id": 1,
        "title": "Printer jam",
        "description": "",
        "status": "open",
        "priority": "low",
        "created": "2025-03-14",
    }
    raw.update(overrides)
    return raw


def test_valid_draft_is_trimmed():
    normalized, errors = validate_draft(TicketDraft(title="  Printer jam  ", description="  tray 2 \n"))
    assert errors == {}
    assert normalized.title == "Printer jam"
    assert normalized.description == "tray 2"
    assert normalized.status == "open"
    assert normalized.priority == "medium"


@pytest.mark.parametrize(
    "title, message",
    [
        ("", "Title is required"),
        ("   ", "Title is required"),
        ("Bug", "Title must be at least 5 characters"),
        ("x" * 101, "Title must not exceed 100 characters"),
    ],
)
def test_title_errors(title, message):
    normalized, errors = validate_draft(TicketDraft(title=title))
    assert normalized is None
    assert errors == {"title": message}


def test_title_length_bounds_inclusive():
    assert validate_draft(TicketDraft(title="x" * 5))[1] == {}
    assert validate_draft(TicketDraft(title="x" * 100))[1] == {}


def test_title_length_counts_trimmed_text():
    assert validate_draft(TicketDraft(title="  Bug  "))[1] == {"title": "Title must be at least 5 characters"}


def test_description_too_long():
    _, errors = validate_draft(TicketDraft(title="Printer jam", description="x" * 501))
    assert errors == {"description": "Description must not exceed 500 characters"}
    assert validate_draft(TicketDraft(title="Printer jam", description="x" * 500))[1] == {}


def test_unknown_status_and_priority():
    _, errors = validate_draft(TicketDraft(title="Printer jam", status="pending", priority="urgent"))
    assert errors == {
        "status": "Status must be one of: open, in_progress, closed",
        "priority": "Priority must be one of: low, medium, high, critical",
    }


def test_validation_is_idempotent():
    once, _ = validate_draft(TicketDraft(title="  Printer jam ", description=" tray 2 ", status="closed"))
    twice, errors = validate_draft(once)
    assert errors == {}
    assert twice == once


def test_with_draft_keeps_id_and_created():
    ticket = Ticket(id=9, title="Printer jam", description="", status="open", priority="low", created="2025-01-01")
    edited = ticket.with_draft(TicketDraft(title="Printer on fire", status="closed", priority="critical"))
    assert edited.id == 9
    assert edited.created == "2025-01-01"
    assert edited.title == "Printer on fire"
    assert edited.priority == "critical"


def test_decode_roundtrip():
    text = json.dumps([_raw(id=2), _raw(id=1, description="tray 2")])
    tickets = decode_tickets(text)
    assert [t.id for t in tickets] == [2, 1]
    assert json.loads(encode_tickets(tickets)) == json.loads(text)


def test_decode_empty_list():
    assert decode_tickets("[]") == []


def test_decode_missing_description_is_empty():
    raw = _raw()
    del raw["description"]
    assert decode_tickets(json.dumps([raw]))[0].description == ""


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        '{"id": 1}',
        "[1, 2]",
        json.dumps([_raw(status="pending")]),
        json.dumps([_raw(priority="urgent")]),
        json.dumps([_raw(id="1")]),
        json.dumps([_raw(id=True)]),
        json.dumps([_raw(created="yesterday")]),
        json.dumps([{"id": 1, "title": "Printer jam"}]),
        json.dumps([_raw(id=1), _raw(id=1)]),
        json.dumps([_raw(title="Bug")]),
        json.dumps([_raw(title="  Bug   ")]),
        json.dumps([_raw(title="x" * 101)]),
        json.dumps([_raw(description="x" * 501)]),
    ],
)
def test_decode_corrupt(text):
    with pytest.raises(StorageCorrupt):
        decode_tickets(text)
