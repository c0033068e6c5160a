"""Tickets, sessions and the reactive records views watch."""

from novaticket.model.node import ListNode, Node
from novaticket.model.session import AuthResult, Session, SessionGate, User, UserRegistry
from novaticket.model.store import Outcome, TicketStore, matches
from novaticket.model.ticket import Ticket, TicketDraft, decode_tickets, encode_tickets, validate_draft

__all__ = [
    "AuthResult",
    "ListNode",
    "Node",
    "Outcome",
    "Session",
    "SessionGate",
    "Ticket",
    "TicketDraft",
    "TicketStore",
    "User",
    "UserRegistry",
    "decode_tickets",
    "encode_tickets",
    "matches",
    "validate_draft",
]
