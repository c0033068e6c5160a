"""Tests for the CLI argument parser."""

import pytest

from novaticket.cli import build_parser
from novaticket.cli.config import config_get
from novaticket.cli.ticket import ticket_add, ticket_edit, ticket_list


def test_ticket_without_verb_lists():
    args = build_parser().parse_args(["ticket"])
    assert args.func is ticket_list
    assert args.status == "all"


def test_ticket_add_defaults():
    args = build_parser().parse_args(["ticket", "add", "Printer jam", "--json"])
    assert args.func is ticket_add
    assert args.status == "open"
    assert args.priority == "medium"
    assert args.json is True


def test_ticket_edit_optional_fields():
    args = build_parser().parse_args(["ticket", "edit", "17", "--status", "closed"])
    assert args.func is ticket_edit
    assert args.title is None
    assert args.status == "closed"


def test_ticket_list_rejects_unknown_status():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["ticket", "list", "--status", "pending"])


def test_config_without_verb_gets_all():
    args = build_parser().parse_args(["config"])
    assert args.func is config_get
    assert args.key is None


def test_data_option_after_verb():
    args = build_parser().parse_args(["ticket", "list", "--data", "/tmp/tickets"])
    assert args.data == "/tmp/tickets"
