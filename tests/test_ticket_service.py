# tests/test_ticket_service.py
import re

import pytest

from helpdesk.core import (
    InvalidPriorityException,
    InvalidStatusException,
    MissingRequiredFieldException,
    NoFieldsProvidedException,
    ResourceNotFoundException,
)
from helpdesk.tickets.application import TicketCreateDTO
from helpdesk.tickets.domain import TicketChanges, TicketFilter


def test_create_fills_defaults(make_ticket):
    ticket = make_ticket(title="Login issues", priority="high")
    assert re.fullmatch(r"TKT-[0-9A-Z]+", ticket.id)
    assert ticket.status == "open"
    assert ticket.category == "general"
    assert ticket.assignee == "Unassigned"
    assert ticket.sla == 24
    assert ticket.created_at == ticket.updated_at
    assert ticket.sla_status == "24h remaining"


@pytest.mark.parametrize("missing", ["title", "description", "priority"])
def test_create_requires_fields(run, tickets, missing):
    payload = {"title": "T", "description": "D", "priority": "low"}
    payload[missing] = ""
    with pytest.raises(MissingRequiredFieldException) as exc:
        run(tickets.create_ticket(TicketCreateDTO(**payload)))
    assert exc.value.message == "Title, description, and priority are required"


def test_create_rejects_unknown_priority(run, tickets, database):
    with pytest.raises(InvalidPriorityException):
        run(tickets.create_ticket(TicketCreateDTO(title="T", description="D", priority="critical")))
    assert run(database.query("SELECT id FROM tickets")) == []


def test_create_rejects_unknown_status(run, tickets):
    with pytest.raises(InvalidStatusException):
        run(tickets.create_ticket(
            TicketCreateDTO(title="T", description="D", priority="low", status="pending")
        ))


def test_create_parses_sla_leniently(make_ticket):
    assert make_ticket(sla="8").sla == 8
    assert make_ticket(sla="soon").sla == 24
    assert make_ticket(sla=0).sla == 24


def test_sla_status_follows_the_clock(run, tickets, make_ticket, clock):
    ticket = make_ticket(sla=24)

    clock.advance(hours=1)
    assert run(tickets.get_ticket(ticket.id)).sla_status == "23h remaining"

    clock.advance(hours=22)
    assert run(tickets.get_ticket(ticket.id)).sla_status == "Due Soon"

    clock.advance(hours=2)
    assert run(tickets.get_ticket(ticket.id)).sla_status == "Overdue"

    run(tickets.update_ticket(ticket.id, TicketChanges(status="resolved")))
    assert run(tickets.get_ticket(ticket.id)).sla_status == "Completed"


def test_get_missing_ticket(run, tickets):
    with pytest.raises(ResourceNotFoundException) as exc:
        run(tickets.get_ticket("TKT-NOPE"))
    assert exc.value.code == "NotFound"


def test_get_includes_comments_oldest_first(run, tickets, comments, make_ticket):
    ticket = make_ticket()
    run(comments.add_comment(ticket.id, "first", "Ana"))
    run(comments.add_comment(ticket.id, "second", "Ben"))

    detail = run(tickets.get_ticket(ticket.id))
    assert [c.text for c in detail.comments] == ["first", "second"]


def test_update_writes_only_supplied_fields(run, tickets, make_ticket, clock):
    ticket = make_ticket(title="Old", assignee="Sam")
    clock.advance(hours=1)

    updated = run(tickets.update_ticket(ticket.id, TicketChanges(title="New", sla=8)))
    assert updated.title == "New"
    assert updated.sla == 8
    assert updated.assignee == "Sam"
    assert updated.description == ticket.description
    assert updated.created_at == ticket.created_at
    assert updated.updated_at > ticket.updated_at


def test_empty_update_leaves_ticket_unchanged(run, tickets, make_ticket, clock):
    ticket = make_ticket()
    clock.advance(hours=1)

    with pytest.raises(NoFieldsProvidedException):
        run(tickets.update_ticket(ticket.id, TicketChanges()))

    stored = run(tickets.get_ticket(ticket.id))
    assert stored.updated_at == ticket.updated_at


def test_update_missing_ticket_is_not_found_before_empty_check(run, tickets):
    with pytest.raises(ResourceNotFoundException):
        run(tickets.update_ticket("TKT-NOPE", TicketChanges()))


def test_update_rejects_invalid_enums(run, tickets, make_ticket):
    ticket = make_ticket()
    with pytest.raises(InvalidPriorityException):
        run(tickets.update_ticket(ticket.id, TicketChanges(priority="asap")))
    with pytest.raises(InvalidStatusException):
        run(tickets.update_ticket(ticket.id, TicketChanges(status="done")))


def test_delete_cascades_to_comments(run, tickets, comments, make_ticket, database):
    ticket = make_ticket()
    run(comments.add_comment(ticket.id, "one", "Ana"))
    run(comments.add_comment(ticket.id, "two", "Ana"))

    run(tickets.delete_ticket(ticket.id))

    with pytest.raises(ResourceNotFoundException):
        run(tickets.get_ticket(ticket.id))
    leftover = run(database.query(
        "SELECT id FROM comments WHERE ticket_id = :ticket_id", {"ticket_id": ticket.id}
    ))
    assert leftover == []


def test_delete_missing_ticket(run, tickets):
    with pytest.raises(ResourceNotFoundException):
        run(tickets.delete_ticket("TKT-NOPE"))


def test_list_filters_and_orders_newest_first(run, tickets, make_ticket):
    first = make_ticket(title="Login issues")
    closed = make_ticket(title="login page slow", status="closed")
    make_ticket(title="Billing question")
    latest = make_ticket(title="Another bug", description="cannot login after reset")

    result = run(tickets.list_tickets(TicketFilter.build(status="open", search="login")))
    assert [t.id for t in result] == [latest.id, first.id]
    assert closed.id not in [t.id for t in result]


def test_list_without_filter_returns_everything_with_counts(run, tickets, comments, make_ticket):
    quiet = make_ticket()
    busy = make_ticket()
    run(comments.add_comment(busy.id, "hi", "Ana"))
    run(comments.add_comment(busy.id, "again", "Ana"))

    result = run(tickets.list_tickets())
    counts = {t.id: t.comment_count for t in result}
    assert counts == {busy.id: 2, quiet.id: 0}


def test_list_search_matches_ticket_id(run, tickets, make_ticket):
    ticket = make_ticket()
    make_ticket()
    result = run(tickets.list_tickets(TicketFilter.build(search=ticket.id)))
    assert [t.id for t in result] == [ticket.id]


def test_list_exact_match_filters(run, tickets, make_ticket):
    make_ticket(priority="low", assignee="Sam")
    wanted = make_ticket(priority="urgent", assignee="Sam")
    make_ticket(priority="urgent", assignee="Kim")

    result = run(tickets.list_tickets(TicketFilter.build(priority="urgent", assignee="Sam")))
    assert [t.id for t in result] == [wanted.id]


def test_dashboard_stats_empty_store(run, tickets):
    stats = run(tickets.dashboard_stats())
    assert stats.model_dump() == {"total": 0, "open": 0, "resolved": 0, "closed": 0, "overdue": 0}


def test_dashboard_stats_counts_statuses_and_overdue(run, tickets, make_ticket, clock):
    make_ticket(sla=4)
    make_ticket(sla=4, status="in-progress")
    make_ticket(sla=4, status="resolved")
    make_ticket(sla=4, status="closed")
    make_ticket(sla=48)

    clock.advance(hours=5)
    stats = run(tickets.dashboard_stats())
    assert stats.total == 5
    assert stats.open == 2
    assert stats.resolved == 1
    assert stats.closed == 1
    # in-progress counts toward total and overdue only
    assert stats.overdue == 2


@pytest.mark.parametrize("field", ["title", "description"])
def test_update_rejects_blank_text_fields(run, tickets, make_ticket, field):
    ticket = make_ticket()
    with pytest.raises(MissingRequiredFieldException):
        run(tickets.update_ticket(ticket.id, TicketChanges(**{field: ""})))

    stored = run(tickets.get_ticket(ticket.id))
    assert getattr(stored, field) == getattr(ticket, field)
