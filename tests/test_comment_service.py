# tests/test_comment_service.py
import pytest

from helpdesk.core import MissingRequiredFieldException, ResourceNotFoundException


def test_add_comment(run, comments, make_ticket):
    ticket = make_ticket()
    comment = run(comments.add_comment(ticket.id, "Looking into it", "Ana"))
    assert comment.ticket_id == ticket.id
    assert comment.text == "Looking into it"
    assert comment.author == "Ana"
    assert comment.id


@pytest.mark.parametrize("ticket_id, text, author", [
    (None, "text", "Ana"),
    ("TKT-1", "", "Ana"),
    ("TKT-1", "text", None),
])
def test_add_comment_requires_fields(run, comments, ticket_id, text, author):
    with pytest.raises(MissingRequiredFieldException) as exc:
        run(comments.add_comment(ticket_id, text, author))
    assert exc.value.message == "Ticket ID, text, and author are required"


def test_comment_on_missing_ticket_persists_nothing(run, comments, database):
    with pytest.raises(ResourceNotFoundException):
        run(comments.add_comment("TKT-NOPE", "hello", "Ana"))
    assert run(database.query("SELECT id FROM comments")) == []


def test_list_comments_oldest_first(run, comments, make_ticket):
    ticket = make_ticket()
    other = make_ticket()
    run(comments.add_comment(ticket.id, "first", "Ana"))
    run(comments.add_comment(other.id, "elsewhere", "Ana"))
    run(comments.add_comment(ticket.id, "second", "Ben"))

    thread = run(comments.list_comments(ticket.id))
    assert [c.text for c in thread] == ["first", "second"]


def test_list_comments_missing_ticket(run, comments):
    with pytest.raises(ResourceNotFoundException):
        run(comments.list_comments("TKT-NOPE"))


def test_update_replaces_text_and_resets_timestamp(run, comments, make_ticket, clock):
    ticket = make_ticket()
    comment = run(comments.add_comment(ticket.id, "draft", "Ana"))
    clock.advance(minutes=30)

    updated = run(comments.update_comment(comment.id, "final"))
    assert updated.text == "final"
    assert updated.author == "Ana"
    assert updated.created_at > comment.created_at


def test_update_requires_text_before_lookup(run, comments):
    with pytest.raises(MissingRequiredFieldException):
        run(comments.update_comment("missing-id", ""))


def test_update_missing_comment(run, comments):
    with pytest.raises(ResourceNotFoundException) as exc:
        run(comments.update_comment("missing-id", "text"))
    assert "Comment" in exc.value.message


def test_delete_comment(run, comments, make_ticket):
    ticket = make_ticket()
    comment = run(comments.add_comment(ticket.id, "bye", "Ana"))

    run(comments.delete_comment(comment.id))
    assert run(comments.list_comments(ticket.id)) == []

    with pytest.raises(ResourceNotFoundException):
        run(comments.delete_comment(comment.id))
