# tests/test_comments_api.py
from conftest import parse_ts


def ticket(client):
    r = client.post("/api/tickets", json={"title": "T", "description": "D", "priority": "low"})
    return r.json()["id"]


def test_add_comment(client):
    ticket_id = ticket(client)
    r = client.post("/api/comments", json={"ticketId": ticket_id, "text": "On it", "author": "Ana"})
    assert r.status_code == 201
    body = r.json()
    assert body["ticket_id"] == ticket_id
    assert body["text"] == "On it"
    assert body["author"] == "Ana"


def test_add_comment_accepts_snake_case_ticket_id(client):
    ticket_id = ticket(client)
    r = client.post("/api/comments", json={"ticket_id": ticket_id, "text": "x", "author": "Ana"})
    assert r.status_code == 201


def test_add_comment_missing_author(client):
    ticket_id = ticket(client)
    r = client.post("/api/comments", json={"ticketId": ticket_id, "text": "x"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Ticket ID, text, and author are required"


def test_add_comment_to_missing_ticket(client):
    r = client.post("/api/comments", json={"ticketId": "TKT-NOPE", "text": "x", "author": "Ana"})
    assert r.status_code == 404


def test_list_comments(client):
    ticket_id = ticket(client)
    for text in ("one", "two", "three"):
        client.post("/api/comments", json={"ticketId": ticket_id, "text": text, "author": "Ana"})

    r = client.get(f"/api/comments/{ticket_id}")
    assert r.status_code == 200
    assert [c["text"] for c in r.json()] == ["one", "two", "three"]


def test_list_comments_missing_ticket(client):
    assert client.get("/api/comments/TKT-NOPE").status_code == 404


def test_update_comment(client, clock):
    ticket_id = ticket(client)
    comment = client.post(
        "/api/comments", json={"ticketId": ticket_id, "text": "draft", "author": "Ana"}
    ).json()
    clock.advance(minutes=5)

    r = client.put(f"/api/comments/{comment['id']}", json={"text": "final"})
    assert r.status_code == 200
    body = r.json()
    assert body["text"] == "final"
    assert parse_ts(body["created_at"]) > parse_ts(comment["created_at"])


def test_update_comment_requires_text(client):
    assert client.put("/api/comments/whatever", json={}).status_code == 400


def test_update_missing_comment(client):
    assert client.put("/api/comments/whatever", json={"text": "x"}).status_code == 404


def test_delete_comment(client):
    ticket_id = ticket(client)
    comment_id = client.post(
        "/api/comments", json={"ticketId": ticket_id, "text": "x", "author": "Ana"}
    ).json()["id"]

    r = client.delete(f"/api/comments/{comment_id}")
    assert r.status_code == 200
    assert r.json() == {"message": "Comment deleted successfully"}
    assert client.delete(f"/api/comments/{comment_id}").status_code == 404
