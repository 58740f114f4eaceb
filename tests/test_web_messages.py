"""Tests for message and conversation endpoints."""


def send(client, sender, receiver, content="hello"):
    response = client.post(
        "/api/messages",
        json={"sender_id": sender["id"], "receiver_id": receiver["id"], "content": content},
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestSendMessage:
    """Tests for POST /api/messages."""

    def test_send_notifies_receiver(self, client, make_user):
        alice = make_user("alice")
        bob = make_user("bob")
        message = send(client, alice, bob)
        assert message["read"] is False
        [note] = client.get("/api/notifications", params={"user_id": bob["id"]}).json()
        assert note["type"] == "message"
        assert note["related_id"] == message["id"]

    def test_blank_content_rejected(self, client, make_user):
        alice = make_user("alice")
        bob = make_user("bob")
        response = client.post(
            "/api/messages",
            json={"sender_id": alice["id"], "receiver_id": bob["id"], "content": "   "},
        )
        assert response.status_code == 400


class TestThread:
    """Tests for GET /api/messages/{partner_id}."""

    def test_thread_in_order(self, client, make_user):
        alice = make_user("alice")
        bob = make_user("bob")
        carol = make_user("carol")
        send(client, alice, bob, "one")
        send(client, bob, alice, "two")
        send(client, carol, alice, "elsewhere")
        response = client.get(f"/api/messages/{bob['id']}", params={"user_id": alice["id"]})
        assert response.status_code == 200
        assert [m["content"] for m in response.json()] == ["one", "two"]

    def test_mark_read(self, client, make_user):
        alice = make_user("alice")
        bob = make_user("bob")
        message = send(client, alice, bob)
        response = client.put(f"/api/messages/{message['id']}/read")
        assert response.status_code == 200
        assert response.json()["read"] is True

    def test_mark_missing_read(self, client):
        assert client.put("/api/messages/missing/read").status_code == 404


class TestConversations:
    """Tests for GET /api/conversations."""

    def test_one_entry_per_partner_with_unread_counts(self, client, make_user):
        alice = make_user("alice")
        bob = make_user("bob")
        carol = make_user("carol")
        send(client, bob, alice, "hi alice")
        send(client, bob, alice, "are you there?")
        send(client, alice, carol, "hey carol")
        last = send(client, alice, bob, "yes!")

        response = client.get("/api/conversations", params={"user_id": alice["id"]})
        assert response.status_code == 200
        conversations = {c["partner_id"]: c for c in response.json()}
        assert set(conversations) == {bob["id"], carol["id"]}
        assert conversations[bob["id"]]["unread_count"] == 2
        assert conversations[bob["id"]]["last_message"]["id"] == last["id"]
        assert conversations[bob["id"]]["partner"]["username"] == "bob"
        assert conversations[carol["id"]]["unread_count"] == 0

    def test_reading_reduces_unread(self, client, make_user):
        alice = make_user("alice")
        bob = make_user("bob")
        first = send(client, bob, alice)
        send(client, bob, alice)
        client.put(f"/api/messages/{first['id']}/read")
        [conversation] = client.get("/api/conversations", params={"user_id": alice["id"]}).json()
        assert conversation["unread_count"] == 1

    def test_empty(self, client, make_user):
        alice = make_user("alice")
        assert client.get("/api/conversations", params={"user_id": alice["id"]}).json() == []
