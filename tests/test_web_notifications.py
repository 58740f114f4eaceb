"""Tests for notification endpoints."""


def notify_via_message(client, sender, receiver):
    client.post(
        "/api/messages",
        json={"sender_id": sender["id"], "receiver_id": receiver["id"], "content": "ping"},
    )


class TestNotifications:
    def test_mark_one_read(self, client, make_user):
        alice = make_user("alice")
        bob = make_user("bob")
        notify_via_message(client, alice, bob)
        [note] = client.get("/api/notifications", params={"user_id": bob["id"]}).json()
        response = client.put(f"/api/notifications/{note['id']}/read")
        assert response.status_code == 200
        assert response.json()["read"] is True

    def test_mark_missing_read(self, client):
        assert client.put("/api/notifications/missing/read").status_code == 404

    def test_read_all(self, client, make_user):
        alice = make_user("alice")
        bob = make_user("bob")
        for _ in range(3):
            notify_via_message(client, alice, bob)
        notify_via_message(client, bob, alice)

        response = client.put("/api/notifications/read-all", json={"user_id": bob["id"]})
        assert response.status_code == 200
        assert response.json()["updated"] == 3
        assert all(n["read"] for n in client.get("/api/notifications", params={"user_id": bob["id"]}).json())
        [alice_note] = client.get("/api/notifications", params={"user_id": alice["id"]}).json()
        assert alice_note["read"] is False

    def test_read_all_requires_user_id(self, client):
        response = client.put("/api/notifications/read-all", json={})
        assert response.status_code == 400
