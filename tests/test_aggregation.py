"""Tests for conversation grouping and rating recomputation."""

from datetime import datetime, timedelta, timezone

from skill_exchange_api.app.core.aggregation import aggregate_conversations, compute_rating

T0 = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def msg(msg_id, sender, receiver, minutes, read=False):
    return {
        "id": msg_id,
        "sender_id": sender,
        "receiver_id": receiver,
        "content": msg_id,
        "read": read,
        "created_at": T0 + timedelta(minutes=minutes),
    }


def users(user_id):
    return {"id": user_id, "username": user_id}


class TestAggregateConversations:
    def test_no_messages(self):
        assert aggregate_conversations([], "u1", users) == []

    def test_one_entry_per_partner(self):
        messages = [
            msg("m1", "u1", "u2", 0),
            msg("m2", "u2", "u1", 1),
            msg("m3", "u3", "u1", 2),
            msg("m4", "u1", "u3", 3),
            msg("m5", "u2", "u1", 4),
        ]
        result = aggregate_conversations(messages, "u1", users)
        assert [c["partner_id"] for c in result] == ["u2", "u3"]
        assert result[0]["last_message"]["id"] == "m5"
        assert result[1]["last_message"]["id"] == "m4"
        assert result[0]["partner"] == {"id": "u2", "username": "u2"}

    def test_unread_counts_only_incoming_unread(self):
        messages = [
            msg("m1", "u2", "u1", 0),
            msg("m2", "u2", "u1", 1, read=True),
            msg("m3", "u1", "u2", 2),
            msg("m4", "u2", "u1", 3),
        ]
        [conversation] = aggregate_conversations(messages, "u1", users)
        assert conversation["unread_count"] == 2
        # u2's own view: the unread message from u1 counts for them
        [other] = aggregate_conversations(messages, "u2", users)
        assert other["unread_count"] == 1

    def test_partner_with_only_outgoing_messages(self):
        [conversation] = aggregate_conversations([msg("m1", "u1", "u2", 0)], "u1", users)
        assert conversation["unread_count"] == 0

    def test_ignores_messages_between_other_users(self):
        messages = [msg("m1", "u2", "u3", 0), msg("m2", "u1", "u2", 1)]
        result = aggregate_conversations(messages, "u1", users)
        assert [c["partner_id"] for c in result] == ["u2"]

    def test_equal_timestamps_keep_first_message(self):
        messages = [msg("m1", "u2", "u1", 5), msg("m2", "u1", "u2", 5)]
        [conversation] = aggregate_conversations(messages, "u1", users)
        assert conversation["last_message"]["id"] == "m1"

    def test_equal_timestamps_across_partners_keep_first_seen_order(self):
        messages = [msg("m1", "u3", "u1", 5), msg("m2", "u2", "u1", 5)]
        result = aggregate_conversations(messages, "u1", users)
        assert [c["partner_id"] for c in result] == ["u3", "u2"]

    def test_order_independent_of_insertion(self):
        messages = [msg("m1", "u2", "u1", 10), msg("m2", "u2", "u1", 1)]
        [conversation] = aggregate_conversations(messages, "u1", users)
        assert conversation["last_message"]["id"] == "m1"

    def test_unknown_partner(self):
        [conversation] = aggregate_conversations([msg("m1", "ghost", "u1", 0)], "u1", lambda _: None)
        assert conversation["partner"] is None


class TestComputeRating:
    def test_no_reviews(self):
        assert compute_rating([]) == (0, 0)

    def test_single_review(self):
        assert compute_rating([{"rating": 4}]) == (40, 1)

    def test_average_times_ten(self):
        assert compute_rating([{"rating": 5}, {"rating": 4}]) == (45, 2)

    def test_rounds_half_up(self):
        reviews = [{"rating": r} for r in (5, 4, 4, 4)]
        assert compute_rating(reviews) == (43, 4)

    def test_rounds_down_below_half(self):
        reviews = [{"rating": r} for r in (5, 5, 4)]
        assert compute_rating(reviews) == (47, 3)
