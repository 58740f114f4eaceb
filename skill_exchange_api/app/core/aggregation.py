"""
Aggregations derived from the raw message and review collections.

Both functions are single passes over plain record dictionaries as kept
by :class:`~skill_exchange_api.app.core.storage.MemStorage`; they do not
touch the store themselves so they can be reused on any list of records.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

Record = Dict[str, Any]


def aggregate_conversations(
    messages: Iterable[Record],
    user_id: str,
    lookup_user: Callable[[str], Optional[Record]],
) -> List[Record]:
    """Group a user's direct messages into one conversation per partner.

    For every partner the latest message is kept as ``last_message`` and
    ``unread_count`` counts the partner's messages to ``user_id`` that
    are still unread.  Messages not involving ``user_id`` are ignored.

    A message only replaces the kept one when it is strictly newer, so
    with equal timestamps the earliest inserted message wins.  The final
    sort is stable: partners whose last messages share a timestamp stay
    in first‑seen order.

    Parameters
    ----------
    messages : iterable of dict
        Message records in insertion order.
    user_id : str
        The user whose inbox is being built.
    lookup_user : callable
        Resolves a partner id to a user record (or ``None``).

    Returns
    -------
    list of dict
        ``{"partner_id", "partner", "last_message", "unread_count"}``
        entries, most recent conversation first.
    """
    latest: Dict[str, Record] = {}
    unread: Dict[str, int] = {}
    for msg in messages:
        if msg["sender_id"] == user_id:
            partner_id = msg["receiver_id"]
        elif msg["receiver_id"] == user_id:
            partner_id = msg["sender_id"]
        else:
            continue
        current = latest.get(partner_id)
        if current is None or msg["created_at"] > current["created_at"]:
            latest[partner_id] = msg
        unread.setdefault(partner_id, 0)
        if msg["sender_id"] == partner_id and msg["receiver_id"] == user_id and not msg["read"]:
            unread[partner_id] += 1

    conversations = [
        {
            "partner_id": partner_id,
            "partner": lookup_user(partner_id),
            "last_message": last_message,
            "unread_count": unread[partner_id],
        }
        for partner_id, last_message in latest.items()
    ]
    conversations.sort(key=lambda c: c["last_message"]["created_at"], reverse=True)
    return conversations


def compute_rating(reviews: Iterable[Record]) -> Tuple[int, int]:
    """Return ``(rating, total_reviews)`` for a user's received reviews.

    The rating is stored as an integer equal to the mean × 10 (4.5 stars
    is ``45``).  No reviews gives ``(0, 0)``.
    """
    ratings = [review["rating"] for review in reviews]
    if not ratings:
        return 0, 0
    # Half‑up on the exact mean: 4.25 stars is 43, not 42.
    scaled = Decimal(sum(ratings) * 10) / Decimal(len(ratings))
    return int(scaled.quantize(Decimal(1), rounding=ROUND_HALF_UP)), len(ratings)
