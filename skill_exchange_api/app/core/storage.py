"""
In‑memory storage for the Skill Exchange API.

``MemStorage`` keeps one dictionary per entity type, keyed by a
generated UUID string.  Records are plain dictionaries; the store hands
out copies so callers cannot mutate its state behind its back.  Lookups
by anything other than the id are linear scans, which is fine at the
scale this store is meant for.

There is no persistence and no locking.  The module keeps a single
store instance that services obtain through :func:`get_storage`;
:func:`init_storage` replaces it with an empty one (called on every
``create_app``).  Swapping this module for a real database means
re‑implementing the same methods.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .aggregation import aggregate_conversations, compute_rating

Record = Dict[str, Any]


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class MemStorage:
    """Dictionary‑backed store for every entity of the application."""

    def __init__(self) -> None:
        self.users: Dict[str, Record] = {}
        self.skills: Dict[str, Record] = {}
        self.matches: Dict[str, Record] = {}
        self.messages: Dict[str, Record] = {}
        self.events: Dict[str, Record] = {}
        self.reviews: Dict[str, Record] = {}
        self.notifications: Dict[str, Record] = {}
        self.media_files: Dict[str, Record] = {}
        self.courses: Dict[str, Record] = {}
        self.lessons: Dict[str, Record] = {}
        self.resources: Dict[str, Record] = {}
        self.enrollments: Dict[str, Record] = {}
        self.purchases: Dict[str, Record] = {}

    # ------------------------------------------------------------------
    # Generic helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _get(table: Dict[str, Record], record_id: str) -> Optional[Record]:
        record = table.get(record_id)
        return dict(record) if record is not None else None

    @staticmethod
    def _insert(table: Dict[str, Record], data: Record, **defaults: Any) -> Record:
        record = {**defaults, **data}
        record["id"] = _new_id()
        record.setdefault("created_at", _now())
        table[record["id"]] = record
        return dict(record)

    @staticmethod
    def _update(table: Dict[str, Record], record_id: str, updates: Record) -> Optional[Record]:
        record = table.get(record_id)
        if record is None:
            return None
        updated = {**record, **updates, "id": record_id}
        table[record_id] = updated
        return dict(updated)

    @staticmethod
    def _delete(table: Dict[str, Record], record_id: str) -> bool:
        return table.pop(record_id, None) is not None

    @staticmethod
    def _filter(table: Dict[str, Record], **criteria: Any) -> List[Record]:
        return [
            dict(record)
            for record in table.values()
            if all(record.get(key) == value for key, value in criteria.items())
        ]

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def get_user(self, user_id: str) -> Optional[Record]:
        return self._get(self.users, user_id)

    def get_user_by_username(self, username: str) -> Optional[Record]:
        found = self._filter(self.users, username=username)
        return found[0] if found else None

    def get_user_by_email(self, email: str) -> Optional[Record]:
        found = self._filter(self.users, email=email)
        return found[0] if found else None

    def create_user(self, data: Record) -> Record:
        return self._insert(
            self.users, data, bio=None, avatar_url=None, rating=0, total_reviews=0
        )

    def update_user(self, user_id: str, updates: Record) -> Optional[Record]:
        return self._update(self.users, user_id, updates)

    # ------------------------------------------------------------------
    # Skills
    # ------------------------------------------------------------------
    def get_skill(self, skill_id: str) -> Optional[Record]:
        return self._get(self.skills, skill_id)

    def get_skills_by_user(self, user_id: str) -> List[Record]:
        return self._filter(self.skills, user_id=user_id)

    def create_skill(self, data: Record) -> Record:
        return self._insert(self.skills, data)

    def update_skill(self, skill_id: str, updates: Record) -> Optional[Record]:
        return self._update(self.skills, skill_id, updates)

    def delete_skill(self, skill_id: str) -> bool:
        return self._delete(self.skills, skill_id)

    # ------------------------------------------------------------------
    # Skill matches
    # ------------------------------------------------------------------
    def get_match(self, match_id: str) -> Optional[Record]:
        return self._get(self.matches, match_id)

    def get_matches_by_user(self, user_id: str) -> List[Record]:
        return [
            dict(match)
            for match in self.matches.values()
            if match["user_id"] == user_id or match["matched_user_id"] == user_id
        ]

    def create_match(self, data: Record) -> Record:
        return self._insert(self.matches, data, status="pending")

    def update_match(self, match_id: str, status: str) -> Optional[Record]:
        return self._update(self.matches, match_id, {"status": status})

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------
    def get_message(self, message_id: str) -> Optional[Record]:
        return self._get(self.messages, message_id)

    def get_messages_between_users(self, user1_id: str, user2_id: str) -> List[Record]:
        pair = {user1_id, user2_id}
        found = [
            dict(msg)
            for msg in self.messages.values()
            if {msg["sender_id"], msg["receiver_id"]} == pair
        ]
        found.sort(key=lambda m: m["created_at"])
        return found

    def get_conversations_by_user(self, user_id: str) -> List[Record]:
        messages = [
            dict(msg)
            for msg in self.messages.values()
            if msg["sender_id"] == user_id or msg["receiver_id"] == user_id
        ]
        return aggregate_conversations(messages, user_id, self.get_user)

    def create_message(self, data: Record) -> Record:
        return self._insert(self.messages, {**data, "read": False})

    def mark_message_as_read(self, message_id: str) -> Optional[Record]:
        return self._update(self.messages, message_id, {"read": True})

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def get_event(self, event_id: str) -> Optional[Record]:
        return self._get(self.events, event_id)

    def get_events_by_user(self, user_id: str) -> List[Record]:
        found = [
            dict(event)
            for event in self.events.values()
            if event["user_id"] == user_id or event["partner_id"] == user_id
        ]
        found.sort(key=lambda e: e["start_time"])
        return found

    def create_event(self, data: Record) -> Record:
        return self._insert(self.events, data)

    def update_event(self, event_id: str, updates: Record) -> Optional[Record]:
        return self._update(self.events, event_id, updates)

    def delete_event(self, event_id: str) -> bool:
        return self._delete(self.events, event_id)

    # ------------------------------------------------------------------
    # Reviews
    # ------------------------------------------------------------------
    def get_review(self, review_id: str) -> Optional[Record]:
        return self._get(self.reviews, review_id)

    def get_reviews_by_user(self, user_id: str) -> List[Record]:
        found = self._filter(self.reviews, user_id=user_id)
        found.sort(key=lambda r: r["created_at"], reverse=True)
        return found

    def create_review(self, data: Record) -> Record:
        """Store a review and recompute the reviewed user's rating."""
        review = self._insert(self.reviews, data)
        if review["user_id"] in self.users:
            rating, total = compute_rating(self.get_reviews_by_user(review["user_id"]))
            self.update_user(review["user_id"], {"rating": rating, "total_reviews": total})
        return review

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------
    def get_notification(self, notification_id: str) -> Optional[Record]:
        return self._get(self.notifications, notification_id)

    def get_notifications_by_user(self, user_id: str) -> List[Record]:
        found = self._filter(self.notifications, user_id=user_id)
        found.sort(key=lambda n: n["created_at"], reverse=True)
        return found

    def create_notification(self, data: Record) -> Record:
        return self._insert(self.notifications, {**data, "read": False}, related_id=None)

    def mark_notification_as_read(self, notification_id: str) -> Optional[Record]:
        return self._update(self.notifications, notification_id, {"read": True})

    def mark_all_notifications_as_read(self, user_id: str) -> int:
        """Mark every notification of a user as read; returns how many changed."""
        changed = 0
        for notification in self.notifications.values():
            if notification["user_id"] == user_id and not notification["read"]:
                notification["read"] = True
                changed += 1
        return changed

    # ------------------------------------------------------------------
    # Media files
    # ------------------------------------------------------------------
    def get_media_file(self, file_id: str) -> Optional[Record]:
        return self._get(self.media_files, file_id)

    def get_media_files_by_user(self, user_id: str, file_type: Optional[str] = None) -> List[Record]:
        criteria: Record = {"user_id": user_id}
        if file_type:
            criteria["file_type"] = file_type
        found = self._filter(self.media_files, **criteria)
        found.sort(key=lambda f: f["created_at"], reverse=True)
        return found

    def get_media_files_by_related(self, related_type: str, related_id: str) -> List[Record]:
        return self._filter(self.media_files, related_type=related_type, related_id=related_id)

    def create_media_file(self, data: Record) -> Record:
        return self._insert(
            self.media_files,
            data,
            thumbnail_url=None,
            processed_url=None,
            processing_status="pending",
        )

    def update_media_file(self, file_id: str, updates: Record) -> Optional[Record]:
        return self._update(self.media_files, file_id, updates)

    def delete_media_file(self, file_id: str) -> bool:
        return self._delete(self.media_files, file_id)

    # ------------------------------------------------------------------
    # Courses, lessons and resources
    # ------------------------------------------------------------------
    def get_course(self, course_id: str) -> Optional[Record]:
        return self._get(self.courses, course_id)

    def list_courses(self, instructor_id: Optional[str] = None, category: Optional[str] = None) -> List[Record]:
        criteria: Record = {}
        if instructor_id:
            criteria["instructor_id"] = instructor_id
        if category:
            criteria["category"] = category
        return self._filter(self.courses, **criteria)

    def create_course(self, data: Record) -> Record:
        now = _now()
        return self._insert(
            self.courses,
            data,
            created_at=now,
            updated_at=now,
            enrolled_count=0,
            rating=0,
            total_reviews=0,
            preview_lesson_id=None,
        )

    def update_course(self, course_id: str, updates: Record) -> Optional[Record]:
        return self._update(self.courses, course_id, {**updates, "updated_at": _now()})

    def delete_course(self, course_id: str) -> bool:
        return self._delete(self.courses, course_id)

    def get_lesson(self, lesson_id: str) -> Optional[Record]:
        return self._get(self.lessons, lesson_id)

    def get_lessons_by_course(self, course_id: str) -> List[Record]:
        found = self._filter(self.lessons, course_id=course_id)
        found.sort(key=lambda lesson: lesson["order"])
        return found

    def create_lesson(self, data: Record) -> Record:
        return self._insert(self.lessons, data)

    def update_lesson(self, lesson_id: str, updates: Record) -> Optional[Record]:
        return self._update(self.lessons, lesson_id, updates)

    def delete_lesson(self, lesson_id: str) -> bool:
        return self._delete(self.lessons, lesson_id)

    def get_resources_by_course(self, course_id: str) -> List[Record]:
        return self._filter(self.resources, course_id=course_id)

    def create_resource(self, data: Record) -> Record:
        return self._insert(self.resources, data)

    def delete_resource(self, resource_id: str) -> bool:
        return self._delete(self.resources, resource_id)

    # ------------------------------------------------------------------
    # Enrollments and purchases
    # ------------------------------------------------------------------
    def get_enrollment(self, enrollment_id: str) -> Optional[Record]:
        return self._get(self.enrollments, enrollment_id)

    def get_enrollments_by_user(self, user_id: str) -> List[Record]:
        return self._filter(self.enrollments, user_id=user_id)

    def get_enrollments_by_course(self, course_id: str) -> List[Record]:
        return self._filter(self.enrollments, course_id=course_id)

    def create_enrollment(self, data: Record) -> Record:
        now = _now()
        return self._insert(
            self.enrollments, data, created_at=now, enrolled_at=now, progress=0, completed_at=None
        )

    def update_enrollment(self, enrollment_id: str, updates: Record) -> Optional[Record]:
        return self._update(self.enrollments, enrollment_id, updates)

    def get_purchases_by_user(self, user_id: str) -> List[Record]:
        return self._filter(self.purchases, user_id=user_id)

    def get_purchases_by_courses(self, course_ids: List[str]) -> List[Record]:
        wanted = set(course_ids)
        return [dict(p) for p in self.purchases.values() if p["course_id"] in wanted]

    def create_purchase(self, data: Record) -> Record:
        now = _now()
        return self._insert(self.purchases, data, created_at=now, purchased_at=now)


_storage = MemStorage()


def get_storage() -> MemStorage:
    """Return the process‑wide store."""
    return _storage


def init_storage() -> MemStorage:
    """Replace the process‑wide store with an empty one and return it."""
    global _storage
    _storage = MemStorage()
    return _storage
