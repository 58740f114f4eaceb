"""
Business logic for users: signup, login and profile updates.

Passwords are hashed with ``core.security.hash_password`` before they
reach the store and every method returns ``UserRead`` models, which
carry no password field.
"""

import logging
from typing import Optional

from ..core.security import hash_password, verify_password
from ..core.storage import get_storage
from ..schemas.user import ProfileUpdate, UserCreate, UserRead

logger = logging.getLogger(__name__)


class UserService:
    """Service for user accounts and profiles."""

    @classmethod
    async def create_user(cls, data: UserCreate) -> UserRead:
        """Register a new user.

        Raises ``ValueError`` if the username or e‑mail is already taken.
        """
        storage = get_storage()
        if storage.get_user_by_username(data.username):
            raise ValueError("Username already exists")
        if storage.get_user_by_email(data.email):
            raise ValueError("Email already exists")
        values = data.model_dump()
        values["password"] = hash_password(values["password"])
        row = storage.create_user(values)
        logger.info("Registered user %s (%s)", row["username"], row["id"])
        return UserRead(**row)

    @classmethod
    async def authenticate(cls, username: str, password: str) -> Optional[UserRead]:
        """Return the user if the credentials match, otherwise ``None``."""
        row = get_storage().get_user_by_username(username)
        if not row or not verify_password(password, row.get("password")):
            logger.info("Failed login attempt for %s", username)
            return None
        return UserRead(**row)

    @classmethod
    async def get_user(cls, user_id: str) -> UserRead:
        row = get_storage().get_user(user_id)
        if not row:
            raise ValueError(f"User {user_id} not found")
        return UserRead(**row)

    @classmethod
    async def update_profile(cls, user_id: str, data: ProfileUpdate) -> UserRead:
        """Apply the fields present in the request; an explicit null clears ``bio`` or ``avatar_url``."""
        updates = data.model_dump(exclude_unset=True)
        row = get_storage().update_user(user_id, updates)
        if not row:
            raise ValueError(f"User {user_id} not found")
        logger.info("User %s updated profile fields %s", user_id, sorted(updates))
        return UserRead(**row)
