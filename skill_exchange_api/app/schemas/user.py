"""
Pydantic models for user data.

``UserCreate`` is the signup payload, ``UserRead`` the public profile
returned everywhere a user is shown.  The stored password hash is not a
field of any read model, so it can never leak through a response.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


class UserBase(BaseModel):
    username: str = Field(..., min_length=3, max_length=50, examples=["alex_m"])
    email: EmailStr = Field(..., examples=["alex@example.com"])
    full_name: str = Field(..., min_length=2, examples=["Alex Morgan"])
    bio: Optional[str] = Field(None, examples=["Guitarist looking to learn Spanish"])
    avatar_url: Optional[str] = None


class UserCreate(UserBase):
    """Schema for registering a user."""

    password: str = Field(..., min_length=6, examples=["strongpassword"])


class UserLogin(BaseModel):
    username: str
    password: str


class UserRead(UserBase):
    """Public view of a user.

    ``rating`` is the average review rating × 10 (45 means 4.5 stars).
    """

    id: str
    rating: int = 0
    total_reviews: int = 0
    created_at: datetime

    model_config = {
        "from_attributes": True,
    }


class UserSummary(BaseModel):
    """Compact user card embedded in matches and reviews."""

    id: str
    username: str
    full_name: str
    avatar_url: Optional[str] = None
    rating: int = 0
    total_reviews: int = 0


class ProfileUpdate(BaseModel):
    """Fields a user may change on their own profile.

    Anything else (rating, password, username...) is rejected.
    An explicit null clears ``bio`` or ``avatar_url``.
    """

    full_name: Optional[str] = Field(None, min_length=2)
    bio: Optional[str] = None
    avatar_url: Optional[str] = None

    @field_validator("full_name")
    @classmethod
    def full_name_not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    model_config = {
        "extra": "forbid",
    }


class TokenResponse(BaseModel):
    user: UserRead
    access_token: str
    token_type: str = "bearer"
