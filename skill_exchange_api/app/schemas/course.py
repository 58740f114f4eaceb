"""
Pydantic models for the course marketplace.

Instructors publish courses made of ordered lessons plus downloadable
resources.  Learners enroll (free) or purchase; every purchase records
the platform commission and the instructor's share.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

Currency = Literal["INR", "credits"]
ResourceType = Literal["pdf", "zip", "other"]


def _whole_cents(value: Optional[float]) -> Optional[float]:
    if value is not None and Decimal(str(value)).as_tuple().exponent < -2:
        raise ValueError("Price must not have more than two decimal places")
    return value


def _not_null(value):
    if value is None:
        raise ValueError("Field cannot be null")
    return value


class CourseBase(BaseModel):
    title: str = Field(..., min_length=1, examples=["React Fundamentals"])
    description: str = Field("", examples=["Components, props, state and hooks."])
    category: str = Field(..., examples=["Technology"])
    price: float = Field(..., ge=0, examples=[499])
    currency: Currency = "INR"
    duration: Optional[str] = Field(None, examples=["4 weeks"])

    @field_validator("price")
    @classmethod
    def price_in_cents(cls, v):
        return _whole_cents(v)


class CourseCreate(CourseBase):
    instructor_id: str
    instructor_name: Optional[str] = None


class CourseUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    currency: Optional[Currency] = None
    duration: Optional[str] = None
    preview_lesson_id: Optional[str] = None

    @field_validator("price")
    @classmethod
    def price_in_cents(cls, v):
        return _whole_cents(_not_null(v))

    @field_validator("title", "description", "category", "currency")
    @classmethod
    def not_null(cls, v):
        return _not_null(v)

    model_config = {
        "extra": "forbid",
    }


class CourseRead(CourseCreate):
    id: str
    preview_lesson_id: Optional[str] = None
    enrolled_count: int = 0
    rating: int = 0
    total_reviews: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True,
    }


class LessonCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = ""
    video_url: Optional[str] = None
    notes: str = ""
    order: int = Field(0, ge=0)
    is_preview: bool = False


class LessonUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    video_url: Optional[str] = None
    notes: Optional[str] = None
    order: Optional[int] = Field(None, ge=0)
    is_preview: Optional[bool] = None

    @field_validator("title", "description", "notes", "order", "is_preview")
    @classmethod
    def not_null(cls, v):
        return _not_null(v)

    model_config = {
        "extra": "forbid",
    }


class LessonRead(LessonCreate):
    id: str
    course_id: str
    created_at: datetime


class ResourceCreate(BaseModel):
    title: str = Field(..., min_length=1)
    url: str
    type: ResourceType = "other"


class ResourceRead(ResourceCreate):
    id: str
    course_id: str
    created_at: datetime


class EnrollRequest(BaseModel):
    user_id: str


class EnrollmentRead(BaseModel):
    id: str
    user_id: str
    course_id: str
    progress: int
    enrolled_at: datetime
    completed_at: Optional[datetime] = None


class ProgressUpdate(BaseModel):
    progress: int = Field(..., ge=0, le=100)


class PurchaseRead(BaseModel):
    id: str
    user_id: str
    course_id: str
    amount: float
    currency: Currency
    platform_commission: float
    instructor_earnings: float
    purchased_at: datetime


class InstructorEarnings(BaseModel):
    instructor_id: str
    total_earnings: float
    total_sales: int
    courses: List[str]
