"""
Business logic for the course marketplace.

Instructors publish courses with ordered lessons and downloadable
resources.  Learners either enroll directly or purchase a course; a
purchase splits the price between the platform and the instructor
(``settings.platform_commission_rate`` goes to the platform), enrolls
the buyer and notifies the instructor.
"""

import logging
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Tuple

from ..core.config import settings
from ..core.storage import get_storage
from ..schemas.course import (
    CourseCreate,
    CourseRead,
    CourseUpdate,
    EnrollmentRead,
    InstructorEarnings,
    LessonCreate,
    LessonRead,
    LessonUpdate,
    PurchaseRead,
    ResourceCreate,
    ResourceRead,
)
from .notification_service import NotificationService

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def split_payment(amount: float, rate: Optional[float] = None) -> Tuple[Decimal, Decimal]:
    """Return ``(platform_commission, instructor_earnings)`` for a sale.

    The commission is rounded half up to cents and the instructor gets
    the exact remainder, so the two shares always add up to ``amount``.
    """
    if rate is None:
        rate = settings.platform_commission_rate
    total = Decimal(str(amount))
    commission = (total * Decimal(str(rate))).quantize(CENT, rounding=ROUND_HALF_UP)
    return commission, total - commission


class CourseService:
    """Service for courses, their content, enrollments and sales."""

    # ------------------------------------------------------------------
    # Courses
    # ------------------------------------------------------------------
    @classmethod
    async def list_courses(
        cls, instructor_id: Optional[str] = None, category: Optional[str] = None
    ) -> List[CourseRead]:
        rows = get_storage().list_courses(instructor_id=instructor_id, category=category)
        return [CourseRead(**row) for row in rows]

    @classmethod
    async def get_course(cls, course_id: str) -> CourseRead:
        row = get_storage().get_course(course_id)
        if not row:
            raise ValueError(f"Course {course_id} not found")
        return CourseRead(**row)

    @classmethod
    async def create_course(cls, data: CourseCreate) -> CourseRead:
        """Publish a course.

        When ``instructor_name`` is omitted it is taken from the
        instructor's profile.
        """
        storage = get_storage()
        values = data.model_dump()
        if not values.get("instructor_name"):
            instructor = storage.get_user(data.instructor_id)
            values["instructor_name"] = instructor["full_name"] if instructor else None
        row = storage.create_course(values)
        logger.info("Instructor %s published course '%s' (%s)", data.instructor_id, data.title, row["id"])
        return CourseRead(**row)

    @classmethod
    async def update_course(cls, course_id: str, data: CourseUpdate) -> CourseRead:
        updates = data.model_dump(exclude_unset=True)
        row = get_storage().update_course(course_id, updates)
        if not row:
            raise ValueError(f"Course {course_id} not found")
        return CourseRead(**row)

    @classmethod
    async def delete_course(cls, course_id: str) -> None:
        """Delete a course together with its lessons and resources."""
        storage = get_storage()
        if not storage.delete_course(course_id):
            raise ValueError(f"Course {course_id} not found")
        for lesson in storage.get_lessons_by_course(course_id):
            storage.delete_lesson(lesson["id"])
        for resource in storage.get_resources_by_course(course_id):
            storage.delete_resource(resource["id"])
        logger.info("Course %s deleted", course_id)

    # ------------------------------------------------------------------
    # Lessons and resources
    # ------------------------------------------------------------------
    @classmethod
    async def list_lessons(cls, course_id: str) -> List[LessonRead]:
        await cls.get_course(course_id)
        return [LessonRead(**row) for row in get_storage().get_lessons_by_course(course_id)]

    @classmethod
    async def create_lesson(cls, course_id: str, data: LessonCreate) -> LessonRead:
        await cls.get_course(course_id)
        row = get_storage().create_lesson({**data.model_dump(), "course_id": course_id})
        return LessonRead(**row)

    @classmethod
    async def update_lesson(cls, lesson_id: str, data: LessonUpdate) -> LessonRead:
        updates = data.model_dump(exclude_unset=True)
        row = get_storage().update_lesson(lesson_id, updates)
        if not row:
            raise ValueError(f"Lesson {lesson_id} not found")
        return LessonRead(**row)

    @classmethod
    async def delete_lesson(cls, lesson_id: str) -> None:
        """Delete a lesson; a course previewing it loses its preview."""
        storage = get_storage()
        lesson = storage.get_lesson(lesson_id)
        if not lesson or not storage.delete_lesson(lesson_id):
            raise ValueError(f"Lesson {lesson_id} not found")
        course = storage.get_course(lesson["course_id"])
        if course and course["preview_lesson_id"] == lesson_id:
            storage.update_course(course["id"], {"preview_lesson_id": None})

    @classmethod
    async def list_resources(cls, course_id: str) -> List[ResourceRead]:
        await cls.get_course(course_id)
        return [ResourceRead(**row) for row in get_storage().get_resources_by_course(course_id)]

    @classmethod
    async def create_resource(cls, course_id: str, data: ResourceCreate) -> ResourceRead:
        await cls.get_course(course_id)
        row = get_storage().create_resource({**data.model_dump(), "course_id": course_id})
        return ResourceRead(**row)

    @classmethod
    async def delete_resource(cls, resource_id: str) -> None:
        if not get_storage().delete_resource(resource_id):
            raise ValueError(f"Resource {resource_id} not found")

    # ------------------------------------------------------------------
    # Enrollments
    # ------------------------------------------------------------------
    @classmethod
    async def enroll(cls, course_id: str, user_id: str) -> EnrollmentRead:
        """Enroll a user and bump the course's ``enrolled_count``.

        Raises ``ValueError`` if the course does not exist or the user
        is already enrolled.
        """
        storage = get_storage()
        course = storage.get_course(course_id)
        if not course:
            raise ValueError(f"Course {course_id} not found")
        if any(e["course_id"] == course_id for e in storage.get_enrollments_by_user(user_id)):
            raise ValueError("User is already enrolled in this course")
        row = storage.create_enrollment({"user_id": user_id, "course_id": course_id})
        storage.update_course(course_id, {"enrolled_count": course["enrolled_count"] + 1})
        logger.info("User %s enrolled in course %s", user_id, course_id)
        return EnrollmentRead(**row)

    @classmethod
    async def list_enrollments(cls, user_id: str) -> List[EnrollmentRead]:
        return [EnrollmentRead(**row) for row in get_storage().get_enrollments_by_user(user_id)]

    @classmethod
    async def update_progress(cls, enrollment_id: str, progress: int) -> EnrollmentRead:
        """Record progress; reaching 100 stamps ``completed_at`` once."""
        storage = get_storage()
        current = storage.get_enrollment(enrollment_id)
        if not current:
            raise ValueError(f"Enrollment {enrollment_id} not found")
        updates = {"progress": progress}
        if progress == 100 and current["completed_at"] is None:
            updates["completed_at"] = datetime.now(timezone.utc)
        row = storage.update_enrollment(enrollment_id, updates)
        return EnrollmentRead(**row)

    # ------------------------------------------------------------------
    # Purchases and earnings
    # ------------------------------------------------------------------
    @classmethod
    async def purchase(cls, course_id: str, user_id: str) -> PurchaseRead:
        """Buy a course at its current price.

        The buyer is enrolled as part of the purchase and the
        instructor is notified of the sale.
        """
        storage = get_storage()
        course = storage.get_course(course_id)
        if not course:
            raise ValueError(f"Course {course_id} not found")
        if course["instructor_id"] == user_id:
            raise ValueError("Instructors cannot purchase their own course")
        commission, earnings = split_payment(course["price"])
        enrollment = await cls.enroll(course_id, user_id)
        row = storage.create_purchase(
            {
                "user_id": user_id,
                "course_id": course_id,
                "amount": course["price"],
                "currency": course["currency"],
                "platform_commission": float(commission),
                "instructor_earnings": float(earnings),
            }
        )
        logger.info(
            "User %s bought course %s for %s %s (enrollment %s)",
            user_id, course_id, course["price"], course["currency"], enrollment.id,
        )
        await NotificationService.notify(
            user_id=course["instructor_id"],
            type="course",
            title="New Course Sale",
            message=f"Someone purchased your course: {course['title']}",
            related_id=row["id"],
        )
        return PurchaseRead(**row)

    @classmethod
    async def list_purchases(cls, user_id: str) -> List[PurchaseRead]:
        return [PurchaseRead(**row) for row in get_storage().get_purchases_by_user(user_id)]

    @classmethod
    async def instructor_earnings(cls, instructor_id: str) -> InstructorEarnings:
        storage = get_storage()
        course_ids = [c["id"] for c in storage.list_courses(instructor_id=instructor_id)]
        purchases = storage.get_purchases_by_courses(course_ids)
        total = sum((Decimal(str(p["instructor_earnings"])) for p in purchases), Decimal("0"))
        return InstructorEarnings(
            instructor_id=instructor_id,
            total_earnings=float(total),
            total_sales=len(purchases),
            courses=course_ids,
        )
