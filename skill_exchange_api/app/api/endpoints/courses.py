"""
Course marketplace endpoints.

Courses, their lessons and resources, enrollments, purchases and the
instructor earnings summary.  Paths are written out in full because
lessons, resources and enrollments are also addressed on their own.
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from skill_exchange_api.app.schemas.course import (
    CourseCreate,
    CourseRead,
    CourseUpdate,
    EnrollmentRead,
    EnrollRequest,
    InstructorEarnings,
    LessonCreate,
    LessonRead,
    LessonUpdate,
    ProgressUpdate,
    PurchaseRead,
    ResourceCreate,
    ResourceRead,
)
from skill_exchange_api.app.services.course_service import CourseService

router = APIRouter()


def _not_found_or_bad_request(error: ValueError) -> HTTPException:
    detail = str(error)
    if "not found" in detail:
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


# ----------------------------------------------------------------------
# Courses
# ----------------------------------------------------------------------
@router.get("/courses", response_model=List[CourseRead])
async def list_courses(
    instructor_id: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
) -> List[CourseRead]:
    return await CourseService.list_courses(instructor_id=instructor_id, category=category)


@router.post("/courses", response_model=CourseRead, status_code=status.HTTP_201_CREATED)
async def create_course(course: CourseCreate) -> CourseRead:
    return await CourseService.create_course(course)


@router.get("/courses/{course_id}", response_model=CourseRead)
async def get_course(course_id: str) -> CourseRead:
    try:
        return await CourseService.get_course(course_id)
    except ValueError as e:
        raise _not_found_or_bad_request(e)


@router.put("/courses/{course_id}", response_model=CourseRead)
async def update_course(course_id: str, updates: CourseUpdate) -> CourseRead:
    try:
        return await CourseService.update_course(course_id, updates)
    except ValueError as e:
        raise _not_found_or_bad_request(e)


@router.delete("/courses/{course_id}")
async def delete_course(course_id: str) -> dict:
    try:
        await CourseService.delete_course(course_id)
    except ValueError as e:
        raise _not_found_or_bad_request(e)
    return {"detail": "Course deleted successfully"}


# ----------------------------------------------------------------------
# Lessons and resources
# ----------------------------------------------------------------------
@router.get("/courses/{course_id}/lessons", response_model=List[LessonRead])
async def list_lessons(course_id: str) -> List[LessonRead]:
    try:
        return await CourseService.list_lessons(course_id)
    except ValueError as e:
        raise _not_found_or_bad_request(e)


@router.post("/courses/{course_id}/lessons", response_model=LessonRead, status_code=status.HTTP_201_CREATED)
async def create_lesson(course_id: str, lesson: LessonCreate) -> LessonRead:
    try:
        return await CourseService.create_lesson(course_id, lesson)
    except ValueError as e:
        raise _not_found_or_bad_request(e)


@router.put("/lessons/{lesson_id}", response_model=LessonRead)
async def update_lesson(lesson_id: str, updates: LessonUpdate) -> LessonRead:
    try:
        return await CourseService.update_lesson(lesson_id, updates)
    except ValueError as e:
        raise _not_found_or_bad_request(e)


@router.delete("/lessons/{lesson_id}")
async def delete_lesson(lesson_id: str) -> dict:
    try:
        await CourseService.delete_lesson(lesson_id)
    except ValueError as e:
        raise _not_found_or_bad_request(e)
    return {"detail": "Lesson deleted successfully"}


@router.get("/courses/{course_id}/resources", response_model=List[ResourceRead])
async def list_resources(course_id: str) -> List[ResourceRead]:
    try:
        return await CourseService.list_resources(course_id)
    except ValueError as e:
        raise _not_found_or_bad_request(e)


@router.post(
    "/courses/{course_id}/resources", response_model=ResourceRead, status_code=status.HTTP_201_CREATED
)
async def create_resource(course_id: str, resource: ResourceCreate) -> ResourceRead:
    try:
        return await CourseService.create_resource(course_id, resource)
    except ValueError as e:
        raise _not_found_or_bad_request(e)


@router.delete("/resources/{resource_id}")
async def delete_resource(resource_id: str) -> dict:
    try:
        await CourseService.delete_resource(resource_id)
    except ValueError as e:
        raise _not_found_or_bad_request(e)
    return {"detail": "Resource deleted successfully"}


# ----------------------------------------------------------------------
# Enrollments
# ----------------------------------------------------------------------
@router.post(
    "/courses/{course_id}/enroll", response_model=EnrollmentRead, status_code=status.HTTP_201_CREATED
)
async def enroll(course_id: str, body: EnrollRequest) -> EnrollmentRead:
    """Enroll for free.  Enrolling twice in the same course gives 400."""
    try:
        return await CourseService.enroll(course_id, body.user_id)
    except ValueError as e:
        raise _not_found_or_bad_request(e)


@router.get("/enrollments", response_model=List[EnrollmentRead])
async def list_enrollments(user_id: str = Query(...)) -> List[EnrollmentRead]:
    return await CourseService.list_enrollments(user_id)


@router.put("/enrollments/{enrollment_id}/progress", response_model=EnrollmentRead)
async def update_progress(enrollment_id: str, body: ProgressUpdate) -> EnrollmentRead:
    try:
        return await CourseService.update_progress(enrollment_id, body.progress)
    except ValueError as e:
        raise _not_found_or_bad_request(e)


# ----------------------------------------------------------------------
# Purchases
# ----------------------------------------------------------------------
@router.post(
    "/courses/{course_id}/purchase", response_model=PurchaseRead, status_code=status.HTTP_201_CREATED
)
async def purchase_course(course_id: str, body: EnrollRequest) -> PurchaseRead:
    """Buy a course.  The buyer is enrolled and the instructor notified."""
    try:
        return await CourseService.purchase(course_id, body.user_id)
    except ValueError as e:
        raise _not_found_or_bad_request(e)


@router.get("/purchases", response_model=List[PurchaseRead])
async def list_purchases(user_id: str = Query(...)) -> List[PurchaseRead]:
    return await CourseService.list_purchases(user_id)


@router.get("/instructors/{instructor_id}/earnings", response_model=InstructorEarnings)
async def instructor_earnings(instructor_id: str) -> InstructorEarnings:
    return await CourseService.instructor_earnings(instructor_id)
