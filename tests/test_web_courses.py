"""Tests for the course marketplace endpoints."""

from decimal import Decimal

import pytest

from skill_exchange_api.app.services.course_service import split_payment


@pytest.fixture
def instructor(make_user):
    return make_user("ines", full_name="Ines Instructor")


@pytest.fixture
def course(client, instructor):
    response = client.post(
        "/api/courses",
        json={
            "instructor_id": instructor["id"],
            "title": "React Fundamentals",
            "category": "Technology",
            "price": 499,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestSplitPayment:
    def test_default_rate(self):
        assert split_payment(499) == (Decimal("99.80"), Decimal("399.20"))

    @pytest.mark.parametrize("amount", ["33.33", "19.99", "2.68", "0.13", "1234.56", "0.01"])
    def test_shares_add_up_exactly(self, amount):
        commission, earnings = split_payment(float(amount))
        assert commission + earnings == Decimal(amount)
        assert commission == commission.quantize(Decimal("0.01"))

    def test_commission_rounds_half_up(self):
        assert split_payment(0.30, rate=0.15) == (Decimal("0.05"), Decimal("0.25"))

    def test_free_course(self):
        assert split_payment(0) == (Decimal("0"), Decimal("0"))


class TestCourses:
    """Tests for /api/courses."""

    def test_create_defaults(self, course, instructor):
        assert course["instructor_name"] == "Ines Instructor"
        assert course["enrolled_count"] == 0
        assert course["currency"] == "INR"
        assert course["rating"] == 0

    def test_filters(self, client, course, instructor, make_user):
        other = make_user("otto")
        client.post(
            "/api/courses",
            json={"instructor_id": other["id"], "title": "Yoga", "category": "Health", "price": 0},
        )
        assert len(client.get("/api/courses").json()) == 2
        by_instructor = client.get("/api/courses", params={"instructor_id": instructor["id"]}).json()
        assert [c["id"] for c in by_instructor] == [course["id"]]
        by_category = client.get("/api/courses", params={"category": "Health"}).json()
        assert [c["title"] for c in by_category] == ["Yoga"]

    def test_update_bumps_updated_at(self, client, course):
        response = client.put(f"/api/courses/{course['id']}", json={"price": 599})
        assert response.status_code == 200
        data = response.json()
        assert data["price"] == 599
        assert data["updated_at"] >= course["updated_at"]

    def test_update_rejects_unknown_fields(self, client, course):
        response = client.put(f"/api/courses/{course['id']}", json={"enrolled_count": 1000})
        assert response.status_code == 400

    def test_negative_price_rejected(self, client, instructor):
        response = client.post(
            "/api/courses",
            json={"instructor_id": instructor["id"], "title": "X", "category": "Y", "price": -1},
        )
        assert response.status_code == 400

    def test_delete_removes_lessons(self, client, course):
        client.post(f"/api/courses/{course['id']}/lessons", json={"title": "Intro"})
        assert client.delete(f"/api/courses/{course['id']}").status_code == 200
        assert client.get(f"/api/courses/{course['id']}").status_code == 404
        assert client.get(f"/api/courses/{course['id']}/lessons").status_code == 404

    def test_missing_course(self, client):
        assert client.get("/api/courses/missing").status_code == 404
        assert client.delete("/api/courses/missing").status_code == 404


class TestLessonsAndResources:
    def test_lessons_ordered(self, client, course):
        client.post(f"/api/courses/{course['id']}/lessons", json={"title": "Hooks", "order": 2})
        client.post(f"/api/courses/{course['id']}/lessons", json={"title": "Intro", "order": 1})
        lessons = client.get(f"/api/courses/{course['id']}/lessons").json()
        assert [lesson["title"] for lesson in lessons] == ["Intro", "Hooks"]

    def test_update_and_delete_lesson(self, client, course):
        lesson = client.post(f"/api/courses/{course['id']}/lessons", json={"title": "Intro"}).json()
        response = client.put(f"/api/lessons/{lesson['id']}", json={"is_preview": True})
        assert response.json()["is_preview"] is True
        assert client.delete(f"/api/lessons/{lesson['id']}").status_code == 200
        assert client.delete(f"/api/lessons/{lesson['id']}").status_code == 404

    def test_lesson_for_missing_course(self, client):
        response = client.post("/api/courses/missing/lessons", json={"title": "Intro"})
        assert response.status_code == 404

    def test_resources(self, client, course):
        response = client.post(
            f"/api/courses/{course['id']}/resources",
            json={"title": "Slides", "url": "https://cdn.example.com/slides.pdf", "type": "pdf"},
        )
        assert response.status_code == 201
        resource = response.json()
        assert [r["id"] for r in client.get(f"/api/courses/{course['id']}/resources").json()] == [resource["id"]]
        assert client.delete(f"/api/resources/{resource['id']}").status_code == 200
        assert client.delete(f"/api/resources/{resource['id']}").status_code == 404


class TestEnrollments:
    def test_enroll_increments_count(self, client, course, make_user):
        learner = make_user("lena")
        response = client.post(f"/api/courses/{course['id']}/enroll", json={"user_id": learner["id"]})
        assert response.status_code == 201
        assert response.json()["progress"] == 0
        assert client.get(f"/api/courses/{course['id']}").json()["enrolled_count"] == 1

    def test_enroll_twice(self, client, course, make_user):
        learner = make_user("lena")
        client.post(f"/api/courses/{course['id']}/enroll", json={"user_id": learner["id"]})
        response = client.post(f"/api/courses/{course['id']}/enroll", json={"user_id": learner["id"]})
        assert response.status_code == 400

    def test_progress_completion(self, client, course, make_user):
        learner = make_user("lena")
        enrollment = client.post(
            f"/api/courses/{course['id']}/enroll", json={"user_id": learner["id"]}
        ).json()
        halfway = client.put(f"/api/enrollments/{enrollment['id']}/progress", json={"progress": 50}).json()
        assert halfway["completed_at"] is None
        done = client.put(f"/api/enrollments/{enrollment['id']}/progress", json={"progress": 100}).json()
        assert done["completed_at"] is not None
        again = client.put(f"/api/enrollments/{enrollment['id']}/progress", json={"progress": 100}).json()
        assert again["completed_at"] == done["completed_at"]
        assert [e["id"] for e in client.get("/api/enrollments", params={"user_id": learner["id"]}).json()] == [
            enrollment["id"]
        ]

    def test_progress_out_of_range(self, client, course, make_user):
        learner = make_user("lena")
        enrollment = client.post(
            f"/api/courses/{course['id']}/enroll", json={"user_id": learner["id"]}
        ).json()
        response = client.put(f"/api/enrollments/{enrollment['id']}/progress", json={"progress": 101})
        assert response.status_code == 400


class TestPurchases:
    def test_purchase_splits_and_enrolls(self, client, course, instructor, make_user):
        learner = make_user("lena")
        response = client.post(f"/api/courses/{course['id']}/purchase", json={"user_id": learner["id"]})
        assert response.status_code == 201
        purchase = response.json()
        assert purchase["amount"] == 499
        assert purchase["platform_commission"] == 99.8
        assert purchase["instructor_earnings"] == 399.2

        enrollments = client.get("/api/enrollments", params={"user_id": learner["id"]}).json()
        assert [e["course_id"] for e in enrollments] == [course["id"]]
        [note] = client.get("/api/notifications", params={"user_id": instructor["id"]}).json()
        assert note["type"] == "course"
        assert note["related_id"] == purchase["id"]

    def test_already_enrolled(self, client, course, make_user):
        learner = make_user("lena")
        client.post(f"/api/courses/{course['id']}/enroll", json={"user_id": learner["id"]})
        response = client.post(f"/api/courses/{course['id']}/purchase", json={"user_id": learner["id"]})
        assert response.status_code == 400
        assert client.get("/api/purchases", params={"user_id": learner["id"]}).json() == []

    def test_instructor_cannot_buy_own_course(self, client, course, instructor):
        response = client.post(f"/api/courses/{course['id']}/purchase", json={"user_id": instructor["id"]})
        assert response.status_code == 400

    def test_earnings(self, client, course, instructor, make_user):
        for name in ("lena", "liam"):
            learner = make_user(name)
            client.post(f"/api/courses/{course['id']}/purchase", json={"user_id": learner["id"]})
        response = client.get(f"/api/instructors/{instructor['id']}/earnings")
        assert response.status_code == 200
        data = response.json()
        assert data["total_sales"] == 2
        assert data["total_earnings"] == 798.4
        assert data["courses"] == [course["id"]]


class TestPricePrecision:
    def test_sub_cent_price_rejected(self, client, instructor):
        response = client.post(
            "/api/courses",
            json={"instructor_id": instructor["id"], "title": "X", "category": "Y", "price": 10.005},
        )
        assert response.status_code == 400

    def test_sub_cent_price_update_rejected(self, client, course):
        response = client.put(f"/api/courses/{course['id']}", json={"price": 19.999})
        assert response.status_code == 400
        assert client.get(f"/api/courses/{course['id']}").json()["price"] == 499

    def test_null_price_rejected(self, client, course):
        assert client.put(f"/api/courses/{course['id']}", json={"price": None}).status_code == 400

    def test_purchase_shares_match_price(self, client, instructor, make_user):
        course = client.post(
            "/api/courses",
            json={"instructor_id": instructor["id"], "title": "X", "category": "Y", "price": 19.99},
        ).json()
        learner = make_user("lena")
        purchase = client.post(
            f"/api/courses/{course['id']}/purchase", json={"user_id": learner["id"]}
        ).json()
        assert purchase["platform_commission"] == 4.0
        assert purchase["instructor_earnings"] == 15.99
        shares = Decimal(str(purchase["platform_commission"])) + Decimal(str(purchase["instructor_earnings"]))
        assert shares == Decimal("19.99")


class TestPreviewLesson:
    def test_deleting_preview_lesson_clears_pointer(self, client, course):
        lesson = client.post(f"/api/courses/{course['id']}/lessons", json={"title": "Intro"}).json()
        client.put(f"/api/courses/{course['id']}", json={"preview_lesson_id": lesson["id"]})
        assert client.get(f"/api/courses/{course['id']}").json()["preview_lesson_id"] == lesson["id"]

        assert client.delete(f"/api/lessons/{lesson['id']}").status_code == 200
        assert client.get(f"/api/courses/{course['id']}").json()["preview_lesson_id"] is None

    def test_deleting_other_lesson_keeps_pointer(self, client, course):
        preview = client.post(f"/api/courses/{course['id']}/lessons", json={"title": "Intro"}).json()
        other = client.post(f"/api/courses/{course['id']}/lessons", json={"title": "Hooks"}).json()
        client.put(f"/api/courses/{course['id']}", json={"preview_lesson_id": preview["id"]})
        client.delete(f"/api/lessons/{other['id']}")
        assert client.get(f"/api/courses/{course['id']}").json()["preview_lesson_id"] == preview["id"]

    def test_clear_preview_with_null(self, client, course):
        lesson = client.post(f"/api/courses/{course['id']}/lessons", json={"title": "Intro"}).json()
        client.put(f"/api/courses/{course['id']}", json={"preview_lesson_id": lesson["id"]})
        response = client.put(f"/api/courses/{course['id']}", json={"preview_lesson_id": None})
        assert response.status_code == 200
        assert response.json()["preview_lesson_id"] is None
