import datetime
import uuid
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.test import SimpleTestCase, TestCase
from rest_framework import status
from rest_framework.test import APITestCase

from accounts.models import User
from core.models import Semester
from courses.models import Course
from students.models import Student
from .models import Result
from .serializers import parse_score


def make_student(matricule, phone="+2348000000001", first_name="Ada"):
    return Student.objects.create(matricule=matricule, first_name=first_name, last_name="Obi",
                                  email=f"{matricule.lower()}@example.com", phone_number=phone,
                                  program="Computer Science", year_of_study=1)


class ParseScoreTests(SimpleTestCase):
    def test_valid(self):
        self.assertEqual(parse_score("72.5"), Decimal("72.50"))
        self.assertEqual(parse_score(0), Decimal("0.00"))
        self.assertEqual(parse_score(100), Decimal("100.00"))

    def test_invalid(self):
        for raw in ["abc", None, "", "NaN", "inf"]:
            with self.subTest(raw=raw):
                with self.assertRaisesMessage(ValueError, "Invalid value"):
                    parse_score(raw)

    def test_out_of_range(self):
        for raw in [-1, "100.01", 250]:
            with self.subTest(raw=raw):
                with self.assertRaisesMessage(ValueError, "Out of range"):
                    parse_score(raw)


class ResultModelTests(TestCase):
    def setUp(self):
        self.student = make_student("R-0001")
        self.course = Course.objects.create(code="TST101", name="Testing", credit_units=3)
        self.semester = Semester.objects.create(name="Spring", year=2031, start_date=datetime.date(2031, 1, 10),
                                                end_date=datetime.date(2031, 5, 10))

    def test_grade_derived_on_create(self):
        r = Result.objects.create(student=self.student, course=self.course, semester=self.semester,
                                  score=Decimal("70.00"))
        r.refresh_from_db()
        self.assertEqual(r.grade, "A")
        self.assertEqual(r.grade_point, Decimal("4.00"))
        self.assertFalse(r.notified)

    def test_grade_recomputed_on_score_update(self):
        r = Result.objects.create(student=self.student, course=self.course, semester=self.semester,
                                  score=Decimal("70"))
        r.score = Decimal("39.99")
        r.save(update_fields=["score"])
        r.refresh_from_db()
        self.assertEqual(r.grade, "F")
        self.assertEqual(r.grade_point, Decimal("0.00"))

    def test_grade_follows_stored_score_rounding(self):
        r = Result.objects.create(student=self.student, course=self.course, semester=self.semester,
                                  score=Decimal("69.995"))
        r.refresh_from_db()
        self.assertEqual(r.score, Decimal("70.00"))
        self.assertEqual(r.grade, "A")
        self.assertEqual(r.grade_point, Decimal("4.00"))

    def test_unique_per_student_course_semester(self):
        Result.objects.create(student=self.student, course=self.course, semester=self.semester, score=50)
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Result.objects.create(student=self.student, course=self.course, semester=self.semester, score=60)
        self.assertEqual(Result.objects.filter(student=self.student).count(), 1)

    def test_mark_notified(self):
        r = Result.objects.create(student=self.student, course=self.course, semester=self.semester, score=50)
        r.mark_notified()
        r.refresh_from_db()
        self.assertTrue(r.notified)
        self.assertEqual(r.grade, "C")


class ResultAPITests(APITestCase):
    def setUp(self):
        self.student = make_student("R-0002")
        self.other = make_student("R-0003", phone="+2348000000002", first_name="Bola")
        self.course = Course.objects.create(code="TST102", name="Testing II", credit_units=2)
        self.semester = Semester.objects.create(name="Fall", year=2031, start_date=datetime.date(2031, 9, 1),
                                                end_date=datetime.date(2031, 12, 20))
        self.lecturer = User.objects.create_user("lecturer", password="pw", role=User.Role.LECTURER)
        self.viewer = User.objects.create_user("viewer", password="pw", role=User.Role.VIEWER)
        self.client.force_authenticate(self.lecturer)

    def body(self, score, student=None):
        return {"student": str((student or self.student).id), "course": str(self.course.id),
                "semester": str(self.semester.id), "score": score}

    def test_create_derives_grade(self):
        res = self.client.post("/api/results/", self.body("45"), format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["grade"], "D")
        self.assertEqual(res.data["grade_point"], Decimal("1.00"))
        self.assertFalse(res.data["notified"])

    def test_client_cannot_set_grade_or_notified(self):
        body = self.body("30")
        body.update({"grade": "A", "grade_point": "4.00", "notified": True})
        res = self.client.post("/api/results/", body, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        r = Result.objects.get(id=res.data["id"])
        self.assertEqual(r.grade, "F")
        self.assertFalse(r.notified)

    def test_out_of_range_rejected(self):
        res = self.client.post("/api/results/", self.body("101"), format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Result.objects.exists())

    def test_duplicate_rejected(self):
        self.client.post("/api/results/", self.body("50"), format="json")
        res = self.client.post("/api/results/", self.body("60"), format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Result.objects.count(), 1)

    def test_unknown_student_rejected(self):
        body = self.body("50")
        body["student"] = str(uuid.uuid4())
        res = self.client.post("/api/results/", body, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_patch_score_recomputes_grade(self):
        res = self.client.post("/api/results/", self.body("50"), format="json")
        res = self.client.patch(f"/api/results/{res.data['id']}/", {"score": "80"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["grade"], "A")

    def test_viewer_is_read_only(self):
        Result.objects.create(student=self.student, course=self.course, semester=self.semester, score=50)
        self.client.force_authenticate(self.viewer)
        res = self.client.get("/api/results/", {"course": str(self.course.id)})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data[0]["course_code"], "TST102")
        res = self.client.post("/api/results/", self.body("60", student=self.other), format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_recent(self):
        for i in range(6):
            s = make_student(f"R-1{i:03d}", phone=f"+23480000010{i:02d}")
            Result.objects.create(student=s, course=self.course, semester=self.semester, score=40 + i)
        res = self.client.get("/api/results/recent/")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data), 5)

    def test_bulk_upsert(self):
        existing = Result.objects.create(student=self.other, course=self.course, semester=self.semester, score=40)
        missing = str(uuid.uuid4())
        payload = {
            "course": str(self.course.id),
            "semester": str(self.semester.id),
            "entries": [
                {"student": str(self.student.id), "score": 72.5},
                {"student": str(self.other.id).upper(), "score": "65"},
                {"student": missing, "score": 50},
                {"student": str(self.student.id), "score": "abc"},
                {"student": str(self.student.id), "score": 120},
            ],
        }
        res = self.client.post("/api/results/bulk/", payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data["created"]), 1)
        self.assertEqual(res.data["updated"], [str(existing.id)])
        reasons = [s["reason"] for s in res.data["skipped"]]
        self.assertEqual(reasons, ["Student not found", "Invalid value", "Out of range"])

        existing.refresh_from_db()
        self.assertEqual(existing.score, Decimal("65.00"))
        self.assertEqual(existing.grade, "B")
        created = Result.objects.get(student=self.student, course=self.course, semester=self.semester)
        self.assertEqual(created.grade, "A")

    def test_bulk_requires_student_and_score(self):
        payload = {"course": str(self.course.id), "semester": str(self.semester.id),
                   "entries": [{"student": str(self.student.id)}]}
        res = self.client.post("/api/results/bulk/", payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
