import datetime
import uuid
from decimal import Decimal

from django.test import TestCase
from rest_framework import status
from rest_framework.test import APITestCase

from accounts.models import User
from core.models import Semester
from courses.models import Course
from grading.models import CGPARecord
from results.models import Result
from students.models import Student
from .services import build_summary, course_stats


def make_student(i):
    return Student.objects.create(matricule=f"A-{i:04d}", first_name=f"S{i}", last_name="Test",
                                  email=f"a{i}@example.com", phone_number=f"+23480000002{i:02d}",
                                  program="CS", year_of_study=1)


class SummaryTests(TestCase):
    def test_empty_state(self):
        out = build_summary()
        self.assertEqual(out["average_cgpa"], 0.0)
        self.assertEqual(out["grade_distribution"], {})
        self.assertEqual(out["total_students"], 0)
        self.assertEqual(out["notified_results"], 0)
        self.assertEqual(out["pending_results"], 0)
        self.assertEqual(out["recent_results"], [])

    def test_with_data(self):
        course = Course.objects.create(code="TST401", name="Analytics", credit_units=3)
        semester = Semester.objects.create(name="Spring", year=2032, start_date=datetime.date(2032, 1, 10),
                                           end_date=datetime.date(2032, 5, 10))
        scores = [Decimal("30"), Decimal("75"), Decimal("80"), Decimal("52")]
        students = [make_student(i) for i in range(len(scores))]
        for student, score in zip(students, scores):
            Result.objects.create(student=student, course=course, semester=semester, score=score)
        Result.objects.filter(score=Decimal("30")).update(notified=True)
        CGPARecord.objects.create(student=students[0], semester=semester, semester_gpa=Decimal("3.00"),
                                  cumulative_gpa=Decimal("3.00"), total_credit_units=3)
        CGPARecord.objects.create(student=students[1], semester=semester, semester_gpa=Decimal("2.25"),
                                  cumulative_gpa=Decimal("2.25"), total_credit_units=3)

        out = build_summary()
        self.assertEqual(out["total_students"], 4)
        self.assertEqual(out["notified_results"], 1)
        self.assertEqual(out["pending_results"], 3)
        self.assertEqual(out["average_cgpa"], 2.63)
        self.assertEqual(list(out["grade_distribution"].items()), [("A", 2), ("C", 1), ("F", 1)])
        self.assertEqual(len(out["recent_results"]), 4)


class CourseStatsTests(TestCase):
    def setUp(self):
        self.course = Course.objects.create(code="TST402", name="Stats", credit_units=2)
        self.spring = Semester.objects.create(name="Spring", year=2033, start_date=datetime.date(2033, 1, 10),
                                              end_date=datetime.date(2033, 5, 10))
        self.fall = Semester.objects.create(name="Fall", year=2033, start_date=datetime.date(2033, 9, 1),
                                            end_date=datetime.date(2033, 12, 20))
        for i, score in enumerate([Decimal("100"), Decimal("44"), Decimal("39.5")]):
            Result.objects.create(student=make_student(i), course=self.course, semester=self.spring, score=score)
        Result.objects.create(student=make_student(9), course=self.course, semester=self.fall, score=Decimal("65"))

    def test_stats(self):
        out = course_stats(self.course.id, self.spring.id)
        self.assertEqual(out["count"], 3)
        self.assertEqual(out["average_score"], 61.17)
        # E vaut 0 point: seul 100 passe
        self.assertEqual(out["pass_count"], 1)
        self.assertEqual(out["pass_rate"], 33.33)
        self.assertEqual(out["grade_distribution"], {"A": 1, "E": 1, "F": 1})
        counts = {b["range"]: b["count"] for b in out["distribution"]}
        self.assertEqual(counts["90-100"], 1)
        self.assertEqual(counts["40-50"], 1)
        self.assertEqual(counts["30-40"], 1)

    def test_all_semesters(self):
        self.assertEqual(course_stats(self.course.id)["count"], 4)

    def test_empty_course(self):
        other = Course.objects.create(code="TST403", name="Empty", credit_units=1)
        out = course_stats(other.id)
        self.assertEqual(out["count"], 0)
        self.assertEqual(out["average_score"], 0.0)
        self.assertEqual(out["pass_rate"], 0.0)


class AnalyticsAPITests(APITestCase):
    def setUp(self):
        self.viewer = User.objects.create_user("viewer", password="pw")

    def test_requires_authentication(self):
        res = self.client.get("/api/analytics/summary/")
        self.assertIn(res.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))

    def test_summary(self):
        self.client.force_authenticate(self.viewer)
        res = self.client.get("/api/analytics/summary/")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["average_cgpa"], 0.0)

    def test_course_stats_unknown_course(self):
        self.client.force_authenticate(self.viewer)
        res = self.client.get(f"/api/analytics/courses/{uuid.uuid4()}/stats/")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_course_stats_bad_semester(self):
        course = Course.objects.create(code="TST404", name="X", credit_units=1)
        self.client.force_authenticate(self.viewer)
        res = self.client.get(f"/api/analytics/courses/{course.id}/stats/", {"semester": "nope"})
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
