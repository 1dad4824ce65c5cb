import datetime
import uuid
from decimal import Decimal
from unittest import mock

from django.test import TestCase
from rest_framework import status
from rest_framework.test import APITestCase

from accounts.models import User
from core.models import Semester
from courses.models import Course
from grading.services import append_cgpa_record
from results.models import Result
from students.models import Student
from .models import StatementToken
from .services import compute_student_statement, build_pdf_html, sha1_bytes


def make_transcript():
    spring = Semester.objects.create(name="Spring", year=2060, start_date=datetime.date(2060, 1, 10),
                                     end_date=datetime.date(2060, 5, 10))
    fall = Semester.objects.create(name="Fall", year=2060, start_date=datetime.date(2060, 9, 1),
                                   end_date=datetime.date(2060, 12, 20))
    c1 = Course.objects.create(code="TST701", name="Compilers", credit_units=3)
    c2 = Course.objects.create(code="TST702", name="Databases", credit_units=3)
    c3 = Course.objects.create(code="TST703", name="Networks", credit_units=2)
    student = Student.objects.create(matricule="P-0001", first_name="Jane", last_name="Smith",
                                     email="jane@example.com", phone_number="+1234567891",
                                     program="Computer Science", year_of_study=3)
    Result.objects.create(student=student, course=c2, semester=spring, score=Decimal("81"))  # A 4
    Result.objects.create(student=student, course=c1, semester=spring, score=Decimal("64"))  # B 3
    Result.objects.create(student=student, course=c3, semester=fall, score=Decimal("47"))    # D 1
    return student, spring, fall


class StatementTests(TestCase):
    def setUp(self):
        self.student, self.spring, self.fall = make_transcript()

    def test_payload(self):
        append_cgpa_record(self.student.id, self.spring.id)
        p = compute_student_statement(self.student.id)

        self.assertEqual(p["student"]["matricule"], "P-0001")
        self.assertEqual([b["semester"]["name"] for b in p["semesters"]], ["Spring", "Fall"])

        spring, fall = p["semesters"]
        self.assertEqual([l["code"] for l in spring["lines"]], ["TST701", "TST702"])
        self.assertEqual(spring["semester_gpa"], 3.5)
        self.assertEqual(spring["recorded_cgpa"], 3.5)
        self.assertEqual(fall["semester_gpa"], 1.0)
        # (12 + 9 + 2) / 8
        self.assertEqual(fall["cumulative_gpa"], 2.88)
        self.assertIsNone(fall["recorded_cgpa"])

        self.assertEqual(p["totals"], {
            "credit_units": 8, "cgpa": 2.88, "classification": "Second Class Honours (Lower Division)",
        })

    def test_student_without_results(self):
        other = Student.objects.create(matricule="P-0002", first_name="No", last_name="Results",
                                       email="n@example.com", phone_number="+1234567899",
                                       program="CS", year_of_study=1)
        p = compute_student_statement(other.id)
        self.assertEqual(p["semesters"], [])
        self.assertEqual(p["totals"]["cgpa"], 0.0)
        self.assertEqual(p["totals"]["classification"], "Pass")

    def test_html_contains_lines_and_qr(self):
        p = compute_student_statement(self.student.id)
        html = build_pdf_html(p, "http://testserver/api/reports/verify/x/")
        self.assertIn("TST701", html)
        self.assertIn("data:image/png;base64,", html)
        self.assertIn("http://testserver/api/reports/verify/x/", html)

    def test_sha1(self):
        self.assertEqual(sha1_bytes(b"abc"), "a9993e364706816aba3e25717850c26c9cd0d89d")


class StatementAPITests(APITestCase):
    def setUp(self):
        self.student, _, _ = make_transcript()
        self.lecturer = User.objects.create_user("lecturer", password="pw", role=User.Role.LECTURER)
        self.viewer = User.objects.create_user("viewer", password="pw", role=User.Role.VIEWER)
        self.client.force_authenticate(self.lecturer)

    def test_preview(self):
        res = self.client.get("/api/reports/statement/preview/", {"student": str(self.student.id)})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["totals"]["credit_units"], 8)

    def test_preview_unknown_student(self):
        res = self.client.get("/api/reports/statement/preview/", {"student": str(uuid.uuid4())})
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        res = self.client.get("/api/reports/statement/preview/", {"student": "bad"})
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    @mock.patch("reports.views.render_pdf_from_html", return_value=b"%PDF-1.4 test")
    def test_pdf_creates_token(self, _render):
        res = self.client.get("/api/reports/statement/", {"student": str(self.student.id)})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res["Content-Type"], "application/pdf")
        self.assertIn("P-0001_statement.pdf", res["Content-Disposition"])

        token = StatementToken.objects.get(student=self.student)
        self.assertEqual(token.pdf_sha1, sha1_bytes(b"%PDF-1.4 test"))
        self.assertEqual(token.payload["totals"]["cgpa"], 2.88)

    def test_viewer_cannot_generate_pdf(self):
        self.client.force_authenticate(self.viewer)
        res = self.client.get("/api/reports/statement/", {"student": str(self.student.id)})
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_verify_page(self):
        payload = compute_student_statement(self.student.id)
        token = StatementToken.objects.create(student=self.student, payload=payload, pdf_sha1="abc123")
        self.client.force_authenticate(None)
        res = self.client.get(f"/api/reports/verify/{token.uid}/")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertContains(res, "Statement is valid")
        self.assertContains(res, "P-0001")
        self.assertContains(res, "abc123")

        token.valid = False
        token.save(update_fields=["valid"])
        res = self.client.get(f"/api/reports/verify/{token.uid}/")
        self.assertContains(res, "revoked")

    def test_verify_unknown(self):
        res = self.client.get(f"/api/reports/verify/{uuid.uuid4()}/")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
