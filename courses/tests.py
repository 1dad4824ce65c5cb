import datetime

from rest_framework import status
from rest_framework.test import APITestCase

from accounts.models import User
from core.models import Semester
from results.models import Result
from students.models import Student
from .models import Course


class CourseAPITests(APITestCase):
    def setUp(self):
        self.registrar = User.objects.create_user("registrar", password="pw", role=User.Role.REGISTRAR)
        self.lecturer = User.objects.create_user("lecturer", password="pw", role=User.Role.LECTURER)
        self.client.force_authenticate(self.registrar)

    def test_seeded_courses(self):
        self.assertEqual(Course.objects.get(code="MATH201").credit_units, 4)

    def test_code_normalised(self):
        res = self.client.post("/api/courses/", {"code": " tst601 ", "name": "Testing", "credit_units": 3},
                               format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["code"], "TST601")

    def test_duplicate_code_any_case_rejected(self):
        res = self.client.post("/api/courses/", {"code": "cs101", "name": "Dup", "credit_units": 3},
                               format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("code", res.data)
        self.assertEqual(Course.objects.filter(code="CS101").count(), 1)

    def test_credit_units_must_be_positive(self):
        res = self.client.post("/api/courses/", {"code": "TST602", "name": "Zero", "credit_units": 0},
                               format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_lecturer_cannot_create(self):
        self.client.force_authenticate(self.lecturer)
        res = self.client.post("/api/courses/", {"code": "TST603", "name": "X", "credit_units": 1}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_results_filtered_by_semester(self):
        course = Course.objects.create(code="TST604", name="Testing", credit_units=2)
        spring = Semester.objects.create(name="Spring", year=2051, start_date=datetime.date(2051, 1, 10),
                                         end_date=datetime.date(2051, 5, 10))
        fall = Semester.objects.create(name="Fall", year=2051, start_date=datetime.date(2051, 9, 1),
                                       end_date=datetime.date(2051, 12, 10))
        student = Student.objects.create(matricule="C-0001", first_name="A", last_name="B", email="a@b.com",
                                         phone_number="+1234567890", program="CS", year_of_study=1)
        Result.objects.create(student=student, course=course, semester=spring, score=50)
        Result.objects.create(student=student, course=course, semester=fall, score=80)

        res = self.client.get(f"/api/courses/{course.id}/results/")
        self.assertEqual(len(res.data), 2)
        res = self.client.get(f"/api/courses/{course.id}/results/", {"semester": str(fall.id)})
        self.assertEqual([r["grade"] for r in res.data], ["A"])
