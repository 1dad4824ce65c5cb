import datetime

from rest_framework import status
from rest_framework.test import APITestCase

from accounts.models import User
from core.models import Semester
from courses.models import Course
from results.models import Result
from .models import Student


class StudentAPITests(APITestCase):
    def setUp(self):
        self.registrar = User.objects.create_user("registrar", password="pw", role=User.Role.REGISTRAR)
        self.viewer = User.objects.create_user("viewer", password="pw", role=User.Role.VIEWER)
        self.client.force_authenticate(self.registrar)

    def payload(self, **kw):
        data = {
            "matricule": "STU001", "first_name": "John", "last_name": "Doe",
            "email": "john.doe@university.edu", "phone_number": "+1234567890",
            "program": "Computer Science", "year_of_study": 2,
        }
        data.update(kw)
        return data

    def test_create(self):
        res = self.client.post("/api/students/", self.payload(), format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Student.objects.get().full_name, "John Doe")

    def test_invalid_phone_rejected(self):
        for phone in ["12-34", "+12ab567", "123"]:
            with self.subTest(phone=phone):
                res = self.client.post("/api/students/", self.payload(phone_number=phone), format="json")
                self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
                self.assertIn("phone_number", res.data)

    def test_duplicate_matricule_rejected(self):
        self.client.post("/api/students/", self.payload(), format="json")
        res = self.client.post("/api/students/", self.payload(email="other@university.edu"), format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_year_of_study_must_be_positive(self):
        res = self.client.post("/api/students/", self.payload(year_of_study=0), format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_search(self):
        self.client.post("/api/students/", self.payload(), format="json")
        self.client.post("/api/students/", self.payload(matricule="STU002", first_name="Jane", last_name="Smith",
                                                        email="jane@university.edu"), format="json")
        res = self.client.get("/api/students/", {"search": "smith"})
        self.assertEqual([s["matricule"] for s in res.data], ["STU002"])

    def test_viewer_cannot_create(self):
        self.client.force_authenticate(self.viewer)
        res = self.client.post("/api/students/", self.payload(), format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_results_action(self):
        student = Student.objects.create(**self.payload())
        course = Course.objects.create(code="TST501", name="Testing", credit_units=3)
        semester = Semester.objects.create(name="Spring", year=2050, start_date=datetime.date(2050, 1, 10),
                                           end_date=datetime.date(2050, 5, 10))
        Result.objects.create(student=student, course=course, semester=semester, score=66)
        res = self.client.get(f"/api/students/{student.id}/results/")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data), 1)
        self.assertEqual(res.data[0]["grade"], "B")
        self.assertEqual(res.data[0]["course_code"], "TST501")
