import datetime

from django.test import TestCase
from rest_framework import status
from rest_framework.test import APITestCase

from accounts.models import User
from .models import Semester


def make_semester(name, year, current=False):
    return Semester.objects.create(name=name, year=year, start_date=datetime.date(year, 1, 10),
                                   end_date=datetime.date(year, 5, 10), is_current=current)


class SemesterModelTests(TestCase):
    def test_only_one_current(self):
        a = make_semester("Spring", 2040, current=True)
        b = make_semester("Spring", 2041, current=True)
        a.refresh_from_db()
        self.assertFalse(a.is_current)
        self.assertEqual(Semester.objects.filter(is_current=True).get(), b)
        self.assertEqual(Semester.current(), b)

    def test_current_none(self):
        Semester.objects.update(is_current=False)
        self.assertIsNone(Semester.current())


class SemesterAPITests(APITestCase):
    def setUp(self):
        self.registrar = User.objects.create_user("registrar", password="pw", role=User.Role.REGISTRAR)
        self.lecturer = User.objects.create_user("lecturer", password="pw", role=User.Role.LECTURER)
        self.client.force_authenticate(self.registrar)

    def test_create_rejects_inverted_dates(self):
        res = self.client.post("/api/core/semesters/", {
            "name": "Fall", "year": 2042, "start_date": "2042-12-01", "end_date": "2042-09-01",
        }, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("end_date", res.data)

    def test_set_current(self):
        old = make_semester("Spring", 2043, current=True)
        new = make_semester("Fall", 2043)
        res = self.client.post(f"/api/core/semesters/{new.id}/set-current/")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertTrue(res.data["is_current"])
        old.refresh_from_db()
        self.assertFalse(old.is_current)

        res = self.client.get("/api/core/semesters/current/")
        self.assertEqual(res.data["id"], str(new.id))

    def test_current_404(self):
        Semester.objects.update(is_current=False)
        res = self.client.get("/api/core/semesters/current/")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_lecturer_cannot_manage_semesters(self):
        self.client.force_authenticate(self.lecturer)
        res = self.client.get("/api/core/semesters/")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        res = self.client.post("/api/core/semesters/", {
            "name": "Fall", "year": 2044, "start_date": "2044-09-01", "end_date": "2044-12-01",
        }, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
