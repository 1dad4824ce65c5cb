from django.db import IntegrityError
from django.test import SimpleTestCase, TestCase, override_settings
from rest_framework import status
from rest_framework.test import APITestCase

from records_backend.exceptions import api_exception_handler
from .models import User
from .permissions import user_has_capability


class CapabilityTests(TestCase):
    def test_role_matrix(self):
        admin = User.objects.create_user("admin", password="pw", role=User.Role.ADMIN)
        lecturer = User.objects.create_user("lecturer", password="pw", role=User.Role.LECTURER)
        viewer = User.objects.create_user("viewer", password="pw", role=User.Role.VIEWER)
        root = User.objects.create_superuser("root", password="pw", role=User.Role.VIEWER)

        self.assertTrue(user_has_capability(admin, "notifications"))
        self.assertTrue(user_has_capability(lecturer, "results"))
        self.assertFalse(user_has_capability(lecturer, "students"))
        self.assertFalse(user_has_capability(viewer, "results"))
        self.assertTrue(user_has_capability(root, "students"))

    def test_default_role_is_viewer(self):
        self.assertEqual(User.objects.create_user("someone", password="pw").role, User.Role.VIEWER)


class ExceptionHandlerTests(SimpleTestCase):
    def test_integrity_error_becomes_conflict(self):
        with self.assertLogs("records_backend.exceptions", level="WARNING"):
            res = api_exception_handler(IntegrityError("UNIQUE constraint failed"), {})
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)

    def test_other_errors_untouched(self):
        self.assertIsNone(api_exception_handler(RuntimeError("boom"), {}))


class AccountAPITests(APITestCase):
    def test_me(self):
        user = User.objects.create_user("lecturer", password="pw", role=User.Role.LECTURER)
        self.client.force_authenticate(user)
        res = self.client.get("/api/me/")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["role"], "LECTURER")
        self.assertEqual(res.data["capabilities"], ["reports", "results"])

    @override_settings(SMS_TRANSPORT="notifications.transports.LocmemTransport")
    def test_health_is_public(self):
        res = self.client.get("/api/health/")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data, {"status": "ok", "database": "ok", "sms_transport": "LocmemTransport"})
