import datetime
from decimal import Decimal
from unittest import mock

from django.db import DatabaseError
from django.test import TestCase, SimpleTestCase, override_settings
from rest_framework import status
from rest_framework.test import APITestCase

from accounts.models import User
from core.models import Semester
from courses.models import Course
from results.models import Result
from students.models import Student
from .models import NotificationLog
from .services import format_score, render_message, send_result_notification, dispatch_pending
from .transports import LocmemTransport, ConsoleTransport, TransportError, get_transport

PHONES = ["+2348000000101", "+2348000000102", "+2348000000103"]


def make_results(count=3):
    course = Course.objects.create(code="TST201", name="Software Testing", credit_units=3)
    semester = Semester.objects.create(name="Fall", year=2030, start_date=datetime.date(2030, 9, 1),
                                       end_date=datetime.date(2030, 12, 20))
    results = []
    for i in range(count):
        student = Student.objects.create(
            matricule=f"N-{i:04d}", first_name=["John", "Jane", "Mike"][i % 3], last_name="Doe",
            email=f"n{i}@example.com", phone_number=PHONES[i % 3], program="CS", year_of_study=1,
        )
        results.append(Result.objects.create(student=student, course=course, semester=semester,
                                             score=Decimal("85.00") - i * 10))
    return results


class FormatTests(SimpleTestCase):
    def test_format_score(self):
        self.assertEqual(format_score(Decimal("85.00")), "85")
        self.assertEqual(format_score(Decimal("72.50")), "72.5")
        self.assertEqual(format_score(Decimal("100.00")), "100")
        self.assertEqual(format_score(Decimal("0.00")), "0")


class TransportTests(SimpleTestCase):
    def test_locmem_outbox_and_failure(self):
        t = LocmemTransport(fail_for={"+1"})
        self.assertEqual(t.send("+2", "hello"), "locmem-1")
        self.assertEqual(t.outbox, [("+2", "hello")])
        with self.assertRaises(TransportError):
            t.send("+1", "hello")
        self.assertEqual(len(t.outbox), 1)

    def test_instances_do_not_share_outbox(self):
        a, b = LocmemTransport(), LocmemTransport()
        a.send("+2", "x")
        self.assertEqual(b.outbox, [])

    def test_console_returns_reference(self):
        with self.assertLogs("notifications.transports", level="INFO"):
            ref = ConsoleTransport().send("+2", "hello")
        self.assertTrue(ref.startswith("console-"))

    @override_settings(SMS_TRANSPORT="notifications.transports.LocmemTransport")
    def test_get_transport_from_settings(self):
        self.assertIsInstance(get_transport(), LocmemTransport)


class NotificationServiceTests(TestCase):
    def setUp(self):
        self.results = make_results()

    def test_render_message(self):
        self.assertEqual(
            render_message(self.results[0]),
            "Dear John, your TST201 (Software Testing) result for Fall 2030 is now available. "
            "Score: 85% (Grade A). Visit the portal for details.",
        )

    def test_send_success(self):
        transport = LocmemTransport()
        log = send_result_notification(self.results[0], transport=transport)
        self.assertEqual(log.status, NotificationLog.Status.SENT)
        self.assertEqual(log.transport_ref, "locmem-1")
        self.results[0].refresh_from_db()
        self.assertTrue(self.results[0].notified)

    def test_send_failure_keeps_flag(self):
        transport = LocmemTransport(fail_for={PHONES[0]})
        with self.assertRaises(TransportError):
            send_result_notification(self.results[0], transport=transport)
        self.results[0].refresh_from_db()
        self.assertFalse(self.results[0].notified)
        log = NotificationLog.objects.get(result=self.results[0])
        self.assertEqual(log.status, NotificationLog.Status.FAILED)
        self.assertIn(PHONES[0], log.error)

    def test_dispatch_with_partial_failure(self):
        first, second, third = self.results
        transport = LocmemTransport(fail_for={PHONES[1]})

        summary = dispatch_pending(transport=transport)
        self.assertEqual(summary.detail, "2 succeeded, 1 failed")
        self.assertEqual(summary.failed_ids, [second.id])
        for r in self.results:
            r.refresh_from_db()
        self.assertTrue(first.notified)
        self.assertFalse(second.notified)
        self.assertTrue(third.notified)

        # relance: seul l'élément en échec est retenté
        again = dispatch_pending(transport=transport)
        self.assertEqual(again.attempted, 1)
        self.assertEqual(again.failed_ids, [second.id])
        self.assertEqual(len(transport.outbox), 2)

        healthy = dispatch_pending(transport=LocmemTransport())
        self.assertEqual(healthy.as_dict()["detail"], "1 succeeded, 0 failed")
        self.assertFalse(Result.objects.filter(notified=False).exists())
        self.assertEqual(NotificationLog.objects.filter(status="SENT").count(), 3)
        self.assertEqual(NotificationLog.objects.filter(status="FAILED").count(), 2)

    def test_lost_sent_log_does_not_resend(self):
        transport = LocmemTransport()
        with mock.patch("notifications.services.NotificationLog.objects.create",
                        side_effect=DatabaseError("disk full")):
            with self.assertLogs("notifications.services", level="ERROR"):
                summary = dispatch_pending(transport=transport)
        self.assertEqual(summary.detail, "3 succeeded, 0 failed")
        self.assertFalse(Result.objects.filter(notified=False).exists())

        again = dispatch_pending(transport=transport)
        self.assertEqual(again.attempted, 0)
        self.assertEqual(len(transport.outbox), 3)

    def test_dispatch_with_nothing_pending(self):
        Result.objects.update(notified=True)
        summary = dispatch_pending(transport=LocmemTransport())
        self.assertEqual(summary.as_dict(), {
            "attempted": 0, "succeeded": 0, "failed": 0, "failed_ids": [],
            "detail": "0 succeeded, 0 failed",
        })


@override_settings(SMS_TRANSPORT="notifications.transports.LocmemTransport")
class NotificationAPITests(APITestCase):
    def setUp(self):
        self.results = make_results()
        self.registrar = User.objects.create_user("registrar", password="pw", role=User.Role.REGISTRAR)
        self.lecturer = User.objects.create_user("lecturer", password="pw", role=User.Role.LECTURER)
        self.client.force_authenticate(self.registrar)

    def test_pending_lists_message_preview(self):
        res = self.client.get("/api/notifications/pending/")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data), 3)
        self.assertIn("Visit the portal for details.", res.data[0]["message"])
        self.assertIn(res.data[0]["phone_number"], PHONES)

    def test_send_pending(self):
        res = self.client.post("/api/notifications/send-pending/")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["detail"], "3 succeeded, 0 failed")
        res = self.client.get("/api/notifications/pending/")
        self.assertEqual(res.data, [])

    def test_send_single(self):
        url = f"/api/notifications/send/{self.results[0].id}/"
        res = self.client.post(url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["status"], "SENT")
        res = self.client.post(url)
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_send_single_transport_failure(self):
        url = f"/api/notifications/send/{self.results[0].id}/"
        with mock.patch("notifications.views.send_result_notification", side_effect=TransportError("down")):
            res = self.client.post(url)
        self.assertEqual(res.status_code, status.HTTP_502_BAD_GATEWAY)

    def test_lecturer_cannot_send(self):
        self.client.force_authenticate(self.lecturer)
        res = self.client.post("/api/notifications/send-pending/")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Result.objects.filter(notified=True).exists())

    def test_logs_filter_by_status(self):
        self.client.post("/api/notifications/send-pending/")
        res = self.client.get("/api/notifications/logs/", {"status": "SENT"})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data), 3)
