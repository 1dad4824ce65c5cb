import datetime
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.test import SimpleTestCase, TestCase
from rest_framework import status
from rest_framework.test import APITestCase

from accounts.models import User
from core.models import Semester
from courses.models import Course
from results.models import Result
from students.models import Student
from .models import CGPARecord
from .rules import (
    grade_for_score, classify_cgpa, advise, trend_direction,
    DECLINE_WARNING, IMPROVEMENT_NOTE,
)
from .services import (
    weighted_gpa, compute_cgpa_values, append_cgpa_record,
    append_semester_cgpa_records, analyze_student_cgpa,
)


class GradeRulesTests(SimpleTestCase):
    def test_grade_boundaries(self):
        expected = [
            (39, "F", "0.00"), (40, "E", "0.00"), (44, "E", "0.00"), (45, "D", "1.00"),
            (49, "D", "1.00"), (50, "C", "2.00"), (59, "C", "2.00"), (60, "B", "3.00"),
            (69, "B", "3.00"), (70, "A", "4.00"), (100, "A", "4.00"),
        ]
        for score, letter, point in expected:
            with self.subTest(score=score):
                self.assertEqual(grade_for_score(score), (letter, Decimal(point)))

    def test_fractional_scores_just_below_a_threshold(self):
        self.assertEqual(grade_for_score(Decimal("69.99"))[0], "B")
        self.assertEqual(grade_for_score(69.99)[0], "B")
        self.assertEqual(grade_for_score("70.00")[0], "A")
        self.assertEqual(grade_for_score(0)[0], "F")

    def test_classification_boundaries(self):
        expected = [
            ("1.9", "Pass"),
            ("2.0", "Third Class Honours"),
            ("2.6", "Third Class Honours"),
            ("2.7", "Second Class Honours (Lower Division)"),
            ("3.2", "Second Class Honours (Lower Division)"),
            ("3.3", "Second Class Honours (Upper Division)"),
            ("3.6", "Second Class Honours (Upper Division)"),
            ("3.7", "First Class Honours"),
            ("4.0", "First Class Honours"),
        ]
        for cgpa, label in expected:
            with self.subTest(cgpa=cgpa):
                self.assertEqual(classify_cgpa(Decimal(cgpa)), label)

    def test_classification_accepts_floats(self):
        self.assertEqual(classify_cgpa(3.7), "First Class Honours")
        self.assertEqual(classify_cgpa(0), "Pass")


class AdvisoryTests(SimpleTestCase):
    def test_risk_levels_by_cgpa(self):
        for cgpa, risk in [("1.5", "high"), ("2.5", "medium"), ("3.0", "low"), ("3.8", "low")]:
            with self.subTest(cgpa=cgpa):
                out = advise(Decimal(cgpa))
                self.assertEqual(out["risk_level"], risk)
                self.assertTrue(out["recommendations"])
                self.assertEqual(out["trend"], "stable")

    def test_tier_sizes(self):
        self.assertEqual(len(advise("1.0")["recommendations"]), 4)
        self.assertEqual(len(advise("2.0")["recommendations"]), 4)
        self.assertEqual(len(advise("2.7")["recommendations"]), 3)
        self.assertEqual(len(advise("3.3")["recommendations"]), 4)
        self.assertEqual(advise("1.0")["recommendations"][0], "Seek academic counseling immediately")
        self.assertEqual(advise("3.9")["recommendations"][0], "Excellent performance! Keep up the good work")

    def test_improvement_note(self):
        out = advise("3.5", [{"cumulative_gpa": "3.0"}, {"cumulative_gpa": "3.5"}])
        self.assertEqual(out["recommendations"][-1], IMPROVEMENT_NOTE)
        self.assertNotIn(DECLINE_WARNING, out["recommendations"])
        self.assertEqual(out["trend"], "up")

    def test_decline_warning(self):
        out = advise("3.0", [{"cumulative_gpa": "3.5"}, {"cumulative_gpa": "3.0"}])
        self.assertEqual(out["recommendations"][-1], DECLINE_WARNING)
        self.assertEqual(out["trend"], "down")

    def test_small_delta_adds_nothing(self):
        base = advise("3.1")["recommendations"]
        out = advise("3.1", [{"cumulative_gpa": "3.0"}, {"cumulative_gpa": "3.1"}])
        self.assertEqual(out["recommendations"], base)
        self.assertEqual(out["trend"], "up")

    def test_delta_exactly_threshold_adds_nothing(self):
        out = advise("3.2", [{"cumulative_gpa": "3.0"}, {"cumulative_gpa": "3.2"}])
        self.assertNotIn(IMPROVEMENT_NOTE, out["recommendations"])

    def test_single_record_is_stable(self):
        out = advise("3.2", [{"cumulative_gpa": "1.0"}])
        self.assertEqual(out["trend"], "stable")
        self.assertEqual(trend_direction([]), "stable")

    def test_only_last_two_records_count(self):
        records = [{"cumulative_gpa": "1.0"}, {"cumulative_gpa": "3.0"}, {"cumulative_gpa": "3.0"}]
        self.assertEqual(trend_direction(records), "stable")
        self.assertNotIn(IMPROVEMENT_NOTE, advise("3.0", records)["recommendations"])


class WeightedGpaTests(SimpleTestCase):
    def test_empty(self):
        self.assertEqual(weighted_gpa([]), (Decimal("0.00"), 0))

    def test_weighted_by_credit_units(self):
        gpa, units = weighted_gpa([(Decimal("4.00"), 3), (Decimal("2.00"), 4)])
        self.assertEqual(gpa, Decimal("2.86"))
        self.assertEqual(units, 7)


def make_fixture():
    spring = Semester.objects.create(name="Spring", year=2023, start_date=datetime.date(2023, 1, 10),
                                     end_date=datetime.date(2023, 5, 10))
    fall = Semester.objects.create(name="Fall", year=2023, start_date=datetime.date(2023, 9, 1),
                                   end_date=datetime.date(2023, 12, 20))
    algo = Course.objects.create(code="TST301", name="Algorithms", credit_units=3)
    stats = Course.objects.create(code="TST302", name="Statistics", credit_units=4)
    essay = Course.objects.create(code="TST303", name="Essay Writing", credit_units=2)
    student = Student.objects.create(matricule="T-0001", first_name="Ada", last_name="Obi",
                                     email="ada@example.com", phone_number="+2348000000001",
                                     program="Computer Science", year_of_study=2)
    Result.objects.create(student=student, course=algo, semester=spring, score=Decimal("75"))   # A 4
    Result.objects.create(student=student, course=stats, semester=spring, score=Decimal("55"))  # C 2
    Result.objects.create(student=student, course=essay, semester=fall, score=Decimal("62"))    # B 3
    return student, spring, fall


class CGPAServiceTests(TestCase):
    def setUp(self):
        self.student, self.spring, self.fall = make_fixture()

    def test_compute_values(self):
        first = compute_cgpa_values(self.student.id, self.spring.id)
        self.assertEqual(first["semester_gpa"], Decimal("2.86"))
        self.assertEqual(first["cumulative_gpa"], Decimal("2.86"))
        self.assertEqual(first["total_credit_units"], 7)

        second = compute_cgpa_values(self.student.id, self.fall.id)
        self.assertEqual(second["semester_gpa"], Decimal("3.00"))
        # (12 + 8 + 6) / 9
        self.assertEqual(second["cumulative_gpa"], Decimal("2.89"))
        self.assertEqual(second["total_credit_units"], 9)
        self.assertEqual(second["semester_results"], 1)

    def test_append_is_append_only(self):
        append_cgpa_record(self.student.id, self.spring.id)
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                append_cgpa_record(self.student.id, self.spring.id)
        self.assertEqual(CGPARecord.objects.filter(student=self.student).count(), 1)

    def test_semester_batch_skips_existing(self):
        out = append_semester_cgpa_records(self.fall.id)
        self.assertEqual(out, {"created": [str(self.student.id)], "existing": []})
        again = append_semester_cgpa_records(self.fall.id)
        self.assertEqual(again, {"created": [], "existing": [str(self.student.id)]})

    def test_analysis(self):
        append_cgpa_record(self.student.id, self.spring.id)
        append_cgpa_record(self.student.id, self.fall.id)
        out = analyze_student_cgpa(self.student.id)
        self.assertEqual(out["current_cgpa"], 2.89)
        self.assertEqual(out["classification"], "Second Class Honours (Lower Division)")
        self.assertEqual(out["trend"], "up")
        self.assertEqual(out["risk_level"], "low")
        self.assertEqual([r["semester"] for r in out["records"]], ["Spring", "Fall"])

    def test_analysis_without_records(self):
        out = analyze_student_cgpa(self.student.id)
        self.assertEqual(out["current_cgpa"], 0.0)
        self.assertEqual(out["classification"], "Pass")
        self.assertEqual(out["risk_level"], "high")
        self.assertEqual(out["records"], [])


class GradingAPITests(APITestCase):
    def setUp(self):
        self.student, self.spring, self.fall = make_fixture()
        self.registrar = User.objects.create_user("registrar", password="pw", role=User.Role.REGISTRAR)
        self.viewer = User.objects.create_user("viewer", password="pw", role=User.Role.VIEWER)
        self.client.force_authenticate(self.registrar)

    def test_grade_preview(self):
        res = self.client.get("/api/grading/grade/", {"score": "70"})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["grade"], "A")
        self.assertEqual(res.data["grade_point"], 4.0)

    def test_grade_preview_rejects_out_of_range(self):
        res = self.client.get("/api/grading/grade/", {"score": "101"})
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_compute_then_duplicate(self):
        body = {"student": str(self.student.id), "semester": str(self.spring.id)}
        res = self.client.post("/api/grading/cgpa-records/compute/", body, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["cumulative_gpa"], Decimal("2.86"))

        res = self.client.post("/api/grading/cgpa-records/compute/", body, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_compute_requires_results(self):
        other = Semester.objects.create(name="Summer", year=2023, start_date=datetime.date(2023, 6, 1),
                                        end_date=datetime.date(2023, 8, 1))
        body = {"student": str(self.student.id), "semester": str(other.id)}
        res = self.client.post("/api/grading/cgpa-records/compute/", body, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_compute_semester(self):
        url = "/api/grading/cgpa-records/compute-semester/"
        res = self.client.post(url, {"semester": str(self.spring.id)}, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        res = self.client.post(url, {"semester": str(self.spring.id)}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["existing"], [str(self.student.id)])

    def test_viewer_cannot_compute(self):
        self.client.force_authenticate(self.viewer)
        body = {"student": str(self.student.id), "semester": str(self.spring.id)}
        res = self.client.post("/api/grading/cgpa-records/compute/", body, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_viewer_can_read_records(self):
        append_cgpa_record(self.student.id, self.spring.id)
        self.client.force_authenticate(self.viewer)
        res = self.client.get("/api/grading/cgpa-records/", {"student": str(self.student.id)})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data), 1)

    def test_analysis_endpoint(self):
        CGPARecord.objects.create(student=self.student, semester=self.spring, semester_gpa=Decimal("3.00"),
                                  cumulative_gpa=Decimal("3.00"), total_credit_units=7)
        CGPARecord.objects.create(student=self.student, semester=self.fall, semester_gpa=Decimal("4.00"),
                                  cumulative_gpa=Decimal("3.50"), total_credit_units=9)
        res = self.client.get("/api/grading/analysis/", {"student": str(self.student.id)})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["trend"], "up")
        self.assertEqual(res.data["recommendations"][-1], IMPROVEMENT_NOTE)

    def test_analysis_unknown_student(self):
        res = self.client.get("/api/grading/analysis/", {"student": "not-a-uuid"})
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        res = self.client.get("/api/grading/analysis/")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
