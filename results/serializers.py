import uuid
from rest_framework import serializers
from django.db import transaction
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from .models import Result
from core.models import Semester
from courses.models import Course
from students.models import Student


D0 = Decimal("0")
D100 = Decimal("100")

def parse_score(raw):
    """Decimal dans [0..100] ou ValueError avec la raison."""
    try:
        value = Decimal(str(raw))
    except (InvalidOperation, TypeError):
        raise ValueError("Invalid value")
    if not value.is_finite():
        raise ValueError("Invalid value")
    if not (D0 <= value <= D100):
        raise ValueError("Out of range")
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


# -------------------------
#  Model Serializers
# -------------------------

class ResultSerializer(serializers.ModelSerializer):
    class Meta:
        model = Result
        fields = ["id", "student", "course", "semester", "score", "grade", "grade_point",
                  "notified", "created_at", "updated_at"]
        # grade/grade_point recalculés par le modèle; notified ne passe que par l'envoi
        read_only_fields = ["grade", "grade_point", "notified", "created_at", "updated_at"]

    def validate_score(self, value):
        if value is None:
            raise serializers.ValidationError("Score is required.")
        try:
            return parse_score(value)
        except ValueError:
            raise serializers.ValidationError("Score must be a number between 0 and 100.")


class ResultDetailSerializer(serializers.ModelSerializer):
    # champs plats lisibles pour les tableaux
    student_matricule = serializers.CharField(source="student.matricule", read_only=True)
    student_name = serializers.CharField(source="student.full_name", read_only=True)
    course_code = serializers.CharField(source="course.code", read_only=True)
    course_name = serializers.CharField(source="course.name", read_only=True)
    credit_units = serializers.IntegerField(source="course.credit_units", read_only=True)
    semester_name = serializers.CharField(source="semester.name", read_only=True)
    semester_year = serializers.IntegerField(source="semester.year", read_only=True)

    class Meta:
        model = Result
        fields = [
            "id",
            "student", "student_matricule", "student_name",
            "course", "course_code", "course_name", "credit_units",
            "semester", "semester_name", "semester_year",
            "score", "grade", "grade_point", "notified",
            "created_at", "updated_at",
        ]


# -------------------------
#  BULK SERIALIZERS
# -------------------------

class BulkResultsUpsertSerializer(serializers.Serializer):
    """
    Upsert des notes pour UN cours sur UN semestre.

    Body:
    {
      "course": "<uuid>",
      "semester": "<uuid>",
      "entries": [
        { "student": "<uuid>", "score": 72.5 },
        { "student": "<uuid>", "score": 48 }
      ]
    }
    """
    course = serializers.PrimaryKeyRelatedField(queryset=Course.objects.all())
    semester = serializers.PrimaryKeyRelatedField(queryset=Semester.objects.all())
    entries = serializers.ListField(child=serializers.DictField(), allow_empty=True)

    def validate_entries(self, entries):
        for e in entries:
            if "student" not in e:
                raise serializers.ValidationError("Each entry must have 'student'.")
            if "score" not in e:
                raise serializers.ValidationError("Each entry must have 'score'.")
            # cast/intervalle vérifiés dans create() pour détailler les raisons de skip
        return entries

    @transaction.atomic
    def create(self, validated):
        course = validated["course"]
        semester = validated["semester"]

        existing = {
            str(r.student_id): r
            for r in Result.objects.filter(course=course, semester=semester)
        }
        student_ids = {_norm_uuid(e.get("student")) for e in validated.get("entries", [])}
        known_students = {
            str(pk) for pk in Student.objects.filter(
                id__in=[s for s in student_ids if s]
            ).values_list("id", flat=True)
        }

        results = {"created": [], "updated": [], "skipped": []}

        for e in validated.get("entries", []):
            student_id = _norm_uuid(e.get("student")) or str(e.get("student"))

            # 1) Cast propre en Decimal
            try:
                score = parse_score(e.get("score"))
            except ValueError as exc:
                results["skipped"].append({"student": student_id, "reason": str(exc)})
                continue

            # 2) L'étudiant doit exister
            if student_id not in known_students:
                results["skipped"].append({"student": student_id, "reason": "Student not found"})
                continue

            # 3) Upsert (save() recalcule grade/grade_point)
            if student_id in existing:
                r = existing[student_id]
                if r.score != score:
                    r.score = score
                    r.save(update_fields=["score"])
                results["updated"].append(str(r.id))
            else:
                r = Result.objects.create(student_id=student_id, course=course,
                                          semester=semester, score=score)
                existing[student_id] = r
                results["created"].append(str(r.id))

        return results


def _norm_uuid(value):
    try:
        return str(uuid.UUID(str(value)))
    except ValueError:
        return None
