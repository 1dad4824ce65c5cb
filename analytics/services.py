from decimal import Decimal
from django.db.models import Avg, Count

from courses.models import Course
from students.models import Student
from results.models import Result
from grading.models import CGPARecord
from grading.rules import q2

GRADE_ORDER = ["A", "B", "C", "D", "E", "F"]


def grade_distribution(qs):
    """{lettre: nombre}, seulement les lettres présentes, ordre A..F"""
    counts = {row["grade"]: row["n"] for row in qs.order_by().values("grade").annotate(n=Count("id"))}
    return {g: counts[g] for g in GRADE_ORDER if g in counts}


def build_summary():
    """
    Tableau de bord global. Tout est recalculé à chaque appel (pas de cache).
    average_cgpa = moyenne simple de tous les cumulative_gpa (0 si aucun).
    """
    avg = CGPARecord.objects.aggregate(avg=Avg("cumulative_gpa"))["avg"]
    recent = (Result.objects
              .select_related("student", "course", "semester")
              .order_by("-created_at")[:5])

    return {
        "total_students": Student.objects.count(),
        "total_courses": Course.objects.count(),
        "notified_results": Result.objects.filter(notified=True).count(),
        "pending_results": Result.objects.filter(notified=False).count(),
        "average_cgpa": float(q2(avg)) if avg is not None else 0.0,
        "grade_distribution": grade_distribution(Result.objects.all()),
        "recent_results": [
            {
                "id": str(r.id),
                "student": f"{r.student.first_name} {r.student.last_name}",
                "matricule": r.student.matricule,
                "course_code": r.course.code,
                "course_name": r.course.name,
                "semester": r.semester.name,
                "score": float(r.score),
                "grade": r.grade,
            }
            for r in recent
        ],
    }


def course_stats(course_id, semester_id=None):
    course = Course.objects.get(id=course_id)
    qs = Result.objects.filter(course=course)
    if semester_id:
        qs = qs.filter(semester_id=semester_id)

    scores = [Decimal(s) for s in qs.values_list("score", flat=True)]
    count = len(scores)
    average = float(q2(sum(scores) / count)) if count else 0.0
    pass_count = qs.filter(grade_point__gt=0).count()
    pass_rate = round((pass_count / count) * 100, 2) if count else 0.0

    # Distribution des notes (classes de 10)
    bins = [{"range": f"{i*10}-{(i+1)*10}", "count": 0} for i in range(10)]
    for s in scores:
        idx = min(int(s) // 10, 9)
        bins[idx]["count"] += 1

    return {
        "course": {"id": str(course.id), "code": course.code, "name": course.name,
                   "credit_units": course.credit_units},
        "semester_id": str(semester_id) if semester_id else None,
        "count": count,
        "average_score": average,
        "pass_count": pass_count,
        "pass_rate": pass_rate,
        "grade_distribution": grade_distribution(qs),
        "distribution": bins,
    }
