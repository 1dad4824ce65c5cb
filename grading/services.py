import logging
from decimal import Decimal

from django.db import transaction

from core.models import Semester
from students.models import Student
from results.models import Result
from grading.models import CGPARecord
from grading.rules import q2, to_decimal, classify_cgpa, advise

logger = logging.getLogger(__name__)

D0 = Decimal("0")


def weighted_gpa(rows):
    """
    rows: itérable de (grade_point, credit_units)
    Retourne (gpa arrondi 2 déc., total crédits). Aucun crédit -> (0.00, 0).
    """
    total_points = D0
    total_units = 0
    for grade_point, credit_units in rows:
        total_points += to_decimal(grade_point) * credit_units
        total_units += credit_units
    if total_units == 0:
        return q2(D0), 0
    return q2(total_points / total_units), total_units


def compute_cgpa_values(student_id, semester_id):
    """
    Calcule (sans enregistrer) les valeurs d'un CGPARecord.
    Règles:
      - semester_gpa = moyenne pondérée (crédits) des résultats du semestre
      - cumulative_gpa = idem sur tous les semestres commencés <= ce semestre
      - total_credit_units = crédits cumulés correspondants
    """
    semester = Semester.objects.get(id=semester_id)
    rows = list(
        Result.objects
        .filter(student_id=student_id, semester__start_date__lte=semester.start_date)
        .values_list("semester_id", "grade_point", "course__credit_units")
    )
    semester_rows = [(gp, cu) for sem_id, gp, cu in rows if sem_id == semester.id]

    semester_gpa, _ = weighted_gpa(semester_rows)
    cumulative_gpa, total_units = weighted_gpa((gp, cu) for _, gp, cu in rows)

    return {
        "semester_gpa": semester_gpa,
        "cumulative_gpa": cumulative_gpa,
        "total_credit_units": total_units,
        "semester_results": len(semester_rows),
    }


def append_cgpa_record(student_id, semester_id) -> CGPARecord:
    """
    Ajoute le CGPARecord (student, semester). Append-only:
    un deuxième appel pour la même paire lève IntegrityError.
    """
    values = compute_cgpa_values(student_id, semester_id)
    record = CGPARecord.objects.create(
        student_id=student_id,
        semester_id=semester_id,
        semester_gpa=values["semester_gpa"],
        cumulative_gpa=values["cumulative_gpa"],
        total_credit_units=values["total_credit_units"],
    )
    logger.info("CGPA record appended: student=%s semester=%s gpa=%s cgpa=%s units=%s",
                student_id, semester_id, record.semester_gpa, record.cumulative_gpa,
                record.total_credit_units)
    return record


@transaction.atomic
def append_semester_cgpa_records(semester_id):
    """
    Pour chaque étudiant ayant au moins un résultat sur le semestre:
    ajoute son CGPARecord s'il n'existe pas encore.
    """
    student_ids = list(
        Result.objects.filter(semester_id=semester_id)
        .order_by()  # sinon l'ordering par défaut casse le DISTINCT
        .values_list("student_id", flat=True)
        .distinct()
    )
    already = set(
        CGPARecord.objects.filter(semester_id=semester_id).values_list("student_id", flat=True)
    )

    created, existing = [], []
    for student_id in student_ids:
        if student_id in already:
            existing.append(str(student_id))
            continue
        append_cgpa_record(student_id, semester_id)
        created.append(str(student_id))

    return {"created": created, "existing": existing}


def student_cgpa_history(student_id):
    return list(
        CGPARecord.objects
        .filter(student_id=student_id)
        .select_related("semester")
        .order_by("semester__start_date")
    )


def analyze_student_cgpa(student_id):
    """
    Analyse CGPA d'un étudiant: historique, CGPA courant, mention,
    tendance, niveau de risque et recommandations.
    """
    student = Student.objects.get(id=student_id)
    records = student_cgpa_history(student.id)
    current = records[-1].cumulative_gpa if records else q2(D0)
    advisory = advise(current, records)

    return {
        "student": {
            "id": str(student.id),
            "matricule": student.matricule,
            "name": student.full_name,
            "program": student.program,
        },
        "records": [
            {
                "semester_id": str(r.semester_id),
                "semester": r.semester.name,
                "year": r.semester.year,
                "semester_gpa": float(r.semester_gpa),
                "cumulative_gpa": float(r.cumulative_gpa),
                "total_credit_units": r.total_credit_units,
            }
            for r in records
        ],
        "current_cgpa": float(current),
        "classification": classify_cgpa(current),
        "trend": advisory["trend"],
        "risk_level": advisory["risk_level"],
        "recommendations": advisory["recommendations"],
    }
