import io, base64, hashlib
from collections import defaultdict
from django.template.loader import render_to_string
from django.conf import settings
from xhtml2pdf import pisa
import qrcode

from students.models import Student
from results.models import Result
from grading.models import CGPARecord
from grading.rules import classify_cgpa
from grading.services import weighted_gpa

TIMES_STACK = '"Times New Roman", Times, serif'


def compute_student_statement(student_id):
    """
    Relevé de notes d'un étudiant, semestre par semestre (ordre chronologique):
    - lignes cours: code, intitulé, crédits, note, lettre, grade point
    - GPA du semestre + CGPA cumulé (recalculés depuis les résultats)
    - CGPA enregistré (CGPARecord) si présent, pour contrôle
    """
    student = Student.objects.get(id=student_id)
    results = list(
        Result.objects
        .filter(student=student)
        .select_related("course", "semester")
        .order_by("semester__start_date", "course__code")
    )
    recorded = {
        r.semester_id: r for r in CGPARecord.objects.filter(student=student)
    }

    by_semester = defaultdict(list)
    semesters = []
    for r in results:
        if r.semester_id not in by_semester:
            semesters.append(r.semester)
        by_semester[r.semester_id].append(r)

    blocks = []
    running = []  # (grade_point, credit_units) cumulés
    for sem in semesters:
        rows = by_semester[sem.id]
        pairs = [(r.grade_point, r.course.credit_units) for r in rows]
        running.extend(pairs)
        sem_gpa, sem_units = weighted_gpa(pairs)
        cum_gpa, cum_units = weighted_gpa(running)
        rec = recorded.get(sem.id)
        blocks.append({
            "semester": {"id": str(sem.id), "name": sem.name, "year": sem.year},
            "lines": [
                {
                    "code": r.course.code,
                    "name": r.course.name,
                    "credit_units": r.course.credit_units,
                    "score": float(r.score),
                    "grade": r.grade,
                    "grade_point": float(r.grade_point),
                }
                for r in rows
            ],
            "credit_units": sem_units,
            "semester_gpa": float(sem_gpa),
            "cumulative_gpa": float(cum_gpa),
            "cumulative_credit_units": cum_units,
            "recorded_cgpa": float(rec.cumulative_gpa) if rec else None,
        })

    cgpa, total_units = weighted_gpa(running)

    return {
        "school": {
            "name": getattr(settings, "SCHOOL_NAME", "Your University"),
            "address": getattr(settings, "SCHOOL_ADDRESS", ""),
            "phone": getattr(settings, "SCHOOL_PHONE", ""),
        },
        "student": {
            "id": str(student.id),
            "matricule": student.matricule,
            "name": student.full_name,
            "program": student.program,
            "year_of_study": student.year_of_study,
        },
        "semesters": blocks,
        "totals": {
            "credit_units": total_units,
            "cgpa": float(cgpa),
            "classification": classify_cgpa(cgpa),
        },
    }

def make_qr_png_b64(text: str) -> str:
    img = qrcode.make(text)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode("ascii")

def render_pdf_from_html(html: str) -> bytes:
    out = io.BytesIO()
    status = pisa.CreatePDF(io.StringIO(html), dest=out)
    if status.err:
        raise RuntimeError(f"PDF rendering failed ({status.err} errors)")
    return out.getvalue()

def build_pdf_html(payload: dict, verify_url: str) -> str:
    qr_b64 = make_qr_png_b64(verify_url)
    return render_to_string("reports/statement.html", {
        "p": payload,
        "verify_url": verify_url,
        "qr_b64": qr_b64,
        "TIMES_STACK": TIMES_STACK,
    })

def sha1_bytes(b: bytes) -> str:
    return hashlib.sha1(b).hexdigest()
