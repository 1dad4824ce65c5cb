import uuid
from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
from core.models import Semester
from students.models import Student
# Create your models here.

GPA_VALIDATORS = [MinValueValidator(0), MaxValueValidator(4)]

class CGPARecord(models.Model):
    """
    Un enregistrement par (étudiant, semestre), ajouté en fin de semestre.
    cumulative_gpa = moyenne pondérée par crédits de tous les résultats
    des semestres commencés avant ou à la date de ce semestre.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="cgpa_records")
    semester = models.ForeignKey(Semester, on_delete=models.CASCADE, related_name="cgpa_records")
    semester_gpa = models.DecimalField(max_digits=3, decimal_places=2, validators=GPA_VALIDATORS)
    cumulative_gpa = models.DecimalField(max_digits=3, decimal_places=2, validators=GPA_VALIDATORS)
    total_credit_units = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = (("student", "semester"),)
        ordering = ["student", "semester__start_date"]

    def __str__(self):
        return f"{self.student.matricule} @ {self.semester}: GPA {self.semester_gpa} / CGPA {self.cumulative_gpa}"
