import uuid
from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
from core.models import Semester
from courses.models import Course
from students.models import Student
from grading.rules import grade_for_score, q2

# Create your models here.

class Result(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="results")
    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name="results")
    semester = models.ForeignKey(Semester, on_delete=models.CASCADE, related_name="results")
    score = models.DecimalField(max_digits=5, decimal_places=2,
                                validators=[MinValueValidator(0), MaxValueValidator(100)])
    # dérivés de score dans save()
    grade = models.CharField(max_length=2)
    grade_point = models.DecimalField(max_digits=3, decimal_places=2,
                                      validators=[MinValueValidator(0), MaxValueValidator(4)])
    notified = models.BooleanField(default=False)  # False -> True uniquement (mark_notified)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = (("student", "course", "semester"),)
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.student.matricule} | {self.course.code} | {self.semester}: {self.score} ({self.grade})"

    def save(self, *args, **kwargs):
        # même arrondi que le stockage (2 déc., half-up) avant de noter
        self.score = q2(self.score)
        self.grade, self.grade_point = grade_for_score(self.score)
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "score" in update_fields:
            kwargs["update_fields"] = set(update_fields) | {"grade", "grade_point", "updated_at"}
        super().save(*args, **kwargs)

    def mark_notified(self):
        if self.notified:
            return
        self.notified = True
        self.save(update_fields=["notified", "updated_at"])
