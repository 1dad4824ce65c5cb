import uuid
from django.db import models
from students.models import Student

# Create your models here.
class StatementToken(models.Model):
    uid = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="statement_tokens")
    created_at = models.DateTimeField(auto_now_add=True)
    valid = models.BooleanField(default=True)
    # Snapshot JSON du relevé au moment de la génération
    payload = models.JSONField(default=dict, blank=True)
    pdf_sha1 = models.CharField(max_length=64, blank=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.uid} - {self.student.matricule}"
