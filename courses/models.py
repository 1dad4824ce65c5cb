import uuid
from django.db import models
from django.core.validators import MinValueValidator

# Create your models here.

class Course(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    code = models.CharField(max_length=20, unique=True)  # 'CS101'
    name = models.CharField(max_length=128)
    credit_units = models.PositiveSmallIntegerField(validators=[MinValueValidator(1)])  # poids pour la GPA
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["code"]

    def __str__(self):
        return f"{self.code} - {self.name} ({self.credit_units} CU)"
