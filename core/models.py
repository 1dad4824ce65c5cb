import uuid
from django.db import models, transaction
from django.core.validators import MinValueValidator

# Create your models here.
class Semester(models.Model):
    """
    Exemple de nom: 'Fall 2024' (year=2024)
    is_current: au plus un semestre courant (voir save()).
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=64)
    year = models.PositiveSmallIntegerField(validators=[MinValueValidator(1900)])
    start_date = models.DateField()
    end_date = models.DateField()
    is_current = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["start_date", "name"]

    def __str__(self):
        return f"{self.name} {self.year}"

    def save(self, *args, **kwargs):
        with transaction.atomic():
            if self.is_current:
                Semester.objects.filter(is_current=True).exclude(pk=self.pk).update(is_current=False)
            super().save(*args, **kwargs)

    @classmethod
    def current(cls):
        return cls.objects.filter(is_current=True).order_by("-start_date").first()
