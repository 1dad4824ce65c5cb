from django.db import models
from django.contrib.auth.models import AbstractUser
# Create your models here.

class User(AbstractUser):
    class Role(models.TextChoices):
        ADMIN = "ADMIN"
        REGISTRAR = "REGISTRAR"
        LECTURER = "LECTURER"
        VIEWER = "VIEWER"
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.VIEWER)
