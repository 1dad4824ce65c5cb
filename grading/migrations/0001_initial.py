import uuid
import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("core", "0001_initial"),
        ("students", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="CGPARecord",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("semester_gpa", models.DecimalField(decimal_places=2, max_digits=3, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(4)])),
                ("cumulative_gpa", models.DecimalField(decimal_places=2, max_digits=3, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(4)])),
                ("total_credit_units", models.PositiveIntegerField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("semester", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="cgpa_records", to="core.semester")),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="cgpa_records", to="students.student")),
            ],
            options={
                "ordering": ["student", "semester__start_date"],
                "unique_together": {("student", "semester")},
            },
        ),
    ]
