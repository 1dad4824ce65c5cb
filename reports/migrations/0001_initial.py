import uuid
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("students", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="StatementToken",
            fields=[
                ("uid", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("valid", models.BooleanField(default=True)),
                ("payload", models.JSONField(blank=True, default=dict)),
                ("pdf_sha1", models.CharField(blank=True, max_length=64)),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="statement_tokens", to="students.student")),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
    ]
