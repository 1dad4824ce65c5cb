import datetime
from django.db import migrations

SEMESTERS = [
    # name, year, start, end, is_current
    ("Spring 2024", 2024, datetime.date(2024, 1, 15), datetime.date(2024, 5, 15), False),
    ("Fall 2024", 2024, datetime.date(2024, 9, 1), datetime.date(2024, 12, 15), True),
]

def seed_semesters(apps, schema_editor):
    Semester = apps.get_model("core", "Semester")
    for name, year, start, end, current in SEMESTERS:
        Semester.objects.get_or_create(
            name=name, year=year,
            defaults={"start_date": start, "end_date": end, "is_current": current},
        )

def unseed_semesters(apps, schema_editor):
    Semester = apps.get_model("core", "Semester")
    Semester.objects.filter(name__in=[s[0] for s in SEMESTERS]).delete()

class Migration(migrations.Migration):

    dependencies = [
        ("core", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed_semesters, reverse_code=unseed_semesters),
    ]
