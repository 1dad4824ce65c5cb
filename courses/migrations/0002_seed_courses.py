from django.db import migrations

COURSES = [
    ("CS101", "Introduction to Computer Science", 3),
    ("MATH201", "Calculus II", 4),
    ("ENG101", "Technical Writing", 2),
    ("PHY101", "Physics I", 3),
    ("CS201", "Data Structures", 3),
]

def seed_courses(apps, schema_editor):
    Course = apps.get_model("courses", "Course")
    for code, name, units in COURSES:
        Course.objects.get_or_create(code=code, defaults={"name": name, "credit_units": units})

def unseed_courses(apps, schema_editor):
    Course = apps.get_model("courses", "Course")
    Course.objects.filter(code__in=[c[0] for c in COURSES]).delete()

class Migration(migrations.Migration):

    dependencies = [
        ("courses", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed_courses, reverse_code=unseed_courses),
    ]
