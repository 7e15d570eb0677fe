from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Task",
            fields=[
                (
                    "id",
                    models.CharField(
                        editable=False, max_length=32, primary_key=True, serialize=False
                    ),
                ),
                ("title", models.TextField()),
                ("description", models.TextField(blank=True, null=True)),
                ("completed", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(editable=False)),
                ("updated_at", models.DateTimeField(editable=False)),
            ],
            options={
                "db_table": "tasks",
                "ordering": ["created_at", "id"],
                "indexes": [
                    models.Index(fields=["completed"], name="idx_tasks_completed"),
                    models.Index(fields=["created_at"], name="idx_tasks_created_at"),
                ],
            },
        ),
    ]
