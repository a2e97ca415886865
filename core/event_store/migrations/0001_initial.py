import uuid

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="StreamEvent",
            fields=[
                ("global_position", models.BigAutoField(primary_key=True, serialize=False)),
                ("stream_id", models.CharField(max_length=512)),
                ("stream_position", models.PositiveBigIntegerField()),
                ("event_id", models.UUIDField(default=uuid.uuid4, editable=False, unique=True)),
                ("event_type", models.CharField(max_length=255)),
                ("payload", models.JSONField()),
                ("recorded_at", models.DateTimeField()),
            ],
            options={
                "db_table": "gsl_stream_events",
                "ordering": ["global_position"],
                "indexes": [
                    models.Index(fields=["event_type"], name="idx_evt_type"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("stream_id", "stream_position"),
                        name="uq_evt_stream_position",
                    ),
                ],
            },
        ),
    ]
