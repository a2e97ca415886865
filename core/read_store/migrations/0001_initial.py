from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ProjectedDocument",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("collection", models.CharField(max_length=255)),
                ("document_id", models.CharField(max_length=512)),
                ("data", models.JSONField(default=dict)),
                ("version", models.PositiveBigIntegerField(default=0)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "gsl_projected_documents",
                "constraints": [
                    models.UniqueConstraint(
                        fields=("collection", "document_id"),
                        name="uq_doc_collection_id",
                    ),
                ],
            },
        ),
    ]
