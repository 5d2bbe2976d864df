from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="TranslationEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("alias", models.CharField(max_length=64)),
                ("entity_id", models.CharField(max_length=100)),
                ("locale", models.CharField(max_length=16)),
                ("field_name", models.CharField(max_length=64)),
                ("value", models.TextField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "translation",
                "db_table": "entity_translations",
                "unique_together": {("alias", "entity_id", "locale", "field_name")},
                "indexes": [models.Index(fields=["alias", "entity_id"], name="entity_translations_entity")],
            },
        ),
    ]
