from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Configuration",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("key", models.CharField(help_text="Configuration key", max_length=255, unique=True)),
                ("value", models.TextField(help_text="Configuration value")),
                ("description", models.TextField(blank=True, help_text="Description of this configuration option")),
                ("is_default", models.BooleanField(default=False, help_text="Is this a default system configuration")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Configuration",
                "verbose_name_plural": "Configurations",
                "ordering": ["key"],
            },
        ),
    ]
