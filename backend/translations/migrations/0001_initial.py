import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

NAMESPACE_CHOICES = [
    ("common", "Common"),
    ("auth", "Authentication"),
    ("products", "Products"),
    ("admin", "Admin"),
    ("navigation", "Navigation"),
    ("forms", "Forms"),
    ("errors", "Errors"),
    ("messages", "Messages"),
    ("notifications", "Notifications"),
    ("gallery", "Gallery"),
    ("news", "News"),
    ("reviews", "Reviews"),
    ("orders", "Orders"),
    ("dashboard", "Dashboard"),
    ("buyer", "Buyer"),
    ("farmer", "Farmer"),
    ("home", "Home"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="TranslationKey",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "key",
                    models.CharField(
                        max_length=200,
                        unique=True,
                        validators=[
                            django.core.validators.MinLengthValidator(3),
                            django.core.validators.RegexValidator(
                                "^[a-z][a-zA-Z0-9_]*(\\.[a-z][a-zA-Z0-9_]*)*$",
                                "Translation key must follow format: namespace.section.item "
                                "(lowercase start, alphanumeric, underscores, camelCase allowed)",
                            ),
                        ],
                        verbose_name="key",
                    ),
                ),
                ("namespace", models.CharField(choices=NAMESPACE_CHOICES, max_length=20, verbose_name="namespace")),
                (
                    "en",
                    models.CharField(
                        max_length=2000,
                        validators=[django.core.validators.MinLengthValidator(1)],
                        verbose_name="English translation",
                    ),
                ),
                ("ne", models.CharField(blank=True, default="", max_length=2000, verbose_name="Nepali translation")),
                ("context", models.CharField(blank=True, default="", max_length=500, verbose_name="context")),
                ("is_required", models.BooleanField(default=False, verbose_name="is required")),
                ("current_version", models.PositiveIntegerField(default=0, editable=False, verbose_name="current version")),
                ("last_updated", models.DateTimeField(default=django.utils.timezone.now, verbose_name="last updated")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                (
                    "updated_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="updated_translation_keys",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="updated by",
                    ),
                ),
            ],
            options={
                "verbose_name": "translation key",
                "verbose_name_plural": "translation keys",
                "ordering": ["key"],
                "indexes": [
                    models.Index(fields=["namespace", "key"], name="translation_namespa_4c2a1e_idx"),
                    models.Index(fields=["namespace", "is_required"], name="translation_namespa_9b7d3f_idx"),
                    models.Index(fields=["-last_updated"], name="translation_last_up_e51c08_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="TranslationHistory",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("key", models.CharField(db_index=True, max_length=200, verbose_name="key")),
                ("namespace", models.CharField(db_index=True, max_length=20, verbose_name="namespace")),
                ("version", models.PositiveIntegerField(verbose_name="version")),
                ("en", models.CharField(max_length=2000, verbose_name="English translation")),
                ("ne", models.CharField(blank=True, default="", max_length=2000, verbose_name="Nepali translation")),
                ("context", models.CharField(blank=True, default="", max_length=500, verbose_name="context")),
                ("is_required", models.BooleanField(default=False, verbose_name="is required")),
                (
                    "change_type",
                    models.CharField(
                        choices=[("CREATE", "Create"), ("UPDATE", "Update"), ("DELETE", "Delete")],
                        max_length=10,
                        verbose_name="change type",
                    ),
                ),
                ("change_reason", models.CharField(blank=True, default="", max_length=500, verbose_name="change reason")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                (
                    "changed_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="translation_changes",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="changed by",
                    ),
                ),
                (
                    "translation_key",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="history",
                        to="translations.translationkey",
                        verbose_name="translation key",
                    ),
                ),
            ],
            options={
                "verbose_name": "translation history",
                "verbose_name_plural": "translation history",
                "ordering": ["-version"],
                "indexes": [
                    models.Index(fields=["namespace", "-created_at"], name="translation_namespa_a80f6d_idx"),
                    models.Index(fields=["change_type", "-created_at"], name="translation_change__3d91b2_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("translation_key", "version"),
                        name="unique_translation_key_version",
                    ),
                ],
            },
        ),
    ]
