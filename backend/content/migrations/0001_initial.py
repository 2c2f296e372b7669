import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


def created_by(related_name, verbose_name="created by"):
    return models.ForeignKey(
        blank=True,
        null=True,
        on_delete=django.db.models.deletion.SET_NULL,
        related_name=related_name,
        to=settings.AUTH_USER_MODEL,
        verbose_name=verbose_name,
    )


def timestamps():
    return [
        ("is_active", models.BooleanField(default=True, verbose_name="is active")),
        ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
        ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
    ]


def translated_char(name, verbose_name, max_length, **kwargs):
    return [
        (name, models.CharField(max_length=max_length, verbose_name=verbose_name, **kwargs)),
        (f"{name}_en", models.CharField(blank=True, max_length=max_length, null=True, verbose_name=verbose_name)),
        (f"{name}_ne", models.CharField(blank=True, max_length=max_length, null=True, verbose_name=verbose_name)),
    ]


def translated_text(name, verbose_name, **kwargs):
    return [
        (name, models.TextField(verbose_name=verbose_name, **kwargs)),
        (f"{name}_en", models.TextField(blank=True, null=True, verbose_name=verbose_name)),
        (f"{name}_ne", models.TextField(blank=True, null=True, verbose_name=verbose_name)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                *timestamps(),
                *translated_char("name", "name", 200),
                *translated_text("description", "description", blank=True, default=""),
                *translated_char("category", "category", 100, blank=True, default=""),
                ("price", models.DecimalField(decimal_places=2, default=0, max_digits=10, verbose_name="price")),
                ("unit", models.CharField(default="kg", max_length=20, verbose_name="unit")),
                ("images", models.JSONField(blank=True, default=list, verbose_name="images")),
                ("farmer", created_by("products", "farmer")),
            ],
            options={
                "verbose_name": "product",
                "verbose_name_plural": "products",
                "ordering": ["-created_at"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="NewsItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                *timestamps(),
                *translated_char("headline", "headline", 200),
                *translated_text("summary", "summary", blank=True, default=""),
                *translated_text("content", "content", blank=True, default=""),
                (
                    "priority",
                    models.CharField(
                        choices=[("LOW", "Low"), ("NORMAL", "Normal"), ("HIGH", "High")],
                        default="NORMAL",
                        max_length=10,
                        verbose_name="priority",
                    ),
                ),
                ("published_at", models.DateTimeField(default=django.utils.timezone.now, verbose_name="published at")),
                ("created_by", created_by("news_items")),
            ],
            options={
                "verbose_name": "news item",
                "verbose_name_plural": "news items",
                "ordering": ["-created_at"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="GalleryItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                *timestamps(),
                *translated_char("title", "title", 200),
                *translated_text("description", "description", blank=True, default=""),
                ("image_url", models.URLField(blank=True, default="", max_length=500, verbose_name="image URL")),
                *translated_char("category", "category", 100, blank=True, default=""),
                ("order", models.PositiveIntegerField(default=0, verbose_name="order")),
                ("created_by", created_by("gallery_items")),
            ],
            options={
                "verbose_name": "gallery item",
                "verbose_name_plural": "gallery items",
                "ordering": ["order", "-created_at"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="MayorMessage",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                *timestamps(),
                *translated_text("text", "text"),
                ("scroll_speed", models.PositiveIntegerField(default=50, verbose_name="scroll speed")),
                ("created_by", created_by("mayor_messages")),
            ],
            options={
                "verbose_name": "mayor message",
                "verbose_name_plural": "mayor messages",
                "ordering": ["-created_at"],
                "abstract": False,
            },
        ),
    ]
