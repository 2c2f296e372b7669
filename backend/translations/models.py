from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinLengthValidator, RegexValidator
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .managers import TranslationHistoryManager, TranslationKeyQuerySet

KEY_PATTERN = r"^[a-z][a-zA-Z0-9_]*(\.[a-z][a-zA-Z0-9_]*)*$"
MAX_TRANSLATION_LENGTH = 2000
MIN_CONTEXT_LENGTH = 5

LANGUAGE_CODES = ("en", "ne")


class Namespace(models.TextChoices):
    COMMON = "common", _("Common")
    AUTH = "auth", _("Authentication")
    PRODUCTS = "products", _("Products")
    ADMIN = "admin", _("Admin")
    NAVIGATION = "navigation", _("Navigation")
    FORMS = "forms", _("Forms")
    ERRORS = "errors", _("Errors")
    MESSAGES = "messages", _("Messages")
    NOTIFICATIONS = "notifications", _("Notifications")
    GALLERY = "gallery", _("Gallery")
    NEWS = "news", _("News")
    REVIEWS = "reviews", _("Reviews")
    ORDERS = "orders", _("Orders")
    DASHBOARD = "dashboard", _("Dashboard")
    BUYER = "buyer", _("Buyer")
    FARMER = "farmer", _("Farmer")
    HOME = "home", _("Home")


class ChangeType(models.TextChoices):
    CREATE = "CREATE", _("Create")
    UPDATE = "UPDATE", _("Update")
    DELETE = "DELETE", _("Delete")


class TranslationKey(models.Model):
    key = models.CharField(
        _('key'),
        max_length=200,
        unique=True,
        validators=[
            MinLengthValidator(3),
            RegexValidator(
                KEY_PATTERN,
                _('Translation key must follow format: namespace.section.item '
                  '(lowercase start, alphanumeric, underscores, camelCase allowed)'),
            ),
        ],
    )
    namespace = models.CharField(_('namespace'), max_length=20, choices=Namespace.choices)
    en = models.CharField(
        _('English translation'),
        max_length=MAX_TRANSLATION_LENGTH,
        validators=[MinLengthValidator(1)],
    )
    ne = models.CharField(
        _('Nepali translation'), max_length=MAX_TRANSLATION_LENGTH, blank=True, default=""
    )
    context = models.CharField(_('context'), max_length=500, blank=True, default="")
    is_required = models.BooleanField(_('is required'), default=False)
    current_version = models.PositiveIntegerField(_('current version'), default=0, editable=False)
    last_updated = models.DateTimeField(_('last updated'), default=timezone.now)
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="updated_translation_keys",
        verbose_name=_('updated by'),
    )
    created_at = models.DateTimeField(_('created at'), auto_now_add=True)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    objects = TranslationKeyQuerySet.as_manager()

    class Meta:
        verbose_name = _('translation key')
        verbose_name_plural = _('translation keys')
        ordering = ['key']
        indexes = [
            models.Index(fields=['namespace', 'key'], name='translation_namespa_4c2a1e_idx'),
            models.Index(fields=['namespace', 'is_required'], name='translation_namespa_9b7d3f_idx'),
            models.Index(fields=['-last_updated'], name='translation_last_up_e51c08_idx'),
        ]

    def __str__(self):
        return self.key

    def clean(self):
        super().clean()
        if self.key and self.namespace and not self.key.startswith(f"{self.namespace}."):
            raise ValidationError(
                {'namespace': _('Namespace must match the beginning of the translation key')}
            )
        if self.context and len(self.context) < MIN_CONTEXT_LENGTH:
            raise ValidationError(
                {'context': _('Context must be at least 5 characters long if provided')}
            )

    def normalize(self):
        """Trim text fields and derive a missing namespace from the key prefix."""
        self.key = (self.key or "").strip()
        if self.key and not self.namespace:
            prefix = self.key.split('.', 1)[0]
            if prefix in Namespace.values:
                self.namespace = prefix
        self.en = (self.en or "").strip()
        self.ne = (self.ne or "").strip()
        self.context = (self.context or "").strip()

    def clean_fields(self, exclude=None):
        self.normalize()
        super().clean_fields(exclude=exclude)

    def save(self, *args, **kwargs):
        self.normalize()
        super().save(*args, **kwargs)

    @property
    def translations(self):
        data = {"en": self.en}
        if self.ne:
            data["ne"] = self.ne
        return data

    def has_translation(self, language):
        return bool(getattr(self, language, "")) if language in LANGUAGE_CODES else False

    def get_translation(self, language):
        """Return the text for ``language``; Nepali falls back to English."""
        if language not in LANGUAGE_CODES:
            raise ValueError(f"Translation not available for language: {language}")
        value = getattr(self, language)
        if value:
            return value
        if language == "ne" and self.en:
            return self.en
        raise ValueError(f"Translation not available for language: {language}")

    @property
    def completeness(self):
        filled = sum(1 for language in LANGUAGE_CODES if getattr(self, language))
        return {2: 100, 1: 50}.get(filled, 0)

    def update_translation(self, language, text, updated_by=None):
        if language not in LANGUAGE_CODES:
            raise ValueError('Language must be either "en" or "ne"')
        if not text or not text.strip():
            raise ValueError('Translation text cannot be empty')
        if len(text) > MAX_TRANSLATION_LENGTH:
            raise ValueError('Translation text cannot exceed 2000 characters')

        setattr(self, language, text.strip())
        self.last_updated = timezone.now()
        self.updated_by = updated_by

    def mark_as_required(self):
        self.is_required = True
        self.last_updated = timezone.now()

    def mark_as_optional(self):
        self.is_required = False
        self.last_updated = timezone.now()


class TranslationHistory(models.Model):
    translation_key = models.ForeignKey(
        TranslationKey,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='history',
        verbose_name=_('translation key'),
    )
    key = models.CharField(_('key'), max_length=200, db_index=True)
    namespace = models.CharField(_('namespace'), max_length=20, db_index=True)
    version = models.PositiveIntegerField(_('version'))
    en = models.CharField(_('English translation'), max_length=MAX_TRANSLATION_LENGTH)
    ne = models.CharField(_('Nepali translation'), max_length=MAX_TRANSLATION_LENGTH, blank=True, default="")
    context = models.CharField(_('context'), max_length=500, blank=True, default="")
    is_required = models.BooleanField(_('is required'), default=False)
    change_type = models.CharField(_('change type'), max_length=10, choices=ChangeType.choices)
    changed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="translation_changes",
        verbose_name=_('changed by'),
    )
    change_reason = models.CharField(_('change reason'), max_length=500, blank=True, default="")
    created_at = models.DateTimeField(_('created at'), auto_now_add=True)

    objects = TranslationHistoryManager()

    class Meta:
        verbose_name = _('translation history')
        verbose_name_plural = _('translation history')
        ordering = ['-version']
        constraints = [
            models.UniqueConstraint(
                fields=['translation_key', 'version'],
                name='unique_translation_key_version',
            ),
        ]
        indexes = [
            models.Index(fields=['namespace', '-created_at'], name='translation_namespa_a80f6d_idx'),
            models.Index(fields=['change_type', '-created_at'], name='translation_change__3d91b2_idx'),
        ]

    def __str__(self):
        return f"{self.key} v{self.version} ({self.change_type})"

    @property
    def translations(self):
        data = {"en": self.en}
        if self.ne:
            data["ne"] = self.ne
        return data

    def get_change_summary(self):
        if self.change_type == ChangeType.CREATE:
            languages = 'both English and Nepali' if self.ne else 'English only'
            return f'Created translation key "{self.key}" with {languages} translations'
        if self.change_type == ChangeType.UPDATE:
            return f'Updated translation key "{self.key}" (version {self.version})'
        if self.change_type == ChangeType.DELETE:
            return f'Deleted translation key "{self.key}"'
        return f'Modified translation key "{self.key}"'

    def compare_with(self, other):
        """Describe how this snapshot differs from ``other`` (an older one)."""
        changes = []

        if self.en != other.en:
            changes.append('English translation changed')

        if self.ne != other.ne:
            if not self.ne:
                changes.append('Nepali translation removed')
            elif not other.ne:
                changes.append('Nepali translation added')
            else:
                changes.append('Nepali translation changed')

        if self.context != other.context:
            changes.append('Context changed')

        if self.is_required != other.is_required:
            status = 'required' if self.is_required else 'optional'
            changes.append(f'Required status changed to {status}')

        return changes
