from django.conf import settings
from django.core.cache import cache
from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _


def _defaults():
    return getattr(settings, 'DEFAULT_CONFIGURATIONS', {})


class Configuration(models.Model):
    """
    Runtime setting editable from the admin.

    Rows are seeded from ``settings.DEFAULT_CONFIGURATIONS`` and read through
    ``configuration.utils.get_config`` which caches each value.
    """

    key = models.CharField(max_length=255, unique=True, help_text=_("Configuration key"))
    value = models.TextField(help_text=_("Configuration value"))
    description = models.TextField(blank=True, help_text=_("Description of this configuration option"))
    is_default = models.BooleanField(default=False, help_text=_("Is this a default system configuration"))
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Configuration")
        verbose_name_plural = _("Configurations")
        ordering = ['key']

    def __str__(self):
        return f"{self.key}: {self.value[:50]}"

    @classmethod
    def get_value(cls, key, default=None):
        return cls.objects.filter(key=key).values_list('value', flat=True).first() or default

    @classmethod
    def set_value(cls, key, value, description=""):
        config, _created = cls.objects.update_or_create(
            key=key,
            defaults={'value': value, 'description': description, 'is_default': False}
        )
        return config

    def clean(self):
        super().clean()
        default_value = self.get_default_value()
        if default_value is not None and default_value.isdigit() and not self.value.strip().isdigit():
            raise ValidationError({'value': _("This setting expects a whole number.")})

    def save(self, *args, **kwargs):
        super().save(*args, **kwargs)
        cache.delete(f"config_{self.key}")

    def delete(self, *args, **kwargs):
        raise models.ProtectedError(
            _("Configuration entries cannot be deleted. Use reset to restore default values."),
            [self]
        )

    @classmethod
    def reset_to_default(cls, key):
        """
        Restore the settings default for ``key``.

        :param key: Configuration key to reset
        :return: Configuration instance or None if no default exists
        """
        default_config = _defaults().get(key)
        if default_config is None:
            return None
        config, _created = cls.objects.update_or_create(
            key=key,
            defaults={
                'value': default_config['value'],
                'description': default_config['description'],
                'is_default': True
            }
        )
        return config

    @classmethod
    def initialize_defaults(cls):
        """Create missing rows for every declared default; returns how many were created."""
        created_count = 0
        for key, config_data in _defaults().items():
            _config, created = cls.objects.get_or_create(
                key=key,
                defaults={
                    'value': config_data['value'],
                    'description': config_data['description'],
                    'is_default': True
                }
            )
            if created:
                created_count += 1
        return created_count

    def get_default_value(self):
        default_config = _defaults().get(self.key)
        return default_config['value'] if default_config else None

    def is_modified_from_default(self):
        default_value = self.get_default_value()
        return default_value is not None and self.value != default_value
