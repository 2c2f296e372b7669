import logging

from django.conf import settings
from django.core.cache import cache

from .models import Configuration

logger = logging.getLogger(__name__)


def _cache_key(key):
    return f"config_{key}"


def get_default(key):
    """Default value declared for ``key`` in ``settings.DEFAULT_CONFIGURATIONS``."""
    defaults = getattr(settings, 'DEFAULT_CONFIGURATIONS', {})
    if key in defaults:
        return defaults[key]['value']
    return None


def get_config(key, default=None, cache_timeout=300):
    """
    Get configuration value with caching support.

    Falls back to the settings default for ``key`` when no row exists yet,
    then to ``default``.

    :param key: Configuration key
    :param default: Default value if key doesn't exist
    :param cache_timeout: Cache timeout in seconds (default: 5 minutes)
    :return: Configuration value or default
    """
    value = cache.get(_cache_key(key))

    if value is None:
        value = Configuration.get_value(key, get_default(key))
        if value is None:
            return default
        cache.set(_cache_key(key), value, cache_timeout)

    return value


def get_int_config(key, default=0):
    """Integer variant of :func:`get_config`; unparsable values yield ``default``."""
    value = get_config(key)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(f"Configuration '{key}' has non-integer value {value!r}, using {default}")
        return default


def set_config(key, value, description=""):
    """
    Set configuration value and invalidate cache.

    :param key: Configuration key
    :param value: Configuration value
    :param description: Optional description
    :return: Configuration instance
    """
    config = Configuration.set_value(key, str(value), description)
    invalidate_config_cache(key)
    return config


def invalidate_config_cache(key):
    cache.delete(_cache_key(key))
