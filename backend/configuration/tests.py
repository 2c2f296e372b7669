from django.core.cache import cache
from django.core.exceptions import ValidationError
from django.db.models import ProtectedError
from django.test import TestCase, override_settings

from .models import Configuration
from .utils import get_config, get_int_config, set_config

TEST_DEFAULTS = {
    "translations_history_limit": {"value": "10", "description": "History entries"},
    "translations_system_username": {"value": "system", "description": "System user"},
}


@override_settings(DEFAULT_CONFIGURATIONS=TEST_DEFAULTS)
class ConfigurationTests(TestCase):

    def setUp(self):
        cache.clear()

    def test_initialize_defaults_creates_missing_rows_once(self):
        self.assertEqual(Configuration.initialize_defaults(), 2)
        self.assertEqual(Configuration.initialize_defaults(), 0)
        self.assertTrue(Configuration.objects.get(key="translations_history_limit").is_default)

    def test_get_config_falls_back_to_settings_default(self):
        self.assertEqual(get_config("translations_history_limit"), "10")
        self.assertIsNone(get_config("unknown_key"))
        self.assertEqual(get_config("unknown_key", "fallback"), "fallback")

    def test_set_config_invalidates_cached_value(self):
        set_config("translations_history_limit", 25)
        self.assertEqual(get_int_config("translations_history_limit"), 25)

        set_config("translations_history_limit", 30)
        self.assertEqual(get_int_config("translations_history_limit"), 30)

    def test_get_int_config_ignores_garbage(self):
        set_config("translations_history_limit", "many")
        self.assertEqual(get_int_config("translations_history_limit", 7), 7)

    def test_reset_to_default(self):
        set_config("translations_system_username", "robot")
        config = Configuration.reset_to_default("translations_system_username")

        self.assertEqual(config.value, "system")
        self.assertTrue(config.is_default)
        self.assertFalse(config.is_modified_from_default())
        self.assertIsNone(Configuration.reset_to_default("unknown_key"))

    def test_configuration_cannot_be_deleted(self):
        config = set_config("translations_system_username", "robot")
        with self.assertRaises(ProtectedError):
            config.delete()

    def test_numeric_settings_reject_text(self):
        config = Configuration(key="translations_history_limit", value="ten")
        with self.assertRaises(ValidationError):
            config.clean()

        config.value = "25"
        config.clean()

        Configuration(key="translations_system_username", value="robot").clean()
