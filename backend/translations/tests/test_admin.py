from unittest.mock import Mock

from django.contrib.admin.sites import AdminSite
from django.test import RequestFactory

from translations.admin import TranslationKeyAdmin
from translations.factories import TranslationKeyFactory, UserFactory
from translations.models import ChangeType, TranslationHistory, TranslationKey

from .utils import BaseTestCase


class TranslationKeyAdminTests(BaseTestCase):

    def setUp(self):
        super().setUp()
        self.admin = TranslationKeyAdmin(TranslationKey, AdminSite())
        self.request = RequestFactory().post('/admin/')
        self.request.user = UserFactory(is_staff=True)

    def test_save_with_changes_records_history(self):
        translation_key = TranslationKeyFactory(key='common.buttons.save', en='Save')
        translation_key.en = 'Store'

        self.admin.save_model(self.request, translation_key, Mock(has_changed=Mock(return_value=True)), True)

        entry = TranslationHistory.objects.get(translation_key=translation_key)
        self.assertEqual((entry.version, entry.change_type, entry.en), (1, ChangeType.UPDATE, 'Store'))
        self.assertEqual(entry.changed_by, self.request.user)

    def test_unchanged_save_records_nothing(self):
        translation_key = TranslationKeyFactory(key='common.buttons.save', en='Save')
        updated_by = translation_key.updated_by

        self.admin.save_model(self.request, translation_key, Mock(has_changed=Mock(return_value=False)), True)

        translation_key.refresh_from_db()
        self.assertFalse(TranslationHistory.objects.exists())
        self.assertEqual(translation_key.current_version, 0)
        self.assertEqual(translation_key.updated_by, updated_by)

    def test_add_records_create(self):
        translation_key = TranslationKey(key='common.buttons.cancel', namespace='common', en='Cancel')

        self.admin.save_model(self.request, translation_key, Mock(has_changed=Mock(return_value=True)), False)

        entry = TranslationHistory.objects.get(translation_key=translation_key)
        self.assertEqual((entry.version, entry.change_type), (1, ChangeType.CREATE))
