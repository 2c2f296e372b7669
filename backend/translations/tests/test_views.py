import json
from unittest.mock import patch

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import override_settings
from django.urls import reverse
from rest_framework import status

from core.exceptions import ServiceError
from translations.factories import TranslationKeyFactory, UserFactory
from translations.models import TranslationHistory, TranslationKey
from translations.services import TranslationService
from translations.views import TranslationValidateView

from .utils import BaseAPITestCase


class TranslationBundleViewTests(BaseAPITestCase):

    def setUp(self):
        super().setUp()
        self.user = UserFactory()
        TranslationKeyFactory(key='common.buttons.save', en='Save', ne='सेभ')
        TranslationKeyFactory(key='common.buttons.cancel', en='Cancel', ne='')

    def test_bundle_is_public(self):
        response = self.client.get(reverse('translation-bundle'), {'language': 'ne', 'namespace': 'common'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            response.data,
            {'success': True, 'data': {'buttons': {'save': 'सेभ', 'cancel': 'Cancel'}}},
        )

    def test_bundle_requires_valid_language(self):
        response = self.client.get(reverse('translation-bundle'), {'language': 'fr'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data['success'])
        self.assertIn('language', response.data['details'])

        response = self.client.get(reverse('translation-bundle'))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_create_requires_authentication(self):
        data = {'key': 'common.ok', 'namespace': 'common', 'translations': {'en': 'OK'}}
        response = self.client.post(reverse('translation-bundle'), data, format='json')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.data['success'])

    def test_create_translation(self):
        self.authenticate_user(self.user)
        data = {
            'key': 'common.ok',
            'namespace': 'common',
            'translations': {'en': 'OK', 'ne': 'ठिक'},
            'context': 'Confirmation button',
            'is_required': True,
        }
        response = self.client.post(reverse('translation-bundle'), data, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['success'])
        self.assertEqual(response.data['data']['translations'], {'en': 'OK', 'ne': 'ठिक'})
        self.assertEqual(response.data['data']['completeness'], 100)
        self.assertEqual(response.data['data']['updated_by']['id'], self.user.id)

    def test_create_duplicate_returns_conflict(self):
        self.authenticate_user(self.user)
        data = {'key': 'common.buttons.save', 'namespace': 'common', 'translations': {'en': 'Save'}}
        response = self.client.post(reverse('translation-bundle'), data, format='json')

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['error'], "Translation key 'common.buttons.save' already exists")

    def test_create_validates_payload(self):
        self.authenticate_user(self.user)
        cases = [
            {'key': 'common.ok', 'namespace': 'common', 'translations': {'ne': 'ठिक'}},
            {'key': 'common.ok', 'namespace': 'forms', 'translations': {'en': 'OK'}},
            {'key': 'Common Ok', 'namespace': 'common', 'translations': {'en': 'OK'}},
            {'key': 'common.ok', 'namespace': 'common', 'translations': {'en': 'OK'}, 'context': 'abc'},
        ]
        for data in cases:
            with self.subTest(data=data):
                response = self.client.post(reverse('translation-bundle'), data, format='json')
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
                self.assertEqual(response.data['error'], 'Validation failed')


class TranslationKeyViewTests(BaseAPITestCase):

    def setUp(self):
        super().setUp()
        self.user = UserFactory()
        self.authenticate_user(self.user)
        self.service = TranslationService()
        self.service.create_translation(
            {'key': 'common.buttons.save', 'namespace': 'common', 'translations': {'en': 'Save'}},
            self.user,
        )

    def url(self, name, key='common.buttons.save'):
        return reverse(name, kwargs={'key': key})

    def test_update_translation_key(self):
        response = self.client.put(
            self.url('translation-key-detail'),
            {'translations': {'ne': 'सेभ'}, 'change_reason': 'Added Nepali'},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['translations'], {'en': 'Save', 'ne': 'सेभ'})
        self.assertEqual(response.data['data']['current_version'], 2)
        self.assertEqual(TranslationHistory.objects.get(version=2).change_reason, 'Added Nepali')

    def test_patch_is_partial_update(self):
        response = self.client.patch(self.url('translation-key-detail'), {'is_required': True}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['data']['is_required'])

    def test_update_unknown_key_returns_not_found(self):
        response = self.client.put(
            self.url('translation-key-detail', 'common.unknown'), {'translations': {'en': 'X'}}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['details'], {'key': 'common.unknown'})

    def test_delete_translation_key(self):
        response = self.client.delete(self.url('translation-key-detail'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(TranslationKey.objects.exists())

        response = self.client.delete(self.url('translation-key-detail'))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_list_keys_validates_pagination(self):
        response = self.client.get(reverse('translation-keys'), {'page': 1, 'limit': 10})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['total'], 1)
        self.assertEqual(response.data['data']['keys'][0]['key'], 'common.buttons.save')

        for params in ({'page': 0}, {'limit': 0}, {'limit': 101}):
            with self.subTest(params=params):
                response = self.client.get(reverse('translation-keys'), params)
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_keys_filters_required(self):
        TranslationKeyFactory(key='common.buttons.cancel', is_required=True)

        response = self.client.get(reverse('translation-keys'), {'is_required': 'true'})
        self.assertEqual([k['key'] for k in response.data['data']['keys']], ['common.buttons.cancel'])

        response = self.client.get(reverse('translation-keys'), {'is_required': 'false'})
        self.assertEqual([k['key'] for k in response.data['data']['keys']], ['common.buttons.save'])

        response = self.client.get(reverse('translation-keys'))
        self.assertEqual(response.data['data']['total'], 2)

    def test_keys_require_authentication(self):
        self.unauthenticate()
        response = self.client.get(reverse('translation-keys'))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_validate_completeness(self):
        response = self.client.get(reverse('translation-validate'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['completeness'], 0)
        self.assertEqual(response.data['data']['missing_keys'], ['common.buttons.save'])

    def test_history_rollback_and_compare(self):
        self.client.put(self.url('translation-key-detail'), {'translations': {'ne': 'सेभ'}}, format='json')

        response = self.client.get(self.url('translation-history'), {'limit': 1})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([entry['version'] for entry in response.data['data']], [2])

        response = self.client.get(self.url('translation-compare'), {'version1': 1, 'version2': 2})
        self.assertEqual(response.data['data']['changes'], ['Nepali translation added'])
        self.assertEqual(response.data['data']['version2']['translations'], {'en': 'Save', 'ne': 'सेभ'})

        response = self.client.post(self.url('translation-rollback'), {'version': 1}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['translations'], {'en': 'Save'})
        self.assertEqual(response.data['data']['current_version'], 3)

        response = self.client.post(self.url('translation-rollback'), {'version': 0}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.post(self.url('translation-rollback'), {'version': 42}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_history_limit_bounds(self):
        response = self.client.get(self.url('translation-history'), {'limit': 500})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_recent_changes(self):
        response = self.client.get(reverse('translation-recent-changes'), {'namespace': 'common'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data'][0]['key'], 'common.buttons.save')
        self.assertEqual(response.data['data'][0]['change_type'], 'CREATE')


class ImportExportViewTests(BaseAPITestCase):

    def setUp(self):
        super().setUp()
        self.user = UserFactory()
        self.authenticate_user(self.user)
        TranslationKeyFactory(key='common.greeting', en='Hello, "you"', ne='')

    def test_export_json_attachment(self):
        response = self.client.get(reverse('translation-export'), {'format': 'json'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response['Content-Type'], 'application/json')
        self.assertRegex(response['Content-Disposition'], r'attachment; filename="translations_\d{4}-\d{2}-\d{2}\.json"')
        self.assertEqual(json.loads(response.content)['translations'][0]['key'], 'common.greeting')

    def test_export_csv_attachment(self):
        response = self.client.get(reverse('translation-export'), {'format': 'csv'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response['Content-Type'].startswith('text/csv'))
        self.assertIn('"Hello, ""you"""', response.content.decode('utf-8'))

    def test_export_rejects_unknown_format(self):
        response = self.client.get(reverse('translation-export'), {'format': 'xml'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_import_csv_upload(self):
        upload = SimpleUploadedFile(
            'translations.csv',
            'key,namespace,en,ne,context,isRequired\ncommon.greeting,common,Hi,नमस्ते,,false\n'.encode('utf-8'),
            content_type='text/csv',
        )
        response = self.client.post(reverse('translation-import'), {'file': upload}, format='multipart')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['success'])
        self.assertEqual(response.data['data']['updated'], 1)
        self.assertEqual(TranslationKey.objects.get(key='common.greeting').ne, 'नमस्ते')

    def test_import_reports_row_errors(self):
        payload = json.dumps({'translations': [{'key': 'common.bad', 'en': ''}]}).encode('utf-8')
        upload = SimpleUploadedFile('translations.json', payload, content_type='application/json')
        response = self.client.post(reverse('translation-import'), {'file': upload}, format='multipart')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['success'])
        self.assertEqual(response.data['data']['imported'], 0)
        self.assertEqual(len(response.data['data']['errors']), 1)

    def test_import_rejects_other_extensions(self):
        upload = SimpleUploadedFile('translations.txt', b'hello', content_type='text/plain')
        response = self.client.post(reverse('translation-import'), {'file': upload}, format='multipart')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Only JSON and CSV files are allowed')

    @override_settings(DEFAULT_CONFIGURATIONS={
        'translations_import_max_size': {'value': '10', 'description': ''},
    })
    def test_import_enforces_size_limit(self):
        upload = SimpleUploadedFile('translations.json', b'{"translations": []}', content_type='application/json')
        response = self.client.post(reverse('translation-import'), {'file': upload}, format='multipart')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'File too large')

    def test_import_requires_file(self):
        response = self.client.post(reverse('translation-import'), {}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class ServiceErrorHandlingTests(BaseAPITestCase):

    def setUp(self):
        super().setUp()
        self.authenticate_user(UserFactory())

    def test_unexpected_service_error_is_500(self):
        with patch.object(TranslationValidateView, 'service_class') as service_class:
            service_class.return_value.validate_translation_completeness.side_effect = ServiceError('Database unavailable')
            response = self.client.get(reverse('translation-validate'))

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {'success': False, 'error': 'Database unavailable'})

    def test_unhandled_exception_surfaces_message(self):
        with patch.object(TranslationService, 'validate_translation_completeness', side_effect=RuntimeError('boom')):
            response = self.client.get(reverse('translation-validate'))

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data['error'], 'boom')
