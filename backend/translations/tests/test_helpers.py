import json
import tempfile
from pathlib import Path

from django.test import SimpleTestCase

from translations.helpers import (
    flatten_dict,
    get_available_languages,
    get_available_namespaces,
    iter_csv_rows,
    load_locale_file,
    parse_bool,
    rows_to_csv,
    set_nested_value,
    strip_namespace,
)


class TreeHelperTests(SimpleTestCase):

    def test_set_nested_value_replaces_leaf_with_branch(self):
        tree = {}
        set_nested_value(tree, 'buttons', 'Buttons')
        set_nested_value(tree, 'buttons.save', 'Save')
        self.assertEqual(tree, {'buttons': {'save': 'Save'}})

    def test_flatten_dict(self):
        self.assertEqual(
            flatten_dict({'hero': {'title': 'Welcome', 'count': 3}, 'empty': None}),
            {'hero.title': 'Welcome', 'hero.count': '3', 'empty': ''},
        )

    def test_strip_namespace(self):
        self.assertEqual(strip_namespace('common.buttons.save', 'common'), 'buttons.save')
        self.assertEqual(strip_namespace('commonly.used', 'common'), 'commonly.used')
        self.assertEqual(strip_namespace('common.save', None), 'common.save')

    def test_parse_bool(self):
        self.assertIsNone(parse_bool(''))
        self.assertIsNone(parse_bool(None))
        self.assertTrue(parse_bool('TRUE'))
        self.assertTrue(parse_bool(True))
        self.assertFalse(parse_bool('false'))


class CsvHelperTests(SimpleTestCase):

    def test_rows_to_csv_quotes_every_cell(self):
        output = rows_to_csv([{
            'key': 'common.note',
            'namespace': 'common',
            'en': 'Line one\nLine "two"',
            'ne': '',
            'context': 'a, b',
            'isRequired': True,
        }])
        self.assertEqual(
            output,
            '"key","namespace","en","ne","context","isRequired"\n'
            '"common.note","common","Line one\nLine ""two""","","a, b","true"\n',
        )

    def test_iter_csv_rows_maps_columns_by_header(self):
        text = 'en,key\n"Hello, world",common.hello\n\n"Bye",common.bye\n'
        rows = list(iter_csv_rows(text))
        self.assertEqual(
            rows,
            [
                (2, {'en': 'Hello, world', 'key': 'common.hello'}),
                (4, {'en': 'Bye', 'key': 'common.bye'}),
            ],
        )


class LocaleFileTests(SimpleTestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.locales_dir = Path(self.tmp.name)
        for lang, namespace, data in (
            ('en', 'home', {'title': 'Home'}),
            ('en', 'common', {'save': 'Save'}),
            ('ne', 'home', {'title': 'गृह'}),
        ):
            (self.locales_dir / lang).mkdir(exist_ok=True)
            (self.locales_dir / lang / f'{namespace}.json').write_text(json.dumps(data), encoding='utf-8')

    def test_discovery(self):
        self.assertEqual(get_available_languages(self.locales_dir), ['en', 'ne'])
        self.assertEqual(get_available_namespaces(self.locales_dir), ['common', 'home'])
        self.assertEqual(get_available_namespaces(self.locales_dir / 'missing'), [])

    def test_load_locale_file(self):
        self.assertEqual(load_locale_file(self.locales_dir, 'ne', 'home'), {'title': 'गृह'})
        self.assertEqual(load_locale_file(self.locales_dir, 'ne', 'common'), {})
