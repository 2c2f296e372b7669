from datetime import timedelta

from django.utils import timezone

from content.factories import GalleryItemFactory, MayorMessageFactory, NewsItemFactory, ProductFactory
from content.localizer import ContentLocalizer, ContentRef
from content.models import GalleryItem, MayorMessage, NewsItem, Product
from core.exceptions import InvalidDataError, NotFoundError
from translations.factories import UserFactory
from translations.tests.utils import BaseTestCase


class LocalizeContentTests(BaseTestCase):

    def setUp(self):
        super().setUp()
        self.localizer = ContentLocalizer()

    def test_replaces_multilingual_values(self):
        content = {
            'name': {'en': 'Tomato', 'ne': 'गोलभेडा'},
            'category': {'en': 'Vegetables'},
            'price': 120,
            'farmer': {'name': {'en': 'Ram', 'ne': 'राम'}, 'village': 'Dhulikhel'},
            'tags': [{'en': 'fresh', 'ne': 'ताजा'}, 'organic', {'label': {'en': 'local'}}],
        }

        self.assertEqual(
            self.localizer.localize_content(content, 'ne'),
            {
                'name': 'गोलभेडा',
                'category': 'Vegetables',
                'price': 120,
                'farmer': {'name': 'राम', 'village': 'Dhulikhel'},
                'tags': ['ताजा', 'organic', {'label': 'local'}],
            },
        )
        self.assertEqual(self.localizer.localize_content(content, 'en')['name'], 'Tomato')

    def test_empty_nepali_falls_back_to_english(self):
        self.assertEqual(
            self.localizer.localize_content({'title': {'en': 'Hello', 'ne': ''}}, 'ne'),
            {'title': 'Hello'},
        )

    def test_non_objects_pass_through(self):
        self.assertEqual(self.localizer.localize_content('plain', 'ne'), 'plain')
        self.assertIsNone(self.localizer.localize_content(None, 'ne'))
        self.assertEqual(self.localizer.localize_content(7, 'en'), 7)


class ContentRefTests(BaseTestCase):

    def test_parse(self):
        self.assertEqual(ContentRef.parse('news', '12'), ContentRef('news', 12))
        self.assertIs(ContentRef.parse('product', 3).model, Product)

    def test_parse_rejects_bad_input(self):
        for content_type, content_id in (('recipe', 1), ('news', 'abc'), ('news', '0'), ('news', None)):
            with self.subTest(content_type=content_type, content_id=content_id):
                with self.assertRaises(InvalidDataError):
                    ContentRef.parse(content_type, content_id)


class CreateContentTests(BaseTestCase):

    def setUp(self):
        super().setUp()
        self.localizer = ContentLocalizer()
        self.user = UserFactory()

    def test_create_product(self):
        document = self.localizer.create_multilingual_content({
            'en': {'title': 'Tomato', 'description': 'Fresh tomatoes'},
            'ne': {'title': 'गोलभेडा'},
            'metadata': {'type': 'product'},
        }, self.user)

        product = Product.objects.get(pk=document['id'])
        self.assertEqual((product.name_en, product.name_ne), ('Tomato', 'गोलभेडा'))
        self.assertEqual(product.category_en, 'other')
        self.assertEqual(product.unit, 'kg')
        self.assertEqual(product.farmer, self.user)
        self.assertTrue(product.is_active)

        self.assertEqual(
            document['content'],
            {
                'en': {'title': 'Tomato', 'description': 'Fresh tomatoes', 'body': 'Fresh tomatoes'},
                'ne': {'title': 'गोलभेडा', 'description': '', 'body': ''},
            },
        )
        self.assertEqual(document['metadata']['type'], 'product')
        self.assertEqual(document['metadata']['created_by'], self.user.pk)

    def test_create_news_uses_body_and_priority(self):
        document = self.localizer.create_multilingual_content({
            'en': {'title': 'Market closed', 'description': 'Holiday notice', 'body': 'Closed on Saturday'},
            'metadata': {'type': 'news', 'priority': 'HIGH', 'is_active': False},
        }, self.user)

        news = NewsItem.objects.get(pk=document['id'])
        self.assertEqual(news.summary_en, 'Holiday notice')
        self.assertEqual(news.content_en, 'Closed on Saturday')
        self.assertEqual(news.priority, NewsItem.Priority.HIGH)
        self.assertFalse(news.is_active)
        self.assertNotIn('ne', document['content'])

    def test_create_gallery_item(self):
        document = self.localizer.create_multilingual_content({
            'en': {'title': 'Harvest'},
            'metadata': {'type': 'gallery', 'image_url': 'https://example.com/a.jpg', 'order': 3},
        }, self.user)

        item = GalleryItem.objects.get(pk=document['id'])
        self.assertEqual((item.image_url, item.order, item.category_en), ('https://example.com/a.jpg', 3, 'Other'))

    def test_create_mayor_message_is_bilingual(self):
        document = self.localizer.create_multilingual_content({
            'en': {'body': 'Welcome'},
            'ne': {'body': 'स्वागत छ'},
            'metadata': {'type': 'mayor'},
        }, self.user)

        message = MayorMessage.objects.get(pk=document['id'])
        self.assertEqual((message.text_en, message.text_ne), ('Welcome', 'स्वागत छ'))
        self.assertEqual(message.scroll_speed, 50)
        self.assertEqual(document['content']['en']['title'], 'Welcome')

    def test_create_mayor_message_prefers_body_over_title(self):
        document = self.localizer.create_multilingual_content({
            'en': {'title': 'Notice', 'body': 'Market closes early today'},
            'ne': {'title': 'सूचना', 'description': 'आज बजार चाँडै बन्द हुन्छ'},
            'metadata': {'type': 'mayor'},
        }, self.user)

        message = MayorMessage.objects.get(pk=document['id'])
        self.assertEqual(message.text_en, 'Market closes early today')
        self.assertEqual(message.text_ne, 'आज बजार चाँडै बन्द हुन्छ')

    def test_create_rejects_unknown_type_and_missing_title(self):
        with self.assertRaises(InvalidDataError):
            self.localizer.create_multilingual_content({'en': {'title': 'x'}, 'metadata': {'type': 'message'}})
        with self.assertRaises(InvalidDataError):
            self.localizer.create_multilingual_content({'en': {}, 'metadata': {'type': 'product'}})
        self.assertFalse(Product.objects.exists())


class UpdateContentTests(BaseTestCase):

    def setUp(self):
        super().setUp()
        self.localizer = ContentLocalizer()

    def test_update_applies_only_provided_fields(self):
        product = ProductFactory(name_en='Tomato', name_ne=None, description_en='Fresh')

        document = self.localizer.update_multilingual_content(
            ContentRef('product', product.pk),
            {'ne': {'title': 'गोलभेडा'}, 'en': {'title': ''}},
        )

        product.refresh_from_db()
        self.assertEqual((product.name_en, product.name_ne, product.description_en), ('Tomato', 'गोलभेडा', 'Fresh'))
        self.assertEqual(document['content']['ne']['title'], 'गोलभेडा')

    def test_update_news_body_and_metadata(self):
        news = NewsItemFactory()
        self.localizer.update_multilingual_content(
            ContentRef('news', news.pk),
            {'en': {'body': 'Updated body'}, 'ne': {'body': 'नयाँ'}, 'metadata': {'priority': 'LOW'}},
        )

        news.refresh_from_db()
        self.assertEqual((news.content_en, news.content_ne, news.priority), ('Updated body', 'नयाँ', 'LOW'))

    def test_update_mayor_message_prefers_title(self):
        message = MayorMessageFactory()
        self.localizer.update_multilingual_content(
            ContentRef('mayor', message.pk),
            {'en': {'title': 'Hello', 'body': 'Ignored'}},
        )
        message.refresh_from_db()
        self.assertEqual(message.text_en, 'Hello')
        self.assertEqual(message.text_ne, 'किसान बजारमा स्वागत छ')

    def test_update_missing_document_raises_not_found(self):
        product = ProductFactory()
        with self.assertRaises(NotFoundError):
            self.localizer.update_multilingual_content(ContentRef('news', product.pk + 100), {})


class SearchContentTests(BaseTestCase):

    def setUp(self):
        super().setUp()
        self.localizer = ContentLocalizer()
        self.product = ProductFactory(name_en='Organic rice', name_ne='अर्गानिक चामल', description_en='Grown in Chitwan')
        self.news = NewsItemFactory(headline_en='Rice prices rise', priority=NewsItem.Priority.HIGH)
        self.gallery = GalleryItemFactory(title_en='Paddy field', description_en='Rice planting day')
        self.message = MayorMessageFactory(text_en='Support local rice farmers')

    def test_search_scores_and_merges_types(self):
        results = self.localizer.search_multilingual_content(text='rice')

        self.assertEqual(len(results), 4)
        self.assertEqual(results[0]['content_type'], 'news')
        self.assertEqual(results[0]['relevance_score'], 1.5)
        self.assertEqual(
            [result['content_type'] for result in results[1:]],
            ['product', 'gallery', 'mayor'],
        )
        self.assertEqual(results[1]['title'], {'en': 'Organic rice', 'ne': 'अर्गानिक चामल'})

    def test_search_by_language(self):
        results = self.localizer.search_multilingual_content(text='चामल', language='ne')
        self.assertEqual([result['id'] for result in results], [self.product.pk])
        self.assertEqual(results[0]['language'], 'ne')

        self.assertEqual(self.localizer.search_multilingual_content(text='चामल', language='en'), [])

    def test_search_filters_by_type_and_date(self):
        results = self.localizer.search_multilingual_content(text='rice', content_type='gallery')
        self.assertEqual([result['id'] for result in results], [self.gallery.pk])

        tomorrow = timezone.now() + timedelta(days=1)
        self.assertEqual(self.localizer.search_multilingual_content(date_from=tomorrow), [])

    def test_search_limit_truncates_merged_results(self):
        results = self.localizer.search_multilingual_content(text='rice', limit=2)
        self.assertEqual([result['content_type'] for result in results], ['news', 'product'])

    def test_search_rejects_unknown_type(self):
        with self.assertRaises(InvalidDataError):
            self.localizer.search_multilingual_content(content_type='recipe')


class LocalizedContentTests(BaseTestCase):

    def test_get_localized_content(self):
        localizer = ContentLocalizer()
        product = ProductFactory(name_en='Tomato', name_ne='गोलभेडा', description_ne=None)

        content = localizer.get_localized_content(ContentRef('product', product.pk), 'ne')

        self.assertEqual(content['name'], 'गोलभेडा')
        self.assertEqual(content['description'], 'Fresh organic tomatoes')
        self.assertEqual(content['type'], 'product')
        self.assertEqual(content['farmer'], product.farmer_id)

        with self.assertRaises(NotFoundError):
            localizer.get_localized_content(ContentRef('mayor', 999), 'en')
