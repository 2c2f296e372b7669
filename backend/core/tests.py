from django.test import RequestFactory

from content.factories import NewsItemFactory, ProductFactory
from translations.factories import TranslationKeyFactory
from translations.tests.utils import BaseTestCase

from .views import dashboard_callback


class DashboardCallbackTests(BaseTestCase):

    def test_dashboard_metrics(self):
        TranslationKeyFactory(key="common.save", ne="बचत")
        TranslationKeyFactory(key="common.cancel", ne="", is_required=True)
        ProductFactory(is_active=False)
        NewsItemFactory()

        context = dashboard_callback(RequestFactory().get('/admin/'), {})

        kpi = {str(card['title']): card for card in context['kpi']}
        self.assertEqual(kpi['Translation Keys']['metric'], '2')
        self.assertEqual(kpi['Completeness']['metric'], '50.0%')
        self.assertEqual(kpi['Completeness']['footer'], '1 required keys missing Nepali')
        self.assertEqual(kpi['Products']['footer'], '0 of 1 active')
        self.assertEqual(kpi['News Items']['metric'], '1')
        self.assertEqual(context['recent_activity']['missing_nepali'], 1)

    def test_empty_dashboard(self):
        context = dashboard_callback(RequestFactory().get('/admin/'), {})

        self.assertEqual(context['recent_activity']['total_keys'], 0)
        self.assertEqual(context['weekly_metrics'][0]['growth'], '0%')
