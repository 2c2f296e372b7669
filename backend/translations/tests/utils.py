from django.core.cache import cache
from django.test import TestCase
from rest_framework.test import APITestCase
from rest_framework_simplejwt.tokens import RefreshToken


class BaseTestCase(TestCase):
    """Base test case; translation bundles and config values are cached"""

    def setUp(self):
        super().setUp()
        cache.clear()


class APITestMixin:
    """Mixin for API test cases with authentication helpers"""

    def authenticate_user(self, user):
        """Authenticate a user for API requests"""
        refresh = RefreshToken.for_user(user)
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')

    def unauthenticate(self):
        """Remove authentication"""
        self.client.credentials()


class BaseAPITestCase(APITestMixin, APITestCase):
    """Base API test case with authentication helpers"""

    def setUp(self):
        super().setUp()
        cache.clear()
