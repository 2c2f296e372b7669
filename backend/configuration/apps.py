from django.apps import AppConfig
from django.db import DatabaseError
import logging

logger = logging.getLogger(__name__)


class ConfigurationConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'configuration'

    def ready(self):
        from .models import Configuration
        # Only initialize if tables exist (avoid issues during migrations)
        if not self._tables_exist():
            return
        try:
            created_count = Configuration.initialize_defaults()
        except DatabaseError as e:
            logger.warning(f"Could not initialize default configurations: {e}")
            return
        if created_count > 0:
            logger.info(f"Initialized {created_count} default configurations")

    def _tables_exist(self):
        from django.db import connection
        from .models import Configuration
        try:
            return Configuration._meta.db_table in connection.introspection.table_names()
        except DatabaseError:
            return False
