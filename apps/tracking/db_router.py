"""
Database Router for GPS Tracking
Routes reads to the read-only analytics connection when one is configured
"""
from django.conf import settings

ANALYTICS_DB = 'analytics'


class TrackingRouter:
    """
    - Write operations (INSERT/DELETE) use 'default'
    - Read operations (SELECT) use 'analytics' if that alias exists
    """

    def db_for_read(self, model, **hints):
        if model._meta.app_label == 'tracking' and ANALYTICS_DB in settings.DATABASES:
            return ANALYTICS_DB
        return None

    def db_for_write(self, model, **hints):
        if model._meta.app_label == 'tracking':
            return 'default'
        return None

    def allow_relation(self, obj1, obj2, **hints):
        if obj1._meta.app_label == 'tracking' or obj2._meta.app_label == 'tracking':
            return True
        return None

    def allow_migrate(self, db, app_label, model_name=None, **hints):
        """
        Run migrations on default database only
        """
        if app_label == 'tracking':
            return db == 'default'
        return None
