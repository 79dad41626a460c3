"""
GPS Tracking Application Configuration
"""
from django.apps import AppConfig, apps
from django.core.signals import setting_changed


class TrackingConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.tracking'
    label = 'tracking'
    verbose_name = 'GPS Live Tracking'

    def ready(self):
        from .conf import TrackerConfig
        from .store import PointStore

        self.store = PointStore()
        self.tracker = TrackerConfig.from_settings()
        setting_changed.connect(self._reload_tracker, dispatch_uid='tracking_reload_config')

    def _reload_tracker(self, setting, **kwargs):
        if setting == 'GPS_TRACKER':
            from .conf import TrackerConfig
            self.tracker = TrackerConfig.from_settings()


def get_tracking():
    """
    Store and config built once at startup

    Returns:
        (PointStore, TrackerConfig)
    """
    app = apps.get_app_config('tracking')
    return app.store, app.tracker
