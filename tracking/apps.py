from django.apps import AppConfig


class TrackingConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'tracking'

    # notification fan-out hangs off post_save
    def ready(self):
        import tracking.signals  # noqa: F401
