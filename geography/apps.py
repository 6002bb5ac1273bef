"""
Geography — Application Configuration
"""

from django.apps import AppConfig


class GeographyConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'geography'
    verbose_name = 'Dynamic Geographic Hierarchy'

    def ready(self):
        import geography.signals  # noqa: F401
