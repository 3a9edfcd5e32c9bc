# apps/core/apps.py

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Shared building blocks for the storefront apps"""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.core'
    verbose_name = 'Core'
