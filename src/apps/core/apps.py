"""Core Django App Configuration."""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuration for the core app: shared query and CRUD machinery."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "src.apps.core"
    label = "core"
    verbose_name = "Core"
