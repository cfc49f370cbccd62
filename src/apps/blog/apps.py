"""Blog Django App Configuration."""

from django.apps import AppConfig


class BlogConfig(AppConfig):
    """Configuration for the blog app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "src.apps.blog"
    label = "blog"
    verbose_name = "Blog"
