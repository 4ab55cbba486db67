"""Django app configuration for collab_blog."""
from django.apps import AppConfig


class CollabBlogConfig(AppConfig):
    """Configuration for the collaborative blog app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "collab_blog"
    verbose_name = "Collaborative Blog"
