"""Django app configuration for the event status console."""

from django.apps import AppConfig


class StatusConfig(AppConfig):
    """Configuration for the status app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "status"
    verbose_name = "Event Status"
