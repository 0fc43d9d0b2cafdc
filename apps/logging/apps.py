from django.apps import AppConfig


class LoggingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.logging"
    verbose_name = "Audit Logging"
