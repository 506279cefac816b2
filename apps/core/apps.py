from django.apps import AppConfig


class CoreConfig(AppConfig):
    """
    Configuration for Core application

    This app contains:
        - Company and Tag models (shared by contacts and opportunities)
        - Dashboard view
        - Theme customizer
        - Cache topics, action results and pagination helpers
        - seed_crm management command
    """
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.core'
    verbose_name = 'Core'
