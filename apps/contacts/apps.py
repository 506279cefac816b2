from django.apps import AppConfig


class ContactsConfig(AppConfig):
    """
    Contacts: people the team works with, their companies and tags.

    Search, grouping and the transactional contact upsert live here.
    """
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.contacts'
    verbose_name = 'Contacts'
