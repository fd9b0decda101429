from django.apps import AppConfig


class DomainConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.domain'
    label = 'domain'

    def ready(self):
        from apps.domain import signals  # noqa: F401
