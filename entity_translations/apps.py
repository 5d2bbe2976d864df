from django.apps import AppConfig


class EntityTranslationsConfig(AppConfig):
    name = "entity_translations"
    verbose_name = "Entity translations"
    default_auto_field = "django.db.models.BigAutoField"

    def ready(self):
        from .conf import configure
        from .services.translator import reset_translator
        from .signals import connect_signals

        _, registry = configure()
        reset_translator()
        connect_signals(registry)
