"""
ORM hook: translate instances into the active language as they are loaded.

Each loaded instance reads its entity's translations once; on a cache miss that
is one store query per instance, so querysets over many rows rely on CACHE_TTL
to stay cheap.
"""
import logging

from django.apps import apps
from django.db.models.signals import post_init
from django.utils import translation

from .services.translator import get_translator

logger = logging.getLogger(__name__)


def translate_on_load(sender, instance, **kwargs):
    """post_init receiver: overlay the active language's values on a loaded instance."""
    translator = get_translator()
    if not translator.settings.auto_translate:
        return
    config = translator.registry.for_model(sender)
    if config is None:
        return
    # Unsaved instances have nothing stored yet.
    if config.get_id(instance) is None:
        return
    locale = translation.get_language()
    if not locale:
        return
    try:
        translator.translate(instance, locale)
    except Exception:
        logger.exception("Failed to translate %s into %s", config.alias, locale)
        raise


def _translatable_models(registry):
    """Configured models plus their installed proxy and multi-table children."""
    models = {config.model for config in registry}
    for model in apps.get_models():
        if registry.for_model(model) is not None:
            models.add(model)
    return models


def _dispatch_uid(model) -> str:
    return f"entity_translations:{model.__module__}.{model.__qualname__}"


def connect_signals(registry) -> None:
    for model in _translatable_models(registry):
        post_init.connect(translate_on_load, sender=model, dispatch_uid=_dispatch_uid(model))


def disconnect_signals(registry) -> None:
    for model in _translatable_models(registry):
        post_init.disconnect(sender=model, dispatch_uid=_dispatch_uid(model))
