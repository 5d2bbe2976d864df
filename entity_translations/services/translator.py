"""
Entity-shaped read/write over the translation store.

    translator = get_translator()
    translator.save(article, {"fr": {"title": "Bonjour"}, "de": {"title": "Hallo"}})
    translator.translate(article, "fr")   # article.title == "Bonjour"
"""
import logging
from typing import Dict, Mapping, Optional

from django.utils import translation

from ..conf import (
    EntityConfig,
    TranslatableRegistry,
    TranslationSettings,
    get_registry,
    get_translation_settings,
    normalize_locale,
)
from ..exceptions import MissingEntityIdError, NotTranslatableError, UnsupportedLocaleError
from . import cache, store

logger = logging.getLogger(__name__)


class Translator:
    def __init__(
        self,
        registry: TranslatableRegistry,
        settings: Optional[TranslationSettings] = None,
    ) -> None:
        self.registry = registry
        self.settings = settings or TranslationSettings()

    def is_translatable(self, entity_or_model) -> bool:
        model = entity_or_model if isinstance(entity_or_model, type) else type(entity_or_model)
        return self.registry.for_model(model) is not None

    def get_config(self, entity) -> EntityConfig:
        return self.registry.get(entity)

    def get_config_for_alias(self, alias: str) -> EntityConfig:
        config = self.registry.for_alias(alias)
        if config is None:
            raise NotTranslatableError(f"Unknown translatable alias: {alias}")
        return config

    def entity_id(self, entity, config: Optional[EntityConfig] = None) -> str:
        config = config or self.get_config(entity)
        entity_id = config.get_id(entity)
        if entity_id is None:
            raise MissingEntityIdError(
                f"{type(entity).__name__} has no {config.id_getter}; save it before translating"
            )
        return entity_id

    def _check_locale(self, locale: str) -> str:
        locale = normalize_locale(locale)
        if not self.settings.is_supported(locale):
            raise UnsupportedLocaleError(f"Unsupported locale: {locale}")
        return locale

    def _clean(
        self, config: EntityConfig, translations_by_locale: Mapping[str, Mapping[str, str]]
    ) -> Dict[str, Dict[str, str]]:
        cleaned: Dict[str, Dict[str, str]] = {}
        for locale, values in translations_by_locale.items():
            locale = self._check_locale(locale)
            for field_name, value in (values or {}).items():
                if field_name not in config.fields:
                    logger.warning(
                        "Ignoring undeclared field %r for translatable alias %r",
                        field_name,
                        config.alias,
                    )
                    continue
                if value is None:
                    continue
                cleaned.setdefault(locale, {})[field_name] = str(value)
        return cleaned

    # ---------- writes ----------
    def save_for(
        self, config: EntityConfig, entity_id, translations_by_locale: Mapping[str, Mapping[str, str]]
    ) -> int:
        """Save by alias config and raw id, for callers without an entity instance."""
        if entity_id is None or str(entity_id) == "":
            raise MissingEntityIdError(f"Cannot save {config.alias} translations without an id")
        cleaned = self._clean(config, translations_by_locale)
        if not cleaned:
            return 0
        written = store.save_translations(config.alias, entity_id, cleaned)
        cache.invalidate_translations(config.alias, entity_id)
        return written

    def save(self, entity, translations_by_locale: Mapping[str, Mapping[str, str]]) -> int:
        """
        Upsert ``locale -> field -> value`` for the entity.

        Fields not declared for the entity are skipped with a warning and None
        values are ignored. Returns the number of values written.
        """
        config = self.get_config(entity)
        return self.save_for(config, self.entity_id(entity, config), translations_by_locale)

    def delete_for(self, config: EntityConfig, entity_id, locale: Optional[str] = None) -> int:
        if locale is not None:
            locale = normalize_locale(locale)
        deleted = store.delete_translations(config.alias, entity_id, locale=locale)
        cache.invalidate_translations(config.alias, entity_id)
        return deleted

    def delete(self, entity, locale: Optional[str] = None) -> int:
        config = self.get_config(entity)
        return self.delete_for(config, self.entity_id(entity, config), locale)

    # ---------- reads ----------
    def translations_for(self, config: EntityConfig, entity_id) -> Dict[str, Dict[str, str]]:
        ttl = self.settings.cache_ttl
        if ttl > 0:
            cached = cache.get_cached_translations(config.alias, entity_id)
            if cached is not None:
                return cached
        translations = store.get_all_translations(config.alias, entity_id)
        if ttl > 0:
            cache.set_cached_translations(config.alias, entity_id, translations, ttl)
        return translations

    def get_translations(self, entity, locale: Optional[str] = None):
        """All stored values grouped by locale, or one locale's ``field -> value``."""
        config = self.get_config(entity)
        translations = self.translations_for(config, self.entity_id(entity, config))
        if locale is None:
            return translations
        return dict(translations.get(normalize_locale(locale), {}))

    def translate(self, entity, locale: Optional[str] = None) -> Dict[str, str]:
        """
        Apply the locale's stored values to the entity through the configured setters.

        Defaults to the active Django language. Fields with no stored value are
        left untouched, unless FALLBACK_LOCALE has one. Returns the values applied.
        """
        config = self.get_config(entity)
        entity_id = self.entity_id(entity, config)
        locale = locale or translation.get_language()
        if not locale:
            return {}
        locale = normalize_locale(locale)

        translations = self.translations_for(config, entity_id)
        values = dict(translations.get(locale, {}))
        fallback = self.settings.fallback_locale
        if fallback and fallback != locale:
            for field_name, value in translations.get(fallback, {}).items():
                values.setdefault(field_name, value)

        applied = {}
        for field_name in config.fields:
            if field_name not in values:
                continue
            config.set_value(entity, field_name, values[field_name])
            applied[field_name] = values[field_name]
        return applied


_translator: Optional[Translator] = None


def get_translator() -> Translator:
    global _translator
    if _translator is None:
        _translator = Translator(get_registry(), get_translation_settings())
    return _translator


def reset_translator() -> None:
    """Drop the shared translator so the next get_translator() reloads configuration."""
    global _translator
    _translator = None
