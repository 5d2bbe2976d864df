"""
Translatable configuration: which models carry translatable fields, under which
alias, and how to read their id and field values.

Loaded once at startup (see ``apps.EntityTranslationsConfig.ready``) from the
``ENTITY_TRANSLATIONS`` setting and, optionally, a YAML document:

    sandbox.Article:
      alias: article
      id_getter: pk
      fields:
        title: {getter: get_title, setter: set_title}
        summary: ~

Usage:
    from entity_translations.conf import get_registry, get_translation_settings
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

import yaml
from django.apps import apps
from django.conf import settings
from django.utils.module_loading import import_string

from .exceptions import NotTranslatableError, TranslatableConfigurationError

logger = logging.getLogger(__name__)

SETTINGS_NAME = "ENTITY_TRANSLATIONS"
ENV_AUTO_TRANSLATE = "ENTITY_TRANSLATIONS_AUTO_TRANSLATE"
ENV_CONFIG_FILE = "ENTITY_TRANSLATIONS_CONFIG_FILE"

DEFAULT_ID_GETTER = "pk"
DEFAULT_CACHE_TTL = 300
DEFAULT_FORM_FIELD_SEPARATOR = "__"

_TRUTHY = ("true", "1", "yes", "on")


def normalize_locale(locale: str) -> str:
    """``en_US`` and ``en-US`` both become ``en-us``, like Django language codes."""
    if not locale or not isinstance(locale, str):
        raise ValueError(f"Invalid locale: {locale!r}")
    return locale.strip().replace("_", "-").lower()


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY


@dataclass(frozen=True)
class TranslationSettings:
    auto_translate: bool = True
    fallback_locale: Optional[str] = None
    locales: Optional[Tuple[str, ...]] = None
    cache_ttl: int = DEFAULT_CACHE_TTL
    form_field_separator: str = DEFAULT_FORM_FIELD_SEPARATOR
    config_file: Optional[str] = None

    def is_supported(self, locale: str) -> bool:
        return self.locales is None or locale in self.locales


@dataclass(frozen=True)
class FieldAccessors:
    getter: str
    setter: str


def _read(entity, name: str):
    value = getattr(entity, name)
    if callable(value):
        return value()
    return value


@dataclass(frozen=True)
class EntityConfig:
    model: type
    alias: str
    id_getter: str = DEFAULT_ID_GETTER
    fields: Mapping[str, FieldAccessors] = field(default_factory=dict)

    def get_id(self, entity) -> Optional[str]:
        entity_id = _read(entity, self.id_getter)
        if entity_id is None or entity_id == "":
            return None
        return str(entity_id)

    def get_value(self, entity, field_name: str):
        return _read(entity, self.fields[field_name].getter)

    def set_value(self, entity, field_name: str, value) -> None:
        setter = self.fields[field_name].setter
        target = getattr(entity, setter, None)
        if callable(target):
            target(value)
        else:
            setattr(entity, setter, value)


class TranslatableRegistry:
    """Read-only lookup of EntityConfig by model class or alias."""

    def __init__(self, entities=()):
        by_alias: Dict[str, EntityConfig] = {}
        by_model: Dict[type, EntityConfig] = {}
        for config in entities:
            if config.alias in by_alias:
                raise TranslatableConfigurationError(
                    f"Alias {config.alias!r} is used by both "
                    f"{by_alias[config.alias].model.__name__} and {config.model.__name__}"
                )
            if config.model in by_model:
                raise TranslatableConfigurationError(
                    f"{config.model.__name__} is configured more than once"
                )
            by_alias[config.alias] = config
            by_model[config.model] = config
        self._by_alias = MappingProxyType(by_alias)
        self._by_model = MappingProxyType(by_model)

    def __iter__(self) -> Iterator[EntityConfig]:
        return iter(self._by_alias.values())

    def __len__(self) -> int:
        return len(self._by_alias)

    def for_model(self, model: type) -> Optional[EntityConfig]:
        # Proxy and multi-table children inherit their parent's configuration.
        for klass in getattr(model, "__mro__", (model,)):
            config = self._by_model.get(klass)
            if config is not None:
                return config
        return None

    def for_alias(self, alias: str) -> Optional[EntityConfig]:
        return self._by_alias.get(alias)

    def get(self, entity) -> EntityConfig:
        model = entity if isinstance(entity, type) else type(entity)
        config = self.for_model(model)
        if config is None:
            raise NotTranslatableError(f"{model.__name__} is not a translatable entity")
        return config


def _resolve_model(name: str) -> type:
    if not isinstance(name, str) or "." not in name:
        raise TranslatableConfigurationError(
            f"Entity key {name!r} must be 'app_label.ModelName' or a dotted class path"
        )
    try:
        if name.count(".") == 1:
            return apps.get_model(name)
        return import_string(name)
    except (LookupError, ImportError) as exc:
        raise TranslatableConfigurationError(f"Unknown translatable entity {name!r}: {exc}") from exc


def _concrete_field_names(model) -> set:
    meta = getattr(model, "_meta", None)
    if meta is None:
        return set()
    return {f.name for f in meta.concrete_fields} | {f.attname for f in meta.concrete_fields}


def _parse_fields(entity_name: str, model, raw) -> Dict[str, FieldAccessors]:
    if isinstance(raw, (list, tuple)):
        raw = {name: None for name in raw}
    if not isinstance(raw, dict) or not raw:
        raise TranslatableConfigurationError(f"{entity_name}: 'fields' must be a non-empty mapping")

    mapped = _concrete_field_names(model)
    fields: Dict[str, FieldAccessors] = {}
    for field_name, accessors in raw.items():
        if field_name in mapped:
            raise TranslatableConfigurationError(
                f"{entity_name}.{field_name} is an ORM field; translatable fields must not be mapped"
            )
        accessors = accessors or {}
        if not isinstance(accessors, dict):
            raise TranslatableConfigurationError(
                f"{entity_name}.{field_name}: accessors must be a mapping with getter/setter"
            )
        fields[field_name] = FieldAccessors(
            getter=accessors.get("getter") or field_name,
            setter=accessors.get("setter") or field_name,
        )
    return fields


def parse_entities(raw: Mapping[str, Any]) -> TranslatableRegistry:
    """Build a registry from the ``{model: {alias, id_getter, fields}}`` document."""
    if raw is None:
        return TranslatableRegistry()
    if not isinstance(raw, Mapping):
        raise TranslatableConfigurationError("Translatable configuration must be a mapping")

    entities = []
    for entity_name, options in raw.items():
        if not isinstance(options, dict):
            raise TranslatableConfigurationError(f"{entity_name}: expected a mapping")
        alias = options.get("alias")
        if not alias or not isinstance(alias, str):
            raise TranslatableConfigurationError(f"{entity_name}: 'alias' is required")
        model = _resolve_model(entity_name)
        entities.append(
            EntityConfig(
                model=model,
                alias=alias,
                id_getter=options.get("id_getter") or DEFAULT_ID_GETTER,
                fields=MappingProxyType(_parse_fields(entity_name, model, options.get("fields"))),
            )
        )
    return TranslatableRegistry(entities)


def load_config_file(path) -> Dict[str, Any]:
    config_path = Path(path)
    if not config_path.is_file():
        raise TranslatableConfigurationError(f"Translatable config file not found: {config_path}")
    with open(config_path, "r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise TranslatableConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise TranslatableConfigurationError(f"{config_path} must contain a mapping at the top level")
    return raw


def load_settings() -> TranslationSettings:
    options = dict(getattr(settings, SETTINGS_NAME, None) or {})

    auto_translate = os.getenv(ENV_AUTO_TRANSLATE)
    if auto_translate is None:
        auto_translate = options.get("AUTO_TRANSLATE", True)

    locales = options.get("LOCALES")
    if locales is not None:
        if isinstance(locales, str) or not locales:
            raise TranslatableConfigurationError("LOCALES must be a non-empty list of locale codes")
        locales = tuple(normalize_locale(code) for code in locales)

    fallback = options.get("FALLBACK_LOCALE")
    if fallback:
        fallback = normalize_locale(fallback)

    try:
        cache_ttl = int(options.get("CACHE_TTL", DEFAULT_CACHE_TTL))
    except (TypeError, ValueError) as exc:
        raise TranslatableConfigurationError("CACHE_TTL must be an integer") from exc

    return TranslationSettings(
        auto_translate=_parse_bool(auto_translate),
        fallback_locale=fallback or None,
        locales=locales,
        cache_ttl=cache_ttl,
        form_field_separator=options.get("FORM_FIELD_SEPARATOR") or DEFAULT_FORM_FIELD_SEPARATOR,
        config_file=os.getenv(ENV_CONFIG_FILE) or options.get("CONFIG_FILE"),
    )


def load_registry(translation_settings: TranslationSettings) -> TranslatableRegistry:
    raw: Dict[str, Any] = {}
    if translation_settings.config_file:
        raw.update(load_config_file(translation_settings.config_file))
    inline = (getattr(settings, SETTINGS_NAME, None) or {}).get("ENTITIES") or {}
    raw.update(inline)
    return parse_entities(raw)


_settings: Optional[TranslationSettings] = None
_registry: Optional[TranslatableRegistry] = None


def configure() -> Tuple[TranslationSettings, TranslatableRegistry]:
    """(Re)load settings and registry. Called from AppConfig.ready()."""
    global _settings, _registry
    _settings = load_settings()
    _registry = load_registry(_settings)
    logger.info(
        "Loaded %d translatable entities (auto_translate=%s)",
        len(_registry),
        _settings.auto_translate,
    )
    return _settings, _registry


def get_translation_settings() -> TranslationSettings:
    if _settings is None:
        configure()
    return _settings


def get_registry() -> TranslatableRegistry:
    if _registry is None:
        configure()
    return _registry
