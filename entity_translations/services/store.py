"""
Translation store: ``{alias, entity_id, locale, field_name} -> value``.

Thin key-value layer over TranslationEntry. It does not know about entity
classes or field declarations; that is the translator's job.
"""
import logging
from collections import defaultdict
from typing import Dict, Mapping, Optional

from django.db import transaction

from ..models import TranslationEntry

logger = logging.getLogger(__name__)


def get_translation(alias: str, entity_id, locale: str, field_name: str) -> Optional[str]:
    try:
        entry = TranslationEntry.objects.get(
            alias=alias,
            entity_id=str(entity_id),
            locale=locale,
            field_name=field_name,
        )
        return entry.value
    except TranslationEntry.DoesNotExist:
        return None


def get_translations(alias: str, entity_id, locale: str) -> Dict[str, str]:
    """All stored field values of one entity in one locale."""
    rows = TranslationEntry.objects.filter(
        alias=alias, entity_id=str(entity_id), locale=locale
    ).values_list("field_name", "value")
    return dict(rows)


def get_all_translations(alias: str, entity_id) -> Dict[str, Dict[str, str]]:
    """All stored values of one entity, grouped by locale."""
    result: Dict[str, Dict[str, str]] = defaultdict(dict)
    rows = TranslationEntry.objects.filter(alias=alias, entity_id=str(entity_id)).values_list(
        "locale", "field_name", "value"
    )
    for locale, field_name, value in rows:
        result[locale][field_name] = value
    return dict(result)


def save_translation(alias: str, entity_id, locale: str, field_name: str, value: str) -> None:
    """Upsert one value. Last write wins."""
    TranslationEntry.objects.update_or_create(
        alias=alias,
        entity_id=str(entity_id),
        locale=locale,
        field_name=field_name,
        defaults={"value": value},
    )


def save_translations(
    alias: str, entity_id, translations_by_locale: Mapping[str, Mapping[str, str]]
) -> int:
    """Upsert every ``locale -> field -> value`` in one transaction. Returns the count written."""
    written = 0
    with transaction.atomic():
        for locale, values in translations_by_locale.items():
            for field_name, value in values.items():
                save_translation(alias, entity_id, locale, field_name, value)
                written += 1
    logger.debug("Saved %d translations for %s:%s", written, alias, entity_id)
    return written


def delete_translations(
    alias: str, entity_id, locale: Optional[str] = None, field_name: Optional[str] = None
) -> int:
    qs = TranslationEntry.objects.filter(alias=alias, entity_id=str(entity_id))
    if locale is not None:
        qs = qs.filter(locale=locale)
    if field_name is not None:
        qs = qs.filter(field_name=field_name)
    deleted, _ = qs.delete()
    return deleted
