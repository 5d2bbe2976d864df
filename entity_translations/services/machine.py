"""
Machine translation for locales that have no stored value yet.

Uses an OpenAI-compatible chat completion API (OpenRouter by default).
"""
import logging
import os
from typing import Dict, Iterable, Optional

from django.utils import translation
from openai import OpenAI, OpenAIError

from ..exceptions import MachineTranslationError

logger = logging.getLogger(__name__)

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "google/gemini-2.5-flash"


def get_openrouter_client() -> Optional[OpenAI]:
    api_key = os.environ.get("OPENROUTER_API_KEY")
    if not api_key:
        logger.warning("OPENROUTER_API_KEY not set, machine translation will not work")
        return None
    base_url = os.environ.get("OPENROUTER_BASE_URL", OPENROUTER_BASE_URL)
    return OpenAI(api_key=api_key, base_url=base_url)


def get_model_name() -> str:
    return os.environ.get("ENTITY_TRANSLATIONS_MT_MODEL", DEFAULT_MODEL)


def language_name(locale: str) -> str:
    try:
        return translation.get_language_info(locale)["name"]
    except KeyError:
        return locale


def translate_text(
    client: OpenAI, text: str, target_locale: str, source_locale: str, model: Optional[str] = None
) -> str:
    """Translate text with the chat completion API."""
    if not text or target_locale == source_locale:
        return text

    try:
        response = client.chat.completions.create(
            model=model or get_model_name(),
            messages=[
                {
                    "role": "system",
                    "content": f"You are a translator. Translate the following text from "
                    f"{language_name(source_locale)} to {language_name(target_locale)}. "
                    "Only output the translation, nothing else. Keep the same tone and style.",
                },
                {"role": "user", "content": text},
            ],
            temperature=0.3,
            max_tokens=1000,
        )
    except OpenAIError as e:
        raise MachineTranslationError(f"Translation request failed: {e}") from e

    content = response.choices[0].message.content if response.choices else None
    translated = (content or "").strip()
    if not translated:
        raise MachineTranslationError(f"Empty translation for {target_locale}")
    return translated


def backfill_entity(
    translator,
    entity,
    client: OpenAI,
    source_locale: str,
    target_locales: Iterable[str],
    model: Optional[str] = None,
    dry_run: bool = False,
) -> Dict[str, int]:
    """
    Machine-translate every declared field that has no value in a target locale.

    Source text is read through the field getters, so the entity should be
    loaded (or translated) in the source locale. Returns counts of
    ``translated``, ``skipped`` and ``failed`` values.
    """
    config = translator.get_config(entity)
    existing = translator.get_translations(entity)
    counts = {"translated": 0, "skipped": 0, "failed": 0}
    pending: Dict[str, Dict[str, str]] = {}

    for field_name in config.fields:
        source_text = config.get_value(entity, field_name)
        if not source_text:
            counts["skipped"] += 1
            continue
        for locale in target_locales:
            if locale == source_locale or field_name in existing.get(locale, {}):
                continue
            if dry_run:
                counts["translated"] += 1
                continue
            try:
                translated = translate_text(client, source_text, locale, source_locale, model)
            except MachineTranslationError as e:
                logger.error("Translation error for %s.%s (%s): %s", config.alias, field_name, locale, e)
                counts["failed"] += 1
                continue
            pending.setdefault(locale, {})[field_name] = translated
            counts["translated"] += 1

    if pending:
        translator.save(entity, pending)
    return counts
