"""
Management command to machine-translate missing locales of a translatable entity.

Usage:
    python manage.py backfill_translations --alias article --source en --locales fr,de
"""

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils import translation

from entity_translations.conf import normalize_locale
from entity_translations.services.machine import (
    backfill_entity,
    get_model_name,
    get_openrouter_client,
)
from entity_translations.services.translator import get_translator


class Command(BaseCommand):
    help = 'Fill missing translations of an entity alias using machine translation'

    def add_arguments(self, parser):
        parser.add_argument(
            '--alias',
            required=True,
            help='Translatable alias to backfill (e.g. article)',
        )
        parser.add_argument(
            '--source',
            default=None,
            help='Locale the source text is read in (default: LANGUAGE_CODE)',
        )
        parser.add_argument(
            '--locales',
            default=None,
            help='Comma-separated target locales (default: configured LOCALES or LANGUAGES)',
        )
        parser.add_argument(
            '--model',
            default=None,
            help='Chat completion model name (default: ENTITY_TRANSLATIONS_MT_MODEL)',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show how many values would be translated without calling the API',
        )

    def _target_locales(self, translator, option):
        if option:
            codes = [code.strip() for code in option.split(',') if code.strip()]
        elif translator.settings.locales is not None:
            codes = list(translator.settings.locales)
        else:
            codes = [code for code, _ in settings.LANGUAGES]
        return [normalize_locale(code) for code in codes]

    def handle(self, *args, **options):
        translator = get_translator()
        config = translator.registry.for_alias(options['alias'])
        if config is None:
            raise CommandError(f"Unknown translatable alias: {options['alias']}")

        source = normalize_locale(options['source'] or settings.LANGUAGE_CODE)
        targets = [loc for loc in self._target_locales(translator, options['locales']) if loc != source]
        if not targets:
            raise CommandError('No target locales to backfill')

        dry_run = options['dry_run']
        client = None
        if not dry_run:
            client = get_openrouter_client()
            if client is None:
                self.stdout.write(
                    self.style.WARNING('OPENROUTER_API_KEY not set; nothing translated')
                )
                return

        model = options['model'] or get_model_name()
        totals = {"translated": 0, "skipped": 0, "failed": 0}
        # Instances load in the source locale so getters return source text.
        with translation.override(source):
            for entity in config.model._default_manager.iterator():
                if config.get_id(entity) is None:
                    continue
                counts = backfill_entity(
                    translator, entity, client, source, targets, model=model, dry_run=dry_run
                )
                for key, value in counts.items():
                    totals[key] += value

        prefix = 'DRY RUN: Would translate' if dry_run else 'Translated'
        style = self.style.WARNING if dry_run or totals['failed'] else self.style.SUCCESS
        self.stdout.write(
            style(
                f"{prefix} {totals['translated']} values for {config.alias} "
                f"({totals['skipped']} empty, {totals['failed']} failed)"
            )
        )
