"""
Form integration: one input per translatable field and locale, saved together
when the form is saved.

    class ArticleForm(TranslatableModelFormMixin, forms.ModelForm):
        class Meta:
            model = Article
            fields = ["slug"]

    form = ArticleForm(data={"slug": "hello", "title__fr": "Bonjour", "title__de": "Hallo"})
    form.is_valid() and form.save()
"""
import logging
from typing import Dict, List, Optional

from django import forms
from django.conf import settings
from django.db import transaction

from .conf import normalize_locale
from .exceptions import UnsupportedLocaleError
from .services.translator import get_translator

logger = logging.getLogger(__name__)


class TranslatableModelFormMixin:
    translation_locales: Optional[List[str]] = None
    translation_widget = forms.Textarea(attrs={"rows": 2})

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.translator = get_translator()
        self.translation_config = self.translator.get_config(self._meta.model)

        existing: Dict[str, Dict[str, str]] = {}
        if self.translation_config.get_id(self.instance) is not None:
            existing = self.translator.get_translations(self.instance)

        for field_name in self.translation_config.fields:
            for locale in self.get_translation_locales():
                self.fields[self.translation_field_name(field_name, locale)] = forms.CharField(
                    label=f"{field_name} ({locale})",
                    required=False,
                    widget=self.translation_widget,
                    initial=existing.get(locale, {}).get(field_name),
                )

    def get_translation_locales(self) -> List[str]:
        if self.translation_locales is not None:
            locales = self.translation_locales
        elif self.translator.settings.locales is not None:
            locales = self.translator.settings.locales
        else:
            locales = [code for code, _ in settings.LANGUAGES]
        locales = [normalize_locale(code) for code in locales]
        unsupported = [code for code in locales if not self.translator.settings.is_supported(code)]
        if unsupported:
            raise UnsupportedLocaleError(f"Unsupported form locales: {', '.join(unsupported)}")
        return locales

    def translation_field_name(self, field_name: str, locale: str) -> str:
        return f"{field_name}{self.translator.settings.form_field_separator}{locale}"

    def get_submitted_translations(self) -> Dict[str, Dict[str, str]]:
        """``locale -> field -> value`` from cleaned_data; blank inputs are skipped."""
        submitted: Dict[str, Dict[str, str]] = {}
        for field_name in self.translation_config.fields:
            for locale in self.get_translation_locales():
                value = self.cleaned_data.get(self.translation_field_name(field_name, locale))
                if value in (None, ""):
                    continue
                submitted.setdefault(locale, {})[field_name] = value
        return submitted

    def save_translations(self) -> int:
        """Store submitted translations. Call after the instance has been saved."""
        return self.translator.save(self.instance, self.get_submitted_translations())

    def save(self, commit=True):
        if not commit:
            return super().save(commit=False)
        # The row and its translations are written together or not at all.
        with transaction.atomic():
            instance = super().save(commit=True)
            written = self.save_translations()
            logger.debug("Form saved %d translations for %s", written, self.translation_config.alias)
        return instance
