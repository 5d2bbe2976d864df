from django.contrib import admin

from .models import TranslationEntry


@admin.register(TranslationEntry)
class TranslationEntryAdmin(admin.ModelAdmin):
    list_display = ("id", "alias", "entity_id", "locale", "field_name", "updated_at")
    list_filter = ("alias", "locale")
    search_fields = ("entity_id", "field_name", "value")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("alias", "entity_id", "locale", "field_name")
