from django.db import models


class TranslationEntry(models.Model):
    alias = models.CharField(max_length=64)  # e.g. 'article', 'product'
    entity_id = models.CharField(max_length=100)
    locale = models.CharField(max_length=16)  # normalised: 'en', 'pt-br'
    field_name = models.CharField(max_length=64)  # e.g. 'title', 'summary'
    value = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "entity_translations"
        unique_together = [["alias", "entity_id", "locale", "field_name"]]
        indexes = [models.Index(fields=["alias", "entity_id"], name="entity_translations_entity")]
        verbose_name = "translation"

    def __str__(self):
        return f"{self.alias}:{self.entity_id}:{self.locale}:{self.field_name}"
