from entity_translations.models import TranslationEntry
from entity_translations.services import store


class TestTranslationStore:
    def test_get_missing_returns_none(self):
        assert store.get_translation("article", "1", "fr", "title") is None

    def test_save_then_get(self):
        store.save_translation("article", 1, "fr", "title", "Bonjour")
        assert store.get_translation("article", "1", "fr", "title") == "Bonjour"

    def test_entity_id_is_stringified(self):
        store.save_translation("article", 42, "fr", "title", "Bonjour")
        entry = TranslationEntry.objects.get()
        assert entry.entity_id == "42"
        assert str(entry) == "article:42:fr:title"

    def test_upsert_overwrites(self):
        store.save_translation("article", "1", "fr", "title", "Bonjour")
        store.save_translation("article", "1", "fr", "title", "Salut")
        assert TranslationEntry.objects.count() == 1
        assert store.get_translation("article", "1", "fr", "title") == "Salut"

    def test_keys_are_isolated(self):
        store.save_translation("article", "1", "fr", "title", "Article FR")
        store.save_translation("article", "2", "fr", "title", "Other")
        store.save_translation("product", "1", "fr", "title", "Product FR")
        store.save_translation("article", "1", "de", "title", "Article DE")
        assert store.get_translations("article", "1", "fr") == {"title": "Article FR"}
        assert store.get_translations("product", "1", "fr") == {"title": "Product FR"}

    def test_save_many_and_get_all(self):
        written = store.save_translations(
            "article",
            "7",
            {"fr": {"title": "Bonjour", "summary": "Résumé"}, "de": {"title": "Hallo"}},
        )
        assert written == 3
        assert store.get_all_translations("article", "7") == {
            "fr": {"title": "Bonjour", "summary": "Résumé"},
            "de": {"title": "Hallo"},
        }

    def test_get_all_empty(self):
        assert store.get_all_translations("article", "404") == {}

    def test_delete_by_locale_and_field(self):
        store.save_translations(
            "article", "1", {"fr": {"title": "A", "summary": "B"}, "de": {"title": "C"}}
        )
        assert store.delete_translations("article", "1", locale="fr", field_name="summary") == 1
        assert store.delete_translations("article", "1", locale="de") == 1
        assert store.get_all_translations("article", "1") == {"fr": {"title": "A"}}
        assert store.delete_translations("article", "1") == 1
        assert TranslationEntry.objects.count() == 0
