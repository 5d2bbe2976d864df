import json

import pytest
from django.contrib.auth import get_user_model
from django.test import Client

from entity_translations.models import TranslationEntry


@pytest.fixture
def client():
    return Client()


@pytest.fixture
def editor_client():
    user = get_user_model().objects.create_superuser("editor", "editor@example.com", "secret")
    client = Client()
    client.force_login(user)
    return client


def _url(alias, entity_id):
    return f"/api/translations/{alias}/{entity_id}/"


class TestReadTranslations:
    def test_get_all_locales(self, client, translator, article):
        translator.save(article, {"fr": {"title": "Bonjour"}, "de": {"title": "Hallo"}})

        resp = client.get(_url("article", article.pk))

        assert resp.status_code == 200
        assert resp.json() == {
            "alias": "article",
            "entity_id": str(article.pk),
            "translations": {"fr": {"title": "Bonjour"}, "de": {"title": "Hallo"}},
        }

    def test_get_single_locale(self, client, translator, article):
        translator.save(article, {"fr": {"title": "Bonjour"}, "de": {"title": "Hallo"}})

        resp = client.get(_url("article", article.pk), {"locale": "FR"})

        assert resp.status_code == 200
        assert resp.json()["translations"] == {"fr": {"title": "Bonjour"}}

    def test_get_locale_without_values(self, client, article):
        resp = client.get(_url("article", article.pk), {"locale": "de"})
        assert resp.json()["translations"] == {"de": {}}

    def test_unknown_alias(self, client):
        resp = client.get(_url("nope", 1))
        assert resp.status_code == 404
        assert "Unknown alias" in resp.json()["error"]

    def test_unknown_entity(self, client):
        assert client.get(_url("article", 999)).status_code == 404
        assert client.get(_url("article", "not-a-number")).status_code == 404

    def test_custom_id_lookup(self, client, translator, product):
        translator.save(product, {"fr": {"name": "Chaise"}})
        resp = client.get(_url("product", "SKU-1"))
        assert resp.status_code == 200
        assert resp.json()["translations"] == {"fr": {"name": "Chaise"}}
        assert client.get(_url("product", "SKU-404")).status_code == 404

    def test_unsupported_locale(self, client, article):
        resp = client.get(_url("article", article.pk), {"locale": "ja"})
        assert resp.status_code == 400

    def test_method_not_allowed(self, client, article):
        assert client.post(_url("article", article.pk)).status_code == 405


class TestWriteTranslations:
    def test_put_requires_login(self, client, article):
        resp = client.put(
            _url("article", article.pk),
            data=json.dumps({"translations": {"fr": {"title": "Bonjour"}}}),
            content_type="application/json",
        )
        assert resp.status_code == 401
        assert TranslationEntry.objects.count() == 0

    def test_put_requires_permission(self, article):
        user = get_user_model().objects.create_user("reader", password="secret")
        client = Client()
        client.force_login(user)
        resp = client.put(
            _url("article", article.pk),
            data=json.dumps({"translations": {"fr": {"title": "Bonjour"}}}),
            content_type="application/json",
        )
        assert resp.status_code == 403

    def test_put_saves_and_returns_state(self, editor_client, translator, article):
        translator.save(article, {"de": {"title": "Hallo"}})

        resp = editor_client.put(
            _url("article", article.pk),
            data=json.dumps({"translations": {"fr": {"title": "Bonjour", "unknown": "x"}}}),
            content_type="application/json",
        )

        assert resp.status_code == 200
        body = resp.json()
        assert body["written"] == 1
        assert body["translations"] == {"de": {"title": "Hallo"}, "fr": {"title": "Bonjour"}}

    def test_put_invalid_json(self, editor_client, article):
        resp = editor_client.put(
            _url("article", article.pk), data="{not json", content_type="application/json"
        )
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid JSON"

    def test_put_invalid_shape(self, editor_client, article):
        resp = editor_client.put(
            _url("article", article.pk),
            data=json.dumps({"translations": {"fr": "Bonjour"}}),
            content_type="application/json",
        )
        assert resp.status_code == 400

    def test_put_unsupported_locale(self, editor_client, article):
        resp = editor_client.put(
            _url("article", article.pk),
            data=json.dumps({"translations": {"ja": {"title": "こんにちは"}}}),
            content_type="application/json",
        )
        assert resp.status_code == 400
        assert TranslationEntry.objects.count() == 0

    def test_delete_locale(self, editor_client, translator, article):
        translator.save(article, {"fr": {"title": "Bonjour"}, "de": {"title": "Hallo"}})

        resp = editor_client.delete(_url("article", article.pk) + "?locale=fr")

        assert resp.status_code == 200
        assert resp.json() == {"deleted": 1}
        assert translator.get_translations(article) == {"de": {"title": "Hallo"}}

    def test_delete_requires_login(self, client, translator, article):
        translator.save(article, {"fr": {"title": "Bonjour"}})
        assert client.delete(_url("article", article.pk)).status_code == 401
        assert TranslationEntry.objects.count() == 1


class TestEntityIdResolution:
    def test_zero_padded_pk_keys_on_real_id(self, editor_client, translator, article):
        padded = f"0{article.pk}"

        resp = editor_client.put(
            _url("article", padded),
            data=json.dumps({"translations": {"fr": {"title": "Bonjour"}}}),
            content_type="application/json",
        )

        assert resp.status_code == 200
        assert resp.json()["entity_id"] == str(article.pk)
        assert list(TranslationEntry.objects.values_list("entity_id", flat=True)) == [str(article.pk)]
        assert translator.get_translations(article) == {"fr": {"title": "Bonjour"}}

    def test_get_and_delete_use_real_id(self, editor_client, translator, article):
        translator.save(article, {"fr": {"title": "Bonjour"}})
        padded = f"00{article.pk}"

        resp = editor_client.get(_url("article", padded))
        assert resp.json()["translations"] == {"fr": {"title": "Bonjour"}}

        assert editor_client.delete(_url("article", padded)).json() == {"deleted": 1}
        assert translator.get_translations(article) == {}


class TestPayloadValues:
    @pytest.mark.parametrize("value", [{"x": [1]}, ["Bonjour"], 42, True])
    def test_non_string_values_rejected(self, editor_client, article, value):
        resp = editor_client.put(
            _url("article", article.pk),
            data=json.dumps({"translations": {"fr": {"title": value}}}),
            content_type="application/json",
        )
        assert resp.status_code == 400
        assert TranslationEntry.objects.count() == 0

    def test_null_values_are_skipped(self, editor_client, translator, article):
        resp = editor_client.put(
            _url("article", article.pk),
            data=json.dumps({"translations": {"fr": {"title": "Bonjour", "summary": None}}}),
            content_type="application/json",
        )
        assert resp.status_code == 200
        assert resp.json()["written"] == 1
        assert translator.get_translations(article) == {"fr": {"title": "Bonjour"}}
