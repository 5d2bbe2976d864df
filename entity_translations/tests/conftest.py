import os
import sys
from pathlib import Path

import pytest

# Setup path and Django settings before any Django imports
ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "sandbox.settings")

import django
django.setup()

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.core.management import call_command
from django.utils import translation

from entity_translations.models import TranslationEntry
from entity_translations.services.translator import get_translator
from sandbox.models import Article, Product, Tag


@pytest.fixture(scope="session", autouse=True)
def django_schema():
    """Create tables in the in-memory SQLite database once per session."""
    call_command("migrate", run_syncdb=True, verbosity=0, interactive=False)


@pytest.fixture(autouse=True)
def clean_state(django_schema):
    translation.activate("en")
    yield
    translation.deactivate()
    for model in (TranslationEntry, Article, Product, Tag, get_user_model()):
        model.objects.all().delete()
    cache.clear()


@pytest.fixture
def translator():
    return get_translator()


@pytest.fixture
def article():
    return Article.objects.create(slug="hello-world")


@pytest.fixture
def product():
    return Product.objects.create(sku="SKU-1", price_cents=1999)
