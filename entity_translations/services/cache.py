"""
Cache helpers for translation lookups.

One entry per entity holds every locale's values, so a save or delete only has
to drop a single key.
"""
import hashlib
import logging
from typing import Dict, Optional

from django.core.cache import cache

logger = logging.getLogger(__name__)

PREFIX_ENTITY_TRANSLATIONS = "entity_translations"

# memcached rejects keys longer than 250 chars or containing whitespace
_MAX_KEY_PART = 64


def make_key(*parts) -> str:
    """Create a cache key from parts."""
    return ":".join(str(p) for p in parts)


def make_hash_key(*parts) -> str:
    """Create a hashed cache key for long/complex keys."""
    raw = ":".join(str(p) for p in parts)
    return hashlib.md5(raw.encode()).hexdigest()


def get_entity_cache_key(alias: str, entity_id) -> str:
    entity_id = str(entity_id)
    if len(entity_id) > _MAX_KEY_PART or any(c.isspace() for c in entity_id):
        entity_id = make_hash_key(entity_id)
    return make_key(PREFIX_ENTITY_TRANSLATIONS, alias, entity_id)


def get_cached_translations(alias: str, entity_id) -> Optional[Dict[str, Dict[str, str]]]:
    """Get cached ``locale -> field -> value`` for an entity."""
    cached = cache.get(get_entity_cache_key(alias, entity_id))
    logger.debug(
        "Translation cache %s for %s:%s", "hit" if cached is not None else "miss", alias, entity_id
    )
    return cached


def set_cached_translations(
    alias: str, entity_id, translations: Dict[str, Dict[str, str]], ttl: int
) -> None:
    cache.set(get_entity_cache_key(alias, entity_id), translations, ttl)


def invalidate_translations(alias: str, entity_id) -> None:
    cache.delete(get_entity_cache_key(alias, entity_id))
