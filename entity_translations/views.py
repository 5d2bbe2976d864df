import json
import logging

from django.core.exceptions import ValidationError
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from .conf import normalize_locale
from .exceptions import MissingEntityIdError, UnsupportedLocaleError
from .services.translator import get_translator

logger = logging.getLogger(__name__)

CHANGE_PERMISSION = "entity_translations.change_translationentry"


def _require_editor(request):
    """Check the user may edit translations, return an error response or None."""
    user = getattr(request, "user", None)
    if user is None or not user.is_authenticated:
        return JsonResponse({"error": "Unauthorized"}, status=401)
    if not user.has_perm(CHANGE_PERMISSION):
        return JsonResponse({"error": "Forbidden"}, status=403)
    return None


def _resolve_entity_id(config, raw_id):
    """
    Map the URL id onto the id the translator keys storage with.

    Returns None when no such entity exists. Ids whose getter is not a model
    field cannot be looked up and are used as given.
    """
    model = config.model
    lookup = config.id_getter
    if lookup != "pk":
        field_names = {f.name for f in model._meta.concrete_fields}
        if lookup not in field_names:
            return raw_id
    try:
        entity = model._default_manager.get(**{lookup: raw_id})
    except (model.DoesNotExist, model.MultipleObjectsReturned):
        return None
    except (ValueError, TypeError, ValidationError):
        return None
    return config.get_id(entity)


def _invalid_values(submitted) -> bool:
    for values in submitted.values():
        if not isinstance(values, dict):
            return True
        if any(value is not None and not isinstance(value, str) for value in values.values()):
            return True
    return False


def _payload(alias, entity_id, translations):
    return {"alias": alias, "entity_id": str(entity_id), "translations": translations}


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
def entity_translations(request, alias, entity_id):
    """
    Read or write the translations of one entity.

    GET    ?locale=fr -> {"alias", "entity_id", "translations": {locale: {field: value}}}
    PUT    {"translations": {locale: {field: value}}} (requires change permission)
    DELETE ?locale=fr -> {"deleted": n} (requires change permission)
    """
    translator = get_translator()
    config = translator.registry.for_alias(alias)
    if config is None:
        return JsonResponse({"error": f"Unknown alias: {alias}"}, status=404)
    entity_id = _resolve_entity_id(config, entity_id)
    if entity_id is None:
        return JsonResponse({"error": "Entity not found"}, status=404)

    locale = request.GET.get("locale")
    if locale:
        try:
            locale = normalize_locale(locale)
        except ValueError:
            return JsonResponse({"error": f"Invalid locale: {locale}"}, status=400)
        if not translator.settings.is_supported(locale):
            return JsonResponse({"error": f"Unsupported locale: {locale}"}, status=400)

    if request.method == "GET":
        translations = translator.translations_for(config, entity_id)
        if locale:
            translations = {locale: translations.get(locale, {})}
        return JsonResponse(_payload(alias, entity_id, translations))

    err = _require_editor(request)
    if err:
        return err

    if request.method == "DELETE":
        deleted = translator.delete_for(config, entity_id, locale or None)
        return JsonResponse({"deleted": deleted})

    try:
        data = json.loads(request.body)
    except json.JSONDecodeError:
        return JsonResponse({"error": "Invalid JSON"}, status=400)

    submitted = data.get("translations") if isinstance(data, dict) else None
    if not isinstance(submitted, dict) or _invalid_values(submitted):
        return JsonResponse(
            {"error": "translations must map locale -> {field: string}"}, status=400
        )

    try:
        written = translator.save_for(config, entity_id, submitted)
    except (UnsupportedLocaleError, MissingEntityIdError, ValueError) as e:
        return JsonResponse({"error": str(e)}, status=400)

    logger.info("Saved %d translations for %s:%s via API", written, alias, entity_id)
    return JsonResponse(
        {**_payload(alias, entity_id, translator.translations_for(config, entity_id)), "written": written}
    )
