from django.urls import path

from . import views

app_name = "entity_translations"

urlpatterns = [
    path(
        "translations/<str:alias>/<str:entity_id>/",
        views.entity_translations,
        name="entity-translations",
    ),
]
