# taste/urls.py
from django.urls import path

from .views.taste_views import (
    CheckPhotosOutView, MentalSnapshotView, AcquireTasteView,
    SyncView, TasteSettingsView,
)
from .views.message_views import ReadMessagesView

urlpatterns = [
    # fotos
    path("photos/check-out/", CheckPhotosOutView.as_view(), name="taste-photos-check-out"),
    path("photos/snapshot/",  MentalSnapshotView.as_view(), name="taste-photos-snapshot"),

    # entrenamiento
    path("acquire/", AcquireTasteView.as_view(), name="taste-acquire"),
    path("sync/",    SyncView.as_view(),         name="taste-sync"),

    path("settings/", TasteSettingsView.as_view(), name="taste-settings"),
    path("messages/read/", ReadMessagesView.as_view(), name="taste-messages-read"),
]
