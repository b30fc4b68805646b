# taste/models/settings.py
from django.db import models

SETTINGS_ID = 1


class TasteSettings(models.Model):
    """Fila única (id=1) con los umbrales del subsistema de gustos."""
    like_photos_threshold = models.FloatField(default=50.0)  # media de similitud (0-100) para dar like
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "taste_settings"
        verbose_name_plural = "taste settings"

    @classmethod
    def find_or_create(cls) -> "TasteSettings":
        settings, _ = cls.objects.get_or_create(pk=SETTINGS_ID)
        return settings

    def __str__(self):
        return f"Settings<{self.pk}> like>{self.like_photos_threshold}"
