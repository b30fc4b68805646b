from django.apps import AppConfig


class TasteConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "taste"

    taste = None

    def ready(self):
        # Solo construye clientes; el provisioning se hace en el primer uso o en taste_start
        from taste.services.context import build_context
        from taste.services.taste import Taste

        self.taste = Taste(build_context())


def get_taste():
    from django.apps import apps
    return apps.get_app_config("taste").taste
