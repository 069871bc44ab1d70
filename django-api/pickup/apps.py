from django.apps import AppConfig


class PickupConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "pickup"

    def ready(self) -> None:
        from pickup import signals  # noqa: F401
