from django.apps import AppConfig


class InventoryConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.inventory"
    verbose_name = "Inventory"

    def ready(self):
        """
        Register the app's IPC channels when the app is ready.
        """
        import apps.inventory.ipc  # noqa: F401
