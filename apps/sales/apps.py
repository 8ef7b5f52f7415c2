from django.apps import AppConfig


class SalesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.sales"
    verbose_name = "Sales"

    def ready(self):
        """
        Register the app's IPC channels when the app is ready.
        """
        import apps.sales.ipc  # noqa: F401
