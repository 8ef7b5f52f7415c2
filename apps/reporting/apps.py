from django.apps import AppConfig


class ReportingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.reporting"
    verbose_name = "Reporting"

    def ready(self):
        """
        Register the app's IPC channels when the app is ready.
        """
        import apps.reporting.ipc  # noqa: F401
