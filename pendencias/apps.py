from django.apps import AppConfig


class PendenciasConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "pendencias"
    verbose_name = "Pendências"

    def ready(self):
        """
        Importa os signals quando a aplicação está pronta.
        """
        from . import signals  # noqa: F401
