from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class CatalogmanConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "catalogman"
    verbose_name = _("Catálogo de Produtos")
