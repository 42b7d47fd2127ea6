from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class StoreAppConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.storeapp"
    verbose_name = _("Store Management")
