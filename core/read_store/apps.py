from django.apps import AppConfig


class ReadStoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.read_store"
    label = "read_store"
    verbose_name = "GSL Read Store"
