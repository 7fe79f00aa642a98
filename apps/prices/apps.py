from django.apps import AppConfig


class PricesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.prices'
    verbose_name = 'Store prices'
