from django.apps import AppConfig


class ComercialConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'comercial'
    verbose_name = 'Comercial'
