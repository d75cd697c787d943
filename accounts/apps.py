from django.apps import AppConfig


class AccountsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'accounts'
    verbose_name = 'Usuários e Vendedores'

    def ready(self):
        """Registra os sinais quando a app é carregada."""
        import accounts.signals  # noqa
