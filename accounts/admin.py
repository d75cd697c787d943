from django.contrib import admin

from .models import Perfil, Vendedor


@admin.register(Perfil)
class PerfilAdmin(admin.ModelAdmin):
    """Perfil de acesso de cada usuário."""
    list_display = ['usuario', 'role', 'created_at']
    list_filter = ['role']
    search_fields = ['usuario__username', 'usuario__email', 'usuario__first_name']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Vendedor)
class VendedorAdmin(admin.ModelAdmin):
    list_display = ['nome', 'usuario', 'created_at']
    search_fields = ['usuario__username', 'usuario__email', 'usuario__first_name']
    readonly_fields = ['created_at']
