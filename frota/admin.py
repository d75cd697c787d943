from django.contrib import admin

from .models import ConfiguracaoManutencao, DespesaVeiculo


@admin.register(DespesaVeiculo)
class DespesaVeiculoAdmin(admin.ModelAdmin):
    list_display = ['vendedor', 'data', 'tipo', 'valor', 'km', 'status', 'aprovado_por']
    list_filter = ['status', 'tipo']
    search_fields = ['vendedor__usuario__first_name', 'vendedor__usuario__username']
    date_hierarchy = 'data'
    readonly_fields = ['aprovado_por', 'data_aprovacao', 'created_at', 'updated_at']


@admin.register(ConfiguracaoManutencao)
class ConfiguracaoManutencaoAdmin(admin.ModelAdmin):
    list_display = ['tipo', 'intervalo_km', 'updated_at']
