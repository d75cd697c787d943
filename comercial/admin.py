from django.contrib import admin

from .models import (
    Cliente,
    ClienteAnotacao,
    LiberacaoCusto,
    MetaVenda,
    OrdemServico,
    Proposta,
    Venda,
)


@admin.register(Cliente)
class ClienteAdmin(admin.ModelAdmin):
    list_display = ['nome', 'cnpj', 'cidade', 'estado', 'vendedor', 'ativo']
    list_filter = ['ativo', 'estado']
    search_fields = ['nome', 'razao_social', 'cnpj', 'cidade']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(ClienteAnotacao)
class ClienteAnotacaoAdmin(admin.ModelAdmin):
    list_display = ['cliente', 'vendedor', 'created_at']
    search_fields = ['cliente__nome', 'texto']
    readonly_fields = ['created_at']


class LiberacaoCustoInline(admin.StackedInline):
    model = LiberacaoCusto
    extra = 0
    readonly_fields = ['data_aprovacao', 'aprovado_por']


@admin.register(Proposta)
class PropostaAdmin(admin.ModelAdmin):
    """Número e margem são calculados pelo serviço."""
    list_display = ['numero', 'cliente', 'vendedor', 'valor', 'margem', 'categoria', 'status', 'created_at']
    list_filter = ['status', 'categoria']
    search_fields = ['numero', 'cliente__nome']
    readonly_fields = ['numero', 'margem', 'created_at', 'updated_at']
    inlines = [LiberacaoCustoInline]


@admin.register(OrdemServico)
class OrdemServicoAdmin(admin.ModelAdmin):
    list_display = ['numero', 'cliente', 'proposta', 'valor_total', 'status', 'data_previsao', 'data_fechamento']
    list_filter = ['status']
    search_fields = ['numero', 'cliente__nome']
    readonly_fields = ['numero', 'data_fechamento', 'created_at', 'updated_at']


@admin.register(Venda)
class VendaAdmin(admin.ModelAdmin):
    list_display = ['vendedor', 'ordem_servico', 'data', 'valor', 'categoria', 'semana']
    list_filter = ['categoria', 'semana']
    date_hierarchy = 'data'


@admin.register(MetaVenda)
class MetaVendaAdmin(admin.ModelAdmin):
    list_display = ['vendedor', 'mes', 'ano', 'categoria', 'valor_meta']
    list_filter = ['ano', 'mes', 'categoria']
