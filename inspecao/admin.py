from django.contrib import admin

from .models import ComponenteInspecao, FotoComponente, LaudoInspecao, VisitaTecnica


@admin.register(VisitaTecnica)
class VisitaTecnicaAdmin(admin.ModelAdmin):
    list_display = ['numero', 'cliente', 'vendedor', 'inspetor', 'data_visita', 'status']
    list_filter = ['status']
    search_fields = ['numero', 'cliente__nome']
    date_hierarchy = 'data_visita'
    readonly_fields = ['numero', 'created_at', 'updated_at']


class ComponenteInspecaoInline(admin.TabularInline):
    model = ComponenteInspecao
    extra = 0
    readonly_fields = ['desgaste_le', 'desgaste_ld', 'status_le', 'status_ld']


class FotoComponenteInline(admin.TabularInline):
    model = FotoComponente
    extra = 0


@admin.register(LaudoInspecao)
class LaudoInspecaoAdmin(admin.ModelAdmin):
    """Desgastes são calculados pelo serviço ao gravar o laudo pela API."""
    list_display = ['visita', 'equipamento', 'numero_serie', 'inspetor', 'data_inspecao', 'status']
    list_filter = ['status', 'condicao_solo']
    search_fields = ['equipamento', 'numero_serie', 'visita__numero', 'visita__cliente__nome']
    readonly_fields = ['data_envio', 'created_at', 'updated_at']
    inlines = [ComponenteInspecaoInline, FotoComponenteInline]
