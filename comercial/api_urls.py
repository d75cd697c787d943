"""
URLs da API REST do módulo Comercial.
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import (
    ClienteAnotacaoViewSet,
    ClienteViewSet,
    MetaViewSet,
    OrdemServicoViewSet,
    PropostaViewSet,
    VendaViewSet,
)

router = DefaultRouter()
router.register(r'clientes', ClienteViewSet, basename='cliente')
router.register(r'anotacoes', ClienteAnotacaoViewSet, basename='anotacao')
router.register(r'propostas', PropostaViewSet, basename='proposta')
router.register(r'ordens-servico', OrdemServicoViewSet, basename='ordem-servico')
router.register(r'vendas', VendaViewSet, basename='venda')
router.register(r'metas', MetaViewSet, basename='meta')

urlpatterns = [
    path('', include(router.urls)),
]
