"""
URLs da API REST de despesas de veículo.
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import DespesaVeiculoViewSet

router = DefaultRouter()
router.register(r'despesas-veiculo', DespesaVeiculoViewSet, basename='despesa-veiculo')

urlpatterns = [
    path('', include(router.urls)),
]
