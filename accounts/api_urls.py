"""
URLs da API REST de usuários e vendedores.
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import UsuarioViewSet, VendedorViewSet

router = DefaultRouter()
router.register(r'users', UsuarioViewSet, basename='usuario')
router.register(r'vendedores', VendedorViewSet, basename='vendedor')

urlpatterns = [
    path('', include(router.urls)),
]
