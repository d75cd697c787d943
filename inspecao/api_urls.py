"""
URLs da API REST de visitas técnicas e laudos de inspeção.
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import LaudoInspecaoViewSet, VisitaTecnicaViewSet

router = DefaultRouter()
router.register(r'visitas-tecnicas', VisitaTecnicaViewSet, basename='visita-tecnica')
router.register(r'laudos-inspecao', LaudoInspecaoViewSet, basename='laudo-inspecao')

urlpatterns = [
    path('', include(router.urls)),
]
