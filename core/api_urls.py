"""
URLs da API do núcleo (IA).
"""
from django.urls import path

from .views import corrigir_texto_api

urlpatterns = [
    path('ai/corrigir-texto/', corrigir_texto_api, name='api-corrigir-texto'),
]
