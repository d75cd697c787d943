"""
URL configuration for Tractus.

Estrutura de URLs:
  /                -> Páginas do dashboard (login, painel, seções por perfil)
  /health/         -> Verificação de saúde
  /api/auth/       -> Login por token, usuário atual, logout
  /api/            -> Recursos REST (usuários, vendedores, comercial, inspeção, frota, IA)
  /admin/          -> Django Admin
"""
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

urlpatterns = [
    path('admin/', admin.site.urls),

    # === API REST ===
    path('api/auth/', include('accounts.auth_urls')),
    path('api/', include('accounts.api_urls')),
    path('api/', include('comercial.api_urls')),
    path('api/', include('inspecao.api_urls')),
    path('api/', include('frota.api_urls')),
    path('api/', include('core.api_urls')),

    # === Dashboard ===
    path('', include('core.urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
