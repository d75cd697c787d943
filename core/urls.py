"""
URLs do dashboard.
"""
from django.urls import path, re_path
from django.views.generic import RedirectView

from . import frontend_views
from .views import health_check

urlpatterns = [
    path('', RedirectView.as_view(pattern_name='dashboard', permanent=False)),
    path('health/', health_check, name='health'),
    path('login/', frontend_views.login_view, name='login'),
    path('logout/', frontend_views.logout_view, name='logout'),
    path('dashboard/', frontend_views.dashboard_view, name='dashboard'),
    re_path(
        r'^(?P<secao>(comercial|suprimentos|pcp|producao|qualidade|configuracoes)(/[\w-]+)*)/?$',
        frontend_views.secao_view,
        name='secao',
    ),
]
