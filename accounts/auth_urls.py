"""
URLs de autenticação da API (token).
"""
from django.urls import path

from .views import login_api, logout_api, me_api

urlpatterns = [
    path('login/', login_api, name='api-login'),
    path('me/', me_api, name='api-me'),
    path('logout/', logout_api, name='api-logout'),
]
