"""
Accounts app - Usuários, Perfis e Vendedores

Modelos:
- User: padrão Django (django.contrib.auth.models.User). O username é o e-mail
  e o nome completo fica em first_name.
- Perfil: papel (role) e foto do usuário, 1:1 com User.
- Vendedor: representante comercial, 1:1 com User.
"""
from django.conf import settings
from django.db import models

from .perfis import PERFIS


class Perfil(models.Model):
    """Perfil de acesso do usuário. Define menu e permissões administrativas."""
    usuario = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='perfil',
        verbose_name='Usuário',
    )
    role = models.CharField(
        max_length=20,
        choices=PERFIS.CHOICES,
        default=PERFIS.COMERCIAL,
        verbose_name='Perfil',
        help_text='Define quais páginas e ações o usuário pode acessar',
    )
    foto = models.CharField(
        max_length=500,
        blank=True,
        verbose_name='Foto',
        help_text='URL da foto do usuário',
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Data de Atualização')

    class Meta:
        verbose_name = 'Perfil'
        verbose_name_plural = 'Perfis'
        ordering = ['usuario__first_name']

    def __str__(self):
        return f"{self.usuario.get_full_name() or self.usuario.username} ({self.get_role_display()})"


class Vendedor(models.Model):
    """Representante comercial vinculado a um usuário."""
    usuario = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='vendedor',
        verbose_name='Usuário',
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')

    class Meta:
        verbose_name = 'Vendedor'
        verbose_name_plural = 'Vendedores'
        ordering = ['usuario__first_name']

    def __str__(self):
        return self.nome

    @property
    def nome(self):
        return self.usuario.get_full_name() or self.usuario.username
