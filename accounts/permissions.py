"""
Permissões por perfil para a API do Tractus.
"""
from rest_framework import permissions

from .perfis import PERFIS


def perfil_de(user):
    """Role do usuário autenticado (superusuário conta como ADMIN)."""
    if not user or not user.is_authenticated:
        return None
    if user.is_superuser:
        return PERFIS.ADMIN
    perfil = getattr(user, 'perfil', None)
    return perfil.role if perfil else None


class PerfilPermission(permissions.BasePermission):
    """
    Libera a view apenas para os perfis listados em ``perfis``.

    Subclasses definem ``perfis`` e, opcionalmente, ``apenas_escrita``
    para deixar leituras (GET/HEAD/OPTIONS) abertas a qualquer autenticado.
    """
    perfis = ()
    apenas_escrita = False
    message = 'Seu perfil não tem permissão para esta operação.'

    def has_permission(self, request, view):
        if not (request.user and request.user.is_authenticated):
            return False
        if self.apenas_escrita and request.method in permissions.SAFE_METHODS:
            return True
        return perfil_de(request.user) in self.perfis


class PodeAdministrarUsuarios(PerfilPermission):
    """ADMIN, DIRETOR e RH gerenciam usuários."""
    perfis = PERFIS.ADMINISTRA_USUARIOS
    message = 'Apenas administradores, diretores e RH podem gerenciar usuários.'


class PodeAprovarDespesas(PerfilPermission):
    """Aprovação/reprovação de despesas de veículo."""
    perfis = PERFIS.APROVA_DESPESAS
    message = 'Apenas administradores, diretores e financeiro podem aprovar despesas.'


class PodeAprovarCustos(PerfilPermission):
    """Decisão sobre liberação de custo de propostas."""
    perfis = PERFIS.APROVA_CUSTOS
    message = 'Apenas administradores, diretores e orçamento podem decidir liberações de custo.'


class PodeConfigurarManutencao(PerfilPermission):
    """Intervalos de manutenção: leitura livre, alteração pela gestão."""
    perfis = PERFIS.GESTAO
    apenas_escrita = True
