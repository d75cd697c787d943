"""
Context processors para disponibilizar dados globais em todos os templates.
"""
from accounts.perfis import PERFIS
from accounts.permissions import perfil_de

from .navegacao import menu_para


def menu_lateral(request):
    """Menu lateral filtrado pelo perfil e o rótulo do perfil do usuário logado."""
    user = getattr(request, 'user', None)
    if not user or not user.is_authenticated:
        return {'menu_lateral': [], 'perfil_usuario': None, 'perfil_label': ''}

    perfil = perfil_de(user)
    return {
        'menu_lateral': menu_para(user),
        'perfil_usuario': perfil,
        'perfil_label': PERFIS.LABELS.get(perfil, ''),
    }
