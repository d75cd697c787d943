"""
Sinais do app accounts.

- Todo usuário novo recebe um Perfil (padrão COMERCIAL; superusuário ADMIN).
- O Group do Django acompanha o perfil, para uso no Admin.
"""
import logging

from django.conf import settings
from django.contrib.auth.models import Group
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import Perfil
from .perfis import PERFIS

logger = logging.getLogger(__name__)


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def criar_perfil_usuario(sender, instance, created, **kwargs):
    """Cria o Perfil quando o usuário é criado."""
    if not created:
        return
    role = PERFIS.ADMIN if instance.is_superuser else PERFIS.COMERCIAL
    Perfil.objects.get_or_create(usuario=instance, defaults={'role': role})


@receiver(post_save, sender=Perfil)
def sincronizar_grupo_perfil(sender, instance, **kwargs):
    """Mantém o usuário apenas no Group correspondente ao seu perfil."""
    usuario = instance.usuario
    nome_grupo = PERFIS.LABELS.get(instance.role, instance.role)
    grupo, _ = Group.objects.get_or_create(name=nome_grupo)

    outros = usuario.groups.filter(name__in=PERFIS.LABELS.values()).exclude(pk=grupo.pk)
    if outros.exists():
        usuario.groups.remove(*outros)
    usuario.groups.add(grupo)
    logger.info(f"Usuário {usuario.username} sincronizado com o grupo '{nome_grupo}'")
