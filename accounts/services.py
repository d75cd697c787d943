"""
Services Layer para usuários e vendedores.

Regras:
- O e-mail é único (case-insensitive) e também é o username.
- Um usuário é vendedor no máximo uma vez.
"""
import logging
from typing import Optional

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import ProtectedError

from .models import Perfil, Vendedor

logger = logging.getLogger(__name__)

User = get_user_model()


class UsuarioService:
    """Criação e manutenção de usuários com perfil."""

    @staticmethod
    def _perfil(user) -> Perfil:
        """Perfil do usuário, mantendo o cache de `user.perfil` no mesmo objeto salvo."""
        perfil, _ = Perfil.objects.get_or_create(usuario=user)
        user.perfil = perfil
        return perfil

    @staticmethod
    def _email_em_uso(email: str, exceto_id: Optional[int] = None) -> bool:
        qs = User.objects.filter(email__iexact=email)
        if exceto_id is not None:
            qs = qs.exclude(pk=exceto_id)
        return qs.exists()

    @staticmethod
    @transaction.atomic
    def criar_usuario(nome: str, email: str, senha: str, role: str,
                      foto: str = '', ativo: bool = True):
        email = email.strip().lower()
        if UsuarioService._email_em_uso(email):
            raise ValidationError('Este email já está em uso')

        user = User.objects.create_user(
            username=email,
            email=email,
            password=senha,
            first_name=nome.strip(),
            is_active=ativo,
        )
        perfil = UsuarioService._perfil(user)
        perfil.role = role
        perfil.foto = foto or ''
        perfil.save()
        logger.info(f"Usuário {email} criado com perfil {role}")
        return user

    @staticmethod
    @transaction.atomic
    def atualizar_usuario(user, nome=None, email=None, senha=None, role=None,
                          foto=None, ativo=None):
        if email is not None:
            email = email.strip().lower()
            if UsuarioService._email_em_uso(email, exceto_id=user.pk):
                raise ValidationError('Este email já está em uso')
            user.email = email
            user.username = email
        if nome is not None:
            user.first_name = nome.strip()
        if senha:
            user.set_password(senha)
        if ativo is not None:
            user.is_active = ativo
        user.save()

        if role is not None or foto is not None:
            perfil = UsuarioService._perfil(user)
            if role is not None:
                perfil.role = role
            if foto is not None:
                perfil.foto = foto
            perfil.save()
        return user

    @staticmethod
    def tornar_vendedor(user) -> Vendedor:
        if Vendedor.objects.filter(usuario=user).exists():
            raise ValidationError('Usuário já é um vendedor')
        vendedor = Vendedor.objects.create(usuario=user)
        logger.info(f"Usuário {user.username} cadastrado como vendedor #{vendedor.id}")
        return vendedor

    @staticmethod
    def remover_vendedor(user) -> None:
        vendedor = Vendedor.objects.filter(usuario=user).first()
        if vendedor is None:
            raise ValidationError('Usuário não é um vendedor')
        try:
            vendedor.delete()
        except ProtectedError:
            raise ValidationError(
                "Vendedor possui clientes, propostas ou despesas vinculados e não pode ser removido"
            )
        logger.info(f"Usuário {user.username} removido de vendedores")
