"""
Numeração sequencial de documentos (propostas, ordens de serviço, visitas).

Formatos:
    PROP-000001, OS-000001           (sequência global por prefixo)
    19/10/2026-0001                   (sequência diária das visitas técnicas)

O campo ``numero`` de cada modelo é único no banco. O próximo número parte
do maior já gravado com o mesmo prefixo; se outra requisição gravar o mesmo
número antes, o IntegrityError é capturado dentro de um savepoint e o
cálculo é refeito.
"""
import logging

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models.functions import Length

logger = logging.getLogger(__name__)

MAX_TENTATIVAS = 5


def proximo_numero(model, prefixo, largura, campo='numero'):
    """
    Retorna o próximo número livre para ``prefixo`` (ex.: 'OS-' -> 'OS-000007').

    Busca só o maior número gravado. Os sufixos têm zeros à esquerda, então
    ordenar por tamanho e depois pelo texto equivale à ordem numérica.
    """
    maior = (
        model.objects
        .filter(**{f'{campo}__startswith': prefixo})
        .annotate(tamanho_numero=Length(campo))
        .order_by('-tamanho_numero', f'-{campo}')
        .values_list(campo, flat=True)
        .first()
    )
    sufixo = maior[len(prefixo):] if maior else ''
    atual = int(sufixo) if sufixo.isdigit() else 0
    return f"{prefixo}{atual + 1:0{largura}d}"


def salvar_com_numero(instancia, prefixo, largura, campo='numero', tentativas=MAX_TENTATIVAS):
    """
    Atribui um número sequencial à instância e salva.

    Repete o cálculo quando o número colide com outro gravado em paralelo.
    IntegrityError de outras constraints é propagado sem nova tentativa.
    """
    model = type(instancia)
    for tentativa in range(1, tentativas + 1):
        numero = proximo_numero(model, prefixo, largura, campo)
        setattr(instancia, campo, numero)
        try:
            with transaction.atomic():
                instancia.save()
            return instancia
        except IntegrityError:
            if not model.objects.filter(**{campo: numero}).exclude(pk=instancia.pk).exists():
                raise
            logger.warning(
                f"Número {numero} de {model.__name__} já utilizado "
                f"(tentativa {tentativa}/{tentativas}), recalculando"
            )
            if instancia._state.adding:
                instancia.pk = None
    raise ValidationError(
        f"Não foi possível gerar um número único para {model._meta.verbose_name}. Tente novamente."
    )


def prefixo_diario(data):
    """Prefixo da numeração diária: 'DD/MM/AAAA-'."""
    return f"{data.strftime('%d/%m/%Y')}-"
