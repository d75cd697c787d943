"""
Tratamento de erros da API Tractus.

Todas as respostas de erro seguem o formato ``{"error": "<mensagem>"}``.
Falhas de validação de serializer incluem também ``"detalhes"`` com os
erros por campo.

Regras de negócio violadas na camada de serviços levantam
``django.core.exceptions.ValidationError``; aqui elas viram HTTP 400.
"""
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _primeira_mensagem(detalhe):
    """Extrai a primeira mensagem legível de uma estrutura de erros do DRF."""
    if isinstance(detalhe, dict):
        for campo, valor in detalhe.items():
            mensagem = _primeira_mensagem(valor)
            if mensagem is None:
                continue
            if campo in ('non_field_errors', 'detail', 'error'):
                return mensagem
            return f"{campo}: {mensagem}"
        return None
    if isinstance(detalhe, (list, tuple)):
        for item in detalhe:
            mensagem = _primeira_mensagem(item)
            if mensagem is not None:
                return mensagem
        return None
    return str(detalhe)


def tractus_exception_handler(exc, context):
    """
    Exception handler do DRF (configurado em REST_FRAMEWORK['EXCEPTION_HANDLER']).

    - ValidationError do Django (regras de negócio) -> 400
    - Http404 / NotFound -> 404 com a mensagem do recurso
    - Demais APIException -> status original com {"error": ...}
    """
    if isinstance(exc, DjangoValidationError):
        mensagens = exc.messages
        mensagem = mensagens[0] if mensagens else 'Requisição inválida'
        logger.info(f"Regra de negócio violada em {context.get('view').__class__.__name__}: {mensagem}")
        return Response({'error': mensagem}, status=status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, Http404):
        exc = exceptions.NotFound('Registro não encontrado')

    response = exception_handler(exc, context)
    if response is None:
        return None

    detalhe = response.data
    if isinstance(exc, exceptions.ValidationError):
        response.data = {
            'error': _primeira_mensagem(detalhe) or 'Dados inválidos',
            'detalhes': detalhe,
        }
    else:
        response.data = {'error': _primeira_mensagem(detalhe) or 'Erro ao processar a requisição'}
    return response
