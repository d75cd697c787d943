"""
Mixins compartilhados pelos ViewSets da API.
"""
from django.core.exceptions import ValidationError
from django.http import Http404
from django.utils import timezone
from django.utils.dateparse import parse_date
from rest_framework.exceptions import NotFound

from .datas import validar_mes_ano


class MensagemNaoEncontradoMixin:
    """
    Troca o 404 genérico do DRF por uma mensagem do recurso.

    Ex.: ``mensagem_nao_encontrado = 'Cliente não encontrado'``.
    """
    mensagem_nao_encontrado = 'Registro não encontrado'

    def get_object(self):
        try:
            return super().get_object()
        except Http404:
            raise NotFound(self.mensagem_nao_encontrado)


def parametro_int(request, nome, padrao=None):
    """Lê um query param inteiro; valores inválidos viram o padrão."""
    valor = request.query_params.get(nome)
    if valor in (None, ''):
        return padrao
    try:
        return int(valor)
    except (TypeError, ValueError):
        return padrao


def parametro_mes_ano(request):
    """?mes=&ano= dos relatórios mensais (padrão: mês atual). Fora da faixa -> 400."""
    hoje = timezone.localdate()
    mes = parametro_int(request, 'mes', hoje.month)
    ano = parametro_int(request, 'ano', hoje.year)
    validar_mes_ano(mes, ano)
    return mes, ano


def parametro_data(request, nome):
    """Lê um query param de data (AAAA-MM-DD). Data mal formatada -> 400."""
    valor = request.query_params.get(nome)
    if not valor:
        return None
    try:
        data = parse_date(valor[:10])
    except ValueError:
        data = None
    if data is None:
        raise ValidationError(f"Data inválida em '{nome}': {valor}")
    return data
