"""
Utilitários de datas usados pelos relatórios mensais e agendas.
"""
from datetime import date

from django.core.exceptions import ValidationError

# date.weekday() -> nome em pt-BR
DIAS_SEMANA = (
    'segunda-feira', 'terça-feira', 'quarta-feira', 'quinta-feira',
    'sexta-feira', 'sábado', 'domingo',
)

# dezembro de ANO_MAXIMO ainda precisa do 1º de janeiro seguinte
ANO_MAXIMO = 9998


def validar_mes_ano(mes, ano):
    if mes is None or not 1 <= mes <= 12:
        raise ValidationError('Mês inválido')
    if ano is None or not 1 <= ano <= ANO_MAXIMO:
        raise ValidationError('Ano inválido')


def intervalo_mes(mes, ano):
    """(primeiro dia do mês, primeiro dia do mês seguinte). Mês/ano fora da faixa -> ValidationError."""
    validar_mes_ano(mes, ano)
    inicio = date(ano, mes, 1)
    fim = date(ano + 1, 1, 1) if mes == 12 else date(ano, mes + 1, 1)
    return inicio, fim


def dia_semana(data):
    return DIAS_SEMANA[data.weekday()]
