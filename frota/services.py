"""
Services Layer de despesas de veículo - Tractus

- Validação da quilometragem (nunca menor que o último registro do vendedor)
- Aprovação/reprovação de despesas pelo financeiro
- Indicadores mensais por vendedor (km rodados, custo por km)
- Alertas de manutenção por intervalo de km
"""
import logging
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from accounts.models import Vendedor
from core.datas import intervalo_mes
from .models import ConfiguracaoManutencao, DespesaVeiculo, TipoManutencao

logger = logging.getLogger(__name__)

INTERVALOS_PADRAO = {
    TipoManutencao.TROCA_OLEO: 5000,
    TipoManutencao.REVISAO: 10000,
    TipoManutencao.PNEUS_NIVEL: 2000,
    TipoManutencao.PNEUS_TROCA: 40000,
}

PERCENTUAL_PROXIMO = 80
PERCENTUAL_VENCIDO = 100


class AlertaStatus:
    OK = 'OK'
    PROXIMO = 'PROXIMO'
    VENCIDO = 'VENCIDO'


def classificar_alerta(percentual) -> str:
    """>= 100% VENCIDO, >= 80% PROXIMO, senão OK."""
    if percentual >= PERCENTUAL_VENCIDO:
        return AlertaStatus.VENCIDO
    if percentual >= PERCENTUAL_PROXIMO:
        return AlertaStatus.PROXIMO
    return AlertaStatus.OK


class DespesaVeiculoService:
    """Registro e avaliação das despesas de veículo."""

    @staticmethod
    def ultimo_registro(vendedor_id, excluir_id=None):
        """Despesa de maior km do vendedor (opcionalmente ignorando uma despesa)."""
        despesas = DespesaVeiculo.objects.filter(vendedor_id=vendedor_id)
        if excluir_id is not None:
            despesas = despesas.exclude(pk=excluir_id)
        return despesas.order_by('-km', '-data').first()

    @staticmethod
    @transaction.atomic
    def criar(vendedor, km: int, **dados) -> DespesaVeiculo:
        """
        Registra a despesa validando a quilometragem.

        O vendedor é bloqueado durante a validação para que dois registros
        simultâneos não furem a sequência de km.
        """
        Vendedor.objects.select_for_update().filter(pk=vendedor.pk).first()
        ultima = DespesaVeiculoService.ultimo_registro(vendedor.pk)
        if ultima and km < ultima.km:
            raise ValidationError(
                f"Quilometragem inválida. O último registro foi de {ultima.km} km. "
                f"O valor informado deve ser maior ou igual."
            )

        despesa = DespesaVeiculo.objects.create(vendedor=vendedor, km=km, **dados)
        logger.info(
            f"Despesa {despesa.id} ({despesa.tipo}) registrada para o vendedor {vendedor.pk}: "
            f"R$ {despesa.valor}, {km} km"
        )
        return despesa

    @staticmethod
    @transaction.atomic
    def atualizar(despesa: DespesaVeiculo, **dados) -> DespesaVeiculo:
        """Atualiza a despesa; km alterado é comparado com os demais registros do vendedor."""
        if 'km' in dados:
            Vendedor.objects.select_for_update().filter(pk=despesa.vendedor_id).first()
            outra = DespesaVeiculoService.ultimo_registro(despesa.vendedor_id, excluir_id=despesa.pk)
            if outra and dados['km'] < outra.km:
                raise ValidationError(f"Quilometragem inválida. Existe um registro com {outra.km} km.")

        for campo, valor in dados.items():
            setattr(despesa, campo, valor)
        despesa.save()
        return despesa

    @staticmethod
    def aprovar(despesa: DespesaVeiculo, usuario) -> DespesaVeiculo:
        if despesa.status != DespesaVeiculo.Status.PENDENTE:
            raise ValidationError('Apenas despesas pendentes podem ser aprovadas')
        despesa.status = DespesaVeiculo.Status.APROVADA
        despesa.aprovado_por = usuario
        despesa.data_aprovacao = timezone.now()
        despesa.save(update_fields=['status', 'aprovado_por', 'data_aprovacao', 'updated_at'])
        logger.info(f"Despesa {despesa.id} aprovada por {usuario}")
        return despesa

    @staticmethod
    def reprovar(despesa: DespesaVeiculo, usuario, motivo: str = '') -> DespesaVeiculo:
        if despesa.status != DespesaVeiculo.Status.PENDENTE:
            raise ValidationError('Apenas despesas pendentes podem ser reprovadas')
        despesa.status = DespesaVeiculo.Status.REPROVADA
        despesa.aprovado_por = usuario
        despesa.data_aprovacao = timezone.now()
        despesa.motivo_reprovacao = motivo or ''
        despesa.save(update_fields=[
            'status', 'aprovado_por', 'data_aprovacao', 'motivo_reprovacao', 'updated_at',
        ])
        logger.info(f"Despesa {despesa.id} reprovada por {usuario}. Motivo: {motivo or '-'}")
        return despesa

    @staticmethod
    def dashboard(mes: int, ano: int, vendedor_id=None) -> dict:
        """
        Indicadores do mês por vendedor.

        km rodados = maior km - menor km do mês (exige pelo menos 2 registros).
        """
        inicio, fim = intervalo_mes(mes, ano)
        vendedores = Vendedor.objects.select_related('usuario')
        if vendedor_id:
            vendedores = vendedores.filter(pk=vendedor_id)

        resultado = []
        for vendedor in vendedores:
            despesas = list(
                vendedor.despesas_veiculo
                .filter(data__gte=inicio, data__lt=fim)
                .order_by('km', 'data')
            )
            total = sum((d.valor for d in despesas), Decimal('0'))

            km_rodados = 0
            custo_por_km = 0.0
            if len(despesas) >= 2:
                km_rodados = despesas[-1].km - despesas[0].km
                if km_rodados > 0:
                    custo_por_km = float(total) / km_rodados

            por_tipo = {}
            for despesa in despesas:
                item = por_tipo.setdefault(despesa.tipo, {'total': 0.0, 'quantidade': 0})
                item['total'] += float(despesa.valor)
                item['quantidade'] += 1

            resultado.append({
                'vendedor': {'id': vendedor.id, 'name': vendedor.nome},
                'total_despesas': float(total),
                'km_rodados': km_rodados,
                'custo_por_km': round(custo_por_km, 4),
                'por_tipo': por_tipo,
                'quantidade_despesas': len(despesas),
                'pendentes': sum(1 for d in despesas if d.status == DespesaVeiculo.Status.PENDENTE),
                'aprovadas': sum(1 for d in despesas if d.status == DespesaVeiculo.Status.APROVADA),
                'reprovadas': sum(1 for d in despesas if d.status == DespesaVeiculo.Status.REPROVADA),
                'ultimo_km': despesas[-1].km if despesas else None,
            })

        total_geral = sum(r['total_despesas'] for r in resultado)
        km_total = sum(r['km_rodados'] for r in resultado)
        return {
            'mes': mes,
            'ano': ano,
            'totais': {
                'despesas': total_geral,
                'pendentes': sum(r['pendentes'] for r in resultado),
                'aprovadas': sum(r['aprovadas'] for r in resultado),
                'km_rodados': km_total,
                'custo_por_km': round(total_geral / km_total, 4) if km_total > 0 else 0.0,
            },
            'vendedores': resultado,
        }


class ManutencaoService:
    """Intervalos de manutenção e alertas calculados a cada consulta."""

    @staticmethod
    def intervalos() -> dict:
        """Intervalos vigentes: padrão sobrescrito pelo que estiver configurado."""
        intervalos = dict(INTERVALOS_PADRAO)
        for config in ConfiguracaoManutencao.objects.all():
            intervalos[config.tipo] = config.intervalo_km
        return intervalos

    @staticmethod
    def configuracoes() -> list:
        configs = {c.tipo: c for c in ConfiguracaoManutencao.objects.all()}
        resultado = []
        for tipo, label in TipoManutencao.choices:
            config = configs.get(tipo)
            resultado.append({
                'id': config.id if config else None,
                'tipo': tipo,
                'tipo_label': label,
                'intervalo_km': config.intervalo_km if config else INTERVALOS_PADRAO[tipo],
            })
        return resultado

    @staticmethod
    def salvar_configuracao(tipo: str, intervalo_km: int) -> ConfiguracaoManutencao:
        if tipo not in TipoManutencao.values:
            raise ValidationError(f"Tipo de manutenção inválido: {tipo}")
        if intervalo_km is None or intervalo_km <= 0:
            raise ValidationError('O intervalo deve ser maior que zero')
        config, _ = ConfiguracaoManutencao.objects.update_or_create(
            tipo=tipo,
            defaults={'intervalo_km': intervalo_km},
        )
        logger.info(f"Intervalo de {tipo} configurado para {intervalo_km} km")
        return config

    @staticmethod
    def alertas(vendedor_id=None) -> list:
        """
        Manutenções próximas (>= 80%) ou vencidas (>= 100%) por vendedor.

        km atual = maior km registrado; última manutenção = maior km entre as
        despesas do tipo (0 se nunca houve). Vencidas primeiro, depois por
        percentual decrescente.
        """
        intervalos = ManutencaoService.intervalos()
        labels = dict(TipoManutencao.choices)

        vendedores = Vendedor.objects.select_related('usuario')
        if vendedor_id:
            vendedores = vendedores.filter(pk=vendedor_id)

        alertas = []
        for vendedor in vendedores:
            despesas = list(vendedor.despesas_veiculo.order_by('-km').values('tipo', 'km'))
            if not despesas:
                continue
            km_atual = despesas[0]['km']

            for tipo in TipoManutencao.values:
                intervalo = intervalos[tipo]
                ultima = next((d for d in despesas if d['tipo'] == tipo), None)
                km_ultima = ultima['km'] if ultima else 0
                percentual = (km_atual - km_ultima) / intervalo * 100
                status = classificar_alerta(percentual)
                if status == AlertaStatus.OK:
                    continue
                alertas.append({
                    'vendedor_id': vendedor.id,
                    'vendedor_nome': vendedor.nome,
                    'tipo': tipo,
                    'tipo_label': labels[tipo],
                    'km_atual': km_atual,
                    'km_ultima_manutencao': km_ultima,
                    'km_proxima_manutencao': km_ultima + intervalo,
                    'km_restantes': km_ultima + intervalo - km_atual,
                    'percentual': round(percentual, 2),
                    'status': status,
                })

        alertas.sort(key=lambda a: (a['status'] != AlertaStatus.VENCIDO, -a['percentual']))
        return alertas
