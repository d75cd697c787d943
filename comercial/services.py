"""
Services Layer do módulo Comercial - Tractus

Este módulo contém as regras de negócio:
- Numeração de propostas (PROP-000001) e ordens de serviço (OS-000001)
- Margem da proposta e fluxo de liberação de custo
- Ciclo de vida da OS e geração automática da venda no faturamento
- Metas de vendas e indicadores por vendedor
"""
import logging
import math
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Count, Sum
from django.utils import timezone

from core import ia
from core.datas import intervalo_mes
from core.numeracao import salvar_com_numero
from .models import (
    Categoria,
    Cliente,
    ClienteAnotacao,
    LiberacaoCusto,
    MetaVenda,
    OrdemServico,
    Proposta,
    Venda,
)

logger = logging.getLogger(__name__)

PREFIXO_PROPOSTA = 'PROP-'
PREFIXO_OS = 'OS-'
LARGURA_NUMERO = 6


def semana_do_mes(dia: date) -> int:
    """Semana do mês de 1 a 4; dias 22 em diante contam como semana 4."""
    return min(math.ceil(dia.day / 7), 4)


class ClienteService:

    @staticmethod
    def excluir(cliente: Cliente) -> None:
        """Exclusão lógica: o cliente some das listagens mas mantém o histórico."""
        cliente.ativo = False
        cliente.save(update_fields=['ativo', 'updated_at'])
        logger.info(f"Cliente {cliente.id} ({cliente.nome}) inativado")


class AnotacaoService:

    @staticmethod
    def resumir(cliente_id, vendedor_id, cliente_ia: Optional[ia.ClienteGemini] = None) -> dict:
        """Resumo executivo (IA) das anotações do vendedor sobre o cliente."""
        if not cliente_id or not vendedor_id:
            raise ValidationError('cliente e vendedor são obrigatórios')

        anotacoes = ClienteAnotacao.objects.filter(
            cliente_id=cliente_id,
            vendedor_id=vendedor_id,
        ).order_by('created_at')

        nome_cliente = (
            Cliente.objects.filter(pk=cliente_id).values_list('nome', flat=True).first()
        )
        return ia.resumir_anotacoes(nome_cliente, anotacoes, cliente=cliente_ia)


class PropostaService:
    """Criação de propostas e fluxo de liberação de custo."""

    @staticmethod
    def calcular_margem(valor, custo_estimado) -> Optional[Decimal]:
        """(valor - custo) / valor x 100, com 2 casas. None sem custo ou valor <= 0."""
        if custo_estimado is None or valor is None:
            return None
        valor = Decimal(valor)
        if valor <= 0:
            return None
        margem = (valor - Decimal(custo_estimado)) / valor * Decimal('100')
        return margem.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)

    @staticmethod
    @transaction.atomic
    def criar(**dados) -> Proposta:
        proposta = Proposta(**dados)
        proposta.margem = PropostaService.calcular_margem(proposta.valor, proposta.custo_estimado)
        proposta.status = Proposta.Status.EM_ABERTO
        salvar_com_numero(proposta, PREFIXO_PROPOSTA, LARGURA_NUMERO)
        logger.info(f"Proposta {proposta.numero} criada para o cliente {proposta.cliente_id}")
        return proposta

    @staticmethod
    def atualizar(proposta: Proposta, **dados) -> Proposta:
        for campo, valor in dados.items():
            setattr(proposta, campo, valor)
        if 'valor' in dados or 'custo_estimado' in dados:
            proposta.margem = PropostaService.calcular_margem(proposta.valor, proposta.custo_estimado)
        proposta.save()
        return proposta

    @staticmethod
    def alterar_status(proposta: Proposta, status: str, motivo_cancelamento: str = '') -> Proposta:
        if status not in Proposta.Status.values:
            raise ValidationError(f"Status inválido: {status}")
        proposta.status = status
        campos = ['status', 'updated_at']
        if motivo_cancelamento:
            proposta.motivo_cancelamento = motivo_cancelamento
            campos.append('motivo_cancelamento')
        proposta.save(update_fields=campos)
        logger.info(f"Proposta {proposta.numero} -> {status}")
        return proposta

    @staticmethod
    @transaction.atomic
    def solicitar_liberacao(proposta: Proposta) -> LiberacaoCusto:
        """Abre a liberação de custo (EM_ANALISE) e coloca a proposta em aprovação."""
        if LiberacaoCusto.objects.filter(proposta=proposta).exists():
            raise ValidationError('Proposta já possui liberação de custo solicitada')

        liberacao = LiberacaoCusto.objects.create(
            proposta=proposta,
            status=LiberacaoCusto.Status.EM_ANALISE,
        )
        proposta.status = Proposta.Status.AGUARDANDO_APROVACAO
        proposta.save(update_fields=['status', 'updated_at'])
        logger.info(f"Liberação de custo solicitada para a proposta {proposta.numero}")
        return liberacao

    @staticmethod
    @transaction.atomic
    def decidir_liberacao(liberacao: LiberacaoCusto, status: str, usuario=None, custo_real=None,
                          observacoes: Optional[str] = None) -> LiberacaoCusto:
        """
        Registra a decisão sobre o custo.

        APROVADO grava data/aprovador e aprova a proposta.
        """
        proposta = liberacao.proposta

        decisoes = (
            LiberacaoCusto.Status.APROVADO,
            LiberacaoCusto.Status.REPROVADO,
            LiberacaoCusto.Status.AGUARDANDO_AJUSTE,
        )
        if status not in decisoes:
            raise ValidationError(f"Status inválido: {status}")

        liberacao.status = status
        if custo_real is not None:
            liberacao.custo_real = custo_real
        if observacoes is not None:
            liberacao.observacoes = observacoes

        if status == LiberacaoCusto.Status.APROVADO:
            liberacao.aprovado_por = usuario
            liberacao.data_aprovacao = timezone.now()
        else:
            liberacao.data_aprovacao = None
        liberacao.save()

        if status == LiberacaoCusto.Status.APROVADO:
            proposta.status = Proposta.Status.APROVADA
            proposta.save(update_fields=['status', 'updated_at'])

        logger.info(f"Liberação de custo da proposta {proposta.numero}: {status}")
        return liberacao


class OrdemServicoService:
    """Ciclo de vida da ordem de serviço."""

    @staticmethod
    @transaction.atomic
    def criar(cliente: Cliente, valor_total, proposta: Optional[Proposta] = None,
              data_previsao=None) -> OrdemServico:
        if proposta is not None and OrdemServico.objects.filter(proposta=proposta).exists():
            raise ValidationError('Proposta já possui OS vinculada')

        ordem = OrdemServico(
            cliente=cliente,
            valor_total=valor_total,
            proposta=proposta,
            data_previsao=data_previsao,
            status=OrdemServico.Status.ABERTA,
        )
        salvar_com_numero(ordem, PREFIXO_OS, LARGURA_NUMERO)
        logger.info(f"OS {ordem.numero} aberta para o cliente {cliente.id}")
        return ordem

    @staticmethod
    @transaction.atomic
    def criar_de_proposta(proposta: Proposta) -> OrdemServico:
        """Gera a OS de uma proposta aprovada (uma OS por proposta)."""
        proposta = Proposta.objects.select_for_update().get(pk=proposta.pk)
        if proposta.status != Proposta.Status.APROVADA:
            raise ValidationError('Proposta precisa estar aprovada')
        return OrdemServicoService.criar(
            cliente=proposta.cliente,
            valor_total=proposta.valor,
            proposta=proposta,
        )

    @staticmethod
    @transaction.atomic
    def alterar_status(ordem: OrdemServico, status: str) -> OrdemServico:
        """
        Muda o status da OS.

        - FINALIZADA/FATURADA registram a data de fechamento
        - FATURADA gera a venda do vendedor da proposta (uma por OS)
        - FATURADA e CANCELADA são finais
        """
        if status not in OrdemServico.Status.values:
            raise ValidationError(f"Status inválido: {status}")

        ordem = OrdemServico.objects.select_for_update().get(pk=ordem.pk)
        if ordem.status == status:
            return ordem
        if ordem.status in OrdemServico.STATUS_FINAIS:
            raise ValidationError(
                f"OS {ordem.get_status_display().lower()} não pode mudar de status"
            )

        ordem.status = status
        if status in OrdemServico.STATUS_FECHAMENTO:
            ordem.data_fechamento = timezone.now()
        ordem.save()
        logger.info(f"OS {ordem.numero} -> {status}")

        if status == OrdemServico.Status.FATURADA:
            OrdemServicoService._registrar_venda(ordem)
        return ordem

    @staticmethod
    def _registrar_venda(ordem: OrdemServico) -> Optional[Venda]:
        if Venda.objects.filter(ordem_servico=ordem).exists():
            return None
        proposta = ordem.proposta
        if proposta is None:
            logger.info(f"OS {ordem.numero} faturada sem proposta: nenhuma venda registrada")
            return None

        hoje = timezone.localdate()
        venda = Venda.objects.create(
            vendedor=proposta.vendedor,
            ordem_servico=ordem,
            data=hoje,
            valor=ordem.valor_total,
            categoria=proposta.categoria,
            semana=semana_do_mes(hoje),
        )
        logger.info(f"Venda {venda.id} registrada para a OS {ordem.numero} (R$ {venda.valor})")
        return venda


class MetaService:
    """Metas de vendas e indicadores comerciais."""

    @staticmethod
    def salvar(vendedor, mes: int, ano: int, categoria: str, valor_meta) -> MetaVenda:
        """Cria ou atualiza a meta (única por vendedor, mês, ano e categoria)."""
        meta, criada = MetaVenda.objects.update_or_create(
            vendedor=vendedor,
            mes=mes,
            ano=ano,
            categoria=categoria,
            defaults={'valor_meta': valor_meta},
        )
        logger.info(
            f"Meta {'criada' if criada else 'atualizada'}: vendedor {vendedor.id} "
            f"{mes:02d}/{ano} {categoria} = {valor_meta}"
        )
        return meta

    @staticmethod
    def dashboard(mes: int, ano: int) -> dict:
        """Meta x realizado por vendedor, por categoria e por semana."""
        from accounts.models import Vendedor

        inicio, fim = intervalo_mes(mes, ano)
        resultado = []
        for vendedor in Vendedor.objects.select_related('usuario', 'usuario__perfil'):
            metas = {m.categoria: m.valor_meta for m in vendedor.metas.filter(mes=mes, ano=ano)}
            vendas = list(vendedor.vendas.filter(data__gte=inicio, data__lt=fim))

            meta_total = sum(metas.values(), Decimal('0'))
            vendido_total = sum((v.valor for v in vendas), Decimal('0'))

            por_categoria = []
            for categoria in Categoria.values:
                meta = metas.get(categoria)
                realizado = sum((v.valor for v in vendas if v.categoria == categoria), Decimal('0'))
                por_categoria.append({
                    'categoria': categoria,
                    'meta': float(meta) if meta else 0.0,
                    'realizado': float(realizado),
                    'percentual': float(realizado / meta * 100) if meta else 0.0,
                })

            por_semana = [
                {
                    'semana': semana,
                    'realizado': float(sum((v.valor for v in vendas if v.semana == semana), Decimal('0'))),
                }
                for semana in (1, 2, 3, 4)
            ]

            perfil = getattr(vendedor.usuario, 'perfil', None)
            resultado.append({
                'vendedor': {
                    'id': vendedor.id,
                    'name': vendedor.nome,
                    'photo': perfil.foto if perfil and perfil.foto else None,
                },
                'meta_total': float(meta_total),
                'vendido_total': float(vendido_total),
                'percentual_total': float(vendido_total / meta_total * 100) if meta_total > 0 else 0.0,
                'por_categoria': por_categoria,
                'por_semana': por_semana,
            })

        return {'mes': mes, 'ano': ano, 'vendedores': resultado}

    @staticmethod
    def dashboard_vendedor(vendedor) -> dict:
        """Metas do mês corrente, total vendido no mês e propostas por status."""
        from .serializers import MetaSerializer

        hoje = timezone.localdate()
        inicio, fim = intervalo_mes(hoje.month, hoje.year)

        metas = vendedor.metas.filter(mes=hoje.month, ano=hoje.year)
        vendido = (
            vendedor.vendas
            .filter(data__gte=inicio, data__lt=fim)
            .aggregate(total=Sum('valor'))['total']
        ) or Decimal('0')
        propostas = (
            vendedor.propostas
            .values('status')
            .annotate(total=Count('id'))
            .order_by('status')
        )

        return {
            'mes': hoje.month,
            'ano': hoje.year,
            'metas': MetaSerializer(metas, many=True).data,
            'vendido_mes': float(vendido),
            'propostas': [{'status': p['status'], 'total': p['total']} for p in propostas],
        }
