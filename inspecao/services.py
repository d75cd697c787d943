"""
Services Layer do módulo de Inspeção - Tractus

Regras de negócio de visitas técnicas e laudos de inspeção:
- Transições de status da visita (PENDENTE -> CONFIRMADA -> REALIZADA / CANCELADA)
- Cálculo do desgaste dos componentes do material rodante
- Criação, edição e envio do laudo (envio é final e realiza a visita)
- Numeração diária das visitas (DD/MM/AAAA-NNNN)
"""
import logging
from collections import OrderedDict
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Tuple

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from core import ia
from core.datas import dia_semana, intervalo_mes
from core.numeracao import prefixo_diario, salvar_com_numero
from .models import (
    ComponenteInspecao,
    FotoComponente,
    LaudoInspecao,
    StatusDesgaste,
    TipoComponente,
    VisitaTecnica,
)

logger = logging.getLogger(__name__)

LARGURA_SEQUENCIA_DIARIA = 4

LIMITE_DENTRO_PARAMETROS = Decimal('70')
LIMITE_VERIFICAR = Decimal('100')

# Valores genéricos de material rodante de escavadeiras (mm)
VALORES_PADRAO = {
    TipoComponente.ESTEIRA: {'dimensao_std': 175.0, 'limite_reparo': 155.0},
    TipoComponente.SAPATA: {'dimensao_std': 32.0, 'limite_reparo': 22.0},
    TipoComponente.ROLETE_INFERIOR: {'dimensao_std': 185.0, 'limite_reparo': 171.0},
    TipoComponente.ROLETE_SUPERIOR: {'dimensao_std': 145.0, 'limite_reparo': 133.0},
    TipoComponente.RODA_GUIA: {'dimensao_std': 555.0, 'limite_reparo': 525.0},
    TipoComponente.RODA_MOTRIZ: {'dimensao_std': 225.0, 'limite_reparo': 210.0},
}


def contar_status(visitas) -> dict:
    return {
        'pendentes': sum(1 for v in visitas if v.status == VisitaTecnica.Status.PENDENTE),
        'confirmadas': sum(1 for v in visitas if v.status == VisitaTecnica.Status.CONFIRMADA),
        'realizadas': sum(1 for v in visitas if v.status == VisitaTecnica.Status.REALIZADA),
        'canceladas': sum(1 for v in visitas if v.status == VisitaTecnica.Status.CANCELADA),
    }


class VisitaService:
    """Ciclo de vida da visita técnica."""

    @staticmethod
    def validar_edicao(visita: VisitaTecnica) -> None:
        if visita.status in VisitaTecnica.STATUS_FINAIS:
            raise ValidationError('Não é possível editar uma visita já realizada ou cancelada')

    @staticmethod
    def confirmar(visita: VisitaTecnica) -> VisitaTecnica:
        if visita.status != VisitaTecnica.Status.PENDENTE:
            raise ValidationError('Apenas visitas pendentes podem ser confirmadas')
        visita.status = VisitaTecnica.Status.CONFIRMADA
        visita.save(update_fields=['status', 'updated_at'])
        logger.info(f"Visita técnica {visita.id} confirmada")
        return visita

    @staticmethod
    def realizar(visita: VisitaTecnica) -> VisitaTecnica:
        if visita.status == VisitaTecnica.Status.REALIZADA:
            raise ValidationError('Visita já foi marcada como realizada')
        if visita.status == VisitaTecnica.Status.CANCELADA:
            raise ValidationError('Não é possível realizar uma visita cancelada')
        visita.status = VisitaTecnica.Status.REALIZADA
        visita.save(update_fields=['status', 'updated_at'])
        logger.info(f"Visita técnica {visita.id} realizada")
        return visita

    @staticmethod
    def cancelar(visita: VisitaTecnica, motivo: str = '') -> VisitaTecnica:
        if visita.status == VisitaTecnica.Status.REALIZADA:
            raise ValidationError('Não é possível cancelar uma visita já realizada')
        if visita.status == VisitaTecnica.Status.CANCELADA:
            raise ValidationError('Visita já está cancelada')
        visita.status = VisitaTecnica.Status.CANCELADA
        visita.motivo_cancelamento = motivo or ''
        visita.save(update_fields=['status', 'motivo_cancelamento', 'updated_at'])
        logger.info(f"Visita técnica {visita.id} cancelada. Motivo: {motivo or '-'}")
        return visita

    @staticmethod
    def excluir(visita: VisitaTecnica) -> None:
        if visita.status != VisitaTecnica.Status.PENDENTE:
            raise ValidationError(
                'Apenas visitas pendentes podem ser excluídas. Use cancelar para as demais.'
            )
        logger.info(f"Visita técnica {visita.id} excluída")
        visita.delete()

    @staticmethod
    def filtrar_periodo(queryset, data=None, data_inicio=None, data_fim=None):
        if data:
            return queryset.filter(data_visita=data)
        if data_inicio:
            queryset = queryset.filter(data_visita__gte=data_inicio)
        if data_fim:
            queryset = queryset.filter(data_visita__lte=data_fim)
        return queryset

    @staticmethod
    def agenda(data=None, data_inicio=None, data_fim=None) -> dict:
        """
        Visitas pendentes e confirmadas agrupadas por dia.

        Sem datas, considera de hoje em diante.
        """
        queryset = VisitaTecnica.objects.filter(
            status__in=[VisitaTecnica.Status.PENDENTE, VisitaTecnica.Status.CONFIRMADA],
            data_visita__isnull=False,
        ).select_related('cliente', 'vendedor', 'vendedor__usuario', 'inspetor')

        if data or data_inicio or data_fim:
            queryset = VisitaService.filtrar_periodo(queryset, data, data_inicio, data_fim)
        else:
            queryset = queryset.filter(data_visita__gte=timezone.localdate())

        visitas = list(queryset.order_by('data_visita', 'created_at'))
        por_dia = OrderedDict()
        for visita in visitas:
            por_dia.setdefault(visita.data_visita, []).append(visita)

        dias = []
        for dia, visitas_dia in por_dia.items():
            contagem = contar_status(visitas_dia)
            dias.append({
                'data': dia,
                'dia_semana': dia_semana(dia),
                'total_visitas': len(visitas_dia),
                'pendentes': contagem['pendentes'],
                'confirmadas': contagem['confirmadas'],
                'visitas': visitas_dia,
            })

        contagem = contar_status(visitas)
        return {
            'agenda': dias,
            'totais': {
                'dias': len(dias),
                'visitas': len(visitas),
                'pendentes': contagem['pendentes'],
                'confirmadas': contagem['confirmadas'],
            },
        }

    @staticmethod
    def resumo(mes: int, ano: int) -> dict:
        """Totais do mês por status e por vendedor solicitante."""
        inicio, fim = intervalo_mes(mes, ano)
        visitas = list(
            VisitaTecnica.objects
            .filter(data_visita__gte=inicio, data_visita__lt=fim)
            .select_related('vendedor', 'vendedor__usuario')
        )

        por_vendedor = OrderedDict()
        for visita in sorted(visitas, key=lambda v: v.vendedor.nome):
            item = por_vendedor.setdefault(visita.vendedor_id, {
                'vendedor_id': visita.vendedor_id,
                'nome': visita.vendedor.nome,
                'visitas': [],
            })
            item['visitas'].append(visita)

        vendedores = []
        for item in por_vendedor.values():
            vendedores.append({
                'vendedor_id': item['vendedor_id'],
                'nome': item['nome'],
                'total': len(item['visitas']),
                **contar_status(item['visitas']),
            })

        return {
            'mes': mes,
            'ano': ano,
            'por_vendedor': vendedores,
            'totais': {'total': len(visitas), **contar_status(visitas)},
        }


class LaudoService:
    """Laudos de inspeção do material rodante."""

    @staticmethod
    def calcular_desgaste(dimensao_std, limite_reparo, medicao) -> Tuple[Optional[Decimal], str]:
        """
        Percentual de desgaste de um lado do componente e seu status.

        <= 70% dentro dos parâmetros, <= 100% verificar, > 100% fora dos parâmetros.
        Sem algum dos valores, ou com faixa (std - limite) <= 0, retorna (None, '').
        """
        if dimensao_std is None or limite_reparo is None or medicao is None:
            return None, ''

        dimensao_std = Decimal(str(dimensao_std))
        faixa = dimensao_std - Decimal(str(limite_reparo))
        if faixa <= 0:
            return None, ''

        percentual = (dimensao_std - Decimal(str(medicao))) / faixa * Decimal('100')
        if percentual <= LIMITE_DENTRO_PARAMETROS:
            status = StatusDesgaste.DENTRO_PARAMETROS
        elif percentual <= LIMITE_VERIFICAR:
            status = StatusDesgaste.VERIFICAR
        else:
            status = StatusDesgaste.FORA_PARAMETROS

        return percentual.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP), status

    @staticmethod
    def _gravar_componentes(laudo: LaudoInspecao, componentes) -> None:
        laudo.componentes.all().delete()
        novos = []
        for ordem, dados in enumerate(componentes):
            std = dados.get('dimensao_std')
            limite = dados.get('limite_reparo')
            desgaste_le, status_le = LaudoService.calcular_desgaste(std, limite, dados.get('medicao_le'))
            desgaste_ld, status_ld = LaudoService.calcular_desgaste(std, limite, dados.get('medicao_ld'))
            novos.append(ComponenteInspecao(
                laudo=laudo,
                tipo=dados['tipo'],
                dimensao_std=std,
                limite_reparo=limite,
                medicao_le=dados.get('medicao_le'),
                medicao_ld=dados.get('medicao_ld'),
                desgaste_le=desgaste_le,
                desgaste_ld=desgaste_ld,
                status_le=status_le,
                status_ld=status_ld,
                observacao=dados.get('observacao') or '',
                ordem=ordem,
            ))
        ComponenteInspecao.objects.bulk_create(novos)

    @staticmethod
    def _gravar_fotos(laudo: LaudoInspecao, fotos) -> None:
        laudo.fotos.all().delete()
        FotoComponente.objects.bulk_create([
            FotoComponente(
                laudo=laudo,
                tipo=dados['tipo'],
                lado=dados.get('lado') or FotoComponente.Lado.AMBOS,
                url=dados['url'],
                legenda=dados.get('legenda') or '',
                ordem=ordem,
            )
            for ordem, dados in enumerate(fotos)
        ])

    @staticmethod
    def _visita_aberta(laudo: LaudoInspecao) -> VisitaTecnica:
        """Trava a visita do laudo; visita cancelada não aceita mais o laudo."""
        visita = VisitaTecnica.objects.select_for_update().get(pk=laudo.visita_id)
        if visita.status == VisitaTecnica.Status.CANCELADA:
            raise ValidationError('A visita deste laudo foi cancelada')
        return visita

    @staticmethod
    def numerar_visita(visita: VisitaTecnica) -> VisitaTecnica:
        """Atribui DD/MM/AAAA-NNNN à visita, se ainda não tiver número."""
        if visita.numero:
            return visita
        data = visita.data_visita or timezone.localdate()
        salvar_com_numero(visita, prefixo_diario(data), LARGURA_SEQUENCIA_DIARIA)
        logger.info(f"Visita técnica {visita.id} numerada como {visita.numero}")
        return visita

    @staticmethod
    @transaction.atomic
    def criar(visita: VisitaTecnica, inspetor, componentes=None, fotos=None, **dados) -> LaudoInspecao:
        """
        Cria o laudo (RASCUNHO) de uma visita.

        Raises:
            ValidationError: visita já tem laudo ou está cancelada
        """
        visita = VisitaTecnica.objects.select_for_update().get(pk=visita.pk)
        if LaudoInspecao.objects.filter(visita=visita).exists():
            raise ValidationError('Esta visita já possui um laudo')
        if visita.status == VisitaTecnica.Status.CANCELADA:
            raise ValidationError('Não é possível criar laudo para uma visita cancelada')

        LaudoService.numerar_visita(visita)

        laudo = LaudoInspecao.objects.create(
            visita=visita,
            inspetor=inspetor,
            status=LaudoInspecao.Status.RASCUNHO,
            **dados,
        )
        LaudoService._gravar_componentes(laudo, componentes or [])
        LaudoService._gravar_fotos(laudo, fotos or [])

        logger.info(f"Laudo {laudo.id} criado para a visita {visita.numero} por {inspetor}")
        return laudo

    @staticmethod
    @transaction.atomic
    def atualizar(laudo: LaudoInspecao, componentes=None, fotos=None, **dados) -> LaudoInspecao:
        """Atualiza um rascunho. Listas informadas substituem as anteriores."""
        laudo = LaudoInspecao.objects.select_for_update().get(pk=laudo.pk)
        if laudo.enviado:
            raise ValidationError('Laudo já foi enviado e não pode ser alterado')
        LaudoService._visita_aberta(laudo)

        for campo, valor in dados.items():
            setattr(laudo, campo, valor)
        laudo.save()

        if componentes is not None:
            LaudoService._gravar_componentes(laudo, componentes)
        if fotos is not None:
            LaudoService._gravar_fotos(laudo, fotos)
        return laudo

    @staticmethod
    @transaction.atomic
    def enviar(laudo: LaudoInspecao) -> LaudoInspecao:
        """Finaliza o laudo e marca a visita como REALIZADA."""
        laudo = LaudoInspecao.objects.select_for_update().get(pk=laudo.pk)
        if laudo.enviado:
            raise ValidationError('Laudo já foi enviado')
        if not laudo.componentes.exists():
            raise ValidationError('Adicione pelo menos uma medição antes de enviar')
        visita = LaudoService._visita_aberta(laudo)

        laudo.status = LaudoInspecao.Status.ENVIADO
        laudo.data_envio = timezone.now()
        laudo.save(update_fields=['status', 'data_envio', 'updated_at'])

        visita.status = VisitaTecnica.Status.REALIZADA
        visita.save(update_fields=['status', 'updated_at'])
        logger.info(f"Laudo {laudo.id} enviado; visita {laudo.visita_id} realizada")
        return laudo

    @staticmethod
    def excluir(laudo: LaudoInspecao) -> None:
        if laudo.enviado:
            raise ValidationError('Não é possível excluir um laudo já enviado')
        logger.info(f"Laudo {laudo.id} excluído")
        laudo.delete()

    @staticmethod
    def gerar_sumario(equipamento: str, componentes, sumario_atual: str = '') -> dict:
        """
        Sumário técnico (IA) a partir dos desgastes calculados.

        ``componentes``: dicts com tipo, desgaste_le, desgaste_ld, status_le, status_ld.
        """
        tipos = dict(TipoComponente.choices)
        status_labels = dict(StatusDesgaste.choices)

        def _pct(valor):
            return f"{float(valor):.1f}" if valor is not None else 'N/A'

        linhas = []
        criticos = []
        verificar = []
        for comp in componentes:
            tipo = tipos.get(comp.get('tipo'), comp.get('tipo'))
            status_le = comp.get('status_le') or ''
            status_ld = comp.get('status_ld') or ''
            if comp.get('desgaste_le') is not None or comp.get('desgaste_ld') is not None:
                linhas.append(
                    f"- {tipo}: LE {_pct(comp.get('desgaste_le'))}% ({status_labels.get(status_le, 'N/A')}), "
                    f"LD {_pct(comp.get('desgaste_ld'))}% ({status_labels.get(status_ld, 'N/A')})"
                )
            if StatusDesgaste.FORA_PARAMETROS in (status_le, status_ld):
                criticos.append(tipo)
            elif StatusDesgaste.VERIFICAR in (status_le, status_ld):
                verificar.append(tipo)

        return ia.gerar_sumario_laudo(equipamento, linhas, criticos, verificar, sumario_atual)

    @staticmethod
    def dados_impressao(laudo: LaudoInspecao) -> dict:
        """Dados do laudo achatados e com rótulos, para geração do PDF no frontend."""
        visita = laudo.visita
        cliente = visita.cliente

        def _num(valor):
            return float(valor) if valor is not None else None

        def _data(valor):
            return valor.strftime('%d/%m/%Y') if valor else None

        fotos = sorted(laudo.fotos.all(), key=lambda f: (f.tipo, f.lado))
        return {
            'numero': visita.numero or 'N/A',
            'data_inspecao': _data(laudo.data_inspecao),
            'inspetor': laudo.inspetor.get_full_name() or laudo.inspetor.username,
            'cliente': {
                'nome': cliente.nome,
                'cidade': cliente.cidade,
                'estado': cliente.estado,
                'endereco': cliente.endereco,
                'telefone': cliente.telefone,
                'cnpj': cliente.cnpj,
            },
            'vendedor': visita.vendedor.nome,
            'equipamento': laudo.equipamento,
            'numero_serie': laudo.numero_serie,
            'frota': laudo.frota,
            'horimetro_total': laudo.horimetro_total,
            'horimetro_esteira': laudo.horimetro_esteira,
            'condicao_solo': laudo.condicao_solo or None,
            'condicao_solo_label': laudo.get_condicao_solo_display() if laudo.condicao_solo else None,
            'componentes': [
                {
                    'tipo': c.tipo,
                    'tipo_label': c.get_tipo_display(),
                    'dimensao_std': _num(c.dimensao_std),
                    'limite_reparo': _num(c.limite_reparo),
                    'medicao_le': _num(c.medicao_le),
                    'medicao_ld': _num(c.medicao_ld),
                    'desgaste_le': _num(c.desgaste_le),
                    'desgaste_ld': _num(c.desgaste_ld),
                    'status_le': c.status_le or None,
                    'status_le_label': c.get_status_le_display() if c.status_le else None,
                    'status_ld': c.status_ld or None,
                    'status_ld_label': c.get_status_ld_display() if c.status_ld else None,
                    'observacao': c.observacao,
                }
                for c in laudo.componentes.all()
            ],
            'fotos': [
                {
                    'tipo': f.tipo,
                    'tipo_label': f.get_tipo_display(),
                    'lado': f.lado,
                    'lado_label': '' if f.lado == FotoComponente.Lado.AMBOS else f.get_lado_display(),
                    'url': f.url,
                    'legenda': f.legenda,
                }
                for f in fotos
            ],
            'sumario': laudo.sumario,
            'status': laudo.status,
            'data_envio': _data(timezone.localtime(laudo.data_envio)) if laudo.data_envio else None,
        }

    @staticmethod
    def visitas_do_inspetor(inspetor_id, data_inicio=None, data_fim=None) -> list:
        """
        Visitas confirmadas/realizadas do inspetor agrupadas por dia (mais recente primeiro),
        indicando quais já têm laudo.
        """
        queryset = (
            VisitaTecnica.objects
            .filter(
                inspetor_id=inspetor_id,
                status__in=[VisitaTecnica.Status.CONFIRMADA, VisitaTecnica.Status.REALIZADA],
                data_visita__isnull=False,
            )
            .select_related('cliente', 'vendedor', 'vendedor__usuario')
        )
        queryset = VisitaService.filtrar_periodo(queryset, None, data_inicio, data_fim)

        por_dia = OrderedDict()
        for visita in queryset.order_by('-data_visita', '-created_at'):
            por_dia.setdefault(visita.data_visita, []).append(visita)

        return [
            {'data': dia, 'dia_semana': dia_semana(dia), 'visitas': visitas}
            for dia, visitas in por_dia.items()
        ]
