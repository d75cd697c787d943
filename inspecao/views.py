"""
ViewSets DRF do módulo de Inspeção - Tractus

Visitas técnicas (agenda, resumo e transições de status) e laudos de
inspeção (criação, envio, IA, histórico e dados para impressão).
"""
import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core import ia
from core.mixins import MensagemNaoEncontradoMixin, parametro_data, parametro_int, parametro_mes_ano
from .models import LaudoInspecao, VisitaTecnica
from .serializers import (
    CancelarVisitaSerializer,
    CorrigirTextoSerializer,
    GerarSumarioSerializer,
    LaudoHistoricoSerializer,
    LaudoInspecaoSerializer,
    VisitaInspetorSerializer,
    VisitaTecnicaSerializer,
)
from .services import VALORES_PADRAO, LaudoService, VisitaService

logger = logging.getLogger(__name__)


class VisitaTecnicaViewSet(MensagemNaoEncontradoMixin, viewsets.ModelViewSet):
    """
    ViewSet para visitas técnicas.

    Filtros: ?vendedor=, ?cliente=, ?inspetor=, ?status=, ?data= ou
    ?data_inicio=/&data_fim=, ?limit=/&offset=.
    """
    queryset = VisitaTecnica.objects.select_related(
        'cliente', 'vendedor', 'vendedor__usuario', 'inspetor',
    ).all()
    serializer_class = VisitaTecnicaSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['vendedor', 'cliente', 'inspetor', 'status']
    mensagem_nao_encontrado = 'Visita técnica não encontrada'

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action == 'list':
            queryset = VisitaService.filtrar_periodo(
                queryset,
                parametro_data(self.request, 'data'),
                parametro_data(self.request, 'data_inicio'),
                parametro_data(self.request, 'data_fim'),
            )
        return queryset.order_by('data_visita', 'created_at')

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        offset = parametro_int(request, 'offset', 0)
        limit = parametro_int(request, 'limit')
        if limit is not None:
            queryset = queryset[offset:offset + limit]
        elif offset:
            queryset = queryset[offset:]
        return Response(self.get_serializer(queryset, many=True).data)

    def perform_update(self, serializer):
        VisitaService.validar_edicao(serializer.instance)
        serializer.save()

    def perform_destroy(self, instance):
        VisitaService.excluir(instance)

    @action(detail=False, methods=['get'])
    def agenda(self, request):
        """Visitas pendentes/confirmadas por dia (a partir de hoje, por padrão)."""
        resultado = VisitaService.agenda(
            parametro_data(request, 'data'),
            parametro_data(request, 'data_inicio'),
            parametro_data(request, 'data_fim'),
        )
        for dia in resultado['agenda']:
            dia['visitas'] = VisitaTecnicaSerializer(dia['visitas'], many=True).data
        return Response(resultado)

    @action(detail=False, methods=['get'])
    def resumo(self, request):
        mes, ano = parametro_mes_ano(request)
        return Response(VisitaService.resumo(mes, ano))

    @action(detail=True, methods=['post'])
    def confirmar(self, request, pk=None):
        visita = VisitaService.confirmar(self.get_object())
        return Response(self.get_serializer(visita).data)

    @action(detail=True, methods=['post'])
    def realizar(self, request, pk=None):
        visita = VisitaService.realizar(self.get_object())
        return Response(self.get_serializer(visita).data)

    @action(detail=True, methods=['post'])
    def cancelar(self, request, pk=None):
        serializer = CancelarVisitaSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        visita = VisitaService.cancelar(self.get_object(), serializer.validated_data.get('motivo', ''))
        return Response(self.get_serializer(visita).data)


class LaudoInspecaoViewSet(MensagemNaoEncontradoMixin, viewsets.ModelViewSet):
    """
    ViewSet para laudos de inspeção.

    Filtros: ?inspetor=, ?status=, ?data_inicio=/&data_fim= (data da inspeção).
    Laudo ENVIADO não pode ser alterado nem excluído.
    """
    queryset = LaudoInspecao.objects.select_related(
        'inspetor', 'visita', 'visita__cliente', 'visita__vendedor', 'visita__vendedor__usuario',
    ).prefetch_related('componentes', 'fotos')
    serializer_class = LaudoInspecaoSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ['inspetor', 'status']
    ordering = ['-data_inspecao', '-created_at']
    mensagem_nao_encontrado = 'Laudo não encontrado'

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action == 'list':
            data_inicio = parametro_data(self.request, 'data_inicio')
            data_fim = parametro_data(self.request, 'data_fim')
            if data_inicio:
                queryset = queryset.filter(data_inspecao__gte=data_inicio)
            if data_fim:
                queryset = queryset.filter(data_inspecao__lte=data_fim)
        return queryset

    def create(self, request, *args, **kwargs):
        visita_id = request.data.get('visita')
        visita = VisitaTecnica.objects.filter(pk=visita_id).first() if str(visita_id or '').isdigit() else None
        if visita is None:
            raise NotFound('Visita técnica não encontrada')

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        inspetor = serializer.validated_data.get('inspetor') or visita.inspetor or request.user
        laudo = serializer.save(visita=visita, inspetor=inspetor)
        return Response(self.get_serializer(laudo).data, status=status.HTTP_201_CREATED)

    def perform_destroy(self, instance):
        LaudoService.excluir(instance)

    @action(detail=True, methods=['post'])
    def enviar(self, request, pk=None):
        """Envia o laudo (final) e marca a visita como realizada."""
        laudo = LaudoService.enviar(self.get_object())
        return Response(self.get_serializer(self.get_queryset().get(pk=laudo.pk)).data)

    @action(detail=True, methods=['get'], url_path='pdf-data')
    def pdf_data(self, request, pk=None):
        return Response(LaudoService.dados_impressao(self.get_object()))

    @action(detail=False, methods=['get'], url_path=r'visita/(?P<visita_id>\d+)')
    def por_visita(self, request, visita_id=None):
        laudo = self.get_queryset().filter(visita_id=visita_id).first()
        if laudo is None:
            raise NotFound('Laudo não encontrado para esta visita')
        return Response(self.get_serializer(laudo).data)

    @action(detail=False, methods=['get'], url_path=r'historico/(?P<inspetor_id>\d+)')
    def historico(self, request, inspetor_id=None):
        """Laudos do inspetor, mais recentes primeiro."""
        laudos = self.get_queryset().filter(inspetor_id=inspetor_id)
        data_inicio = parametro_data(request, 'data_inicio')
        data_fim = parametro_data(request, 'data_fim')
        if data_inicio:
            laudos = laudos.filter(data_inspecao__gte=data_inicio)
        if data_fim:
            laudos = laudos.filter(data_inspecao__lte=data_fim)
        laudos = laudos.order_by('-data_inspecao', '-created_at')
        return Response(LaudoHistoricoSerializer(laudos, many=True).data)

    @action(detail=False, methods=['get'], url_path=r'meus-laudos/(?P<inspetor_id>\d+)')
    def meus_laudos(self, request, inspetor_id=None):
        """Visitas confirmadas/realizadas do inspetor agrupadas por dia."""
        dias = LaudoService.visitas_do_inspetor(
            inspetor_id,
            parametro_data(request, 'data_inicio'),
            parametro_data(request, 'data_fim'),
        )
        for dia in dias:
            dia['visitas'] = VisitaInspetorSerializer(dia['visitas'], many=True).data
        return Response(dias)

    @action(detail=False, methods=['get'], url_path=r'valores-padrao/(?P<equipamento>[^/]+)')
    def valores_padrao(self, request, equipamento=None):
        """Dimensão std e limite de reparo genéricos por componente."""
        return Response({str(tipo): valores for tipo, valores in VALORES_PADRAO.items()})

    @action(detail=False, methods=['post'], url_path='corrigir-texto')
    def corrigir_texto(self, request):
        """Correção de texto técnico com IA; sem texto devolve vazio."""
        serializer = CorrigirTextoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        texto = serializer.validated_data.get('texto', '')
        if not texto.strip():
            return Response({'texto_original': texto, 'texto_corrigido': texto, 'corrigido': False})
        return Response(ia.corrigir_texto(texto, tecnico=True))

    @action(detail=False, methods=['post'], url_path='gerar-sumario')
    def gerar_sumario(self, request):
        serializer = GerarSumarioSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dados = serializer.validated_data
        return Response(LaudoService.gerar_sumario(
            dados['equipamento'],
            dados['componentes'],
            dados.get('sumario_atual', ''),
        ))
