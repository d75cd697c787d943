"""
ViewSets DRF de despesas de veículo - Tractus
"""
import logging

from django.core.exceptions import ValidationError
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import PodeAprovarDespesas, PodeConfigurarManutencao
from core.datas import intervalo_mes
from core.mixins import MensagemNaoEncontradoMixin, parametro_int, parametro_mes_ano
from .models import DespesaVeiculo, TipoManutencao
from .serializers import (
    ConfiguracaoManutencaoSerializer,
    DespesaVeiculoSerializer,
    IntervaloManutencaoSerializer,
    ReprovarDespesaSerializer,
)
from .services import DespesaVeiculoService, ManutencaoService

logger = logging.getLogger(__name__)


class DespesaVeiculoViewSet(MensagemNaoEncontradoMixin, viewsets.ModelViewSet):
    """
    ViewSet para despesas de veículo (mais recentes primeiro).

    Filtros: ?vendedor=, ?tipo=, ?status=, ?mes=&ano=
    Ações: aprovar, reprovar, dashboard, alertas, ultimo-km, configuracoes.
    """
    queryset = DespesaVeiculo.objects.select_related('vendedor', 'vendedor__usuario', 'aprovado_por').all()
    serializer_class = DespesaVeiculoSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ['vendedor', 'tipo', 'status']
    ordering_fields = ['data', 'km', 'valor']
    ordering = ['-data', '-created_at']
    mensagem_nao_encontrado = 'Despesa não encontrada'

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action == 'list':
            mes = parametro_int(self.request, 'mes')
            ano = parametro_int(self.request, 'ano')
            if mes and ano and 1 <= mes <= 12:
                inicio, fim = intervalo_mes(mes, ano)
                queryset = queryset.filter(data__gte=inicio, data__lt=fim)
        return queryset

    def get_permissions(self):
        if self.action in ('aprovar', 'reprovar'):
            return [IsAuthenticated(), PodeAprovarDespesas()]
        if self.action == 'configuracao':
            return [IsAuthenticated(), PodeConfigurarManutencao()]
        return super().get_permissions()

    @action(detail=True, methods=['post'])
    def aprovar(self, request, pk=None):
        despesa = DespesaVeiculoService.aprovar(self.get_object(), request.user)
        return Response(self.get_serializer(despesa).data)

    @action(detail=True, methods=['post'])
    def reprovar(self, request, pk=None):
        serializer = ReprovarDespesaSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        despesa = DespesaVeiculoService.reprovar(
            self.get_object(),
            request.user,
            serializer.validated_data.get('motivo_reprovacao', ''),
        )
        return Response(self.get_serializer(despesa).data)

    @action(detail=False, methods=['get'])
    def dashboard(self, request):
        mes, ano = parametro_mes_ano(request)
        return Response(DespesaVeiculoService.dashboard(mes, ano, parametro_int(request, 'vendedor')))

    @action(detail=False, methods=['get'])
    def alertas(self, request):
        """Manutenções próximas ou vencidas (?vendedor= opcional)."""
        return Response(ManutencaoService.alertas(parametro_int(request, 'vendedor')))

    @action(detail=False, methods=['get'], url_path=r'ultimo-km/(?P<vendedor_id>\d+)')
    def ultimo_km(self, request, vendedor_id=None):
        ultima = DespesaVeiculoService.ultimo_registro(vendedor_id)
        return Response({
            'ultimo_km': ultima.km if ultima else None,
            'data_ultimo_registro': ultima.data if ultima else None,
        })

    @action(detail=False, methods=['get'])
    def configuracoes(self, request):
        """Intervalos de manutenção vigentes (configurados ou padrão)."""
        return Response(ManutencaoService.configuracoes())

    @action(
        detail=False,
        methods=['put'],
        url_path=r'configuracoes/(?P<tipo>[A-Z_]+)',
    )
    def configuracao(self, request, tipo=None):
        if tipo not in TipoManutencao.values:
            raise ValidationError(f"Tipo de manutenção inválido: {tipo}")
        serializer = IntervaloManutencaoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        config = ManutencaoService.salvar_configuracao(tipo, serializer.validated_data['intervalo_km'])
        return Response(ConfiguracaoManutencaoSerializer(config).data)
