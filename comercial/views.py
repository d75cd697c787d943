"""
ViewSets DRF do módulo Comercial - Tractus

Clientes, anotações, propostas (com liberação de custo), ordens de serviço,
vendas e metas.
"""
import logging

from django.core.exceptions import ValidationError
from django.db.models import Count, ProtectedError, Q
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import PodeAprovarCustos
from core.mixins import MensagemNaoEncontradoMixin, parametro_int, parametro_mes_ano
from .models import (
    Cliente,
    ClienteAnotacao,
    LiberacaoCusto,
    MetaVenda,
    OrdemServico,
    Proposta,
    Venda,
)
from .serializers import (
    ClienteAnotacaoSerializer,
    ClienteDetalheSerializer,
    ClienteSerializer,
    DecisaoLiberacaoSerializer,
    LiberacaoCustoSerializer,
    MetaSerializer,
    OrdemServicoSerializer,
    PropostaDetalheSerializer,
    PropostaSerializer,
    ResumoAnotacoesSerializer,
    StatusOrdemServicoSerializer,
    StatusPropostaSerializer,
    VendaSerializer,
)
from .services import (
    AnotacaoService,
    ClienteService,
    MetaService,
    OrdemServicoService,
    PropostaService,
)

logger = logging.getLogger(__name__)


class ClienteViewSet(MensagemNaoEncontradoMixin, viewsets.ModelViewSet):
    """
    ViewSet para clientes ativos.

    DELETE faz exclusão lógica (ativo=False).
    """
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['vendedor', 'cidade', 'estado']
    search_fields = ['nome', 'razao_social', 'cnpj', 'cidade']
    ordering_fields = ['nome', 'created_at']
    ordering = ['nome']
    mensagem_nao_encontrado = 'Cliente não encontrado'

    def get_queryset(self):
        return (
            Cliente.objects
            .filter(ativo=True)
            .select_related('vendedor', 'vendedor__usuario')
            .annotate(os_abertas=Count(
                'ordens_servico',
                filter=Q(ordens_servico__status=OrdemServico.Status.ABERTA),
            ))
        )

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return ClienteDetalheSerializer
        return ClienteSerializer

    def perform_destroy(self, instance):
        ClienteService.excluir(instance)


class ClienteAnotacaoViewSet(MensagemNaoEncontradoMixin,
                             mixins.CreateModelMixin,
                             mixins.ListModelMixin,
                             mixins.RetrieveModelMixin,
                             mixins.DestroyModelMixin,
                             viewsets.GenericViewSet):
    """
    Anotações dos vendedores sobre clientes (mais recentes primeiro).

    Filtros: ?cliente=, ?vendedor=
    """
    queryset = ClienteAnotacao.objects.select_related('vendedor', 'vendedor__usuario').all()
    serializer_class = ClienteAnotacaoSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['cliente', 'vendedor']
    mensagem_nao_encontrado = 'Anotação não encontrada'

    @action(detail=False, methods=['post'])
    def resumir(self, request):
        """Resumo executivo (IA) das anotações de um vendedor sobre um cliente."""
        serializer = ResumoAnotacoesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        resultado = AnotacaoService.resumir(
            serializer.validated_data.get('cliente'),
            serializer.validated_data.get('vendedor'),
        )
        return Response(resultado)


class PropostaViewSet(MensagemNaoEncontradoMixin, viewsets.ModelViewSet):
    """
    ViewSet para propostas.

    Ações:
    - PATCH /{id}/status/
    - POST /{id}/liberar-custo/ (solicita) e PATCH /{id}/liberar-custo/ (decide)
    """
    queryset = Proposta.objects.select_related('cliente', 'vendedor', 'vendedor__usuario').all()
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['status', 'cliente', 'vendedor', 'categoria']
    search_fields = ['numero', 'cliente__nome']
    ordering_fields = ['created_at', 'valor', 'numero']
    ordering = ['-created_at']
    mensagem_nao_encontrado = 'Proposta não encontrada'

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return PropostaDetalheSerializer
        return PropostaSerializer

    def get_permissions(self):
        if self.action == 'liberar_custo' and self.request.method == 'PATCH':
            return [IsAuthenticated(), PodeAprovarCustos()]
        return super().get_permissions()

    def perform_destroy(self, instance):
        try:
            instance.delete()
        except ProtectedError:
            raise ValidationError('Proposta possui ordem de serviço vinculada e não pode ser excluída')

    @action(detail=True, methods=['patch'])
    def status(self, request, pk=None):
        """Altera o status da proposta (motivo_cancelamento opcional)."""
        proposta = self.get_object()
        serializer = StatusPropostaSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        PropostaService.alterar_status(
            proposta,
            serializer.validated_data['status'],
            serializer.validated_data.get('motivo_cancelamento', ''),
        )
        return Response(PropostaDetalheSerializer(proposta).data)

    @action(detail=True, methods=['post', 'patch'], url_path='liberar-custo')
    def liberar_custo(self, request, pk=None):
        proposta = self.get_object()

        if request.method == 'POST':
            liberacao = PropostaService.solicitar_liberacao(proposta)
            return Response(LiberacaoCustoSerializer(liberacao).data, status=status.HTTP_201_CREATED)

        liberacao = LiberacaoCusto.objects.filter(proposta=proposta).first()
        if liberacao is None:
            raise NotFound('Liberação não encontrada')

        serializer = DecisaoLiberacaoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        liberacao = PropostaService.decidir_liberacao(
            liberacao,
            serializer.validated_data['status'],
            usuario=request.user,
            custo_real=serializer.validated_data.get('custo_real'),
            observacoes=serializer.validated_data.get('observacoes'),
        )
        return Response(LiberacaoCustoSerializer(liberacao).data)


class OrdemServicoViewSet(MensagemNaoEncontradoMixin, viewsets.ModelViewSet):
    """
    ViewSet para ordens de serviço.

    OS não são excluídas; use o status CANCELADA.
    """
    queryset = OrdemServico.objects.select_related('cliente', 'proposta').all()
    serializer_class = OrdemServicoSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['status', 'cliente']
    search_fields = ['numero', 'cliente__nome']
    ordering_fields = ['created_at', 'valor_total', 'data_previsao']
    ordering = ['-created_at']
    http_method_names = ['get', 'post', 'put', 'patch', 'head', 'options']
    mensagem_nao_encontrado = 'Ordem de serviço não encontrada'

    @action(detail=False, methods=['post'], url_path=r'from-proposta/(?P<proposta_id>\d+)')
    def from_proposta(self, request, proposta_id=None):
        """Gera a OS a partir de uma proposta aprovada."""
        proposta = Proposta.objects.filter(pk=proposta_id).first()
        if proposta is None:
            raise NotFound('Proposta não encontrada')
        ordem = OrdemServicoService.criar_de_proposta(proposta)
        return Response(OrdemServicoSerializer(ordem).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['patch'])
    def status(self, request, pk=None):
        """Altera o status; FATURADA registra a venda."""
        ordem = self.get_object()
        serializer = StatusOrdemServicoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ordem = OrdemServicoService.alterar_status(ordem, serializer.validated_data['status'])
        return Response(OrdemServicoSerializer(ordem).data)


class VendaViewSet(MensagemNaoEncontradoMixin, viewsets.ReadOnlyModelViewSet):
    """Vendas registradas no faturamento das OS (somente leitura)."""
    queryset = Venda.objects.select_related('vendedor', 'vendedor__usuario').all()
    serializer_class = VendaSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ['vendedor', 'categoria', 'semana']
    ordering = ['-data']
    mensagem_nao_encontrado = 'Venda não encontrada'

    def get_queryset(self):
        queryset = super().get_queryset()
        mes = parametro_int(self.request, 'mes')
        ano = parametro_int(self.request, 'ano')
        if mes:
            queryset = queryset.filter(data__month=mes)
        if ano:
            queryset = queryset.filter(data__year=ano)
        return queryset


class MetaViewSet(MensagemNaoEncontradoMixin, viewsets.ModelViewSet):
    """
    Metas de vendas.

    POST é upsert por (vendedor, mês, ano, categoria).
    GET /metas/dashboard/?mes=&ano= consolida meta x realizado.
    """
    queryset = MetaVenda.objects.select_related('vendedor', 'vendedor__usuario').all()
    serializer_class = MetaSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['vendedor', 'mes', 'ano', 'categoria']
    mensagem_nao_encontrado = 'Meta não encontrada'

    @action(detail=False, methods=['get'])
    def dashboard(self, request):
        mes, ano = parametro_mes_ano(request)
        return Response(MetaService.dashboard(mes, ano))
