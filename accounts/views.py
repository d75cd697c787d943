"""
Views da API de autenticação, usuários e vendedores.
"""
import logging

from django.contrib.auth import authenticate, get_user_model
from rest_framework import filters, status, viewsets
from rest_framework.authtoken.models import Token
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from core.mixins import MensagemNaoEncontradoMixin
from .models import Vendedor
from .permissions import PodeAdministrarUsuarios
from .serializers import (
    LoginSerializer,
    UsuarioSerializer,
    VendedorDetalheSerializer,
    VendedorSerializer,
    dados_usuario,
)
from .services import UsuarioService

logger = logging.getLogger(__name__)

User = get_user_model()


@api_view(['POST'])
@permission_classes([AllowAny])
def login_api(request):
    """
    Login por e-mail e senha.

    Retorna ``{token, user}``; credenciais inválidas ou usuário inativo -> 401.
    """
    serializer = LoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    email = serializer.validated_data['email']
    user = authenticate(request, username=email, password=serializer.validated_data['password'])

    if user is None:
        logger.info(f"Tentativa de login inválida para {email}")
        return Response({'error': 'Credenciais inválidas'}, status=status.HTTP_401_UNAUTHORIZED)

    token, _ = Token.objects.get_or_create(user=user)
    return Response({'token': token.key, 'user': dados_usuario(user)})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me_api(request):
    """Dados do usuário autenticado."""
    return Response(dados_usuario(request.user))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout_api(request):
    """Revoga o token do usuário."""
    Token.objects.filter(user=request.user).delete()
    return Response(status=status.HTTP_204_NO_CONTENT)


class UsuarioViewSet(MensagemNaoEncontradoMixin, viewsets.ModelViewSet):
    """
    ViewSet para usuários do sistema.

    Filtros: ?role=COMERCIAL, ?active=true
    Ações: POST/DELETE /users/{id}/vendedor/ cadastra ou remove o vendedor.
    """
    serializer_class = UsuarioSerializer
    permission_classes = [IsAuthenticated, PodeAdministrarUsuarios]
    filter_backends = [filters.SearchFilter]
    search_fields = ['first_name', 'email']
    mensagem_nao_encontrado = 'Usuário não encontrado'

    def get_queryset(self):
        queryset = User.objects.select_related('perfil', 'vendedor').order_by('first_name', 'email')
        role = self.request.query_params.get('role')
        if role:
            queryset = queryset.filter(perfil__role=role)
        ativo = self.request.query_params.get('active')
        if ativo is not None:
            queryset = queryset.filter(is_active=ativo.lower() in ('true', '1', 'yes'))
        return queryset

    @action(detail=True, methods=['post', 'delete'])
    def vendedor(self, request, pk=None):
        """Cadastra (POST) ou remove (DELETE) o usuário como vendedor."""
        user = self.get_object()
        if request.method == 'DELETE':
            UsuarioService.remover_vendedor(user)
            return Response(status=status.HTTP_204_NO_CONTENT)

        vendedor = UsuarioService.tornar_vendedor(user)
        return Response(VendedorSerializer(vendedor).data, status=status.HTTP_201_CREATED)


class VendedorViewSet(MensagemNaoEncontradoMixin, viewsets.ReadOnlyModelViewSet):
    """
    ViewSet (somente leitura) para vendedores.

    O cadastro é feito pelo endpoint de usuários.
    """
    queryset = Vendedor.objects.select_related('usuario', 'usuario__perfil').all()
    permission_classes = [IsAuthenticated]
    mensagem_nao_encontrado = 'Vendedor não encontrado'

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return VendedorDetalheSerializer
        return VendedorSerializer

    @action(detail=True, methods=['get'])
    def dashboard(self, request, pk=None):
        """Metas do mês, total vendido no mês e propostas por status."""
        from comercial.services import MetaService
        vendedor = self.get_object()
        return Response(MetaService.dashboard_vendedor(vendedor))
