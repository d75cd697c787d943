"""
Fixtures compartilhadas pelos testes do Tractus.
"""
from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from accounts.models import Vendedor
from accounts.perfis import PERFIS
from accounts.services import UsuarioService
from comercial.models import Categoria, Cliente, LiberacaoCusto, Proposta
from comercial.services import PropostaService
from inspecao.models import VisitaTecnica

User = get_user_model()


@pytest.fixture(autouse=True)
def sem_chave_ia(settings):
    """Nenhum teste chama a API de IA real."""
    settings.GEMINI_API_KEY = ''


@pytest.fixture
def criar_usuario(db):
    """Fábrica de usuários com perfil (senha padrão: senha123)."""
    def _criar(email, role=PERFIS.COMERCIAL, nome='Usuário Teste', senha='senha123', ativo=True):
        return UsuarioService.criar_usuario(nome=nome, email=email, senha=senha, role=role, ativo=ativo)
    return _criar


@pytest.fixture
def admin_user(criar_usuario):
    return criar_usuario('admin@teste.com', PERFIS.ADMIN, nome='Admin Teste')


@pytest.fixture
def user_comercial(criar_usuario):
    return criar_usuario('comercial@teste.com', PERFIS.COMERCIAL, nome='Carlos Comercial')


@pytest.fixture
def user_inspetor(criar_usuario):
    return criar_usuario('inspetor@teste.com', PERFIS.INSPETOR, nome='Ivo Inspetor')


@pytest.fixture
def user_financeiro(criar_usuario):
    return criar_usuario('financeiro@teste.com', PERFIS.FINANCEIRO, nome='Fátima Financeiro')


@pytest.fixture
def user_orcamento(criar_usuario):
    return criar_usuario('orcamento@teste.com', PERFIS.ORCAMENTO, nome='Otávio Orçamento')


@pytest.fixture
def vendedor(user_comercial):
    return Vendedor.objects.create(usuario=user_comercial)


@pytest.fixture
def outro_vendedor(criar_usuario):
    user = criar_usuario('vendedor2@teste.com', PERFIS.COMERCIAL, nome='Vera Vendedora')
    return Vendedor.objects.create(usuario=user)


@pytest.fixture
def cliente(db, vendedor):
    return Cliente.objects.create(
        nome='Mineração Teste',
        cnpj='11.222.333/0001-81',
        cidade='Itabira',
        estado='MG',
        vendedor=vendedor,
    )


@pytest.fixture
def proposta(cliente, vendedor):
    return PropostaService.criar(
        cliente=cliente,
        vendedor=vendedor,
        valor=Decimal('10000.00'),
        custo_estimado=Decimal('6000.00'),
        categoria=Categoria.RODANTE,
    )


@pytest.fixture
def proposta_aprovada(proposta, admin_user):
    liberacao = PropostaService.solicitar_liberacao(proposta)
    PropostaService.decidir_liberacao(liberacao, LiberacaoCusto.Status.APROVADO, usuario=admin_user)
    proposta.refresh_from_db()
    assert proposta.status == Proposta.Status.APROVADA
    return proposta


@pytest.fixture
def visita(cliente, vendedor, user_inspetor):
    return VisitaTecnica.objects.create(
        vendedor=vendedor,
        cliente=cliente,
        inspetor=user_inspetor,
        data_visita=date.today() + timedelta(days=1),
        equipamentos=['Escavadeira CAT 320'],
    )


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_client(api_client, admin_user):
    api_client.force_authenticate(user=admin_user)
    return api_client


@pytest.fixture
def comercial_client(api_client, user_comercial):
    api_client.force_authenticate(user=user_comercial)
    return api_client
