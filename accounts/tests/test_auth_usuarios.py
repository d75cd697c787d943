"""
Testes de autenticação por token, CRUD de usuários e vendedores.
"""
import pytest
from django.contrib.auth import get_user_model
from rest_framework.authtoken.models import Token

from accounts.models import Perfil, Vendedor
from accounts.perfis import PERFIS
from accounts.permissions import perfil_de
from accounts.services import UsuarioService
from comercial.models import Categoria, MetaVenda

User = get_user_model()


@pytest.mark.django_db
class TestLogin:

    def test_login_retorna_token_e_usuario(self, api_client, user_comercial):
        response = api_client.post(
            '/api/auth/login/',
            {'email': 'COMERCIAL@teste.com', 'password': 'senha123'},
            format='json',
        )
        assert response.status_code == 200
        assert response.data['token']
        assert response.data['user']['email'] == 'comercial@teste.com'
        assert response.data['user']['role'] == PERFIS.COMERCIAL
        assert response.data['user']['name'] == 'Carlos Comercial'

    def test_senha_errada_retorna_401(self, api_client, user_comercial):
        response = api_client.post(
            '/api/auth/login/',
            {'email': 'comercial@teste.com', 'password': 'errada123'},
            format='json',
        )
        assert response.status_code == 401
        assert response.data == {'error': 'Credenciais inválidas'}

    def test_email_inexistente_retorna_401(self, api_client, db):
        response = api_client.post(
            '/api/auth/login/',
            {'email': 'ninguem@teste.com', 'password': 'senha123'},
            format='json',
        )
        assert response.status_code == 401

    def test_usuario_inativo_nao_entra(self, api_client, criar_usuario):
        criar_usuario('inativo@teste.com', ativo=False)
        response = api_client.post(
            '/api/auth/login/',
            {'email': 'inativo@teste.com', 'password': 'senha123'},
            format='json',
        )
        assert response.status_code == 401

    def test_senha_curta_e_erro_de_validacao(self, api_client, db):
        response = api_client.post(
            '/api/auth/login/',
            {'email': 'a@teste.com', 'password': '123'},
            format='json',
        )
        assert response.status_code == 400
        assert 'password' in response.data['detalhes']

    def test_me_e_logout(self, api_client, user_inspetor):
        token = Token.objects.create(user=user_inspetor)
        api_client.credentials(HTTP_AUTHORIZATION=f'Token {token.key}')

        response = api_client.get('/api/auth/me/')
        assert response.status_code == 200
        assert response.data['role'] == PERFIS.INSPETOR
        assert response.data['vendedor_id'] is None

        response = api_client.post('/api/auth/logout/')
        assert response.status_code == 204
        assert not Token.objects.filter(user=user_inspetor).exists()

        response = api_client.get('/api/auth/me/')
        assert response.status_code == 401

    def test_me_sem_token_retorna_401(self, api_client, db):
        response = api_client.get('/api/auth/me/')
        assert response.status_code == 401
        assert 'error' in response.data


@pytest.mark.django_db
class TestPerfis:

    def test_usuario_novo_recebe_perfil_e_grupo(self, db):
        user = User.objects.create_user(username='novo@teste.com', email='novo@teste.com', password='x' * 8)
        assert user.perfil.role == PERFIS.COMERCIAL
        assert user.groups.filter(name=PERFIS.LABELS[PERFIS.COMERCIAL]).exists()

    def test_troca_de_perfil_troca_grupo(self, user_comercial):
        perfil = user_comercial.perfil
        perfil.role = PERFIS.FINANCEIRO
        perfil.save()
        grupos = set(user_comercial.groups.values_list('name', flat=True))
        assert grupos == {PERFIS.LABELS[PERFIS.FINANCEIRO]}

    def test_superusuario_conta_como_admin(self, db):
        user = User.objects.create_superuser(username='root', email='root@teste.com', password='senha123')
        assert perfil_de(user) == PERFIS.ADMIN
        assert Perfil.objects.get(usuario=user).role == PERFIS.ADMIN

    def test_servico_devolve_perfil_atualizado(self, db):
        user = UsuarioService.criar_usuario(
            nome='Dora Diretora', email='dora@teste.com', senha='senha123', role=PERFIS.DIRETOR,
        )
        assert user.perfil.role == PERFIS.DIRETOR
        assert perfil_de(user) == PERFIS.DIRETOR

        UsuarioService.atualizar_usuario(user, role=PERFIS.FINANCEIRO)
        assert perfil_de(user) == PERFIS.FINANCEIRO
        assert Perfil.objects.get(usuario=user).role == PERFIS.FINANCEIRO


@pytest.mark.django_db
class TestUsuariosAPI:

    def test_comercial_nao_gerencia_usuarios(self, comercial_client):
        response = comercial_client.get('/api/users/')
        assert response.status_code == 403
        assert 'error' in response.data

    def test_criar_usuario(self, admin_client):
        response = admin_client.post('/api/users/', {
            'name': 'Nova Pessoa',
            'email': 'Nova@Teste.com',
            'password': 'senha123',
            'role': PERFIS.INSPETOR,
        }, format='json')
        assert response.status_code == 201
        user = User.objects.get(email='nova@teste.com')
        assert user.username == 'nova@teste.com'
        assert user.perfil.role == PERFIS.INSPETOR
        assert user.check_password('senha123')
        assert response.data['perfil']['role'] == PERFIS.INSPETOR
        assert 'password' not in response.data

    def test_email_duplicado(self, admin_client, user_comercial):
        response = admin_client.post('/api/users/', {
            'name': 'Duplicado',
            'email': 'comercial@teste.com',
            'password': 'senha123',
            'role': PERFIS.COMERCIAL,
        }, format='json')
        assert response.status_code == 400
        assert 'Este email já está em uso' in response.data['error']

    def test_filtro_por_role(self, admin_client, user_comercial, user_inspetor):
        response = admin_client.get('/api/users/', {'role': PERFIS.INSPETOR})
        assert response.status_code == 200
        assert [u['email'] for u in response.data] == ['inspetor@teste.com']

    def test_atualizar_email_e_perfil(self, admin_client, user_comercial):
        response = admin_client.patch(
            f'/api/users/{user_comercial.id}/',
            {'email': 'carlos@teste.com', 'role': PERFIS.ORCAMENTO},
            format='json',
        )
        assert response.status_code == 200
        assert response.data['perfil']['role'] == PERFIS.ORCAMENTO
        user_comercial.refresh_from_db()
        assert user_comercial.username == 'carlos@teste.com'
        assert user_comercial.perfil.role == PERFIS.ORCAMENTO

    def test_usuario_inexistente(self, admin_client):
        response = admin_client.get('/api/users/9999/')
        assert response.status_code == 404
        assert response.data == {'error': 'Usuário não encontrado'}

    def test_cadastrar_e_remover_vendedor(self, admin_client, user_comercial):
        url = f'/api/users/{user_comercial.id}/vendedor/'
        assert admin_client.post(url).status_code == 201
        assert Vendedor.objects.filter(usuario=user_comercial).exists()

        response = admin_client.post(url)
        assert response.status_code == 400
        assert response.data['error'] == 'Usuário já é um vendedor'

        assert admin_client.delete(url).status_code == 204
        response = admin_client.delete(url)
        assert response.status_code == 400
        assert response.data['error'] == 'Usuário não é um vendedor'


@pytest.mark.django_db
class TestVendedoresAPI:

    def test_listagem_com_contadores(self, comercial_client, vendedor, cliente):
        response = comercial_client.get('/api/vendedores/')
        assert response.status_code == 200
        assert response.data[0]['total_clientes'] == 1
        assert response.data[0]['name'] == 'Carlos Comercial'

    def test_detalhe_traz_clientes_e_metas(self, comercial_client, vendedor, cliente):
        from django.utils import timezone
        hoje = timezone.localdate()
        MetaVenda.objects.create(
            vendedor=vendedor, mes=hoje.month, ano=hoje.year,
            categoria=Categoria.PECA, valor_meta='1000.00',
        )
        response = comercial_client.get(f'/api/vendedores/{vendedor.id}/')
        assert response.status_code == 200
        assert [c['nome'] for c in response.data['clientes']] == ['Mineração Teste']
        assert len(response.data['metas']) == 1

    def test_dashboard_do_vendedor(self, comercial_client, vendedor, proposta):
        response = comercial_client.get(f'/api/vendedores/{vendedor.id}/dashboard/')
        assert response.status_code == 200
        assert response.data['vendido_mes'] == 0.0
        assert response.data['propostas'] == [{'status': 'EM_ABERTO', 'total': 1}]
