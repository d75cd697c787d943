"""
Testes do núcleo: navegação por perfil, tratamento de erros, numeração,
middlewares, páginas do dashboard e comandos de manutenção.
"""
from datetime import date
from io import StringIO

import pytest
from django.contrib.auth.models import Group
from django.core.exceptions import ValidationError
from django.core.management import call_command
from django.test import Client
from rest_framework import exceptions

from accounts.perfis import PERFIS
from comercial.models import Cliente, MetaVenda, OrdemServico
from core.datas import intervalo_mes
from core.exceptions import tractus_exception_handler
from core.navegacao import menu_para, pode_acessar_rota
from core.numeracao import prefixo_diario, salvar_com_numero


class TestNavegacao:

    @pytest.mark.parametrize('perfil, rota, permitido', [
        (PERFIS.ADMIN, '/qualquer/coisa', True),
        (PERFIS.DIRETOR, '/configuracoes/usuarios', True),
        (PERFIS.COMERCIAL, '/comercial/propostas', True),
        (PERFIS.COMERCIAL, '/comercial/propostas/12', True),
        (PERFIS.COMERCIAL, '/comercial/propostas-antigas', False),
        (PERFIS.COMERCIAL, '/comercial/laudos-inspetor', False),
        (PERFIS.COMERCIAL, '/comercial/agenda-inspetor', False),
        (PERFIS.COMERCIAL, '/comercial', True),
        (PERFIS.COMERCIAL, '/comercial/clientes/7/editar', True),
        (PERFIS.INSPETOR, '/comercial/agenda-inspetor/', True),
        (PERFIS.INSPETOR, '/comercial/clientes', False),
        (PERFIS.FINANCEIRO, '/comercial/despesas-veiculo', True),
        (PERFIS.RH, '/pcp', False),
        (None, '/dashboard', False),
    ])
    def test_pode_acessar_rota(self, perfil, rota, permitido):
        assert pode_acessar_rota(perfil, rota) is permitido

    @pytest.mark.django_db
    def test_menu_do_inspetor(self, user_inspetor):
        menu = menu_para(user_inspetor)
        assert [item['titulo'] for item in menu] == ['Dashboard', 'Comercial']
        assert [s['rota'] for s in menu[1]['subitens']] == [
            '/comercial/agenda-inspetor', '/comercial/laudos-inspetor',
        ]

    def test_menu_anonimo(self):
        from django.contrib.auth.models import AnonymousUser
        assert menu_para(AnonymousUser()) == []


class TestExceptionHandler:

    def _context(self):
        return {'view': object()}

    def test_regra_de_negocio_vira_400(self):
        response = tractus_exception_handler(ValidationError('Proposta precisa estar aprovada'), self._context())
        assert response.status_code == 400
        assert response.data == {'error': 'Proposta precisa estar aprovada'}

    def test_erro_de_serializer_traz_detalhes(self):
        exc = exceptions.ValidationError({'nome': ['Este campo é obrigatório.']})
        response = tractus_exception_handler(exc, self._context())
        assert response.data['error'] == 'nome: Este campo é obrigatório.'
        assert 'nome' in response.data['detalhes']

    def test_non_field_errors_sem_prefixo(self):
        exc = exceptions.ValidationError({'non_field_errors': ['Período inválido']})
        response = tractus_exception_handler(exc, self._context())
        assert response.data['error'] == 'Período inválido'

    def test_not_found(self):
        response = tractus_exception_handler(exceptions.NotFound('Cliente não encontrado'), self._context())
        assert response.status_code == 404
        assert response.data == {'error': 'Cliente não encontrado'}


class TestDatas:

    def test_intervalo_dezembro(self):
        assert intervalo_mes(12, 2024) == (date(2024, 12, 1), date(2025, 1, 1))

    @pytest.mark.parametrize('mes, ano', [(13, 2025), (0, 2025), (5, 0), (12, 9999)])
    def test_intervalo_fora_da_faixa(self, mes, ano):
        with pytest.raises(ValidationError):
            intervalo_mes(mes, ano)

    def test_prefixo_diario(self):
        assert prefixo_diario(date(2026, 1, 5)) == '05/01/2026-'


@pytest.mark.django_db
class TestNumeracao:

    def test_recalcula_quando_numero_ja_existe(self, cliente, monkeypatch):
        OrdemServico.objects.create(numero='OS-000001', cliente=cliente, valor_total=1)
        chamadas = []

        def numero_repetido(model, prefixo, largura, campo='numero'):
            chamadas.append(prefixo)
            return 'OS-000001' if len(chamadas) == 1 else 'OS-000002'

        monkeypatch.setattr('core.numeracao.proximo_numero', numero_repetido)
        ordem = salvar_com_numero(OrdemServico(cliente=cliente, valor_total=1), 'OS-', 6)
        assert ordem.numero == 'OS-000002'
        assert len(chamadas) == 2

    def test_desiste_apos_tentativas(self, cliente, monkeypatch):
        OrdemServico.objects.create(numero='OS-000001', cliente=cliente, valor_total=1)
        monkeypatch.setattr('core.numeracao.proximo_numero', lambda *args, **kwargs: 'OS-000001')
        with pytest.raises(ValidationError):
            salvar_com_numero(OrdemServico(cliente=cliente, valor_total=1), 'OS-', 6, tentativas=2)


@pytest.mark.django_db
class TestCorrigirTextoAPI:

    def test_texto_obrigatorio(self, comercial_client):
        response = comercial_client.post('/api/ai/corrigir-texto/', {}, format='json')
        assert response.status_code == 400
        assert response.data['error'] == 'texto: Texto é obrigatório'

    def test_texto_em_branco(self, comercial_client):
        response = comercial_client.post('/api/ai/corrigir-texto/', {'texto': '   '}, format='json')
        assert response.status_code == 400

    def test_sem_ia_configurada(self, comercial_client):
        response = comercial_client.post('/api/ai/corrigir-texto/', {'texto': 'oi tudo bem'}, format='json')
        assert response.status_code == 200
        assert response.data == {
            'texto_original': 'oi tudo bem',
            'texto_corrigido': 'oi tudo bem',
            'corrigido': False,
        }

    def test_exige_autenticacao(self, api_client):
        response = api_client.post('/api/ai/corrigir-texto/', {'texto': 'x'}, format='json')
        assert response.status_code == 401


@pytest.mark.django_db
class TestMiddlewares:

    def test_health(self):
        response = Client().get('/health/')
        assert response.status_code == 200
        assert response.json()['status'] == 'ok'

    def test_cors_origem_permitida(self, settings):
        settings.CORS_ALLOWED_ORIGINS = ['http://app.tractus.local']
        response = Client().get('/health/', HTTP_ORIGIN='http://app.tractus.local')
        assert response['Access-Control-Allow-Origin'] == 'http://app.tractus.local'
        assert response['Access-Control-Allow-Credentials'] == 'true'
        assert 'Origin' in response['Vary']

    def test_cors_origem_desconhecida(self, settings):
        settings.CORS_ALLOWED_ORIGINS = ['http://app.tractus.local']
        response = Client().get('/health/', HTTP_ORIGIN='http://outro.site')
        assert 'Access-Control-Allow-Origin' not in response

    def test_preflight(self, settings):
        settings.CORS_ALLOWED_ORIGINS = ['http://app.tractus.local']
        response = Client().options(
            '/api/clientes/',
            HTTP_ORIGIN='http://app.tractus.local',
            HTTP_ACCESS_CONTROL_REQUEST_METHOD='POST',
        )
        assert response.status_code == 200
        assert 'POST' in response['Access-Control-Allow-Methods']

    def test_api_sem_cache(self, comercial_client):
        response = comercial_client.get('/api/clientes/')
        assert response['Cache-Control'] == 'no-store'
        assert response['X-Content-Type-Options'] == 'nosniff'


@pytest.mark.django_db
class TestDashboardPaginas:

    def test_redireciona_para_login(self):
        response = Client().get('/dashboard/')
        assert response.status_code == 302
        assert response['Location'].startswith('/login/')

    def test_login_por_email(self, user_comercial):
        client = Client()
        response = client.post('/login/', {'email': 'comercial@teste.com', 'password': 'senha123'})
        assert response.status_code == 302
        assert response['Location'] == '/dashboard/'

        response = client.get('/dashboard/')
        assert response.status_code == 200
        assert response.context['indicadores']['os_abertas'] == 0

    def test_login_invalido(self, user_comercial):
        response = Client().post('/login/', {'email': 'comercial@teste.com', 'password': 'errada'})
        assert response.status_code == 200
        assert response.context['error'] == 'Credenciais inválidas'

    def test_secao_permitida(self, user_comercial):
        client = Client()
        client.force_login(user_comercial)
        response = client.get('/comercial/clientes/')
        assert response.status_code == 200
        assert response.context['titulo'] == 'Clientes'

    def test_secao_negada_volta_ao_dashboard(self, user_inspetor):
        client = Client()
        client.force_login(user_inspetor)
        response = client.get('/comercial/clientes/')
        assert response.status_code == 302
        assert response['Location'] == '/dashboard/'


@pytest.mark.django_db
class TestComandos:

    def test_setup_perfis(self):
        call_command('setup_perfis', stdout=StringIO())
        assert Group.objects.count() == len(PERFIS.LABELS)
        financeiro = Group.objects.get(name='Financeiro')
        codenames = set(financeiro.permissions.values_list('codename', flat=True))
        assert 'change_despesaveiculo' in codenames
        assert 'add_despesaveiculo' not in codenames

        # idempotente
        call_command('setup_perfis', stdout=StringIO())
        assert Group.objects.count() == len(PERFIS.LABELS)

    def test_seed_e_limpar(self):
        call_command('seed_tractus', stdout=StringIO())
        assert Cliente.objects.count() == 4
        assert MetaVenda.objects.count() == 6

        call_command('seed_tractus', stdout=StringIO())
        assert Cliente.objects.count() == 4

        call_command('seed_tractus', '--limpar', stdout=StringIO())
        assert Cliente.objects.count() == 4
