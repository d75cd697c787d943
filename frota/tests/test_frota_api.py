"""
Testes dos endpoints de despesas de veículo.
"""
from datetime import date
from decimal import Decimal

import pytest

from frota.models import ConfiguracaoManutencao, DespesaVeiculo, TipoDespesa
from frota.services import DespesaVeiculoService


def payload(vendedor, km, **extra):
    dados = {
        'vendedor': vendedor.id,
        'data': '2025-03-10',
        'tipo': 'COMBUSTIVEL',
        'valor': '250.00',
        'km': km,
    }
    dados.update(extra)
    return dados


@pytest.fixture
def despesa(vendedor):
    return DespesaVeiculoService.criar(
        vendedor, 12000, data=date(2025, 3, 10), tipo=TipoDespesa.COMBUSTIVEL, valor=Decimal('180.00'),
    )


@pytest.mark.django_db
class TestDespesasAPI:

    def test_registrar(self, comercial_client, vendedor):
        response = comercial_client.post('/api/despesas-veiculo/', payload(vendedor, 12000), format='json')
        assert response.status_code == 201
        assert response.data['status'] == 'PENDENTE'
        assert response.data['tipo_label'] == 'Combustível'
        assert response.data['vendedor_nome'] == 'Carlos Comercial'

    def test_km_abaixo_do_ultimo(self, comercial_client, despesa, vendedor):
        response = comercial_client.post('/api/despesas-veiculo/', payload(vendedor, 11000), format='json')
        assert response.status_code == 400
        assert response.data == {
            'error': 'Quilometragem inválida. O último registro foi de 12000 km. '
                     'O valor informado deve ser maior ou igual.',
        }

    def test_km_zero(self, comercial_client, vendedor):
        response = comercial_client.post('/api/despesas-veiculo/', payload(vendedor, 0), format='json')
        assert response.status_code == 400
        assert response.data['error'] == 'km: Quilometragem deve ser positiva'

    def test_status_nao_vem_do_cliente(self, comercial_client, vendedor):
        response = comercial_client.post(
            '/api/despesas-veiculo/', payload(vendedor, 100, status='APROVADA'), format='json',
        )
        assert response.status_code == 201
        assert response.data['status'] == 'PENDENTE'

    def test_nao_troca_vendedor(self, comercial_client, despesa, outro_vendedor):
        response = comercial_client.patch(
            f'/api/despesas-veiculo/{despesa.id}/', {'vendedor': outro_vendedor.id}, format='json',
        )
        assert response.status_code == 400

    def test_filtro_por_mes(self, comercial_client, despesa, vendedor):
        DespesaVeiculoService.criar(
            vendedor, 13000, data=date(2025, 4, 2), tipo=TipoDespesa.COMBUSTIVEL, valor=Decimal('90'),
        )
        response = comercial_client.get('/api/despesas-veiculo/', {'mes': 4, 'ano': 2025})
        assert [d['km'] for d in response.data] == [13000]

    def test_despesa_inexistente(self, comercial_client, db):
        response = comercial_client.get('/api/despesas-veiculo/999/')
        assert response.status_code == 404
        assert response.data == {'error': 'Despesa não encontrada'}

    def test_ultimo_km(self, comercial_client, despesa, vendedor, outro_vendedor):
        response = comercial_client.get(f'/api/despesas-veiculo/ultimo-km/{vendedor.id}/')
        assert response.data['ultimo_km'] == 12000
        assert response.data['data_ultimo_registro'] == date(2025, 3, 10)

        response = comercial_client.get(f'/api/despesas-veiculo/ultimo-km/{outro_vendedor.id}/')
        assert response.data == {'ultimo_km': None, 'data_ultimo_registro': None}


@pytest.mark.django_db
class TestAvaliacaoAPI:

    def test_financeiro_aprova(self, api_client, user_financeiro, despesa):
        api_client.force_authenticate(user=user_financeiro)
        response = api_client.post(f'/api/despesas-veiculo/{despesa.id}/aprovar/')
        assert response.status_code == 200
        assert response.data['status'] == 'APROVADA'
        assert response.data['aprovado_por_nome'] == 'Fátima Financeiro'

    def test_comercial_nao_aprova(self, comercial_client, despesa):
        response = comercial_client.post(f'/api/despesas-veiculo/{despesa.id}/aprovar/')
        assert response.status_code == 403
        despesa.refresh_from_db()
        assert despesa.status == DespesaVeiculo.Status.PENDENTE

    def test_reprovar_com_motivo(self, admin_client, despesa):
        response = admin_client.post(
            f'/api/despesas-veiculo/{despesa.id}/reprovar/',
            {'motivo_reprovacao': 'Nota sem CNPJ'},
            format='json',
        )
        assert response.status_code == 200
        assert response.data['status'] == 'REPROVADA'
        assert response.data['motivo_reprovacao'] == 'Nota sem CNPJ'

        response = admin_client.post(f'/api/despesas-veiculo/{despesa.id}/aprovar/')
        assert response.status_code == 400
        assert response.data == {'error': 'Apenas despesas pendentes podem ser aprovadas'}


@pytest.mark.django_db
class TestManutencaoAPI:

    def test_alertas(self, comercial_client, vendedor):
        DespesaVeiculoService.criar(
            vendedor, 5200, data=date(2025, 3, 1), tipo=TipoDespesa.COMBUSTIVEL, valor=Decimal('50'),
        )
        response = comercial_client.get('/api/despesas-veiculo/alertas/', {'vendedor': vendedor.id})
        assert response.status_code == 200
        assert response.data[0]['tipo'] == 'PNEUS_NIVEL'
        assert {a['status'] for a in response.data} == {'VENCIDO'}

    def test_configuracoes_padrao(self, comercial_client, db):
        response = comercial_client.get('/api/despesas-veiculo/configuracoes/')
        assert response.status_code == 200
        assert {c['tipo']: c['intervalo_km'] for c in response.data}['TROCA_OLEO'] == 5000

    def test_admin_altera_intervalo(self, admin_client):
        response = admin_client.put(
            '/api/despesas-veiculo/configuracoes/TROCA_OLEO/', {'intervalo_km': 7500}, format='json',
        )
        assert response.status_code == 200
        assert response.data['intervalo_km'] == 7500
        assert ConfiguracaoManutencao.objects.get(tipo='TROCA_OLEO').intervalo_km == 7500

    def test_comercial_nao_altera_intervalo(self, comercial_client):
        response = comercial_client.put(
            '/api/despesas-veiculo/configuracoes/TROCA_OLEO/', {'intervalo_km': 7500}, format='json',
        )
        assert response.status_code == 403

    def test_tipo_invalido(self, admin_client):
        response = admin_client.put(
            '/api/despesas-veiculo/configuracoes/COMBUSTIVEL/', {'intervalo_km': 100}, format='json',
        )
        assert response.status_code == 400
        assert response.data == {'error': 'Tipo de manutenção inválido: COMBUSTIVEL'}

    def test_intervalo_zero(self, admin_client):
        response = admin_client.put(
            '/api/despesas-veiculo/configuracoes/REVISAO/', {'intervalo_km': 0}, format='json',
        )
        assert response.status_code == 400
        assert response.data['error'] == 'intervalo_km: O intervalo deve ser maior que zero'

    def test_dashboard(self, admin_client, despesa):
        response = admin_client.get('/api/despesas-veiculo/dashboard/', {'mes': 3, 'ano': 2025})
        assert response.status_code == 200
        assert response.data['totais']['despesas'] == 180.0

        response = admin_client.get('/api/despesas-veiculo/dashboard/', {'mes': 0, 'ano': 2025})
        assert response.status_code == 400
        assert response.data == {'error': 'Mês inválido'}

        response = admin_client.get('/api/despesas-veiculo/dashboard/', {'mes': 3, 'ano': 0})
        assert response.status_code == 400
        assert response.data == {'error': 'Ano inválido'}
