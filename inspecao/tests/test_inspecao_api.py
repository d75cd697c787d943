"""
Testes dos endpoints de visitas técnicas e laudos de inspeção.
"""
from datetime import date, timedelta
from unittest import mock

import pytest

from inspecao.models import LaudoInspecao, VisitaTecnica


def payload_laudo(visita_id, **extra):
    dados = {
        'visita': visita_id,
        'equipamento': 'Escavadeira CAT 320',
        'numero_serie': 'CAT320-001',
        'condicao_solo': 'ALTO_IMPACTO',
        'componentes': [
            {'tipo': 'ROLETE_INFERIOR', 'dimensao_std': '185', 'limite_reparo': '171',
             'medicao_le': '180', 'medicao_ld': '170'},
        ],
        'fotos': [
            {'tipo': 'ROLETE_INFERIOR', 'lado': 'LE', 'url': 'https://fotos.exemplo.com/1.jpg'},
        ],
    }
    dados.update(extra)
    return dados


@pytest.mark.django_db
class TestVisitasAPI:

    def test_criar_visita(self, comercial_client, cliente, vendedor):
        response = comercial_client.post('/api/visitas-tecnicas/', {
            'vendedor': vendedor.id,
            'cliente': cliente.id,
            'data_visita': '2025-08-12',
            'equipamentos': ['Escavadeira PC200'],
        }, format='json')
        assert response.status_code == 201
        assert response.data['status'] == 'PENDENTE'
        assert response.data['numero'] is None
        assert response.data['tem_laudo'] is False

    def test_sem_equipamentos(self, comercial_client, cliente, vendedor):
        response = comercial_client.post('/api/visitas-tecnicas/', {
            'vendedor': vendedor.id, 'cliente': cliente.id, 'equipamentos': [],
        }, format='json')
        assert response.status_code == 400
        assert 'Informe pelo menos um equipamento' in response.data['error']

    def test_cliente_inexistente(self, comercial_client, vendedor):
        response = comercial_client.post('/api/visitas-tecnicas/', {
            'vendedor': vendedor.id, 'cliente': 999, 'equipamentos': ['X'],
        }, format='json')
        assert response.status_code == 400
        assert 'Cliente não encontrado' in response.data['error']

    def test_filtro_por_periodo_e_limite(self, comercial_client, cliente, vendedor):
        for dia in (1, 2, 3, 20):
            VisitaTecnica.objects.create(
                vendedor=vendedor, cliente=cliente, data_visita=date(2025, 5, dia), equipamentos=['X'],
            )
        response = comercial_client.get('/api/visitas-tecnicas/', {
            'data_inicio': '2025-05-01', 'data_fim': '2025-05-10', 'limit': 2, 'offset': 1,
        })
        assert [v['data_visita'] for v in response.data] == ['2025-05-02', '2025-05-03']

    def test_data_invalida(self, comercial_client, db):
        response = comercial_client.get('/api/visitas-tecnicas/', {'data': '31/02/2025'})
        assert response.status_code == 400

    def test_transicoes(self, comercial_client, visita):
        url = f'/api/visitas-tecnicas/{visita.id}/'
        assert comercial_client.post(url + 'confirmar/').data['status'] == 'CONFIRMADA'

        response = comercial_client.post(url + 'cancelar/', {'motivo': 'Máquina parada'}, format='json')
        assert response.data['status'] == 'CANCELADA'
        assert response.data['motivo_cancelamento'] == 'Máquina parada'

        response = comercial_client.post(url + 'realizar/')
        assert response.status_code == 400
        assert response.data == {'error': 'Não é possível realizar uma visita cancelada'}

        response = comercial_client.patch(url, {'observacao': 'Nova'}, format='json')
        assert response.status_code == 400

    def test_excluir_confirmada(self, comercial_client, visita):
        comercial_client.post(f'/api/visitas-tecnicas/{visita.id}/confirmar/')
        response = comercial_client.delete(f'/api/visitas-tecnicas/{visita.id}/')
        assert response.status_code == 400
        assert VisitaTecnica.objects.filter(pk=visita.pk).exists()

    def test_visita_inexistente(self, comercial_client, db):
        response = comercial_client.post('/api/visitas-tecnicas/999/confirmar/')
        assert response.status_code == 404
        assert response.data == {'error': 'Visita técnica não encontrada'}

    def test_agenda(self, comercial_client, visita):
        response = comercial_client.get('/api/visitas-tecnicas/agenda/')
        assert response.status_code == 200
        assert response.data['totais']['visitas'] == 1
        assert response.data['agenda'][0]['visitas'][0]['id'] == visita.id


@pytest.mark.django_db
class TestLaudosAPI:

    def test_criar_laudo(self, api_client, user_inspetor, visita):
        api_client.force_authenticate(user=user_inspetor)
        response = api_client.post('/api/laudos-inspecao/', payload_laudo(visita.id), format='json')
        assert response.status_code == 201
        assert response.data['visita'] == visita.id
        assert response.data['inspetor'] == user_inspetor.id
        assert response.data['status'] == 'RASCUNHO'
        componente = response.data['componentes'][0]
        assert componente['desgaste_le'] == '35.71'
        assert componente['status_le'] == 'DENTRO_PARAMETROS'
        assert componente['status_ld'] == 'FORA_PARAMETROS'
        assert len(response.data['fotos']) == 1

    def test_inspetor_padrao_e_o_usuario_logado(self, admin_client, admin_user, cliente, vendedor):
        visita = VisitaTecnica.objects.create(
            vendedor=vendedor, cliente=cliente, data_visita=date.today(), equipamentos=['X'],
        )
        response = admin_client.post('/api/laudos-inspecao/', payload_laudo(visita.id), format='json')
        assert response.status_code == 201
        assert response.data['inspetor'] == admin_user.id

    def test_visita_inexistente(self, admin_client, db):
        response = admin_client.post('/api/laudos-inspecao/', payload_laudo(999), format='json')
        assert response.status_code == 404
        assert response.data == {'error': 'Visita técnica não encontrada'}

    def test_segundo_laudo_da_visita(self, admin_client, visita):
        admin_client.post('/api/laudos-inspecao/', payload_laudo(visita.id), format='json')
        response = admin_client.post('/api/laudos-inspecao/', payload_laudo(visita.id), format='json')
        assert response.status_code == 400
        assert response.data == {'error': 'Esta visita já possui um laudo'}

    def test_enviar_e_tentar_editar(self, admin_client, visita):
        laudo_id = admin_client.post('/api/laudos-inspecao/', payload_laudo(visita.id), format='json').data['id']

        response = admin_client.post(f'/api/laudos-inspecao/{laudo_id}/enviar/')
        assert response.status_code == 200
        assert response.data['status'] == 'ENVIADO'
        visita.refresh_from_db()
        assert visita.status == VisitaTecnica.Status.REALIZADA

        response = admin_client.patch(f'/api/laudos-inspecao/{laudo_id}/', {'sumario': 'x'}, format='json')
        assert response.status_code == 400
        assert response.data == {'error': 'Laudo já foi enviado e não pode ser alterado'}

        assert admin_client.delete(f'/api/laudos-inspecao/{laudo_id}/').status_code == 400

    def test_por_visita_e_pdf(self, admin_client, visita):
        admin_client.post('/api/laudos-inspecao/', payload_laudo(visita.id), format='json')
        laudo = LaudoInspecao.objects.get()

        response = admin_client.get(f'/api/laudos-inspecao/visita/{visita.id}/')
        assert response.data['id'] == laudo.id

        response = admin_client.get(f'/api/laudos-inspecao/{laudo.id}/pdf-data/')
        assert response.data['condicao_solo_label'] == 'Alto Impacto'
        assert response.data['fotos'][0]['lado_label'] == 'Lado Esquerdo'

    def test_por_visita_sem_laudo(self, admin_client, visita):
        response = admin_client.get(f'/api/laudos-inspecao/visita/{visita.id}/')
        assert response.status_code == 404
        assert response.data == {'error': 'Laudo não encontrado para esta visita'}

    def test_historico_e_meus_laudos(self, api_client, user_inspetor, visita):
        api_client.force_authenticate(user=user_inspetor)
        api_client.post(f'/api/visitas-tecnicas/{visita.id}/confirmar/')
        api_client.post('/api/laudos-inspecao/', payload_laudo(visita.id), format='json')

        historico = api_client.get(f'/api/laudos-inspecao/historico/{user_inspetor.id}/').data
        assert len(historico) == 1
        assert historico[0]['numero'].endswith('-0001')

        dias = api_client.get(f'/api/laudos-inspecao/meus-laudos/{user_inspetor.id}/').data
        assert dias[0]['visitas'][0]['tem_laudo'] is True

    def test_valores_padrao(self, admin_client):
        response = admin_client.get('/api/laudos-inspecao/valores-padrao/CAT320/')
        assert response.data['ESTEIRA'] == {'dimensao_std': 175.0, 'limite_reparo': 155.0}

    def test_corrigir_texto_vazio(self, admin_client):
        response = admin_client.post('/api/laudos-inspecao/corrigir-texto/', {'texto': ''}, format='json')
        assert response.data['texto_corrigido'] == ''
        assert response.data['corrigido'] is False

    def test_corrigir_texto_tecnico(self, admin_client, settings):
        settings.GEMINI_API_KEY = 'chave-teste'
        resposta = mock.Mock(ok=True, status_code=200)
        resposta.json.return_value = {
            'candidates': [{'content': {'parts': [{'text': 'Rolete inferior com desgaste acentuado.'}]}}],
        }
        with mock.patch('core.ia.requests.post', return_value=resposta) as post:
            response = admin_client.post(
                '/api/laudos-inspecao/corrigir-texto/', {'texto': 'rolete inferio gasto'}, format='json',
            )
        assert response.data['texto_corrigido'] == 'Rolete inferior com desgaste acentuado.'
        assert response.data['corrigido'] is True
        prompt = post.call_args.kwargs['json']['contents'][0]['parts'][0]['text']
        assert 'equipamentos pesados' in prompt

    def test_gerar_sumario_sem_ia(self, admin_client):
        response = admin_client.post('/api/laudos-inspecao/gerar-sumario/', {
            'equipamento': 'CAT 320',
            'componentes': [{'tipo': 'ESTEIRA', 'desgaste_le': '120.00', 'status_le': 'FORA_PARAMETROS'}],
            'sumario_atual': 'Anterior',
        }, format='json')
        assert response.status_code == 200
        assert response.data['sumario'] == 'Anterior'
        assert response.data['gerado'] is False


@pytest.mark.django_db
def test_resumo_visitas_do_mes(comercial_client, visita):
    hoje = date.today() + timedelta(days=1)
    response = comercial_client.get('/api/visitas-tecnicas/resumo/', {'mes': hoje.month, 'ano': hoje.year})
    assert response.status_code == 200
    assert response.data['totais']['pendentes'] == 1


@pytest.mark.django_db
@pytest.mark.parametrize('params, erro', [
    ({'mes': 13, 'ano': 2025}, 'Mês inválido'),
    ({'mes': 0, 'ano': 2025}, 'Mês inválido'),
    ({'mes': 5, 'ano': 0}, 'Ano inválido'),
])
def test_resumo_periodo_invalido(comercial_client, params, erro):
    response = comercial_client.get('/api/visitas-tecnicas/resumo/', params)
    assert response.status_code == 400
    assert response.data == {'error': erro}
