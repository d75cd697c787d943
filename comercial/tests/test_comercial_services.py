"""
Testes das regras de negócio do módulo Comercial.

Cobre:
- Numeração sequencial de propostas e OS
- Cálculo de margem
- Fluxo de liberação de custo
- Ciclo de vida da OS e venda gerada no faturamento
- Metas (upsert) e dashboard
"""
from datetime import date
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.utils import timezone

from comercial.models import (
    Categoria,
    LiberacaoCusto,
    MetaVenda,
    OrdemServico,
    Proposta,
    Venda,
)
from comercial.services import (
    MetaService,
    OrdemServicoService,
    PropostaService,
    semana_do_mes,
)
from core.numeracao import proximo_numero


class TestSemanaDoMes:

    @pytest.mark.parametrize('dia, semana', [
        (1, 1), (7, 1), (8, 2), (14, 2), (15, 3), (21, 3), (22, 4), (31, 4),
    ])
    def test_semana(self, dia, semana):
        assert semana_do_mes(date(2025, 1, dia)) == semana


class TestMargem:

    def test_margem_com_duas_casas(self):
        assert PropostaService.calcular_margem(Decimal('3000'), Decimal('2000')) == Decimal('33.33')

    def test_sem_custo_nao_tem_margem(self):
        assert PropostaService.calcular_margem(Decimal('1000'), None) is None

    def test_valor_zero_nao_tem_margem(self):
        assert PropostaService.calcular_margem(Decimal('0'), Decimal('10')) is None

    def test_custo_maior_que_valor_da_margem_negativa(self):
        assert PropostaService.calcular_margem(Decimal('100'), Decimal('150')) == Decimal('-50.00')


@pytest.mark.django_db
class TestNumeracao:

    def test_propostas_numeradas_em_sequencia(self, cliente, vendedor):
        p1 = PropostaService.criar(cliente=cliente, vendedor=vendedor, valor=Decimal('100'))
        p2 = PropostaService.criar(cliente=cliente, vendedor=vendedor, valor=Decimal('200'))
        assert p1.numero == 'PROP-000001'
        assert p2.numero == 'PROP-000002'

    def test_sequencia_parte_do_maior_numero(self, cliente, vendedor):
        PropostaService.criar(cliente=cliente, vendedor=vendedor, valor=Decimal('100'))
        Proposta.objects.filter(numero='PROP-000001').update(numero='PROP-000041')
        assert proximo_numero(Proposta, 'PROP-', 6) == 'PROP-000042'

    def test_sequencia_alem_da_largura(self, cliente, vendedor):
        for numero in ('PROP-000009', 'PROP-999999', 'PROP-1000000'):
            Proposta.objects.create(numero=numero, cliente=cliente, vendedor=vendedor, valor=Decimal('1'))
        assert proximo_numero(Proposta, 'PROP-', 6) == 'PROP-1000001'

    def test_os_numerada(self, cliente):
        ordem = OrdemServicoService.criar(cliente=cliente, valor_total=Decimal('500'))
        assert ordem.numero == 'OS-000001'
        assert ordem.status == OrdemServico.Status.ABERTA


@pytest.mark.django_db
class TestLiberacaoCusto:

    def test_solicitar_coloca_proposta_em_aprovacao(self, proposta):
        liberacao = PropostaService.solicitar_liberacao(proposta)
        proposta.refresh_from_db()
        assert liberacao.status == LiberacaoCusto.Status.EM_ANALISE
        assert proposta.status == Proposta.Status.AGUARDANDO_APROVACAO

    def test_solicitar_duas_vezes(self, proposta):
        PropostaService.solicitar_liberacao(proposta)
        with pytest.raises(ValidationError) as exc:
            PropostaService.solicitar_liberacao(proposta)
        assert 'Proposta já possui liberação de custo solicitada' in exc.value.messages

    def test_aprovar_registra_aprovador_e_aprova_proposta(self, proposta, admin_user):
        liberacao = PropostaService.solicitar_liberacao(proposta)
        PropostaService.decidir_liberacao(
            liberacao, LiberacaoCusto.Status.APROVADO, usuario=admin_user, custo_real=Decimal('5800'),
        )
        liberacao.refresh_from_db()
        proposta.refresh_from_db()
        assert liberacao.aprovado_por == admin_user
        assert liberacao.data_aprovacao is not None
        assert liberacao.custo_real == Decimal('5800')
        assert proposta.status == Proposta.Status.APROVADA

    def test_reprovar_nao_aprova_proposta(self, proposta, admin_user):
        liberacao = PropostaService.solicitar_liberacao(proposta)
        PropostaService.decidir_liberacao(liberacao, LiberacaoCusto.Status.REPROVADO, usuario=admin_user)
        proposta.refresh_from_db()
        liberacao.refresh_from_db()
        assert proposta.status == Proposta.Status.AGUARDANDO_APROVACAO
        assert liberacao.aprovado_por is None

    def test_decisao_invalida(self, proposta):
        liberacao = PropostaService.solicitar_liberacao(proposta)
        with pytest.raises(ValidationError):
            PropostaService.decidir_liberacao(liberacao, LiberacaoCusto.Status.EM_ANALISE)


@pytest.mark.django_db
class TestOrdemServico:

    def test_os_de_proposta_nao_aprovada(self, proposta):
        with pytest.raises(ValidationError) as exc:
            OrdemServicoService.criar_de_proposta(proposta)
        assert exc.value.messages == ['Proposta precisa estar aprovada']

    def test_uma_os_por_proposta(self, proposta_aprovada):
        ordem = OrdemServicoService.criar_de_proposta(proposta_aprovada)
        assert ordem.valor_total == proposta_aprovada.valor
        assert ordem.cliente == proposta_aprovada.cliente
        with pytest.raises(ValidationError) as exc:
            OrdemServicoService.criar_de_proposta(proposta_aprovada)
        assert exc.value.messages == ['Proposta já possui OS vinculada']

    def test_finalizar_registra_data_de_fechamento(self, proposta_aprovada):
        ordem = OrdemServicoService.criar_de_proposta(proposta_aprovada)
        ordem = OrdemServicoService.alterar_status(ordem, OrdemServico.Status.FINALIZADA)
        assert ordem.data_fechamento is not None
        assert not Venda.objects.exists()

    def test_faturar_gera_uma_venda(self, proposta_aprovada, vendedor):
        ordem = OrdemServicoService.criar_de_proposta(proposta_aprovada)
        OrdemServicoService.alterar_status(ordem, OrdemServico.Status.FATURADA)
        OrdemServicoService.alterar_status(ordem, OrdemServico.Status.FATURADA)

        vendas = Venda.objects.filter(ordem_servico=ordem)
        assert vendas.count() == 1
        venda = vendas.get()
        hoje = timezone.localdate()
        assert venda.vendedor == vendedor
        assert venda.valor == Decimal('10000.00')
        assert venda.categoria == Categoria.RODANTE
        assert venda.data == hoje
        assert venda.semana == semana_do_mes(hoje)

    def test_os_faturada_nao_muda_de_status(self, proposta_aprovada):
        ordem = OrdemServicoService.criar_de_proposta(proposta_aprovada)
        OrdemServicoService.alterar_status(ordem, OrdemServico.Status.FATURADA)
        with pytest.raises(ValidationError) as exc:
            OrdemServicoService.alterar_status(ordem, OrdemServico.Status.ABERTA)
        assert exc.value.messages == ['OS faturada não pode mudar de status']
        assert Venda.objects.count() == 1

    def test_os_sem_proposta_faturada_nao_gera_venda(self, cliente):
        ordem = OrdemServicoService.criar(cliente=cliente, valor_total=Decimal('900'))
        OrdemServicoService.alterar_status(ordem, OrdemServico.Status.FATURADA)
        assert not Venda.objects.exists()

    def test_status_invalido(self, cliente):
        ordem = OrdemServicoService.criar(cliente=cliente, valor_total=Decimal('900'))
        with pytest.raises(ValidationError) as exc:
            OrdemServicoService.alterar_status(ordem, 'ENTREGUE')
        assert exc.value.messages == ['Status inválido: ENTREGUE']


@pytest.mark.django_db
class TestMetas:

    def test_salvar_e_upsert(self, vendedor):
        MetaService.salvar(vendedor, 3, 2025, Categoria.PECA, Decimal('1000'))
        MetaService.salvar(vendedor, 3, 2025, Categoria.PECA, Decimal('2500'))
        meta = MetaVenda.objects.get()
        assert meta.valor_meta == Decimal('2500')

    def test_dashboard_meta_x_realizado(self, vendedor):
        MetaService.salvar(vendedor, 3, 2025, Categoria.RODANTE, Decimal('1000'))
        Venda.objects.create(
            vendedor=vendedor, data=date(2025, 3, 10), valor=Decimal('250'),
            categoria=Categoria.RODANTE, semana=2,
        )
        Venda.objects.create(
            vendedor=vendedor, data=date(2025, 4, 1), valor=Decimal('999'),
            categoria=Categoria.RODANTE, semana=1,
        )

        dados = MetaService.dashboard(3, 2025)
        linha = dados['vendedores'][0]
        assert linha['meta_total'] == 1000.0
        assert linha['vendido_total'] == 250.0
        assert linha['percentual_total'] == 25.0
        rodante = next(c for c in linha['por_categoria'] if c['categoria'] == Categoria.RODANTE)
        assert rodante['percentual'] == 25.0
        assert [s['realizado'] for s in linha['por_semana']] == [0.0, 250.0, 0.0, 0.0]

    def test_dashboard_sem_meta(self, vendedor):
        linha = MetaService.dashboard(1, 2025)['vendedores'][0]
        assert linha['percentual_total'] == 0.0
