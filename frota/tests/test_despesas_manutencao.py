"""
Testes de despesas de veículo, aprovação e alertas de manutenção.

Cobre:
- Quilometragem nunca menor que o último registro do vendedor
- Aprovação/reprovação apenas de despesas pendentes (perfis do financeiro)
- Faixas dos alertas (80% próximo, 100% vencido) e intervalos configuráveis
- Indicadores mensais (km rodados e custo por km)
"""
from datetime import date
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from frota.models import ConfiguracaoManutencao, DespesaVeiculo, TipoDespesa, TipoManutencao
from frota.services import (
    AlertaStatus,
    DespesaVeiculoService,
    ManutencaoService,
    classificar_alerta,
)


def registrar(vendedor, km, tipo=TipoDespesa.COMBUSTIVEL, valor='100.00', data=date(2025, 3, 10)):
    return DespesaVeiculoService.criar(vendedor, km, data=data, tipo=tipo, valor=Decimal(valor))


class TestClassificarAlerta:

    @pytest.mark.parametrize('percentual, status', [
        (0, AlertaStatus.OK),
        (79.99, AlertaStatus.OK),
        (80, AlertaStatus.PROXIMO),
        (99.99, AlertaStatus.PROXIMO),
        (100, AlertaStatus.VENCIDO),
        (250, AlertaStatus.VENCIDO),
    ])
    def test_faixas(self, percentual, status):
        assert classificar_alerta(percentual) == status


@pytest.mark.django_db
class TestQuilometragem:

    def test_km_igual_ao_ultimo_e_aceito(self, vendedor):
        registrar(vendedor, 10000)
        despesa = registrar(vendedor, 10000)
        assert despesa.km == 10000

    def test_km_menor_que_o_ultimo(self, vendedor):
        registrar(vendedor, 10000)
        with pytest.raises(ValidationError) as exc:
            registrar(vendedor, 9999)
        assert exc.value.messages == [
            'Quilometragem inválida. O último registro foi de 10000 km. '
            'O valor informado deve ser maior ou igual.'
        ]

    def test_sequencia_e_por_vendedor(self, vendedor, outro_vendedor):
        registrar(vendedor, 50000)
        despesa = registrar(outro_vendedor, 1200)
        assert despesa.vendedor == outro_vendedor

    def test_editar_km_abaixo_de_outro_registro(self, vendedor):
        primeira = registrar(vendedor, 1000)
        registrar(vendedor, 2000)
        with pytest.raises(ValidationError) as exc:
            DespesaVeiculoService.atualizar(primeira, km=1500)
        assert exc.value.messages == ['Quilometragem inválida. Existe um registro com 2000 km.']

    def test_editar_o_ultimo_registro(self, vendedor):
        registrar(vendedor, 1000)
        ultima = registrar(vendedor, 2000)
        DespesaVeiculoService.atualizar(ultima, km=1800)
        ultima.refresh_from_db()
        assert ultima.km == 1800


@pytest.mark.django_db
class TestAprovacao:

    def test_aprovar(self, vendedor, user_financeiro):
        despesa = registrar(vendedor, 1000)
        DespesaVeiculoService.aprovar(despesa, user_financeiro)
        despesa.refresh_from_db()
        assert despesa.status == DespesaVeiculo.Status.APROVADA
        assert despesa.aprovado_por == user_financeiro
        assert despesa.data_aprovacao is not None

    def test_reprovar_grava_motivo(self, vendedor, user_financeiro):
        despesa = registrar(vendedor, 1000)
        DespesaVeiculoService.reprovar(despesa, user_financeiro, 'Comprovante ilegível')
        despesa.refresh_from_db()
        assert despesa.status == DespesaVeiculo.Status.REPROVADA
        assert despesa.motivo_reprovacao == 'Comprovante ilegível'

    def test_nao_reavalia(self, vendedor, user_financeiro):
        despesa = registrar(vendedor, 1000)
        DespesaVeiculoService.aprovar(despesa, user_financeiro)
        with pytest.raises(ValidationError):
            DespesaVeiculoService.reprovar(despesa, user_financeiro)
        with pytest.raises(ValidationError):
            DespesaVeiculoService.aprovar(despesa, user_financeiro)


@pytest.mark.django_db
class TestAlertas:

    def test_sem_despesas_sem_alertas(self, vendedor):
        assert ManutencaoService.alertas() == []

    def test_troca_de_oleo_proxima(self, vendedor):
        # 5000 km de intervalo: 4000 rodados desde a última troca = 80%
        registrar(vendedor, 10000, tipo=TipoDespesa.TROCA_OLEO)
        registrar(vendedor, 14000)

        alertas = [a for a in ManutencaoService.alertas() if a['tipo'] == TipoManutencao.TROCA_OLEO]
        assert len(alertas) == 1
        alerta = alertas[0]
        assert alerta['status'] == AlertaStatus.PROXIMO
        assert alerta['percentual'] == 80.0
        assert alerta['km_proxima_manutencao'] == 15000
        assert alerta['km_restantes'] == 1000

    def test_abaixo_de_80_nao_alerta(self, vendedor):
        registrar(vendedor, 10000, tipo=TipoDespesa.TROCA_OLEO)
        registrar(vendedor, 13999)
        tipos = [a['tipo'] for a in ManutencaoService.alertas()]
        assert TipoManutencao.TROCA_OLEO not in tipos

    def test_nunca_feita_conta_desde_zero(self, vendedor):
        registrar(vendedor, 45000)
        alertas = {a['tipo']: a for a in ManutencaoService.alertas()}
        # 45000 km sem nenhuma manutenção: até a troca de pneus (40000) já venceu
        assert len(alertas) == 4
        assert alertas[TipoManutencao.TROCA_OLEO]['status'] == AlertaStatus.VENCIDO
        assert alertas[TipoManutencao.PNEUS_TROCA]['status'] == AlertaStatus.VENCIDO
        assert alertas[TipoManutencao.TROCA_OLEO]['km_ultima_manutencao'] == 0

    def test_vencidos_primeiro(self, vendedor):
        registrar(vendedor, 0, tipo=TipoDespesa.REVISAO)
        registrar(vendedor, 0, tipo=TipoDespesa.PNEUS_TROCA)
        registrar(vendedor, 0, tipo=TipoDespesa.PNEUS_NIVEL)
        registrar(vendedor, 4500)
        alertas = ManutencaoService.alertas()
        # óleo 90% (próximo), calibragem 225% (vencido)
        assert [a['tipo'] for a in alertas] == [TipoManutencao.PNEUS_NIVEL, TipoManutencao.TROCA_OLEO]

    def test_intervalo_configurado(self, vendedor):
        ManutencaoService.salvar_configuracao(TipoManutencao.TROCA_OLEO, 10000)
        registrar(vendedor, 10000, tipo=TipoDespesa.TROCA_OLEO)
        registrar(vendedor, 14000)
        tipos = [a['tipo'] for a in ManutencaoService.alertas()]
        assert TipoManutencao.TROCA_OLEO not in tipos

    def test_configuracoes_com_padrao(self, db):
        ManutencaoService.salvar_configuracao(TipoManutencao.REVISAO, 12000)
        ManutencaoService.salvar_configuracao(TipoManutencao.REVISAO, 15000)
        assert ConfiguracaoManutencao.objects.count() == 1
        configs = {c['tipo']: c['intervalo_km'] for c in ManutencaoService.configuracoes()}
        assert configs == {
            TipoManutencao.TROCA_OLEO: 5000,
            TipoManutencao.REVISAO: 15000,
            TipoManutencao.PNEUS_NIVEL: 2000,
            TipoManutencao.PNEUS_TROCA: 40000,
        }

    def test_intervalo_invalido(self, db):
        with pytest.raises(ValidationError):
            ManutencaoService.salvar_configuracao(TipoManutencao.REVISAO, 0)


@pytest.mark.django_db
class TestDashboard:

    def test_km_rodados_e_custo_por_km(self, vendedor):
        registrar(vendedor, 1000, valor='200.00', data=date(2025, 3, 2))
        registrar(vendedor, 1500, valor='300.00', data=date(2025, 3, 20))
        registrar(vendedor, 1600, valor='999.00', data=date(2025, 4, 1))

        dados = DespesaVeiculoService.dashboard(3, 2025)
        linha = dados['vendedores'][0]
        assert linha['total_despesas'] == 500.0
        assert linha['km_rodados'] == 500
        assert linha['custo_por_km'] == 1.0
        assert linha['quantidade_despesas'] == 2
        assert dados['totais']['pendentes'] == 2

    def test_um_registro_nao_tem_km_rodados(self, vendedor):
        registrar(vendedor, 1000)
        linha = DespesaVeiculoService.dashboard(3, 2025)['vendedores'][0]
        assert linha['km_rodados'] == 0
        assert linha['custo_por_km'] == 0.0
