"""
Modelos de despesas de veículo e manutenção da frota comercial - Tractus

Cada despesa registra a quilometragem do veículo do vendedor; a sequência
de km de um vendedor nunca diminui. Os alertas de manutenção são calculados
a partir desse histórico e dos intervalos configurados.
"""
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


class TipoDespesa(models.TextChoices):
    COMBUSTIVEL = 'COMBUSTIVEL', 'Combustível'
    TROCA_OLEO = 'TROCA_OLEO', 'Troca de Óleo'
    REVISAO = 'REVISAO', 'Revisão'
    PNEUS_NIVEL = 'PNEUS_NIVEL', 'Calibragem Pneus'
    PNEUS_TROCA = 'PNEUS_TROCA', 'Troca de Pneus'


class TipoManutencao(models.TextChoices):
    """Tipos de despesa que têm intervalo de manutenção (todos menos combustível)."""
    TROCA_OLEO = 'TROCA_OLEO', 'Troca de Óleo'
    REVISAO = 'REVISAO', 'Revisão'
    PNEUS_NIVEL = 'PNEUS_NIVEL', 'Calibragem Pneus'
    PNEUS_TROCA = 'PNEUS_TROCA', 'Troca de Pneus'


class DespesaVeiculo(models.Model):
    """Despesa do veículo de um vendedor, com a quilometragem no momento."""

    class Status(models.TextChoices):
        PENDENTE = 'PENDENTE', 'Pendente'
        APROVADA = 'APROVADA', 'Aprovada'
        REPROVADA = 'REPROVADA', 'Reprovada'

    vendedor = models.ForeignKey(
        'accounts.Vendedor',
        on_delete=models.PROTECT,
        related_name='despesas_veiculo',
        verbose_name='Vendedor',
    )
    data = models.DateField(verbose_name='Data')
    tipo = models.CharField(max_length=15, choices=TipoDespesa.choices, verbose_name='Tipo')
    valor = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name='Valor',
    )
    km = models.PositiveIntegerField(
        verbose_name='Quilometragem',
        help_text='Deve ser maior ou igual ao último km registrado pelo vendedor',
    )
    comprovante = models.CharField(max_length=500, blank=True, verbose_name='Comprovante (URL)')
    validado_por_ia = models.BooleanField(default=False, verbose_name='Validado por IA')
    valor_extraido = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name='Valor Extraído',
    )
    nome_extraido = models.CharField(max_length=255, blank=True, verbose_name='Nome Extraído')
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.PENDENTE,
        db_index=True,
        verbose_name='Status',
    )
    aprovado_por = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='despesas_veiculo_avaliadas',
        verbose_name='Avaliado por',
    )
    data_aprovacao = models.DateTimeField(null=True, blank=True, verbose_name='Data da Avaliação')
    motivo_reprovacao = models.TextField(blank=True, verbose_name='Motivo da Reprovação')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Data de Atualização')

    class Meta:
        verbose_name = 'Despesa de Veículo'
        verbose_name_plural = 'Despesas de Veículo'
        ordering = ['-data', '-created_at']
        indexes = [
            models.Index(fields=['vendedor', 'km'], name='despesa_vendedor_km_idx'),
            models.Index(fields=['vendedor', 'data'], name='despesa_vendedor_data_idx'),
        ]

    def __str__(self):
        return f"{self.get_tipo_display()} - {self.vendedor} ({self.km} km)"


class ConfiguracaoManutencao(models.Model):
    """Intervalo (km) entre manutenções de um tipo. Sem registro, vale o padrão."""
    tipo = models.CharField(
        max_length=15,
        choices=TipoManutencao.choices,
        unique=True,
        verbose_name='Tipo de Manutenção',
    )
    intervalo_km = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        verbose_name='Intervalo (km)',
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Data de Atualização')

    class Meta:
        verbose_name = 'Configuração de Manutenção'
        verbose_name_plural = 'Configurações de Manutenção'
        ordering = ['tipo']

    def __str__(self):
        return f"{self.get_tipo_display()}: {self.intervalo_km} km"
