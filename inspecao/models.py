"""
Modelos do módulo de Inspeção - Tractus

Visita técnica solicitada pelo comercial -> laudo de inspeção do material
rodante feito pelo inspetor, com medições por componente e fotos.

Fluxo da visita: PENDENTE -> CONFIRMADA -> REALIZADA (ou CANCELADA).
Fluxo do laudo: RASCUNHO -> ENVIADO (final). Enviar o laudo realiza a visita.
"""
from django.conf import settings
from django.db import models
from django.utils import timezone


class TipoComponente(models.TextChoices):
    """Componentes do material rodante."""
    ESTEIRA = 'ESTEIRA', 'Esteira'
    SAPATA = 'SAPATA', 'Sapata'
    ROLETE_INFERIOR = 'ROLETE_INFERIOR', 'Rolete Inferior'
    ROLETE_SUPERIOR = 'ROLETE_SUPERIOR', 'Rolete Superior'
    RODA_GUIA = 'RODA_GUIA', 'Roda Guia'
    RODA_MOTRIZ = 'RODA_MOTRIZ', 'Roda Motriz'


class StatusDesgaste(models.TextChoices):
    DENTRO_PARAMETROS = 'DENTRO_PARAMETROS', 'Dentro dos parâmetros'
    VERIFICAR = 'VERIFICAR', 'Verificar'
    FORA_PARAMETROS = 'FORA_PARAMETROS', 'Fora dos parâmetros'


class VisitaTecnica(models.Model):
    """Visita técnica a um cliente para inspeção de equipamentos."""

    class Status(models.TextChoices):
        PENDENTE = 'PENDENTE', 'Pendente'
        CONFIRMADA = 'CONFIRMADA', 'Confirmada'
        REALIZADA = 'REALIZADA', 'Realizada'
        CANCELADA = 'CANCELADA', 'Cancelada'

    STATUS_FINAIS = (Status.REALIZADA, Status.CANCELADA)

    numero = models.CharField(
        max_length=20,
        unique=True,
        null=True,
        blank=True,
        verbose_name='Número',
        help_text='DD/MM/AAAA-NNNN, atribuído quando o primeiro laudo é criado',
    )
    vendedor = models.ForeignKey(
        'accounts.Vendedor',
        on_delete=models.PROTECT,
        related_name='visitas_tecnicas',
        verbose_name='Vendedor Solicitante',
    )
    cliente = models.ForeignKey(
        'comercial.Cliente',
        on_delete=models.PROTECT,
        related_name='visitas_tecnicas',
        verbose_name='Cliente',
    )
    inspetor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='visitas_inspecao',
        verbose_name='Inspetor',
    )
    data_visita = models.DateField(null=True, blank=True, db_index=True, verbose_name='Data da Visita')
    equipamentos = models.JSONField(
        default=list,
        verbose_name='Equipamentos',
        help_text='Lista com a descrição dos equipamentos a inspecionar',
    )
    observacao = models.TextField(blank=True, verbose_name='Observação')
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDENTE,
        db_index=True,
        verbose_name='Status',
    )
    motivo_cancelamento = models.TextField(blank=True, verbose_name='Motivo do Cancelamento')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Data de Atualização')

    class Meta:
        verbose_name = 'Visita Técnica'
        verbose_name_plural = 'Visitas Técnicas'
        ordering = ['data_visita', 'created_at']
        indexes = [
            models.Index(fields=['status', 'data_visita'], name='visita_status_data_idx'),
        ]

    def __str__(self):
        return f"{self.numero or 'Visita'} - {self.cliente}"


class LaudoInspecao(models.Model):
    """Laudo de inspeção do material rodante (um por visita)."""

    class Status(models.TextChoices):
        RASCUNHO = 'RASCUNHO', 'Rascunho'
        ENVIADO = 'ENVIADO', 'Enviado'

    class CondicaoSolo(models.TextChoices):
        BAIXO_IMPACTO = 'BAIXO_IMPACTO', 'Baixo Impacto'
        MEDIO_IMPACTO = 'MEDIO_IMPACTO', 'Médio Impacto'
        ALTO_IMPACTO = 'ALTO_IMPACTO', 'Alto Impacto'

    visita = models.OneToOneField(
        VisitaTecnica,
        on_delete=models.CASCADE,
        related_name='laudo',
        verbose_name='Visita Técnica',
    )
    inspetor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='laudos_inspecao',
        verbose_name='Inspetor',
    )
    equipamento = models.CharField(max_length=255, verbose_name='Equipamento')
    numero_serie = models.CharField(max_length=100, verbose_name='Número de Série')
    frota = models.CharField(max_length=100, blank=True, verbose_name='Frota')
    horimetro_total = models.PositiveIntegerField(null=True, blank=True, verbose_name='Horímetro Total')
    horimetro_esteira = models.PositiveIntegerField(null=True, blank=True, verbose_name='Horímetro da Esteira')
    condicao_solo = models.CharField(
        max_length=20,
        choices=CondicaoSolo.choices,
        blank=True,
        verbose_name='Condição do Solo',
    )
    data_inspecao = models.DateField(default=timezone.localdate, verbose_name='Data da Inspeção')
    sumario = models.TextField(blank=True, verbose_name='Sumário Técnico')
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.RASCUNHO,
        db_index=True,
        verbose_name='Status',
    )
    data_envio = models.DateTimeField(null=True, blank=True, verbose_name='Data de Envio')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Data de Atualização')

    class Meta:
        verbose_name = 'Laudo de Inspeção'
        verbose_name_plural = 'Laudos de Inspeção'
        ordering = ['-data_inspecao', '-created_at']

    def __str__(self):
        return f"Laudo {self.visita.numero or self.pk} - {self.equipamento}"

    @property
    def enviado(self):
        return self.status == self.Status.ENVIADO


class ComponenteInspecao(models.Model):
    """
    Medição de um componente do material rodante.

    Desgaste por lado = (dimensão std - medição) / (dimensão std - limite de reparo) x 100
    """
    laudo = models.ForeignKey(
        LaudoInspecao,
        on_delete=models.CASCADE,
        related_name='componentes',
        verbose_name='Laudo',
    )
    tipo = models.CharField(max_length=20, choices=TipoComponente.choices, verbose_name='Componente')
    dimensao_std = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True, verbose_name='Dimensão Std')
    limite_reparo = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True, verbose_name='Limite de Reparo')
    medicao_le = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True, verbose_name='Medição LE')
    medicao_ld = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True, verbose_name='Medição LD')
    desgaste_le = models.DecimalField(max_digits=8, decimal_places=2, null=True, blank=True, verbose_name='Desgaste LE (%)')
    desgaste_ld = models.DecimalField(max_digits=8, decimal_places=2, null=True, blank=True, verbose_name='Desgaste LD (%)')
    status_le = models.CharField(max_length=20, choices=StatusDesgaste.choices, blank=True, verbose_name='Status LE')
    status_ld = models.CharField(max_length=20, choices=StatusDesgaste.choices, blank=True, verbose_name='Status LD')
    observacao = models.TextField(blank=True, verbose_name='Observação')
    ordem = models.PositiveSmallIntegerField(default=0, verbose_name='Ordem')

    class Meta:
        verbose_name = 'Componente Inspecionado'
        verbose_name_plural = 'Componentes Inspecionados'
        ordering = ['laudo', 'ordem']

    def __str__(self):
        return f"{self.get_tipo_display()} ({self.laudo_id})"


class FotoComponente(models.Model):
    """Foto de um componente anexada ao laudo (URL externa)."""

    class Lado(models.TextChoices):
        LE = 'LE', 'Lado Esquerdo'
        LD = 'LD', 'Lado Direito'
        AMBOS = 'AMBOS', 'Ambos'

    laudo = models.ForeignKey(
        LaudoInspecao,
        on_delete=models.CASCADE,
        related_name='fotos',
        verbose_name='Laudo',
    )
    tipo = models.CharField(max_length=20, choices=TipoComponente.choices, verbose_name='Componente')
    lado = models.CharField(max_length=5, choices=Lado.choices, default=Lado.AMBOS, verbose_name='Lado')
    url = models.URLField(max_length=500, verbose_name='URL')
    legenda = models.CharField(max_length=255, blank=True, verbose_name='Legenda')
    ordem = models.PositiveSmallIntegerField(default=0, verbose_name='Ordem')

    class Meta:
        verbose_name = 'Foto de Componente'
        verbose_name_plural = 'Fotos de Componentes'
        ordering = ['laudo', 'ordem']

    def __str__(self):
        return f"{self.get_tipo_display()} {self.lado} ({self.laudo_id})"
