"""
Modelos do módulo Comercial - Tractus

Fluxo: Vendedor -> Cliente -> Proposta -> (Liberação de Custo) -> Ordem de Serviço -> Venda
Metas mensais por vendedor e categoria alimentam o dashboard comercial.
"""
from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinLengthValidator, MinValueValidator
from django.db import models


class Categoria(models.TextChoices):
    """Linha de produto/serviço da venda."""
    RODANTE = 'RODANTE', 'Material Rodante'
    PECA = 'PECA', 'Peças'
    CILINDRO = 'CILINDRO', 'Cilindros'


class Cliente(models.Model):
    """Cliente (empresa) atendido pela equipe comercial."""
    nome = models.CharField(
        max_length=255,
        validators=[MinLengthValidator(2)],
        verbose_name='Nome',
    )
    razao_social = models.CharField(max_length=255, blank=True, verbose_name='Razão Social')
    cnpj = models.CharField(max_length=20, blank=True, db_index=True, verbose_name='CNPJ')
    inscricao_estadual = models.CharField(max_length=30, blank=True, verbose_name='Inscrição Estadual')
    telefone = models.CharField(max_length=30, blank=True, verbose_name='Telefone')
    email = models.EmailField(blank=True, verbose_name='E-mail')
    contato_principal = models.CharField(max_length=255, blank=True, verbose_name='Contato Principal')
    endereco = models.CharField(max_length=255, blank=True, verbose_name='Endereço')
    cidade = models.CharField(max_length=100, blank=True, verbose_name='Cidade')
    estado = models.CharField(max_length=2, blank=True, verbose_name='UF')
    cep = models.CharField(max_length=10, blank=True, verbose_name='CEP')
    vendedor = models.ForeignKey(
        'accounts.Vendedor',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='clientes',
        verbose_name='Vendedor Responsável',
    )
    ativo = models.BooleanField(
        default=True,
        verbose_name='Ativo',
        help_text='Clientes excluídos ficam inativos (exclusão lógica)',
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Data de Atualização')

    class Meta:
        verbose_name = 'Cliente'
        verbose_name_plural = 'Clientes'
        ordering = ['nome']
        indexes = [
            models.Index(fields=['ativo', 'nome'], name='cliente_ativo_nome_idx'),
        ]

    def __str__(self):
        return self.nome


class ClienteAnotacao(models.Model):
    """Anotação livre de um vendedor sobre um cliente."""
    cliente = models.ForeignKey(
        Cliente,
        on_delete=models.CASCADE,
        related_name='anotacoes',
        verbose_name='Cliente',
    )
    vendedor = models.ForeignKey(
        'accounts.Vendedor',
        on_delete=models.PROTECT,
        related_name='anotacoes',
        verbose_name='Vendedor',
    )
    texto = models.TextField(verbose_name='Texto')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')

    class Meta:
        verbose_name = 'Anotação de Cliente'
        verbose_name_plural = 'Anotações de Clientes'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['cliente', 'vendedor', 'created_at'], name='anotacao_cliente_vend_idx'),
        ]

    def __str__(self):
        return f"{self.cliente} - {self.created_at:%d/%m/%Y}"


class Proposta(models.Model):
    """Proposta comercial (orçamento) para um cliente."""

    class Status(models.TextChoices):
        EM_ABERTO = 'EM_ABERTO', 'Em Aberto'
        AGUARDANDO_APROVACAO = 'AGUARDANDO_APROVACAO', 'Aguardando Aprovação'
        APROVADA = 'APROVADA', 'Aprovada'
        REPROVADA = 'REPROVADA', 'Reprovada'
        CANCELADA = 'CANCELADA', 'Cancelada'

    numero = models.CharField(
        max_length=20,
        unique=True,
        verbose_name='Número',
        help_text='Gerado automaticamente (PROP-000001)',
    )
    cliente = models.ForeignKey(
        Cliente,
        on_delete=models.PROTECT,
        related_name='propostas',
        verbose_name='Cliente',
    )
    vendedor = models.ForeignKey(
        'accounts.Vendedor',
        on_delete=models.PROTECT,
        related_name='propostas',
        verbose_name='Vendedor',
    )
    valor = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name='Valor',
    )
    custo_estimado = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name='Custo Estimado',
    )
    margem = models.DecimalField(
        max_digits=7,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name='Margem (%)',
        help_text='(valor - custo estimado) / valor x 100',
    )
    categoria = models.CharField(
        max_length=10,
        choices=Categoria.choices,
        default=Categoria.RODANTE,
        verbose_name='Categoria',
    )
    status = models.CharField(
        max_length=25,
        choices=Status.choices,
        default=Status.EM_ABERTO,
        db_index=True,
        verbose_name='Status',
    )
    data_validade = models.DateField(null=True, blank=True, verbose_name='Validade')
    motivo_cancelamento = models.TextField(blank=True, verbose_name='Motivo do Cancelamento')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Data de Atualização')

    class Meta:
        verbose_name = 'Proposta'
        verbose_name_plural = 'Propostas'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.numero} - {self.cliente}"


class LiberacaoCusto(models.Model):
    """Pedido de liberação de custo de uma proposta (aprovação pelo orçamento/diretoria)."""

    class Status(models.TextChoices):
        EM_ANALISE = 'EM_ANALISE', 'Em Análise'
        APROVADO = 'APROVADO', 'Aprovado'
        REPROVADO = 'REPROVADO', 'Reprovado'
        AGUARDANDO_AJUSTE = 'AGUARDANDO_AJUSTE', 'Aguardando Ajuste'

    proposta = models.OneToOneField(
        Proposta,
        on_delete=models.CASCADE,
        related_name='liberacao_custo',
        verbose_name='Proposta',
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.EM_ANALISE,
        verbose_name='Status',
    )
    custo_real = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name='Custo Real',
    )
    observacoes = models.TextField(blank=True, verbose_name='Observações')
    aprovado_por = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='liberacoes_custo',
        verbose_name='Aprovado por',
    )
    data_aprovacao = models.DateTimeField(null=True, blank=True, verbose_name='Data da Aprovação')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Data de Atualização')

    class Meta:
        verbose_name = 'Liberação de Custo'
        verbose_name_plural = 'Liberações de Custo'

    def __str__(self):
        return f"Liberação {self.proposta.numero} ({self.get_status_display()})"


class OrdemServico(models.Model):
    """Ordem de serviço, normalmente derivada de uma proposta aprovada."""

    class Status(models.TextChoices):
        ABERTA = 'ABERTA', 'Aberta'
        EM_PRODUCAO = 'EM_PRODUCAO', 'Em Produção'
        AGUARDANDO_PECAS = 'AGUARDANDO_PECAS', 'Aguardando Peças'
        FINALIZADA = 'FINALIZADA', 'Finalizada'
        FATURADA = 'FATURADA', 'Faturada'
        CANCELADA = 'CANCELADA', 'Cancelada'

    STATUS_FINAIS = (Status.FATURADA, Status.CANCELADA)
    STATUS_FECHAMENTO = (Status.FINALIZADA, Status.FATURADA)

    numero = models.CharField(
        max_length=20,
        unique=True,
        verbose_name='Número',
        help_text='Gerado automaticamente (OS-000001)',
    )
    proposta = models.OneToOneField(
        Proposta,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='ordem_servico',
        verbose_name='Proposta',
        help_text='Uma proposta gera no máximo uma OS',
    )
    cliente = models.ForeignKey(
        Cliente,
        on_delete=models.PROTECT,
        related_name='ordens_servico',
        verbose_name='Cliente',
    )
    valor_total = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name='Valor Total',
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.ABERTA,
        db_index=True,
        verbose_name='Status',
    )
    data_previsao = models.DateField(null=True, blank=True, verbose_name='Previsão de Entrega')
    data_fechamento = models.DateTimeField(null=True, blank=True, verbose_name='Data de Fechamento')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Data de Atualização')

    class Meta:
        verbose_name = 'Ordem de Serviço'
        verbose_name_plural = 'Ordens de Serviço'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.numero} - {self.cliente}"


class Venda(models.Model):
    """Venda realizada. Gerada automaticamente quando a OS é faturada."""
    vendedor = models.ForeignKey(
        'accounts.Vendedor',
        on_delete=models.PROTECT,
        related_name='vendas',
        verbose_name='Vendedor',
    )
    ordem_servico = models.OneToOneField(
        OrdemServico,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='venda',
        verbose_name='Ordem de Serviço',
    )
    data = models.DateField(verbose_name='Data')
    valor = models.DecimalField(max_digits=14, decimal_places=2, verbose_name='Valor')
    categoria = models.CharField(max_length=10, choices=Categoria.choices, verbose_name='Categoria')
    semana = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(4)],
        verbose_name='Semana do Mês',
        help_text='1 a 4 (dias 22 em diante contam como semana 4)',
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')

    class Meta:
        verbose_name = 'Venda'
        verbose_name_plural = 'Vendas'
        ordering = ['-data']
        indexes = [
            models.Index(fields=['vendedor', 'data'], name='venda_vendedor_data_idx'),
        ]

    def __str__(self):
        return f"{self.vendedor} - R$ {self.valor} ({self.data:%d/%m/%Y})"


class MetaVenda(models.Model):
    """Meta mensal de vendas por vendedor e categoria."""
    vendedor = models.ForeignKey(
        'accounts.Vendedor',
        on_delete=models.PROTECT,
        related_name='metas',
        verbose_name='Vendedor',
    )
    mes = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(12)],
        verbose_name='Mês',
    )
    ano = models.PositiveSmallIntegerField(verbose_name='Ano')
    categoria = models.CharField(max_length=10, choices=Categoria.choices, verbose_name='Categoria')
    valor_meta = models.DecimalField(max_digits=14, decimal_places=2, verbose_name='Valor da Meta')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Data de Atualização')

    class Meta:
        verbose_name = 'Meta'
        verbose_name_plural = 'Metas'
        ordering = ['-ano', '-mes', 'categoria']
        constraints = [
            models.UniqueConstraint(
                fields=['vendedor', 'mes', 'ano', 'categoria'],
                name='meta_unica_vendedor_mes_categoria',
            ),
        ]

    def __str__(self):
        return f"{self.vendedor} {self.mes:02d}/{self.ano} {self.get_categoria_display()}"
