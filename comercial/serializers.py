"""
Serializers DRF para o módulo Comercial.
"""
from rest_framework import serializers

from accounts.serializers import UsuarioResumoSerializer
from .models import (
    Cliente,
    ClienteAnotacao,
    LiberacaoCusto,
    MetaVenda,
    OrdemServico,
    Proposta,
    Venda,
)


class ClienteResumoSerializer(serializers.ModelSerializer):
    """Cliente em listagens aninhadas."""

    class Meta:
        model = Cliente
        fields = ['id', 'nome', 'cnpj', 'cidade', 'estado']
        read_only_fields = fields


class OrdemServicoResumoSerializer(serializers.ModelSerializer):

    class Meta:
        model = OrdemServico
        fields = ['id', 'numero', 'status', 'valor_total', 'data_previsao', 'created_at']
        read_only_fields = fields


class ClienteSerializer(serializers.ModelSerializer):
    """
    Cliente com o vendedor responsável e a contagem de OS abertas.

    O CNPJ, quando informado, não pode repetir.
    """
    vendedor_nome = serializers.CharField(source='vendedor.nome', read_only=True, default=None)
    os_abertas = serializers.SerializerMethodField()

    class Meta:
        model = Cliente
        fields = [
            'id', 'nome', 'razao_social', 'cnpj', 'inscricao_estadual',
            'telefone', 'email', 'contato_principal', 'endereco', 'cidade',
            'estado', 'cep', 'vendedor', 'vendedor_nome', 'os_abertas',
            'ativo', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'ativo', 'created_at', 'updated_at']

    def get_os_abertas(self, obj):
        # Anotado no queryset da listagem
        anotado = getattr(obj, 'os_abertas', None)
        if anotado is not None:
            return anotado
        return obj.ordens_servico.filter(status=OrdemServico.Status.ABERTA).count()

    def validate_nome(self, value):
        value = value.strip()
        if len(value) < 2:
            raise serializers.ValidationError('Nome deve ter pelo menos 2 caracteres')
        return value

    def validate_cnpj(self, value):
        value = (value or '').strip()
        if not value:
            return value
        existentes = Cliente.objects.filter(cnpj=value)
        if self.instance is not None:
            existentes = existentes.exclude(pk=self.instance.pk)
        if existentes.exists():
            raise serializers.ValidationError('Já existe um cliente com este CNPJ')
        return value

    def validate_estado(self, value):
        return (value or '').strip().upper()


class ClienteDetalheSerializer(ClienteSerializer):
    """Cliente com as 10 ordens de serviço mais recentes."""
    ordens_servico = serializers.SerializerMethodField()

    class Meta(ClienteSerializer.Meta):
        fields = ClienteSerializer.Meta.fields + ['ordens_servico']

    def get_ordens_servico(self, obj):
        ordens = obj.ordens_servico.order_by('-created_at')[:10]
        return OrdemServicoResumoSerializer(ordens, many=True).data


class ClienteAnotacaoSerializer(serializers.ModelSerializer):
    vendedor_nome = serializers.CharField(source='vendedor.nome', read_only=True)

    class Meta:
        model = ClienteAnotacao
        fields = ['id', 'cliente', 'vendedor', 'vendedor_nome', 'texto', 'created_at']
        read_only_fields = ['id', 'created_at']

    def validate_texto(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Texto da anotação é obrigatório')
        return value


class ResumoAnotacoesSerializer(serializers.Serializer):
    cliente = serializers.IntegerField(required=False, allow_null=True)
    vendedor = serializers.IntegerField(required=False, allow_null=True)


class LiberacaoCustoSerializer(serializers.ModelSerializer):
    aprovado_por = UsuarioResumoSerializer(read_only=True)

    class Meta:
        model = LiberacaoCusto
        fields = [
            'id', 'proposta', 'status', 'custo_real', 'observacoes',
            'aprovado_por', 'data_aprovacao', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class DecisaoLiberacaoSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[
        LiberacaoCusto.Status.APROVADO,
        LiberacaoCusto.Status.REPROVADO,
        LiberacaoCusto.Status.AGUARDANDO_AJUSTE,
    ])
    custo_real = serializers.DecimalField(max_digits=14, decimal_places=2, required=False, allow_null=True)
    observacoes = serializers.CharField(required=False, allow_blank=True)


class PropostaSerializer(serializers.ModelSerializer):
    """
    Proposta comercial.

    Número, margem e status são calculados pelo serviço; o status muda
    apenas pelos endpoints de status e liberação de custo.
    """
    cliente_nome = serializers.CharField(source='cliente.nome', read_only=True)
    vendedor_nome = serializers.CharField(source='vendedor.nome', read_only=True)

    class Meta:
        model = Proposta
        fields = [
            'id', 'numero', 'cliente', 'cliente_nome', 'vendedor', 'vendedor_nome',
            'valor', 'custo_estimado', 'margem', 'categoria', 'status',
            'data_validade', 'motivo_cancelamento', 'created_at', 'updated_at',
        ]
        read_only_fields = [
            'id', 'numero', 'margem', 'status', 'motivo_cancelamento',
            'created_at', 'updated_at',
        ]

    def create(self, validated_data):
        from .services import PropostaService
        return PropostaService.criar(**validated_data)

    def update(self, instance, validated_data):
        from .services import PropostaService
        return PropostaService.atualizar(instance, **validated_data)


class PropostaDetalheSerializer(PropostaSerializer):
    liberacao_custo = serializers.SerializerMethodField()
    ordem_servico = serializers.SerializerMethodField()

    class Meta(PropostaSerializer.Meta):
        fields = PropostaSerializer.Meta.fields + ['liberacao_custo', 'ordem_servico']

    def get_liberacao_custo(self, obj):
        liberacao = LiberacaoCusto.objects.filter(proposta=obj).select_related('aprovado_por').first()
        return LiberacaoCustoSerializer(liberacao).data if liberacao else None

    def get_ordem_servico(self, obj):
        ordem = OrdemServico.objects.filter(proposta=obj).first()
        return OrdemServicoResumoSerializer(ordem).data if ordem else None


class StatusPropostaSerializer(serializers.Serializer):
    status = serializers.CharField()
    motivo_cancelamento = serializers.CharField(required=False, allow_blank=True)


class OrdemServicoSerializer(serializers.ModelSerializer):
    """Ordem de serviço. O número é gerado na criação e o status muda por /status/."""
    cliente_nome = serializers.CharField(source='cliente.nome', read_only=True)
    proposta_numero = serializers.CharField(source='proposta.numero', read_only=True, default=None)
    venda = serializers.SerializerMethodField()

    class Meta:
        model = OrdemServico
        fields = [
            'id', 'numero', 'proposta', 'proposta_numero', 'cliente', 'cliente_nome',
            'valor_total', 'status', 'data_previsao', 'data_fechamento', 'venda',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'numero', 'status', 'data_fechamento', 'created_at', 'updated_at']
        # A unicidade da proposta é validada em validate_proposta
        extra_kwargs = {'proposta': {'validators': []}}

    def get_venda(self, obj):
        venda = Venda.objects.filter(ordem_servico=obj).first()
        return VendaSerializer(venda).data if venda else None

    def validate_proposta(self, value):
        if self.instance is not None:
            if value != self.instance.proposta:
                raise serializers.ValidationError('A proposta da OS não pode ser alterada')
            return value
        if value is not None and OrdemServico.objects.filter(proposta=value).exists():
            raise serializers.ValidationError('Proposta já possui OS vinculada')
        return value

    def create(self, validated_data):
        from .services import OrdemServicoService
        return OrdemServicoService.criar(
            cliente=validated_data['cliente'],
            valor_total=validated_data['valor_total'],
            proposta=validated_data.get('proposta'),
            data_previsao=validated_data.get('data_previsao'),
        )


class StatusOrdemServicoSerializer(serializers.Serializer):
    status = serializers.CharField()


class VendaSerializer(serializers.ModelSerializer):
    vendedor_nome = serializers.CharField(source='vendedor.nome', read_only=True)

    class Meta:
        model = Venda
        fields = [
            'id', 'vendedor', 'vendedor_nome', 'ordem_servico', 'data',
            'valor', 'categoria', 'semana', 'created_at',
        ]
        read_only_fields = fields


class MetaSerializer(serializers.ModelSerializer):
    """
    Meta mensal. A criação é um upsert por (vendedor, mês, ano, categoria),
    por isso o validador de unicidade do modelo é desligado aqui.
    """
    vendedor_nome = serializers.CharField(source='vendedor.nome', read_only=True)

    class Meta:
        model = MetaVenda
        fields = [
            'id', 'vendedor', 'vendedor_nome', 'mes', 'ano', 'categoria',
            'valor_meta', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        validators = []

    def validate_valor_meta(self, value):
        if value < 0:
            raise serializers.ValidationError('O valor da meta não pode ser negativo')
        return value

    def validate(self, attrs):
        if self.instance is not None:
            chave = {
                campo: attrs.get(campo, getattr(self.instance, campo))
                for campo in ('vendedor', 'mes', 'ano', 'categoria')
            }
            if MetaVenda.objects.filter(**chave).exclude(pk=self.instance.pk).exists():
                raise serializers.ValidationError('Já existe uma meta para este vendedor, mês e categoria')
        return attrs

    def create(self, validated_data):
        from .services import MetaService
        return MetaService.salvar(
            vendedor=validated_data['vendedor'],
            mes=validated_data['mes'],
            ano=validated_data['ano'],
            categoria=validated_data['categoria'],
            valor_meta=validated_data['valor_meta'],
        )
