"""
Serializers DRF para despesas de veículo e configurações de manutenção.
"""
from rest_framework import serializers

from .models import ConfiguracaoManutencao, DespesaVeiculo


class DespesaVeiculoSerializer(serializers.ModelSerializer):
    """
    Despesa de veículo.

    Status e avaliação mudam apenas pelas ações aprovar/reprovar.
    O vendedor não pode ser trocado depois do registro.
    """
    km = serializers.IntegerField(
        min_value=1,
        error_messages={'min_value': 'Quilometragem deve ser positiva'},
    )
    vendedor_nome = serializers.CharField(source='vendedor.nome', read_only=True)
    tipo_label = serializers.CharField(source='get_tipo_display', read_only=True)
    aprovado_por_nome = serializers.SerializerMethodField()

    class Meta:
        model = DespesaVeiculo
        fields = [
            'id', 'vendedor', 'vendedor_nome', 'data', 'tipo', 'tipo_label', 'valor', 'km',
            'comprovante', 'validado_por_ia', 'valor_extraido', 'nome_extraido',
            'status', 'aprovado_por', 'aprovado_por_nome', 'data_aprovacao',
            'motivo_reprovacao', 'created_at', 'updated_at',
        ]
        read_only_fields = [
            'id', 'status', 'aprovado_por', 'data_aprovacao', 'motivo_reprovacao',
            'created_at', 'updated_at',
        ]

    def get_aprovado_por_nome(self, obj):
        if not obj.aprovado_por:
            return None
        return obj.aprovado_por.get_full_name() or obj.aprovado_por.username

    def validate_vendedor(self, value):
        if self.instance is not None and value != self.instance.vendedor:
            raise serializers.ValidationError('O vendedor da despesa não pode ser alterado')
        return value

    def validate_valor(self, value):
        if value < 0:
            raise serializers.ValidationError('O valor não pode ser negativo')
        return value

    def create(self, validated_data):
        from .services import DespesaVeiculoService
        return DespesaVeiculoService.criar(**validated_data)

    def update(self, instance, validated_data):
        from .services import DespesaVeiculoService
        validated_data.pop('vendedor', None)
        return DespesaVeiculoService.atualizar(instance, **validated_data)


class ReprovarDespesaSerializer(serializers.Serializer):
    motivo_reprovacao = serializers.CharField(required=False, allow_blank=True)


class ConfiguracaoManutencaoSerializer(serializers.ModelSerializer):
    tipo_label = serializers.CharField(source='get_tipo_display', read_only=True)

    class Meta:
        model = ConfiguracaoManutencao
        fields = ['id', 'tipo', 'tipo_label', 'intervalo_km', 'updated_at']
        read_only_fields = fields


class IntervaloManutencaoSerializer(serializers.Serializer):
    intervalo_km = serializers.IntegerField(
        min_value=1,
        error_messages={'min_value': 'O intervalo deve ser maior que zero'},
    )
