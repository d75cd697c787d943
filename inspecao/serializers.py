"""
Serializers DRF para visitas técnicas e laudos de inspeção.
"""
from django.contrib.auth import get_user_model
from rest_framework import serializers

from accounts.models import Vendedor
from accounts.serializers import UsuarioResumoSerializer
from comercial.models import Cliente
from .models import (
    ComponenteInspecao,
    FotoComponente,
    LaudoInspecao,
    TipoComponente,
    VisitaTecnica,
)

User = get_user_model()


class ClienteVisitaSerializer(serializers.ModelSerializer):

    class Meta:
        model = Cliente
        fields = ['id', 'nome', 'cidade', 'estado', 'endereco', 'telefone']
        read_only_fields = fields


class VisitaTecnicaSerializer(serializers.ModelSerializer):
    """
    Visita técnica.

    Na criação exige vendedor, cliente e ao menos um equipamento; o status
    inicia PENDENTE e só muda pelas ações confirmar/realizar/cancelar.
    """
    vendedor = serializers.PrimaryKeyRelatedField(
        queryset=Vendedor.objects.all(),
        error_messages={'does_not_exist': 'Vendedor não encontrado'},
    )
    cliente = serializers.PrimaryKeyRelatedField(
        queryset=Cliente.objects.all(),
        error_messages={'does_not_exist': 'Cliente não encontrado'},
    )
    inspetor = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.all(),
        required=False,
        allow_null=True,
        error_messages={'does_not_exist': 'Inspetor não encontrado'},
    )
    equipamentos = serializers.ListField(
        child=serializers.CharField(max_length=255),
        allow_empty=False,
        error_messages={'empty': 'Informe pelo menos um equipamento'},
    )
    cliente_dados = ClienteVisitaSerializer(source='cliente', read_only=True)
    vendedor_nome = serializers.CharField(source='vendedor.nome', read_only=True)
    inspetor_dados = UsuarioResumoSerializer(source='inspetor', read_only=True)
    tem_laudo = serializers.SerializerMethodField()

    class Meta:
        model = VisitaTecnica
        fields = [
            'id', 'numero', 'vendedor', 'vendedor_nome', 'cliente', 'cliente_dados',
            'inspetor', 'inspetor_dados', 'data_visita', 'equipamentos', 'observacao',
            'status', 'motivo_cancelamento', 'tem_laudo', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'numero', 'status', 'motivo_cancelamento', 'created_at', 'updated_at']

    def get_tem_laudo(self, obj):
        return LaudoInspecao.objects.filter(visita_id=obj.pk).exists()


class CancelarVisitaSerializer(serializers.Serializer):
    motivo = serializers.CharField(required=False, allow_blank=True)


class ComponenteInspecaoSerializer(serializers.ModelSerializer):
    """Medição do componente; desgaste e status são calculados no servidor."""

    class Meta:
        model = ComponenteInspecao
        fields = [
            'id', 'tipo', 'dimensao_std', 'limite_reparo', 'medicao_le', 'medicao_ld',
            'desgaste_le', 'desgaste_ld', 'status_le', 'status_ld', 'observacao', 'ordem',
        ]
        read_only_fields = ['id', 'desgaste_le', 'desgaste_ld', 'status_le', 'status_ld', 'ordem']


class FotoComponenteSerializer(serializers.ModelSerializer):

    class Meta:
        model = FotoComponente
        fields = ['id', 'tipo', 'lado', 'url', 'legenda', 'ordem']
        read_only_fields = ['id', 'ordem']


class LaudoInspecaoSerializer(serializers.ModelSerializer):
    """
    Laudo de inspeção com componentes e fotos.

    A visita é informada na URL/corpo e resolvida pela view; ``componentes``
    e ``fotos`` substituem integralmente as listas gravadas.
    """
    visita = serializers.PrimaryKeyRelatedField(read_only=True)
    visita_numero = serializers.CharField(source='visita.numero', read_only=True, default=None)
    cliente = ClienteVisitaSerializer(source='visita.cliente', read_only=True)
    inspetor = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.all(),
        required=False,
        error_messages={'does_not_exist': 'Inspetor não encontrado'},
    )
    inspetor_dados = UsuarioResumoSerializer(source='inspetor', read_only=True)
    componentes = ComponenteInspecaoSerializer(many=True, required=False)
    fotos = FotoComponenteSerializer(many=True, required=False)

    class Meta:
        model = LaudoInspecao
        fields = [
            'id', 'visita', 'visita_numero', 'cliente', 'inspetor', 'inspetor_dados',
            'equipamento', 'numero_serie', 'frota', 'horimetro_total', 'horimetro_esteira',
            'condicao_solo', 'data_inspecao', 'sumario', 'status', 'data_envio',
            'componentes', 'fotos', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'status', 'data_envio', 'created_at', 'updated_at']

    def validate_equipamento(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Equipamento é obrigatório')
        return value

    def validate_numero_serie(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Número de série é obrigatório')
        return value

    def create(self, validated_data):
        from .services import LaudoService
        return LaudoService.criar(**validated_data)

    def update(self, instance, validated_data):
        from .services import LaudoService
        return LaudoService.atualizar(instance, **validated_data)


class LaudoHistoricoSerializer(serializers.ModelSerializer):
    """Linha do histórico de laudos do inspetor."""
    numero = serializers.SerializerMethodField()
    cliente = ClienteVisitaSerializer(source='visita.cliente', read_only=True)
    componentes = serializers.SerializerMethodField()

    class Meta:
        model = LaudoInspecao
        fields = [
            'id', 'numero', 'visita', 'cliente', 'equipamento', 'numero_serie', 'frota',
            'data_inspecao', 'status', 'data_envio', 'componentes',
        ]
        read_only_fields = fields

    def get_numero(self, obj):
        return obj.visita.numero or f"LAUDO-{obj.pk}"

    def get_componentes(self, obj):
        return [
            {
                'id': c.id,
                'tipo': c.tipo,
                'desgaste_le': c.desgaste_le,
                'desgaste_ld': c.desgaste_ld,
                'status_le': c.status_le,
                'status_ld': c.status_ld,
            }
            for c in obj.componentes.all()
        ]


class VisitaInspetorSerializer(serializers.ModelSerializer):
    """Visita na agenda do inspetor, com o laudo (se houver)."""
    cliente = ClienteVisitaSerializer(read_only=True)
    vendedor_nome = serializers.CharField(source='vendedor.nome', read_only=True)
    tem_laudo = serializers.SerializerMethodField()
    laudo = serializers.SerializerMethodField()

    class Meta:
        model = VisitaTecnica
        fields = [
            'id', 'numero', 'cliente', 'vendedor_nome', 'equipamentos',
            'observacao', 'status', 'tem_laudo', 'laudo',
        ]
        read_only_fields = fields

    def _laudo(self, obj):
        return LaudoInspecao.objects.filter(visita_id=obj.pk).first()

    def get_tem_laudo(self, obj):
        return self._laudo(obj) is not None

    def get_laudo(self, obj):
        laudo = self._laudo(obj)
        return LaudoInspecaoSerializer(laudo).data if laudo else None


class CorrigirTextoSerializer(serializers.Serializer):
    texto = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)


class ComponenteSumarioSerializer(serializers.Serializer):
    tipo = serializers.ChoiceField(choices=TipoComponente.choices)
    desgaste_le = serializers.DecimalField(max_digits=8, decimal_places=2, required=False, allow_null=True)
    desgaste_ld = serializers.DecimalField(max_digits=8, decimal_places=2, required=False, allow_null=True)
    status_le = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    status_ld = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class GerarSumarioSerializer(serializers.Serializer):
    equipamento = serializers.CharField()
    componentes = ComponenteSumarioSerializer(many=True)
    sumario_atual = serializers.CharField(required=False, allow_blank=True)
