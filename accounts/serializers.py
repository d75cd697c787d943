"""
Serializers DRF para usuários, perfis e vendedores.
"""
from django.contrib.auth import get_user_model
from rest_framework import serializers

from .models import Vendedor
from .perfis import PERFIS

User = get_user_model()


def dados_usuario(user):
    """Payload do usuário autenticado (login e /me)."""
    perfil = getattr(user, 'perfil', None)
    vendedor = getattr(user, 'vendedor', None)
    return {
        'id': user.id,
        'name': user.get_full_name() or user.username,
        'email': user.email,
        'role': perfil.role if perfil else (PERFIS.ADMIN if user.is_superuser else None),
        'photo': perfil.foto if perfil and perfil.foto else None,
        'vendedor_id': vendedor.id if vendedor else None,
    }


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=6, trim_whitespace=False)


class UsuarioResumoSerializer(serializers.ModelSerializer):
    """Usuário em listagens aninhadas (vendedor, inspetor, aprovador)."""
    name = serializers.SerializerMethodField()
    photo = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'photo']
        read_only_fields = fields

    def get_name(self, obj):
        return obj.get_full_name() or obj.username

    def get_photo(self, obj):
        perfil = getattr(obj, 'perfil', None)
        return perfil.foto if perfil and perfil.foto else None


class UsuarioSerializer(serializers.ModelSerializer):
    """
    CRUD de usuários.

    Entrada: name, email, password (só na criação ou para trocar), role, photo, active.
    O username é mantido igual ao e-mail.
    """
    name = serializers.CharField(source='first_name', min_length=2, max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=6, required=False, trim_whitespace=False)
    role = serializers.ChoiceField(choices=PERFIS.CHOICES, write_only=True, required=False)
    photo = serializers.CharField(write_only=True, required=False, allow_blank=True, max_length=500)
    active = serializers.BooleanField(source='is_active', required=False)
    perfil = serializers.SerializerMethodField()
    vendedor_id = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id', 'name', 'email', 'password', 'role', 'photo', 'active',
            'perfil', 'vendedor_id', 'date_joined',
        ]
        read_only_fields = ['id', 'date_joined']

    def get_perfil(self, obj):
        perfil = getattr(obj, 'perfil', None)
        if not perfil:
            return None
        return {'role': perfil.role, 'label': perfil.get_role_display(), 'photo': perfil.foto or None}

    def get_vendedor_id(self, obj):
        vendedor = getattr(obj, 'vendedor', None)
        return vendedor.id if vendedor else None

    def validate_email(self, value):
        value = value.strip().lower()
        existentes = User.objects.filter(email__iexact=value)
        if self.instance is not None:
            existentes = existentes.exclude(pk=self.instance.pk)
        if existentes.exists():
            raise serializers.ValidationError('Este email já está em uso')
        return value

    def validate(self, attrs):
        if self.instance is None:
            if not attrs.get('password'):
                raise serializers.ValidationError({'password': 'Senha é obrigatória'})
            if not attrs.get('role'):
                raise serializers.ValidationError({'role': 'Perfil é obrigatório'})
        return attrs

    def create(self, validated_data):
        from .services import UsuarioService
        return UsuarioService.criar_usuario(
            nome=validated_data['first_name'],
            email=validated_data['email'],
            senha=validated_data['password'],
            role=validated_data['role'],
            foto=validated_data.get('photo', ''),
            ativo=validated_data.get('is_active', True),
        )

    def update(self, instance, validated_data):
        from .services import UsuarioService
        return UsuarioService.atualizar_usuario(
            instance,
            nome=validated_data.get('first_name'),
            email=validated_data.get('email'),
            senha=validated_data.get('password'),
            role=validated_data.get('role'),
            foto=validated_data.get('photo'),
            ativo=validated_data.get('is_active'),
        )


class VendedorSerializer(serializers.ModelSerializer):
    """Vendedor com dados do usuário e contadores."""
    user = UsuarioResumoSerializer(source='usuario', read_only=True)
    name = serializers.CharField(source='nome', read_only=True)
    total_clientes = serializers.SerializerMethodField()
    total_propostas = serializers.SerializerMethodField()

    class Meta:
        model = Vendedor
        fields = ['id', 'name', 'user', 'total_clientes', 'total_propostas', 'created_at']
        read_only_fields = fields

    def get_total_clientes(self, obj):
        return obj.clientes.count()

    def get_total_propostas(self, obj):
        return obj.propostas.count()


class VendedorDetalheSerializer(VendedorSerializer):
    """Vendedor com clientes ativos e metas do ano corrente."""
    clientes = serializers.SerializerMethodField()
    metas = serializers.SerializerMethodField()

    class Meta(VendedorSerializer.Meta):
        fields = VendedorSerializer.Meta.fields + ['clientes', 'metas']
        read_only_fields = fields

    def get_clientes(self, obj):
        from comercial.serializers import ClienteResumoSerializer
        return ClienteResumoSerializer(obj.clientes.filter(ativo=True).order_by('nome'), many=True).data

    def get_metas(self, obj):
        from django.utils import timezone
        from comercial.serializers import MetaSerializer
        ano = timezone.localdate().year
        return MetaSerializer(obj.metas.filter(ano=ano).order_by('mes', 'categoria'), many=True).data
