"""
Popula o banco com dados de demonstração do Tractus.

Uso:
    python manage.py seed_tractus            # Cria (ou completa) os dados
    python manage.py seed_tractus --limpar   # Remove os dados de demonstração e recria

Usuários criados (senha: tractus123):
    admin@tractus.demo, diretor@tractus.demo, joao@tractus.demo (comercial),
    maria@tractus.demo (comercial), inspetor@tractus.demo, financeiro@tractus.demo
"""
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.db.models import ProtectedError
from django.utils import timezone

from accounts.models import Vendedor
from accounts.perfis import PERFIS
from accounts.services import UsuarioService
from comercial.models import Categoria, Cliente, MetaVenda
from comercial.services import MetaService

User = get_user_model()

SENHA_DEMO = 'tractus123'
DOMINIO_DEMO = '@tractus.demo'

USUARIOS = [
    ('Administrador Demo', 'admin', PERFIS.ADMIN, False),
    ('Diretoria Demo', 'diretor', PERFIS.DIRETOR, False),
    ('João Representante', 'joao', PERFIS.COMERCIAL, True),
    ('Maria Representante', 'maria', PERFIS.COMERCIAL, True),
    ('Inspetor Demo', 'inspetor', PERFIS.INSPETOR, False),
    ('Financeiro Demo', 'financeiro', PERFIS.FINANCEIRO, False),
]

CLIENTES = [
    ('Terraplenagem Horizonte', '11.222.333/0001-81', 'Belo Horizonte', 'MG'),
    ('Mineração Serra Azul', '22.333.444/0001-90', 'Itabira', 'MG'),
    ('Construtora Vale Verde', '33.444.555/0001-09', 'Campinas', 'SP'),
    ('Agropecuária Boa Terra', '44.555.666/0001-18', 'Rio Verde', 'GO'),
]

METAS = {
    Categoria.RODANTE: Decimal('80000.00'),
    Categoria.PECA: Decimal('30000.00'),
    Categoria.CILINDRO: Decimal('20000.00'),
}


class Command(BaseCommand):
    help = 'Popula o banco com usuários, vendedores, clientes e metas de demonstração'

    def add_arguments(self, parser):
        parser.add_argument(
            '--limpar',
            action='store_true',
            help='Remove os dados de demonstração antes de criar novos',
        )

    def handle(self, *args, **options):
        if options['limpar']:
            self._limpar()

        with transaction.atomic():
            vendedores = self._criar_usuarios()
            self._criar_clientes(vendedores)
            self._criar_metas(vendedores)

        self.stdout.write(self.style.SUCCESS('Seed concluído!'))
        self.stdout.write(f'  Login: admin{DOMINIO_DEMO} / {SENHA_DEMO}')

    def _limpar(self):
        self.stdout.write(self.style.WARNING('Removendo dados de demonstração...'))
        vendedores = Vendedor.objects.filter(usuario__email__endswith=DOMINIO_DEMO)
        try:
            with transaction.atomic():
                MetaVenda.objects.filter(vendedor__in=vendedores).delete()
                Cliente.objects.filter(cnpj__in=[c[1] for c in CLIENTES]).delete()
                User.objects.filter(email__endswith=DOMINIO_DEMO).delete()
        except ProtectedError:
            raise CommandError(
                'Os dados de demonstração já têm propostas, OS ou despesas vinculadas. '
                'Remova-os pelo Admin antes de usar --limpar.'
            )

    def _criar_usuarios(self):
        vendedores = []
        for nome, login, role, eh_vendedor in USUARIOS:
            email = f'{login}{DOMINIO_DEMO}'
            user = User.objects.filter(email__iexact=email).first()
            if user is None:
                user = UsuarioService.criar_usuario(nome=nome, email=email, senha=SENHA_DEMO, role=role)
                if role == PERFIS.ADMIN:
                    user.is_staff = True
                    user.is_superuser = True
                    user.save(update_fields=['is_staff', 'is_superuser'])
                self.stdout.write(self.style.SUCCESS(f'  + Usuário {email} ({role})'))
            else:
                self.stdout.write(f'  ~ Usuário {email} já existe')

            if eh_vendedor:
                vendedor, _ = Vendedor.objects.get_or_create(usuario=user)
                vendedores.append(vendedor)
        return vendedores

    def _criar_clientes(self, vendedores):
        for indice, (nome, cnpj, cidade, estado) in enumerate(CLIENTES):
            _, created = Cliente.objects.get_or_create(
                cnpj=cnpj,
                defaults={
                    'nome': nome,
                    'razao_social': f'{nome} Ltda',
                    'cidade': cidade,
                    'estado': estado,
                    'vendedor': vendedores[indice % len(vendedores)],
                },
            )
            if created:
                self.stdout.write(self.style.SUCCESS(f'  + Cliente {nome}'))

    def _criar_metas(self, vendedores):
        hoje = timezone.localdate()
        for vendedor in vendedores:
            for categoria, valor in METAS.items():
                MetaService.salvar(vendedor, hoje.month, hoje.year, categoria, valor)
        self.stdout.write(self.style.SUCCESS(
            f'  + Metas de {hoje.month:02d}/{hoje.year} para {len(vendedores)} vendedores'
        ))
