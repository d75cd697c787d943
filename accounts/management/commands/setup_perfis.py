"""
Cria um Group do Django para cada perfil do Tractus, com as permissões de
modelo usadas no Django Admin.

Executa: python manage.py setup_perfis
         python manage.py setup_perfis --listar

O nome do grupo é o rótulo do perfil (PERFIS.LABELS); o sinal de Perfil
mantém cada usuário apenas no grupo do seu perfil.
"""
from django.contrib.auth.models import Group, Permission
from django.core.management.base import BaseCommand

from accounts.perfis import PERFIS

TODAS = ['add', 'change', 'delete', 'view']

ACESSO_TOTAL = {
    'auth': {'user': TODAS},
    'accounts': {'perfil': TODAS, 'vendedor': TODAS},
    'comercial': {
        'cliente': TODAS, 'clienteanotacao': TODAS, 'proposta': TODAS, 'liberacaocusto': TODAS,
        'ordemservico': TODAS, 'venda': TODAS, 'metavenda': TODAS,
    },
    'inspecao': {
        'visitatecnica': TODAS, 'laudoinspecao': TODAS,
        'componenteinspecao': TODAS, 'fotocomponente': TODAS,
    },
    'frota': {'despesaveiculo': TODAS, 'configuracaomanutencao': TODAS},
}

PERMISSOES_POR_PERFIL = {
    PERFIS.ADMIN: ACESSO_TOTAL,
    PERFIS.DIRETOR: ACESSO_TOTAL,
    PERFIS.COMERCIAL: {
        'comercial': {
            'cliente': ['add', 'change', 'view'],
            'clienteanotacao': ['add', 'delete', 'view'],
            'proposta': ['add', 'change', 'view'],
            'ordemservico': ['add', 'change', 'view'],
            'venda': ['view'],
            'metavenda': ['view'],
        },
        'inspecao': {'visitatecnica': ['add', 'change', 'view'], 'laudoinspecao': ['view']},
        'frota': {'despesaveiculo': ['add', 'change', 'view']},
    },
    PERFIS.INSPETOR: {
        'inspecao': {
            'visitatecnica': ['view'],
            'laudoinspecao': ['add', 'change', 'view'],
            'componenteinspecao': TODAS,
            'fotocomponente': TODAS,
        },
    },
    PERFIS.ORCAMENTO: {
        'comercial': {'proposta': ['change', 'view'], 'liberacaocusto': ['change', 'view']},
    },
    PERFIS.FINANCEIRO: {
        'frota': {'despesaveiculo': ['change', 'view'], 'configuracaomanutencao': ['view']},
        'comercial': {'venda': ['view']},
    },
    PERFIS.RH: {
        'auth': {'user': ['add', 'change', 'view']},
        'accounts': {'perfil': ['add', 'change', 'view'], 'vendedor': ['add', 'delete', 'view']},
    },
}


class Command(BaseCommand):
    help = 'Cria os grupos de perfil do Tractus e atribui as permissões do Admin'

    def add_arguments(self, parser):
        parser.add_argument(
            '--listar',
            action='store_true',
            help='Apenas lista os perfis e se o grupo já existe',
        )

    def handle(self, *args, **options):
        if options['listar']:
            self._listar()
            return

        criados = 0
        for role, nome_grupo in PERFIS.LABELS.items():
            grupo, created = Group.objects.get_or_create(name=nome_grupo)
            if created:
                criados += 1
                self.stdout.write(self.style.SUCCESS(f'  + Grupo "{nome_grupo}" criado'))
            else:
                self.stdout.write(self.style.WARNING(f'  ~ Grupo "{nome_grupo}" já existe'))

            grupo.permissions.clear()
            adicionadas = 0
            for app_label, modelos in PERMISSOES_POR_PERFIL.get(role, {}).items():
                for modelo, acoes in modelos.items():
                    codenames = [f'{acao}_{modelo}' for acao in acoes]
                    perms = Permission.objects.filter(
                        content_type__app_label=app_label,
                        codename__in=codenames,
                    )
                    grupo.permissions.add(*perms)
                    adicionadas += len(perms)
                    if len(perms) != len(codenames):
                        self.stdout.write(self.style.NOTICE(
                            f'    ? Permissões de {app_label}.{modelo} incompletas (rode as migrations)'
                        ))
            if adicionadas:
                self.stdout.write(f'    {adicionadas} permissões atribuídas')

        self.stdout.write(self.style.SUCCESS(
            f'Setup de perfis concluído: {criados} grupos criados, {len(PERFIS.LABELS) - criados} já existiam'
        ))

    def _listar(self):
        existentes = set(Group.objects.values_list('name', flat=True))
        self.stdout.write(self.style.MIGRATE_HEADING('=== Perfis do Tractus ==='))
        for role, nome_grupo in PERFIS.LABELS.items():
            status = self.style.SUCCESS('OK') if nome_grupo in existentes else self.style.ERROR('NÃO CRIADO')
            self.stdout.write(f'  {role:<13} {nome_grupo} [{status}]')
