"""
Constantes centralizadas para os perfis (roles) de usuário do Tractus.

Cada usuário tem exatamente UM perfil, guardado em ``accounts.Perfil.role``.
O perfil define quais páginas do dashboard a pessoa enxerga
(``core.navegacao``) e quais ações administrativas pode executar na API
(``accounts.permissions``). Para uso no Django Admin, cada perfil também
tem um Group homônimo (comando ``setup_perfis``).

Uso:
    from accounts.perfis import PERFIS

    if user.perfil.role in PERFIS.GESTAO:
        ...
"""


class _Perfis:
    """
    Container para os códigos de perfil.
    Evita typos e centraliza alterações.
    """

    # ──────────────────────────────────────────────
    # Direção
    # ──────────────────────────────────────────────
    ADMIN = 'ADMIN'
    DIRETOR = 'DIRETOR'

    # ──────────────────────────────────────────────
    # Comercial e campo
    # ──────────────────────────────────────────────
    COMERCIAL = 'COMERCIAL'
    INSPETOR = 'INSPETOR'
    ORCAMENTO = 'ORCAMENTO'

    # ──────────────────────────────────────────────
    # Fábrica
    # ──────────────────────────────────────────────
    TECNICO = 'TECNICO'
    PCP = 'PCP'
    PRODUCAO = 'PRODUCAO'
    QUALIDADE = 'QUALIDADE'

    # ──────────────────────────────────────────────
    # Apoio
    # ──────────────────────────────────────────────
    FINANCEIRO = 'FINANCEIRO'
    SUPRIMENTOS = 'SUPRIMENTOS'
    ALMOXARIFADO = 'ALMOXARIFADO'
    RH = 'RH'

    LABELS = {
        'ADMIN': 'Administrador',
        'DIRETOR': 'Diretor',
        'COMERCIAL': 'Comercial',
        'INSPETOR': 'Inspetor',
        'ORCAMENTO': 'Orçamento',
        'TECNICO': 'Técnico',
        'PCP': 'PCP',
        'PRODUCAO': 'Produção',
        'QUALIDADE': 'Qualidade',
        'FINANCEIRO': 'Financeiro',
        'SUPRIMENTOS': 'Suprimentos',
        'ALMOXARIFADO': 'Almoxarifado',
        'RH': 'Recursos Humanos',
    }

    # ──────────────────────────────────────────────
    # Conjuntos úteis para verificações rápidas
    # ──────────────────────────────────────────────
    @property
    def GESTAO(self):
        """Perfis com acesso total."""
        return [self.ADMIN, self.DIRETOR]

    @property
    def ADMINISTRA_USUARIOS(self):
        """Perfis que cadastram e editam usuários."""
        return [self.ADMIN, self.DIRETOR, self.RH]

    @property
    def APROVA_DESPESAS(self):
        """Perfis que aprovam/reprovam despesas de veículo."""
        return [self.ADMIN, self.DIRETOR, self.FINANCEIRO]

    @property
    def APROVA_CUSTOS(self):
        """Perfis que decidem liberações de custo de propostas."""
        return [self.ADMIN, self.DIRETOR, self.ORCAMENTO]

    @property
    def CHOICES(self):
        return list(self.LABELS.items())

    @property
    def TODOS(self):
        return list(self.LABELS.keys())


# Instância singleton para importar diretamente
PERFIS = _Perfis()
