"""
Controle de acesso às páginas do dashboard por perfil.

Cada perfil enxerga apenas as rotas listadas em ROTAS_POR_PERFIL; ADMIN e
DIRETOR têm acesso total. Uma rota é liberada quando o caminho é igual a uma
rota permitida ou começa com ela seguida de "/". Rotas de visão geral
(ROTAS_EXATAS) liberam só a própria página, não as seções abaixo delas.

Uso:
    from core.navegacao import pode_acessar_rota, menu_para

    if not pode_acessar_rota(perfil, '/comercial/propostas'):
        return redirect('dashboard')
"""
from accounts.perfis import PERFIS
from accounts.permissions import perfil_de

ACESSO_TOTAL = '*'

# Visões gerais: não liberam as subpáginas pelo prefixo
ROTAS_EXATAS = {'/comercial'}

ROTAS_POR_PERFIL = {
    PERFIS.ADMIN: [ACESSO_TOTAL],
    PERFIS.DIRETOR: [ACESSO_TOTAL],
    PERFIS.COMERCIAL: [
        '/dashboard',
        '/comercial',
        '/comercial/clientes',
        '/comercial/vendedores',
        '/comercial/propostas',
        '/comercial/visitas-tecnicas',
        '/comercial/despesas-veiculo',
        '/comercial/ordens-servico',
    ],
    PERFIS.INSPETOR: [
        '/dashboard',
        '/comercial/agenda-inspetor',
        '/comercial/laudos-inspetor',
    ],
    PERFIS.TECNICO: [
        '/dashboard',
        '/producao',
        '/qualidade',
    ],
    PERFIS.PCP: [
        '/dashboard',
        '/pcp',
        '/producao',
    ],
    PERFIS.PRODUCAO: [
        '/dashboard',
        '/producao',
    ],
    PERFIS.QUALIDADE: [
        '/dashboard',
        '/qualidade',
    ],
    PERFIS.ORCAMENTO: [
        '/dashboard',
        '/comercial/propostas',
    ],
    PERFIS.SUPRIMENTOS: [
        '/dashboard',
        '/suprimentos',
    ],
    PERFIS.ALMOXARIFADO: [
        '/dashboard',
        '/suprimentos',
    ],
    PERFIS.FINANCEIRO: [
        '/dashboard',
        '/comercial/despesas-veiculo',
    ],
    PERFIS.RH: [
        '/dashboard',
        '/configuracoes/usuarios',
    ],
}

# Itens do menu lateral: (título, rota, subitens)
MENU = [
    ('Dashboard', '/dashboard', []),
    ('Comercial', '/comercial', [
        ('Visão Geral', '/comercial'),
        ('Clientes', '/comercial/clientes'),
        ('Representantes Comerciais', '/comercial/vendedores'),
        ('Propostas', '/comercial/propostas'),
        ('Ordens de Serviço', '/comercial/ordens-servico'),
        ('Visitas Técnicas', '/comercial/visitas-tecnicas'),
        ('Despesas de Veículo', '/comercial/despesas-veiculo'),
        ('Agenda do Inspetor', '/comercial/agenda-inspetor'),
        ('Laudos de Inspeção', '/comercial/laudos-inspetor'),
    ]),
    ('Suprimentos', '/suprimentos', []),
    ('PCP', '/pcp', []),
    ('Produção', '/producao', []),
    ('Qualidade', '/qualidade', []),
    ('Usuários', '/configuracoes/usuarios', []),
]


def _normalizar(rota):
    rota = '/' + rota.strip('/')
    return rota


def pode_acessar_rota(perfil, rota):
    """True se o perfil pode abrir a rota (comparação exata ou por prefixo + '/')."""
    permitidas = ROTAS_POR_PERFIL.get(perfil, [])
    if ACESSO_TOTAL in permitidas:
        return True
    rota = _normalizar(rota)
    return any(
        rota == r or (r not in ROTAS_EXATAS and rota.startswith(r + '/'))
        for r in permitidas
    )


def menu_para(user):
    """Menu lateral filtrado pelas rotas que o usuário pode acessar."""
    perfil = perfil_de(user)
    if perfil is None:
        return []

    itens = []
    for titulo, rota, subitens in MENU:
        filhos = [
            {'titulo': t, 'rota': r}
            for t, r in subitens
            if pode_acessar_rota(perfil, r)
        ]
        if pode_acessar_rota(perfil, rota) or filhos:
            itens.append({'titulo': titulo, 'rota': rota, 'subitens': filhos})
    return itens
