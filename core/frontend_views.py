"""
Views do dashboard (templates Django) com menu e acesso por perfil.
"""
import logging
from functools import wraps

from django.contrib import messages
from django.contrib.auth import authenticate, login, logout
from django.contrib.auth.decorators import login_required
from django.db.models import Sum
from django.shortcuts import redirect, render
from django.utils import timezone

from accounts.permissions import perfil_de
from comercial.models import OrdemServico, Venda
from frota.models import DespesaVeiculo
from inspecao.models import VisitaTecnica

from .datas import intervalo_mes
from .navegacao import MENU, pode_acessar_rota

logger = logging.getLogger(__name__)


def rota_permitida(view_func):
    """Redireciona para o dashboard quando o perfil não pode abrir a rota pedida."""
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not pode_acessar_rota(perfil_de(request.user), request.path):
            logger.info(f"Acesso negado a {request.path} para {request.user.username}")
            messages.warning(request, 'Seu perfil não tem acesso a esta página.')
            return redirect('dashboard')
        return view_func(request, *args, **kwargs)
    return wrapper


def login_view(request):
    """Login por e-mail e senha."""
    if request.user.is_authenticated:
        return redirect('dashboard')

    if request.method == 'POST':
        email = (request.POST.get('email') or '').strip()
        user = authenticate(request, username=email, password=request.POST.get('password'))
        if user is not None:
            login(request, user)
            return redirect(request.GET.get('next') or 'dashboard')
        return render(request, 'core/login.html', {'error': 'Credenciais inválidas', 'email': email})

    return render(request, 'core/login.html')


@login_required
def logout_view(request):
    logout(request)
    return redirect('login')


def indicadores_dashboard():
    """Números do painel: OS abertas, visitas pendentes, despesas pendentes e vendas do mês."""
    hoje = timezone.localdate()
    inicio, fim = intervalo_mes(hoje.month, hoje.year)
    vendas_mes = Venda.objects.filter(data__gte=inicio, data__lt=fim).aggregate(total=Sum('valor'))['total']
    return {
        'os_abertas': OrdemServico.objects.exclude(status__in=OrdemServico.STATUS_FINAIS).count(),
        'visitas_pendentes': VisitaTecnica.objects.filter(status=VisitaTecnica.Status.PENDENTE).count(),
        'despesas_pendentes': DespesaVeiculo.objects.filter(status=DespesaVeiculo.Status.PENDENTE).count(),
        'vendas_mes': vendas_mes or 0,
    }


@login_required
def dashboard_view(request):
    return render(request, 'core/dashboard.html', {'indicadores': indicadores_dashboard()})


def _titulo_da_rota(rota):
    for titulo, rota_menu, subitens in MENU:
        if rota_menu == rota:
            return titulo
        for sub_titulo, sub_rota in subitens:
            if sub_rota == rota:
                return sub_titulo
    return rota.strip('/').split('/')[-1].replace('-', ' ').title()


@login_required
@rota_permitida
def secao_view(request, secao):
    """Página de uma seção do menu (o conteúdo vem da API)."""
    rota = '/' + secao.strip('/')
    return render(request, 'core/secao.html', {'rota': rota, 'titulo': _titulo_da_rota(rota)})
