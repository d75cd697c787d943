"""
Integração com IA generativa (Google Gemini) via API REST.

Usada para:
- Correção de textos livres (observações, anotações)
- Correção de textos técnicos de laudos de inspeção
- Resumo executivo das anotações de um cliente
- Sumário técnico de laudos a partir das medições

A IA é best-effort: sem GEMINI_API_KEY, com resposta de erro ou falha de
rede, as funções devolvem o texto original e ``corrigido=False``. Nenhuma
requisição da API falha por causa da IA.
"""
import logging
from typing import Optional

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class IANaoConfigurada(Exception):
    """GEMINI_API_KEY ausente."""


class FalhaIA(Exception):
    """Erro de comunicação ou resposta inválida da API de IA."""


class ClienteGemini:
    """
    Cliente mínimo do endpoint ``models/{modelo}:generateContent``.

    Autentica pelo header ``x-goog-api-key``.
    """

    def __init__(self, api_key: Optional[str] = None, api_url: Optional[str] = None,
                 modelo: Optional[str] = None, timeout: Optional[int] = None):
        self.api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.api_url = (api_url or settings.GEMINI_API_URL).rstrip('/')
        self.modelo = modelo or settings.GEMINI_MODEL
        self.timeout = timeout or settings.GEMINI_TIMEOUT

    @property
    def configurado(self) -> bool:
        return bool(self.api_key)

    def _endpoint(self) -> str:
        return f"{self.api_url}/models/{self.modelo}:generateContent"

    def gerar(self, prompt: str, temperatura: float = 0.1, max_tokens: int = 500) -> str:
        """
        Envia o prompt e retorna o texto da primeira candidata.

        Raises:
            IANaoConfigurada: sem chave de API
            FalhaIA: erro HTTP, de rede ou resposta sem texto
        """
        if not self.configurado:
            raise IANaoConfigurada('GEMINI_API_KEY não configurada')

        payload = {
            'contents': [{'parts': [{'text': prompt}]}],
            'generationConfig': {
                'temperature': temperatura,
                'maxOutputTokens': max_tokens,
            },
        }
        headers = {
            'Content-Type': 'application/json',
            'x-goog-api-key': self.api_key,
        }

        try:
            response = requests.post(self._endpoint(), json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Erro de conexão com a API de IA: {e}")
            raise FalhaIA(str(e)) from e

        if not response.ok:
            logger.error(f"API de IA respondeu {response.status_code}: {response.text[:500]}")
            raise FalhaIA(response.text[:500] or f"HTTP {response.status_code}")

        try:
            data = response.json()
            texto = data['candidates'][0]['content']['parts'][0]['text']
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.warning(f"Resposta da API de IA sem texto utilizável: {e}")
            raise FalhaIA('Resposta sem texto') from e

        texto = (texto or '').strip()
        if not texto:
            raise FalhaIA('Resposta sem texto')
        return texto


PROMPT_CORRECAO = (
    'Corrija a gramática e ortografia do seguinte texto em português brasileiro. '
    'Mantenha o significado original e o tom informal se houver. '
    'Retorne APENAS o texto corrigido, sem explicações ou comentários adicionais.\n\n'
    'Texto: "{texto}"'
)

PROMPT_CORRECAO_TECNICA = (
    'Você é um especialista em manutenção de equipamentos pesados (tratores, escavadeiras, etc).\n'
    'Corrija o texto a seguir mantendo o significado original, mas:\n'
    '1. Corrija erros de português (ortografia, gramática)\n'
    '2. Use termos técnicos adequados da área de manutenção de máquinas pesadas\n'
    '3. Mantenha o texto conciso e profissional\n'
    '4. NÃO adicione informações que não estavam no original\n'
    '5. Se o texto já estiver correto, retorne-o sem alterações\n\n'
    'Texto original: "{texto}"\n\n'
    'Retorne APENAS o texto corrigido, sem explicações.'
)

PROMPT_RESUMO_ANOTACOES = (
    'Você é um assistente comercial. Analise as anotações abaixo feitas por um representante '
    'comercial sobre o cliente "{cliente}" e faça um resumo executivo em português brasileiro.\n\n'
    'O resumo deve:\n'
    '- Destacar os pontos mais importantes\n'
    '- Identificar o histórico de relacionamento\n'
    '- Mencionar produtos/serviços de interesse\n'
    '- Indicar próximos passos ou oportunidades\n'
    '- Ser conciso (máximo 3 parágrafos)\n\n'
    'Anotações (da mais antiga para a mais recente):\n{anotacoes}\n\n'
    'Resumo:'
)

PROMPT_SUMARIO_LAUDO = (
    'Você é um engenheiro mecânico especialista em manutenção de material rodante de '
    'equipamentos pesados (escavadeiras, tratores de esteira, etc).\n\n'
    'Dados da inspeção do equipamento "{equipamento}":\n{medicoes}\n\n'
    '{criticos}\n{verificar}\n\n{sumario_atual}\n\n'
    'Gere um sumário técnico CONCISO (máximo 3-4 frases) em português brasileiro contendo:\n'
    '1. Estado geral do material rodante\n'
    '2. Componentes que requerem atenção imediata (se houver)\n'
    '3. Recomendação de manutenção\n\n'
    'Use linguagem técnica profissional. Seja direto e objetivo.\n'
    'Retorne APENAS o texto do sumário, sem títulos ou explicações.'
)


def corrigir_texto(texto: str, tecnico: bool = False, cliente: Optional[ClienteGemini] = None) -> dict:
    """
    Corrige ortografia/gramática de ``texto``.

    Retorna ``{'texto_original', 'texto_corrigido', 'corrigido'}`` e, em caso
    de falha da API, ``'erro'``. Sem chave configurada, devolve o texto
    original sem alterações.
    """
    cliente = cliente or ClienteGemini()
    resultado = {'texto_original': texto, 'texto_corrigido': texto, 'corrigido': False}
    template = PROMPT_CORRECAO_TECNICA if tecnico else PROMPT_CORRECAO

    try:
        corrigido = cliente.gerar(template.format(texto=texto), temperatura=0.1, max_tokens=500)
    except IANaoConfigurada:
        logger.info('Correção de texto ignorada: IA não configurada')
        return resultado
    except FalhaIA as e:
        resultado['erro'] = str(e)
        return resultado

    resultado['texto_corrigido'] = corrigido
    resultado['corrigido'] = corrigido != texto
    return resultado


def resumir_anotacoes(nome_cliente: str, anotacoes, cliente: Optional[ClienteGemini] = None) -> dict:
    """
    Resumo executivo das anotações de um vendedor sobre um cliente.

    ``anotacoes`` deve vir da mais antiga para a mais recente; cada item
    precisa de ``created_at`` e ``texto``.
    """
    cliente = cliente or ClienteGemini()
    anotacoes = list(anotacoes)
    total = len(anotacoes)

    if not total:
        return {'resumo': 'Nenhuma anotação encontrada para resumir.', 'total': 0}

    if not cliente.configurado:
        return {
            'resumo': 'API de IA não configurada. Configure a variável GEMINI_API_KEY.',
            'total': total,
            'gerado_por_ia': False,
        }

    texto_anotacoes = '\n\n'.join(
        f"[{a.created_at.strftime('%d/%m/%Y')}] {a.texto}" for a in anotacoes
    )
    prompt = PROMPT_RESUMO_ANOTACOES.format(cliente=nome_cliente or 'desconhecido', anotacoes=texto_anotacoes)

    try:
        resumo = cliente.gerar(prompt, temperatura=0.3, max_tokens=500)
    except FalhaIA as e:
        logger.error(f"Erro ao resumir anotações do cliente {nome_cliente}: {e}")
        return {
            'resumo': 'Erro ao gerar resumo com IA.',
            'total': total,
            'gerado_por_ia': False,
            'erro': str(e),
        }

    return {'resumo': resumo, 'total': total, 'gerado_por_ia': True}


def gerar_sumario_laudo(equipamento: str, linhas_medicoes, criticos, verificar,
                        sumario_atual: str = '', cliente: Optional[ClienteGemini] = None) -> dict:
    """
    Sumário técnico de um laudo de inspeção.

    ``linhas_medicoes`` já vem formatado (uma linha por componente).
    Em qualquer falha devolve ``sumario_atual``.
    """
    cliente = cliente or ClienteGemini()

    if not cliente.configurado:
        return {'sumario': sumario_atual or '', 'gerado': False, 'erro': 'IA não configurada'}

    prompt = PROMPT_SUMARIO_LAUDO.format(
        equipamento=equipamento,
        medicoes='\n'.join(linhas_medicoes),
        criticos=(
            f"Componentes FORA DOS PARÂMETROS (críticos): {', '.join(criticos)}"
            if criticos else 'Nenhum componente fora dos parâmetros.'
        ),
        verificar=f"Componentes para VERIFICAR: {', '.join(verificar)}" if verificar else '',
        sumario_atual=f'Sumário atual (para revisar/melhorar): "{sumario_atual}"' if sumario_atual else '',
    )

    try:
        sumario = cliente.gerar(prompt, temperatura=0.2, max_tokens=600)
    except FalhaIA as e:
        logger.error(f"Erro ao gerar sumário do laudo ({equipamento}): {e}")
        return {'sumario': sumario_atual or '', 'gerado': False, 'erro': 'Erro ao gerar sumário com IA'}

    return {'sumario': sumario, 'gerado': True}
