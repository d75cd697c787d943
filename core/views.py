"""
Views da API do núcleo: correção de texto com IA e health check.
"""
import logging

from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET
from rest_framework import serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from . import ia

logger = logging.getLogger(__name__)


class TextoSerializer(serializers.Serializer):
    texto = serializers.CharField(
        trim_whitespace=False,
        error_messages={
            'required': 'Texto é obrigatório',
            'blank': 'Texto é obrigatório',
            'null': 'Texto é obrigatório',
        },
    )

    def validate_texto(self, value):
        if not value.strip():
            raise serializers.ValidationError('Texto é obrigatório')
        return value


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def corrigir_texto_api(request):
    """
    Corrige ortografia e gramática de um texto livre.

    Sem GEMINI_API_KEY devolve o texto original com ``corrigido=False``.
    """
    serializer = TextoSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    return Response(ia.corrigir_texto(serializer.validated_data['texto']))


@require_GET
def health_check(request):
    return JsonResponse({'status': 'ok', 'timestamp': timezone.now().isoformat()})
