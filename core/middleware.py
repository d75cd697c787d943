"""
Middlewares de CORS para o frontend e de cabeçalhos de segurança/cache.
"""
from django.conf import settings
from django.http import HttpResponse
from django.utils.deprecation import MiddlewareMixin


class CorsMiddleware(MiddlewareMixin):
    """
    Libera a API para as origens em CORS_ALLOWED_ORIGINS.

    Preflight (OPTIONS com Access-Control-Request-Method) de origem
    permitida é respondido aqui mesmo, sem chegar à view.
    """
    allow_methods = 'GET, POST, PUT, PATCH, DELETE, OPTIONS'
    allow_headers = 'Authorization, Content-Type, X-CSRFToken, X-Requested-With'

    def _origem_permitida(self, request):
        origem = request.headers.get('Origin', '').rstrip('/')
        if origem and origem in getattr(settings, 'CORS_ALLOWED_ORIGINS', []):
            return origem
        return None

    def process_request(self, request):
        if (
            request.method == 'OPTIONS'
            and 'Access-Control-Request-Method' in request.headers
            and self._origem_permitida(request)
        ):
            return HttpResponse(status=200)
        return None

    def process_response(self, request, response):
        origem = self._origem_permitida(request)
        if not origem:
            return response
        response['Access-Control-Allow-Origin'] = origem
        response['Access-Control-Allow-Credentials'] = 'true'
        response['Access-Control-Allow-Methods'] = self.allow_methods
        response['Access-Control-Allow-Headers'] = self.allow_headers
        response['Access-Control-Max-Age'] = '86400'
        if 'Vary' in response:
            if 'Origin' not in response['Vary']:
                response['Vary'] = f"{response['Vary']}, Origin"
        else:
            response['Vary'] = 'Origin'
        return response


class SecurityHeadersMiddleware(MiddlewareMixin):
    """
    Cabeçalhos de segurança e controle de cache.
    Content-Security-Policy no lugar de X-Frame-Options.
    """

    def process_response(self, request, response):
        if 'X-XSS-Protection' in response:
            del response['X-XSS-Protection']

        if 'Content-Security-Policy' not in response:
            response['Content-Security-Policy'] = (
                "default-src 'self'; "
                "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
                "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net https://fonts.googleapis.com; "
                "img-src 'self' data: blob: https:; "
                "font-src 'self' data: https://fonts.gstatic.com https://cdn.jsdelivr.net; "
                "frame-ancestors 'self';"
            )
        response.setdefault('X-Content-Type-Options', 'nosniff')

        if request.path.startswith('/static/'):
            response['Cache-Control'] = 'public, max-age=31536000, immutable'
        elif request.path.startswith('/media/'):
            response['Cache-Control'] = 'public, max-age=86400'
        elif request.path.startswith('/api/'):
            response['Cache-Control'] = 'no-store'
        elif not request.path.startswith('/admin/') and response.get('Content-Type', '').startswith('text/html'):
            response['Cache-Control'] = 'no-cache, no-store, must-revalidate'
            response['Pragma'] = 'no-cache'
            response['Expires'] = '0'

        return response
