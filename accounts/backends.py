"""
Backend de autenticação por e-mail.
"""
from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend


class EmailBackend(ModelBackend):
    """Autentica pelo e-mail (case-insensitive) em vez do username."""

    def authenticate(self, request, username=None, password=None, email=None, **kwargs):
        User = get_user_model()
        email = email or username
        if not email or password is None:
            return None
        user = User.objects.filter(email__iexact=email.strip()).order_by('id').first()
        if user is None:
            # Mesmo custo de hash para e-mails inexistentes
            User().set_password(password)
            return None
        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None
