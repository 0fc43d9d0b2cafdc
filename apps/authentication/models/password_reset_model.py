import hashlib
import secrets
import uuid
from datetime import timedelta

from django.conf import settings
from django.db import models
from django.utils import timezone


def hash_reset_token(raw_token):
    return hashlib.sha256(raw_token.encode()).hexdigest()


class PasswordResetToken(models.Model):
    """
    Single-use password reset token. Only the sha256 digest is stored;
    the raw value travels in the reset email.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="password_reset_tokens",
    )
    token_hash = models.CharField(max_length=64, unique=True)
    expires_at = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "password_reset_tokens"
        verbose_name = "Password Reset Token"
        verbose_name_plural = "Password Reset Tokens"
        ordering = ["-created_at"]

    def __str__(self):
        return f"Reset token for {self.user.email}"

    @property
    def is_expired(self):
        return timezone.now() > self.expires_at

    @classmethod
    def issue(cls, user):
        """Replace any outstanding tokens for ``user``; returns (token, raw)."""
        cls.objects.filter(user=user).delete()
        raw_token = secrets.token_hex(32)
        token = cls.objects.create(
            user=user,
            token_hash=hash_reset_token(raw_token),
            expires_at=timezone.now()
            + timedelta(minutes=settings.QUEST_PASSWORD_RESET_TTL_MINUTES),
        )
        return token, raw_token

    @classmethod
    def find_valid(cls, raw_token):
        token = (
            cls.objects.select_related("user")
            .filter(token_hash=hash_reset_token(raw_token or ""))
            .first()
        )
        if token is None or token.is_expired or not token.user.is_active:
            return None
        return token
