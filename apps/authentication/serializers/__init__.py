from .password_reset_serializer import (
    PasswordResetConfirmSerializer,
    PasswordResetRequestSerializer,
)
from .user_serializer import (
    UserLoginSerializer,
    UserRegistrationSerializer,
    UserSerializer,
    UserUpdateSerializer,
)

__all__ = [
    "UserRegistrationSerializer",
    "UserLoginSerializer",
    "UserSerializer",
    "UserUpdateSerializer",
    "PasswordResetRequestSerializer",
    "PasswordResetConfirmSerializer",
]
