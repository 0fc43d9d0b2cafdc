from .password_reset_model import PasswordResetToken
from .user_model import User

__all__ = [
    "User",
    "PasswordResetToken",
]
