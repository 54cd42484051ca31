from .errors import AuthError, DuplicateEmailError, InvalidCredentialsError
from .service import AuthService, AuthSession

__all__ = [
    "AuthService",
    "AuthSession",
    "AuthError",
    "DuplicateEmailError",
    "InvalidCredentialsError",
]
