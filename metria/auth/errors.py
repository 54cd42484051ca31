from metria.errors import MetriaError


class AuthError(MetriaError):
    """Authentication or registration was rejected."""


class DuplicateEmailError(AuthError):
    def __init__(self, email: str):
        super().__init__("Email already registered.")
        self.email = email


class InvalidCredentialsError(AuthError):
    def __init__(self):
        super().__init__("Invalid credentials.")
