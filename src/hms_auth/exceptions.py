"""Authentication exceptions.

These exceptions are raised by the hms_auth package and by the credential
store, and are translated to HTTP responses by the presentation layer.
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidCredentialsError(AuthError):
    """Raised when the identifier or the secret is wrong during login.

    Unknown identifiers and wrong secrets share this class and its message
    so that a caller cannot tell which of the two happened.
    """

    def __init__(self, message: str = "Invalid username/email or password"):
        super().__init__(message)


class MalformedRequestError(AuthError):
    """Raised when the identifier or the secret is missing from a login call."""

    def __init__(self, message: str = "Identifier and secret are required"):
        super().__init__(message)


class DependencyFailureError(AuthError):
    """Raised when a collaborator (e.g. the credential store) is unavailable."""

    def __init__(self, message: str = "Authentication backend unavailable"):
        super().__init__(message)


class WeakPasswordError(AuthError):
    """Raised when a password doesn't meet strength requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)
