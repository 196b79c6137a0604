from hms.application.services.authentication_service import AuthenticationService
from hms.application.services.identity_resolver import IdentityResolver
from hms.application.services.user_service import UserService

__all__ = [
    "AuthenticationService",
    "IdentityResolver",
    "UserService",
]
