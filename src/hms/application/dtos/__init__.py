from hms.application.dtos.identity_dto import AuthenticationResult, SafeIdentity

__all__ = [
    "AuthenticationResult",
    "SafeIdentity",
]
