"""Opaque session token issuance."""

import secrets


class SessionTokenService:
    """Issues unguessable bearer tokens for successful logins.

    Tokens are random URL-safe strings that carry no account data.
    The service keeps no record of issued tokens; validating them on
    later requests belongs to a separate collaborator.

    Examples
    --------
    >>> service = SessionTokenService()
    >>> token = service.issue()
    >>> len(token)
    22
    """

    DEFAULT_TOKEN_BYTES = 16  # 128 bits

    def __init__(self, token_bytes: int = DEFAULT_TOKEN_BYTES):
        if token_bytes < self.DEFAULT_TOKEN_BYTES:
            msg = f"Session tokens need at least {self.DEFAULT_TOKEN_BYTES} bytes"
            raise ValueError(msg)
        self._token_bytes = token_bytes

    def issue(self) -> str:
        """Return a fresh token."""
        return secrets.token_urlsafe(self._token_bytes)
