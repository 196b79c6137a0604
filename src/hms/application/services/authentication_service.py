"""Authentication service for staff login."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from hms.application.dtos import AuthenticationResult, SafeIdentity
from hms_auth import InvalidCredentialsError, MalformedRequestError

if TYPE_CHECKING:
    from hms.application.services.identity_resolver import IdentityResolver
    from hms_auth import PasswordHashingService, SessionTokenService

logger = logging.getLogger(__name__)


class AuthenticationService:
    """
    Application service for credential-based login.

    Orchestrates the identity resolver, the password verifier and the
    session token issuer:

        resolve identifier -> verify secret -> issue token -> safe identity

    Both failure paths (unknown identifier, wrong secret) raise the same
    ``InvalidCredentialsError`` with the same message, and an unknown
    identifier still costs one bcrypt check so both take similar time.
    Which one occurred is only written to the log. The service keeps no
    state between calls, so concurrent logins need no locking and retries
    are always safe.
    """

    def __init__(
        self,
        identity_resolver: IdentityResolver,
        password_service: PasswordHashingService,
        token_service: SessionTokenService,
    ):
        self._identity_resolver = identity_resolver
        self._password_service = password_service
        self._token_service = token_service

    async def authenticate(
        self,
        identifier: str | None,
        secret: str | None,
    ) -> AuthenticationResult:
        if not identifier or not identifier.strip() or not secret:
            raise MalformedRequestError

        user = await self._identity_resolver.resolve(identifier)
        # bcrypt is CPU-bound; keep it off the event loop
        if user is None:
            await asyncio.to_thread(self._password_service.verify_dummy, secret)
            logger.info("Login failed: unknown identifier")
            raise InvalidCredentialsError

        matches = await asyncio.to_thread(
            self._password_service.verify,
            secret,
            user.password_hash,
        )
        if not matches:
            logger.info("Login failed: secret mismatch for user id %s", user.id)
            raise InvalidCredentialsError

        token = self._token_service.issue()

        logger.info("User logged in: id %s (role: %s)", user.id, user.role.value)
        return AuthenticationResult(token=token, identity=SafeIdentity.from_user(user))
