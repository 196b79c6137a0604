"""Resolve a login identifier to a stored user."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Awaitable, Callable, Optional

if TYPE_CHECKING:
    from hms.domain.user import User, UserRepository

logger = logging.getLogger(__name__)

LookupStrategy = Callable[[str], Awaitable[Optional["User"]]]


class IdentityResolver:
    """
    Finds the user an identifier refers to.

    An identifier may be an email address or a username. Lookups are
    tried in a fixed order, email first, then username, and the first
    hit wins. A value that equals one user's email and another user's
    username therefore always resolves to the email owner.

    Absence is a normal outcome: ``resolve`` returns ``None`` and never
    raises for "not found". Store outages propagate unchanged.
    """

    def __init__(self, user_repository: UserRepository):
        self._strategies: tuple[tuple[str, LookupStrategy], ...] = (
            ("email", user_repository.find_by_email),
            ("username", user_repository.find_by_username),
        )

    @property
    def lookup_order(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self._strategies)

    async def resolve(self, identifier: str) -> User | None:
        for name, lookup in self._strategies:
            user = await lookup(identifier)
            if user is not None:
                logger.debug("Identifier resolved by %s (user id %s)", name, user.id)
                return user

        logger.debug("Identifier did not match any user")
        return None
