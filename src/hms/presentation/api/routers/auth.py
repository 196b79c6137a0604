"""Authentication router for staff login and logout."""

import logging
from typing import Callable

from fastapi import APIRouter, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute

from hms.presentation.api.dependencies import AuthService
from hms.presentation.api.schemas.auth import (
    IdentityResponse,
    LoginRequest,
    LoginResponse,
)
from hms.presentation.api.schemas.common import ErrorResponse, MessageResponse
from hms_auth import MalformedRequestError

logger = logging.getLogger(__name__)


class AuthRoute(APIRoute):
    """Route that reports unparseable login bodies as ``MalformedRequestError``.

    Wrong field types or a non-object body get the same 400
    ``MALFORMED_REQUEST`` response as a missing identifier or secret,
    instead of the framework's 422 validation body.
    """

    def get_route_handler(self) -> Callable:
        handler = super().get_route_handler()

        async def route_handler(request: Request) -> Response:
            try:
                return await handler(request)
            except RequestValidationError as e:
                logger.info("Login request rejected: body failed validation")
                raise MalformedRequestError from e

        return route_handler


router = APIRouter(route_class=AuthRoute)


@router.post(
    "/login",
    summary="Authenticate staff member",
    responses={
        200: {"description": "Login successful"},
        400: {"model": ErrorResponse, "description": "Identifier or secret missing"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
        503: {"model": ErrorResponse, "description": "Credential store unavailable"},
    },
)
async def login(
    auth_service: AuthService,
    request: LoginRequest | None = None,
) -> LoginResponse:
    """
    Authenticate with an email address or username and a password.

    The identifier is looked up as an email address first, then as a
    username. Returns an opaque session token and the user's public
    profile. An unknown identifier and a wrong password produce the same
    401 response.
    """
    body = request or LoginRequest()
    result = await auth_service.authenticate(
        identifier=body.identifier,
        secret=body.secret,
    )
    return LoginResponse(
        token=result.token,
        user=IdentityResponse(**result.identity.to_dict()),
    )


@router.post(
    "/logout",
    summary="Log out",
    responses={200: {"description": "Logged out"}},
)
async def logout() -> MessageResponse:
    """
    Acknowledge a logout.

    Tokens are not stored server-side, so there is nothing to revoke;
    clients discard their token.
    """
    return MessageResponse(message="Logged out successfully")
