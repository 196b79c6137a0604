"""Staff account administration router."""

import logging

from fastapi import APIRouter, Response, status

from hms.domain.shared.exceptions import DomainException
from hms.presentation.api.dependencies import DBSession, UserManagement
from hms.presentation.api.schemas.common import ErrorResponse
from hms.presentation.api.schemas.users import (
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
)
from hms_auth import AuthError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    summary="List all users",
    responses={200: {"description": "List of all staff accounts"}},
)
async def list_users(user_service: UserManagement) -> list[UserResponse]:
    users = await user_service.list_users()
    return [UserResponse.model_validate(u) for u in users]


@router.get(
    "/{user_id}",
    summary="Get a user",
    responses={
        200: {"description": "User found"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def get_user(user_id: int, user_service: UserManagement) -> UserResponse:
    user = await user_service.get_user(user_id)
    return UserResponse.model_validate(user)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create a staff account",
    responses={
        201: {"description": "User created successfully"},
        400: {"model": ErrorResponse, "description": "Password too weak"},
        409: {"model": ErrorResponse, "description": "Username or email in use"},
    },
)
async def create_user(
    request: UserCreateRequest,
    user_service: UserManagement,
    session: DBSession,
) -> UserResponse:
    """
    Create a new staff account.

    The password is stored as a bcrypt hash.
    """
    try:
        user = await user_service.create_user(
            username=request.username,
            password=request.password,
            role=request.role,
            name=request.name,
            email=str(request.email),
            phone=request.phone,
        )
        await session.commit()
    except (DomainException, AuthError):
        await session.rollback()
        raise

    return UserResponse.model_validate(user)


@router.put(
    "/{user_id}",
    summary="Update a staff account",
    responses={
        200: {"description": "User updated successfully"},
        404: {"model": ErrorResponse, "description": "User not found"},
        409: {"model": ErrorResponse, "description": "Username or email in use"},
    },
)
async def update_user(
    user_id: int,
    request: UserUpdateRequest,
    user_service: UserManagement,
    session: DBSession,
) -> UserResponse:
    """
    Update a staff account.

    The password only changes when a non-empty value is sent.
    """
    try:
        user = await user_service.update_user(
            user_id=user_id,
            username=request.username,
            role=request.role,
            name=request.name,
            email=str(request.email),
            phone=request.phone,
            password=request.password,
        )
        await session.commit()
    except (DomainException, AuthError):
        await session.rollback()
        raise

    return UserResponse.model_validate(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a staff account",
    responses={
        204: {"description": "User deleted"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def delete_user(
    user_id: int,
    user_service: UserManagement,
    session: DBSession,
) -> Response:
    try:
        await user_service.delete_user(user_id)
        await session.commit()
    except DomainException:
        await session.rollback()
        raise

    return Response(status_code=status.HTTP_204_NO_CONTENT)
