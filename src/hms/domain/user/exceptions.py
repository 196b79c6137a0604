"""User domain exceptions."""

from hms.domain.shared.exceptions import ConflictError, EntityNotFoundError, ErrorCode


class UserNotFoundError(EntityNotFoundError):
    """User not found."""

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__(
            f"User not found: {user_id}",
            code=ErrorCode.USER_NOT_FOUND,
            details={"user_id": user_id},
        )


class EmailAlreadyExistsError(ConflictError):
    """Email already registered to another user."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            "Email address is already in use",
            code=ErrorCode.DUPLICATE_EMAIL,
            details={"email": email},
        )


class UsernameAlreadyExistsError(ConflictError):
    """Username already taken by another user."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(
            "Username is already in use",
            code=ErrorCode.DUPLICATE_USERNAME,
            details={"username": username},
        )
