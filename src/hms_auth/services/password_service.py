"""Password hashing service using bcrypt.

Provides secure password hashing and verification with configurable
strength validation.
"""

import contextlib

import bcrypt

from hms_auth.exceptions import WeakPasswordError

# Prefixes of the bcrypt modular crypt format ($2a$, $2b$, $2y$)
BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


class PasswordHashingService:
    """Service for secure password hashing and verification.

    Uses bcrypt for password hashing with configurable work factor.
    Stored values that are not bcrypt hashes never verify; legacy
    plaintext secrets have to be migrated with ``hash`` first.

    Examples
    --------
    >>> service = PasswordHashingService()
    >>> hash = service.hash("my_secure_password")
    >>> service.verify("my_secure_password", hash)
    True
    >>> service.verify("wrong_password", hash)
    False
    """

    # Password requirements
    MIN_LENGTH = 8
    MAX_BYTES = 72  # bcrypt ignores/rejects input beyond 72 bytes

    def __init__(self, rounds: int = 12):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Default is 12,
            which is a good balance of security and performance.
            Higher values are more secure but slower.
        """
        self._rounds = rounds
        self._dummy_hash: bytes | None = None

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str, enforce_strength: bool = True) -> str:
        """Hash a plaintext password.

        Parameters
        ----------
        password
            The plaintext password to hash
        enforce_strength
            Validate the strength rules first. Only the legacy plaintext
            migration turns this off, since those secrets already exist.

        Returns
        -------
        The bcrypt hash as a string

        Raises
        ------
        WeakPasswordError
            If password doesn't meet requirements
        """
        if enforce_strength:
            self.validate_strength(password)
        elif len(password.encode("utf-8")) > self.MAX_BYTES:
            msg = f"Password cannot exceed {self.MAX_BYTES} bytes"
            raise WeakPasswordError(msg)

        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash.

        The comparison is done by ``bcrypt.checkpw``; secrets are never
        compared with ``==``.

        Parameters
        ----------
        password
            The plaintext password to check
        password_hash
            The bcrypt hash to verify against

        Returns
        -------
        True if password matches, False otherwise
        """
        if not self.is_hashed(password_hash):
            return False
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"),
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError):
            # Invalid hash format or over-long password
            return False

    def verify_dummy(self, password: str) -> bool:
        """Run a bcrypt check against a fixed hash and report a mismatch.

        Used when no account matches a login identifier, so that the
        response takes as long as a wrong password for a real account.
        The fixed hash is created once, at the configured work factor.

        Returns
        -------
        Always False
        """
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(
                b"hms-unknown-account", bcrypt.gensalt(rounds=self._rounds)
            )
        with contextlib.suppress(ValueError, TypeError):
            bcrypt.checkpw(password.encode("utf-8"), self._dummy_hash)
        return False

    def is_hashed(self, value: str | None) -> bool:
        """Check whether a stored value is in bcrypt format."""
        return bool(value) and value.startswith(BCRYPT_PREFIXES)

    def validate_strength(self, password: str) -> None:
        """Validate that a password meets strength requirements.

        Current requirements:
        - Minimum 8 characters
        - Maximum 72 bytes (UTF-8 encoded)

        Parameters
        ----------
        password
            The password to validate

        Raises
        ------
        WeakPasswordError
            If password doesn't meet requirements
        """
        if not password:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)

        if len(password) < self.MIN_LENGTH:
            msg = f"Password must be at least {self.MIN_LENGTH} characters"
            raise WeakPasswordError(msg)

        if len(password.encode("utf-8")) > self.MAX_BYTES:
            msg = f"Password cannot exceed {self.MAX_BYTES} bytes"
            raise WeakPasswordError(msg)
