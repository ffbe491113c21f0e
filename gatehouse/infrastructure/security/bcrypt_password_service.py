"""Bcrypt password hashing service (adapter).

Implements PasswordHashingProtocol for the admin primary-credential check.

Security:
    - Adaptive cost factor (default 12, ~250ms per hash)
    - ``bcrypt.checkpw`` compares in constant time
    - Malformed stored hashes verify as False instead of raising
"""

import bcrypt


class BcryptPasswordService:
    """Bcrypt password hashing service.

    Args:
        cost_factor: Bcrypt rounds (4-31). Tests use 4; production 12.
    """

    def __init__(self, cost_factor: int = 12) -> None:
        if not 4 <= cost_factor <= 31:
            msg = "Cost factor must be between 4 and 31"
            raise ValueError(msg)
        self._cost_factor = cost_factor

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password using bcrypt.

        Returns:
            Hashed password string (bcrypt format: $2b$12$...).
        """
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a bcrypt hash.

        Returns:
            True if password matches hash, False otherwise (including
            malformed hashes).
        """
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except (ValueError, AttributeError):
            return False

