"""Password hashing port for primary-credential checks."""

from typing import Protocol


class PasswordHashingProtocol(Protocol):
    """Hash and verify primary credentials."""

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password."""
        ...

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Constant-time check of a password against a stored hash.

        Returns False for malformed hashes instead of raising.
        """
        ...
