"""Storage backend selectors used by Settings and the container."""

from enum import Enum


class StorageBackend(str, Enum):
    """Where sessions, OTP challenges, admin users and audit events live."""

    DATABASE = "database"
    MEMORY = "memory"


class RateLimitBackend(str, Enum):
    """Where rate-limit counters live."""

    REDIS = "redis"
    MEMORY = "memory"
