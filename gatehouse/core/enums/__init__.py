"""Core enums package.

Usage:
    from gatehouse.core.enums import ErrorCode, Environment
"""

from gatehouse.core.enums.backend import RateLimitBackend, StorageBackend
from gatehouse.core.enums.environment import Environment
from gatehouse.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment", "StorageBackend", "RateLimitBackend"]
