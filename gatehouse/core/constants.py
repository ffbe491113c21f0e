"""Centralized constants for internal implementation details.

These are NOT environment-specific configuration; those live in
``gatehouse.core.config``.

Example:
    >>> from gatehouse.core.constants import TOKEN_BYTES
    >>> token = secrets.token_hex(TOKEN_BYTES)
"""

# =============================================================================
# Token Lengths
# =============================================================================

TOKEN_BYTES: int = 32
"""Number of random bytes in session and CSRF tokens (256 bits)."""

TOKEN_HEX_LENGTH: int = 64
"""Length of hex-encoded token string (TOKEN_BYTES * 2)."""

OTP_SALT_BYTES: int = 16
"""Per-challenge salt size for OTP code hashes."""


# =============================================================================
# Cookie and Header Names
# =============================================================================

ADMIN_SESSION_COOKIE: str = "admin_session_token"
USER_SESSION_COOKIE: str = "user_session_token"
CSRF_COOKIE: str = "csrf_token"
CSRF_HEADER: str = "X-CSRF-Token"
TRACE_HEADER: str = "X-Trace-Id"


# =============================================================================
# Limits
# =============================================================================

AUDIT_QUERY_MAX_LIMIT: int = 1000
"""Hard cap on a single audit query page."""

AUDIT_EXPORT_MAX_ROWS: int = 10000
"""Hard cap on rows in an audit export."""

RATE_LIMIT_GRACE_SECONDS: int = 60
"""Extra time an in-memory bucket survives past its window before eviction."""

USER_AGENT_MAX_LENGTH: int = 512
"""User-Agent strings are truncated to this length before storage."""
