"""Application environment types.

Environments:
- DEVELOPMENT: Local development, console logs, schema auto-created
- TESTING: Automated test execution with in-memory backends
- CI: Continuous integration environment
- PRODUCTION: Secure cookies, JSON logs
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
