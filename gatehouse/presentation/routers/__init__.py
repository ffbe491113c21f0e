"""HTTP routers.

Non-versioned system endpoints live here; the versioned API is under
``routers.api.v1``.
"""

from gatehouse.presentation.routers.system import system_router

__all__ = ["system_router"]
