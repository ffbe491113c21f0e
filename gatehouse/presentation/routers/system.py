"""System router for non-versioned application endpoints.

Lightweight and side-effect free; exempt from rate limiting and CSRF.
"""

from fastapi import APIRouter, Request

system_router = APIRouter(tags=["System"])


@system_router.get("/")
async def root(request: Request) -> dict[str, str]:
    """Basic status check.

    Returns:
        dict[str, str]: Service name, status and version.
    """
    settings = request.app.state.settings
    return {
        "message": settings.app_name,
        "status": "operational",
        "version": settings.app_version,
    }


@system_router.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint for monitoring and load balancers."""
    return {"status": "healthy"}
