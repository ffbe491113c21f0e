"""
Main FastAPI application entry point.

``create_app`` builds the application from Settings. The lifespan owns the
dependency container: it is built and initialised at startup, stored on
``app.state.container`` and closed at shutdown. Nothing connects to a data
store at import time.

Middleware order (outermost first):
    TraceMiddleware -> RateLimitMiddleware -> CsrfMiddleware -> routes

Run:
    uvicorn gatehouse.main:app
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from gatehouse.core.config import Settings, get_settings
from gatehouse.core.container import Container, build_container
from gatehouse.domain.protocols import EmailProtocol
from gatehouse.presentation.routers import system_router
from gatehouse.presentation.routers.api.middleware import (
    CsrfMiddleware,
    RateLimitMiddleware,
    TraceMiddleware,
)
from gatehouse.presentation.routers.api.v1 import build_v1_router
from gatehouse.presentation.routers.api.v1.errors import register_exception_handlers


def create_app(
    settings: Settings | None = None,
    *,
    container: Container | None = None,
    email: EmailProtocol | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Application settings; ``get_settings()`` when omitted.
        container: Prebuilt container (tests); built in the lifespan otherwise.
        email: Email adapter override passed to ``build_container``.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        app_container = container or build_container(settings, email=email)
        await app_container.init()
        app.state.container = app_container
        try:
            yield
        finally:
            await app_container.close()

    app = FastAPI(
        title=settings.app_name,
        description="Admin sessions, two-factor gate, CSRF, rate limiting, OTP and audit",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Last added runs first
    app.add_middleware(CsrfMiddleware)
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(TraceMiddleware)

    # RFC 9457 error responses
    register_exception_handlers(app)

    app.include_router(system_router)
    app.include_router(build_v1_router(settings.api_v1_prefix))
    return app


app = create_app()
