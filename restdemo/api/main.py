"""FastAPI application entrypoint for the REST demo service."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from restdemo.api.middleware.logging import LoggingMiddleware
from restdemo.api.routes import node, rest, system, todos
from restdemo.core.config import settings
from restdemo.core.exceptions import ApplicationError
from restdemo.core.observability import setup_tracing
from restdemo.orchestration.sessions import OnlineSessions
from restdemo.store.registry import StoreRegistry

logger = logging.getLogger("restdemo.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run the session pruner while serving and discard every store afterwards."""

    await app.state.sessions.start()
    try:
        yield
    finally:
        await app.state.sessions.stop()
        app.state.stores.close()


def create_app(stores: Optional[StoreRegistry] = None, sessions: Optional[OnlineSessions] = None) -> FastAPI:
    """Build the application around explicitly constructed state.

    Each call gets its own empty stores unless ``stores`` is supplied.
    """

    app = FastAPI(
        title=settings.API_TITLE,
        version=settings.API_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.stores = stores if stores is not None else StoreRegistry()
    app.state.sessions = sessions if sessions is not None else OnlineSessions(
        timeout_seconds=settings.HEARTBEAT_SESSION_TIMEOUT_SECONDS,
        interval_seconds=settings.HEARTBEAT_CLEANUP_INTERVAL_SECONDS,
    )

    if settings.ENABLE_TRACING:
        setup_tracing(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["content-type", "authorization", "x-requested-with"],
    )
    app.add_middleware(LoggingMiddleware)

    # Routers
    app.include_router(system.router)
    app.include_router(rest.router)
    app.include_router(todos.router)
    app.include_router(node.router)

    @app.exception_handler(ApplicationError)
    async def handle_application_error(_: Request, exc: ApplicationError):
        """Return standardized responses for application layer exceptions."""

        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    return app


app = create_app()
