"""FastAPI application for Circle server."""

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from circle.errors import CircleError
from circle.server.routes import accounts, chats, friends, health, posts

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from circle.config import CircleConfig
    from circle.service import SocialService

logger = logging.getLogger(__name__)


class CircleServer:
    """Main server application.

    Owns the FastAPI app and wires the social service into request state.
    """

    def __init__(
        self,
        service: "SocialService",
        config: "CircleConfig | None" = None,
    ):
        self._service = service
        self._config = config
        self._app = self._create_app()

    @property
    def app(self) -> FastAPI:
        """Get the FastAPI application."""
        return self._app

    def _create_app(self) -> FastAPI:
        """Create and configure the FastAPI app."""

        @asynccontextmanager
        async def lifespan(app: FastAPI) -> "AsyncIterator[None]":
            logger.info(
                "server_starting", extra={"store.path": str(self._service.store.path)}
            )
            await self._service.store.open()
            yield
            logger.info("server_stopping")

        app = FastAPI(
            title="Circle",
            description="Friends, feed and direct messages API",
            version="0.1.0",
            lifespan=lifespan,
        )

        app.state.server = self
        app.state.service = self._service

        cors_origins = self._config.server.cors_origins if self._config else ["*"]
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        @app.exception_handler(CircleError)
        async def circle_error_handler(
            request: Request, exc: CircleError
        ) -> JSONResponse:
            if exc.status_code >= 500:
                logger.error(
                    "request_failed",
                    extra={"http.path": request.url.path, "error.code": exc.code},
                )
            return JSONResponse(
                status_code=exc.status_code,
                content={"error": exc.message, "code": exc.code},
            )

        app.include_router(health.router, tags=["health"])
        app.include_router(accounts.router, prefix="/api", tags=["accounts"])
        app.include_router(posts.router, prefix="/api", tags=["posts"])
        app.include_router(friends.router, prefix="/api", tags=["friends"])
        app.include_router(chats.router, prefix="/api", tags=["chats"])

        return app


def create_app(
    service: "SocialService",
    config: "CircleConfig | None" = None,
) -> FastAPI:
    """Create the FastAPI application."""
    return CircleServer(service=service, config=config).app
