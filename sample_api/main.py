from __future__ import annotations

import logging
import socket
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from sample_api.core.middleware import RequestContextMiddleware
from sample_api.routes import users
from sample_config.settings import AppConfig, get_config
from sample_logger.logging import LoggerConfig, configure_logging, create_logger

SERVICE_NAME = "api"

config = get_config()

logger: logging.Logger = create_logger(LoggerConfig(level=config.log_level, service=SERVICE_NAME))


class ApiServer(uvicorn.Server):
    """uvicorn server that announces the port once it is actually listening."""

    async def startup(self, sockets: list[socket.socket] | None = None) -> None:
        # A failed bind exits inside super().startup(), so nothing is logged for it.
        await super().startup(sockets=sockets)
        if self.started:
            logger.info("API server started on port %s", self.bound_port)

    @property
    def bound_port(self) -> int | None:
        for server in getattr(self, "servers", []):
            for sock in server.sockets:
                return sock.getsockname()[1]
        return None


def create_app(settings: AppConfig | None = None) -> FastAPI:
    settings = settings or config

    docs_kwargs = {"docs_url": None, "redoc_url": None, "openapi_url": None} if settings.is_production else {}
    app = FastAPI(title="Sample API", version="1.0.0", **docs_kwargs)

    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.include_router(users.router)
    return app


app = create_app()


def build_server(settings: AppConfig | None = None) -> ApiServer:
    settings = settings or config
    # log_config=None keeps uvicorn on the root JSON handler instead of its own formatters.
    return ApiServer(uvicorn.Config(app, host=settings.host, port=settings.port, log_config=None))


def run() -> None:
    """Serve `app` until interrupted.

    A port that is already bound makes the process exit non-zero; nothing here retries.
    """

    configure_logging(level=config.log_level, service=SERVICE_NAME)
    server = build_server()
    server.run()
    if not server.started:
        sys.exit(1)
