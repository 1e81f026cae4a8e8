from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from relaychat_core import __version__
from relaychat_core.api.errors import install_error_handlers
from relaychat_core.api.v1.router import router as v1_router
from relaychat_core.chat.service import build_chat_service
from relaychat_core.config import (
    apply_env_overrides,
    load_core_config,
    read_environ,
    resolve_configured_paths,
)
from relaychat_core.home import ensure_relaychat_layout, resolve_relaychat_home
from relaychat_core.logs import configure_logging

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    home = resolve_relaychat_home()
    paths = ensure_relaychat_layout(home)
    config = apply_env_overrides(load_core_config(paths), read_environ(paths))
    paths = resolve_configured_paths(paths, config)

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        configure_logging(paths, config.logging)
        logger.info("RelayChat Core starting up")
        logger.info(f"Logs directory: {paths.logs_dir}")

        app.state.relaychat_home = home
        app.state.relaychat_paths = paths
        app.state.relaychat_config = config

        # All chat state lives here for the lifetime of the process.
        app.state.chat_service = build_chat_service()

        try:
            yield
        finally:
            await app.state.chat_service.shutdown()
            logger.info("RelayChat Core shut down")

    app = FastAPI(title="RelayChat Core", version=__version__, lifespan=_lifespan)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} - {response.status_code}")
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors.allowed_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    install_error_handlers(app)
    app.include_router(v1_router)

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        return "RelayChat server is running"

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    return app
