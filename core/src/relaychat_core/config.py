from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from dotenv import dotenv_values
from pydantic import BaseModel, Field

from relaychat_core.home import RelayChatPaths


class NetworkConfig(BaseModel):
    bind_host: str = Field(default="127.0.0.1")
    port: int = Field(default=5000, ge=1, le=65535)


class CorsConfig(BaseModel):
    allowed_origins: list[str] = Field(
        default_factory=list,
        description="Origins of the chat front-end allowed to call the API and open channels.",
    )


class PathOverrides(BaseModel):
    logs_dir: str | None = None


class LoggingConfig(BaseModel):
    max_size_mb: int = Field(
        default=10, ge=1, description="Max size of a log file in MB before rolling."
    )
    backup_count: int = Field(default=5, ge=1, description="Number of log archives to keep.")


class CoreConfig(BaseModel):
    version: str = Field(default="1")
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    cors: CorsConfig = Field(default_factory=CorsConfig)
    paths: PathOverrides = Field(default_factory=PathOverrides)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _read_json(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def load_core_config(paths: RelayChatPaths) -> CoreConfig:
    """Load config from ${RELAYCHAT_HOME}/config/core.json.

    - If missing: returns defaults.
    - Validation is performed by Pydantic.
    """

    config_path = paths.core_config_path
    if not config_path.exists():
        return CoreConfig()

    raw = _read_json(config_path)
    return CoreConfig.model_validate(raw)


def read_environ(paths: RelayChatPaths, environ: dict[str, str] | None = None) -> dict[str, str]:
    """Process environment layered over ${RELAYCHAT_HOME}/.env (process values win)."""

    env = os.environ if environ is None else environ
    merged: dict[str, str] = {}
    if paths.env_path.is_file():
        merged.update({k: v for k, v in dotenv_values(paths.env_path).items() if v is not None})
    merged.update(env)
    return merged


def apply_env_overrides(config: CoreConfig, environ: dict[str, str] | None = None) -> CoreConfig:
    """Overlay RELAYCHAT_BIND, RELAYCHAT_PORT and RELAYCHAT_CLIENT_URL onto config."""

    env = os.environ if environ is None else environ

    network = config.network
    bind = (env.get("RELAYCHAT_BIND") or "").strip()
    if bind:
        network = network.model_copy(update={"bind_host": bind})
    port = (env.get("RELAYCHAT_PORT") or "").strip()
    if port:
        # Re-validate so an out-of-range port fails the same way a bad core.json does.
        network = NetworkConfig.model_validate({**network.model_dump(), "port": port})

    cors = config.cors
    client_url = (env.get("RELAYCHAT_CLIENT_URL") or "").strip()
    if client_url and client_url not in cors.allowed_origins:
        cors = cors.model_copy(update={"allowed_origins": [*cors.allowed_origins, client_url]})

    return config.model_copy(update={"network": network, "cors": cors})


def resolve_configured_paths(paths: RelayChatPaths, config: CoreConfig) -> RelayChatPaths:
    """Apply user-configurable path overrides from config.

    Note: config/ is not configurable.
    """

    raw = config.paths.logs_dir
    if raw is None or not str(raw).strip():
        return paths

    logs_dir = Path(raw).expanduser()
    if not logs_dir.is_absolute():
        logs_dir = (paths.home / logs_dir).resolve()
    else:
        logs_dir = logs_dir.resolve()
    logs_dir.mkdir(parents=True, exist_ok=True)

    return RelayChatPaths(home=paths.home, logs_dir=logs_dir, config_dir=paths.config_dir)
