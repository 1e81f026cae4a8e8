from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from relaychat_core.config import LoggingConfig
from relaychat_core.home import RelayChatPaths

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(
    paths: RelayChatPaths, settings: LoggingConfig, *, console: bool = False
) -> None:
    """Route root logging to ${logs_dir}/core.log; safe to call more than once."""

    root = logging.getLogger()
    root.setLevel(logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    if not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        file_handler = RotatingFileHandler(
            paths.logs_dir / "core.log",
            maxBytes=settings.max_size_mb * 1024 * 1024,
            backupCount=settings.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    if console and not any(type(h) is logging.StreamHandler for h in root.handlers):
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        root.addHandler(stream_handler)
