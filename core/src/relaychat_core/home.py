from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_HOME_DIRNAME = ".relaychat"


@dataclass(frozen=True)
class RelayChatPaths:
    home: Path
    logs_dir: Path
    config_dir: Path

    @property
    def core_config_path(self) -> Path:
        return self.config_dir / "core.json"

    @property
    def env_path(self) -> Path:
        return self.home / ".env"


def resolve_relaychat_home(environ: dict[str, str] | None = None) -> Path:
    """RELAYCHAT_HOME if set (relative values sit under the user's home), else ~/.relaychat."""

    env = os.environ if environ is None else environ
    raw = (env.get("RELAYCHAT_HOME") or "").strip()
    home = Path(raw).expanduser() if raw else Path(DEFAULT_HOME_DIRNAME)
    if not home.is_absolute():
        home = Path.home() / home
    return home.resolve()


def ensure_relaychat_layout(home: Path) -> RelayChatPaths:
    paths = RelayChatPaths(home=home, logs_dir=home / "logs", config_dir=home / "config")
    for path in (paths.logs_dir, paths.config_dir):
        path.mkdir(parents=True, exist_ok=True)
    return paths
