from __future__ import annotations

import uvicorn

from relaychat_core.app import create_app
from relaychat_core.config import (
    apply_env_overrides,
    load_core_config,
    read_environ,
    resolve_configured_paths,
)
from relaychat_core.home import ensure_relaychat_layout, resolve_relaychat_home
from relaychat_core.logs import configure_logging


def main() -> None:
    paths = ensure_relaychat_layout(resolve_relaychat_home())
    config = apply_env_overrides(load_core_config(paths), read_environ(paths))
    paths = resolve_configured_paths(paths, config)

    configure_logging(paths, config.logging, console=True)

    uvicorn.run(create_app(), host=config.network.bind_host, port=config.network.port)


if __name__ == "__main__":
    main()
