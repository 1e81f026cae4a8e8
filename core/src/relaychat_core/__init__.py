from relaychat_core.config import CoreConfig, load_core_config
from relaychat_core.home import RelayChatPaths, ensure_relaychat_layout, resolve_relaychat_home

__version__ = "0.1.0"

__all__ = [
    "CoreConfig",
    "RelayChatPaths",
    "__version__",
    "ensure_relaychat_layout",
    "load_core_config",
    "resolve_relaychat_home",
]
