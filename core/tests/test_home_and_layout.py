from __future__ import annotations

from pathlib import Path

from relaychat_core.home import ensure_relaychat_layout, resolve_relaychat_home


def test_resolve_relaychat_home_from_env(tmp_path: Path) -> None:
    home = resolve_relaychat_home({"RELAYCHAT_HOME": str(tmp_path)})
    assert home == tmp_path.resolve()


def test_resolve_relaychat_home_defaults_under_user_home() -> None:
    home = resolve_relaychat_home({"RELAYCHAT_HOME": "   "})
    assert home == (Path.home() / ".relaychat").resolve()


def test_relative_relaychat_home_is_anchored_at_user_home() -> None:
    home = resolve_relaychat_home({"RELAYCHAT_HOME": "chat-data"})
    assert home == (Path.home() / "chat-data").resolve()


def test_ensure_relaychat_layout_creates_required_dirs(tmp_path: Path) -> None:
    paths = ensure_relaychat_layout(tmp_path)

    assert paths.home.exists()
    assert paths.logs_dir.is_dir()
    assert paths.config_dir.is_dir()
    assert paths.core_config_path == tmp_path / "config" / "core.json"
