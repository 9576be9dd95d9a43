"""Persistent JSON config helpers.

Stores app settings, the navigation state, and the remote index cache.
All loads are defensive: malformed or missing files fall back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_cache_dir, user_config_dir

from .index_model import IndexTree, read_index_artifact, write_index_artifact
from .navigation import NavigationState

logger = logging.getLogger(__name__)

APP_NAME = "pauker"
APP_DISPLAY_NAME = "Pauker-Tool"
CONFIG_DIR = Path(user_config_dir(APP_NAME, appauthor=False))
CONFIG_PATH = CONFIG_DIR / "config.json"
STATE_PATH = CONFIG_DIR / "state.json"
REMOTE_CACHE_PATH = Path(user_cache_dir(APP_NAME, appauthor=False)) / "remote_index.json"

DEFAULT_DATABASE_ROOT = "database"
DEFAULT_INDEX_FILENAME = "app_index.js"
DEFAULT_REMOTE_BRANCH = "main"
DEFAULT_STYLE = "monokai"


def _read_json_object(path: Path) -> dict[str, object]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _write_json(path: Path, data: object) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        logger.warning("could not write %s: %s", path, exc)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    return _read_json_object(CONFIG_PATH)


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Write failures are logged and otherwise ignored.
    """
    _write_json(CONFIG_PATH, data)


def _string_setting(data: dict[str, object], key: str, default: str | None) -> str | None:
    value = data.get(key)
    if not isinstance(value, str):
        return default
    stripped = value.strip()
    return stripped if stripped else default


@dataclass(frozen=True)
class RemoteSettings:
    """Where the remote listing and raw payloads come from."""

    owner: str | None = None
    repo: str | None = None
    branch: str = DEFAULT_REMOTE_BRANCH
    prefix: str = f"{DEFAULT_DATABASE_ROOT}/"

    @property
    def configured(self) -> bool:
        return bool(self.owner and self.repo)


@dataclass(frozen=True)
class AppSettings:
    database_root: str = DEFAULT_DATABASE_ROOT
    style: str = DEFAULT_STYLE
    remote: RemoteSettings = field(default_factory=RemoteSettings)


def load_settings() -> AppSettings:
    """Read typed settings from config, each key falling back on its own."""
    data = load_config()
    raw_remote = data.get("remote")
    remote_data = raw_remote if isinstance(raw_remote, dict) else {}
    database_root = _string_setting(data, "database_root", DEFAULT_DATABASE_ROOT)
    remote = RemoteSettings(
        owner=_string_setting(remote_data, "owner", None),
        repo=_string_setting(remote_data, "repo", None),
        branch=_string_setting(remote_data, "branch", DEFAULT_REMOTE_BRANCH),
        prefix=_string_setting(remote_data, "prefix", f"{database_root}/"),
    )
    return AppSettings(
        database_root=database_root,
        style=_string_setting(data, "style", DEFAULT_STYLE),
        remote=remote,
    )


def load_navigation_state() -> NavigationState:
    """Load navigation state; unusable fields take their defaults."""
    return NavigationState.from_dict(_read_json_object(STATE_PATH))


def save_navigation_state(state: NavigationState) -> None:
    logger.debug("persisting navigation state to %s", STATE_PATH)
    _write_json(STATE_PATH, state.to_dict())


def _remote_source_path() -> Path:
    return REMOTE_CACHE_PATH.with_name("remote_source.json")


def load_remote_cache() -> tuple[IndexTree, RemoteSettings] | None:
    """Return the cached remote index and the repository it was listed from.

    ``None`` when the cache is absent or unreadable, or when its origin file
    is missing or incomplete.
    """
    if not REMOTE_CACHE_PATH.exists():
        return None
    source_data = _read_json_object(_remote_source_path())
    source = RemoteSettings(
        owner=_string_setting(source_data, "owner", None),
        repo=_string_setting(source_data, "repo", None),
        branch=_string_setting(source_data, "branch", DEFAULT_REMOTE_BRANCH),
        prefix=_string_setting(source_data, "prefix", f"{DEFAULT_DATABASE_ROOT}/"),
    )
    if not source.configured:
        logger.warning("ignoring remote index cache %s without a recorded origin", REMOTE_CACHE_PATH)
        return None
    try:
        tree = read_index_artifact(REMOTE_CACHE_PATH)
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable remote index cache %s: %s", REMOTE_CACHE_PATH, exc)
        return None
    return tree, source


def save_remote_cache(tree: IndexTree, source: RemoteSettings) -> Path:
    """Write the remote index cache plus the origin it was listed from."""
    write_index_artifact(tree, REMOTE_CACHE_PATH)
    _write_json(
        _remote_source_path(),
        {"owner": source.owner, "repo": source.repo, "branch": source.branch, "prefix": source.prefix},
    )
    return REMOTE_CACHE_PATH


__all__ = [
    "APP_NAME",
    "APP_DISPLAY_NAME",
    "CONFIG_PATH",
    "STATE_PATH",
    "REMOTE_CACHE_PATH",
    "DEFAULT_DATABASE_ROOT",
    "DEFAULT_INDEX_FILENAME",
    "DEFAULT_REMOTE_BRANCH",
    "DEFAULT_STYLE",
    "load_config",
    "save_config",
    "RemoteSettings",
    "AppSettings",
    "load_settings",
    "load_navigation_state",
    "save_navigation_state",
    "load_remote_cache",
    "save_remote_cache",
]
