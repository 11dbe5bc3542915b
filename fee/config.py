"""Persistent JSON config for editor commands and listing colors.

The config lives in ``<user config dir>/fee/config.json``. It is read once
at startup; when it does not exist yet, the defaults are written there.
Unlike a UI preference store, a broken config is fatal: the editor commands
it holds are required for the browser to do anything useful.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .errors import ConfigError

logger = logging.getLogger(__name__)

APP_NAME = "fee"
CONFIG_FILENAME = "config.json"
CONFIG_ENV_VAR = "FEE_CONFIG"
FILE_PLACEHOLDER = "$f"

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class Config:
    text_editor_command: tuple[str, ...]
    binary_editor_command: tuple[str, ...]
    wait_for_editor_exit: bool = True
    dir_color: RGB | None = None
    file_color: RGB | None = None

    def to_json_dict(self) -> dict[str, object]:
        data = asdict(self)
        return {key: list(value) if isinstance(value, tuple) else value for key, value in data.items()}


DEFAULT_CONFIG = Config(
    text_editor_command=("nano", FILE_PLACEHOLDER),
    binary_editor_command=("hexedit", FILE_PLACEHOLDER),
    wait_for_editor_exit=True,
    dir_color=(59, 120, 255),
    file_color=(46, 199, 219),
)


def default_config_path() -> Path:
    """Return the config file location, honoring ``$FEE_CONFIG``."""
    override = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def _command(data: dict[str, object], key: str) -> tuple[str, ...]:
    value = data.get(key)
    if not isinstance(value, list) or not all(isinstance(part, str) for part in value):
        raise ConfigError(f"{key} must be a list of strings")
    return tuple(value)


def _color(data: dict[str, object], key: str) -> RGB | None:
    value = data.get(key)
    if value is None:
        return None
    if (
        not isinstance(value, list)
        or len(value) != 3
        or any(isinstance(part, bool) or not isinstance(part, int) or not 0 <= part <= 255 for part in value)
    ):
        raise ConfigError(f"{key} must be three integers between 0 and 255")
    return (value[0], value[1], value[2])


def parse_config(data: object) -> Config:
    """Validate decoded JSON and build a :class:`Config`.

    Unknown keys are ignored. Colors may be missing or ``null``.
    """
    if not isinstance(data, dict):
        raise ConfigError("config must be a JSON object")
    if "wait_for_editor_exit" not in data:
        raise ConfigError("wait_for_editor_exit is missing")
    wait = data["wait_for_editor_exit"]
    if not isinstance(wait, bool):
        raise ConfigError("wait_for_editor_exit must be true or false")
    return Config(
        text_editor_command=_command(data, "text_editor_command"),
        binary_editor_command=_command(data, "binary_editor_command"),
        wait_for_editor_exit=wait,
        dir_color=_color(data, "dir_color"),
        file_color=_color(data, "file_color"),
    )


def save_config(config: Config, config_path: Path) -> None:
    """Write ``config`` as pretty-printed JSON."""
    config_path.write_text(json.dumps(config.to_json_dict(), indent=2) + "\n", encoding="utf-8")


def _ensure_config_directory(config_path: Path) -> None:
    # The platform base directory must exist; only our own folder is created.
    base_directory = config_path.parent.parent
    if not base_directory.is_dir():
        raise ConfigError(f"base config directory doesn't exist: {base_directory}")
    try:
        config_path.parent.mkdir(exist_ok=True)
    except OSError as exc:
        raise ConfigError(f"cannot create {config_path.parent}: {exc}") from exc


def load_config(config_path: Path | None = None) -> Config:
    """Load the config file, creating it with defaults on first run."""
    if config_path is None:
        config_path = default_config_path()

    if not config_path.exists():
        _ensure_config_directory(config_path)
        try:
            save_config(DEFAULT_CONFIG, config_path)
        except OSError as exc:
            raise ConfigError(f"cannot write {config_path}: {exc}") from exc
        logger.info("wrote default config to %s", config_path)
        return DEFAULT_CONFIG

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"cannot read {config_path}: {exc}") from exc
    except ValueError as exc:
        raise ConfigError(f"{config_path} is not valid JSON: {exc}") from exc

    try:
        config = parse_config(data)
    except ConfigError as exc:
        raise ConfigError(f"{config_path}: {exc}") from exc
    logger.info("loaded config from %s", config_path)
    return config
