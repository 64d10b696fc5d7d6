"""Configuration loading for the DeeTEE bridge."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from detee.constants import CONFIG_PATH, USER_CONFIG_PATH
from detee.models import DeteeSettings
from utils.env import get_env, get_env_int

logger = logging.getLogger("detee.settings")

CONFIG_ENV_VAR = "DETEE_CONFIG_PATH"
TIMEOUT_ENV_VAR = "DETEE_TIMEOUT_SECONDS"


class SettingsLoadError(RuntimeError):
    """Raised when configuration files are invalid or missing critical data."""


def load_settings() -> DeteeSettings:
    """Merge configuration sources, later ones overriding earlier keys.

    Sources, in order: the built-in ``conf/detee.json``, the file or directory
    named by ``DETEE_CONFIG_PATH``, then ``~/.detee/bridge.json``. The
    ``DETEE_TIMEOUT_SECONDS`` environment variable wins over all files.
    """

    merged: dict[str, Any] = {}
    for config_path in _iter_config_files():
        data = _read_config(config_path)
        if not data:
            logger.debug("Skipping empty configuration file: %s", config_path)
            continue
        if merged:
            logger.info("Overriding DeeTEE configuration keys %s from %s", sorted(data), config_path)
        else:
            logger.debug("Loaded DeeTEE configuration from %s", config_path)
        merged.update(data)

    try:
        timeout = get_env_int(TIMEOUT_ENV_VAR)
    except ValueError as exc:
        raise SettingsLoadError(f"{TIMEOUT_ENV_VAR} must be an integer: {exc}") from exc
    if timeout is not None:
        merged["timeout_seconds"] = timeout

    try:
        return DeteeSettings.model_validate(merged)
    except ValidationError as exc:
        raise SettingsLoadError(f"Invalid DeeTEE configuration: {exc}") from exc


def _read_config(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8") or "{}")
    except json.JSONDecodeError as exc:
        raise SettingsLoadError(f"Invalid JSON in {path}: {exc}") from exc
    except OSError as exc:
        raise SettingsLoadError(f"Unable to read {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise SettingsLoadError(f"Configuration in {path} must be a JSON object")
    return data


def _iter_config_files() -> Iterable[Path]:
    search_paths: list[Path] = [CONFIG_PATH]

    env_path_raw = get_env(CONFIG_ENV_VAR)
    if env_path_raw:
        search_paths.append(Path(env_path_raw).expanduser())

    search_paths.append(USER_CONFIG_PATH)

    seen: set[Path] = set()
    for base in search_paths:
        if base in seen:
            continue
        seen.add(base)

        if base.is_file():
            yield base
        elif base.is_dir():
            for path in sorted(base.glob("*.json")):
                if path.is_file():
                    yield path
        else:
            logger.debug("Configuration path does not exist: %s", base)


_SETTINGS: DeteeSettings | None = None


def get_settings() -> DeteeSettings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = load_settings()
    return _SETTINGS


def reset_settings() -> None:
    """Drop cached settings so the next ``get_settings`` call reloads them."""
    global _SETTINGS
    _SETTINGS = None
