"""Environment lookups for the DeeTEE bridge, honouring an optional project `.env` file.

By default the process environment wins and `.env` only fills gaps. Setting
``DETEE_FORCE_ENV_OVERRIDE=true`` inside `.env` makes that file the single
source of truth: lookups ignore the process environment entirely.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import dotenv_values, load_dotenv

ENV_FILE = Path(__file__).resolve().parent.parent / ".env"
FORCE_OVERRIDE_KEY = "DETEE_FORCE_ENV_OVERRIDE"


@dataclass(frozen=True)
class DotenvSnapshot:
    values: dict[str, str | None] = field(default_factory=dict)

    @property
    def authoritative(self) -> bool:
        return (self.values.get(FORCE_OVERRIDE_KEY) or "").strip().lower() == "true"

    def lookup(self, key: str, default: str | None) -> str | None:
        if not self.authoritative:
            return os.getenv(key, default)
        value = self.values.get(key)
        return default if value is None else value


_snapshot = DotenvSnapshot()


def reload_env(dotenv_mapping: Mapping[str, str | None] | None = None) -> DotenvSnapshot:
    """Re-read `.env`, or adopt ``dotenv_mapping`` instead (tests) without touching os.environ."""

    global _snapshot

    if dotenv_mapping is not None:
        _snapshot = DotenvSnapshot(dict(dotenv_mapping))
        return _snapshot

    if not ENV_FILE.exists():
        _snapshot = DotenvSnapshot()
        return _snapshot

    _snapshot = DotenvSnapshot(dict(dotenv_values(ENV_FILE)))
    load_dotenv(dotenv_path=ENV_FILE, override=_snapshot.authoritative)
    return _snapshot


reload_env()


def get_env(key: str, default: str | None = None) -> str | None:
    return _snapshot.lookup(key, default)


def get_env_int(key: str, default: int | None = None) -> int | None:
    """Integer variant of ``get_env``; unset or blank values yield ``default``."""

    raw_value = get_env(key)
    if raw_value is None or not raw_value.strip():
        return default
    return int(raw_value.strip())
