"""Public helpers for the DeeTEE CLI bridge."""

from __future__ import annotations

from .actions import ActionError, DeteeActions, WorkerNotFoundError
from .parsers import classify, translate
from .settings import get_settings

__all__ = ["ActionError", "DeteeActions", "WorkerNotFoundError", "classify", "get_settings", "translate"]
