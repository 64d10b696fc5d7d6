"""
Pytest configuration for DeeTEE bridge tests
"""

import sys
from pathlib import Path

import pytest

# Ensure the parent directory is in the Python path for imports
parent_dir = Path(__file__).resolve().parent.parent
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))

import utils.env as env_config  # noqa: E402

# Ensure tests operate with runtime environment rather than .env overrides during imports
env_config.reload_env({"DETEE_FORCE_ENV_OVERRIDE": "false"})

from detee.models import DeteeSettings  # noqa: E402
from detee.runner import CommandError, CommandOutput  # noqa: E402


class FakeRunner:
    """Stands in for CommandRunner; replies with queued stdout or errors."""

    def __init__(self, settings: DeteeSettings, replies=None):
        self.settings = settings
        self.replies = list(replies or [])
        self.tool_commands: list[str] = []
        self.shell_commands: list[str] = []

    def run_tool(self, command: str) -> CommandOutput:
        self.tool_commands.append(command)
        return self._reply(command)

    def run_shell(self, command: str) -> CommandOutput:
        self.shell_commands.append(command)
        return self._reply(command)

    def _reply(self, command: str) -> CommandOutput:
        reply = self.replies.pop(0) if self.replies else ""
        if isinstance(reply, CommandError):
            raise reply
        return CommandOutput(command=[command], stdout=reply, stderr="", returncode=0, duration_seconds=0.01)


@pytest.fixture
def settings():
    return DeteeSettings(brain_url="http://10.0.0.1:31337", timeout_seconds=5)


@pytest.fixture
def fake_runner(settings):
    return FakeRunner(settings)
