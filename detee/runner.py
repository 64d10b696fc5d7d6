"""Execute DeeTEE CLI and host shell commands."""

from __future__ import annotations

import logging
import subprocess
import time
from dataclasses import dataclass

from detee.models import DeteeSettings

logger = logging.getLogger("detee.runner")


@dataclass
class CommandOutput:
    """Captured result of a successful command."""

    command: list[str]
    stdout: str
    stderr: str
    returncode: int
    duration_seconds: float


class CommandError(RuntimeError):
    """Raised when a command cannot start, exits non-zero, or times out."""

    def __init__(self, message: str, *, returncode: int | None = None, stdout: str = "", stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class CommandRunner:
    """Run commands inside the CLI container or directly on the host.

    Each call blocks until the child exits or ``timeout_seconds`` elapses, in
    which case the child is killed and ``CommandError`` is raised.
    """

    def __init__(self, settings: DeteeSettings):
        self.settings = settings

    def run_tool(self, command: str) -> CommandOutput:
        """Run ``command`` through the container shell so pipes and ``&&`` work."""
        argv = [
            "docker",
            "exec",
            "-i",
            self.settings.container_name,
            self.settings.container_shell,
            "-c",
            command,
        ]
        return self._execute(argv, label="DeeTEE")

    def run_shell(self, command: str) -> CommandOutput:
        return self._execute(["sh", "-c", command], label="shell")

    def _execute(self, argv: list[str], *, label: str) -> CommandOutput:
        timeout = self.settings.timeout_seconds
        logger.debug("Running %s command: %s", label, argv[-1])
        start_time = time.monotonic()

        try:
            completed = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=timeout,
                check=False,
            )
        except (OSError, ValueError) as exc:
            # OSError: missing or unusable executable; ValueError: NUL byte in an argument
            logger.warning("%s command could not start: %s", label, exc)
            raise CommandError(f"Failed to execute {label} command: {exc}") from exc
        except subprocess.TimeoutExpired as exc:
            logger.warning("%s command timed out after %s seconds: %s", label, timeout, argv[-1])
            raise CommandError(
                f"{label} command timed out after {timeout} seconds",
                stdout=_as_text(exc.stdout),
                stderr=_as_text(exc.stderr),
            ) from exc

        duration = time.monotonic() - start_time
        if completed.returncode != 0:
            logger.warning("%s command exited with status %d: %s", label, completed.returncode, argv[-1])
            raise CommandError(
                f"{label} command failed: {completed.stderr.strip()}",
                returncode=completed.returncode,
                stdout=completed.stdout,
                stderr=completed.stderr,
            )

        logger.debug("Command output: %s", completed.stdout)
        return CommandOutput(
            command=argv,
            stdout=completed.stdout,
            stderr=completed.stderr,
            returncode=completed.returncode,
            duration_seconds=duration,
        )


def _as_text(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value
