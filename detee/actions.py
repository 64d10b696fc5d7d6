"""Named DeeTEE actions: build the CLI command, run it, translate the output."""

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, PositiveInt, ValidationError

from detee.assembler import (
    assemble_container,
    assemble_existence,
    assemble_record,
    assemble_worker_list,
    assemble_worker_lookup,
    success_marker,
)
from detee.constants import (
    DEFAULT_DISK_GB,
    DEFAULT_DISTRO,
    DEFAULT_HOURS,
    DEFAULT_MEMORY_MB,
    DEFAULT_VCPUS,
)
from detee.models import DeteeSettings
from detee.parsers import parse_table, translate
from detee.runner import CommandError, CommandRunner
from detee.settings import get_settings

logger = logging.getLogger("detee.actions")


class ActionError(RuntimeError):
    """Raised for unknown actions, invalid parameters or unusable output."""


class WorkerNotFoundError(ActionError):
    """Raised when a lookup matches no VM."""


# ----------------------------------------------------------------------
# Parameter models
# ----------------------------------------------------------------------


class NoParams(BaseModel):
    pass


class CreateWorkerParams(BaseModel):
    distro: str = Field(default=DEFAULT_DISTRO, description="Linux distribution")
    vcpus: PositiveInt = Field(default=DEFAULT_VCPUS, description="Number of vCPUs")
    memory_mb: PositiveInt = Field(default=DEFAULT_MEMORY_MB, description="Memory in MB")
    disk_gb: PositiveInt = Field(default=DEFAULT_DISK_GB, description="Disk size in GB")
    hours: PositiveInt = Field(default=DEFAULT_HOURS, description="Runtime in hours")


class WorkerIdParams(BaseModel):
    worker_id: str = Field(..., min_length=1, description="UUID of the VM")


class UpdateWorkerParams(WorkerIdParams):
    vcpus_param: str = Field(..., description="vCPUs parameter string")
    memory_param: str = Field(..., description="Memory parameter string")
    hours_param: str = Field(..., description="Hours parameter string")


class ActionParameter(BaseModel):
    name: str
    description: str
    type: str
    required: bool
    default: Any = None


class ActionDefinition(BaseModel):
    name: str
    description: str
    parameters: list[ActionParameter] = Field(default_factory=list)


_JSON_TYPES = {str: "string", int: "integer"}


def _describe_parameters(model: type[BaseModel]) -> list[ActionParameter]:
    parameters: list[ActionParameter] = []
    for name, field in model.model_fields.items():
        required = field.is_required()
        parameters.append(
            ActionParameter(
                name=name,
                description=field.description or name,
                type=_JSON_TYPES.get(field.annotation, "string"),
                required=required,
                default=None if required else field.default,
            )
        )
    return parameters


class DeteeActions:
    """Map named actions and typed parameters onto DeeTEE CLI invocations."""

    def __init__(self, runner: CommandRunner | None = None, settings: DeteeSettings | None = None):
        self.settings = settings or (runner.settings if runner else get_settings())
        self.runner = runner or CommandRunner(self.settings)
        self._actions: dict[str, tuple[str, type[BaseModel], Callable[..., dict[str, Any]]]] = {
            "test_install": (
                "Test if DeeTEE CLI is properly installed in the container",
                NoParams,
                self.test_install,
            ),
            "setup_container": ("Setup the DeeTEE CLI container", NoParams, self.setup_container),
            "setup_account": (
                "Setup the DeeTEE account with SSH key and brain URL",
                NoParams,
                self.setup_account,
            ),
            "get_account_info": ("Get DeeTEE account information", NoParams, self.get_account_info),
            "create_worker": ("Create a new DeeTEE virtual machine", CreateWorkerParams, self.create_worker),
            "list_workers": ("List all DeeTEE virtual machines", NoParams, self.list_workers),
            "get_worker": ("Get information about a DeeTEE virtual machine", WorkerIdParams, self.get_worker),
            "has_worker": ("Check if a DeeTEE virtual machine exists", WorkerIdParams, self.has_worker),
            "update_worker": ("Update a DeeTEE virtual machine", UpdateWorkerParams, self.update_worker),
            "delete_worker": ("Delete a DeeTEE virtual machine", WorkerIdParams, self.delete_worker),
        }

    def list_actions(self) -> list[str]:
        return list(self._actions)

    def get_action_definition(self, action: str) -> ActionDefinition | None:
        entry = self._actions.get(action)
        if entry is None:
            return None
        description, params_model, _ = entry
        return ActionDefinition(name=action, description=description, parameters=_describe_parameters(params_model))

    def execute_action(self, action: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        entry = self._actions.get(action)
        if entry is None:
            raise ActionError(f"Action '{action}' not found")

        _, params_model, handler = entry
        try:
            validated = params_model.model_validate(params or {})
        except ValidationError as exc:
            raise ActionError(f"Invalid parameters for action '{action}': {exc}") from exc

        logger.info("Executing DeeTEE action %s", action)
        return handler(**validated.model_dump())

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def test_install(self) -> dict[str, Any]:
        command = f"{self._cli} --version"
        output = self.runner.run_tool(command)
        return assemble_record(translate(output.stdout, command=command))

    def setup_container(self) -> dict[str, Any]:
        volume_root = Path(self.settings.volume_root).expanduser()
        cli_volume = f"{volume_root / 'cli'}:/root/.detee/cli:rw"
        ssh_volume = f"{volume_root / '.ssh'}:/root/.ssh:rw"
        command = " ".join(
            [
                "docker run --pull always -dt",
                f"--name {shlex.quote(self.settings.container_name)}",
                f"--volume {shlex.quote(cli_volume)}",
                f"--volume {shlex.quote(ssh_volume)}",
                f"--entrypoint {shlex.quote(self.settings.entrypoint)}",
                shlex.quote(self.settings.image),
            ]
        )
        output = self.runner.run_shell(command)
        return assemble_container(translate(output.stdout, command=command))

    def setup_account(self) -> dict[str, Any]:
        key_path = self.settings.ssh_key_path
        public_key = shlex.quote(f"{key_path}.pub")
        command = (
            f"if [ ! -f {public_key} ]; then ssh-keygen -t ed25519 -f {shlex.quote(key_path)} -N ''; fi"
            f" && {self._cli} account ssh-pubkey-path {public_key}"
            f" && {self._cli} account brain-url {shlex.quote(self.settings.brain_url)}"
        )
        self.runner.run_tool(command)
        return success_marker()

    def get_account_info(self) -> dict[str, Any]:
        command = f"{self._cli} account"
        output = self.runner.run_tool(command)
        return assemble_record(translate(output.stdout, command=command))

    def create_worker(self, distro: str, vcpus: int, memory_mb: int, disk_gb: int, hours: int) -> dict[str, Any]:
        command = (
            f"{self._cli} vm deploy --distro {shlex.quote(distro)} --vcpus {vcpus} "
            f"--memory {memory_mb} --disk {disk_gb} --hours {hours}"
        )
        output = self.runner.run_tool(command)
        return assemble_record(translate(output.stdout, command=command))

    def list_workers(self) -> dict[str, Any]:
        command = f"{self._cli} vm list"
        output = self.runner.run_tool(command)
        return assemble_worker_list(translate(output.stdout, command=command))

    def get_worker(self, worker_id: str) -> dict[str, Any]:
        try:
            output = self.runner.run_tool(self._lookup_command(worker_id))
        except CommandError as exc:
            # grep exits with 1 when no line matched
            if exc.returncode == 1 and not exc.stdout.strip() and not exc.stderr.strip():
                raise WorkerNotFoundError(f"Worker with ID {worker_id} not found") from exc
            raise

        if not output.stdout.strip():
            raise WorkerNotFoundError(f"Worker with ID {worker_id} not found")

        payload = assemble_worker_lookup(parse_table(output.stdout, skip_header=False))
        if payload is None:
            raise WorkerNotFoundError(f"Failed to parse worker info for ID {worker_id}")
        return payload

    def has_worker(self, worker_id: str) -> dict[str, Any]:
        try:
            output = self.runner.run_tool(self._lookup_command(worker_id))
        except CommandError as exc:
            logger.debug("Lookup for worker %s failed, reporting it as absent: %s", worker_id, exc)
            return assemble_existence(None)
        return assemble_existence(output.stdout)

    def update_worker(self, worker_id: str, vcpus_param: str, memory_param: str, hours_param: str) -> dict[str, Any]:
        arguments = [_requote(vcpus_param), _requote(memory_param), _requote(hours_param), shlex.quote(worker_id)]
        command = " ".join([f"{self._cli} vm update", *[arg for arg in arguments if arg]])
        output = self.runner.run_tool(command)
        return assemble_record(translate(output.stdout, command=command))

    def delete_worker(self, worker_id: str) -> dict[str, Any]:
        self.runner.run_tool(f"{self._cli} vm delete {shlex.quote(worker_id)}")
        return success_marker()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @property
    def _cli(self) -> str:
        return shlex.quote(self.settings.cli_name)

    def _lookup_command(self, worker_id: str) -> str:
        return f"{self._cli} vm list | grep -F -- {shlex.quote(worker_id)}"


def _requote(value: str) -> str:
    """Keep a free-form flag string as separate words while neutralizing shell syntax."""
    try:
        tokens = shlex.split(value)
    except ValueError as exc:
        raise ActionError(f"Unable to tokenize parameter {value!r}: {exc}") from exc
    return " ".join(shlex.quote(token) for token in tokens)
