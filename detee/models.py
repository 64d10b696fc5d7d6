"""Pydantic models for translated DeeTEE CLI output and bridge configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, PositiveInt, field_validator

from detee.constants import CLI_NAME, DEFAULT_TIMEOUT_SECONDS


class OutputShape(str, Enum):
    """Known shapes of DeeTEE CLI console output."""

    VERSION_INFO = "VersionInfo"
    CONTAINER_ID = "ContainerId"
    ACCOUNT_INFO = "AccountInfo"
    VM_CREATED = "VmCreated"
    VM_TABLE = "VmTable"
    VM_UPDATE = "VmUpdate"
    GENERIC = "Generic"


@dataclass(frozen=True)
class RawOutput:
    """Console text captured from one command, kept for a single translation."""

    text: str
    command: str | None = None


class WorkerRecord(BaseModel):
    """One leased VM as printed in a row of `detee-cli vm list`."""

    city: str
    uuid: str
    hostname: str
    cores: int = Field(default=0, ge=0)
    memory_mb: int = Field(default=0, ge=0)
    disk_gb: int = Field(default=0, ge=0)
    lp_per_hour: float = Field(default=0.0, ge=0.0)
    time_left: str = ""


class _Record(BaseModel):
    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-compatible mapping handed back to callers."""
        return self.model_dump(mode="json", exclude_none=True, exclude={"shape"})


class VersionInfoRecord(_Record):
    shape: Literal[OutputShape.VERSION_INFO] = OutputShape.VERSION_INFO
    version: str
    success: bool = True


class ContainerIdRecord(_Record):
    shape: Literal[OutputShape.CONTAINER_ID] = OutputShape.CONTAINER_ID
    container_id: str


class AccountInfoRecord(_Record):
    shape: Literal[OutputShape.ACCOUNT_INFO] = OutputShape.ACCOUNT_INFO
    config_path: str | None = None
    brain_url: str | None = None
    ssh_key_path: str | None = None
    wallet_public_key: str | None = None
    account_balance: str | None = None
    wallet_secret_key_path: str | None = None


class VmCreatedRecord(_Record):
    shape: Literal[OutputShape.VM_CREATED] = OutputShape.VM_CREATED
    hostname: str | None = None
    price: str | None = None
    total_units: int | None = None
    locked_lp: float | None = None
    ssh_port: int | None = None
    ssh_host: str | None = None
    uuid: str | None = None


class VmTableRecord(_Record):
    shape: Literal[OutputShape.VM_TABLE] = OutputShape.VM_TABLE
    workers: list[WorkerRecord] = Field(default_factory=list)


class VmUpdateRecord(_Record):
    shape: Literal[OutputShape.VM_UPDATE] = OutputShape.VM_UPDATE
    hardware_modified: bool | None = None
    hours_updated: int | None = None
    success: bool = True


class GenericRecord(_Record):
    shape: Literal[OutputShape.GENERIC] = OutputShape.GENERIC
    success: bool = True


StructuredRecord = Annotated[
    Union[
        VersionInfoRecord,
        ContainerIdRecord,
        AccountInfoRecord,
        VmCreatedRecord,
        VmTableRecord,
        VmUpdateRecord,
        GenericRecord,
    ],
    Field(discriminator="shape"),
]


class DeteeSettings(BaseModel):
    """Runtime configuration for reaching the DeeTEE CLI container."""

    cli_name: str = Field(default=CLI_NAME, description="Executable name of the DeeTEE CLI inside the container.")
    container_name: str = Field(default="detee-cli", description="Name of the container hosting the CLI.")
    image: str = Field(default="detee/detee-cli:latest", description="Image used by setup_container.")
    container_shell: str = Field(default="sh", description="Shell used to run commands inside the container.")
    entrypoint: str = Field(default="/usr/bin/fish")
    volume_root: str = Field(
        default="~/.detee/container_volume",
        description="Host directory holding the CLI state and SSH volumes.",
    )
    ssh_key_path: str = Field(default="/root/.ssh/id_ed25519", description="Key path inside the container.")
    brain_url: str = Field(..., description="Brain endpoint registered by setup_account.")
    timeout_seconds: PositiveInt = Field(default=DEFAULT_TIMEOUT_SECONDS)

    @field_validator("cli_name", "container_name", "image", "container_shell", "brain_url", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            if not value:
                raise ValueError("value must not be empty")
        return value
