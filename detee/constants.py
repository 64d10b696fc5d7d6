"""Internal defaults and output markers for the DeeTEE bridge."""

from __future__ import annotations

from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
CONFIG_PATH = PROJECT_ROOT / "conf" / "detee.json"
USER_CONFIG_PATH = Path.home() / ".detee" / "bridge.json"

CLI_NAME = "detee-cli"
DEFAULT_TIMEOUT_SECONDS = 300

# Default parameters for `vm deploy`
DEFAULT_DISTRO = "ubuntu"
DEFAULT_VCPUS = 2
DEFAULT_MEMORY_MB = 2048
DEFAULT_DISK_GB = 20
DEFAULT_HOURS = 4

CONTAINER_ID_LENGTHS = (64, 12)

# Account listing
CONFIG_PATH_MARKER = "Config path:"
BRAIN_URL_MARKER = "brain URL"
ACCOUNT_FIELD_MARKERS: dict[str, str] = {
    "config_path": "Config path:",
    "brain_url": "brain URL is:",
    "ssh_key_path": "SSH Key Path:",
    "wallet_public_key": "Wallet public key:",
    "account_balance": "Account Balance:",
    "wallet_secret_key_path": "Wallet secret key path:",
}

# VM deployment
VM_CREATED_MARKER = "VM CREATED"
VM_CREATED_UUID_MARKER = "VM CREATED!"
VM_NAME_MARKER = "Using random VM name:"
NODE_PRICE_MARKER = "Node price:"
TOTAL_UNITS_MARKER = "Total Units for hardware requested:"
LOCKING_MARKER = "Locking"
SSH_COMMAND_MARKER = "ssh -p"

# VM listing
TABLE_DELIMITER = "|"
TABLE_SEPARATOR = "----"
TABLE_HEADER_LINES = 2
TABLE_MIN_COLUMNS = 8
CITY_HEADER_MARKER = "| City"
UUID_HEADER_MARKER = "| UUID"

# VM update
HARDWARE_MODIFICATIONS_MARKER = "hardware modifications"
RUN_FOR_ANOTHER_MARKER = "will run for another"
HARDWARE_ACCEPTED_SENTENCE = "The node accepted the hardware modifications for the VM"
HOURS_UPDATED_LINE_MARKER = "The VM will run for another"
HOURS_UPDATED_TOKEN_INDEX = 6
