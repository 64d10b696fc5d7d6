"""Parser for `detee-cli vm deploy` output."""

from __future__ import annotations

import re

from detee.constants import (
    LOCKING_MARKER,
    NODE_PRICE_MARKER,
    SSH_COMMAND_MARKER,
    TOTAL_UNITS_MARKER,
    VM_CREATED_MARKER,
    VM_CREATED_UUID_MARKER,
    VM_NAME_MARKER,
)
from detee.models import OutputShape, RawOutput, VmCreatedRecord

from .base import BaseParser, find_line, parse_float, parse_int, value_after_colon

UUID_PATTERN = re.compile(r"([0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12})")


class VmCreatedParser(BaseParser):
    """Collect hostname, pricing, SSH endpoint and UUID of a freshly deployed VM."""

    name = "vm_created"
    shape = OutputShape.VM_CREATED

    @classmethod
    def detect(cls, text: str) -> bool:
        return VM_CREATED_MARKER in text

    def parse(self, raw: RawOutput) -> VmCreatedRecord:
        text = raw.text
        ssh_port, ssh_host = self._extract_ssh(text)
        return VmCreatedRecord(
            hostname=value_after_colon(text, VM_NAME_MARKER),
            price=self._extract_price(text),
            total_units=parse_int(value_after_colon(text, TOTAL_UNITS_MARKER)),
            locked_lp=self._extract_locked_lp(text),
            ssh_port=ssh_port,
            ssh_host=ssh_host,
            uuid=self._extract_uuid(text),
        )

    def _extract_price(self, text: str) -> str | None:
        # "Node price: 20000/unit/minute" -> "20000"
        value = value_after_colon(text, NODE_PRICE_MARKER)
        if value is None:
            return None
        return value.split("/", 1)[0].strip()

    def _extract_locked_lp(self, text: str) -> float | None:
        line = find_line(text, LOCKING_MARKER)
        if line is None:
            return None
        tokens = line.split()
        if len(tokens) < 2:
            return None
        return parse_float(tokens[1])

    def _extract_ssh(self, text: str) -> tuple[int | None, str | None]:
        # Tokens are read relative to `ssh`: ssh -p PORT user@HOST
        line = find_line(text, SSH_COMMAND_MARKER)
        if line is None:
            return None, None
        tokens = line.split()
        try:
            start = tokens.index("ssh")
        except ValueError:
            return None, None
        command = tokens[start:]
        if len(command) < 4:
            return None, None

        port = parse_int(command[2])
        _, at, host = command[3].partition("@")
        return port, (host if at and host else None)

    def _extract_uuid(self, text: str) -> str | None:
        line = find_line(text, VM_CREATED_MARKER)
        if line is None:
            return None
        index = line.find(VM_CREATED_UUID_MARKER)
        if index == -1:
            return None
        match = UUID_PATTERN.search(line[index + len(VM_CREATED_UUID_MARKER) :])
        return match.group(1) if match else None
