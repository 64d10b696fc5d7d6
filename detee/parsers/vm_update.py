"""Parser for `detee-cli vm update` output."""

from __future__ import annotations

from detee.constants import (
    HARDWARE_ACCEPTED_SENTENCE,
    HARDWARE_MODIFICATIONS_MARKER,
    HOURS_UPDATED_LINE_MARKER,
    HOURS_UPDATED_TOKEN_INDEX,
    RUN_FOR_ANOTHER_MARKER,
)
from detee.models import OutputShape, RawOutput, VmUpdateRecord

from .base import BaseParser, find_line, parse_int


class VmUpdateParser(BaseParser):
    name = "vm_update"
    shape = OutputShape.VM_UPDATE

    @classmethod
    def detect(cls, text: str) -> bool:
        return HARDWARE_MODIFICATIONS_MARKER in text or RUN_FOR_ANOTHER_MARKER in text

    def parse(self, raw: RawOutput) -> VmUpdateRecord:
        text = raw.text
        hardware_modified = True if HARDWARE_ACCEPTED_SENTENCE in text else None

        hours_updated: int | None = None
        line = find_line(text, HOURS_UPDATED_LINE_MARKER)
        if line is not None:
            # "The VM will run for another 12 hours."
            tokens = line.split()
            if len(tokens) > HOURS_UPDATED_TOKEN_INDEX:
                hours_updated = parse_int(tokens[HOURS_UPDATED_TOKEN_INDEX])

        return VmUpdateRecord(hardware_modified=hardware_modified, hours_updated=hours_updated)
