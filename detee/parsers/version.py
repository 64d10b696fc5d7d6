"""Parser for `detee-cli --version` output."""

from __future__ import annotations

from detee.constants import CLI_NAME
from detee.models import OutputShape, RawOutput, VersionInfoRecord

from .base import BaseParser


class VersionInfoParser(BaseParser):
    """Strip the tool name from the version banner."""

    name = "version_info"
    shape = OutputShape.VERSION_INFO

    @classmethod
    def detect(cls, text: str) -> bool:
        return CLI_NAME in text

    def parse(self, raw: RawOutput) -> VersionInfoRecord:
        version = raw.text.strip().replace(f"{CLI_NAME} ", "").strip()
        return VersionInfoRecord(version=version)
