"""Parser for `detee-cli account` output."""

from __future__ import annotations

from detee.constants import ACCOUNT_FIELD_MARKERS, BRAIN_URL_MARKER, CONFIG_PATH_MARKER
from detee.models import AccountInfoRecord, OutputShape, RawOutput

from .base import BaseParser, value_after_colon


class AccountInfoParser(BaseParser):
    """Extract `Key: value` lines describing the local account."""

    name = "account_info"
    shape = OutputShape.ACCOUNT_INFO

    @classmethod
    def detect(cls, text: str) -> bool:
        return CONFIG_PATH_MARKER in text and BRAIN_URL_MARKER in text

    def parse(self, raw: RawOutput) -> AccountInfoRecord:
        fields = {field: value_after_colon(raw.text, marker) for field, marker in ACCOUNT_FIELD_MARKERS.items()}
        return AccountInfoRecord(**fields)
