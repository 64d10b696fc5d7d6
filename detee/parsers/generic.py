"""Fallback parser for output without a known shape."""

from __future__ import annotations

from detee.models import GenericRecord, OutputShape, RawOutput

from .base import BaseParser


class GenericParser(BaseParser):
    name = "generic"
    shape = OutputShape.GENERIC

    @classmethod
    def detect(cls, text: str) -> bool:
        return True

    def parse(self, raw: RawOutput) -> GenericRecord:
        return GenericRecord()
