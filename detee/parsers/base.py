"""Parser interfaces for DeeTEE CLI console output."""

from __future__ import annotations

import math
import re

from detee.models import OutputShape, RawOutput, StructuredRecord

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


class ParserError(RuntimeError):
    """Raised when no parser is registered for a requested shape."""


class BaseParser:
    """Base interface for per-shape output extractors.

    ``detect`` decides whether raw text carries this shape's marker(s);
    ``parse`` pulls whatever fields it can find and never fails on missing
    or malformed lines.
    """

    name: str = "base"
    shape: OutputShape

    @classmethod
    def detect(cls, text: str) -> bool:
        raise NotImplementedError("Parsers must implement detect()")

    def parse(self, raw: RawOutput) -> StructuredRecord:
        raise NotImplementedError("Parsers must implement parse()")


def find_line(text: str, marker: str) -> str | None:
    """Return the first line containing ``marker``."""
    for line in text.splitlines():
        if marker in line:
            return line
    return None


def value_after_colon(text: str, marker: str) -> str | None:
    """Return the trimmed text after the first ``:`` on the marker line."""
    line = find_line(text, marker)
    if line is None:
        return None
    parts = line.split(":", 1)
    if len(parts) < 2:
        return None
    return parts[1].strip()


def parse_int(value: str | None) -> int | None:
    """Parse a plain ASCII integer; digit separators and non-ASCII digits are rejected."""
    if value is None:
        return None
    value = value.strip()
    if not _INTEGER_PATTERN.fullmatch(value):
        return None
    return int(value)


def parse_float(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        parsed = float(value.strip())
    except ValueError:
        return None
    # nan and inf are not representable in JSON payloads
    return parsed if math.isfinite(parsed) else None
