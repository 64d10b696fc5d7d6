"""Parser for the pipe-delimited table printed by `detee-cli vm list`."""

from __future__ import annotations

import logging

from detee.constants import (
    CITY_HEADER_MARKER,
    TABLE_DELIMITER,
    TABLE_HEADER_LINES,
    TABLE_MIN_COLUMNS,
    TABLE_SEPARATOR,
    UUID_HEADER_MARKER,
)
from detee.models import OutputShape, RawOutput, VmTableRecord, WorkerRecord

from .base import BaseParser, parse_float, parse_int

logger = logging.getLogger("detee.parsers.vm_table")


def parse_table(text: str, *, skip_header: bool = True) -> list[WorkerRecord]:
    """Turn table rows into worker records, keeping their original order.

    Only lines containing the column delimiter are considered. With
    ``skip_header`` the first two of them (header row and its separator) are
    dropped; lookups that pre-filter rows with grep pass ``skip_header=False``,
    in which case a header row that slipped through the filter is still ignored.
    Rows with fewer than eight non-empty columns are skipped. A numeric column
    that fails to parse falls back to zero instead of dropping the row.
    """

    lines = [line for line in text.splitlines() if TABLE_DELIMITER in line]
    if skip_header:
        lines = lines[TABLE_HEADER_LINES:]

    workers: list[WorkerRecord] = []
    for line in lines:
        if TABLE_SEPARATOR in line:
            continue
        if _is_header(line):
            continue

        columns = [column.strip() for column in line.split(TABLE_DELIMITER)]
        columns = [column for column in columns if column]
        if len(columns) < TABLE_MIN_COLUMNS:
            logger.debug(
                "Skipping table row with %d columns (need %d): %s",
                len(columns),
                TABLE_MIN_COLUMNS,
                line.strip(),
            )
            continue

        workers.append(
            WorkerRecord(
                city=columns[0],
                uuid=columns[1],
                hostname=columns[2],
                cores=_count(columns[3]),
                memory_mb=_count(columns[4]),
                disk_gb=_count(columns[5]),
                lp_per_hour=_rate(columns[6]),
                time_left=columns[7],
            )
        )

    return workers


def _is_header(line: str) -> bool:
    return CITY_HEADER_MARKER in line and UUID_HEADER_MARKER in line


def _count(value: str) -> int:
    parsed = parse_int(value)
    if parsed is None or parsed < 0:
        return 0
    return parsed


def _rate(value: str) -> float:
    parsed = parse_float(value)
    if parsed is None or parsed < 0:
        return 0.0
    return parsed


class VmTableParser(BaseParser):
    name = "vm_table"
    shape = OutputShape.VM_TABLE

    @classmethod
    def detect(cls, text: str) -> bool:
        return CITY_HEADER_MARKER in text and UUID_HEADER_MARKER in text

    def parse(self, raw: RawOutput) -> VmTableRecord:
        return VmTableRecord(workers=parse_table(raw.text))
