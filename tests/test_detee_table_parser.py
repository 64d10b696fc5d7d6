"""Tests for the `vm list` table parser."""

from detee.models import WorkerRecord
from detee.parsers import parse_table, translate
from tests.cli_samples import VM_TABLE_OUTPUT

HEADER = (
    "| City | UUID | hostname | Cores | Memory | Disk | LP/h | time left |\n"
    "|------+------+----------+-------+--------+------+------+-----------|\n"
)


def test_parse_table_sample():
    workers = parse_table(VM_TABLE_OUTPUT)

    assert workers == [
        WorkerRecord(
            city="Vienna",
            uuid="a1b2c3d4-e5f6-47a8-99b0-1234567890ab",
            hostname="fuzzy-lemur",
            cores=2,
            memory_mb=2048,
            disk_gb=20,
            lp_per_hour=0.84,
            time_left="3h 59m",
        ),
        WorkerRecord(
            city="Chicago",
            uuid="0f9e8d7c-6b5a-4c3d-8e1f-a0b1c2d3e4f5",
            hostname="silent-heron",
            cores=4,
            memory_mb=4096,
            disk_gb=40,
            lp_per_hour=1.68,
            time_left="11h 2m",
        ),
    ]


def test_short_rows_are_dropped_and_order_kept():
    text = (
        HEADER
        + "| Vienna | uuid-1 | host-a | 2 | 2048 | 20 | 0.5 | 1h |\n"
        + "| Berlin | uuid-2 | host-b | 2 | 2048 |\n"
        + "| Austin | uuid-3 | host-c | 8 | 8192 | 80 | 2.0 | 5h |\n"
    )

    workers = parse_table(text)

    assert [worker.uuid for worker in workers] == ["uuid-1", "uuid-3"]


def test_row_with_seven_columns_is_dropped():
    text = HEADER + "| Vienna | uuid-1 | host-a | 2 | 2048 | 20 | 0.5 |\n"
    assert parse_table(text) == []


def test_non_numeric_cores_defaults_to_zero():
    text = HEADER + "| Vienna | uuid-1 | host-a | two | 2048 | 20 | 0.5 | 1h |\n"

    [worker] = parse_table(text)

    assert worker.cores == 0
    assert worker.city == "Vienna"
    assert worker.uuid == "uuid-1"
    assert worker.hostname == "host-a"
    assert worker.memory_mb == 2048
    assert worker.disk_gb == 20
    assert worker.lp_per_hour == 0.5
    assert worker.time_left == "1h"


def test_negative_and_non_finite_numbers_default():
    text = HEADER + "| Vienna | uuid-1 | host-a | -2 | 2048 | x | nan | 1h |\n"

    [worker] = parse_table(text)

    assert worker.cores == 0
    assert worker.disk_gb == 0
    assert worker.lp_per_hour == 0.0


def test_separator_rows_in_body_are_skipped():
    text = (
        HEADER
        + "| Vienna | uuid-1 | host-a | 2 | 2048 | 20 | 0.5 | 1h |\n"
        + "|--------+--------+--------+---+------+----+-----+----|\n"
        + "| Austin | uuid-3 | host-c | 8 | 8192 | 80 | 2.0 | 5h |\n"
    )
    assert [worker.uuid for worker in parse_table(text)] == ["uuid-1", "uuid-3"]


def test_lines_without_delimiter_are_ignored():
    text = "Fetching VMs...\n" + HEADER + "| Vienna | uuid-1 | host-a | 2 | 2048 | 20 | 0.5 | 1h |\nDone\n"
    assert len(parse_table(text)) == 1


def test_prefiltered_rows_keep_first_line():
    row = "| Vienna | uuid-1 | host-a | 2 | 2048 | 20 | 0.5 | 1h |\n"

    assert parse_table(row) == []
    assert [worker.uuid for worker in parse_table(row, skip_header=False)] == ["uuid-1"]


def test_translate_vm_table_payload():
    payload = translate(VM_TABLE_OUTPUT).to_payload()

    assert len(payload["workers"]) == 2
    assert payload["workers"][1]["hostname"] == "silent-heron"


def test_header_row_ignored_without_positional_skip():
    text = (
        "| City | UUID | hostname | Cores | Memory | Disk | LP/h | time left |\n"
        "| Vienna | uuid-1 | host-a | 2 | 2048 | 20 | 0.5 | 1h |\n"
    )

    assert [worker.city for worker in parse_table(text, skip_header=False)] == ["Vienna"]


def test_digit_separators_in_counts_default_to_zero():
    text = HEADER + "| Vienna | uuid-1 | host-a | 2 | 2_048 | 20 | 0.5 | 1h |\n"

    [worker] = parse_table(text)

    assert worker.memory_mb == 0
    assert worker.cores == 2
