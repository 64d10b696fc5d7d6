"""Tests for shape classification of detee-cli output."""

import pytest

from detee.models import OutputShape
from detee.parsers import ParserError, classify, get_parser, translate
from tests.cli_samples import (
    ACCOUNT_OUTPUT,
    CONTAINER_ID,
    VERSION_OUTPUT,
    VM_CREATED_OUTPUT,
    VM_TABLE_OUTPUT,
    VM_UPDATE_OUTPUT,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        (VERSION_OUTPUT, OutputShape.VERSION_INFO),
        (CONTAINER_ID, OutputShape.CONTAINER_ID),
        ("3f4e5d6c7b8a", OutputShape.CONTAINER_ID),
        (ACCOUNT_OUTPUT, OutputShape.ACCOUNT_INFO),
        (VM_CREATED_OUTPUT, OutputShape.VM_CREATED),
        (VM_TABLE_OUTPUT, OutputShape.VM_TABLE),
        (VM_UPDATE_OUTPUT, OutputShape.VM_UPDATE),
        ("VM deleted successfully.\n", OutputShape.GENERIC),
        ("", OutputShape.GENERIC),
    ],
)
def test_classify_known_shapes(text, expected):
    assert classify(text) == expected
    assert classify(text) == classify(text)


def test_container_id_length_ignores_trailing_newline():
    assert classify(CONTAINER_ID + "\n") == OutputShape.CONTAINER_ID


def test_tool_name_wins_over_later_markers():
    text = "detee-cli: VM CREATED! a1b2c3d4-e5f6-47a8-99b0-1234567890ab"
    assert classify(text) == OutputShape.VERSION_INFO


def test_vm_created_wins_over_update_markers():
    text = "VM CREATED!\nThe VM will run for another 4 hours."
    assert classify(text) == OutputShape.VM_CREATED


def test_account_requires_both_markers():
    assert classify("Config path: /root/.detee/cli/cli-config.yaml\n") == OutputShape.GENERIC


def test_table_requires_city_and_uuid_headers():
    assert classify("| City | Hostname |\n| Vienna | fuzzy-lemur |\n") == OutputShape.GENERIC


def test_get_parser_by_shape_and_name():
    assert get_parser(OutputShape.VM_TABLE).shape == OutputShape.VM_TABLE
    assert get_parser("vm_table").shape == OutputShape.VM_TABLE
    assert get_parser("AccountInfo").name == "account_info"


def test_get_parser_unknown_name():
    with pytest.raises(ParserError):
        get_parser("json")


def test_translate_version_end_to_end():
    record = translate("detee-cli v1.4.2")
    assert record.to_payload() == {"version": "v1.4.2", "success": True}


def test_translate_container_id_end_to_end():
    record = translate(CONTAINER_ID)
    assert record.to_payload() == {"container_id": CONTAINER_ID}


def test_translate_generic_output():
    assert translate("Done.").to_payload() == {"success": True}
