"""Tests for the detee MCP tool surface."""

import json

import pytest

from detee.actions import DeteeActions
from detee.runner import CommandError
from tests.cli_samples import VM_TABLE_OUTPUT
from tools.detee import DeteeTool


@pytest.fixture
def tool(fake_runner):
    return DeteeTool(actions=DeteeActions(runner=fake_runner))


@pytest.mark.asyncio
async def test_detee_tool_execute(tool, fake_runner):
    fake_runner.replies = [VM_TABLE_OUTPUT]

    results = await tool.execute({"action": "list_workers"})
    assert len(results) == 1

    payload = json.loads(results[0].text)
    assert payload["status"] == "success"
    assert payload["content_type"] == "json"
    assert payload["metadata"] == {"action": "list_workers"}
    content = json.loads(payload["content"])
    assert [worker["hostname"] for worker in content["workers"]] == ["fuzzy-lemur", "silent-heron"]


@pytest.mark.asyncio
async def test_detee_tool_reports_command_failure(tool, fake_runner):
    fake_runner.replies = [CommandError("DeeTEE command failed: unknown VM", returncode=1, stderr="unknown VM\n")]

    results = await tool.execute({"action": "delete_worker", "parameters": {"worker_id": "abc"}})

    payload = json.loads(results[0].text)
    assert payload["status"] == "error"
    assert "unknown VM" in payload["content"]
    assert payload["metadata"]["return_code"] == 1
    assert payload["metadata"]["stderr"] == "unknown VM"


@pytest.mark.asyncio
async def test_detee_tool_reports_not_found(tool, fake_runner):
    fake_runner.replies = [CommandError("DeeTEE command failed: ", returncode=1)]

    results = await tool.execute({"action": "get_worker", "parameters": {"worker_id": "missing"}})

    payload = json.loads(results[0].text)
    assert payload["status"] == "error"
    assert payload["metadata"]["not_found"] is True


@pytest.mark.asyncio
async def test_detee_tool_rejects_unknown_action(tool):
    results = await tool.execute({"action": "reboot_worker"})

    payload = json.loads(results[0].text)
    assert payload["status"] == "error"
    assert "not found" in payload["content"]


@pytest.mark.asyncio
async def test_detee_tool_rejects_malformed_request(tool):
    results = await tool.execute({"parameters": {}})

    payload = json.loads(results[0].text)
    assert payload["status"] == "error"


def test_input_schema_lists_actions(tool):
    schema = tool.get_input_schema()

    assert schema["required"] == ["action"]
    assert "create_worker" in schema["properties"]["action"]["enum"]
    assert "worker_id: string" in schema["properties"]["action"]["description"]


@pytest.mark.asyncio
async def test_detee_tool_content_is_strict_json(tool, fake_runner):
    fake_runner.replies = ["VM CREATED!\nLocking inf LP\nssh -p 2222 root@10.1.1.1\n"]

    results = await tool.execute({"action": "create_worker"})

    payload = json.loads(results[0].text)
    assert payload["status"] == "success"
    content = json.loads(payload["content"], parse_constant=lambda name: pytest.fail(f"non-JSON constant {name}"))
    assert content == {"ssh_port": 2222, "ssh_host": "10.1.1.1"}
