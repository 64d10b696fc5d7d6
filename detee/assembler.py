"""Wrap translated records into the payloads returned by bridge actions."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from detee.models import ContainerIdRecord, StructuredRecord, VmTableRecord, WorkerRecord

# Fields surfaced by get_worker; the uuid is already known to the caller.
LOOKUP_FIELDS = ("city", "hostname", "cores", "memory_mb", "disk_gb", "lp_per_hour", "time_left")


def success_marker() -> dict[str, Any]:
    return {"success": True}


def assemble_record(record: StructuredRecord) -> dict[str, Any]:
    return record.to_payload()


def assemble_container(record: StructuredRecord) -> dict[str, Any]:
    payload = success_marker()
    if isinstance(record, ContainerIdRecord):
        payload["container_id"] = record.container_id
    return payload


def assemble_worker_list(record: StructuredRecord) -> dict[str, Any]:
    """Name the worker sequence; output that is not a VM table lists no workers."""
    workers = record.workers if isinstance(record, VmTableRecord) else []
    return {"workers": [worker.model_dump(mode="json") for worker in workers]}


def assemble_worker_lookup(workers: Sequence[WorkerRecord]) -> dict[str, Any] | None:
    """Return ``{"vm": {...}}`` for the first matching row, or None when nothing matched."""
    if not workers:
        return None
    worker = workers[0]
    return {"vm": worker.model_dump(mode="json", include=set(LOOKUP_FIELDS))}


def assemble_existence(stdout: str | None) -> dict[str, Any]:
    exists = bool(stdout and stdout.strip())
    return {"success": True, "exists": exists}
