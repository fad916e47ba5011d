# n8n_workflows/workflows/validation.py
"""
Shape checks for workflow records.

A record is valid when it is a JSON object carrying a non-empty ``name`` and
a ``nodes`` array. A non-string ``name`` is reported as a type error.
Nothing else about the document is inspected.
"""
import json
from typing import Any, Mapping, Union

from n8n_workflows.constants import REQUIRED_FIELDS
from n8n_workflows.workflows.models import ValidationResult


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value)


def count_nodes(record: Mapping[str, Any]) -> int:
    nodes = record.get("nodes")
    return len(nodes) if isinstance(nodes, list) else 0


def count_connections(record: Mapping[str, Any]) -> int:
    connections = record.get("connections")
    return len(connections) if isinstance(connections, dict) else 0


def validate_workflow(content: Union[str, Mapping[str, Any]]) -> ValidationResult:
    """
    Check that content looks like a workflow record.

    Args:
        content: JSON text or an already decoded record. Never modified.

    Returns:
        A ValidationResult listing every violation found.
    """
    if isinstance(content, str):
        try:
            record = json.loads(content)
        except json.JSONDecodeError as e:
            return ValidationResult(valid=False, errors=[f"Invalid JSON: {e}"])
    else:
        record = content

    if not isinstance(record, Mapping):
        return ValidationResult(valid=False, errors=["Workflow must be a JSON object"])

    errors = []
    missing = [field for field in REQUIRED_FIELDS if _is_missing(record.get(field))]
    if missing:
        errors.append(f"Missing required fields: {', '.join(missing)}")

    if "name" not in missing and not isinstance(record["name"], str):
        errors.append("Name must be a string")

    if "nodes" not in missing and not isinstance(record["nodes"], list):
        errors.append("Nodes must be an array")

    return ValidationResult(
        valid=not errors,
        errors=errors,
        name=record.get("name"),
        node_count=count_nodes(record),
        connection_count=count_connections(record),
    )


def count_connection_edges(record: Mapping[str, Any]) -> int:
    """Number of node-to-node links in a record's connections."""
    connections = record.get("connections")
    if not isinstance(connections, dict):
        return 0

    edges = 0
    for outputs in connections.values():
        if not isinstance(outputs, dict):
            continue
        for branches in outputs.values():
            if not isinstance(branches, list):
                continue
            for branch in branches:
                if isinstance(branch, list):
                    edges += len(branch)
    return edges
