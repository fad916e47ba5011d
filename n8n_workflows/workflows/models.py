# n8n_workflows/workflows/models.py
"""
Data models for workflow summaries, validation results and store profiles.
"""
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from n8n_workflows.constants import MANAGER_TOOL_ID, CLONER_TOOL_ID

# A decoded workflow document
WorkflowRecord = Dict[str, Any]


class ProvenanceProfile(BaseModel):
    """Names of the metadata fields a store writes on save and strips on load."""
    timestamp_field: str = Field(..., description="Field holding the ISO-8601 write time")
    tool_field: str = Field(..., description="Field holding the tool identifier")
    tool_id: str = Field(..., description="Identifier written into tool_field")
    source_field: Optional[str] = Field(None, description="Field holding the source URL, if supported")

    @property
    def field_names(self) -> Tuple[str, ...]:
        names = [self.timestamp_field, self.tool_field]
        if self.source_field:
            names.append(self.source_field)
        return tuple(names)


MANAGER_PROFILE = ProvenanceProfile(
    timestamp_field="exportedAt",
    tool_field="exportedBy",
    tool_id=MANAGER_TOOL_ID,
)

CLONER_PROFILE = ProvenanceProfile(
    timestamp_field="clonedAt",
    tool_field="clonedBy",
    tool_id=CLONER_TOOL_ID,
    source_field="clonedFrom",
)


class WorkflowSummary(BaseModel):
    """Listing entry for one stored workflow file."""
    name: str = Field(..., description="Logical name (file stem)")
    filename: str = Field(..., description="File name inside the store")
    path: Path = Field(..., description="Full path of the file")
    size: int = Field(..., description="File size in bytes")
    modified: datetime = Field(..., description="Last modification time")
    node_count: int = Field(0, description="Number of nodes in the workflow")
    connection_count: int = Field(0, description="Number of nodes with outgoing connections")
    exported_at: Optional[str] = None
    exported_by: Optional[str] = None
    cloned_at: Optional[str] = None
    cloned_by: Optional[str] = None
    cloned_from: Optional[str] = None

    @property
    def size_kb(self) -> float:
        return self.size / 1024


class ValidationResult(BaseModel):
    """Outcome of checking a record against the required workflow shape."""
    valid: bool
    errors: List[str] = Field(default_factory=list)
    name: Optional[Any] = None
    node_count: int = 0
    connection_count: int = 0

    def __bool__(self) -> bool:
        return self.valid


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, e.g. 2024-05-01T12:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
