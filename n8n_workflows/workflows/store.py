# n8n_workflows/workflows/store.py
"""
Directory-backed storage for n8n workflow records.

Each workflow lives in its own ``<name>.json`` file. On save the store stamps
provenance metadata (write time, tool identity, optional source URL) into the
record; on load it strips those fields again so the record can be imported
back into n8n unchanged.
"""
import json
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from n8n_workflows.constants import WORKFLOW_SUFFIX, JSON_INDENT
from n8n_workflows.utils.logging import get_logger
from n8n_workflows.workflows.errors import (
    ParseError,
    ValidationError,
    NotFoundError,
    WorkflowIOError,
)
from n8n_workflows.workflows.models import (
    MANAGER_PROFILE,
    ProvenanceProfile,
    ValidationResult,
    WorkflowRecord,
    WorkflowSummary,
    utc_timestamp,
)
from n8n_workflows.workflows.validation import (
    validate_workflow,
    count_nodes,
    count_connections,
)

logger = get_logger(__name__)


def _text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


class WorkflowStore:
    """
    Store for workflow JSON files in a single directory.

    The directory and the provenance profile are fixed at construction.
    Writes are not locked: concurrent writers to the same name race and the
    last rename wins.
    """

    def __init__(
        self,
        directory: Union[str, Path],
        profile: ProvenanceProfile = MANAGER_PROFILE,
        create: bool = True,
    ):
        """
        Initialize the store.

        Args:
            directory: Directory holding the workflow files
            profile: Provenance fields written on save and stripped on load
            create: Whether to create the directory right away
        """
        self._directory = Path(directory)
        self._profile = profile
        self._logger = logger.with_context(store=str(self._directory))
        if create:
            self.ensure_directory()

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def profile(self) -> ProvenanceProfile:
        return self._profile

    def ensure_directory(self) -> bool:
        """
        Create the store directory (and parents) if it does not exist.

        Returns:
            True if the directory was created by this call
        """
        if self._directory.is_dir():
            return False
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WorkflowIOError(f"Could not create workflows directory {self._directory}: {e}") from e
        self._logger.info(f"Created workflows directory: {self._directory}")
        return True

    def path_for(self, name: str) -> Path:
        """Return the file path backing the workflow called name."""
        if not name or name in (".", "..") or "/" in name or "\\" in name or os.sep in name:
            raise ValidationError(f"Invalid workflow name: {name!r}")
        return self._directory / f"{name}{WORKFLOW_SUFFIX}"

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def _provenance(self, source: Optional[str] = None) -> Dict[str, str]:
        metadata = {
            self._profile.timestamp_field: utc_timestamp(),
            self._profile.tool_field: self._profile.tool_id,
        }
        if source is not None:
            if self._profile.source_field:
                metadata[self._profile.source_field] = source
            else:
                self._logger.debug(f"Store does not record sources, ignoring {source}")
        return metadata

    @staticmethod
    def _decode(content: Union[str, Mapping[str, Any]]) -> WorkflowRecord:
        if isinstance(content, str):
            try:
                content = json.loads(content)
            except json.JSONDecodeError as e:
                raise ParseError(f"Invalid JSON: {e}") from e

        if not isinstance(content, Mapping):
            raise ValidationError(
                "Workflow must be a JSON object",
                errors=["Workflow must be a JSON object"],
            )
        return dict(content)

    def save(
        self,
        name: str,
        content: Union[str, Mapping[str, Any]],
        source: Optional[str] = None,
    ) -> Path:
        """
        Save a workflow under name, replacing any existing file.

        Args:
            name: Logical workflow name; the file is ``<name>.json``
            content: JSON text or an already decoded record
            source: URL the workflow was cloned from, if any

        Returns:
            The path written

        Raises:
            ParseError: content is text that is not valid JSON
            ValidationError: content is not a JSON object or cannot be serialized
            WorkflowIOError: the file could not be written
        """
        path = self.path_for(name)
        record = {**self._decode(content), **self._provenance(source)}

        try:
            payload = json.dumps(record, indent=JSON_INDENT, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Workflow is not JSON-serializable: {e}") from e

        self.ensure_directory()

        # Write beside the target and rename so readers never see a partial file
        tmp_path = path.with_name(f".{path.name}.tmp")
        try:
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            if tmp_path.exists():
                tmp_path.unlink()
            raise WorkflowIOError(f"Could not write workflow {path}: {e}") from e

        self._logger.info(f"Workflow saved: {path}")
        return path

    def _read_text(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise NotFoundError(f"Workflow not found: {path}") from e
        except UnicodeDecodeError as e:
            raise ParseError(f"Invalid JSON in {path}: not UTF-8 text ({e})") from e
        except OSError as e:
            raise WorkflowIOError(f"Could not read workflow {path}: {e}") from e

    def _read_record(self, path: Path) -> Any:
        raw = self._read_text(path)
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise ParseError(f"Invalid JSON in {path}: {e}") from e

    def read(self, name: str) -> Any:
        """Read a stored workflow exactly as written, provenance included."""
        return self._read_record(self.path_for(name))

    def load(self, name: str) -> WorkflowRecord:
        """
        Load a workflow for re-import, without the store's provenance fields.

        Raises:
            NotFoundError: no file exists for name
            ParseError: the file does not contain valid JSON
        """
        path = self.path_for(name)
        record = self._read_record(path)
        if isinstance(record, dict):
            for field in self._profile.field_names:
                record.pop(field, None)

        self._logger.info(f"Workflow loaded: {path}")
        return record

    def list_workflows(self, skip_invalid: bool = False) -> List[WorkflowSummary]:
        """
        Summarize every ``*.json`` file in the store.

        Files come back in directory enumeration order. An unparsable file
        aborts the listing with ParseError unless skip_invalid is set, in
        which case it is skipped with a warning.
        """
        if not self._directory.is_dir():
            return []

        summaries = []
        for path in self._directory.glob(f"*{WORKFLOW_SUFFIX}"):
            if not path.is_file():
                continue

            try:
                record = self._read_record(path)
            except ParseError as e:
                if not skip_invalid:
                    raise
                self._logger.warning(f"Skipping unreadable workflow: {e}")
                continue

            try:
                stats = path.stat()
            except OSError as e:
                raise WorkflowIOError(f"Could not stat workflow {path}: {e}") from e

            if not isinstance(record, dict):
                record = {}

            summaries.append(WorkflowSummary(
                name=path.stem,
                filename=path.name,
                path=path,
                size=stats.st_size,
                modified=datetime.fromtimestamp(stats.st_mtime),
                node_count=count_nodes(record),
                connection_count=count_connections(record),
                exported_at=_text(record.get("exportedAt")),
                exported_by=_text(record.get("exportedBy")),
                cloned_at=_text(record.get("clonedAt")),
                cloned_by=_text(record.get("clonedBy")),
                cloned_from=_text(record.get("clonedFrom")),
            ))

        self._logger.debug(f"Listed {len(summaries)} workflows")
        return summaries

    def validate(self, record: Union[str, Mapping[str, Any]]) -> ValidationResult:
        """Check a record's shape without touching the store."""
        return validate_workflow(record)

    def validate_file(self, name: str) -> ValidationResult:
        """
        Validate the stored workflow called name.

        Malformed JSON, including bytes that are not UTF-8, is reported as an
        invalid result rather than raised.

        Raises:
            NotFoundError: no file exists for name
        """
        try:
            text = self._read_text(self.path_for(name))
        except ParseError as e:
            return ValidationResult(valid=False, errors=[str(e)])
        return validate_workflow(text)
