"""
Tests for the directory-backed workflow store.
"""
import copy
import json
import os
import pytest
from datetime import datetime
from unittest.mock import patch

from n8n_workflows.workflows import (
    WorkflowStore,
    MANAGER_PROFILE,
    CLONER_PROFILE,
    ParseError,
    ValidationError,
    NotFoundError,
    WorkflowIOError,
)


def test_constructor_creates_directory(tmp_path):
    """The store directory, parents included, exists after construction."""
    directory = tmp_path / "a" / "b" / "workflows"
    store = WorkflowStore(directory)

    assert directory.is_dir()
    assert store.directory == directory


def test_ensure_directory_is_idempotent(tmp_path):
    """Creating an existing directory is not an error."""
    store = WorkflowStore(tmp_path / "workflows", create=False)

    assert not store.directory.exists()
    assert store.ensure_directory() is True
    assert store.ensure_directory() is False
    assert store.directory.is_dir()


def test_save_writes_pretty_json_with_provenance(manager_store, sample_workflow):
    """Saved files carry exportedAt/exportedBy and are indented JSON."""
    path = manager_store.save("slack", sample_workflow)

    assert path == manager_store.directory / "slack.json"
    text = path.read_text(encoding="utf-8")
    assert text.startswith('{\n  "name"')
    assert "Guten Morgen ☀" in text

    saved = json.loads(text)
    assert saved["exportedBy"] == "n8n-workflow-manager"
    assert saved["exportedAt"].endswith("Z")
    datetime.fromisoformat(saved["exportedAt"].replace("Z", "+00:00"))
    assert "clonedAt" not in saved


def test_save_accepts_json_text(manager_store, sample_workflow):
    """String content is parsed before saving."""
    path = manager_store.save("from-text", json.dumps(sample_workflow))

    assert json.loads(path.read_text())["nodes"] == sample_workflow["nodes"]


def test_save_does_not_mutate_content(manager_store, sample_workflow):
    """The caller's record does not gain provenance fields."""
    before = copy.deepcopy(sample_workflow)
    manager_store.save("slack", sample_workflow)
    assert sample_workflow == before


def test_save_overwrites_provenance_fields(manager_store):
    """Provenance values in the content are replaced by the store's."""
    path = manager_store.save("w", {"name": "w", "nodes": [], "exportedBy": "someone-else"})

    assert json.loads(path.read_text())["exportedBy"] == "n8n-workflow-manager"


def test_save_replaces_existing_file(manager_store):
    """Saving twice under one name keeps only the latest content."""
    manager_store.save("same", {"name": "first", "nodes": []})
    manager_store.save("same", {"name": "second", "nodes": [{}]})

    assert manager_store.load("same") == {"name": "second", "nodes": [{}]}
    assert len(list(manager_store.directory.iterdir())) == 1


def test_save_invalid_json_raises_and_writes_nothing(manager_store):
    """Malformed JSON text leaves no file behind."""
    with pytest.raises(ParseError):
        manager_store.save("broken", "{not json")

    assert not (manager_store.directory / "broken.json").exists()
    assert list(manager_store.directory.iterdir()) == []


def test_save_non_object_raises_validation_error(manager_store):
    """Arrays and scalars cannot be saved as workflows."""
    with pytest.raises(ValidationError):
        manager_store.save("list", "[1, 2, 3]")

    assert not (manager_store.directory / "list.json").exists()


@pytest.mark.parametrize("name", ["", ".", "..", "../escape", "sub/dir"])
def test_invalid_names_are_rejected(manager_store, name):
    """Names must stay inside the store directory."""
    with pytest.raises(ValidationError):
        manager_store.save(name, {"name": "x", "nodes": []})


def test_save_reports_write_failures(manager_store):
    """Filesystem errors surface as WorkflowIOError and leave no temp file."""
    with patch("n8n_workflows.workflows.store.os.replace", side_effect=PermissionError("denied")):
        with pytest.raises(WorkflowIOError):
            manager_store.save("locked", {"name": "locked", "nodes": []})

    assert list(manager_store.directory.iterdir()) == []


def test_round_trip_strips_provenance(manager_store, sample_workflow):
    """load(save(X)) == X for records without provenance keys."""
    manager_store.save("slack", sample_workflow)

    assert manager_store.load("slack") == sample_workflow


def test_read_keeps_provenance(manager_store, sample_workflow):
    """read() returns the file as written."""
    manager_store.save("slack", sample_workflow)

    assert manager_store.read("slack")["exportedBy"] == "n8n-workflow-manager"


def test_load_missing_raises_not_found(manager_store):
    """Loading an unknown name raises NotFoundError."""
    with pytest.raises(NotFoundError):
        manager_store.load("nope")


def test_load_malformed_file_raises_parse_error(manager_store, write_json):
    """A corrupt file on disk raises ParseError."""
    write_json(manager_store.directory / "corrupt.json", "{oops")

    with pytest.raises(ParseError):
        manager_store.load("corrupt")


def test_cloner_profile_records_source(cloner_store, sample_workflow):
    """The cloner flavour writes clonedAt/clonedBy/clonedFrom and strips them on load."""
    path = cloner_store.save("slack", sample_workflow, source="https://example.com/flow.json")

    saved = json.loads(path.read_text())
    assert saved["clonedBy"] == "n8n-workflow-cloner"
    assert saved["clonedFrom"] == "https://example.com/flow.json"
    assert "clonedAt" in saved
    assert "exportedAt" not in saved

    assert cloner_store.load("slack") == sample_workflow


def test_manager_profile_ignores_source(manager_store, sample_workflow):
    """The manager flavour has nowhere to record a source URL."""
    path = manager_store.save("slack", sample_workflow, source="https://example.com/flow.json")

    assert "clonedFrom" not in json.loads(path.read_text())


def test_list_returns_one_summary_per_file(manager_store):
    """list_workflows() summarizes every saved workflow."""
    for count in range(3):
        manager_store.save(f"wf{count}", {"name": f"wf{count}", "nodes": [{}] * count})

    summaries = {summary.name: summary for summary in manager_store.list_workflows()}

    assert sorted(summaries) == ["wf0", "wf1", "wf2"]
    for count in range(3):
        summary = summaries[f"wf{count}"]
        assert summary.node_count == count
        assert summary.filename == f"wf{count}.json"
        assert summary.size == os.path.getsize(summary.path)
        assert summary.exported_by == "n8n-workflow-manager"
        assert summary.exported_at is not None
        assert isinstance(summary.modified, datetime)


def test_list_ignores_other_files(manager_store, write_json):
    """Only *.json files count; nodes default to 0 when absent."""
    (manager_store.directory / "notes.txt").write_text("hello")
    write_json(manager_store.directory / "bare.json", {"name": "bare"})

    summaries = manager_store.list_workflows()

    assert [summary.name for summary in summaries] == ["bare"]
    assert summaries[0].node_count == 0
    assert summaries[0].exported_at is None


def test_list_carries_cloner_provenance(cloner_store):
    """Cloned summaries expose where the workflow came from."""
    cloner_store.save("remote", {"name": "r", "nodes": []}, source="https://example.com/r.json")

    summary = cloner_store.list_workflows()[0]
    assert summary.cloned_from == "https://example.com/r.json"
    assert summary.cloned_by == "n8n-workflow-cloner"


def test_list_aborts_on_unparsable_file(manager_store, write_json):
    """By default a corrupt file fails the whole listing."""
    manager_store.save("good", {"name": "good", "nodes": []})
    write_json(manager_store.directory / "bad.json", "{not json")

    with pytest.raises(ParseError):
        manager_store.list_workflows()


def test_list_can_skip_unparsable_files(manager_store, write_json):
    """skip_invalid=True drops corrupt files and keeps the rest."""
    manager_store.save("good", {"name": "good", "nodes": []})
    write_json(manager_store.directory / "bad.json", "{not json")

    summaries = manager_store.list_workflows(skip_invalid=True)

    assert [summary.name for summary in summaries] == ["good"]


def test_non_utf8_file_is_a_parse_error(manager_store):
    """A file that is not UTF-8 text is handled like malformed JSON."""
    manager_store.save("good", {"name": "good", "nodes": []})
    (manager_store.directory / "latin.json").write_bytes(b'{"name": "caf\xe9", "nodes": []}')

    with pytest.raises(ParseError):
        manager_store.load("latin")
    with pytest.raises(ParseError):
        manager_store.list_workflows()

    summaries = manager_store.list_workflows(skip_invalid=True)
    assert [summary.name for summary in summaries] == ["good"]

    result = manager_store.validate_file("latin")
    assert not result.valid
    assert result.errors[0].startswith("Invalid JSON")


def test_list_of_missing_directory_is_empty(tmp_path):
    """A store whose directory was never created lists nothing."""
    store = WorkflowStore(tmp_path / "absent", create=False)

    assert store.list_workflows() == []


def test_validate_file(manager_store, write_json):
    """validate_file() checks the stored document and reports bad JSON as invalid."""
    manager_store.save("good", {"name": "good", "nodes": []})
    write_json(manager_store.directory / "shape.json", {"name": "shape", "nodes": {}})
    write_json(manager_store.directory / "corrupt.json", "{oops")

    assert manager_store.validate_file("good").valid
    assert manager_store.validate_file("shape").errors == ["Nodes must be an array"]
    assert manager_store.validate_file("corrupt").errors[0].startswith("Invalid JSON")

    with pytest.raises(NotFoundError):
        manager_store.validate_file("missing")


def test_validate_delegates_to_predicate(manager_store):
    """Store.validate is the pure shape check."""
    assert manager_store.validate({"name": "a", "nodes": []}).valid
    assert not manager_store.validate({"name": "a"}).valid
    assert list(manager_store.directory.iterdir()) == []


def test_exists(manager_store):
    assert not manager_store.exists("w")
    manager_store.save("w", {"name": "w", "nodes": []})
    assert manager_store.exists("w")


def test_profiles_list_their_fields():
    assert MANAGER_PROFILE.field_names == ("exportedAt", "exportedBy")
    assert CLONER_PROFILE.field_names == ("clonedAt", "clonedBy", "clonedFrom")
