# tests/conftest.py
"""
Common test fixtures for the n8n workflow tools.
"""
import json
import pytest
from pathlib import Path

from n8n_workflows.config import ConfigManager
from n8n_workflows.workflows import WorkflowStore, MANAGER_PROFILE, CLONER_PROFILE


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep every test away from the user's config directory and environment."""
    for var in ("N8N_WORKFLOWS_DIR", "N8N_CLONED_DIR", "N8N_URL", "N8N_WORKFLOWS_DEBUG"):
        monkeypatch.delenv(var, raising=False)

    manager = ConfigManager(config_dir=tmp_path / "config")
    monkeypatch.setattr("n8n_workflows.cli.common.config_manager", manager)
    return manager


@pytest.fixture
def workflows_dir(tmp_path):
    """Directory for the workflow manager's store (not created yet)."""
    return tmp_path / "workflows"


@pytest.fixture
def cloned_dir(tmp_path):
    """Directory for the workflow cloner's store (not created yet)."""
    return tmp_path / "cloned-workflows"


@pytest.fixture
def manager_store(workflows_dir):
    """A store with the workflow manager's provenance fields."""
    return WorkflowStore(workflows_dir, profile=MANAGER_PROFILE)


@pytest.fixture
def cloner_store(cloned_dir):
    """A store with the workflow cloner's provenance fields."""
    return WorkflowStore(cloned_dir, profile=CLONER_PROFILE)


@pytest.fixture
def sample_workflow():
    """A small but realistic n8n workflow."""
    return {
        "name": "Slack notifier",
        "nodes": [
            {
                "id": "cron",
                "name": "Every Morning",
                "type": "n8n-nodes-base.cron",
                "typeVersion": 1,
                "position": [240, 300],
                "parameters": {"triggerTimes": {"item": [{"hour": 9}]}},
            },
            {
                "id": "slack",
                "name": "Slack",
                "type": "n8n-nodes-base.slack",
                "typeVersion": 1,
                "position": [460, 300],
                "parameters": {"channel": "#general", "text": "Guten Morgen ☀"},
            },
        ],
        "connections": {
            "Every Morning": {"main": [[{"node": "Slack", "type": "main", "index": 0}]]},
        },
        "settings": {},
        "active": False,
    }


@pytest.fixture
def write_json():
    """Write data as JSON to a path, creating parent directories."""
    def _write(path: Path, data) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(data if isinstance(data, str) else json.dumps(data, indent=2), encoding="utf-8")
        return path
    return _write
