# n8n_workflows/workflows/sources.py
"""
Known places to find n8n workflows, and instructions for moving a stored
workflow into a running n8n instance.

Nothing here touches the network: the community and GitHub helpers only
build URLs and step-by-step instructions for the user to follow.
"""
from pathlib import Path
from typing import Dict, List, Union

from pydantic import BaseModel, Field

from n8n_workflows.constants import (
    COMMUNITY_WORKFLOWS_URL,
    DEFAULT_N8N_URL,
    GITHUB_RAW_HOST,
)


class WorkflowSource(BaseModel):
    """A public collection of n8n workflows."""
    name: str = Field(..., description="Display name")
    url: str = Field(..., description="Where to browse the collection")
    description: str = Field(..., description="What the collection contains")


POPULAR_SOURCES: Dict[str, WorkflowSource] = {
    "n8n-community": WorkflowSource(
        name="n8n Community Workflows",
        url=COMMUNITY_WORKFLOWS_URL,
        description="Official n8n community workflows",
    ),
    "github-n8n": WorkflowSource(
        name="n8n GitHub Examples",
        url="https://github.com/n8n-io/n8n/tree/master/packages/cli/src/workflows",
        description="Official n8n workflow examples",
    ),
    "awesome-n8n": WorkflowSource(
        name="Awesome n8n",
        url="https://github.com/agileng/awesome-n8n",
        description="Curated list of n8n resources and workflows",
    ),
    "n8n-templates": WorkflowSource(
        name="n8n Templates",
        url="https://github.com/n8n-io/n8n-templates",
        description="Template workflows for common use cases",
    ),
}


def popular_sources() -> Dict[str, WorkflowSource]:
    """Return the catalog of popular workflow sources, keyed by short id."""
    return dict(POPULAR_SOURCES)


def import_instructions(workflow_path: Union[str, Path], n8n_url: str = DEFAULT_N8N_URL) -> str:
    """Explain the ways to import a stored workflow file into n8n."""
    workflow_path = str(workflow_path)
    name = Path(workflow_path).stem
    return f"""How to import "{name}" into your n8n at {n8n_url}:

Method 1 - Import from File:
1. Open n8n at {n8n_url}
2. Click "Import from file"
3. Select: {workflow_path}
4. Click "Import"
5. Activate the workflow

Method 2 - Import from Clipboard:
1. Open: {workflow_path}
2. Copy all content (Ctrl+A, Ctrl+C)
3. Open n8n at {n8n_url}
4. Click "Import from clipboard"
5. Paste content (Ctrl+V)
6. Click "Import"
7. Activate the workflow

Method 3 - Using n8n CLI (if available):
npx n8n import:workflow --input="{workflow_path}"
"""


def community_workflow_url(workflow_id: str) -> str:
    return f"{COMMUNITY_WORKFLOWS_URL}/{workflow_id}"


def community_instructions(workflow_id: str) -> List[str]:
    """Steps for copying a community workflow by hand."""
    url = community_workflow_url(workflow_id)
    return [
        f"Go to: {url}",
        'Click "Copy to n8n" or "Download"',
        "Import the JSON into your local n8n, or save it with: n8n-clone save <name>",
    ]


def github_raw_url(repo_url: str, workflow_path: str) -> str:
    """
    Turn a GitHub repository URL and a path inside it into a raw-content URL.

    >>> github_raw_url("https://github.com/acme/flows", "main/hello.json")
    'https://raw.githubusercontent.com/acme/flows/main/hello.json'
    """
    repo_part = repo_url.strip().rstrip("/")
    for prefix in ("https://github.com", "http://github.com", "github.com"):
        if repo_part.startswith(prefix):
            repo_part = repo_part[len(prefix):]
            break
    return f"{GITHUB_RAW_HOST}/{repo_part.strip('/')}/{workflow_path.lstrip('/')}"


def github_instructions(repo_url: str, workflow_path: str) -> List[str]:
    """Steps for copying a workflow file out of a GitHub repository."""
    raw_url = github_raw_url(repo_url, workflow_path)
    return [
        f"Go to: {raw_url}",
        "Copy the raw JSON content",
        "Save it with: n8n-clone save <name>",
        f"Or fetch it directly with: n8n-clone clone-url {raw_url} <name>",
    ]
