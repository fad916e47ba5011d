# n8n_workflows/cli/cloner.py
"""
Workflow cloner commands.

Keeps workflows copied from elsewhere in the cloner's store directory
(``./cloned-workflows`` by default), points at popular workflow sources and
explains how to import a cloned workflow into a local n8n.
"""
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from n8n_workflows.cli.common import (
    bootstrap,
    console,
    err_console,
    fail,
    render_summaries,
    render_validation,
    run_async,
    version_callback,
)
from n8n_workflows.utils.logging import get_logger
from n8n_workflows.workflows import CLONER_PROFILE, WorkflowError
from n8n_workflows.workflows.remote import RemoteWorkflowCloner
from n8n_workflows.workflows.sources import (
    popular_sources,
    import_instructions,
    community_instructions,
    community_workflow_url,
    github_raw_url,
    github_instructions,
)

logger = get_logger(__name__)

app = typer.Typer(help="n8n Workflow Cloner: clone workflows into your local n8n", no_args_is_help=True)


def _print_steps(title: str, steps) -> None:
    console.print(f"[bold]{escape(title)}[/bold]")
    for number, step in enumerate(steps, 1):
        console.print(f"{number}. {step}", markup=False, highlight=False, emoji=False)


def _print_import_instructions(ctx: typer.Context, name: str) -> None:
    text = import_instructions(ctx.obj.store.path_for(name), ctx.obj.config.network.n8n_url)
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


@app.callback()
def main(
    ctx: typer.Context,
    directory: Optional[Path] = typer.Option(
        None, "--dir", "-D", help="Cloned workflow directory (default: ./cloned-workflows)"
    ),
    debug: bool = typer.Option(
        False, "--debug", "-d", help="Enable debug mode"
    ),
    version: bool = typer.Option(
        False, "--version", "-v", callback=version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """n8n Workflow Cloner"""
    bootstrap(ctx, CLONER_PROFILE, directory, debug, cloned=True)


@app.command("list")
def list_cloned_workflows(
    ctx: typer.Context,
    skip_invalid: bool = typer.Option(
        False, "--skip-invalid", help="Skip files that are not valid JSON instead of failing"
    ),
):
    """List all cloned workflows."""
    store = ctx.obj.store
    try:
        workflows = store.list_workflows(skip_invalid=skip_invalid)
    except WorkflowError as e:
        logger.error(f"Error listing cloned workflows: {e}")
        fail(str(e))

    if not workflows:
        console.print(f"No workflows cloned into {escape(str(store.directory))} yet.")
        return

    render_summaries(workflows, title="Cloned Workflows", cloned=True)


@app.command("save")
def save_workflow(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name to save the workflow under"),
):
    """Save workflow JSON read from standard input."""
    if sys.stdin.isatty():
        err_console.print("Paste your workflow JSON and press Ctrl+D (EOF)")

    content = sys.stdin.read().strip()
    try:
        path = ctx.obj.store.save(name, content)
    except WorkflowError as e:
        logger.error(f"Error saving workflow: {e}")
        fail(f"Error saving workflow: {e}")

    console.print(f"[bold green]Workflow saved:[/bold green] {escape(str(path))}")
    _print_import_instructions(ctx, name)


@app.command("sources")
def show_sources():
    """Show popular workflow sources."""
    table = Table(title="Popular Workflow Sources")
    table.add_column("Key", style="cyan")
    table.add_column("Name", style="white")
    table.add_column("URL", style="blue", overflow="fold")
    table.add_column("Description")

    for key, source in popular_sources().items():
        table.add_row(key, source.name, source.url, source.description)

    console.print(table)


@app.command("import-instructions")
def show_import_instructions(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the cloned workflow"),
):
    """Show how to import a cloned workflow into n8n."""
    try:
        _print_import_instructions(ctx, name)
    except WorkflowError as e:
        fail(str(e))


@app.command("validate")
def validate_workflow(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the cloned workflow to validate"),
):
    """Validate a cloned workflow."""
    try:
        result = ctx.obj.store.validate_file(name)
    except WorkflowError as e:
        fail(str(e))

    render_validation(result, name)
    if not result.valid:
        sys.exit(1)


@app.command("clone-url")
def clone_from_url(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="URL of a workflow JSON document"),
    name: str = typer.Argument(..., help="Name to save the workflow under"),
):
    """Download a workflow JSON document and save it."""
    state = ctx.obj
    cloner = RemoteWorkflowCloner(state.store, timeout=state.config.network.timeout)
    console.print(f"Cloning workflow from URL: {escape(url)}")
    try:
        path = run_async(cloner.clone_from_url(url, name))
    except WorkflowError as e:
        logger.error(f"Error cloning from URL: {e}")
        fail(f"Error cloning from URL: {e}")

    console.print(f"[bold green]Workflow cloned successfully:[/bold green] {escape(str(path))}")
    _print_import_instructions(ctx, name)


@app.command("community")
def clone_from_community(
    workflow_id: str = typer.Argument(..., help="Workflow id on n8n.io"),
):
    """Show how to clone a workflow from the n8n community gallery."""
    console.print(f"Workflow page: {escape(community_workflow_url(workflow_id))}")
    _print_steps(f"To clone workflow {workflow_id}:", community_instructions(workflow_id))


@app.command("github")
def clone_from_github(
    repo_url: str = typer.Argument(..., help="GitHub repository URL"),
    workflow_path: str = typer.Argument(..., help="Path of the workflow file, including the branch"),
):
    """Show how to clone a workflow file from a GitHub repository."""
    console.print(f"Raw file: {escape(github_raw_url(repo_url, workflow_path))}")
    _print_steps("To clone from GitHub:", github_instructions(repo_url, workflow_path))
