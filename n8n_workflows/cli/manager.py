# n8n_workflows/cli/manager.py
"""
Workflow manager commands.

Saves, lists, loads, validates and templates n8n workflows kept in the
workflow manager's store directory (``./workflows`` by default).
"""
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from n8n_workflows.cli.common import (
    bootstrap,
    console,
    err_console,
    fail,
    print_json,
    render_record_overview,
    render_summaries,
    render_validation,
    version_callback,
)
from n8n_workflows.utils.logging import get_logger
from n8n_workflows.workflows import MANAGER_PROFILE, TemplateFactory, WorkflowError
from n8n_workflows.workflows.validation import count_nodes, count_connection_edges

logger = get_logger(__name__)

app = typer.Typer(help="n8n Workflow Manager: save, list and template workflow JSON files", no_args_is_help=True)


@app.callback()
def main(
    ctx: typer.Context,
    directory: Optional[Path] = typer.Option(
        None, "--dir", "-D", help="Workflow store directory (default: ./workflows)"
    ),
    debug: bool = typer.Option(
        False, "--debug", "-d", help="Enable debug mode"
    ),
    version: bool = typer.Option(
        False, "--version", "-v", callback=version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """n8n Workflow Manager"""
    bootstrap(ctx, MANAGER_PROFILE, directory, debug)


@app.command("list")
def list_workflows(
    ctx: typer.Context,
    skip_invalid: bool = typer.Option(
        False, "--skip-invalid", help="Skip files that are not valid JSON instead of failing"
    ),
):
    """List all saved workflows."""
    store = ctx.obj.store
    try:
        workflows = store.list_workflows(skip_invalid=skip_invalid)
    except WorkflowError as e:
        logger.error(f"Error listing workflows: {e}")
        fail(str(e))

    if not workflows:
        console.print(f"No workflows saved in {escape(str(store.directory))} yet.")
        return

    render_summaries(workflows, title="Saved Workflows")


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


@app.command("load")
def load_workflow(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the workflow to load"),
    raw: bool = typer.Option(
        False, "--raw", help="Print only the workflow JSON"
    ),
):
    """Load a workflow and print it ready for import into n8n."""
    store = ctx.obj.store
    try:
        workflow = store.load(name)
    except WorkflowError as e:
        logger.error(f"Error loading workflow: {e}")
        fail(f"Error loading workflow: {e}")

    if not raw:
        render_record_overview(workflow, store.path_for(name))
    print_json(workflow)


@app.command("template")
def create_template(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name for the new workflow"),
    kind: str = typer.Argument("basic", help="Template kind: basic or ai"),
    strict: bool = typer.Option(
        False, "--strict", help="Fail on unknown template kinds instead of using 'basic'"
    ),
):
    """Create a workflow from a template."""
    store = ctx.obj.store
    factory = TemplateFactory(strict=strict)
    try:
        path = factory.create_and_save(store, name, kind)
        record = store.read(name)
    except WorkflowError as e:
        logger.error(f"Error creating template: {e}")
        fail(str(e))

    console.print(f"[bold green]Workflow saved:[/bold green] {escape(str(path))}")
    console.print(f"Nodes: {count_nodes(record)}, links: {count_connection_edges(record)}")


@app.command("validate")
def validate_workflow(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the workflow to validate"),
):
    """Validate a saved workflow's JSON."""
    try:
        result = ctx.obj.store.validate_file(name)
    except WorkflowError as e:
        fail(str(e))

    render_validation(result, name)
    if not result.valid:
        sys.exit(1)
