# n8n_workflows/cli/common.py
"""
Pieces shared by the workflow manager and workflow cloner CLIs.
"""
import asyncio
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from n8n_workflows import __version__
from n8n_workflows.config import AppConfig, config_manager
from n8n_workflows.utils.logging import setup_logging, get_logger
from n8n_workflows.workflows import (
    ProvenanceProfile,
    ValidationResult,
    WorkflowStore,
    WorkflowSummary,
    WorkflowError,
)
from n8n_workflows.workflows.validation import (
    count_nodes,
    count_connections,
    count_connection_edges,
)

logger = get_logger(__name__)
console = Console()
err_console = Console(stderr=True)


@dataclass
class CliState:
    """Objects a command needs, built once by the app callback."""
    config: AppConfig
    store: WorkflowStore


def run_async(coro):
    """Run a coroutine to completion from a synchronous command."""
    return asyncio.run(coro)


def version_callback(value: bool):
    """Display version information and exit."""
    if value:
        console.print(f"n8n workflow tools version: {__version__}")
        sys.exit(0)


def bootstrap(
    ctx: typer.Context,
    profile: ProvenanceProfile,
    directory: Optional[Path],
    debug: bool,
    cloned: bool = False,
) -> CliState:
    """
    Load configuration, configure logging and open the store for a command.

    Args:
        ctx: Typer context; the state is stored on ctx.obj
        profile: Provenance profile of the calling tool
        directory: Store directory given on the command line, if any
        debug: Whether --debug was passed
        cloned: Use the cloner's configured directory instead of the manager's
    """
    config = config_manager.load_config()
    debug = debug or config.debug
    setup_logging(
        debug=debug,
        log_dir=config_manager.log_dir if config.logging.file_enabled else None,
    )

    if directory is None:
        directory = config.store.cloned_dir if cloned else config.store.workflows_dir

    try:
        store = WorkflowStore(directory, profile=profile)
    except WorkflowError as e:
        fail(str(e))

    state = CliState(config=config, store=store)
    ctx.obj = state
    return state


def fail(message: str, code: int = 1):
    """Report an error on stderr and exit with a non-zero status."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    sys.exit(code)


def print_json(record: Any) -> None:
    """Print a record as indented JSON without wrapping or highlighting."""
    console.print(
        json.dumps(record, indent=2, ensure_ascii=False),
        markup=False,
        highlight=False,
        emoji=False,
        soft_wrap=True,
    )


def render_summaries(summaries: Iterable[WorkflowSummary], title: str, cloned: bool = False) -> None:
    """Print a table of stored workflows."""
    table = Table(title=title)
    table.add_column("Name", style="cyan")
    table.add_column("File", style="white")
    table.add_column("Nodes", style="magenta", justify="right")
    table.add_column("Size (KB)", justify="right")
    table.add_column("Modified", style="green")
    if cloned:
        table.add_column("Cloned", style="blue")
        table.add_column("Source", style="blue")
    else:
        table.add_column("Exported", style="blue")

    for summary in summaries:
        row = [
            summary.name,
            summary.filename,
            str(summary.node_count),
            f"{summary.size_kb:.2f}",
            summary.modified.strftime("%Y-%m-%d %H:%M"),
        ]
        if cloned:
            row.extend([summary.cloned_at or "", summary.cloned_from or ""])
        else:
            row.append(summary.exported_at or "")
        table.add_row(*(escape(value) for value in row))

    console.print(table)


def render_record_overview(record: Any, path: Path) -> None:
    """Print name and node/connection counts of a loaded record."""
    record = record if isinstance(record, dict) else {}
    console.print(Panel(
        f"Name: {escape(str(record.get('name', '')))}\n"
        f"Nodes: {count_nodes(record)}\n"
        f"Connections: {count_connections(record)} ({count_connection_edges(record)} links)",
        title=escape(str(path)),
        expand=False,
    ))


def render_validation(result: ValidationResult, name: str) -> None:
    """Print the outcome of validating the workflow called name."""
    if result.valid:
        console.print(f"[bold green]Workflow '{escape(name)}' is valid.[/bold green]")
        console.print(f"Name: {result.name}", markup=False)
        console.print(f"Nodes: {result.node_count}")
        console.print(f"Connections: {result.connection_count}")
        return

    err_console.print(f"[bold red]Workflow '{escape(name)}' is invalid:[/bold red]")
    for error in result.errors:
        err_console.print(f"  - {error}", markup=False)
