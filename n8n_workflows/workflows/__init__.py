# n8n_workflows/workflows/__init__.py
"""
Workflow storage for the n8n workflow tools.

This package saves, loads, lists and validates n8n workflow JSON files kept
in a local directory, and builds new workflows from canned templates.
"""

from .errors import (
    WorkflowError,
    ParseError,
    ValidationError,
    NotFoundError,
    WorkflowIOError,
    RemoteFetchError,
)
from .models import (
    ProvenanceProfile,
    MANAGER_PROFILE,
    CLONER_PROFILE,
    WorkflowSummary,
    ValidationResult,
)
from .store import WorkflowStore
from .templates import TemplateFactory, TemplateKind
from .validation import validate_workflow

__all__ = [
    'WorkflowError', 'ParseError', 'ValidationError', 'NotFoundError',
    'WorkflowIOError', 'RemoteFetchError',
    'ProvenanceProfile', 'MANAGER_PROFILE', 'CLONER_PROFILE',
    'WorkflowSummary', 'ValidationResult',
    'WorkflowStore', 'TemplateFactory', 'TemplateKind', 'validate_workflow',
]
