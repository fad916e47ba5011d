# n8n_workflows/workflows/errors.py
"""
Exceptions raised by the workflow store and its collaborators.
"""
from typing import List, Optional


class WorkflowError(Exception):
    """Base class for workflow store errors."""
    pass


class ParseError(WorkflowError):
    """Content is not well-formed JSON."""
    pass


class ValidationError(WorkflowError):
    """Well-formed JSON that does not have the shape of a workflow."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = list(errors or [])


class NotFoundError(WorkflowError):
    """The referenced workflow file does not exist."""
    pass


class WorkflowIOError(WorkflowError):
    """A filesystem operation on the store failed."""
    pass


class RemoteFetchError(WorkflowError):
    """A remote workflow document could not be retrieved."""
    pass
