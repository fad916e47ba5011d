# n8n_workflows/workflows/remote.py
"""
Cloning workflows from a URL into a workflow store.
"""
import json
from pathlib import Path
from typing import Optional

import httpx

from n8n_workflows.constants import REQUEST_TIMEOUT
from n8n_workflows.utils.logging import get_logger
from n8n_workflows.workflows.errors import ParseError, RemoteFetchError, ValidationError
from n8n_workflows.workflows.store import WorkflowStore
from n8n_workflows.workflows.validation import validate_workflow

logger = get_logger(__name__)


class RemoteWorkflowCloner:
    """
    Fetches a workflow JSON document over HTTP and saves it with its source URL.

    A single attempt is made per call; failures are raised, not retried.
    """

    def __init__(
        self,
        store: WorkflowStore,
        timeout: float = REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            store: Store that receives cloned workflows
            timeout: Request timeout in seconds
            transport: Optional httpx transport (for testing)
        """
        self._store = store
        self._timeout = timeout
        self._transport = transport
        self._logger = logger

    async def fetch(self, url: str) -> str:
        """
        Download the document at url.

        Raises:
            RemoteFetchError: network failure or a non-2xx response
        """
        self._logger.info(f"Fetching workflow from: {url}")
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                response = await client.get(url, headers={"Accept": "application/json"})
                response.raise_for_status()
                return response.text
        except httpx.HTTPStatusError as e:
            raise RemoteFetchError(
                f"Fetching {url} failed with HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise RemoteFetchError(f"Fetching {url} failed: {e}") from e

    async def clone_from_url(self, url: str, name: str) -> Path:
        """
        Fetch, validate and save the workflow at url under name.

        Returns:
            Path of the saved workflow file

        Raises:
            RemoteFetchError: the document could not be downloaded
            ParseError: the response body is not JSON
            ValidationError: the document is not a valid workflow
        """
        body = await self.fetch(url)
        try:
            record = json.loads(body)
        except json.JSONDecodeError as e:
            raise ParseError(f"Response from {url} is not valid JSON: {e}") from e

        result = validate_workflow(record)
        if not result.valid:
            raise ValidationError(
                f"Workflow at {url} is invalid: {'; '.join(result.errors)}",
                errors=result.errors,
            )

        path = self._store.save(name, record, source=url)
        self._logger.info(f"Workflow cloned successfully: {path}")
        return path
