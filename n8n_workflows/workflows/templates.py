# n8n_workflows/workflows/templates.py
"""
Canned n8n workflow skeletons used to seed new workflows.
"""
import copy
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Union

from n8n_workflows.utils.logging import get_logger
from n8n_workflows.workflows.errors import ValidationError
from n8n_workflows.workflows.models import WorkflowRecord, utc_timestamp

logger = get_logger(__name__)


class TemplateKind(str, Enum):
    """Available workflow templates."""
    BASIC = "basic"
    AI = "ai"


def _connect(target: str) -> Dict[str, Any]:
    return {"main": [[{"node": target, "type": "main", "index": 0}]]}


_WEBHOOK_RESPONSE = "Webhook Response"

_TEMPLATES: Dict[TemplateKind, Dict[str, Any]] = {
    TemplateKind.BASIC: {
        "title": "Basic Workflow",
        "nodes": [
            {
                "parameters": {
                    "httpMethod": "GET",
                    "path": "webhook",
                    "responseMode": "responseNode",
                },
                "id": "webhook-trigger",
                "name": "Webhook Trigger",
                "type": "n8n-nodes-base.webhook",
                "typeVersion": 1,
                "position": [240, 300],
            },
            {
                "parameters": {
                    "respondWith": "json",
                    "responseBody": '={{ { "message": "Hello from n8n!" } }}',
                },
                "id": "webhook-response",
                "name": _WEBHOOK_RESPONSE,
                "type": "n8n-nodes-base.respondToWebhook",
                "typeVersion": 1,
                "position": [460, 300],
            },
        ],
        "connections": {
            "Webhook Trigger": _connect(_WEBHOOK_RESPONSE),
        },
    },
    TemplateKind.AI: {
        "title": "AI Workflow",
        "nodes": [
            {
                "parameters": {
                    "httpMethod": "POST",
                    "path": "ai-webhook",
                    "responseMode": "responseNode",
                },
                "id": "webhook-trigger",
                "name": "Webhook Trigger",
                "type": "n8n-nodes-base.webhook",
                "typeVersion": 1,
                "position": [240, 300],
            },
            {
                "parameters": {
                    "model": "gpt-3.5-turbo",
                    "messages": {
                        "values": [
                            {"role": "user", "content": "={{ $json.body.prompt }}"},
                        ]
                    },
                },
                "id": "openai-node",
                "name": "OpenAI",
                "type": "n8n-nodes-base.openAi",
                "typeVersion": 1,
                "position": [460, 300],
            },
            {
                "parameters": {
                    "respondWith": "json",
                    "responseBody": '={{ { "result": $json.choices[0].message.content } }}',
                },
                "id": "webhook-response",
                "name": _WEBHOOK_RESPONSE,
                "type": "n8n-nodes-base.respondToWebhook",
                "typeVersion": 1,
                "position": [680, 300],
            },
        ],
        "connections": {
            "Webhook Trigger": _connect("OpenAI"),
            "OpenAI": _connect(_WEBHOOK_RESPONSE),
        },
    },
}


class TemplateFactory:
    """Builds workflow records from the canned templates."""

    default_kind = TemplateKind.BASIC

    def __init__(self, strict: bool = False):
        """
        Args:
            strict: Raise ValidationError for unknown kinds instead of
                falling back to the basic template
        """
        self._strict = strict
        self._logger = logger

    @staticmethod
    def kinds() -> list:
        return [kind.value for kind in TemplateKind]

    def resolve_kind(self, kind: Union[str, TemplateKind, None]) -> TemplateKind:
        """Map a kind key onto a template, applying the basic fallback."""
        if kind is None:
            return self.default_kind
        try:
            return TemplateKind(kind)
        except ValueError:
            if self._strict:
                raise ValidationError(
                    f"Unknown template kind: {kind}",
                    errors=[f"Template kind must be one of: {', '.join(self.kinds())}"],
                )
            self._logger.warning(f"Unknown template kind '{kind}', using '{self.default_kind.value}'")
            return self.default_kind

    def create(self, name: str, kind: Union[str, TemplateKind, None] = TemplateKind.BASIC) -> WorkflowRecord:
        """
        Build a fresh workflow record from a template.

        Args:
            name: Base name; the record is titled "<name> - <template title>"
            kind: Template kind key

        Returns:
            A new record carrying a createdAt timestamp
        """
        template = _TEMPLATES[self.resolve_kind(kind)]
        return {
            "name": f"{name} - {template['title']}",
            "nodes": copy.deepcopy(template["nodes"]),
            "connections": copy.deepcopy(template["connections"]),
            "createdAt": utc_timestamp(),
        }

    def create_and_save(self, store, name: str, kind: Union[str, TemplateKind, None] = TemplateKind.BASIC) -> Path:
        """Build a template record and save it in store under name."""
        record = self.create(name, kind)
        self._logger.info(f"Creating workflow '{name}' from template")
        return store.save(name, record)
