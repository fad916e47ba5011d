# n8n_workflows/cli/__init__.py
"""
Command-line interfaces of the n8n workflow tools.

``n8n-workflows`` manages workflows saved from n8n; ``n8n-clone`` keeps
workflows cloned from other sources.
"""
from n8n_workflows.cli.manager import app as manager_app
from n8n_workflows.cli.cloner import app as cloner_app

__all__ = ['manager_app', 'cloner_app']
