# n8n_workflows/__main__.py
"""
Entry point for ``python -m n8n_workflows``.
"""
from n8n_workflows.cli import manager_app

if __name__ == "__main__":
    manager_app()
