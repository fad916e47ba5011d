"""
Constants for the n8n workflow tools.
"""
from pathlib import Path
import os

# Application information
APP_NAME = "n8n-workflow-tools"
APP_DESCRIPTION = "Save, list, validate and template n8n workflow JSON files"

# Paths
CONFIG_DIR = Path(os.path.expanduser(os.getenv("N8N_WORKFLOWS_HOME", "~/.config/n8n-workflows")))
CONFIG_FILE_NAME = "config.toml"
LOG_DIR_NAME = "logs"

# Store defaults
DEFAULT_WORKFLOWS_DIR = Path("./workflows")
DEFAULT_CLONED_DIR = Path("./cloned-workflows")
WORKFLOW_SUFFIX = ".json"
JSON_INDENT = 2

# Tool identities written into saved records
MANAGER_TOOL_ID = "n8n-workflow-manager"
CLONER_TOOL_ID = "n8n-workflow-cloner"

# n8n
DEFAULT_N8N_URL = "http://localhost:5678"
COMMUNITY_WORKFLOWS_URL = "https://n8n.io/workflows"
GITHUB_RAW_HOST = "https://raw.githubusercontent.com"

# Logging
LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {extra[logger_name]} | {message}"
LOG_ROTATION = "10 MB"
LOG_RETENTION = "10 days"

# Network
REQUEST_TIMEOUT = 30  # seconds

# Validation
REQUIRED_FIELDS = ("name", "nodes")
