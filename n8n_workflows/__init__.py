"""
n8n workflow tools: save, list, validate and template n8n workflow JSON files.
"""

__version__ = '0.1.0'
