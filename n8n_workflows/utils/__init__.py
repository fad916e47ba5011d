"""
Utility helpers for the n8n workflow tools.
"""
