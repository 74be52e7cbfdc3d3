"""
MCP server exposing contact search as the search_contacts tool
"""

from .server import create_server, run, main

__all__ = ['create_server', 'run', 'main']
