"""
HTTP API for non-MCP callers.

Provides REST endpoints over the same retrieval pipeline as the MCP tool.
"""

from .server import create_api_server, run_api_server

__all__ = ["create_api_server", "run_api_server"]
