"""
Parliament Context MCP Server

Usage as standalone server:
    python -m parliament_context.presentation.mcp_server

Or in mcp.json:
    {
        "servers": {
            "parliament-context": {
                "type": "stdio",
                "command": "python",
                "args": ["-m", "parliament_context"]
            }
        }
    }

Usage for integration:
    from parliament_context.presentation.mcp_server import register_context_tools

    register_context_tools(your_mcp_server, pipeline)
"""

from __future__ import annotations

from .server import create_server, get_container, main
from .tools import register_context_tools

__all__ = ["create_server", "get_container", "main", "register_context_tools"]
