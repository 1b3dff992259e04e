"""
Allow running the MCP server as: python -m parliament_context
"""

from __future__ import annotations

from parliament_context.presentation.mcp_server.server import main

if __name__ == "__main__":
    main()
