"""
Context Tool - retrieval of cited Parliament context.

Tools:
- retrieve_parliament_context: analyze, retrieve, rank, filter, hydrate and assemble
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from parliament_context.shared.exceptions import ParliamentContextError

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from parliament_context.application.pipeline import ParliamentContextPipeline

logger = logging.getLogger(__name__)

TOOL_NAMES = ["retrieve_parliament_context"]


def format_error(error: ParliamentContextError, tool_name: str) -> str:
    """Agent-readable error payload."""
    payload = error.to_dict()
    payload["tool"] = tool_name
    payload["message"] = error.to_agent_message()
    return json.dumps(payload, ensure_ascii=False)


def register_context_tools(mcp: FastMCP, pipeline: ParliamentContextPipeline) -> list[str]:
    """Register the context retrieval tool."""

    @mcp.tool()
    async def retrieve_parliament_context(query: str, limit: int | None = None) -> str:
        """
        Retrieve cited context about the Parliament of Canada.

        Covers bills, House debates (Hansard), recorded votes, MPs, parties,
        ridings, committees, elections and sessions, in English or French.

        Args:
            query: The user's question, in English or French
            limit: Maximum number of citations (1-100); the configured default when omitted

        Returns:
            JSON with language, prompt, citations [P1..Pn] and hydrated_sources
        """
        logger.info("retrieve_parliament_context: query=%r limit=%s", query[:80], limit)
        try:
            result = await pipeline.get_parliament_context(query, limit)
        except ParliamentContextError as e:
            logger.warning("retrieve_parliament_context rejected: %s", e)
            return format_error(e, "retrieve_parliament_context")
        return result.to_json()

    return list(TOOL_NAMES)
