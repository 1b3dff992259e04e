"""
MCP Resources - reference data for agents.

Resources:
- parliament://intents
- parliament://cache/stats
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from parliament_context.application.analysis import INTENT_CONFIG, SLOT_CONFIG

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from parliament_context.infrastructure.cache import ResultCache

logger = logging.getLogger(__name__)


def intent_reference() -> dict[str, Any]:
    """Searched and citable source types per priority intent."""
    reference: dict[str, Any] = {}
    for intent, config in INTENT_CONFIG.items():
        slots = SLOT_CONFIG.get(intent)
        reference[intent.value] = {
            "description": config.description,
            "search_types": sorted(t.value for t in config.search_types),
            "allowed_citations": (
                sorted(t.value for t in config.allowed_citations)
                if config.allowed_citations is not None
                else "all"
            ),
            "primary_types": sorted(t.value for t in slots.primary) if slots else [],
        }
    return reference


def register_resources(mcp: FastMCP, cache: ResultCache) -> None:
    """Register reference resources."""

    @mcp.resource("parliament://intents")
    def get_intents() -> str:
        """Source types searched and citable for each priority intent."""
        return json.dumps(intent_reference(), ensure_ascii=False, indent=2)

    @mcp.resource("parliament://cache/stats")
    def get_cache_stats() -> str:
        """Result cache statistics."""
        stats = cache.stats.to_dict()
        stats["disabled"] = cache.disabled
        return json.dumps(stats, indent=2)
