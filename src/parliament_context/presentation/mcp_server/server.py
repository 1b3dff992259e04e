"""
Parliament Context MCP Server

Model Context Protocol server exposing the retrieval pipeline as one tool.

Architecture:
- instructions.py: SERVER_INSTRUCTIONS for AI agents
- tools.py: the retrieve_parliament_context tool
- resources.py: intent and cache reference resources
- container: DI container (dependency-injector) for service lifecycle
"""

from __future__ import annotations

import logging
import os
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import TYPE_CHECKING, Any, cast

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings

from parliament_context.container import ApplicationContainer, close_clients, create_container

from .instructions import SERVER_INSTRUCTIONS
from .resources import register_resources
from .tools import register_context_tools

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable, Mapping

    from parliament_context.application.pipeline import ParliamentContextPipeline

logger = logging.getLogger(__name__)

DEFAULT_SERVER_NAME = "parliament-context"

# ── Module-level DI container ──────────────────────────────────────────────
_container: ApplicationContainer | None = None


def get_container() -> ApplicationContainer:
    """Get the application DI container.

    Raises:
        RuntimeError: If ``create_server()`` has not been called yet.
    """
    if _container is None:
        msg = "Container not initialized. Call create_server() first."
        raise RuntimeError(msg)
    return _container


def _make_lifespan(
    container: ApplicationContainer,
) -> Callable[[FastMCP[Any]], AbstractAsyncContextManager[ApplicationContainer]]:
    """Create a FastMCP lifespan handler bound to *container*."""

    @asynccontextmanager
    async def _lifespan(server: FastMCP[Any]) -> AsyncIterator[ApplicationContainer]:
        """Application lifecycle: startup → yield → shutdown."""
        logger.info("Lifecycle: startup, resources ready")
        try:
            yield container
        finally:
            await close_clients(container)
            logger.info("Lifecycle: shutdown, HTTP clients closed")

    return _lifespan


def create_server(
    name: str = DEFAULT_SERVER_NAME,
    container: ApplicationContainer | None = None,
    environ: Mapping[str, str] | None = None,
    disable_security: bool = False,
    json_response: bool = False,
    stateless_http: bool = False,
) -> FastMCP:
    """
    Create and configure the Parliament Context MCP server.

    Args:
        name: Server name.
        container: Pre-built container (tests override collaborators on it).
        environ: Environment used to configure a new container.
        disable_security: Disable DNS rebinding protection (needed for remote access).
        json_response: Use JSON responses instead of SSE.
        stateless_http: Use stateless HTTP mode.

    Returns:
        Configured FastMCP server instance.
    """
    global _container
    logger.info("Initializing Parliament Context MCP Server...")

    _container = container if container is not None else create_container(environ)
    pipeline = cast("ParliamentContextPipeline", _container.pipeline())
    logger.info(
        "Pipeline ready (cache %s, max_limit=%d)",
        "disabled" if pipeline.config.cache_disabled else "enabled",
        pipeline.config.max_limit,
    )

    # ── Transport security ──────────────────────────────────────────────
    if disable_security:
        transport_security = TransportSecuritySettings(enable_dns_rebinding_protection=False)
        logger.info("DNS rebinding protection disabled for remote access")
    else:
        transport_security = None

    mcp = FastMCP(
        name,
        instructions=SERVER_INSTRUCTIONS,
        transport_security=transport_security,
        json_response=json_response,
        stateless_http=stateless_http,
        lifespan=_make_lifespan(_container),
    )

    tools = register_context_tools(mcp, pipeline)
    register_resources(mcp, pipeline.cache)
    logger.info("Tool registration complete: %s", tools)

    return mcp


def main():
    """Run the MCP server."""

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    transport = os.environ.get("PARLIAMENT_MCP_TRANSPORT", "stdio").strip() or "stdio"
    server = create_server()

    # Blocks until the client disconnects
    server.run(transport=transport)  # type: ignore[arg-type]


if __name__ == "__main__":
    main()
