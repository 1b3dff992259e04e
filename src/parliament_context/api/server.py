"""
HTTP API Server for the Parliament context pipeline.

Exposes the same retrieval contract as the MCP tool to non-MCP callers,
plus health and cache statistics.

Endpoints:
    GET  /health
    POST /api/context
    GET  /api/cache/stats
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, StrictInt, StrictStr

from parliament_context.container import ApplicationContainer, close_clients, create_container
from parliament_context.shared.exceptions import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_API_PORT = 8766


# Pydantic models for API requests/responses
class ContextRequest(BaseModel):
    """Body of POST /api/context."""
    query: StrictStr
    limit: StrictInt | None = Field(default=None, description="Clamped into [1, max_limit]")


class ContextResponse(BaseModel):
    """Assembled context, citations and hydrated sources."""
    language: str
    prompt: str
    citations: list[dict[str, Any]]
    hydrated_sources: list[dict[str, Any]]


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    cache_enabled: bool
    max_limit: int


class CacheStatsResponse(BaseModel):
    hits: int
    misses: int
    writes: int
    errors: int
    hit_rate: float
    disabled: bool


def _pipeline(request: Request) -> Any:
    container: ApplicationContainer = request.app.state.container
    return container.pipeline()


def create_api_server(container: ApplicationContainer | None = None) -> FastAPI:
    """
    Create the FastAPI server.

    Args:
        container: Pre-built container; a new one is configured from the
                   environment when omitted.

    Returns:
        Configured FastAPI instance.
    """
    if container is None:
        container = create_container()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("HTTP API server initialized")
        yield
        await close_clients(container)
        logger.info("HTTP API server shutting down")

    app = FastAPI(
        title="Parliament Context API",
        description="Grounded, cited context about the Parliament of Canada (EN/FR).",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", response_model=HealthResponse)
    async def health_check(request: Request):
        """Health check endpoint."""
        pipeline = _pipeline(request)
        return HealthResponse(
            status="healthy",
            cache_enabled=not pipeline.cache.disabled,
            max_limit=pipeline.config.max_limit,
        )

    @app.post(
        "/api/context",
        response_model=ContextResponse,
        responses={422: {"description": "Invalid query or limit"}},
    )
    async def retrieve_context(body: ContextRequest, request: Request):
        """
        Retrieve cited Parliament context for a question.

        The response never fails because a collaborator is down; degraded
        results simply carry fewer citations or hydrated sources.
        """
        try:
            result = await _pipeline(request).get_parliament_context(body.query, body.limit)
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=e.to_dict()) from e
        return ContextResponse(**result.to_dict())

    @app.get("/api/cache/stats", response_model=CacheStatsResponse)
    async def cache_stats(request: Request):
        """Result cache statistics."""
        cache = _pipeline(request).cache
        return CacheStatsResponse(**cache.stats.to_dict(), disabled=cache.disabled)

    return app


def run_api_server(host: str = "127.0.0.1", port: int = DEFAULT_API_PORT) -> None:
    """
    Run the HTTP API server.

    Args:
        host: Host to bind to (default: 127.0.0.1 for local only)
        port: Port to bind to
    """
    import uvicorn

    logger.info(f"Starting HTTP API server on {host}:{port}")
    uvicorn.run(create_api_server(), host=host, port=port, log_level="info")


def main() -> None:
    import argparse

    parser = argparse.ArgumentParser(description="Parliament Context HTTP API Server")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("PARLIAMENT_HTTP_API_PORT", DEFAULT_API_PORT)),
        help="Port to bind to",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    run_api_server(host=args.host, port=args.port)


if __name__ == "__main__":
    main()
