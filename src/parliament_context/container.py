"""
Application DI Container (dependency-injector).

Centralizes service creation and lifecycle management.

Usage::

    from parliament_context.container import ApplicationContainer

    container = ApplicationContainer()
    container.config.from_dict({
        "parliament_api_url": "https://parliament-data.example.ca/api/v1",
        "parliament_api_key": None,
        "cohere_api_key": None,
    })

    pipeline = container.pipeline()

    # In tests, override any provider:
    container.search_backend.override(providers.Object(fake_backend))
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

from dependency_injector import containers, providers

from parliament_context.shared.settings import PipelineConfig

logger = logging.getLogger(__name__)


# =============================================================================
# Collaborators
# =============================================================================


def _create_parliament_client(base_url: str | None, api_key: str | None) -> object:
    """Lazy factory for ParliamentAPIClient (avoids top-level import)."""
    from parliament_context.infrastructure.sources.parliament_api import (
        DEFAULT_BASE_URL,
        ParliamentAPIClient,
    )

    return ParliamentAPIClient(base_url=base_url or DEFAULT_BASE_URL, api_key=api_key or None)


def _same(client: object) -> object:
    """One client behind several ports, each overridable on its own."""
    return client


def _create_reranker(cohere_api_key: str | None, cache_store: Any, config: PipelineConfig) -> object:
    """Cohere when a key is configured, otherwise the local lexical reranker."""
    if cohere_api_key:
        from parliament_context.infrastructure.sources import CohereReranker

        logger.info("Using Cohere reranker")
        return CohereReranker(
            api_key=cohere_api_key,
            cache=None if config.cache_disabled else cache_store,
        )

    from parliament_context.application.retrieval import LexicalReranker

    return LexicalReranker()


def _create_classifier() -> object:
    from parliament_context.application.analysis import HeuristicQueryClassifier

    return HeuristicQueryClassifier()


def _create_cache_store(config: PipelineConfig) -> object:
    from parliament_context.infrastructure.cache import InMemoryCacheStore

    return InMemoryCacheStore(max_size=config.cache_max_entries)


# =============================================================================
# Pipeline stages
# =============================================================================


def _create_result_cache(store: Any, config: PipelineConfig) -> object:
    from parliament_context.infrastructure.cache import ResultCache

    return ResultCache(
        store,
        ttl_seconds=config.cache_ttl_seconds,
        disabled=config.cache_disabled,
        key_version=config.cache_key_version,
    )


def _create_analyzer(classifier: Any, config: PipelineConfig) -> object:
    from parliament_context.application.analysis import QueryAnalyzer

    return QueryAnalyzer(classifier=classifier, max_reformulations=config.max_reformulations)


def _create_hydrator(store: Any) -> object:
    from parliament_context.application.hydration import Hydrator

    return Hydrator(store)


def _create_enumeration_handler(store: Any, hydrator: Any) -> object:
    from parliament_context.application.enumeration import EnumerationHandler

    return EnumerationHandler(store, hydrator=hydrator)


def _create_searcher(backend: Any) -> object:
    from parliament_context.application.retrieval import MultiQuerySearcher

    return MultiQuerySearcher(backend)


def _create_ranking(reranker: Any, config: PipelineConfig) -> object:
    from parliament_context.application.retrieval import RankingStage

    return RankingStage(
        reranker,
        pool_max=config.rerank_pool_max,
        min_rerank_score=config.min_rerank_score,
        diversity_min=config.source_diversity_min,
    )


def _create_citation_filter() -> object:
    from parliament_context.application.retrieval import IntentCitationFilter

    return IntentCitationFilter()


def _create_assembler() -> object:
    from parliament_context.application.context import ContextAssembler

    return ContextAssembler()


def _create_pipeline(**stages: Any) -> object:
    from parliament_context.application.pipeline import ParliamentContextPipeline

    return ParliamentContextPipeline(**stages)


class ApplicationContainer(containers.DeclarativeContainer):
    """Central DI container for the Parliament context service.

    Collaborators (``search_backend``, ``structured_store``, ``cache_store``,
    ``reranker``, ``classifier``) can be overridden independently; the
    pipeline stages are assembled from them.
    """

    config = providers.Configuration()

    pipeline_config = providers.Singleton(PipelineConfig.from_env)

    parliament_client = providers.Singleton(
        _create_parliament_client,
        base_url=config.parliament_api_url,
        api_key=config.parliament_api_key,
    )
    search_backend = providers.Singleton(_same, parliament_client)
    structured_store = providers.Singleton(_same, parliament_client)

    cache_store = providers.Singleton(_create_cache_store, config=pipeline_config)
    reranker = providers.Singleton(
        _create_reranker,
        cohere_api_key=config.cohere_api_key,
        cache_store=cache_store,
        config=pipeline_config,
    )
    classifier = providers.Singleton(_create_classifier)

    result_cache = providers.Singleton(_create_result_cache, store=cache_store, config=pipeline_config)
    analyzer = providers.Singleton(_create_analyzer, classifier=classifier, config=pipeline_config)
    hydrator = providers.Singleton(_create_hydrator, store=structured_store)
    enumeration_handler = providers.Singleton(
        _create_enumeration_handler, store=structured_store, hydrator=hydrator
    )
    searcher = providers.Singleton(_create_searcher, backend=search_backend)
    ranking = providers.Singleton(_create_ranking, reranker=reranker, config=pipeline_config)
    citation_filter = providers.Singleton(_create_citation_filter)
    assembler = providers.Singleton(_create_assembler)

    pipeline = providers.Singleton(
        _create_pipeline,
        config=pipeline_config,
        analyzer=analyzer,
        enumeration_handler=enumeration_handler,
        searcher=searcher,
        ranking=ranking,
        citation_filter=citation_filter,
        hydrator=hydrator,
        assembler=assembler,
        cache=result_cache,
    )


def config_from_env(environ: Mapping[str, str] | None = None) -> dict[str, str | None]:
    """Container configuration from PARLIAMENT_API_URL, PARLIAMENT_API_KEY, COHERE_API_KEY."""
    env = os.environ if environ is None else environ
    return {
        "parliament_api_url": env.get("PARLIAMENT_API_URL") or None,
        "parliament_api_key": env.get("PARLIAMENT_API_KEY") or None,
        "cohere_api_key": env.get("COHERE_API_KEY") or None,
    }


def create_container(environ: Mapping[str, str] | None = None) -> ApplicationContainer:
    """Container configured from the environment, pipeline config included."""
    container = ApplicationContainer()
    container.config.from_dict(config_from_env(environ))
    if environ is not None:
        container.pipeline_config.override(providers.Object(PipelineConfig.from_env(environ)))
    return container


async def close_clients(container: ApplicationContainer) -> None:
    """Close the HTTP clients behind the pipeline's collaborators."""
    from parliament_context.infrastructure.sources import BaseAPIClient

    seen: set[int] = set()
    for provider in (container.search_backend, container.structured_store, container.reranker):
        client = provider()
        if isinstance(client, BaseAPIClient) and id(client) not in seen:
            seen.add(id(client))
            await client.close()


__all__ = ["ApplicationContainer", "close_clients", "config_from_env", "create_container"]
