"""
ParliamentContextPipeline - retrieval and context assembly for one query.

Flow::

    validate -> cache lookup -> analyze
        -> enumeration? handle (return on success, else re-derive analysis)
        -> multi-query search -> rank -> intent filter -> hydrate -> assemble
    -> cache write -> return

The caller always receives a ``ParliamentContextResult``; collaborator
failures only reduce its completeness. The only errors raised are contract
violations on the inputs, before any work starts.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from parliament_context.application.analysis import QueryAnalyzer
from parliament_context.application.context import ContextAssembler
from parliament_context.application.enumeration import EnumerationHandler
from parliament_context.application.hydration import Hydrator
from parliament_context.application.retrieval import (
    IntentCitationFilter,
    MultiQuerySearcher,
    RankingStage,
)
from parliament_context.domain.entities import ParliamentContextResult, QueryAnalysis
from parliament_context.shared.exceptions import InvalidParameterError, InvalidQueryError
from parliament_context.shared.settings import PipelineConfig

if TYPE_CHECKING:
    from parliament_context.infrastructure.cache import ResultCache

logger = logging.getLogger(__name__)

# Ranking keeps twice the requested count so the intent filter has headroom.
RANKING_HEADROOM = 2


def validate_request(query: Any, limit: Any) -> None:
    """Reject contract violations; out-of-range limits are clamped later."""
    if not isinstance(query, str):
        raise InvalidQueryError(query)
    if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int)):
        raise InvalidParameterError("limit", limit, "an integer")


class ParliamentContextPipeline:
    """Entry point of the retrieval core; one instance serves many requests."""

    def __init__(
        self,
        config: PipelineConfig,
        analyzer: QueryAnalyzer,
        enumeration_handler: EnumerationHandler,
        searcher: MultiQuerySearcher,
        ranking: RankingStage,
        citation_filter: IntentCitationFilter,
        hydrator: Hydrator,
        assembler: ContextAssembler,
        cache: ResultCache,
    ) -> None:
        self._config = config
        self._analyzer = analyzer
        self._enumeration = enumeration_handler
        self._searcher = searcher
        self._ranking = ranking
        self._filter = citation_filter
        self._hydrator = hydrator
        self._assembler = assembler
        self._cache = cache

    @property
    def config(self) -> PipelineConfig:
        return self._config

    @property
    def cache(self) -> ResultCache:
        return self._cache

    async def get_parliament_context(
        self,
        query: str,
        limit: int | None = None,
    ) -> ParliamentContextResult:
        """
        Retrieve cited Parliament context for ``query``.

        Args:
            query: Natural-language question in English or French
            limit: Maximum number of citations; clamped into ``[1, max_limit]``

        Returns:
            Assembled prompt, citations and hydrated sources

        Raises:
            InvalidQueryError: ``query`` is not a string
            InvalidParameterError: ``limit`` is not an integer
        """
        validate_request(query, limit)
        bounded = self._config.bound_limit(limit)
        key = self._cache.build_key(query, bounded)

        cached = await self._cache.get(key)
        if cached is not None:
            logger.info("Cache hit for query=%r limit=%d", query[:50], bounded)
            return cached

        t0 = time.perf_counter()
        analysis = self._analyzer.analyze(query)
        result: ParliamentContextResult | None = None

        if analysis.is_enumeration:
            result = await self._try_enumeration(analysis)
            if result is None:
                analysis = self._analyzer.complete(analysis)

        if result is None:
            result = await self._search_and_assemble(analysis, bounded)

        await self._cache.set(key, result)
        logger.info(
            "Context for query=%r: %d citations, %d hydrated (%.0fms)",
            query[:50],
            len(result.citations),
            len(result.hydrated_sources),
            (time.perf_counter() - t0) * 1000,
        )
        return result

    async def _try_enumeration(self, analysis: QueryAnalysis) -> ParliamentContextResult | None:
        enumeration = analysis.enumeration
        try:
            result = await self._enumeration.handle(enumeration, analysis.language)
        except Exception as e:
            logger.warning("Enumeration (%s) failed, falling back to search: %s", enumeration.kind, e)
            return None
        if result is not None:
            logger.info("Enumeration path (%s) answered", enumeration.kind)
        return result

    async def _search_and_assemble(
        self,
        analysis: QueryAnalysis,
        bounded: int,
    ) -> ParliamentContextResult:
        config = self._config
        candidates = await self._searcher.search(
            analysis, config.candidates_per_query, config.vector_search_candidates
        )
        ranked = await self._ranking.rank(candidates, analysis, bounded * RANKING_HEADROOM)
        filtered = self._filter.apply(ranked, analysis.priority_intent, bounded)
        logger.debug(
            "multi_query=%d -> ranked=%d -> filtered=%d (intent=%s)",
            len(candidates),
            len(ranked),
            len(filtered),
            analysis.priority_intent.value,
        )

        hydrated = await self._hydrator.hydrate_top_per_type(filtered, analysis.language)
        return self._assembler.assemble(filtered, hydrated, analysis.language)
