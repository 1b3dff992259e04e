"""
MultiQuerySearcher - fan-out vector search over queries and source types.

One search is issued per (query variant, source type) pair, where the
variants are the original query followed by its reformulations. All calls
run concurrently and are joined before merging; a failing call contributes
nothing and never cancels its siblings.

Merging de-duplicates on the chunk identity
``sourceType:sourceId:chunkIndex`` and keeps the higher-similarity copy at
the position where the chunk was first seen. No language filtering happens
here; language preference is applied during ranking.
"""

from __future__ import annotations

import logging
import time

from parliament_context.domain.entities import QueryAnalysis, SearchResult, SourceType
from parliament_context.domain.ports import SearchBackend
from parliament_context.shared.async_utils import gather_with_errors

logger = logging.getLogger(__name__)

# Stable fan-out order, independent of set iteration order.
_TYPE_ORDER = {t: i for i, t in enumerate(SourceType)}


def effective_source_types(analysis: QueryAnalysis) -> list[SourceType]:
    """Search types of the analysis, plus bills whenever a bill is named."""
    types = set(analysis.search_types)
    if analysis.entities.bill_numbers:
        types.add(SourceType.BILL)
    return sorted(types, key=_TYPE_ORDER.__getitem__)


def merge_candidates(result_sets: list[list[SearchResult]]) -> list[SearchResult]:
    """Flatten and de-duplicate, keeping the best-scoring copy of each chunk."""
    merged: dict[str, SearchResult] = {}
    for results in result_sets:
        for result in results:
            key = result.dedup_key
            current = merged.get(key)
            if current is None or result.similarity > current.similarity:
                # dict assignment keeps first-insertion position
                merged[key] = result
    return list(merged.values())


class MultiQuerySearcher:
    """Builds the unranked candidate pool for one analysis."""

    def __init__(self, backend: SearchBackend):
        self._backend = backend

    async def search(
        self,
        analysis: QueryAnalysis,
        candidates_per_query: int,
        candidate_budget: int,
    ) -> list[SearchResult]:
        queries = [analysis.original_query, *analysis.reformulated_queries]
        source_types = effective_source_types(analysis)
        if not source_types or not analysis.original_query.strip():
            logger.debug("multi-query: nothing to search")
            return []

        pairs = [(q, t) for q in queries for t in source_types]
        t0 = time.perf_counter()
        outcomes = await gather_with_errors(
            *(self._backend.search(t, q, candidates_per_query, candidate_budget) for q, t in pairs),
            return_exceptions=True,
        )

        result_sets: list[list[SearchResult]] = []
        failures = 0
        for (query, source_type), outcome in zip(pairs, outcomes, strict=True):
            if isinstance(outcome, Exception):
                failures += 1
                logger.warning(
                    "Search failed for type=%s query=%r: %s",
                    source_type.value,
                    query[:50],
                    outcome,
                )
                continue
            result_sets.append(outcome)

        merged = merge_candidates(result_sets)
        logger.debug(
            "multi-query: %d queries x %d types -> %d raw, %d merged, %d failed (%.0fms)",
            len(queries),
            len(source_types),
            sum(len(r) for r in result_sets),
            len(merged),
            failures,
            (time.perf_counter() - t0) * 1000,
        )
        return merged
