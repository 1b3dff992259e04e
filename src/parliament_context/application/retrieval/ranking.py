"""
Ranking stage: reranking plus post-processing of the candidate pool.

Steps, given an output cap:
1. Bound the pool to the configured maximum by similarity.
2. Rerank against the original query, asking for ``3 x cap`` results.
   Results in the preferred language are boosted when the pool is mixed.
3. Source diversity: every source type present among the candidates keeps
   at least ``min_per_type`` entries.
4. Slot allocation (non-general intents) or per-type balance (general).
5. Adaptive score filter, then truncation to the cap.

If the reranker raises, a heuristic ranking (similarity plus language,
mention and recency boosts) is used instead.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Sequence

from parliament_context.application.analysis.intent_config import SlotConfig, slot_config_for_intent
from parliament_context.domain.entities import (
    Language,
    PriorityIntent,
    QueryAnalysis,
    SearchResult,
    SourceType,
)
from parliament_context.domain.ports import Reranker

logger = logging.getLogger(__name__)

# Adaptive filter defaults
RELATIVE_THRESHOLD_RATIO = 0.7
ABSOLUTE_MINIMUM_SCORE = 0.05
MINIMUM_RESULTS = 3

GENERAL_MAX_TYPE_RATIO = 0.4

# Score boosts; the language boost also applies after reranking
LANGUAGE_MATCH_BOOST = 0.12
MENTION_BOOST = 0.03
RECENCY_BOOST = 0.01
RECENCY_CUTOFF = "2022-01-01"

_HANSARD_PATTERN = re.compile(r"\b(hansard|debate|débat)\b", re.IGNORECASE)
_COMMITTEE_PATTERN = re.compile(r"\b(committee|comité)\b", re.IGNORECASE)
_COMMITTEE_TYPES = frozenset(
    {SourceType.COMMITTEE, SourceType.COMMITTEE_REPORT, SourceType.COMMITTEE_MEETING}
)


# =============================================================================
# Post-processing helpers
# =============================================================================


def adaptive_filter(
    results: Sequence[SearchResult],
    relative_threshold: float = RELATIVE_THRESHOLD_RATIO,
    absolute_minimum: float = ABSOLUTE_MINIMUM_SCORE,
    minimum_results: int = MINIMUM_RESULTS,
) -> list[SearchResult]:
    """
    Keep results scoring at least ``max(top * ratio, absolute_minimum)``.

    The top score is that of the first result. Never returns fewer than
    ``min(minimum_results, len(results))`` results.
    """
    if not results:
        return []
    threshold = max(results[0].similarity * relative_threshold, absolute_minimum)
    kept = [r for r in results if r.similarity >= threshold]
    min_count = min(minimum_results, len(results))
    if len(kept) < min_count:
        kept = list(results[:min_count])
    logger.debug(
        "adaptive filter: top=%.3f threshold=%.3f %d -> %d",
        results[0].similarity,
        threshold,
        len(results),
        len(kept),
    )
    return kept


def ensure_source_diversity(
    results: Sequence[SearchResult],
    candidates: Sequence[SearchResult],
    min_per_type: int = 2,
) -> list[SearchResult]:
    """
    Append candidates so that each source type in the pool has ``min_per_type`` entries.

    Additions carry the score ``max(last * 0.9, 0.1)`` so they sort below
    the reranked results without falling under the absolute minimum.
    """
    counts = Counter(r.source_type for r in results)
    seen = {r.dedup_key for r in results}
    floor = max(results[-1].similarity * 0.9, 0.1) if results else 0.1

    pool_types = list(dict.fromkeys(c.source_type for c in candidates))
    additions: list[SearchResult] = []
    for source_type in pool_types:
        needed = min_per_type - counts[source_type]
        if needed <= 0:
            continue
        for candidate in candidates:
            if needed == 0:
                break
            if candidate.source_type is not source_type or candidate.dedup_key in seen:
                continue
            additions.append(candidate.with_similarity(floor))
            seen.add(candidate.dedup_key)
            needed -= 1

    if additions:
        logger.debug("diversity: %d additions", len(additions))
    return [*results, *additions]


def enforce_balance(
    results: Sequence[SearchResult],
    limit: int,
    max_ratio: float = GENERAL_MAX_TYPE_RATIO,
) -> list[SearchResult]:
    """At most ``floor(limit * max_ratio)`` per type, then fill from the overflow."""
    max_per_type = int(limit * max_ratio)
    counts: Counter[SourceType] = Counter()
    balanced: list[SearchResult] = []
    overflow: list[SearchResult] = []
    for result in results:
        if len(balanced) >= limit:
            break
        if counts[result.source_type] < max_per_type:
            balanced.append(result)
            counts[result.source_type] += 1
        else:
            overflow.append(result)
    remaining = limit - len(balanced)
    if remaining > 0:
        balanced.extend(overflow[:remaining])
    return balanced


def allocate_citation_slots(
    results: Sequence[SearchResult],
    config: SlotConfig,
    limit: int,
) -> list[SearchResult]:
    """
    Primary types take ``limit - secondary_cap`` slots, secondary types up to the cap.

    Leftover slots are filled from the primary and secondary overflow. Types
    outside both groups are never allocated. A config without primary types
    falls back to ``enforce_balance``.
    """
    if not results:
        return []
    if not config.primary:
        return enforce_balance(results, limit)

    primary = [r for r in results if r.source_type in config.primary]
    secondary = [r for r in results if r.source_type in config.secondary]

    primary_slots = max(0, limit - config.secondary_cap)
    allocated = primary[:primary_slots] + secondary[: config.secondary_cap]
    remaining = limit - len(allocated)
    if remaining > 0:
        extras = primary[primary_slots:] + secondary[config.secondary_cap :]
        allocated.extend(extras[:remaining])
    return allocated[:limit]


def prefer_language(
    results: Sequence[SearchResult],
    language: Language,
    boost: float = LANGUAGE_MATCH_BOOST,
) -> list[SearchResult]:
    """
    Boost results in the preferred language of ``language`` and re-sort.

    A pool in a single language is returned unchanged. Nothing is dropped.
    """
    preferred = language.preferred
    matches = [r.metadata.language is preferred for r in results]
    if all(matches) or not any(matches):
        return list(results)
    boosted = [
        r.with_similarity(r.similarity + boost) if match else r
        for r, match in zip(results, matches, strict=True)
    ]
    boosted.sort(key=lambda r: r.similarity, reverse=True)
    return boosted


def heuristic_rank(
    candidates: Sequence[SearchResult],
    analysis: QueryAnalysis,
    limit: int,
) -> list[SearchResult]:
    """Similarity plus small boosts; used when the reranker is unavailable."""
    preferred = analysis.language.preferred
    query = analysis.original_query
    mentions_hansard = bool(_HANSARD_PATTERN.search(query))
    mentions_committee = bool(_COMMITTEE_PATTERN.search(query))

    def boosted(result: SearchResult) -> float:
        meta = result.metadata
        score = result.similarity
        if meta.language is preferred:
            score += LANGUAGE_MATCH_BOOST
        if mentions_hansard and result.source_type is SourceType.HANSARD:
            score += MENTION_BOOST
        if mentions_committee and result.source_type in _COMMITTEE_TYPES:
            score += MENTION_BOOST
        date = getattr(meta, "status_date", None) or meta.date
        if isinstance(date, str) and date >= RECENCY_CUTOFF:
            score += RECENCY_BOOST
        return score

    rescored = [c.with_similarity(boosted(c)) for c in candidates]
    rescored.sort(key=lambda r: r.similarity, reverse=True)
    return adaptive_filter(rescored)[:limit]


# =============================================================================
# Ranking stage
# =============================================================================


class RankingStage:
    """Reranks the merged pool and shapes it for citation."""

    def __init__(
        self,
        reranker: Reranker,
        pool_max: int = 150,
        min_rerank_score: float = 0.1,
        diversity_min: int = 2,
    ):
        self._reranker = reranker
        self._pool_max = pool_max
        self._min_rerank_score = min_rerank_score
        self._diversity_min = diversity_min

    async def rank(
        self,
        candidates: Sequence[SearchResult],
        analysis: QueryAnalysis,
        cap: int,
    ) -> list[SearchResult]:
        if not candidates:
            return []
        query = analysis.original_query
        if not query.strip():
            return heuristic_rank(candidates, analysis, cap)

        pool = sorted(candidates, key=lambda r: r.similarity, reverse=True)[: self._pool_max]
        try:
            reranked = await self._reranker.rerank(query, pool, min(len(pool), cap * 3))
        except Exception as e:
            logger.warning("Reranking failed, using heuristic fallback: %s", e)
            return heuristic_rank(candidates, analysis, cap)

        reranked = prefer_language(reranked, analysis.language)
        diverse = ensure_source_diversity(reranked, pool, self._diversity_min)
        if analysis.priority_intent is PriorityIntent.GENERAL:
            shaped = enforce_balance(diverse, cap * 2)
        else:
            shaped = allocate_citation_slots(
                diverse, slot_config_for_intent(analysis.priority_intent), cap * 2
            )
        filtered = adaptive_filter(shaped, absolute_minimum=self._min_rerank_score)
        logger.debug(
            "ranking: pool=%d reranked=%d diverse=%d shaped=%d filtered=%d",
            len(pool),
            len(reranked),
            len(diverse),
            len(shaped),
            len(filtered),
        )
        return filtered[:cap]
