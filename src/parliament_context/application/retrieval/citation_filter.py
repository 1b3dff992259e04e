"""
IntentCitationFilter - hard allow-list on citable source types.

Runs after ranking and before truncation to the requested limit, so that
results removed for an intent mismatch never crowd out valid ones.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from parliament_context.application.analysis.intent_config import is_citable
from parliament_context.domain.entities import PriorityIntent, SearchResult

logger = logging.getLogger(__name__)


class IntentCitationFilter:
    def apply(
        self,
        results: Sequence[SearchResult],
        intent: PriorityIntent,
        limit: int,
    ) -> list[SearchResult]:
        kept = [r for r in results if is_citable(r.source_type, intent)]
        dropped = len(results) - len(kept)
        if dropped:
            logger.debug("intent filter (%s) dropped %d results", intent.value, dropped)
        return kept[:limit]
