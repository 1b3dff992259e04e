"""
Collaborator contracts consumed by the pipeline.

Implementations live in ``parliament_context.infrastructure``; tests use
in-memory fakes. Absence of data is signalled with ``None`` or an empty
list, never with an exception.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol

from .entities import (
    EnumerationIntent,
    HydratedDocument,
    Language,
    PartySlug,
    PoliticianRosterResult,
    PriorityIntent,
    SearchResult,
    SourceType,
    VoteEnumerationResult,
    VoteType,
)

# =============================================================================
# Data sources
# =============================================================================


class SearchBackend(Protocol):
    """Per-source-type vector similarity search."""

    async def search(
        self,
        source_type: SourceType,
        query: str,
        limit: int,
        candidate_budget: int,
    ) -> list[SearchResult]: ...


class StructuredStore(Protocol):
    """Relational Parliament data: complete result sets and full documents."""

    async def get_complete_member_votes_for_bill(
        self,
        bill_number: str,
        vote_type: VoteType | None,
        party_slug: PartySlug | None,
        language: Language,
        session_id: str | None = None,
    ) -> VoteEnumerationResult | None: ...

    async def get_all_politicians(
        self,
        party_slug: PartySlug | None,
        current_only: bool,
        language: Language,
    ) -> PoliticianRosterResult | None: ...

    async def get_hydrated_markdown(
        self,
        source_type: SourceType,
        identity: Mapping[str, str | int],
        language: Language,
    ) -> HydratedDocument | None: ...


class CacheStore(Protocol):
    """String key/value store with per-entry expiry."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str, ttl_seconds: int) -> None: ...


# =============================================================================
# Pluggable strategies
# =============================================================================


class Reranker(Protocol):
    """Reorders candidates against the original query text."""

    async def rerank(
        self,
        query: str,
        candidates: Sequence[SearchResult],
        top_n: int,
    ) -> list[SearchResult]: ...


class QueryClassifier(Protocol):
    """
    Classification decisions behind ``QueryAnalyzer``.

    The default implementation is heuristic and makes no claim of full
    coverage of query phrasings; swap it through the container.
    """

    def detect_language(self, query: str) -> tuple[Language, float]: ...

    def extract_bill_numbers(self, query: str) -> tuple[str, ...]: ...

    def classify_intent(self, query: str, bill_numbers: Sequence[str]) -> PriorityIntent: ...

    def mentioned_types(self, query: str) -> frozenset[SourceType]: ...

    def detect_enumeration(self, query: str, bill_numbers: Sequence[str]) -> EnumerationIntent: ...
