"""Candidate retrieval, ranking and intent filtering."""

from .citation_filter import IntentCitationFilter
from .multi_query import MultiQuerySearcher, effective_source_types, merge_candidates
from .ranking import (
    RankingStage,
    adaptive_filter,
    allocate_citation_slots,
    enforce_balance,
    ensure_source_diversity,
    heuristic_rank,
    prefer_language,
)
from .reranker import BM25Corpus, LexicalReranker

__all__ = [
    "MultiQuerySearcher",
    "effective_source_types",
    "merge_candidates",
    "RankingStage",
    "adaptive_filter",
    "allocate_citation_slots",
    "enforce_balance",
    "ensure_source_diversity",
    "heuristic_rank",
    "prefer_language",
    "LexicalReranker",
    "BM25Corpus",
    "IntentCitationFilter",
]
