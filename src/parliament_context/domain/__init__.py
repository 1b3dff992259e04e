"""
Domain Layer - Core Business Objects

Contains:
- entities: value objects passed between pipeline stages
- ports: collaborator contracts (search backend, structured store, cache, reranker, classifier)
"""

from .entities import (
    Citation,
    HydratedSource,
    Language,
    ParliamentContextResult,
    PriorityIntent,
    QueryAnalysis,
    SearchResult,
    SourceType,
)

__all__ = [
    "Citation",
    "HydratedSource",
    "Language",
    "ParliamentContextResult",
    "PriorityIntent",
    "QueryAnalysis",
    "SearchResult",
    "SourceType",
]
