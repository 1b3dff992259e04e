"""
Parliament Context - Bilingual retrieval and context assembly for the Parliament of Canada

Turns a natural-language question (English or French) into grounded, cited
context: ranked snippets, numbered citations and up to one hydrated full
document per source type.

Usage:
    from parliament_context import create_container

    pipeline = create_container().pipeline()
    result = await pipeline.get_parliament_context("Who voted against C-11?", limit=8)

    print(result.prompt)
    for citation in result.citations:
        print(citation.id, citation.title)

Features:
    - Intent and language detection with multi-query search
    - Reranking with source diversity and per-intent citation slots
    - Full enumeration of recorded votes and party rosters
    - Hydration of the top source per type, with language fallback notes
    - Result caching keyed on (query, limit)
"""

from .application.pipeline import ParliamentContextPipeline
from .container import ApplicationContainer, create_container
from .domain.entities import (
    Citation,
    HydratedSource,
    Language,
    ParliamentContextResult,
    PriorityIntent,
    SourceType,
)
from .shared.settings import PipelineConfig

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "ParliamentContextPipeline",
    "ApplicationContainer",
    "create_container",
    "PipelineConfig",
    # Result types
    "ParliamentContextResult",
    "Citation",
    "HydratedSource",
    "Language",
    "PriorityIntent",
    "SourceType",
]
