"""
Application Layer - Retrieval Use Cases

Contains:
- analysis: intent, language and entity detection, reformulations
- retrieval: multi-query search, reranking, diversity and citation filtering
- enumeration: complete vote and roster answers from the structured store
- hydration: full-document fetch for the top result per source type
- context: snippet and prompt assembly
- citations: bilingual citation construction
- pipeline: the end-to-end get_parliament_context operation
"""

from .analysis import HeuristicQueryClassifier, QueryAnalyzer
from .context import ContextAssembler
from .enumeration import EnumerationHandler
from .hydration import Hydrator
from .pipeline import ParliamentContextPipeline, validate_request
from .retrieval import IntentCitationFilter, LexicalReranker, MultiQuerySearcher, RankingStage

__all__ = [
    "QueryAnalyzer",
    "HeuristicQueryClassifier",
    "MultiQuerySearcher",
    "RankingStage",
    "LexicalReranker",
    "IntentCitationFilter",
    "EnumerationHandler",
    "Hydrator",
    "ContextAssembler",
    "ParliamentContextPipeline",
    "validate_request",
]
