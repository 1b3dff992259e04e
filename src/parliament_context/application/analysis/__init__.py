"""Query analysis: language, intent, entities, reformulations, enumeration."""

from .classifier import HeuristicQueryClassifier
from .intent_config import (
    INTENT_CONFIG,
    SLOT_CONFIG,
    IntentConfig,
    SlotConfig,
    allowed_citations_for_intent,
    is_citable,
    search_types_for_intent,
    slot_config_for_intent,
)
from .query_analyzer import QueryAnalyzer

__all__ = [
    "QueryAnalyzer",
    "HeuristicQueryClassifier",
    "IntentConfig",
    "SlotConfig",
    "INTENT_CONFIG",
    "SLOT_CONFIG",
    "search_types_for_intent",
    "allowed_citations_for_intent",
    "slot_config_for_intent",
    "is_citable",
]
