"""
QueryAnalyzer - turns a raw query into a ``QueryAnalysis``.

Decides:
1. Language (en/fr) with a confidence score
2. Bill numbers mentioned ("C-35", "S-12")
3. Priority intent, which later gates the citable source types
4. Search types to fan out over
5. Deterministic reformulations used only to widen recall
6. Enumeration intent ("who voted yea on C-35", "list all NDP MPs")

Enumeration queries skip steps 4 and 5; if the enumeration path later finds
no data the pipeline calls ``complete()`` to derive them before searching.

The analyzer never raises. Non-string or internally failing input degrades
to an "unknown"-language, general, non-enumeration analysis.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from parliament_context.domain.entities import (
    EnumerationIntent,
    Language,
    PriorityIntent,
    QueryAnalysis,
    QueryEntities,
    SourceType,
)
from parliament_context.domain.ports import QueryClassifier

from .classifier import HeuristicQueryClassifier
from .intent_config import search_types_for_intent

logger = logging.getLogger(__name__)

_BILL_TEMPLATES = {
    Language.EN: ("Summary of Bill {bill}", "Context and status of Bill {bill}"),
    Language.FR: ("Résumé du projet de loi {bill}", "Contexte et statut du projet de loi {bill}"),
}
_GENERIC_TEMPLATES = {
    Language.EN: ("Related parliamentary context", "Relevant official information"),
    Language.FR: ("Contexte parlementaire lié", "Informations officielles pertinentes"),
}


class QueryAnalyzer:
    """
    Stateless query analyzer.

    Usage:
        analyzer = QueryAnalyzer()
        analysis = analyzer.analyze("How did the NDP vote on C-11?")
        analysis.priority_intent   # PriorityIntent.VOTE_FOCUSED
        analysis.search_types      # vote_question, vote_party, vote_member, bill, party
    """

    def __init__(
        self,
        classifier: QueryClassifier | None = None,
        max_reformulations: int = 2,
    ):
        self._classifier: QueryClassifier = classifier or HeuristicQueryClassifier()
        self._max_reformulations = max_reformulations

    def analyze(self, query: str) -> QueryAnalysis:
        if not isinstance(query, str):
            return self._unknown(str(query))
        try:
            analysis = self._analyze(query)
        except Exception:
            logger.warning("Query analysis failed, using fallback for %r", query[:50], exc_info=True)
            return self._unknown(query)

        logger.debug(
            "analysis: lang=%s intent=%s types=%s reformulations=%d enumeration=%s",
            analysis.language.value,
            analysis.priority_intent.value,
            sorted(t.value for t in analysis.search_types),
            len(analysis.reformulated_queries),
            analysis.enumeration.kind.value if analysis.enumeration.kind else None,
        )
        return analysis

    def complete(self, analysis: QueryAnalysis) -> QueryAnalysis:
        """
        Derive search types and reformulations skipped for an enumeration.

        The enumeration flag is cleared so the result is an ordinary search
        analysis.
        """
        query = analysis.original_query
        try:
            search_types = self.search_types(query, analysis.priority_intent)
        except Exception:
            logger.warning("Search type detection failed for %r", query[:50], exc_info=True)
            search_types = frozenset(search_types_for_intent(analysis.priority_intent))
        return replace(
            analysis,
            search_types=search_types,
            reformulated_queries=self.reformulate(analysis.language, analysis.entities.bill_numbers),
            enumeration=EnumerationIntent.none(),
        )

    def search_types(self, query: str, intent: PriorityIntent) -> frozenset[SourceType]:
        """Intent search scope plus any type the query names explicitly."""
        return frozenset(search_types_for_intent(intent)) | self._classifier.mentioned_types(query)

    def reformulate(self, language: Language, bill_numbers: tuple[str, ...]) -> tuple[str, ...]:
        lang = language.preferred
        if bill_numbers:
            templates = tuple(t.format(bill=bill_numbers[0]) for t in _BILL_TEMPLATES[lang])
        else:
            templates = _GENERIC_TEMPLATES[lang]
        return templates[: self._max_reformulations]

    # ------------------------------------------------------------------

    def _analyze(self, query: str) -> QueryAnalysis:
        if not query.strip():
            return QueryAnalysis(
                original_query=query,
                language=Language.EN,
                language_confidence=0.0,
                priority_intent=PriorityIntent.GENERAL,
            )

        language, confidence = self._classifier.detect_language(query)
        bill_numbers = tuple(self._classifier.extract_bill_numbers(query))
        intent = self._classifier.classify_intent(query, bill_numbers)
        enumeration = self._classifier.detect_enumeration(query, bill_numbers)

        if enumeration.is_enumeration:
            search_types: frozenset[SourceType] = frozenset()
            reformulations: tuple[str, ...] = ()
        else:
            search_types = self.search_types(query, intent)
            reformulations = self.reformulate(language, bill_numbers)

        return QueryAnalysis(
            original_query=query,
            language=language,
            language_confidence=confidence,
            priority_intent=intent,
            search_types=search_types,
            reformulated_queries=reformulations,
            entities=QueryEntities(bill_numbers=bill_numbers),
            enumeration=enumeration,
        )

    @staticmethod
    def _unknown(query: str) -> QueryAnalysis:
        return QueryAnalysis(
            original_query=query,
            language=Language.UNKNOWN,
            language_confidence=0.0,
            priority_intent=PriorityIntent.GENERAL,
            search_types=frozenset(search_types_for_intent(PriorityIntent.GENERAL)),
        )
