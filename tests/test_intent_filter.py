"""Tests for intent configuration and the citation allow-list."""

from __future__ import annotations

import pytest

from parliament_context.application.analysis import (
    INTENT_CONFIG,
    SLOT_CONFIG,
    allowed_citations_for_intent,
    is_citable,
    search_types_for_intent,
)
from parliament_context.application.retrieval import IntentCitationFilter
from parliament_context.domain.entities import PriorityIntent, SourceType


class TestIntentConfig:
    def test_every_intent_configured(self):
        assert set(INTENT_CONFIG) == set(PriorityIntent)
        assert set(SLOT_CONFIG) == set(PriorityIntent)

    def test_bill_focused(self):
        assert search_types_for_intent(PriorityIntent.BILL_FOCUSED) == (SourceType.BILL, SourceType.VOTE_QUESTION)
        assert allowed_citations_for_intent(PriorityIntent.BILL_FOCUSED) == {SourceType.BILL, SourceType.VOTE_QUESTION}

    def test_general_allows_everything(self):
        assert allowed_citations_for_intent(PriorityIntent.GENERAL) is None
        assert all(is_citable(t, PriorityIntent.GENERAL) for t in SourceType)

    @pytest.mark.parametrize("intent", [i for i in PriorityIntent if i is not PriorityIntent.GENERAL])
    def test_search_types_are_citable(self, intent):
        assert all(is_citable(t, intent) for t in search_types_for_intent(intent))


class TestIntentCitationFilter:
    @pytest.fixture
    def mixed(self, result_factory):
        return [
            result_factory(SourceType.HANSARD, "h1", 0.95),
            result_factory(SourceType.BILL, "b1", 0.9),
            result_factory(SourceType.POLITICIAN, "p1", 0.85),
            result_factory(SourceType.VOTE_QUESTION, "v1", 0.8),
            result_factory(SourceType.BILL, "b2", 0.75),
        ]

    def test_drops_disallowed_types(self, mixed):
        kept = IntentCitationFilter().apply(mixed, PriorityIntent.BILL_FOCUSED, 10)
        assert [r.metadata.source_id for r in kept] == ["b1", "v1", "b2"]

    def test_filter_before_truncation(self, mixed):
        kept = IntentCitationFilter().apply(mixed, PriorityIntent.BILL_FOCUSED, 2)
        assert [r.metadata.source_id for r in kept] == ["b1", "v1"]

    def test_general_keeps_all(self, mixed):
        assert IntentCitationFilter().apply(mixed, PriorityIntent.GENERAL, 10) == mixed
