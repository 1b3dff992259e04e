"""Tests for MultiQuerySearcher fan-out and merging."""

from __future__ import annotations

import asyncio

from parliament_context.application.analysis import QueryAnalyzer
from parliament_context.application.retrieval import (
    MultiQuerySearcher,
    effective_source_types,
    merge_candidates,
)
from parliament_context.domain.entities import (
    Language,
    PriorityIntent,
    QueryAnalysis,
    QueryEntities,
    SourceType,
)


def _analysis(query="Tell me about Bill C-35", types=(SourceType.BILL, SourceType.VOTE_QUESTION), reformulations=(), bills=()):
    return QueryAnalysis(
        original_query=query,
        language=Language.EN,
        language_confidence=0.7,
        priority_intent=PriorityIntent.BILL_FOCUSED,
        search_types=frozenset(types),
        reformulated_queries=tuple(reformulations),
        entities=QueryEntities(bill_numbers=tuple(bills)),
    )


class TestEffectiveSourceTypes:
    def test_bill_forced_when_named(self):
        analysis = _analysis(types=(SourceType.HANSARD,), bills=("C-35",))
        assert effective_source_types(analysis) == [SourceType.BILL, SourceType.HANSARD]

    def test_stable_order(self):
        analysis = _analysis(types=(SourceType.RIDING, SourceType.BILL, SourceType.POLITICIAN))
        assert effective_source_types(analysis) == [SourceType.BILL, SourceType.POLITICIAN, SourceType.RIDING]


class TestMergeCandidates:
    def test_keeps_higher_similarity_at_first_position(self, result_factory):
        a_low = result_factory(SourceType.BILL, "a", 0.5)
        b = result_factory(SourceType.BILL, "b", 0.7)
        a_high = result_factory(SourceType.BILL, "a", 0.9)
        merged = merge_candidates([[a_low, b], [a_high]])
        assert [(r.metadata.source_id, r.similarity) for r in merged] == [("a", 0.9), ("b", 0.7)]

    def test_distinct_chunks_kept(self, result_factory):
        first = result_factory(SourceType.BILL, "a", 0.5, chunk_index=0)
        second = result_factory(SourceType.BILL, "a", 0.5, chunk_index=1)
        assert len(merge_candidates([[first], [second]])) == 2

    def test_same_text_different_identity_kept(self, result_factory):
        one = result_factory(SourceType.BILL, "a", 0.5, content="same")
        two = result_factory(SourceType.HANSARD, "a", 0.5, content="same")
        assert len(merge_candidates([[one, two]])) == 2


class TestMultiQuerySearcher:
    async def test_fans_out_queries_times_types(self, backend_factory):
        backend = backend_factory()
        analysis = _analysis(reformulations=("Summary of Bill C-35", "Context and status of Bill C-35"))
        await MultiQuerySearcher(backend).search(analysis, 25, 50)

        assert len(backend.calls) == 3 * 2
        assert {(c[0], c[1]) for c in backend.calls} == {
            (t, q)
            for q in ("Tell me about Bill C-35", "Summary of Bill C-35", "Context and status of Bill C-35")
            for t in (SourceType.BILL, SourceType.VOTE_QUESTION)
        }
        assert all(c[2] == 25 and c[3] == 50 for c in backend.calls)

    async def test_deduplicates_across_reformulations(self, backend_factory, bill_results):
        backend = backend_factory({SourceType.BILL: bill_results})
        analysis = _analysis(types=(SourceType.BILL,), reformulations=("Summary of Bill C-35",))
        merged = await MultiQuerySearcher(backend).search(analysis, 25, 50)
        assert len(merged) == len(bill_results)

    async def test_no_language_filtering(self, backend_factory, bill_results):
        backend = backend_factory({SourceType.BILL: bill_results})
        merged = await MultiQuerySearcher(backend).search(_analysis(types=(SourceType.BILL,)), 25, 50)
        assert {r.metadata.language for r in merged} == {Language.EN, Language.FR}

    async def test_failed_sub_query_contributes_nothing(self, backend_factory, bill_results, vote_results):
        backend = backend_factory(
            {SourceType.BILL: bill_results, SourceType.VOTE_QUESTION: vote_results},
            failing=frozenset({SourceType.VOTE_QUESTION}),
        )
        merged = await MultiQuerySearcher(backend).search(_analysis(), 25, 50)
        assert {r.source_type for r in merged} == {SourceType.BILL}

    async def test_sub_queries_run_concurrently(self, result_factory):
        in_flight = 0
        peak = 0

        class SlowBackend:
            async def search(self, source_type, query, limit, candidate_budget):
                nonlocal in_flight, peak
                in_flight += 1
                peak = max(peak, in_flight)
                await asyncio.sleep(0.01)
                in_flight -= 1
                return [result_factory(source_type, query)]

        analysis = _analysis(reformulations=("a", "b"))
        merged = await MultiQuerySearcher(SlowBackend()).search(analysis, 25, 50)
        assert peak == 6
        assert len(merged) == 6

    async def test_empty_query_searches_nothing(self, backend_factory):
        backend = backend_factory()
        assert await MultiQuerySearcher(backend).search(_analysis(query="  "), 25, 50) == []
        assert backend.calls == []

    async def test_with_real_analysis(self, search_backend):
        analysis = QueryAnalyzer().analyze("Tell me about Bill C-35")
        merged = await MultiQuerySearcher(search_backend).search(analysis, 25, 50)
        assert {r.source_type for r in merged} == {SourceType.BILL, SourceType.VOTE_QUESTION}
