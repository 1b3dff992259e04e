"""Tests for hydration target selection and the concurrent hydrator."""

from __future__ import annotations

from unittest.mock import AsyncMock

from parliament_context.application.hydration import (
    FALLBACK_NOTES,
    Hydrator,
    bill_target,
    hydration_target,
    parse_session_id,
    select_targets,
)
from parliament_context.domain.entities import HydratedDocument, Language, SourceType


class TestTargets:
    def test_parse_session_id(self):
        assert parse_session_id("44-1") == (44, 1)
        assert parse_session_id("44") is None
        assert parse_session_id("forty-four") is None
        assert parse_session_id(None) is None

    def test_bill_target(self):
        target = bill_target("C-35", "44-1")
        assert target.id == "bill-C-35-44-1"
        assert target.identity == {"bill_number": "C-35", "parliament": 44, "session": 1}

    def test_bill_target_needs_session(self):
        assert bill_target("C-35", None) is None
        assert bill_target(None, "44-1") is None

    def test_hansard_target(self, result_factory):
        target = hydration_target(result_factory(SourceType.HANSARD, "h1").metadata)
        assert target.id == "hansard-101"
        assert target.identity == {"statement_id": 101}

    def test_missing_identity(self, result_factory):
        meta = result_factory(SourceType.HANSARD, "h1", statement_id=None).metadata
        assert hydration_target(meta) is None

    def test_first_hydratable_per_type(self, result_factory):
        results = [
            result_factory(SourceType.HANSARD, "h0", statement_id=None),
            result_factory(SourceType.BILL, "b1"),
            result_factory(SourceType.HANSARD, "h1", statement_id=7),
            result_factory(SourceType.HANSARD, "h2", statement_id=8),
            result_factory(SourceType.BILL, "b2", bill_number="C-18"),
        ]
        targets = select_targets(results)
        assert [t.id for t in targets] == ["bill-C-35-44-1", "hansard-7"]


class TestHydrator:
    async def test_one_document_per_type(self, structured_store, bill_results, vote_results, hansard_results):
        hydrated = await Hydrator(structured_store).hydrate_top_per_type(
            [*bill_results, *vote_results, *hansard_results], Language.EN
        )

        assert [h.source_type for h in hydrated] == [
            SourceType.BILL,
            SourceType.VOTE_QUESTION,
            SourceType.HANSARD,
        ]
        assert len(structured_store.hydrate_calls) == 3
        assert all(h.note is None for h in hydrated)

    async def test_french_request_with_english_fallback(self, structured_store, bill_results):
        hydrated = await Hydrator(structured_store).hydrate_top_per_type(bill_results, Language.FR)

        assert structured_store.hydrate_calls[0][2] is Language.FR
        assert hydrated[0].language_used is Language.EN
        assert hydrated[0].note == FALLBACK_NOTES[Language.FR]

    async def test_unknown_language_requests_english(self, structured_store, bill_results):
        await Hydrator(structured_store).hydrate_top_per_type(bill_results, Language.UNKNOWN)
        assert structured_store.hydrate_calls[0][2] is Language.EN

    async def test_store_note_is_kept(self, structured_store, bill_results):
        structured_store.documents[SourceType.BILL] = HydratedDocument(
            markdown="# C-35", language_used=Language.EN, note="Summary only"
        )
        hydrated = await Hydrator(structured_store).hydrate_top_per_type(bill_results, Language.FR)
        assert hydrated[0].note == "Summary only"

    async def test_failure_leaves_type_out(self, structured_store, bill_results, hansard_results):
        structured_store.failing_types.add(SourceType.HANSARD)
        hydrated = await Hydrator(structured_store).hydrate_top_per_type(
            [*bill_results, *hansard_results], Language.EN
        )
        assert [h.source_type for h in hydrated] == [SourceType.BILL]

    async def test_missing_document_leaves_type_out(self, structured_store, vote_results, hansard_results):
        del structured_store.documents[SourceType.VOTE_QUESTION]
        hydrated = await Hydrator(structured_store).hydrate_top_per_type(
            [*vote_results, *hansard_results], Language.EN
        )
        assert [h.source_type for h in hydrated] == [SourceType.HANSARD]

    async def test_nothing_hydratable(self, structured_store, result_factory):
        results = [result_factory(SourceType.HANSARD, "h", statement_id=None)]
        assert await Hydrator(structured_store).hydrate_top_per_type(results, Language.EN) == []
        assert structured_store.hydrate_calls == []

    async def test_unexpected_error_is_contained(self, bill_results, hansard_results):
        async def fetch(source_type, identity, language):
            if source_type is SourceType.BILL:
                raise RuntimeError("connection reset")
            return HydratedDocument(markdown="# Debate", language_used=language)

        store = AsyncMock()
        store.get_hydrated_markdown = AsyncMock(side_effect=fetch)
        hydrated = await Hydrator(store).hydrate_top_per_type([*bill_results, *hansard_results], Language.EN)

        assert [h.id for h in hydrated] == ["hansard-101"]
        assert store.get_hydrated_markdown.await_count == 2
