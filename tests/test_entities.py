"""Tests for domain entities: metadata union, results, citations, enumeration sets."""

from __future__ import annotations

import json

import pytest

from parliament_context.domain.entities import (
    BilingualCitation,
    BillInfo,
    BillMetadata,
    Citation,
    HansardMetadata,
    HydratedSource,
    Language,
    MemberVote,
    ParliamentContextResult,
    PartySlug,
    PoliticianRosterResult,
    PoliticianSummary,
    SourceType,
    VoteEnumerationResult,
    VoteQuestionInfo,
    VoteType,
    format_vote_result,
    metadata_from_dict,
)
from parliament_context.shared.exceptions import ParseError

# ============================================================
# Enumerations
# ============================================================


class TestLanguage:
    def test_preferred(self):
        assert Language.FR.preferred is Language.FR
        assert Language.EN.preferred is Language.EN
        assert Language.UNKNOWN.preferred is Language.EN

    def test_other(self):
        assert Language.FR.other is Language.EN
        assert Language.EN.other is Language.FR


class TestVoteLabels:
    def test_vote_type_labels(self):
        assert VoteType.YEA.label(Language.EN) == "Yea"
        assert VoteType.YEA.label(Language.FR) == "Pour"
        assert VoteType.PAIRED.label(Language.FR) == "Jumelé"

    def test_format_vote_result(self):
        assert format_vote_result("Y", Language.EN) == "Passed"
        assert format_vote_result("N", Language.FR) == "Rejeté"
        assert format_vote_result("T", Language.EN) == "T"
        assert format_vote_result(None, Language.EN) == ""


# ============================================================
# Metadata union
# ============================================================


class TestMetadataFromDict:
    def test_decodes_variant(self):
        meta = metadata_from_dict(
            {
                "source_type": "bill",
                "source_id": 42,
                "bill_number": "C-35",
                "session_id": "44-1",
                "language": "fr",
                "unexpected_field": "ignored",
            }
        )
        assert isinstance(meta, BillMetadata)
        assert meta.source_type is SourceType.BILL
        assert meta.source_id == "42"
        assert meta.language is Language.FR

    def test_unknown_language_dropped(self):
        meta = metadata_from_dict({"source_type": "hansard", "source_id": "h1", "language": "de"})
        assert isinstance(meta, HansardMetadata)
        assert meta.language is None

    def test_unknown_source_type(self):
        with pytest.raises(ParseError, match="unknown source_type"):
            metadata_from_dict({"source_type": "petition", "source_id": "1"})

    def test_missing_source_id(self):
        with pytest.raises(ParseError, match="missing source_id"):
            metadata_from_dict({"source_type": "bill"})

    def test_to_dict_includes_tag(self):
        meta = metadata_from_dict({"source_type": "bill", "source_id": "1", "language": "en"})
        data = meta.to_dict()
        assert data["source_type"] == "bill"
        assert data["language"] == "en"


class TestSearchResult:
    def test_dedup_key(self, result_factory):
        result = result_factory(SourceType.BILL, "c35", chunk_index=3)
        assert result.dedup_key == "bill:c35:3"

    def test_dedup_key_without_chunk(self, result_factory):
        assert result_factory(SourceType.HANSARD, "h1", chunk_index=None).dedup_key == "hansard:h1:-1"

    def test_with_similarity_copies(self, result_factory):
        result = result_factory(similarity=0.5)
        rescored = result.with_similarity(0.9)
        assert rescored.similarity == 0.9
        assert result.similarity == 0.5
        assert rescored.metadata is result.metadata


# ============================================================
# Citations and results
# ============================================================


@pytest.fixture
def bilingual() -> BilingualCitation:
    return BilingualCitation(
        source_type=SourceType.BILL,
        title_en="Bill C-35",
        title_fr="Projet de loi C-35",
        text_en="[Bill C-35, 44th Parliament, 1st Session]",
        text_fr="[Projet de loi C-35, 44th Parlement, 1st Session]",
        url_en="https://www.parl.ca/legisinfo/en/bill/44-1/c-35",
        url_fr="https://www.parl.ca/legisinfo/fr/projet-de-loi/44-1/c-35",
    )


class TestCitation:
    def test_numbered(self, bilingual):
        citation = Citation.numbered(3, bilingual)
        assert citation.id == 3
        assert citation.prefixed_id == "P3"
        assert citation.title(Language.FR) == "Projet de loi C-35"
        assert citation.text(Language.EN).startswith("[Bill C-35")
        assert citation.url(Language.UNKNOWN) == bilingual.url_en

    def test_dict_round_trip(self, bilingual):
        citation = Citation.numbered(1, bilingual)
        data = citation.to_dict()
        assert data["type"] == "bill"
        assert Citation.from_dict(data) == citation


class TestParliamentContextResult:
    def test_json_round_trip(self, bilingual):
        result = ParliamentContextResult(
            language=Language.FR,
            prompt="Contexte pertinent (FR):\n- [P1] (bill) Projet de loi C-35 — député",
            citations=(Citation.numbered(1, bilingual),),
            hydrated_sources=(
                HydratedSource(
                    source_type=SourceType.BILL,
                    id="bill-C-35-44-1",
                    markdown="# C-35",
                    language_used=Language.EN,
                    note="French text not available; using English source text.",
                ),
            ),
        )
        payload = result.to_json()
        assert ParliamentContextResult.from_json(payload) == result
        assert "é" in payload  # not ASCII-escaped

    def test_note_omitted_when_absent(self):
        source = HydratedSource(SourceType.BILL, "bill-C-35-44-1", "# C-35", Language.EN)
        assert "note" not in source.to_dict()

    @pytest.mark.parametrize(
        "payload",
        ["not json", "[1, 2]", json.dumps({"prompt": "x"}), json.dumps({"language": "xx", "prompt": ""})],
    )
    def test_from_json_rejects(self, payload):
        with pytest.raises(ParseError):
            ParliamentContextResult.from_json(payload)


# ============================================================
# Enumeration result sets
# ============================================================


class TestVoteEnumerationResult:
    def _collect(self, votes, **kwargs):
        bill = BillInfo(id=1, number="C-35", session_id="44-1", name_en="Child care")
        question = VoteQuestionInfo(
            id=10, number=345, date="2023-06-19", session_id="44-1", result="Y",
            yea_total=3, nay_total=2,
        )
        return VoteEnumerationResult.collect(bill, question, votes, Language.EN, **kwargs)

    def test_sorted_by_party_then_name(self, c35_member_votes):
        result = self._collect(c35_member_votes)
        assert [v.politician_name for v in result.member_votes] == [
            "Dan Smith",
            "Eve Brown",
            "Alice Martin",
            "Bob Tremblay",
            "Chantal Roy",
        ]
        assert [v.party_short for v in result.member_votes] == ["CPC", "CPC", "Lib.", "Lib.", "NDP"]

    def test_vote_type_filter(self, c35_member_votes):
        result = self._collect(c35_member_votes, vote_type=VoteType.YEA)
        assert len(result.member_votes) == 3
        assert all(v.vote == "Y" for v in result.member_votes)
        assert result.vote_type is VoteType.YEA

    def test_party_filter(self, c35_member_votes):
        result = self._collect(c35_member_votes, party_slug=PartySlug.LIBERAL)
        assert [v.politician_name for v in result.member_votes] == ["Alice Martin", "Bob Tremblay"]

    def test_unknown_party_ignored(self, c35_member_votes):
        result = self._collect(c35_member_votes, party_slug=PartySlug.GREEN)
        assert len(result.member_votes) == 5

    def test_totals_and_grouping(self, c35_member_votes):
        result = self._collect(c35_member_votes)
        assert (result.totals.yea, result.totals.nay, result.totals.paired) == (3, 2, 0)
        assert list(result.by_party) == ["CPC", "Lib.", "NDP"]

    def test_bill_name_falls_back_to_english(self):
        bill = BillInfo(id=1, number="C-35", session_id="44-1", name_en="Child care")
        assert bill.name(Language.FR) == "Child care"


class TestPoliticianRosterResult:
    def test_largest_caucus_first(self, politicians):
        roster = PoliticianRosterResult.collect(politicians, Language.EN)
        assert roster.total == 4
        assert list(roster.by_party) == ["Lib.", "CPC", "NDP"]

    def test_members_sorted(self):
        roster = PoliticianRosterResult.collect(
            [
                PoliticianSummary(2, "Zoe", "NDP", "New Democratic Party"),
                PoliticianSummary(1, "Adam", "NDP", "New Democratic Party"),
            ],
            Language.EN,
        )
        assert [p.name for p in roster.politicians] == ["Adam", "Zoe"]

    def test_member_vote_defaults(self):
        vote = MemberVote(1, "Alice", "Lib.", "Liberal", "Y")
        assert vote.dissent is False
        assert vote.party_slug is None
