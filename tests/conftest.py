"""
Pytest configuration and shared fixtures.

Collaborators are replaced with in-memory fakes that record their calls,
so tests can assert both on results and on how often the pipeline reached
out to search, reranking, hydration and the cache.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import pytest
from dependency_injector import providers

from parliament_context.application.analysis import QueryAnalyzer
from parliament_context.application.citations import build_citation
from parliament_context.application.context import ContextAssembler
from parliament_context.application.enumeration import EnumerationHandler
from parliament_context.application.hydration import Hydrator
from parliament_context.application.pipeline import ParliamentContextPipeline
from parliament_context.application.retrieval import (
    IntentCitationFilter,
    MultiQuerySearcher,
    RankingStage,
)
from parliament_context.container import ApplicationContainer, create_container
from parliament_context.domain.entities import (
    METADATA_TYPES,
    BillInfo,
    HydratedDocument,
    Language,
    MemberVote,
    PartySlug,
    PoliticianRosterResult,
    PoliticianSummary,
    SearchResult,
    SourceType,
    VoteEnumerationResult,
    VoteQuestionInfo,
    VoteType,
)
from parliament_context.infrastructure.cache import ResultCache
from parliament_context.shared.exceptions import NetworkError
from parliament_context.shared.settings import PipelineConfig

# ============================================================
# Result factories
# ============================================================

# Identifying fields that make each type citable and hydratable.
_DEFAULT_FIELDS: dict[SourceType, dict[str, Any]] = {
    SourceType.BILL: {"bill_number": "C-35", "session_id": "44-1"},
    SourceType.HANSARD: {"statement_id": 101, "speaker_name_en": "Jane Doe", "session_id": "44-1"},
    SourceType.VOTE_QUESTION: {"vote_question_id": 201, "vote_number": 345, "session_id": "44-1", "result": "Y"},
    SourceType.VOTE_PARTY: {"party_vote_id": 211, "vote_number": 345, "session_id": "44-1", "result": "Y"},
    SourceType.VOTE_MEMBER: {"member_vote_id": 221, "vote_number": 345, "session_id": "44-1", "result": "Y"},
    SourceType.POLITICIAN: {"politician_id": 301, "politician_name": "Jane Doe"},
    SourceType.COMMITTEE: {"committee_id": 401, "committee_name_en": "Finance", "committee_name_fr": "Finances"},
    SourceType.COMMITTEE_REPORT: {"report_id": 411},
    SourceType.COMMITTEE_MEETING: {"meeting_id": 421},
    SourceType.PARTY: {"party_id": 501, "party_name_en": "Liberal Party", "party_name_fr": "Parti libéral"},
    SourceType.RIDING: {"riding_id": 601, "riding_name_en": "Toronto Centre", "riding_name_fr": "Toronto-Centre"},
}


def make_result(
    source_type: SourceType = SourceType.BILL,
    source_id: str = "1",
    similarity: float = 0.8,
    content: str | None = None,
    chunk_index: int | None = 0,
    language: Language | None = Language.EN,
    date: str | None = None,
    **fields: Any,
) -> SearchResult:
    """A SearchResult with complete metadata and its rendered citation."""
    meta_fields = {**_DEFAULT_FIELDS.get(source_type, {}), **fields}
    metadata = METADATA_TYPES[source_type](
        source_id=source_id,
        chunk_index=chunk_index,
        language=language,
        date=date,
        **meta_fields,
    )
    return SearchResult(
        content=content if content is not None else f"{source_type.value} {source_id} content about child care",
        metadata=metadata,  # type: ignore[arg-type]
        similarity=similarity,
        citation=build_citation(metadata),  # type: ignore[arg-type]
    )


# ============================================================
# Fakes
# ============================================================


class FakeSearchBackend:
    """Returns canned results per source type; ``strays`` come back for every call."""

    def __init__(
        self,
        results: Mapping[SourceType, Sequence[SearchResult]] | None = None,
        strays: Sequence[SearchResult] = (),
        failing: frozenset[SourceType] = frozenset(),
    ):
        self.results = {k: list(v) for k, v in (results or {}).items()}
        self.strays = list(strays)
        self.failing = failing
        self.calls: list[tuple[SourceType, str, int, int]] = []

    async def search(
        self,
        source_type: SourceType,
        query: str,
        limit: int,
        candidate_budget: int,
    ) -> list[SearchResult]:
        self.calls.append((source_type, query, limit, candidate_budget))
        if source_type in self.failing:
            raise NetworkError(f"search for {source_type.value} failed")
        return [*self.results.get(source_type, []), *self.strays][:limit]


class FakeStructuredStore:
    """Vote data, rosters and hydrated documents held in memory."""

    def __init__(self) -> None:
        self.votes: dict[str, tuple[BillInfo, VoteQuestionInfo, list[MemberVote]]] = {}
        self.rosters: dict[PartySlug | None, list[PoliticianSummary]] = {}
        self.documents: dict[SourceType, HydratedDocument] = {}
        self.failing_types: set[SourceType] = set()
        self.fail_votes = False
        self.vote_calls: list[tuple[str, VoteType | None, PartySlug | None, Language]] = []
        self.vote_sessions: list[str | None] = []
        self.roster_calls: list[tuple[PartySlug | None, bool, Language]] = []
        self.hydrate_calls: list[tuple[SourceType, dict[str, str | int], Language]] = []

    async def get_complete_member_votes_for_bill(
        self,
        bill_number: str,
        vote_type: VoteType | None,
        party_slug: PartySlug | None,
        language: Language,
        session_id: str | None = None,
    ) -> VoteEnumerationResult | None:
        self.vote_calls.append((bill_number, vote_type, party_slug, language))
        self.vote_sessions.append(session_id)
        if self.fail_votes:
            raise NetworkError("structured store unreachable")
        data = self.votes.get(bill_number.upper())
        if data is None:
            return None
        bill, question, votes = data
        return VoteEnumerationResult.collect(bill, question, votes, language, vote_type, party_slug)

    async def get_all_politicians(
        self,
        party_slug: PartySlug | None,
        current_only: bool,
        language: Language,
    ) -> PoliticianRosterResult | None:
        self.roster_calls.append((party_slug, current_only, language))
        members = self.rosters.get(party_slug)
        if not members:
            return None
        return PoliticianRosterResult.collect(members, language, party_slug=party_slug)

    async def get_hydrated_markdown(
        self,
        source_type: SourceType,
        identity: Mapping[str, str | int],
        language: Language,
    ) -> HydratedDocument | None:
        self.hydrate_calls.append((source_type, dict(identity), language))
        if source_type in self.failing_types:
            raise NetworkError(f"hydration of {source_type.value} failed")
        return self.documents.get(source_type)


class FakeCacheStore:
    def __init__(self, fail_reads: bool = False, fail_writes: bool = False):
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.get_calls = 0
        self.set_calls = 0

    async def get(self, key: str) -> str | None:
        self.get_calls += 1
        if self.fail_reads:
            raise ConnectionError("cache down")
        return self.data.get(key)

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self.set_calls += 1
        if self.fail_writes:
            raise ConnectionError("cache down")
        self.data[key] = value
        self.ttls[key] = ttl_seconds


class FakeReranker:
    """Similarity order, deterministic; optionally raises."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls: list[tuple[str, int, int]] = []

    async def rerank(
        self,
        query: str,
        candidates: Sequence[SearchResult],
        top_n: int,
    ) -> list[SearchResult]:
        self.calls.append((query, len(candidates), top_n))
        if self.error is not None:
            raise self.error
        return sorted(candidates, key=lambda c: c.similarity, reverse=True)[:top_n]


# ============================================================
# Parliament data fixtures
# ============================================================


@pytest.fixture
def c35_bill() -> BillInfo:
    return BillInfo(
        id=1,
        number="C-35",
        session_id="44-1",
        name_en="An Act respecting early learning and child care in Canada",
        name_fr="Loi relative à l'apprentissage et à la garde des jeunes enfants au Canada",
        status_code="RoyalAssentGiven",
    )


@pytest.fixture
def c35_vote_question() -> VoteQuestionInfo:
    return VoteQuestionInfo(
        id=10,
        number=345,
        date="2023-06-19",
        session_id="44-1",
        result="Y",
        description_en="3rd reading and adoption of Bill C-35",
        description_fr="3e lecture et adoption du projet de loi C-35",
        yea_total=3,
        nay_total=2,
        paired_total=0,
    )


@pytest.fixture
def c35_member_votes() -> list[MemberVote]:
    return [
        MemberVote(2, "Bob Tremblay", "Lib.", "Liberal", "Y", party_slug="liberal"),
        MemberVote(5, "Eve Brown", "CPC", "Conservative", "N", party_slug="conservative"),
        MemberVote(1, "Alice Martin", "Lib.", "Liberal", "Y", party_slug="liberal"),
        MemberVote(3, "Chantal Roy", "NDP", "New Democratic Party", "Y", party_slug="ndp"),
        MemberVote(4, "Dan Smith", "CPC", "Conservative", "N", party_slug="conservative"),
    ]


@pytest.fixture
def politicians() -> list[PoliticianSummary]:
    return [
        PoliticianSummary(1, "Alice Martin", "Lib.", "Liberal", "Ottawa Centre", "ON"),
        PoliticianSummary(2, "Bob Tremblay", "Lib.", "Liberal", "Laurier", "QC"),
        PoliticianSummary(3, "Chantal Roy", "NDP", "New Democratic Party", "Burnaby South", "BC"),
        PoliticianSummary(4, "Dan Smith", "CPC", "Conservative", "Calgary Centre", "AB"),
    ]


@pytest.fixture
def structured_store(c35_bill, c35_vote_question, c35_member_votes, politicians) -> FakeStructuredStore:
    store = FakeStructuredStore()
    store.votes["C-35"] = (c35_bill, c35_vote_question, c35_member_votes)
    store.rosters[None] = politicians
    store.rosters[PartySlug.NDP] = [p for p in politicians if p.party_short == "NDP"]
    store.documents[SourceType.BILL] = HydratedDocument(
        markdown="# Bill C-35\n\nAn Act respecting early learning and child care in Canada.",
        language_used=Language.EN,
    )
    store.documents[SourceType.VOTE_QUESTION] = HydratedDocument(
        markdown="# Vote #345", language_used=Language.EN
    )
    store.documents[SourceType.HANSARD] = HydratedDocument(
        markdown="# Debate excerpt", language_used=Language.EN
    )
    return store


@pytest.fixture
def bill_results() -> list[SearchResult]:
    return [
        make_result(SourceType.BILL, "c35", 0.92, "Bill C-35 establishes a national early learning and child care framework.", date="2024-03-28"),
        make_result(SourceType.BILL, "c35", 0.88, "The bill commits the government to long-term funding for child care.", chunk_index=1),
        make_result(SourceType.BILL, "c35", 0.85, "Le projet de loi C-35 porte sur la garde des jeunes enfants.", chunk_index=2, language=Language.FR),
    ]


@pytest.fixture
def vote_results() -> list[SearchResult]:
    return [
        make_result(SourceType.VOTE_QUESTION, "vq345", 0.86, "Third reading of Bill C-35 carried, yeas 3 nays 2.", date="2023-06-19"),
        make_result(SourceType.VOTE_QUESTION, "vq300", 0.7, "Second reading of Bill C-35 agreed to.", vote_question_id=202, vote_number=300),
    ]


@pytest.fixture
def hansard_results() -> list[SearchResult]:
    return [
        make_result(SourceType.HANSARD, "h1", 0.9, "Madam Speaker, child care is essential for families."),
        make_result(SourceType.HANSARD, "h2", 0.8, "The member opposite has voted against child care.", statement_id=102),
    ]


@pytest.fixture
def search_backend(bill_results, vote_results, hansard_results) -> FakeSearchBackend:
    return FakeSearchBackend(
        {
            SourceType.BILL: bill_results,
            SourceType.VOTE_QUESTION: vote_results,
            SourceType.HANSARD: hansard_results,
        }
    )


@pytest.fixture
def cache_store() -> FakeCacheStore:
    return FakeCacheStore()


@pytest.fixture
def reranker() -> FakeReranker:
    return FakeReranker()


@pytest.fixture
def pipeline_config() -> PipelineConfig:
    return PipelineConfig()


@pytest.fixture
def build_pipeline(search_backend, structured_store, cache_store, reranker, pipeline_config):
    """Factory for a fully wired pipeline; keyword arguments replace the default fakes."""

    def _build(
        backend: Any = None,
        store: Any = None,
        cache: Any = None,
        ranker: Any = None,
        config: PipelineConfig | None = None,
    ) -> ParliamentContextPipeline:
        config = config or pipeline_config
        store = store or structured_store
        hydrator = Hydrator(store)
        return ParliamentContextPipeline(
            config=config,
            analyzer=QueryAnalyzer(max_reformulations=config.max_reformulations),
            enumeration_handler=EnumerationHandler(store, hydrator=hydrator),
            searcher=MultiQuerySearcher(backend or search_backend),
            ranking=RankingStage(
                ranker or reranker,
                pool_max=config.rerank_pool_max,
                min_rerank_score=config.min_rerank_score,
                diversity_min=config.source_diversity_min,
            ),
            citation_filter=IntentCitationFilter(),
            hydrator=hydrator,
            assembler=ContextAssembler(),
            cache=ResultCache(
                cache or cache_store,
                ttl_seconds=config.cache_ttl_seconds,
                disabled=config.cache_disabled,
                key_version=config.cache_key_version,
            ),
        )

    return _build


# ============================================================
# Factory fixtures
# ============================================================


@pytest.fixture
def result_factory():
    """``make_result`` for tests that build their own candidate pools."""
    return make_result


@pytest.fixture
def backend_factory():
    return FakeSearchBackend


@pytest.fixture
def store_factory():
    return FakeStructuredStore


@pytest.fixture
def cache_store_factory():
    return FakeCacheStore


@pytest.fixture
def reranker_factory():
    return FakeReranker


@pytest.fixture
def container(search_backend, structured_store, reranker, cache_store) -> ApplicationContainer:
    """Container configured from an empty environment, collaborators replaced by fakes."""
    container = create_container({})
    container.search_backend.override(providers.Object(search_backend))
    container.structured_store.override(providers.Object(structured_store))
    container.reranker.override(providers.Object(reranker))
    container.cache_store.override(providers.Object(cache_store))
    return container
