"""
Hydrator - full canonical documents for the top hit of each source type.

For every distinct source type among the filtered results, the first result
whose identifying fields are present is hydrated through the structured
store. All fetches run concurrently behind one join barrier; a fetch that
returns nothing or raises simply leaves that type out.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import assert_never

from parliament_context.domain.entities import (
    BillMetadata,
    CandidacyMetadata,
    CommitteeMeetingMetadata,
    CommitteeMetadata,
    CommitteeReportMetadata,
    ElectionMetadata,
    HansardMetadata,
    HydratedSource,
    Language,
    MemberVoteMetadata,
    PartyMetadata,
    PartyVoteMetadata,
    PoliticianMetadata,
    ResultMetadata,
    RidingMetadata,
    SearchResult,
    SessionMetadata,
    SourceType,
    VoteQuestionMetadata,
)
from parliament_context.domain.ports import StructuredStore
from parliament_context.shared.async_utils import gather_with_errors

logger = logging.getLogger(__name__)

FALLBACK_NOTES = {
    Language.FR: "French text not available; using English source text.",
    Language.EN: "English text not available; using French source text.",
}


@dataclass(frozen=True, slots=True)
class HydrationTarget:
    """What to ask the structured store for, and how to label the answer."""

    source_type: SourceType
    id: str
    identity: dict[str, str | int]


def parse_session_id(session_id: str | None) -> tuple[int, int] | None:
    """``"44-1"`` -> ``(44, 1)``; anything else -> ``None``."""
    if not session_id:
        return None
    parliament, sep, session = session_id.partition("-")
    if not sep:
        return None
    try:
        return int(parliament), int(session)
    except ValueError:
        return None


def bill_target(bill_number: str | None, session_id: str | None) -> HydrationTarget | None:
    parsed = parse_session_id(session_id)
    if not bill_number or parsed is None:
        return None
    parliament, session = parsed
    return HydrationTarget(
        source_type=SourceType.BILL,
        id=f"bill-{bill_number}-{session_id}",
        identity={"bill_number": bill_number, "parliament": parliament, "session": session},
    )


def _by_id(source_type: SourceType, field_name: str, value: str | int | None) -> HydrationTarget | None:
    if not value:
        return None
    return HydrationTarget(
        source_type=source_type,
        id=f"{source_type.value}-{value}",
        identity={field_name: value},
    )


def hydration_target(meta: ResultMetadata) -> HydrationTarget | None:
    """Identity of the canonical document behind a search hit, if complete."""
    match meta:
        case BillMetadata():
            return bill_target(meta.bill_number, meta.session_id)
        case HansardMetadata():
            return _by_id(SourceType.HANSARD, "statement_id", meta.statement_id)
        case VoteQuestionMetadata():
            return _by_id(SourceType.VOTE_QUESTION, "vote_question_id", meta.vote_question_id)
        case PartyVoteMetadata():
            return _by_id(SourceType.VOTE_PARTY, "party_vote_id", meta.party_vote_id)
        case MemberVoteMetadata():
            return _by_id(SourceType.VOTE_MEMBER, "member_vote_id", meta.member_vote_id)
        case PoliticianMetadata():
            return _by_id(SourceType.POLITICIAN, "politician_id", meta.politician_id)
        case CommitteeMetadata():
            return _by_id(SourceType.COMMITTEE, "committee_id", meta.committee_id)
        case CommitteeReportMetadata():
            return _by_id(SourceType.COMMITTEE_REPORT, "report_id", meta.report_id)
        case CommitteeMeetingMetadata():
            return _by_id(SourceType.COMMITTEE_MEETING, "meeting_id", meta.meeting_id)
        case PartyMetadata():
            return _by_id(SourceType.PARTY, "party_id", meta.party_id)
        case ElectionMetadata():
            return _by_id(SourceType.ELECTION, "election_id", meta.election_id)
        case CandidacyMetadata():
            return _by_id(SourceType.CANDIDACY, "candidacy_id", meta.candidacy_id)
        case SessionMetadata():
            return _by_id(SourceType.SESSION, "session_id", meta.session_id)
        case RidingMetadata():
            return _by_id(SourceType.RIDING, "riding_id", meta.riding_id)
        case _:
            assert_never(meta)


def select_targets(results: Sequence[SearchResult]) -> list[HydrationTarget]:
    """First hydratable result per source type, in order of first appearance."""
    targets: dict[SourceType, HydrationTarget] = {}
    for result in results:
        if result.source_type in targets:
            continue
        target = hydration_target(result.metadata)
        if target is not None:
            targets[result.source_type] = target
    return list(targets.values())


class Hydrator:
    """Fetches hydrated documents through the structured store."""

    def __init__(self, store: StructuredStore):
        self._store = store

    async def hydrate_target(
        self,
        target: HydrationTarget,
        language: Language,
    ) -> HydratedSource | None:
        """Fetch one document; ``None`` when the store has nothing for it."""
        requested = language.preferred
        document = await self._store.get_hydrated_markdown(
            target.source_type, target.identity, requested
        )
        if document is None:
            return None
        note = document.note
        if note is None and document.language_used is not requested:
            note = FALLBACK_NOTES[requested]
        return HydratedSource(
            source_type=target.source_type,
            id=target.id,
            markdown=document.markdown,
            language_used=document.language_used,
            note=note,
        )

    async def hydrate_top_per_type(
        self,
        results: Sequence[SearchResult],
        language: Language,
    ) -> list[HydratedSource]:
        targets = select_targets(results)
        if not targets:
            return []

        t0 = time.perf_counter()
        outcomes = await gather_with_errors(
            *(self.hydrate_target(t, language) for t in targets),
            return_exceptions=True,
        )

        hydrated: list[HydratedSource] = []
        for target, outcome in zip(targets, outcomes, strict=True):
            if isinstance(outcome, Exception):
                logger.warning("Hydration failed for %s: %s", target.id, outcome)
                continue
            if outcome is not None:
                hydrated.append(outcome)

        logger.debug(
            "hydration: %d targets -> %d hydrated (%.0fms)",
            len(targets),
            len(hydrated),
            (time.perf_counter() - t0) * 1000,
        )
        return hydrated
