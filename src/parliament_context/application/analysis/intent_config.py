"""
Per-intent search scope, citation allow-list and slot layout.

The allow-list is the hard guarantee of the pipeline: a result whose source
type is not allowed for the detected intent is never cited, however well it
scored. ``allowed_citations=None`` means every type is allowed.
"""

from __future__ import annotations

from dataclasses import dataclass

from parliament_context.domain.entities import PriorityIntent, SourceType

S = SourceType


@dataclass(frozen=True, slots=True)
class IntentConfig:
    search_types: tuple[SourceType, ...]
    allowed_citations: frozenset[SourceType] | None
    description: str


@dataclass(frozen=True, slots=True)
class SlotConfig:
    """Primary types fill the first slots; secondary types are capped."""

    primary: tuple[SourceType, ...]
    secondary: tuple[SourceType, ...]
    secondary_cap: int


INTENT_CONFIG: dict[PriorityIntent, IntentConfig] = {
    # "Tell me about Bill C-35": bill content plus the final vote outcome
    PriorityIntent.BILL_FOCUSED: IntentConfig(
        search_types=(S.BILL, S.VOTE_QUESTION),
        allowed_citations=frozenset({S.BILL, S.VOTE_QUESTION}),
        description="Bill content + vote outcome",
    ),
    # "How did the NDP vote on C-11?"
    PriorityIntent.VOTE_FOCUSED: IntentConfig(
        search_types=(S.VOTE_QUESTION, S.VOTE_PARTY, S.VOTE_MEMBER, S.BILL),
        allowed_citations=frozenset({S.VOTE_QUESTION, S.VOTE_PARTY, S.VOTE_MEMBER, S.BILL}),
        description="Vote results + party/member breakdowns + bill context",
    ),
    # "What did Poilievre say about housing?"
    PriorityIntent.MP_STATEMENT: IntentConfig(
        search_types=(S.HANSARD, S.POLITICIAN),
        allowed_citations=frozenset({S.HANSARD, S.POLITICIAN}),
        description="What MPs said in debates + who they are",
    ),
    # "Who is the MP for Toronto Centre?"
    PriorityIntent.MP_INFO: IntentConfig(
        search_types=(S.POLITICIAN, S.RIDING, S.PARTY),
        allowed_citations=frozenset({S.POLITICIAN, S.RIDING, S.PARTY}),
        description="MP biography + riding + party info",
    ),
    PriorityIntent.COMMITTEE_FOCUSED: IntentConfig(
        search_types=(S.COMMITTEE, S.COMMITTEE_REPORT, S.COMMITTEE_MEETING),
        allowed_citations=frozenset({S.COMMITTEE, S.COMMITTEE_REPORT, S.COMMITTEE_MEETING}),
        description="Committee work, reports, and meetings",
    ),
    PriorityIntent.GENERAL: IntentConfig(
        search_types=(S.BILL, S.HANSARD, S.VOTE_QUESTION, S.POLITICIAN, S.COMMITTEE),
        allowed_citations=None,
        description="Balanced mix for exploratory queries",
    ),
}

SLOT_CONFIG: dict[PriorityIntent, SlotConfig] = {
    PriorityIntent.BILL_FOCUSED: SlotConfig((S.BILL, S.VOTE_QUESTION), (S.HANSARD, S.COMMITTEE), 2),
    PriorityIntent.VOTE_FOCUSED: SlotConfig(
        (S.VOTE_QUESTION, S.VOTE_MEMBER, S.VOTE_PARTY, S.BILL), (S.HANSARD,), 1
    ),
    PriorityIntent.MP_STATEMENT: SlotConfig(
        (S.HANSARD, S.POLITICIAN, S.RIDING), (S.BILL, S.VOTE_QUESTION), 2
    ),
    PriorityIntent.MP_INFO: SlotConfig((S.POLITICIAN, S.RIDING, S.PARTY), (), 0),
    PriorityIntent.COMMITTEE_FOCUSED: SlotConfig(
        (S.COMMITTEE, S.COMMITTEE_REPORT, S.COMMITTEE_MEETING), (S.BILL,), 2
    ),
    PriorityIntent.GENERAL: SlotConfig((), (), 10),
}


def search_types_for_intent(intent: PriorityIntent) -> tuple[SourceType, ...]:
    return INTENT_CONFIG[intent].search_types


def allowed_citations_for_intent(intent: PriorityIntent) -> frozenset[SourceType] | None:
    return INTENT_CONFIG[intent].allowed_citations


def slot_config_for_intent(intent: PriorityIntent) -> SlotConfig:
    return SLOT_CONFIG[intent]


def is_citable(source_type: SourceType, intent: PriorityIntent) -> bool:
    allowed = INTENT_CONFIG[intent].allowed_citations
    return allowed is None or source_type in allowed

