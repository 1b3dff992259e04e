"""
Domain Entities

Value objects passed between pipeline stages.
"""

from __future__ import annotations

from .analysis import EnumerationIntent, QueryAnalysis, QueryEntities
from .context import (
    CITATION_PREFIX,
    Citation,
    HydratedDocument,
    HydratedSource,
    ParliamentContextResult,
)
from .enumeration import (
    BillInfo,
    MemberVote,
    PoliticianRosterResult,
    PoliticianSummary,
    VoteEnumerationResult,
    VoteQuestionInfo,
    VoteTotals,
)
from .metadata import (
    METADATA_TYPES,
    BillMetadata,
    CandidacyMetadata,
    CommitteeMeetingMetadata,
    CommitteeMetadata,
    CommitteeReportMetadata,
    ElectionMetadata,
    HansardMetadata,
    MemberVoteMetadata,
    PartyMetadata,
    PartyVoteMetadata,
    PoliticianMetadata,
    ResultMetadata,
    RidingMetadata,
    SessionMetadata,
    VoteQuestionMetadata,
    metadata_from_dict,
)
from .search import BilingualCitation, SearchResult
from .source_types import (
    EnumerationKind,
    Language,
    PartySlug,
    PriorityIntent,
    SourceType,
    VoteType,
    format_vote_result,
)

__all__ = [
    # Enumerations
    "SourceType",
    "Language",
    "PriorityIntent",
    "EnumerationKind",
    "VoteType",
    "PartySlug",
    "format_vote_result",
    # Metadata union
    "ResultMetadata",
    "METADATA_TYPES",
    "metadata_from_dict",
    "BillMetadata",
    "HansardMetadata",
    "VoteQuestionMetadata",
    "PartyVoteMetadata",
    "MemberVoteMetadata",
    "PoliticianMetadata",
    "CommitteeMetadata",
    "CommitteeReportMetadata",
    "CommitteeMeetingMetadata",
    "PartyMetadata",
    "ElectionMetadata",
    "CandidacyMetadata",
    "SessionMetadata",
    "RidingMetadata",
    # Search
    "SearchResult",
    "BilingualCitation",
    # Analysis
    "QueryAnalysis",
    "QueryEntities",
    "EnumerationIntent",
    # Enumeration results
    "MemberVote",
    "VoteQuestionInfo",
    "BillInfo",
    "VoteTotals",
    "VoteEnumerationResult",
    "PoliticianSummary",
    "PoliticianRosterResult",
    # Output
    "CITATION_PREFIX",
    "Citation",
    "HydratedDocument",
    "HydratedSource",
    "ParliamentContextResult",
]
