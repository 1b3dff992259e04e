"""
Search result metadata as a tagged union.

Each indexed source type has its own frozen dataclass carrying the
identifying fields needed for citation building and hydration. The
``source_type`` class attribute is the tag.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, ClassVar

from parliament_context.shared.exceptions import ErrorContext, ParseError

from .source_types import Language, SourceType


@dataclass(frozen=True, slots=True, kw_only=True)
class _MetadataBase:
    """Fields common to every indexed chunk."""

    source_type: ClassVar[SourceType]

    source_id: str
    chunk_index: int | None = None
    language: Language | None = None
    date: str | None = None
    title: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"source_type": self.source_type.value}
        for f in fields(self):
            value = getattr(self, f.name)
            data[f.name] = value.value if isinstance(value, Language) else value
        return data


@dataclass(frozen=True, slots=True, kw_only=True)
class BillMetadata(_MetadataBase):
    source_type: ClassVar[SourceType] = SourceType.BILL

    bill_number: str | None = None
    session_id: str | None = None
    bill_title: str | None = None
    name_en: str | None = None
    name_fr: str | None = None
    status_date: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class HansardMetadata(_MetadataBase):
    source_type: ClassVar[SourceType] = SourceType.HANSARD

    statement_id: int | None = None
    speaker_name_en: str | None = None
    speaker_name_fr: str | None = None
    doc_number: str | None = None
    session_id: str | None = None
    name_en: str | None = None
    name_fr: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class VoteQuestionMetadata(_MetadataBase):
    source_type: ClassVar[SourceType] = SourceType.VOTE_QUESTION

    vote_question_id: int | None = None
    vote_number: int | None = None
    session_id: str | None = None
    result: str | None = None
    bill_number: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class PartyVoteMetadata(_MetadataBase):
    source_type: ClassVar[SourceType] = SourceType.VOTE_PARTY

    party_vote_id: int | None = None
    vote_number: int | None = None
    session_id: str | None = None
    result: str | None = None
    party_name_en: str | None = None
    party_name_fr: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class MemberVoteMetadata(_MetadataBase):
    source_type: ClassVar[SourceType] = SourceType.VOTE_MEMBER

    member_vote_id: int | None = None
    vote_number: int | None = None
    session_id: str | None = None
    result: str | None = None
    politician_name: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class PoliticianMetadata(_MetadataBase):
    source_type: ClassVar[SourceType] = SourceType.POLITICIAN

    politician_id: int | None = None
    politician_name: str | None = None
    party_short_en: str | None = None
    party_short_fr: str | None = None
    riding_name_en: str | None = None
    riding_name_fr: str | None = None
    member_id: int | None = None
    slug: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class CommitteeMetadata(_MetadataBase):
    source_type: ClassVar[SourceType] = SourceType.COMMITTEE

    committee_id: int | None = None
    committee_name_en: str | None = None
    committee_name_fr: str | None = None
    committee_slug: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class CommitteeReportMetadata(_MetadataBase):
    source_type: ClassVar[SourceType] = SourceType.COMMITTEE_REPORT

    report_id: int | None = None
    name_en: str | None = None
    name_fr: str | None = None
    committee_name_en: str | None = None
    committee_name_fr: str | None = None
    committee_slug: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class CommitteeMeetingMetadata(_MetadataBase):
    source_type: ClassVar[SourceType] = SourceType.COMMITTEE_MEETING

    meeting_id: int | None = None
    meeting_number: int | None = None
    session_id: str | None = None
    committee_name_en: str | None = None
    committee_name_fr: str | None = None
    committee_slug: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class PartyMetadata(_MetadataBase):
    source_type: ClassVar[SourceType] = SourceType.PARTY

    party_id: int | None = None
    party_name_en: str | None = None
    party_name_fr: str | None = None
    party_short_en: str | None = None
    party_short_fr: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ElectionMetadata(_MetadataBase):
    source_type: ClassVar[SourceType] = SourceType.ELECTION

    election_id: int | None = None
    name_en: str | None = None
    name_fr: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class CandidacyMetadata(_MetadataBase):
    source_type: ClassVar[SourceType] = SourceType.CANDIDACY

    candidacy_id: int | None = None
    politician_name: str | None = None
    riding_name_en: str | None = None
    riding_name_fr: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionMetadata(_MetadataBase):
    source_type: ClassVar[SourceType] = SourceType.SESSION

    session_id: str | None = None
    session_name: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class RidingMetadata(_MetadataBase):
    source_type: ClassVar[SourceType] = SourceType.RIDING

    riding_id: int | None = None
    riding_name_en: str | None = None
    riding_name_fr: str | None = None
    province: str | None = None


type ResultMetadata = (
    BillMetadata
    | HansardMetadata
    | VoteQuestionMetadata
    | PartyVoteMetadata
    | MemberVoteMetadata
    | PoliticianMetadata
    | CommitteeMetadata
    | CommitteeReportMetadata
    | CommitteeMeetingMetadata
    | PartyMetadata
    | ElectionMetadata
    | CandidacyMetadata
    | SessionMetadata
    | RidingMetadata
)

METADATA_TYPES: dict[SourceType, type[_MetadataBase]] = {
    cls.source_type: cls
    for cls in (
        BillMetadata,
        HansardMetadata,
        VoteQuestionMetadata,
        PartyVoteMetadata,
        MemberVoteMetadata,
        PoliticianMetadata,
        CommitteeMetadata,
        CommitteeReportMetadata,
        CommitteeMeetingMetadata,
        PartyMetadata,
        ElectionMetadata,
        CandidacyMetadata,
        SessionMetadata,
        RidingMetadata,
    )
}


def metadata_from_dict(data: dict[str, Any]) -> ResultMetadata:
    """
    Decode a metadata mapping into its tagged variant.

    Unknown keys are ignored so the index can grow fields without breaking
    readers. An unknown or missing ``source_type`` is a ``ParseError``.
    """
    raw_type = data.get("source_type")
    try:
        source_type = SourceType(raw_type)
    except ValueError:
        raise ParseError(
            f"unknown source_type {raw_type!r}",
            source="metadata",
            context=ErrorContext(input_value=raw_type),
        ) from None

    cls = METADATA_TYPES[source_type]
    known = {f.name for f in fields(cls)}
    kwargs = {k: v for k, v in data.items() if k in known}
    if "source_id" not in kwargs:
        raise ParseError("missing source_id", source="metadata")
    kwargs["source_id"] = str(kwargs["source_id"])
    if kwargs.get("language") is not None:
        try:
            kwargs["language"] = Language(kwargs["language"])
        except ValueError:
            kwargs["language"] = None
    return cls(**kwargs)  # type: ignore[return-value]
