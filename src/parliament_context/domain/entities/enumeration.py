"""
Complete (unsampled) result sets for enumeration queries.

These are returned by the structured store rather than the vector index:
every member vote on a bill's final vote question, or every member of the
House (optionally restricted to one party).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .source_types import Language, PartySlug, VoteType


@dataclass(frozen=True, slots=True)
class MemberVote:
    politician_id: int
    politician_name: str
    party_short: str
    party_name: str
    vote: str
    politician_slug: str = ""
    party_id: int | None = None
    party_slug: str | None = None
    dissent: bool = False


@dataclass(frozen=True, slots=True)
class VoteQuestionInfo:
    id: int
    number: int
    date: str
    session_id: str
    result: str
    description_en: str = ""
    description_fr: str = ""
    yea_total: int = 0
    nay_total: int = 0
    paired_total: int = 0

    def description(self, language: Language) -> str:
        return self.description_fr if language is Language.FR else self.description_en


@dataclass(frozen=True, slots=True)
class BillInfo:
    id: int
    number: str
    session_id: str
    name_en: str = ""
    name_fr: str = ""
    status_code: str = ""

    def name(self, language: Language) -> str:
        return (self.name_fr if language is Language.FR else self.name_en) or self.name_en


@dataclass(frozen=True, slots=True)
class VoteTotals:
    yea: int
    nay: int
    paired: int


def _group_by_party[T: (MemberVote, PoliticianSummary)](items: Iterable[T]) -> dict[str, list[T]]:
    groups: dict[str, list[T]] = {}
    for item in items:
        groups.setdefault(item.party_short, []).append(item)
    return groups


def _in_party(vote: MemberVote, party_slug: PartySlug) -> bool:
    return (vote.party_slug or "").lower() == party_slug.value


@dataclass(frozen=True, slots=True)
class VoteEnumerationResult:
    """All member votes cast on one vote question, after filtering."""

    bill: BillInfo
    vote_question: VoteQuestionInfo
    member_votes: tuple[MemberVote, ...]
    language_used: Language
    vote_type: VoteType | None = None

    @classmethod
    def collect(
        cls,
        bill: BillInfo,
        vote_question: VoteQuestionInfo,
        votes: Iterable[MemberVote],
        language: Language,
        vote_type: VoteType | None = None,
        party_slug: PartySlug | None = None,
    ) -> VoteEnumerationResult:
        """
        Filter by ballot and party, then order by party short name and member.

        A party slug that matches no member's party is ignored rather than
        producing an empty list, mirroring how an unknown party id behaves
        in the structured store.
        """
        pool = list(votes)
        selected = pool
        if vote_type is not None:
            selected = [v for v in selected if v.vote == vote_type.value]
        if party_slug is not None and any(_in_party(v, party_slug) for v in pool):
            selected = [v for v in selected if _in_party(v, party_slug)]
        selected.sort(key=lambda v: (v.party_short, v.politician_name))
        return cls(
            bill=bill,
            vote_question=vote_question,
            member_votes=tuple(selected),
            language_used=language,
            vote_type=vote_type,
        )

    @property
    def totals(self) -> VoteTotals:
        q = self.vote_question
        return VoteTotals(yea=q.yea_total, nay=q.nay_total, paired=q.paired_total)

    @property
    def by_party(self) -> dict[str, list[MemberVote]]:
        """Votes grouped by party short name, parties in alphabetical order."""
        groups = _group_by_party(self.member_votes)
        return {short: groups[short] for short in sorted(groups)}


@dataclass(frozen=True, slots=True)
class PoliticianSummary:
    id: int
    name: str
    party_short: str
    party_name: str
    riding_name: str = ""
    riding_province: str = ""
    slug: str = ""
    party_id: int | None = None


@dataclass(frozen=True, slots=True)
class PoliticianRosterResult:
    """Every sitting member, or every member of one party."""

    politicians: tuple[PoliticianSummary, ...]
    language_used: Language
    party_slug: PartySlug | None = None
    session_id: str | None = None

    @classmethod
    def collect(
        cls,
        politicians: Iterable[PoliticianSummary],
        language: Language,
        party_slug: PartySlug | None = None,
        session_id: str | None = None,
    ) -> PoliticianRosterResult:
        ordered = sorted(politicians, key=lambda p: (p.party_short, p.name))
        return cls(
            politicians=tuple(ordered),
            language_used=language,
            party_slug=party_slug,
            session_id=session_id,
        )

    @property
    def total(self) -> int:
        return len(self.politicians)

    @property
    def by_party(self) -> dict[str, list[PoliticianSummary]]:
        """Members grouped by party short name, largest caucus first."""
        groups = _group_by_party(self.politicians)
        return dict(sorted(groups.items(), key=lambda kv: -len(kv[1])))
