"""
Bilingual citation builders, one per indexed source type.

Every builder returns a ``BilingualCitation`` whose EN and FR title and text
are always populated, falling back to the other language and then to a
localized placeholder. URLs point at the official public sites:

    LEGISinfo      https://www.parl.ca/legisinfo/...
    House of Commons https://www.ourcommons.ca/...
    Elections Canada https://www.elections.ca/...

``build_citation`` dispatches over the metadata union with an exhaustive
``match``; adding a metadata variant without a builder is a type error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import assert_never

from parliament_context.domain.entities import (
    BilingualCitation,
    BillMetadata,
    CandidacyMetadata,
    CommitteeMeetingMetadata,
    CommitteeMetadata,
    CommitteeReportMetadata,
    ElectionMetadata,
    HansardMetadata,
    Language,
    MemberVoteMetadata,
    PartyMetadata,
    PartyVoteMetadata,
    PoliticianMetadata,
    ResultMetadata,
    RidingMetadata,
    SessionMetadata,
    SourceType,
    VoteQuestionMetadata,
    format_vote_result,
)
from parliament_context.shared.exceptions import ErrorContext, ParseError

OURCOMMONS = "https://www.ourcommons.ca"
LEGISINFO = "https://www.parl.ca/legisinfo"
ELECTIONS = "https://www.elections.ca/content.aspx"

DEFAULT_SESSION_ID = "44-1"

_UNKNOWN_DATE = ("unknown date", "date inconnue")


@dataclass(frozen=True, slots=True)
class CitationOverrides:
    """Replacement title/text; empty values keep the default."""

    title_en: str | None = None
    title_fr: str | None = None
    text_en: str | None = None
    text_fr: str | None = None


_NO_OVERRIDES = CitationOverrides()


def _first(*values: str | None) -> str:
    for value in values:
        if value:
            return value
    return ""


def _citation(
    source_type: SourceType,
    title: tuple[str, str],
    text: tuple[str, str],
    urls: tuple[str | None, str | None],
    overrides: CitationOverrides | None,
) -> BilingualCitation:
    o = overrides or _NO_OVERRIDES
    return BilingualCitation(
        source_type=source_type,
        title_en=o.title_en or title[0],
        title_fr=o.title_fr or title[1],
        text_en=o.text_en or text[0],
        text_fr=o.text_fr or text[1],
        url_en=urls[0],
        url_fr=urls[1],
    )


def format_ordinal(value: str | int) -> str:
    """1 -> 1st, 2 -> 2nd, 11 -> 11th, 23 -> 23rd. Non-numeric input is returned as-is."""
    try:
        n = int(value)
    except (TypeError, ValueError):
        return str(value)
    if 11 <= n % 100 <= 13:
        return f"{n}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def _split_session(session_id: str) -> tuple[str, str]:
    parliament, _, session = session_id.partition("-")
    return parliament, session


# =============================================================================
# Bills
# =============================================================================


def bill_urls(session_id: str, bill_number: str) -> tuple[str, str]:
    number = bill_number.lower()
    return (
        f"{LEGISINFO}/en/bill/{session_id}/{number}",
        f"{LEGISINFO}/fr/projet-de-loi/{session_id}/{number}",
    )


def build_bill_citation(
    bill_number: str,
    session_id: str,
    bill_title: str | None = None,
    overrides: CitationOverrides | None = None,
) -> BilingualCitation:
    parliament, session = _split_session(session_id)
    p_ord, s_ord = format_ordinal(parliament), format_ordinal(session)
    return _citation(
        SourceType.BILL,
        (bill_title or f"Bill {bill_number}", bill_title or f"Projet de loi {bill_number}"),
        (
            f"[Bill {bill_number}, {p_ord} Parliament, {s_ord} Session]",
            f"[Projet de loi {bill_number}, {p_ord} Parlement, {s_ord} Session]",
        ),
        bill_urls(session_id, bill_number),
        overrides,
    )


# =============================================================================
# Hansard
# =============================================================================


def hansard_urls(session_id: str, doc_number: str | None) -> tuple[str, str]:
    base = f"{OURCOMMONS}/DocumentViewer"
    if not doc_number:
        return (
            f"{base}/en/{session_id}/house/hansard",
            f"{base}/fr/{session_id}/chambre/debats",
        )
    return (
        f"{base}/en/{session_id}/house/sitting-{doc_number}/hansard",
        f"{base}/fr/{session_id}/chambre/seance-{doc_number}/debats",
    )


def build_hansard_citation(
    meta: HansardMetadata,
    overrides: CitationOverrides | None = None,
) -> BilingualCitation:
    date_en = meta.date or _UNKNOWN_DATE[0]
    date_fr = meta.date or _UNKNOWN_DATE[1]
    speaker_en = _first(meta.speaker_name_en, meta.speaker_name_fr, "Unknown Speaker")
    speaker_fr = _first(meta.speaker_name_fr, meta.speaker_name_en, "Orateur inconnu")
    return _citation(
        SourceType.HANSARD,
        (
            _first(meta.name_en, meta.name_fr, "House Debate"),
            _first(meta.name_fr, meta.name_en, "Débat de la Chambre"),
        ),
        (f"[Hansard, {date_en}, {speaker_en}]", f"[Hansard, {date_fr}, {speaker_fr}]"),
        hansard_urls(meta.session_id or DEFAULT_SESSION_ID, meta.doc_number),
        overrides,
    )


# =============================================================================
# Votes
# =============================================================================


def vote_urls(session_id: str, vote_number: int | None) -> tuple[str, str]:
    if not vote_number:
        return (f"{OURCOMMONS}/Members/en/votes", f"{OURCOMMONS}/Members/fr/votes")
    path = session_id.replace("-", "/", 1)
    return (
        f"{OURCOMMONS}/Members/en/votes/{path}/{vote_number}",
        f"{OURCOMMONS}/Members/fr/votes/{path}/{vote_number}",
    )


def _ballot(result: str | None) -> tuple[str, str]:
    if result == "Y":
        return "Yea", "Oui"
    if result == "N":
        return "Nay", "Non"
    return result or "", result or ""


def build_vote_question_citation(
    session_id: str,
    vote_number: int,
    date: str | None = None,
    result: str | None = None,
    title: str | None = None,
    overrides: CitationOverrides | None = None,
) -> BilingualCitation:
    """Citation for a recorded division; enumeration passes richer overrides."""
    date_en = date or _UNKNOWN_DATE[0]
    date_fr = date or _UNKNOWN_DATE[1]
    result_en = format_vote_result(result, Language.EN)
    result_fr = format_vote_result(result, Language.FR)
    return _citation(
        SourceType.VOTE_QUESTION,
        (title or f"Vote #{vote_number}", title or f"Vote nº {vote_number}"),
        (f"[Vote, {date_en}, {result_en}]", f"[Vote, {date_fr}, {result_fr}]"),
        vote_urls(session_id, vote_number),
        overrides,
    )


def build_party_vote_citation(
    meta: PartyVoteMetadata,
    overrides: CitationOverrides | None = None,
) -> BilingualCitation:
    date_en = meta.date or _UNKNOWN_DATE[0]
    date_fr = meta.date or _UNKNOWN_DATE[1]
    party_en = _first(meta.party_name_en, meta.party_name_fr, "Unknown Party")
    party_fr = _first(meta.party_name_fr, meta.party_name_en, "Parti inconnu")
    vote_en, vote_fr = _ballot(meta.result)
    return _citation(
        SourceType.VOTE_PARTY,
        (f"{party_en}: {vote_en}", f"{party_fr}: {vote_fr}"),
        (f"[{party_en} Vote, {date_en}, {vote_en}]", f"[Vote {party_fr}, {date_fr}, {vote_fr}]"),
        vote_urls(meta.session_id or "", meta.vote_number),
        overrides,
    )


def build_member_vote_citation(
    meta: MemberVoteMetadata,
    overrides: CitationOverrides | None = None,
) -> BilingualCitation:
    date_en = meta.date or _UNKNOWN_DATE[0]
    date_fr = meta.date or _UNKNOWN_DATE[1]
    member_en = meta.politician_name or "Unknown Member"
    member_fr = meta.politician_name or "Député inconnu"
    vote_en, vote_fr = _ballot(meta.result)
    return _citation(
        SourceType.VOTE_MEMBER,
        (f"{member_en}: {vote_en}", f"{member_fr}: {vote_fr}"),
        (f"[{member_en}, {date_en}, {vote_en}]", f"[{member_fr}, {date_fr}, {vote_fr}]"),
        vote_urls(meta.session_id or "", meta.vote_number),
        overrides,
    )


# =============================================================================
# Members, parties, ridings
# =============================================================================


def politician_urls(slug: str | None, member_id: int | None) -> tuple[str | None, str | None]:
    if not slug or not member_id:
        return None, None
    return (
        f"{OURCOMMONS}/Members/en/{slug}({member_id})",
        f"{OURCOMMONS}/Members/fr/{slug}({member_id})",
    )


def build_politician_citation(
    meta: PoliticianMetadata,
    overrides: CitationOverrides | None = None,
) -> BilingualCitation:
    name_en = meta.politician_name or "Unknown Politician"
    name_fr = meta.politician_name or "Politicien inconnu"
    parts_en = [name_en]
    parts_fr = [name_fr]
    for en, fr in (
        (meta.party_short_en, meta.party_short_fr),
        (meta.riding_name_en, meta.riding_name_fr),
    ):
        if value := _first(en, fr):
            parts_en.append(value)
        if value := _first(fr, en):
            parts_fr.append(value)
    return _citation(
        SourceType.POLITICIAN,
        (name_en, name_fr),
        (f"[{', '.join(parts_en)}]", f"[{', '.join(parts_fr)}]"),
        politician_urls(meta.slug, meta.member_id),
        overrides,
    )


def build_party_citation(
    meta: PartyMetadata,
    overrides: CitationOverrides | None = None,
) -> BilingualCitation:
    name_en = _first(meta.party_name_en, meta.party_name_fr, "Unknown Party")
    name_fr = _first(meta.party_name_fr, meta.party_name_en, "Parti inconnu")
    short_en = _first(meta.party_short_en, meta.party_short_fr)
    short_fr = _first(meta.party_short_fr, meta.party_short_en)
    return _citation(
        SourceType.PARTY,
        (name_en, name_fr),
        (
            f"[{name_en} ({short_en})]" if short_en else f"[{name_en}]",
            f"[{name_fr} ({short_fr})]" if short_fr else f"[{name_fr}]",
        ),
        (f"{OURCOMMONS}/Members/en/party-standings", f"{OURCOMMONS}/Members/fr/party-standings"),
        overrides,
    )


def build_riding_citation(
    meta: RidingMetadata,
    overrides: CitationOverrides | None = None,
) -> BilingualCitation:
    name_en = _first(meta.riding_name_en, meta.riding_name_fr, "Unknown Riding")
    name_fr = _first(meta.riding_name_fr, meta.riding_name_en, "Circonscription inconnue")
    suffix = f", {meta.province}" if meta.province else ""
    return _citation(
        SourceType.RIDING,
        (name_en, name_fr),
        (f"[{name_en}{suffix}]", f"[{name_fr}{suffix}]"),
        (f"{ELECTIONS}?section=res&dir=cir&lang=e", f"{ELECTIONS}?section=res&dir=cir&lang=f"),
        overrides,
    )


# =============================================================================
# Committees
# =============================================================================


def committee_urls(slug: str | None, suffix: str = "") -> tuple[str, str]:
    if not slug:
        return f"{OURCOMMONS}/Committees/en/", f"{OURCOMMONS}/Committees/fr/"
    return (
        f"{OURCOMMONS}/Committees/en/{slug}{suffix}",
        f"{OURCOMMONS}/Committees/fr/{slug}{suffix}",
    )


def committee_meeting_urls(
    slug: str | None,
    session_id: str | None,
    meeting_number: int | None,
) -> tuple[str, str]:
    if slug and session_id and meeting_number:
        base = f"{OURCOMMONS}/DocumentViewer"
        return (
            f"{base}/en/{session_id}/{slug}/meeting-{meeting_number}/evidence",
            f"{base}/fr/{session_id}/{slug}/reunion-{meeting_number}/temoignages",
        )
    return committee_urls(slug, "/Meetings")


def build_committee_citation(
    meta: CommitteeMetadata,
    overrides: CitationOverrides | None = None,
) -> BilingualCitation:
    name_en = _first(meta.committee_name_en, meta.committee_name_fr, "Unknown Committee")
    name_fr = _first(meta.committee_name_fr, meta.committee_name_en, "Comité inconnu")
    return _citation(
        SourceType.COMMITTEE,
        (name_en, name_fr),
        (f"[Committee: {name_en}]", f"[Comité: {name_fr}]"),
        committee_urls(meta.committee_slug),
        overrides,
    )


def build_committee_report_citation(
    meta: CommitteeReportMetadata,
    overrides: CitationOverrides | None = None,
) -> BilingualCitation:
    title_en = _first(meta.title, meta.name_en, meta.name_fr, "Report")
    title_fr = _first(meta.title, meta.name_fr, meta.name_en, "Rapport")
    committee_en = _first(meta.committee_name_en, meta.committee_name_fr)
    committee_fr = _first(meta.committee_name_fr, meta.committee_name_en)
    in_en = f" ({committee_en})" if committee_en else ""
    in_fr = f" ({committee_fr})" if committee_fr else ""
    return _citation(
        SourceType.COMMITTEE_REPORT,
        (title_en, title_fr),
        (f"[Report: {title_en}{in_en}]", f"[Rapport: {title_fr}{in_fr}]"),
        committee_urls(meta.committee_slug, "/Work"),
        overrides,
    )


def build_committee_meeting_citation(
    meta: CommitteeMeetingMetadata,
    overrides: CitationOverrides | None = None,
) -> BilingualCitation:
    date_en = meta.date or _UNKNOWN_DATE[0]
    date_fr = meta.date or _UNKNOWN_DATE[1]
    committee_en = _first(meta.committee_name_en, meta.committee_name_fr, "Committee")
    committee_fr = _first(meta.committee_name_fr, meta.committee_name_en, "Comité")
    return _citation(
        SourceType.COMMITTEE_MEETING,
        (f"{committee_en} - {date_en}", f"{committee_fr} - {date_fr}"),
        (f"[Meeting: {committee_en}, {date_en}]", f"[Réunion: {committee_fr}, {date_fr}]"),
        committee_meeting_urls(meta.committee_slug, meta.session_id, meta.meeting_number),
        overrides,
    )


# =============================================================================
# Elections and sessions
# =============================================================================

_ELECTION_URLS = (f"{ELECTIONS}?section=ele&lang=e", f"{ELECTIONS}?section=ele&lang=f")


def build_election_citation(
    meta: ElectionMetadata,
    overrides: CitationOverrides | None = None,
) -> BilingualCitation:
    date_en = meta.date or _UNKNOWN_DATE[0]
    date_fr = meta.date or _UNKNOWN_DATE[1]
    return _citation(
        SourceType.ELECTION,
        (
            _first(meta.name_en, meta.name_fr, f"Election {date_en}"),
            _first(meta.name_fr, meta.name_en, f"Élection {date_fr}"),
        ),
        (f"[Election: {date_en}]", f"[Élection: {date_fr}]"),
        _ELECTION_URLS,
        overrides,
    )


def build_candidacy_citation(
    meta: CandidacyMetadata,
    overrides: CitationOverrides | None = None,
) -> BilingualCitation:
    who_en = meta.politician_name or "Unknown Candidate"
    who_fr = meta.politician_name or "Candidat inconnu"
    riding_en = _first(meta.riding_name_en, meta.riding_name_fr, "Unknown Riding")
    riding_fr = _first(meta.riding_name_fr, meta.riding_name_en, "Circonscription inconnue")
    when = f" ({meta.date})" if meta.date else ""
    return _citation(
        SourceType.CANDIDACY,
        (f"{who_en} - {riding_en}", f"{who_fr} - {riding_fr}"),
        (f"[{who_en}, {riding_en}{when}]", f"[{who_fr}, {riding_fr}{when}]"),
        _ELECTION_URLS,
        overrides,
    )


def build_session_citation(
    meta: SessionMetadata,
    overrides: CitationOverrides | None = None,
) -> BilingualCitation:
    session_id = meta.session_id or "Unknown"
    parliament, session = _split_session(session_id)
    if meta.session_name:
        title_en = title_fr = meta.session_name
    elif parliament and session:
        p_ord, s_ord = format_ordinal(parliament), format_ordinal(session)
        title_en = f"{p_ord} Parliament, {s_ord} Session"
        title_fr = f"{p_ord} Parlement, {s_ord} Session"
    else:
        title_en = title_fr = session_id
    return _citation(
        SourceType.SESSION,
        (title_en, title_fr),
        (f"[Session {session_id}]", f"[Session {session_id}]"),
        (f"{LEGISINFO}/en/overview/{session_id}", f"{LEGISINFO}/fr/apercu/{session_id}"),
        overrides,
    )


# =============================================================================
# Dispatch
# =============================================================================


def build_citation(
    meta: ResultMetadata,
    overrides: CitationOverrides | None = None,
) -> BilingualCitation:
    """
    Build the citation for any search-result metadata variant.

    Raises:
        ParseError: bill metadata without a bill number or session id
    """
    match meta:
        case BillMetadata():
            if not meta.bill_number or not meta.session_id:
                raise ParseError(
                    "Bill metadata must include bill_number and session_id",
                    source="citation",
                    context=ErrorContext(input_value=meta.source_id),
                )
            return build_bill_citation(meta.bill_number, meta.session_id, meta.bill_title, overrides)
        case HansardMetadata():
            return build_hansard_citation(meta, overrides)
        case VoteQuestionMetadata():
            return build_vote_question_citation(
                meta.session_id or "",
                meta.vote_number or meta.vote_question_id or 0,
                date=meta.date,
                result=meta.result,
                title=meta.title,
                overrides=overrides,
            )
        case PartyVoteMetadata():
            return build_party_vote_citation(meta, overrides)
        case MemberVoteMetadata():
            return build_member_vote_citation(meta, overrides)
        case PoliticianMetadata():
            return build_politician_citation(meta, overrides)
        case CommitteeMetadata():
            return build_committee_citation(meta, overrides)
        case CommitteeReportMetadata():
            return build_committee_report_citation(meta, overrides)
        case CommitteeMeetingMetadata():
            return build_committee_meeting_citation(meta, overrides)
        case PartyMetadata():
            return build_party_citation(meta, overrides)
        case ElectionMetadata():
            return build_election_citation(meta, overrides)
        case CandidacyMetadata():
            return build_candidacy_citation(meta, overrides)
        case SessionMetadata():
            return build_session_citation(meta, overrides)
        case RidingMetadata():
            return build_riding_citation(meta, overrides)
        case _:
            assert_never(meta)
