"""
Markdown and citations for enumeration answers.

The vote list renders every member ballot grouped by party, headed by the
vote question summary and a totals table. The roster renders every member
grouped by party, largest caucus first.
"""

from __future__ import annotations

from parliament_context.application.citations import CitationOverrides, build_vote_question_citation
from parliament_context.domain.entities import (
    BilingualCitation,
    Language,
    MemberVote,
    PoliticianRosterResult,
    SourceType,
    VoteEnumerationResult,
    VoteType,
    format_vote_result,
)

MEMBERS_URL_EN = "https://www.ourcommons.ca/members/en"
MEMBERS_URL_FR = "https://www.noscommunes.ca/members/fr"

_BALLOT_ORDER = (VoteType.YEA, VoteType.NAY, VoteType.ABSTAIN, VoteType.PAIRED)


# =============================================================================
# Votes
# =============================================================================


def _vote_type_of(vote: MemberVote) -> VoteType | None:
    try:
        return VoteType(vote.vote)
    except ValueError:
        return None


def format_vote_list_markdown(result: VoteEnumerationResult, language: Language) -> str:
    french = language is Language.FR
    bill = result.bill
    question = result.vote_question
    totals = result.totals
    votes = result.member_votes

    lines = [
        f"# Votes sur le projet de loi {bill.number}" if french else f"# Votes on Bill {bill.number}",
        "",
    ]
    bill_name = bill.name(language)
    if bill_name:
        lines.append(f"**{bill_name}**")
    lines.append(f"**Vote:** #{question.number} - {question.date}")
    description = question.description(language)
    if description:
        lines.append(f"**Description:** {description}")
    result_label = "Résultat" if french else "Result"
    lines.append(f"**{result_label}:** {format_vote_result(question.result, language)}")
    lines.append("")

    lines.append("| Pour | Contre | Jumelés |" if french else "| Yea | Nay | Paired |")
    lines.append("|------|-----|--------|")
    lines.append(f"| {totals.yea} | {totals.nay} | {totals.paired} |")
    lines.append("")

    if result.vote_type is not None:
        label = result.vote_type.label(language)
        lines.append(
            f"## Membres ayant voté {label} ({len(votes)})"
            if french
            else f"## Members who voted {label} ({len(votes)})"
        )
    else:
        lines.append(
            f"## Tous les votes des membres ({len(votes)})"
            if french
            else f"## All Member Votes ({len(votes)})"
        )
    lines.append("")

    for short, party_votes in result.by_party.items():
        lines.append(f"### {party_votes[0].party_name} ({short}) - {len(party_votes)}")
        if result.vote_type is not None:
            lines.append(", ".join(v.politician_name for v in party_votes))
        else:
            for ballot in _BALLOT_ORDER:
                names = [v.politician_name for v in party_votes if _vote_type_of(v) is ballot]
                if names:
                    lines.append(f"**{ballot.label(language)}:** {', '.join(names)}")
        lines.append("")

    return "\n".join(lines)


def build_vote_enumeration_citation(result: VoteEnumerationResult) -> BilingualCitation:
    """The vote question citation, retitled for the complete member list."""
    bill = result.bill
    question = result.vote_question
    count = len(result.member_votes)
    overrides = CitationOverrides(
        title_en=f"Vote #{question.number} on Bill {bill.number}",
        title_fr=f"Vote nº {question.number} sur le projet de loi {bill.number}",
        text_en=f"{count} member votes for {bill.name_en or bill.number}",
        text_fr=f"{count} votes des membres pour {bill.name_fr or bill.name_en or bill.number}",
    )
    return build_vote_question_citation(
        session_id=question.session_id,
        vote_number=question.number,
        date=question.date,
        result=question.result,
        overrides=overrides,
    )


# =============================================================================
# Rosters
# =============================================================================


def format_politician_list_markdown(result: PoliticianRosterResult, language: Language) -> str:
    french = language is Language.FR
    if result.session_id:
        header = (
            f"# Députés de la session {result.session_id}"
            if french
            else f"# MPs in Session {result.session_id}"
        )
    else:
        header = "# Liste des députés" if french else "# List of MPs"

    lines = [
        header,
        "",
        f"**Total:** {result.total} députés" if french else f"**Total:** {result.total} MPs",
        "",
    ]
    for short, members in result.by_party.items():
        lines.append(f"## {members[0].party_name} ({short}) - {len(members)}")
        lines.append(", ".join(m.name for m in members))
        lines.append("")
    return "\n".join(lines)


def build_roster_citation(result: PoliticianRosterResult) -> BilingualCitation:
    if result.party_slug is not None:
        slug = result.party_slug.value
        title_en, title_fr = f"{slug} MPs", f"Députés {slug}"
    else:
        title_en, title_fr = "Current Members of Parliament", "Députés actuels"
    return BilingualCitation(
        source_type=SourceType.POLITICIAN,
        title_en=title_en,
        title_fr=title_fr,
        text_en=f"{result.total} members",
        text_fr=f"{result.total} membres",
        url_en=MEMBERS_URL_EN,
        url_fr=MEMBERS_URL_FR,
    )
