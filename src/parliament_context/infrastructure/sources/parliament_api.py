"""
Parliament Data API Integration

HTTP adapter over the external structured store and vector index. It
implements both the ``SearchBackend`` and ``StructuredStore`` ports.

Endpoints (JSON, relative to the configured base URL):
    POST /search                         per-type similarity search
    GET  /bills/{number}/member-votes    every ballot on the bill's final vote
    GET  /politicians                    roster, optionally by party
    POST /hydrate                        canonical document as markdown

A 404 means "no data" and maps to ``None``. Search rows whose metadata
cannot be decoded are skipped with a warning; the rest of the page is kept.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from parliament_context.application.citations import build_citation
from parliament_context.domain.entities import (
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
    metadata_from_dict,
)
from parliament_context.shared.exceptions import ErrorContext, ParseError

from .base_client import BaseAPIClient

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080/api/v1"


# =============================================================================
# Payload decoding
# =============================================================================


def parse_search_row(row: Mapping[str, Any]) -> SearchResult:
    """Decode one search hit and render its bilingual citation."""
    try:
        metadata = metadata_from_dict(dict(row["metadata"]))
        similarity = float(row.get("similarity", 0.0))
        content = str(row.get("content", ""))
    except (KeyError, TypeError, ValueError) as e:
        raise ParseError(str(e), source="search") from e
    return SearchResult(
        content=content,
        metadata=metadata,
        similarity=similarity,
        citation=build_citation(metadata),
    )


def _bill_info(data: Mapping[str, Any]) -> BillInfo:
    return BillInfo(
        id=int(data["id"]),
        number=str(data["number"]),
        session_id=str(data["session_id"]),
        name_en=data.get("name_en") or "",
        name_fr=data.get("name_fr") or "",
        status_code=data.get("status_code") or "",
    )


def _vote_question_info(data: Mapping[str, Any]) -> VoteQuestionInfo:
    return VoteQuestionInfo(
        id=int(data["id"]),
        number=int(data["number"]),
        date=str(data.get("date") or ""),
        session_id=str(data["session_id"]),
        result=str(data.get("result") or ""),
        description_en=data.get("description_en") or "",
        description_fr=data.get("description_fr") or "",
        yea_total=int(data.get("yea_total") or 0),
        nay_total=int(data.get("nay_total") or 0),
        paired_total=int(data.get("paired_total") or 0),
    )


def _member_vote(data: Mapping[str, Any], language: Language) -> MemberVote:
    french = language is Language.FR
    party_short = data.get("party_short_fr") if french else data.get("party_short_en")
    party_name = data.get("party_name_fr") if french else data.get("party_name_en")
    return MemberVote(
        politician_id=int(data["politician_id"]),
        politician_name=str(data["politician_name"]),
        party_short=party_short or data.get("party_short_en") or "",
        party_name=party_name or data.get("party_name_en") or "",
        vote=str(data["vote"]),
        politician_slug=data.get("politician_slug") or "",
        party_id=data.get("party_id"),
        party_slug=data.get("party_slug"),
        dissent=bool(data.get("dissent", False)),
    )


def _politician_summary(data: Mapping[str, Any], language: Language) -> PoliticianSummary:
    french = language is Language.FR
    party_short = data.get("party_short_fr") if french else data.get("party_short_en")
    party_name = data.get("party_name_fr") if french else data.get("party_name_en")
    riding = data.get("riding_name_fr") if french else data.get("riding_name_en")
    return PoliticianSummary(
        id=int(data["id"]),
        name=str(data["name"]),
        party_short=party_short or data.get("party_short_en") or "",
        party_name=party_name or data.get("party_name_en") or "",
        riding_name=riding or data.get("riding_name_en") or "",
        riding_province=data.get("riding_province") or "",
        slug=data.get("slug") or "",
        party_id=data.get("party_id"),
    )


def parse_vote_enumeration(
    payload: Mapping[str, Any],
    language: Language,
    vote_type: VoteType | None,
    party_slug: PartySlug | None,
) -> VoteEnumerationResult:
    try:
        bill = _bill_info(payload["bill"])
        question = _vote_question_info(payload["vote_question"])
        votes = [_member_vote(v, language) for v in payload.get("member_votes", [])]
    except (KeyError, TypeError, ValueError) as e:
        raise ParseError(str(e), source="member-votes") from e
    return VoteEnumerationResult.collect(bill, question, votes, language, vote_type, party_slug)


def parse_roster(
    payload: Mapping[str, Any],
    language: Language,
    party_slug: PartySlug | None,
) -> PoliticianRosterResult:
    try:
        politicians = [_politician_summary(p, language) for p in payload.get("politicians", [])]
    except (KeyError, TypeError, ValueError) as e:
        raise ParseError(str(e), source="politicians") from e
    return PoliticianRosterResult.collect(
        politicians, language, party_slug=party_slug, session_id=payload.get("session_id")
    )


def parse_hydrated(payload: Mapping[str, Any], requested: Language) -> HydratedDocument:
    try:
        markdown = str(payload["markdown"])
        language_used = Language(payload.get("language_used") or requested.value)
    except (KeyError, ValueError) as e:
        raise ParseError(str(e), source="hydrate") from e
    return HydratedDocument(markdown=markdown, language_used=language_used, note=payload.get("note"))


# =============================================================================
# Client
# =============================================================================


class ParliamentAPIClient(BaseAPIClient):
    """
    Parliament data service client.

    Usage:
        async with ParliamentAPIClient(base_url, api_key) as client:
            hits = await client.search(SourceType.BILL, "Bill C-35", 25, 50)
    """

    _service_name = "ParliamentAPI"

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        api_key: str | None = None,
        timeout: float = 15.0,
        **kwargs: Any,
    ) -> None:
        headers = {"Accept": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        super().__init__(base_url=base_url, timeout=timeout, headers=headers, **kwargs)

    # ----- SearchBackend -----

    async def search(
        self,
        source_type: SourceType,
        query: str,
        limit: int,
        candidate_budget: int,
    ) -> list[SearchResult]:
        payload = await self._make_request(
            "/search",
            method="POST",
            data={
                "source_type": source_type.value,
                "query": query,
                "limit": limit,
                "candidate_budget": candidate_budget,
            },
        )
        if not payload:
            return []

        results: list[SearchResult] = []
        for row in payload.get("results", []):
            try:
                results.append(parse_search_row(row))
            except ParseError as e:
                logger.warning("Skipping %s search row: %s", source_type.value, e)
        return results

    # ----- StructuredStore -----

    async def get_complete_member_votes_for_bill(
        self,
        bill_number: str,
        vote_type: VoteType | None,
        party_slug: PartySlug | None,
        language: Language,
        session_id: str | None = None,
    ) -> VoteEnumerationResult | None:
        # Full vote list; filters apply in VoteEnumerationResult.collect
        payload = await self._make_request(
            f"/bills/{bill_number.upper()}/member-votes",
            params={"lang": language.value, "session": session_id},
        )
        if not payload or not payload.get("vote_question"):
            return None
        return parse_vote_enumeration(payload, language, vote_type, party_slug)

    async def get_all_politicians(
        self,
        party_slug: PartySlug | None,
        current_only: bool,
        language: Language,
    ) -> PoliticianRosterResult | None:
        payload = await self._make_request(
            "/politicians",
            params={
                "party": party_slug.value if party_slug else None,
                "current": "true" if current_only else "false",
                "lang": language.value,
            },
        )
        if not payload:
            return None
        roster = parse_roster(payload, language, party_slug)
        return roster if roster.total else None

    async def get_hydrated_markdown(
        self,
        source_type: SourceType,
        identity: Mapping[str, str | int],
        language: Language,
    ) -> HydratedDocument | None:
        if not identity:
            raise ParseError(
                "hydration needs identifying fields",
                source="hydrate",
                context=ErrorContext(input_value=source_type.value),
            )
        payload = await self._make_request(
            "/hydrate",
            method="POST",
            data={
                "source_type": source_type.value,
                "identity": dict(identity),
                "language": language.value,
            },
        )
        if not payload:
            return None
        return parse_hydrated(payload, language)
