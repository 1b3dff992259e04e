"""
EnumerationHandler - short-circuit path for "list them all" queries.

A vote enumeration answers with every member ballot on a bill's final vote
question; a politician enumeration answers with the full roster, optionally
restricted to one party. Either produces exactly one citation.

``None`` means "no structured data for this intent": the caller re-derives
the skipped analysis fields and falls through to ordinary search. Committee
enumeration is recognised by the analyzer but has no structured source yet
and always returns ``None``.
"""

from __future__ import annotations

import logging

from parliament_context.application.hydration import Hydrator, bill_target
from parliament_context.domain.entities import (
    Citation,
    EnumerationIntent,
    EnumerationKind,
    HydratedSource,
    Language,
    ParliamentContextResult,
    VoteEnumerationResult,
)
from parliament_context.domain.ports import StructuredStore

from .builders import (
    build_roster_citation,
    build_vote_enumeration_citation,
    format_politician_list_markdown,
    format_vote_list_markdown,
)

logger = logging.getLogger(__name__)


class EnumerationHandler:
    def __init__(self, store: StructuredStore, hydrator: Hydrator | None = None):
        self._store = store
        self._hydrator = hydrator or Hydrator(store)

    async def handle(
        self,
        enumeration: EnumerationIntent,
        language: Language,
    ) -> ParliamentContextResult | None:
        if not enumeration.is_enumeration:
            return None
        match enumeration.kind:
            case EnumerationKind.VOTE:
                return await self._handle_votes(enumeration, language)
            case EnumerationKind.POLITICIAN:
                return await self._handle_politicians(enumeration, language)
            case EnumerationKind.COMMITTEE:
                logger.info("Committee enumeration not supported, falling back to search")
                return None
            case None:
                return None

    async def _handle_votes(
        self,
        enumeration: EnumerationIntent,
        language: Language,
    ) -> ParliamentContextResult | None:
        if not enumeration.bill_number:
            return None
        requested = language.preferred
        result = await self._store.get_complete_member_votes_for_bill(
            enumeration.bill_number,
            enumeration.vote_type,
            enumeration.party_slug,
            requested,
            session_id=enumeration.session_id,
        )
        if result is None:
            logger.info("No vote data for bill %s, falling back to search", enumeration.bill_number)
            return None

        citation = Citation.numbered(1, build_vote_enumeration_citation(result))
        hydrated = await self._hydrate_bill(result, language)
        logger.info(
            "Vote enumeration for %s: %d member votes",
            result.bill.number,
            len(result.member_votes),
        )
        return ParliamentContextResult(
            language=requested,
            prompt=format_vote_list_markdown(result, requested),
            citations=(citation,),
            hydrated_sources=(hydrated,) if hydrated is not None else (),
        )

    async def _hydrate_bill(
        self,
        result: VoteEnumerationResult,
        language: Language,
    ) -> HydratedSource | None:
        """Best effort; the vote citation stands on its own."""
        target = bill_target(result.bill.number, result.bill.session_id)
        if target is None:
            logger.debug("Bill session %r not hydratable", result.bill.session_id)
            return None
        try:
            return await self._hydrator.hydrate_target(target, language)
        except Exception as e:
            logger.warning("Bill hydration failed for %s: %s", target.id, e)
            return None

    async def _handle_politicians(
        self,
        enumeration: EnumerationIntent,
        language: Language,
    ) -> ParliamentContextResult | None:
        requested = language.preferred
        party = enumeration.party_slug
        roster = await self._store.get_all_politicians(party, party is None, requested)
        if roster is None or roster.total == 0:
            logger.info("No roster for party=%s, falling back to search", party)
            return None

        citation = Citation.numbered(1, build_roster_citation(roster))
        logger.info("Politician enumeration: %d members", roster.total)
        return ParliamentContextResult(
            language=requested,
            prompt=format_politician_list_markdown(roster, requested),
            citations=(citation,),
        )
