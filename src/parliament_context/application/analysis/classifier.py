"""
HeuristicQueryClassifier - pattern-based classification of Parliament queries.

Purely local: regular expressions and keyword lists in English and French,
no model calls. Coverage of query phrasings is best-effort; the classifier
sits behind the ``QueryClassifier`` protocol so it can be replaced.

Example:
    >>> c = HeuristicQueryClassifier()
    >>> c.detect_language("Qu'est-ce que le projet de loi C-35 ?")
    (<Language.FR: 'fr'>, 0.8)
    >>> c.detect_enumeration("who voted yea for bill c-35", ("C-35",)).vote_type
    <VoteType.YEA: 'Y'>
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from parliament_context.domain.entities import (
    EnumerationIntent,
    EnumerationKind,
    Language,
    PartySlug,
    PriorityIntent,
    SourceType,
    VoteType,
)


def _words(*alternatives: str) -> re.Pattern[str]:
    return re.compile(r"\b(?:" + "|".join(alternatives) + r")\b", re.IGNORECASE)


class HeuristicQueryClassifier:
    """
    Default ``QueryClassifier``.

    Intent precedence: committee, vote, statement, bill, MP info, general.
    A query such as "Finance Committee report on C-69" therefore resolves to
    committee work even though it names a bill.
    """

    # Language
    FRENCH_WORD_PATTERN = _words(
        "le", "la", "les", "de", "du", "des", "un", "une", "que", "qui", "est",
        "sont", "pour", "dans", "avec", "sur", "par", "ce", "cette", "ces", "au",
        "aux", "en", "et", "ou", "mais", "donc", "projet de loi", "parlement",
        "député", "gouvernement", "ministre",
    )
    FRENCH_ACCENT_PATTERN = re.compile(r"[àâäéèêëïîôùûüÿœæç]", re.IGNORECASE)
    FRENCH_CONFIDENCE = 0.8
    ENGLISH_CONFIDENCE = 0.7

    # Entities
    BILL_NUMBER_PATTERN = re.compile(r"\b([CS]-\d+)\b", re.IGNORECASE)
    PARLIAMENT_PATTERN = re.compile(
        r"\b(\d{1,2})(?:st|nd|rd|th|e|ème|ieme|ième)?\s+(?:parliament|parlement|législature)\b",
        re.IGNORECASE,
    )
    SESSION_PATTERN = re.compile(
        r"\b(\d)(?:st|nd|rd|th|re|e|ème|ième)?\s+session\b",
        re.IGNORECASE,
    )

    # Intent keywords
    COMMITTEE_PATTERN = _words(r"committees?", r"comités?")
    VOTE_PATTERN = _words(
        r"vot(?:e|es|ed|ing)", "yea", "yeas", "nay", "nays", "division",
        r"scrutins?", r"voté\w*", r"votants?", "abstained", r"paired",
    )
    STATEMENT_PATTERN = _words(
        "say", "said", "says", r"speech(?:es)?", r"debat(?:e|es|ed)", "hansard",
        r"statements?", "remarks", "dit", r"déclar\w*", "discours", r"débat\w*",
        "propos",
    )
    BILL_PATTERN = _words(r"bills?", r"projets? de loi")
    MP_INFO_PATTERN = _words(
        "mp", "mps", r"members? of parliament", "who is", r"ministers?", r"ridings?",
        r"députés?", "qui est", r"ministres?", r"circonscriptions?", "leader", "chef",
    )

    # Types mentioned explicitly, added to the intent's search scope
    MENTIONED_TYPE_PATTERNS: tuple[tuple[re.Pattern[str], tuple[SourceType, ...]], ...] = (
        (_words(r"part(?:y|ies)", r"partis?", "caucus"), (SourceType.PARTY,)),
        (
            _words(r"ridings?", "constituency", "electoral district", r"circonscriptions?"),
            (SourceType.RIDING,),
        ),
        (
            _words(r"elections?", r"élections?", r"candidat(?:e|es|s)?", r"candidates?", "campaign"),
            (SourceType.ELECTION, SourceType.CANDIDACY),
        ),
        (_words(r"sessions?", "législature"), (SourceType.SESSION,)),
    )

    # Enumeration
    ENUMERATION_CUE_PATTERN = _words(
        "list", "all", "every", "each", "who voted", "tous", "toutes", "chaque",
        "liste", "qui a voté", "ont voté",
    )
    ROSTER_PATTERN = _words(
        "mps", "members", "members of parliament", "politicians", r"députés", r"membres",
    )
    VOTE_TYPE_PATTERNS: tuple[tuple[re.Pattern[str], VoteType], ...] = (
        (_words("paired", r"jumelé\w*"), VoteType.PAIRED),
        (_words(r"abstain\w*", r"abstention\w*", r"abstenu\w*"), VoteType.ABSTAIN),
        (_words("nay", "nays", "against", "opposed", "contre"), VoteType.NAY),
        (
            _words("yea", "yeas", "yes", r"in favou?r", "voted for", "supported", r"voté pour"),
            VoteType.YEA,
        ),
    )
    PARTY_PATTERNS: tuple[tuple[re.Pattern[str], PartySlug], ...] = (
        (_words(r"liberals?", r"libéra(?:l|le|ux|les)"), PartySlug.LIBERAL),
        (_words(r"conservatives?", r"conservat(?:eur|eurs|rice|rices)", r"tor(?:y|ies)"), PartySlug.CONSERVATIVE),
        (_words("ndp", "npd", r"new democrats?", r"néo-démocrates?"), PartySlug.NDP),
        (_words("bloc", "bq"), PartySlug.BQ),
        (_words("green", "greens", "vert", "verts", "verte"), PartySlug.GREEN),
        (_words(r"independents?", r"indépendant(?:e|s|es)?"), PartySlug.INDEPENDENT),
    )

    # ------------------------------------------------------------------

    def detect_language(self, query: str) -> tuple[Language, float]:
        """French when two French words appear, or one plus an accent."""
        if not query.strip():
            return Language.EN, 0.0
        french_count = len(self.FRENCH_WORD_PATTERN.findall(query))
        has_accents = bool(self.FRENCH_ACCENT_PATTERN.search(query))
        if french_count >= 2 or (french_count >= 1 and has_accents):
            return Language.FR, self.FRENCH_CONFIDENCE
        return Language.EN, self.ENGLISH_CONFIDENCE

    def extract_bill_numbers(self, query: str) -> tuple[str, ...]:
        seen: dict[str, None] = {}
        for match in self.BILL_NUMBER_PATTERN.findall(query):
            seen.setdefault(match.upper(), None)
        return tuple(seen)

    def classify_intent(self, query: str, bill_numbers: Sequence[str]) -> PriorityIntent:
        if self.COMMITTEE_PATTERN.search(query):
            return PriorityIntent.COMMITTEE_FOCUSED
        if self.VOTE_PATTERN.search(query):
            return PriorityIntent.VOTE_FOCUSED
        if self.STATEMENT_PATTERN.search(query):
            return PriorityIntent.MP_STATEMENT
        if bill_numbers or self.BILL_PATTERN.search(query):
            return PriorityIntent.BILL_FOCUSED
        if self.MP_INFO_PATTERN.search(query):
            return PriorityIntent.MP_INFO
        return PriorityIntent.GENERAL

    def mentioned_types(self, query: str) -> frozenset[SourceType]:
        found: set[SourceType] = set()
        for pattern, types in self.MENTIONED_TYPE_PATTERNS:
            if pattern.search(query):
                found.update(types)
        return frozenset(found)

    def detect_enumeration(self, query: str, bill_numbers: Sequence[str]) -> EnumerationIntent:
        """
        Recognize "complete list" requests.

        Requires an enumeration cue ("list", "all", "each", "who voted",
        "tous", ...). Votes take precedence over committees, which take
        precedence over member rosters.
        """
        if not self.ENUMERATION_CUE_PATTERN.search(query):
            return EnumerationIntent.none()

        if self.VOTE_PATTERN.search(query):
            return EnumerationIntent(
                is_enumeration=True,
                kind=EnumerationKind.VOTE,
                bill_number=bill_numbers[0] if bill_numbers else None,
                vote_type=self.detect_vote_type(query),
                party_slug=self.detect_party(query),
                parliament_number=self._first_int(self.PARLIAMENT_PATTERN, query),
                session_number=self._first_int(self.SESSION_PATTERN, query),
            )
        if self.COMMITTEE_PATTERN.search(query):
            return EnumerationIntent(is_enumeration=True, kind=EnumerationKind.COMMITTEE)
        if self.ROSTER_PATTERN.search(query):
            return EnumerationIntent(
                is_enumeration=True,
                kind=EnumerationKind.POLITICIAN,
                party_slug=self.detect_party(query),
            )
        return EnumerationIntent.none()

    def detect_vote_type(self, query: str) -> VoteType | None:
        for pattern, vote_type in self.VOTE_TYPE_PATTERNS:
            if pattern.search(query):
                return vote_type
        return None

    def detect_party(self, query: str) -> PartySlug | None:
        for pattern, slug in self.PARTY_PATTERNS:
            if pattern.search(query):
                return slug
        return None

    @staticmethod
    def _first_int(pattern: re.Pattern[str], query: str) -> int | None:
        match = pattern.search(query)
        return int(match.group(1)) if match else None
