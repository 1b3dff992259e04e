"""Query analysis value objects."""

from __future__ import annotations

from dataclasses import dataclass, field

from .source_types import EnumerationKind, Language, PartySlug, PriorityIntent, SourceType, VoteType


@dataclass(frozen=True, slots=True)
class QueryEntities:
    """Structured entities pulled out of the raw query."""

    bill_numbers: tuple[str, ...] = ()

    @property
    def primary_bill(self) -> str | None:
        return self.bill_numbers[0] if self.bill_numbers else None


@dataclass(frozen=True, slots=True)
class EnumerationIntent:
    """
    Classification of "give me the complete set" queries.

    Only ``kind`` and the fields relevant to it are meaningful when
    ``is_enumeration`` is true.
    """

    is_enumeration: bool = False
    kind: EnumerationKind | None = None
    bill_number: str | None = None
    vote_type: VoteType | None = None
    party_slug: PartySlug | None = None
    parliament_number: int | None = None
    session_number: int | None = None

    @property
    def session_id(self) -> str | None:
        """``"44-1"`` style session, only when both numbers were given."""
        if self.parliament_number is None or self.session_number is None:
            return None
        return f"{self.parliament_number}-{self.session_number}"

    @classmethod
    def none(cls) -> EnumerationIntent:
        return cls()


@dataclass(frozen=True, slots=True)
class QueryAnalysis:
    """Result of analysing one request's query."""

    original_query: str
    language: Language
    language_confidence: float
    priority_intent: PriorityIntent
    search_types: frozenset[SourceType] = field(default_factory=frozenset)
    reformulated_queries: tuple[str, ...] = ()
    entities: QueryEntities = field(default_factory=QueryEntities)
    enumeration: EnumerationIntent = field(default_factory=EnumerationIntent.none)

    @property
    def is_enumeration(self) -> bool:
        return self.enumeration.is_enumeration
