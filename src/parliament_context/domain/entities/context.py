"""
Externally observable output of the pipeline.

``ParliamentContextResult`` is the only value returned to callers and the
only value stored in the result cache, so it round-trips through JSON.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from parliament_context.shared.exceptions import ParseError

from .search import BilingualCitation
from .source_types import Language, SourceType

CITATION_PREFIX = "P"


@dataclass(frozen=True, slots=True)
class Citation:
    """A numbered bilingual reference, ids contiguous from 1 per response."""

    id: int
    prefixed_id: str
    source_type: SourceType
    title_en: str
    title_fr: str
    text_en: str
    text_fr: str
    url_en: str | None = None
    url_fr: str | None = None

    @classmethod
    def numbered(cls, number: int, citation: BilingualCitation) -> Citation:
        return cls(
            id=number,
            prefixed_id=f"{CITATION_PREFIX}{number}",
            source_type=citation.source_type,
            title_en=citation.title_en,
            title_fr=citation.title_fr,
            text_en=citation.text_en,
            text_fr=citation.text_fr,
            url_en=citation.url_en,
            url_fr=citation.url_fr,
        )

    def title(self, language: Language) -> str:
        return self.title_fr if language is Language.FR else self.title_en

    def text(self, language: Language) -> str:
        return self.text_fr if language is Language.FR else self.text_en

    def url(self, language: Language) -> str | None:
        return self.url_fr if language is Language.FR else self.url_en

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "prefixed_id": self.prefixed_id,
            "type": self.source_type.value,
            "title_en": self.title_en,
            "title_fr": self.title_fr,
            "text_en": self.text_en,
            "text_fr": self.text_fr,
            "url_en": self.url_en,
            "url_fr": self.url_fr,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Citation:
        return cls(
            id=int(data["id"]),
            prefixed_id=str(data["prefixed_id"]),
            source_type=SourceType(data["type"]),
            title_en=str(data["title_en"]),
            title_fr=str(data["title_fr"]),
            text_en=str(data["text_en"]),
            text_fr=str(data["text_fr"]),
            url_en=data.get("url_en"),
            url_fr=data.get("url_fr"),
        )


@dataclass(frozen=True, slots=True)
class HydratedDocument:
    """Rendered canonical document as returned by the structured store."""

    markdown: str
    language_used: Language
    note: str | None = None


@dataclass(frozen=True, slots=True)
class HydratedSource:
    """Full canonical document behind the top hit of one source type."""

    source_type: SourceType
    id: str
    markdown: str
    language_used: Language
    note: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "source_type": self.source_type.value,
            "id": self.id,
            "markdown": self.markdown,
            "language_used": self.language_used.value,
        }
        if self.note is not None:
            data["note"] = self.note
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HydratedSource:
        return cls(
            source_type=SourceType(data["source_type"]),
            id=str(data["id"]),
            markdown=str(data["markdown"]),
            language_used=Language(data["language_used"]),
            note=data.get("note"),
        )


@dataclass(frozen=True, slots=True)
class ParliamentContextResult:
    """Assembled prompt, ordered citations and hydrated documents."""

    language: Language
    prompt: str
    citations: tuple[Citation, ...] = field(default_factory=tuple)
    hydrated_sources: tuple[HydratedSource, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "language": self.language.value,
            "prompt": self.prompt,
            "citations": [c.to_dict() for c in self.citations],
            "hydrated_sources": [h.to_dict() for h in self.hydrated_sources],
        }

    def to_json(self) -> str:
        # Key order is fixed by to_dict; identical results serialize identically.
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ParliamentContextResult:
        try:
            return cls(
                language=Language(data["language"]),
                prompt=str(data["prompt"]),
                citations=tuple(Citation.from_dict(c) for c in data.get("citations", [])),
                hydrated_sources=tuple(
                    HydratedSource.from_dict(h) for h in data.get("hydrated_sources", [])
                ),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ParseError(str(e), source="ParliamentContextResult") from e

    @classmethod
    def from_json(cls, payload: str) -> ParliamentContextResult:
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as e:
            raise ParseError(str(e), source="ParliamentContextResult") from e
        if not isinstance(data, dict):
            raise ParseError("expected a JSON object", source="ParliamentContextResult")
        return cls.from_dict(data)
