"""
ContextAssembler - deterministic prompt and citation formatting.

Each result becomes one numbered line::

    - [P1] (bill) Bill C-35 — 2024-03-28 — An Act respecting early learning…

followed by a ``Sources:`` block listing every citation in the output
language. Ids run 1..N in output order; a result whose snippet duplicates an
earlier one is dropped without consuming an id. Both languages are kept on
every ``Citation`` regardless of the output language.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from parliament_context.domain.entities import (
    Citation,
    HydratedSource,
    Language,
    ParliamentContextResult,
    SearchResult,
)

SNIPPET_MAX_CHARS = 480
SENTENCE_CUT_MIN = 200
ELLIPSIS = "…"
SEPARATOR = " — "

_WHITESPACE = re.compile(r"\s+")
_SENTENCE_ENDS = (". ", "? ", "! ")


def make_snippet(content: str) -> tuple[str, bool]:
    """Collapse whitespace and cut; returns ``(snippet, truncated)``."""
    raw = _WHITESPACE.sub(" ", content)
    cut = raw[:SNIPPET_MAX_CHARS]
    last_end = max(cut.rfind(end) for end in _SENTENCE_ENDS)
    if last_end > SENTENCE_CUT_MIN:
        cut = cut[: last_end + 1]
    return cut, len(raw) > len(cut)


def _result_title(result: SearchResult, language: Language) -> str | None:
    c = result.citation
    if language is Language.FR:
        title = c.title_fr or c.title_en
    else:
        title = c.title_en or c.title_fr
    if title:
        return title
    meta = result.metadata
    if meta.title:
        return meta.title
    name_attr = "name_fr" if language is Language.FR else "name_en"
    return getattr(meta, name_attr, None)


def _source_line(citation: Citation, language: Language) -> str:
    line = f"  [{citation.prefixed_id}] {citation.text(language)}"
    title = citation.title(language)
    if title:
        line += f"{SEPARATOR}{title}"
    url = citation.url(language)
    if url:
        line += f" ({url})"
    return line


class ContextAssembler:
    """Stateless; safe to share between requests."""

    def assemble(
        self,
        results: Sequence[SearchResult],
        hydrated_sources: Sequence[HydratedSource],
        language: Language,
    ) -> ParliamentContextResult:
        citations: list[Citation] = []
        lines: list[str] = []
        seen_snippets: set[str] = set()

        for result in results:
            snippet, truncated = make_snippet(result.content)
            normalized = snippet.lower()
            if normalized in seen_snippets:
                continue
            seen_snippets.add(normalized)

            citation = Citation.numbered(len(citations) + 1, result.citation)
            citations.append(citation)

            label = SEPARATOR.join(
                part for part in (_result_title(result, language), result.metadata.date) if part
            )
            prefix = f"{label}{SEPARATOR}" if label else ""
            lines.append(
                f"- [{citation.prefixed_id}] ({result.source_type.value}) "
                f"{prefix}{snippet}{ELLIPSIS if truncated else ''}"
            )

        return ParliamentContextResult(
            language=language,
            prompt=self.format_prompt(lines, citations, language),
            citations=tuple(citations),
            hydrated_sources=tuple(hydrated_sources),
        )

    @staticmethod
    def format_prompt(lines: list[str], citations: list[Citation], language: Language) -> str:
        preface = "Contexte pertinent (FR):" if language is Language.FR else "Relevant context (EN):"
        parts = [
            preface,
            "\n".join(lines),
            "Sources:",
            *(_source_line(c, language) for c in citations),
        ]
        # Empty parts are dropped.
        return "\n".join(p for p in parts if p)
