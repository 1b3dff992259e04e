"""Bilingual citation builders."""

from .builders import (
    CitationOverrides,
    build_bill_citation,
    build_citation,
    build_vote_question_citation,
    format_ordinal,
)

__all__ = [
    "CitationOverrides",
    "build_bill_citation",
    "build_citation",
    "build_vote_question_citation",
    "format_ordinal",
]
