"""Exhaustive answers for enumeration queries."""

from .builders import (
    build_roster_citation,
    build_vote_enumeration_citation,
    format_politician_list_markdown,
    format_vote_list_markdown,
)
from .handler import EnumerationHandler

__all__ = [
    "EnumerationHandler",
    "build_roster_citation",
    "build_vote_enumeration_citation",
    "format_politician_list_markdown",
    "format_vote_list_markdown",
]
