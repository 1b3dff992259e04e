"""Search hits and their pre-rendered bilingual citations."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .metadata import ResultMetadata
from .source_types import SourceType


@dataclass(frozen=True, slots=True)
class BilingualCitation:
    """Citation text for one source, populated in both official languages."""

    source_type: SourceType
    title_en: str
    title_fr: str
    text_en: str
    text_fr: str
    url_en: str | None = None
    url_fr: str | None = None


@dataclass(frozen=True, slots=True)
class SearchResult:
    """
    One candidate returned by the vector index.

    ``similarity`` starts as the index score and is replaced by the
    reranker score once the candidate has been reranked.
    """

    content: str
    metadata: ResultMetadata
    similarity: float
    citation: BilingualCitation

    @property
    def source_type(self) -> SourceType:
        return self.metadata.source_type

    @property
    def dedup_key(self) -> str:
        """Stable identity of the indexed chunk."""
        chunk = self.metadata.chunk_index if self.metadata.chunk_index is not None else -1
        return f"{self.source_type.value}:{self.metadata.source_id}:{chunk}"

    def with_similarity(self, similarity: float) -> SearchResult:
        return replace(self, similarity=similarity)

