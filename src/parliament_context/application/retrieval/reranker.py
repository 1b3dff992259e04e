"""
LexicalReranker - local cross-query reranking without an external model.

Blends the vector similarity of each candidate with an Okapi BM25 score of
the candidate text against the *original* query, computed over a
micro-corpus built from the candidate pool itself:

    score(d) = (1 - w) * similarity(d) + w * BM25(d, q) / max BM25

Citation titles receive a boosted IDF weight, the same way article titles
do in literature ranking. Ties are broken by the original similarity.

References:
    Robertson & Zaragoza (2009). "The Probabilistic Relevance Framework: BM25 and Beyond"
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from parliament_context.domain.entities import SearchResult

logger = logging.getLogger(__name__)

_BM25_K1 = 1.5  # Term frequency saturation parameter
_BM25_B = 0.75  # Document length normalization parameter
_BM25_TITLE_BOOST = 2.0
_MIN_TERM_LENGTH = 3
_TERM_PATTERN = re.compile(r"\b\w+\b")


def _terms(text: str) -> list[str]:
    return [t for t in _TERM_PATTERN.findall(text.lower()) if len(t) >= _MIN_TERM_LENGTH]


def _title_terms(result: SearchResult) -> list[str]:
    return _terms(f"{result.citation.title_en} {result.citation.title_fr}")


@dataclass
class BM25Corpus:
    """Corpus statistics built from the current candidate pool."""

    total_docs: int = 0
    avg_doc_length: float = 0.0
    doc_freq: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_results(cls, results: Sequence[SearchResult]) -> BM25Corpus:
        corpus = cls(total_docs=len(results))
        total_length = 0
        for result in results:
            terms = _terms(result.content) + _title_terms(result)
            total_length += len(terms)
            for term in set(terms):
                corpus.doc_freq[term] = corpus.doc_freq.get(term, 0) + 1
        corpus.avg_doc_length = total_length / max(corpus.total_docs, 1)
        return corpus

    def score(self, result: SearchResult, query_terms: list[str]) -> float:
        if not query_terms or self.total_docs == 0:
            return 0.0
        title = _title_terms(result)
        all_terms = _terms(result.content) + title
        tf_map: dict[str, int] = {}
        for term in all_terms:
            tf_map[term] = tf_map.get(term, 0) + 1
        title_set = set(title)
        doc_length = len(all_terms)

        score = 0.0
        for qt in query_terms:
            df = self.doc_freq.get(qt, 0)
            idf = math.log(1.0 + (self.total_docs - df + 0.5) / (df + 0.5))
            tf = tf_map.get(qt, 0)
            tf_norm = (tf * (_BM25_K1 + 1)) / (
                tf + _BM25_K1 * (1 - _BM25_B + _BM25_B * doc_length / max(self.avg_doc_length, 1))
            )
            boost = _BM25_TITLE_BOOST if qt in title_set else 1.0
            score += idf * tf_norm * boost
        return score


class LexicalReranker:
    """Default ``Reranker``; deterministic and free of I/O."""

    def __init__(self, lexical_weight: float = 0.5):
        if not 0.0 <= lexical_weight <= 1.0:
            raise ValueError("lexical_weight must be within [0, 1]")
        self._weight = lexical_weight

    async def rerank(
        self,
        query: str,
        candidates: Sequence[SearchResult],
        top_n: int,
    ) -> list[SearchResult]:
        if not candidates or top_n <= 0:
            return []

        corpus = BM25Corpus.from_results(candidates)
        query_terms = _terms(query)
        raw = [corpus.score(c, query_terms) for c in candidates]
        max_raw = max(raw)

        scored: list[tuple[float, float, SearchResult]] = []
        for candidate, bm25 in zip(candidates, raw, strict=True):
            lexical = bm25 / max_raw if max_raw > 0 else 0.0
            blended = (1 - self._weight) * candidate.similarity + self._weight * lexical
            scored.append((blended, candidate.similarity, candidate))

        scored.sort(key=lambda s: (s[0], s[1]), reverse=True)
        top = scored[: min(top_n, len(scored))]
        logger.debug(
            "lexical rerank: %d -> %d, top score %.3f",
            len(candidates),
            len(top),
            top[0][0] if top else 0.0,
        )
        return [c.with_similarity(round(score, 6)) for score, _, c in top]
