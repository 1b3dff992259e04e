"""
Cohere Rerank Integration

Cross-encoder reranking through Cohere's v2 ``/rerank`` endpoint with the
multilingual model, so English and French passages are scored against the
query on the same scale.

API Documentation: https://docs.cohere.com/reference/rerank

When the API call fails the candidates come back in similarity order, so
the pipeline always receives a usable ranking.

Successful rankings are cached in a ``CacheStore`` under
``rerank:<top_n>:`` + sha1 of the query and candidate identities, so a
repeated query over the same pool is not sent to Cohere again.
"""

from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Sequence
from typing import Any

from parliament_context.domain.entities import SearchResult
from parliament_context.domain.ports import CacheStore
from parliament_context.shared.exceptions import ParliamentContextError, ParseError

from .base_client import BaseAPIClient

logger = logging.getLogger(__name__)

COHERE_API_BASE = "https://api.cohere.com/v2"
RERANK_MODEL = "rerank-multilingual-v3.0"
MAX_TOKENS_PER_DOC = 1000
RERANK_CACHE_TTL = 3600


def build_rerank_cache_key(query: str, candidates: Sequence[SearchResult], top_n: int) -> str:
    identities = ",".join(c.dedup_key for c in candidates)
    digest = hashlib.sha1(f"{query}|{identities}".encode()).hexdigest()
    return f"rerank:{top_n}:{digest}"


def _apply_ranking(
    candidates: Sequence[SearchResult],
    payload: Any,
) -> list[SearchResult]:
    try:
        rows = payload["results"]
        ranked = [
            candidates[int(row["index"])].with_similarity(float(row["relevance_score"]))
            for row in rows
        ]
    except (KeyError, TypeError, ValueError, IndexError) as e:
        raise ParseError(str(e), source="cohere-rerank") from e
    return ranked


class CohereReranker(BaseAPIClient):
    """
    ``Reranker`` backed by Cohere.

    Usage:
        reranker = CohereReranker(api_key="...")
        ranked = await reranker.rerank("Bill C-35 child care", candidates, top_n=30)
    """

    _service_name = "Cohere"

    def __init__(
        self,
        api_key: str,
        model: str = RERANK_MODEL,
        base_url: str = COHERE_API_BASE,
        timeout: float = 20.0,
        cache: CacheStore | None = None,
        cache_ttl_seconds: int = RERANK_CACHE_TTL,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            base_url=base_url,
            timeout=timeout,
            headers={"Authorization": f"Bearer {api_key}", "Accept": "application/json"},
            **kwargs,
        )
        self._model = model
        self._cache = cache
        self._cache_ttl = cache_ttl_seconds

    async def rerank(
        self,
        query: str,
        candidates: Sequence[SearchResult],
        top_n: int,
    ) -> list[SearchResult]:
        if not candidates:
            return []
        effective_top_n = min(top_n, len(candidates))
        cache_key = build_rerank_cache_key(query, candidates, effective_top_n)
        cached = await self._cached_rows(cache_key)
        if cached is not None:
            try:
                return _apply_ranking(candidates, {"results": cached})
            except ParseError as e:
                logger.warning("Ignoring corrupt rerank cache entry %s: %s", cache_key, e)

        try:
            payload = await self._make_request(
                "/rerank",
                method="POST",
                data={
                    "model": self._model,
                    "query": query,
                    "documents": [c.content for c in candidates],
                    "top_n": effective_top_n,
                    "max_tokens_per_doc": MAX_TOKENS_PER_DOC,
                },
            )
            if payload is None:
                raise ParseError("empty response", source="cohere-rerank")
            ranked = _apply_ranking(candidates, payload)
            await self._store_rows(cache_key, payload["results"])
        except ParliamentContextError as e:
            logger.warning("Cohere rerank failed, using similarity order: %s", e)
            return sorted(candidates, key=lambda c: c.similarity, reverse=True)[:effective_top_n]

        logger.debug(
            "cohere rerank: %d -> %d, top score %.3f",
            len(candidates),
            len(ranked),
            ranked[0].similarity if ranked else 0.0,
        )
        return ranked

    async def _cached_rows(self, key: str) -> Any:
        if self._cache is None:
            return None
        try:
            raw = await self._cache.get(key)
            return json.loads(raw) if raw is not None else None
        except Exception as e:
            logger.warning("Rerank cache read failed for %s: %s", key, e)
            return None

    async def _store_rows(self, key: str, rows: Any) -> None:
        if self._cache is None:
            return
        try:
            await self._cache.set(key, json.dumps(rows), self._cache_ttl)
        except Exception as e:
            logger.warning("Rerank cache write failed for %s: %s", key, e)
