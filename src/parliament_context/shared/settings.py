"""
Pipeline configuration.

All tunables of the retrieval pipeline live in one frozen value that is
passed to ``ParliamentContextPipeline`` explicitly. Nothing in the pipeline
reads the process environment; ``PipelineConfig.from_env`` is called once by
the entry points.
"""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass

from .exceptions import ConfigurationError, ErrorContext

_TRUTHY = frozenset({"true", "1"})


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    """Tunables for retrieval, ranking and caching."""

    default_limit: int = 10
    max_limit: int = 100

    # Result cache
    cache_ttl_seconds: int = 3600
    cache_disabled: bool = False
    cache_max_entries: int = 1024
    cache_key_version: int = 2

    # Candidate budgets
    vector_search_candidates: int = 50
    min_candidates_per_query: int = 20
    rerank_pool_max: int = 150

    # Ranking
    min_rerank_score: float = 0.1
    source_diversity_min: int = 2

    max_reformulations: int = 2

    def __post_init__(self) -> None:
        if self.max_limit < 1:
            raise ConfigurationError("max_limit must be >= 1")
        if not 1 <= self.default_limit <= self.max_limit:
            raise ConfigurationError(
                f"default_limit must be within [1, {self.max_limit}]",
                context=ErrorContext(input_value=self.default_limit),
            )
        if self.cache_ttl_seconds <= 0:
            raise ConfigurationError("cache_ttl_seconds must be positive")

    @property
    def candidates_per_query(self) -> int:
        """Per sub-query candidate budget."""
        return max(math.ceil(self.vector_search_candidates / 2), self.min_candidates_per_query)

    def bound_limit(self, limit: int | None) -> int:
        """Clamp ``limit`` into ``[1, max_limit]``; ``None`` means the default."""
        if limit is None:
            return self.default_limit
        return min(max(1, limit), self.max_limit)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> PipelineConfig:
        """
        Build a config from environment variables.

        Recognised variables:
            RAG_CACHE_DISABLE: "true" or "1" disables the result cache
            PARLIAMENT_DEFAULT_LIMIT, PARLIAMENT_MAX_LIMIT
            PARLIAMENT_CACHE_TTL: seconds
            PARLIAMENT_VECTOR_CANDIDATES: global candidate budget
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            default_limit=_int_from(env, "PARLIAMENT_DEFAULT_LIMIT", defaults.default_limit),
            max_limit=_int_from(env, "PARLIAMENT_MAX_LIMIT", defaults.max_limit),
            cache_ttl_seconds=_int_from(env, "PARLIAMENT_CACHE_TTL", defaults.cache_ttl_seconds),
            cache_disabled=env.get("RAG_CACHE_DISABLE", "").strip().lower() in _TRUTHY,
            vector_search_candidates=_int_from(
                env, "PARLIAMENT_VECTOR_CANDIDATES", defaults.vector_search_candidates
            ),
        )


def _int_from(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(
            f"{name} must be an integer",
            context=ErrorContext(operation="PipelineConfig.from_env", input_value=raw),
        ) from None
