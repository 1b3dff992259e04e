"""
External collaborators reached over HTTP.

- ParliamentAPIClient: vector search, structured store and hydration
- CohereReranker: cross-encoder reranking
"""

from .base_client import BaseAPIClient
from .cohere_reranker import CohereReranker
from .parliament_api import ParliamentAPIClient

__all__ = ["BaseAPIClient", "CohereReranker", "ParliamentAPIClient"]
