"""
Shared building blocks for the Parliament context pipeline.

Provides:
- Unified exception hierarchy
- Structured-concurrency helpers
- Pipeline configuration
"""

from .async_utils import (
    # Fault tolerance
    CircuitBreaker,
    # Parallel execution
    gather_with_errors,
)
from .exceptions import (
    # API errors
    APIError,
    # Configuration errors
    ConfigurationError,
    # Data errors
    DataError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    InvalidParameterError,
    InvalidQueryError,
    NetworkError,
    # Base
    ParliamentContextError,
    ParseError,
    RateLimitError,
    ServiceUnavailableError,
    # Validation errors
    ValidationError,
)
from .settings import PipelineConfig

__all__ = [
    "APIError",
    "CircuitBreaker",
    "ConfigurationError",
    "DataError",
    "ErrorCategory",
    "ErrorContext",
    "ErrorSeverity",
    "InvalidParameterError",
    "InvalidQueryError",
    "NetworkError",
    "ParliamentContextError",
    "ParseError",
    "PipelineConfig",
    "RateLimitError",
    "ServiceUnavailableError",
    "ValidationError",
    "gather_with_errors",
]
