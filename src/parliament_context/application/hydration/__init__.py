"""Hydration of top-ranked results into full canonical documents."""

from .hydrator import (
    FALLBACK_NOTES,
    HydrationTarget,
    Hydrator,
    bill_target,
    hydration_target,
    parse_session_id,
    select_targets,
)

__all__ = [
    "Hydrator",
    "HydrationTarget",
    "FALLBACK_NOTES",
    "bill_target",
    "hydration_target",
    "parse_session_id",
    "select_targets",
]
